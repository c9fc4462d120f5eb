# inventory/main.py
from typing import Annotated, List

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from . import operations as ops
from .core import ProductIn, StockChangeIn, TransactionIn
from .database import Store, get_store
from .errors import InventoryError
from .logger import get_logger, setup_logger
from .models import DashboardSummary, SalesReport, StockRow

setup_logger(level=config.log_level(), log_file=config.log_file())
log = get_logger("api")

app = FastAPI(title="Wings Cafe Inventory", version=config.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

StoreDependency = Annotated[Store, Depends(get_store)]

# ---------------------------
# Error responses: {"error": <message>}
# ---------------------------
@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # A non-numeric id can never match a product.
    if any(tuple(e.get("loc", ())) == ("path", "product_id") for e in errors):
        return JSONResponse(status_code=404, content={"error": "Product not found"})
    if any(e.get("type") == "json_invalid" for e in errors):
        message = "Invalid JSON"
    else:
        first = errors[0] if errors else {}
        where = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid payload: {where} {first.get('msg', '')}".strip()
    log.warning("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


router = APIRouter()

# ---------------------------
# Product endpoints
# ---------------------------
@router.get("/products")
async def list_products(store: StoreDependency):
    return await ops.list_products_logic(store)


@router.post("/products")
async def create_product(payload: ProductIn, store: StoreDependency):
    return await ops.create_product_logic(store, payload)


@router.get("/products/{product_id}")
async def get_product(product_id: int, store: StoreDependency):
    return await ops.get_product_logic(store, product_id)


@router.put("/products/{product_id}")
async def update_product(product_id: int, payload: ProductIn, store: StoreDependency):
    return await ops.update_product_logic(store, product_id, payload)


@router.delete("/products/{product_id}")
async def delete_product(product_id: int, store: StoreDependency):
    return await ops.delete_product_logic(store, product_id)


# ---------------------------
# Stock movements (single write: quantity + transaction)
# ---------------------------
@router.post("/products/{product_id}/sale")
async def record_sale(product_id: int, payload: StockChangeIn, store: StoreDependency):
    return await ops.record_sale_logic(store, product_id, payload.quantity)


@router.post("/products/{product_id}/restock")
async def record_restock(product_id: int, payload: StockChangeIn, store: StoreDependency):
    return await ops.record_restock_logic(store, product_id, payload.quantity)


# ---------------------------
# Transaction endpoints
# ---------------------------
@router.get("/transactions")
async def list_transactions(store: StoreDependency):
    return await ops.list_transactions_logic(store)


@router.post("/transactions")
async def record_transaction(payload: TransactionIn, store: StoreDependency):
    return await ops.record_transaction_logic(store, payload)


# ---------------------------
# Dashboard and reports
# ---------------------------
@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(store: StoreDependency):
    return await ops.dashboard_logic(store)


@router.get("/reports/sales", response_model=SalesReport)
async def sales_report(store: StoreDependency):
    return await ops.sales_report_logic(store)


@router.get("/reports/stock", response_model=List[StockRow])
async def stock_report(store: StoreDependency):
    return await ops.stock_report_logic(store)


@router.get("/reports/low-stock")
async def low_stock(store: StoreDependency):
    return await ops.low_stock_logic(store)


@router.get("/sales/recent")
async def recent_sales(store: StoreDependency):
    return await ops.recent_sales_logic(store)


# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@router.post("/reset")
async def reset_all(store: StoreDependency):
    return await ops.reset_all_logic(store)


app.include_router(router)
# Same routes under the prefix the browser client uses.
app.include_router(router, prefix="/api", include_in_schema=False)


@app.get("/")
async def root():
    return {"message": "Wings Cafe Inventory API is running", "version": config.APP_VERSION}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


def run():
    import uvicorn
    uvicorn.run("inventory.main:app", host=config.host(), port=config.port())


if __name__ == "__main__":
    run()
