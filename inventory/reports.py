"""
Aggregations over (products, transactions).

Nothing here is stored; every view is recomputed from the full lists on each
call. A product with no `quantity` key is untracked: it is never low stock
and reports as in stock.
"""
from typing import Any, Dict, List, Optional

from .config import LOW_STOCK_THRESHOLD

OUT_OF_STOCK = "Out of Stock"
LOW_STOCK = "Low Stock"
IN_STOCK = "In Stock"

RECENT_SALES_LIMIT = 10


def _quantity(product: Dict[str, Any]) -> Optional[int]:
    if "quantity" not in product:
        return None
    return int(product["quantity"] or 0)


def _sales(transactions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [t for t in transactions if t.get("type") == "sale"]


def is_low_stock(product: Dict[str, Any]) -> bool:
    qty = _quantity(product)
    return qty is not None and qty < LOW_STOCK_THRESHOLD


def stock_status(quantity: Optional[int]) -> str:
    if quantity is None:
        return IN_STOCK
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity < LOW_STOCK_THRESHOLD:
        return LOW_STOCK
    return IN_STOCK


def dashboard_summary(products: List[Dict[str, Any]]) -> Dict[str, int]:
    return {
        "totalProducts": len(products),
        "lowStockItems": sum(1 for p in products if is_low_stock(p)),
    }


def low_stock_products(products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [p for p in products if is_low_stock(p)]


def sold_units_by_product(transactions: List[Dict[str, Any]]) -> Dict[Any, int]:
    sold: Dict[Any, int] = {}
    for sale in _sales(transactions):
        pid = sale.get("productId")
        sold[pid] = sold.get(pid, 0) + int(sale.get("quantityChanged") or 0)
    return sold


def sales_report(transactions: List[Dict[str, Any]]) -> Dict[str, Any]:
    sales = _sales(transactions)
    return {
        "totalSales": round(sum(float(s.get("amount") or 0) for s in sales), 2),
        "totalItemsSold": sum(int(s.get("quantityChanged") or 0) for s in sales),
        "totalTransactions": len(sales),
    }


def recent_sales(transactions: List[Dict[str, Any]], limit: int = RECENT_SALES_LIMIT) -> List[Dict[str, Any]]:
    """Last `limit` sales in store order, newest first."""
    sales = _sales(transactions)
    return list(reversed(sales[-limit:])) if limit > 0 else []


def stock_report(products: List[Dict[str, Any]], transactions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    sold = sold_units_by_product(transactions)
    rows = []
    for p in products:
        qty = _quantity(p)
        rows.append({
            "id": p.get("id"),
            "name": p.get("name"),
            "category": p.get("category"),
            "quantity": qty,
            "sold": sold.get(p.get("id"), 0),
            "status": stock_status(qty),
        })
    return rows
