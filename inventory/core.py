import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductIn(BaseModel):
    # Unknown fields are stored as sent.
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None


class TransactionIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    productId: Optional[int] = None
    productName: Optional[str] = None
    type: Optional[str] = None
    quantityChanged: Optional[int] = None
    amount: Optional[float] = None


class StockChangeIn(BaseModel):
    quantity: int = Field(gt=0)


def next_id(records: List[Dict[str, Any]]) -> int:
    """Millisecond timestamp, bumped past the largest id already in use."""
    now_ms = int(time.time() * 1000)
    taken = [r["id"] for r in records if isinstance(r.get("id"), int)]
    if taken:
        return max(now_ms, max(taken) + 1)
    return now_ms


def utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _fields(payload: BaseModel) -> Dict[str, Any]:
    data = payload.model_dump(exclude_unset=True)
    data.pop("id", None)
    return data


def _make_product_dict(product_id: int, p: ProductIn) -> Dict[str, Any]:
    return {"id": product_id, **_fields(p)}


def _make_transaction_dict(txn_id: int, t: TransactionIn) -> Dict[str, Any]:
    txn = {"id": txn_id, **_fields(t)}
    txn.pop("date", None)
    txn["date"] = utc_timestamp()
    return txn


def sale_amount(price: Any, quantity: int) -> float:
    return round(float(price or 0) * quantity, 2)
