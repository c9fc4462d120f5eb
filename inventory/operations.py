import asyncio
from typing import Any, Dict, List, Tuple

from . import reports
from .core import (
    ProductIn, TransactionIn, _make_product_dict, _make_transaction_dict,
    next_id, sale_amount, utc_timestamp
)
from .database import Dataset, Store, empty_dataset, write_lock
from .errors import InsufficientStock, InvalidPayload, ProductNotFound
from .logger import get_logger

# This file contains the domain logic behind every API endpoint.
# Each mutation loads the whole dataset, changes it and saves it back while
# holding the store write lock. Store I/O runs in a worker thread so the
# event loop keeps serving other requests meanwhile.

log = get_logger("operations")


async def _load(store: Store) -> Dataset:
    return await asyncio.to_thread(store.load)


async def _save(store: Store, data: Dataset) -> None:
    await asyncio.to_thread(store.save, data)


def _find_product(data: Dataset, product_id: int) -> Tuple[int, Dict[str, Any]]:
    for idx, p in enumerate(data["products"]):
        if p.get("id") == product_id:
            return idx, p
    log.warning("Product %s not found", product_id)
    raise ProductNotFound(product_id)


def _append_transaction(data: Dataset, fields: Dict[str, Any]) -> Dict[str, Any]:
    txn = {"id": next_id(data["transactions"]), **fields, "date": utc_timestamp()}
    data["transactions"].append(txn)
    return txn


# Products
async def list_products_logic(store: Store) -> List[Dict[str, Any]]:
    return (await _load(store))["products"]


async def get_product_logic(store: Store, product_id: int) -> Dict[str, Any]:
    _, p = _find_product(await _load(store), product_id)
    return p


async def create_product_logic(store: Store, payload: ProductIn) -> Dict[str, Any]:
    lock = write_lock()
    await lock.acquire()
    try:
        data = await _load(store)
        product = _make_product_dict(next_id(data["products"]), payload)
        data["products"].append(product)
        await _save(store, data)
    finally:
        lock.release()
    log.info("Created product %s (%s)", product["id"], product.get("name"))
    return product


async def update_product_logic(store: Store, product_id: int, payload: ProductIn) -> Dict[str, Any]:
    lock = write_lock()
    await lock.acquire()
    try:
        data = await _load(store)
        idx, current = _find_product(data, product_id)
        updated = {**current, **_make_product_dict(product_id, payload)}
        data["products"][idx] = updated
        await _save(store, data)
    finally:
        lock.release()
    log.info("Updated product %s", product_id)
    return updated


async def delete_product_logic(store: Store, product_id: int) -> Dict[str, str]:
    lock = write_lock()
    await lock.acquire()
    try:
        data = await _load(store)
        idx, _ = _find_product(data, product_id)
        del data["products"][idx]
        await _save(store, data)
    finally:
        lock.release()
    log.info("Deleted product %s", product_id)
    return {"message": "Product deleted"}


# Transactions
async def list_transactions_logic(store: Store) -> List[Dict[str, Any]]:
    return (await _load(store))["transactions"]


async def record_transaction_logic(store: Store, payload: TransactionIn) -> Dict[str, Any]:
    """
    Append a transaction as sent by the client.

    The referenced product's quantity is not touched; callers adjust stock
    with a separate product update. When `amount` is omitted it is derived:
    price x quantity for a sale of a known product, 0 otherwise.
    """
    lock = write_lock()
    await lock.acquire()
    try:
        data = await _load(store)
        txn = _make_transaction_dict(next_id(data["transactions"]), payload)
        if txn.get("amount") is None:
            txn["amount"] = _derived_amount(data, txn)
        data["transactions"].append(txn)
        await _save(store, data)
    finally:
        lock.release()
    log.info("Recorded %s transaction %s for product %s",
             txn.get("type"), txn["id"], txn.get("productId"))
    return txn


def _derived_amount(data: Dataset, txn: Dict[str, Any]) -> float:
    if txn.get("type") != "sale":
        return 0
    for p in data["products"]:
        if p.get("id") == txn.get("productId"):
            return sale_amount(p.get("price"), int(txn.get("quantityChanged") or 0))
    return 0


async def record_sale_logic(store: Store, product_id: int, quantity: int) -> Dict[str, Any]:
    """Decrement stock and log the sale in a single write."""
    if quantity <= 0:
        raise InvalidPayload("quantity must be > 0")
    lock = write_lock()
    await lock.acquire()
    try:
        data = await _load(store)
        _, product = _find_product(data, product_id)
        available = int(product.get("quantity") or 0)
        if available < quantity:
            log.warning("Refused sale of %s x %s: only %s in stock", quantity, product_id, available)
            raise InsufficientStock(product_id, quantity, available)
        product["quantity"] = available - quantity
        txn = _append_transaction(data, {
            "productId": product_id,
            "productName": product.get("name"),
            "type": "sale",
            "quantityChanged": quantity,
            "amount": sale_amount(product.get("price"), quantity),
        })
        await _save(store, data)
    finally:
        lock.release()
    log.info("Sold %s x %s for %.2f", quantity, product_id, txn["amount"])
    return {"product": product, "transaction": txn}


async def record_restock_logic(store: Store, product_id: int, quantity: int) -> Dict[str, Any]:
    """Increment stock and log the restock in a single write."""
    if quantity <= 0:
        raise InvalidPayload("quantity must be > 0")
    lock = write_lock()
    await lock.acquire()
    try:
        data = await _load(store)
        _, product = _find_product(data, product_id)
        product["quantity"] = int(product.get("quantity") or 0) + quantity
        txn = _append_transaction(data, {
            "productId": product_id,
            "productName": product.get("name"),
            "type": "restock",
            "quantityChanged": quantity,
            "amount": 0,
        })
        await _save(store, data)
    finally:
        lock.release()
    log.info("Restocked %s x %s", quantity, product_id)
    return {"product": product, "transaction": txn}


# Reports
async def dashboard_logic(store: Store) -> Dict[str, int]:
    return reports.dashboard_summary((await _load(store))["products"])


async def sales_report_logic(store: Store) -> Dict[str, Any]:
    return reports.sales_report((await _load(store))["transactions"])


async def stock_report_logic(store: Store) -> List[Dict[str, Any]]:
    data = await _load(store)
    return reports.stock_report(data["products"], data["transactions"])


async def low_stock_logic(store: Store) -> List[Dict[str, Any]]:
    return reports.low_stock_products((await _load(store))["products"])


async def recent_sales_logic(store: Store) -> List[Dict[str, Any]]:
    return reports.recent_sales((await _load(store))["transactions"])


# Utility: reset (for tests/demo)
async def reset_all_logic(store: Store) -> Dict[str, str]:
    lock = write_lock()
    await lock.acquire()
    try:
        await _save(store, empty_dataset())
    finally:
        lock.release()
    log.info("Dataset reset")
    return {"status": "reset"}
