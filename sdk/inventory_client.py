# sdk/inventory_client.py
from typing import Any, Dict, Optional

import httpx
import requests
from rich import print

from inventory import config


class InventoryClient:
    """
    Thin client for the inventory HTTP API.

    `session` can be any object with a requests-style interface; tests pass
    FastAPI's TestClient here.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: int = 10, session: Any = None):
        self.base_url = (base_url or config.api_url()).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def reset(self):
        r = self.session.post(self._url("/reset"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products
    def list_products(self):
        r = self.session.get(self._url("/products"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: int):
        r = self.session.get(self._url(f"/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, price: float, quantity: int,
                       category: str = "", description: str = ""):
        r = self.session.post(self._url("/products"), json={
            "name": name, "description": description, "category": category,
            "price": price, "quantity": quantity
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: int, **fields: Any):
        r = self.session.put(self._url(f"/products/{product_id}"), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int):
        r = self.session.delete(self._url(f"/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Stock movements
    def sell(self, product_id: int, quantity: int = 1):
        r = self.session.post(self._url(f"/products/{product_id}/sale"), json={"quantity": quantity}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def restock(self, product_id: int, quantity: int):
        r = self.session.post(self._url(f"/products/{product_id}/restock"), json={"quantity": quantity}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def sell_two_step(self, product: Dict[str, Any], quantity: int):
        """
        Sale the way the browser dashboard records it: update the product's
        quantity, then post the transaction. The two calls are independent;
        if the second fails the stock change is not rolled back.
        """
        updated = self.update_product(product["id"], **{**product, "quantity": product["quantity"] - quantity})
        txn = self.record_transaction({
            "productId": product["id"],
            "productName": product.get("name"),
            "type": "sale",
            "quantityChanged": quantity,
            "amount": round(product.get("price", 0) * quantity, 2),
        })
        return {"product": updated, "transaction": txn}

    # Transactions
    def list_transactions(self):
        r = self.session.get(self._url("/transactions"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def record_transaction(self, fields: Dict[str, Any]):
        r = self.session.post(self._url("/transactions"), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Reports
    def dashboard(self):
        r = self.session.get(self._url("/dashboard"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def sales_report(self):
        r = self.session.get(self._url("/reports/sales"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def stock_report(self):
        r = self.session.get(self._url("/reports/stock"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def low_stock(self):
        r = self.session.get(self._url("/reports/low-stock"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def recent_sales(self):
        r = self.session.get(self._url("/sales/recent"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async sale (example)
    async def sell_async(self, product_id: int, quantity: int = 1):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(self._url(f"/products/{product_id}/sale"), json={"quantity": quantity})
            # do not raise: callers inspect 409 for sold-out
            return r


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Wings Cafe inventory client")
    parser.add_argument("--base-url", default=None, help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--quantity", type=int, required=True)
    cp.add_argument("--category", default="")
    cp.add_argument("--description", default="")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    sp = subparsers.add_parser("sell", help="Record a sale")
    sp.add_argument("--product-id", type=int, required=True)
    sp.add_argument("--qty", type=int, default=1)

    rp = subparsers.add_parser("restock", help="Add stock")
    rp.add_argument("--product-id", type=int, required=True)
    rp.add_argument("--qty", type=int, required=True)

    subparsers.add_parser("transactions", help="List all transactions")
    subparsers.add_parser("dashboard", help="Product count and low stock count")
    subparsers.add_parser("sales-report", help="Sales totals")
    subparsers.add_parser("stock-report", help="Stock status per product")

    args = parser.parse_args()
    c = InventoryClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.price, args.quantity, args.category, args.description))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
    elif args.command == "sell":
        print(c.sell(args.product_id, args.qty))
    elif args.command == "restock":
        print(c.restock(args.product_id, args.qty))
    elif args.command == "transactions":
        print(c.list_transactions())
    elif args.command == "dashboard":
        print(c.dashboard())
    elif args.command == "sales-report":
        print(c.sales_report())
    elif args.command == "stock-report":
        print(c.stock_report())
