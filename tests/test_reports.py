# tests/test_reports.py
import pytest

from inventory import reports


def _txn(pid, kind, qty, amount=0.0):
    return {"id": qty, "productId": pid, "productName": f"P{pid}", "type": kind,
            "quantityChanged": qty, "amount": amount}


@pytest.mark.parametrize("quantity, expected", [
    (0, "Out of Stock"),
    (3, "Low Stock"),
    (4, "Low Stock"),
    (5, "In Stock"),
    (10, "In Stock"),
])
def test_stock_status(quantity, expected):
    assert reports.stock_status(quantity) == expected


def test_dashboard_low_stock_boundary():
    products = [{"id": 1, "quantity": 4}, {"id": 2, "quantity": 5}, {"id": 3, "quantity": 0}]
    assert reports.dashboard_summary(products) == {"totalProducts": 3, "lowStockItems": 2}


def test_dashboard_empty():
    assert reports.dashboard_summary([]) == {"totalProducts": 0, "lowStockItems": 0}


def test_sold_units_only_counts_sales():
    txns = [_txn(1, "sale", 2), _txn(1, "restock", 9), _txn(1, "sale", 3), _txn(2, "sale", 1)]
    assert reports.sold_units_by_product(txns) == {1: 5, 2: 1}


def test_sales_report_totals():
    txns = [_txn(1, "sale", 2, 5.0), _txn(1, "restock", 10), _txn(2, "sale", 1, 3.25)]
    assert reports.sales_report(txns) == {"totalSales": 8.25, "totalItemsSold": 3, "totalTransactions": 2}


def test_recent_sales_last_ten_newest_first():
    txns = []
    for i in range(1, 13):
        txns.append(_txn(1, "sale", i))
        txns.append(_txn(1, "restock", 100 + i))
    recent = reports.recent_sales(txns)
    assert [t["quantityChanged"] for t in recent] == list(range(12, 2, -1))


def test_stock_report_rows():
    products = [{"id": 1, "name": "Coffee", "category": "Drinks", "quantity": 3}]
    rows = reports.stock_report(products, [_txn(1, "sale", 2)])
    assert rows == [{"id": 1, "name": "Coffee", "category": "Drinks", "quantity": 3, "sold": 2, "status": "Low Stock"}]


def test_dashboard_endpoint(client):
    for qty in (0, 4, 5, 12):
        client.post("/products", json={"name": f"Q{qty}", "price": 1.0, "quantity": qty})
    assert client.get("/dashboard").json() == {"totalProducts": 4, "lowStockItems": 2}
    low = client.get("/reports/low-stock").json()
    assert sorted(p["quantity"] for p in low) == [0, 4]


def test_report_endpoints(client, coffee):
    client.post(f"/products/{coffee['id']}/sale", json={"quantity": 6})
    client.post(f"/products/{coffee['id']}/restock", json={"quantity": 1})

    assert client.get("/reports/sales").json() == {"totalSales": 15.0, "totalItemsSold": 6, "totalTransactions": 1}

    stock = client.get("/reports/stock").json()
    assert stock[0]["quantity"] == 5
    assert stock[0]["sold"] == 6
    assert stock[0]["status"] == "In Stock"

    recent = client.get("/sales/recent").json()
    assert len(recent) == 1
    assert recent[0]["type"] == "sale"


def test_product_without_quantity_is_not_low_stock():
    products = [{"id": 1, "name": "Gift card"}, {"id": 2, "quantity": 2}]
    assert reports.dashboard_summary(products) == {"totalProducts": 2, "lowStockItems": 1}
    assert reports.low_stock_products(products) == [{"id": 2, "quantity": 2}]
    assert reports.stock_report(products, [])[0]["status"] == "In Stock"


def test_untracked_product_in_dashboard_and_stock_report(client):
    pid = client.post("/products", json={"name": "No qty"}).json()["id"]

    assert client.get("/dashboard").json() == {"totalProducts": 1, "lowStockItems": 0}
    assert client.get("/reports/low-stock").json() == []

    row = client.get("/reports/stock").json()[0]
    assert row["id"] == pid
    assert row["quantity"] is None
    assert row["status"] == "In Stock"
