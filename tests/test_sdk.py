# tests/test_sdk.py
from sdk.inventory_client import InventoryClient


def _sdk(client):
    return InventoryClient(base_url="http://testserver", session=client)


def test_sdk_product_lifecycle(client):
    c = _sdk(client)
    created = c.create_product("Latte", 3.2, 6, "Drinks", "Double shot")
    assert c.get_product(created["id"])["name"] == "Latte"

    updated = c.update_product(created["id"], price=3.5)
    assert updated["price"] == 3.5
    assert updated["quantity"] == 6

    assert c.delete_product(created["id"]) == {"message": "Product deleted"}
    assert c.list_products() == []


def test_sdk_two_step_sale(client):
    c = _sdk(client)
    coffee = c.create_product("Coffee", 2.5, 10)
    result = c.sell_two_step(coffee, 3)

    assert result["product"]["quantity"] == 7
    assert result["transaction"]["amount"] == 7.5
    assert c.sales_report() == {"totalSales": 7.5, "totalItemsSold": 3, "totalTransactions": 1}


def test_sdk_sell_restock_and_reports(client):
    c = _sdk(client)
    muffin = c.create_product("Muffin", 3.0, 4, "Bakery")
    assert c.dashboard() == {"totalProducts": 1, "lowStockItems": 1}

    c.restock(muffin["id"], 6)
    c.sell(muffin["id"], 2)

    assert c.dashboard()["lowStockItems"] == 0
    assert [t["type"] for t in c.list_transactions()] == ["restock", "sale"]
    assert c.recent_sales()[0]["quantityChanged"] == 2
    assert c.stock_report()[0]["status"] == "In Stock"
    assert c.low_stock() == []

    assert c.reset() == {"status": "reset"}
    assert c.list_products() == []
