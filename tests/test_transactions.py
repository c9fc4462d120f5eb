# tests/test_transactions.py


def _sale(client, product, qty, **extra):
    body = {
        "productId": product["id"],
        "productName": product["name"],
        "type": "sale",
        "quantityChanged": qty,
        **extra,
    }
    return client.post("/transactions", json=body)


def test_record_transaction_assigns_id_and_date(client, coffee):
    r = _sale(client, coffee, 3, amount=7.5)
    assert r.status_code == 200
    txn = r.json()
    assert isinstance(txn["id"], int)
    assert txn["date"].endswith("Z")
    assert txn["amount"] == 7.5
    assert client.get("/transactions").json() == [txn]


def test_client_supplied_date_is_overridden(client, coffee):
    txn = _sale(client, coffee, 1, amount=2.5, date="1999-01-01T00:00:00.000Z").json()
    assert txn["date"] != "1999-01-01T00:00:00.000Z"


def test_sale_amount_derived_from_price_when_omitted(client, coffee):
    txn = _sale(client, coffee, 3).json()
    assert txn["amount"] == 2.50 * 3


def test_restock_amount_is_zero(client, coffee):
    r = client.post("/transactions", json={
        "productId": coffee["id"], "productName": "Coffee", "type": "restock", "quantityChanged": 5
    })
    assert r.json()["amount"] == 0


def test_transaction_type_is_not_validated(client, coffee):
    r = client.post("/transactions", json={"productId": coffee["id"], "type": "spillage", "quantityChanged": 1})
    assert r.status_code == 200
    assert r.json()["type"] == "spillage"


def test_transaction_does_not_touch_stock(client, coffee):
    _sale(client, coffee, 3, amount=7.5)
    assert client.get(f"/products/{coffee['id']}").json()["quantity"] == 10


def test_two_step_sale_scenario(client):
    coffee = client.post("/products", json={"name": "Coffee", "price": 2.50, "quantity": 10}).json()
    txn = _sale(client, coffee, 3, amount=7.50).json()
    assert txn["amount"] == 7.50
    assert client.get("/dashboard").json() == {"totalProducts": 1, "lowStockItems": 0}

    # second step of the pattern: the client adjusts stock itself
    client.put(f"/products/{coffee['id']}", json={**coffee, "quantity": coffee["quantity"] - 3})
    assert client.get(f"/products/{coffee['id']}").json()["quantity"] == 7


def test_transactions_outlive_their_product(client, coffee):
    _sale(client, coffee, 2, amount=5.0)
    client.delete(f"/products/{coffee['id']}")
    txns = client.get("/transactions").json()
    assert len(txns) == 1
    assert txns[0]["productName"] == "Coffee"


def test_atomic_sale_updates_stock_and_log(client, coffee):
    r = client.post(f"/products/{coffee['id']}/sale", json={"quantity": 4})
    assert r.status_code == 200
    body = r.json()
    assert body["product"]["quantity"] == 6
    txn = body["transaction"]
    assert txn["type"] == "sale"
    assert txn["quantityChanged"] == 4
    assert txn["amount"] == 10.0
    assert txn["productName"] == "Coffee"

    assert client.get(f"/products/{coffee['id']}").json()["quantity"] == 6
    assert client.get("/transactions").json() == [txn]


def test_atomic_sale_refuses_overselling(client, store, coffee):
    snapshot = store.load()
    r = client.post(f"/products/{coffee['id']}/sale", json={"quantity": 11})
    assert r.status_code == 409
    assert r.json() == {"error": "Not enough stock"}
    assert store.load() == snapshot


def test_atomic_sale_requires_positive_quantity(client, coffee):
    r = client.post(f"/products/{coffee['id']}/sale", json={"quantity": 0})
    assert r.status_code == 400


def test_atomic_sale_of_missing_product(client):
    r = client.post("/products/1/sale", json={"quantity": 1})
    assert r.status_code == 404


def test_atomic_restock(client, coffee):
    r = client.post(f"/products/{coffee['id']}/restock", json={"quantity": 5})
    assert r.status_code == 200
    body = r.json()
    assert body["product"]["quantity"] == 15
    assert body["transaction"]["type"] == "restock"
    assert body["transaction"]["amount"] == 0


def test_stock_deltas_reconcile_with_log(client, coffee):
    pid = coffee["id"]
    client.post(f"/products/{pid}/sale", json={"quantity": 3})
    client.post(f"/products/{pid}/restock", json={"quantity": 6})
    client.post(f"/products/{pid}/sale", json={"quantity": 2})

    txns = client.get("/transactions").json()
    sold = sum(t["quantityChanged"] for t in txns if t["type"] == "sale")
    restocked = sum(t["quantityChanged"] for t in txns if t["type"] == "restock")
    current = client.get(f"/products/{pid}").json()["quantity"]
    assert sold - restocked == coffee["quantity"] - current


def test_malformed_json_transaction_is_rejected(client, store, coffee):
    r = client.post("/transactions", content='{"type": "sale",',
                    headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON"}
    assert store.load()["transactions"] == []


def test_malformed_json_sale_is_rejected(client, coffee):
    r = client.post(f"/products/{coffee['id']}/sale", content="quantity=2",
                    headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON"}
    assert client.get(f"/products/{coffee['id']}").json()["quantity"] == 10
