import pytest
from fastapi.testclient import TestClient

from inventory import database
from inventory.database import MemoryStore, get_store
from inventory.main import app


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    database._LOCKS.clear()
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def coffee(client):
    r = client.post("/products", json={
        "name": "Coffee", "description": "Filter coffee", "category": "Drinks",
        "price": 2.50, "quantity": 10
    })
    return r.json()
