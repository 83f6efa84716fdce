import sys, pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest

from rental_api import create_app
from rental_api.models.store import Store


@pytest.fixture
def store():
    """Clean in-memory store for service-level tests."""
    return Store(None)


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "DATA_PATH": str(tmp_path / "data.pkl"),
        "JWT_SECRET": "test-secret",
        "STRICT_STATUS_TRANSITIONS": False,
        "LOG_LEVEL": "WARNING",
    })
    yield app
    app.extensions["store"].close()


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def app_store(app):
    """The store the running app uses."""
    return app.extensions["store"]


def seed_user(store, name="u", role="user"):
    return store.insert("users", {
        "name": name, "email": f"{name}@example.com", "password": "", "role": role,
    })["_id"]


def seed_vehicle(store, owner="owner-1", variant="car", rate=500.0, **extra):
    collection = {"car": "cars", "bike": "bikes", "helmet": "helmets"}[variant]
    doc = {
        "owner": owner,
        "brand": "Honda",
        "model": "Activa",
        "pricePerDay": rate,
        "category": variant.title(),
        "location": "Pune",
        "isAvailable": True,
    }
    doc.update(extra)
    return store.insert(collection, doc)["_id"]


def register(client, name, password="Secret1234"):
    """Register through the API and return an Authorization header."""
    r = client.post("/api/user/register", json={
        "name": name, "email": f"{name}@example.com", "password": password,
    })
    body = r.get_json()
    assert body["success"], body
    return {"Authorization": f"Bearer {body['token']}"}


def become_owner(client, headers):
    r = client.post("/api/owner/change-role", headers=headers)
    assert r.get_json()["success"]
