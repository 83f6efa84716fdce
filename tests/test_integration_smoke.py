import os

from conftest import register
from rental_api.services.booking_service import BookingService


def test_home(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.data == b"Server is running"


def test_unknown_route_is_json(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.get_json()["success"] is False


def test_store_file_written(app, client, app_store):
    client.post("/api/user/register", json={"name": "z", "email": "z@example.com", "password": "Password1"})
    app_store.close()
    assert os.path.exists(app.config["DATA_PATH"])


def test_unexpected_error_hides_details(client, monkeypatch):
    headers = register(client, "ursula")

    def boom(*args, **kwargs):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(BookingService, "bookings_for_user", staticmethod(boom))
    r = client.get("/api/bookings/user", headers=headers)
    assert r.status_code == 500
    assert r.get_json() == {"success": False, "message": "Internal server error"}
