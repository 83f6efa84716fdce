"""
Owner listing operations at the service layer: creation files the listing under
the right variant, toggling and deletion are limited to the owner.
"""

import pytest

from conftest import seed_vehicle
from rental_api.exceptions import AuthError, NotFoundError, ValidationError
from rental_api.services.vehicle_service import VehicleService


def payload(**overrides):
    data = {
        "brand": "Toyota",
        "model": "Corolla",
        "pricePerDay": "55",
        "category": "Sedan",
        "year": "2021",
        "location": "Pune",
        "image": "https://img.example.com/corolla.webp",
        "owner": "someone-else",
    }
    data.update(overrides)
    return data


def test_create_car_listing(store):
    ok, msg, v = VehicleService.add_vehicle("o1", payload(), store=store)
    assert ok, msg
    assert msg == "Sedan Added"
    doc = store.collection("cars")[v["_id"]]
    assert doc["owner"] == "o1"
    assert doc["pricePerDay"] == 55.0
    assert doc["year"] == 2021
    assert doc["isAvailable"] is True


@pytest.mark.parametrize("category, collection", [
    ("Scooter", "bikes"), ("motorbike", "bikes"), ("Helmet", "helmets"), ("SUV", "cars"),
])
def test_category_picks_variant(store, category, collection):
    _, _, v = VehicleService.add_vehicle("o1", payload(category=category), store=store)
    assert v["_id"] in store.collection(collection)


def test_explicit_variant_wins(store):
    _, _, v = VehicleService.add_vehicle("o1", payload(category="Sports"), vehicle_type="bike", store=store)
    assert v["_id"] in store.collection("bikes")


def test_price_alias_and_helmet_without_model(store):
    data = payload(category="Helmet", price=15)
    del data["pricePerDay"]
    del data["model"]
    ok, _, v = VehicleService.add_vehicle("o1", data, store=store)
    assert ok
    assert v["pricePerDay"] == 15.0


@pytest.mark.parametrize("overrides", [
    {"category": ""},
    {"pricePerDay": "-3"},
    {"pricePerDay": "abc"},
    {"brand": ""},
    {"year": "soon"},
    {"image": "ftp://nope"},
])
def test_invalid_listing_rejected(store, overrides):
    with pytest.raises(ValidationError):
        VehicleService.add_vehicle("o1", payload(**overrides), store=store)


def test_toggle_and_catalogue(store):
    vid = seed_vehicle(store, owner="o1")
    assert [v["_id"] for v in VehicleService.available("car", store=store)] == [vid]

    ok, _ = VehicleService.toggle_availability("o1", "car", vid, store=store)
    assert ok
    assert VehicleService.available("car", store=store) == []
    assert VehicleService.owner_vehicles("o1", "car", store=store)[0]["isAvailable"] is False


def test_only_owner_may_toggle_or_delete(store):
    vid = seed_vehicle(store, owner="o1")
    with pytest.raises(AuthError):
        VehicleService.toggle_availability("o2", "car", vid, store=store)
    with pytest.raises(AuthError):
        VehicleService.delete_vehicle("o2", "car", vid, store=store)
    assert vid in store.collection("cars")


def test_delete_listing(store):
    vid = seed_vehicle(store, owner="o1", variant="bike")
    ok, msg = VehicleService.delete_vehicle("o1", "bike", vid, store=store)
    assert ok
    assert msg == "Bike Removed"
    assert vid not in store.collection("bikes")
    with pytest.raises(NotFoundError):
        VehicleService.delete_vehicle("o1", "bike", vid, store=store)
