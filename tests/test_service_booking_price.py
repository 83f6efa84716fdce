import pytest

from conftest import seed_vehicle
from rental_api.exceptions import AuthError, ValidationError
from rental_api.services.booking_service import BookingService


def book(store, vid, pickup, ret, mobile="9999999999", user="u1"):
    return BookingService.create_booking("car", vid, pickup, ret, mobile, user, store=store)


def test_same_day_costs_one_day(store):
    vid = seed_vehicle(store, rate=350)
    ok, _, b = book(store, vid, "2030-02-10", "2030-02-10")
    assert ok
    assert b["price"] == 350


@pytest.mark.parametrize("ret, days", [("2030-02-11", 1), ("2030-02-14", 4), ("2030-03-12", 30)])
def test_price_is_rate_times_days(store, ret, days):
    vid = seed_vehicle(store, rate=120.5)
    ok, _, b = book(store, vid, "2030-02-10", ret)
    assert ok
    assert b["price"] == pytest.approx(120.5 * days)


def test_new_booking_is_pending_with_request_fields(store):
    vid = seed_vehicle(store)
    ok, msg, b = book(store, vid, "2030-02-10", "2030-02-12", mobile=" 12345 ", user="u7")
    assert ok
    assert msg == "Booking created successfully"
    assert b["status"] == "pending"
    assert b["user"] == "u7"
    assert b["vehicle"] == vid
    assert b["vehicleType"] == "car"
    assert b["mobile"] == "12345"
    assert b["pickupDate"] == "2030-02-10"
    assert b["returnDate"] == "2030-02-12"
    assert b["_id"] in store.bookings
    assert b["createdAt"]


def test_price_is_fixed_at_creation(store):
    vid = seed_vehicle(store, rate=100)
    _, _, b = book(store, vid, "2030-02-10", "2030-02-12")
    store.update("cars", vid, {"pricePerDay": 900})
    assert store.bookings[b["_id"]]["price"] == 200


def test_iso_datetimes_use_their_calendar_day(store):
    vid = seed_vehicle(store, rate=10)
    ok, _, b = book(store, vid, "2030-02-10T09:00:00", "2030-02-13T18:30:00")
    assert ok
    assert (b["pickupDate"], b["returnDate"]) == ("2030-02-10", "2030-02-13")
    assert b["price"] == 30


def test_requires_authenticated_user(store):
    vid = seed_vehicle(store)
    with pytest.raises(AuthError):
        book(store, vid, "2030-02-10", "2030-02-12", user=None)


@pytest.mark.parametrize("pickup, ret, mobile", [
    ("2030-02-10", "2030-02-12", ""),
    ("not-a-date", "2030-02-12", "1"),
    ("2030-02-10", "2030-13-45", "1"),
    ("2030-02-12", "2030-02-10", "1"),
])
def test_invalid_requests_rejected(store, pickup, ret, mobile):
    vid = seed_vehicle(store)
    with pytest.raises(ValidationError):
        book(store, vid, pickup, ret, mobile=mobile)
    assert not store.bookings
