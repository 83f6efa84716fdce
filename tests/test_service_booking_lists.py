from conftest import seed_vehicle
from rental_api.services.booking_service import BookingService


def book(store, variant, vid, pickup, user):
    ok, msg, b = BookingService.create_booking(variant, vid, pickup, pickup, "1", user, store=store)
    assert ok, msg
    return b


def test_user_sees_only_own_bookings_newest_first(store):
    vid = seed_vehicle(store)
    first = book(store, "car", vid, "2030-01-01", "alice")
    book(store, "car", vid, "2030-01-05", "bob")
    second = book(store, "car", vid, "2030-01-10", "alice")

    out = BookingService.bookings_for_user("alice", store=store)
    assert [b["_id"] for b in out] == [second["_id"], first["_id"]]
    assert all(b["user"] == "alice" for b in out)
    # vehicle is populated
    assert out[0]["vehicle"]["_id"] == vid
    assert out[0]["vehicle"]["brand"] == "Honda"


def test_owner_sees_bookings_across_variants(store):
    car = seed_vehicle(store, owner="o1", variant="car")
    bike = seed_vehicle(store, owner="o1", variant="bike")
    helmet = seed_vehicle(store, owner="o1", variant="helmet")
    other = seed_vehicle(store, owner="o2", variant="car")

    b1 = book(store, "car", car, "2030-01-01", "u1")
    b2 = book(store, "bike", bike, "2030-01-01", "u2")
    b3 = book(store, "helmet", helmet, "2030-01-01", "u1")
    book(store, "car", other, "2030-01-01", "u1")

    assert BookingService.owned_vehicle_ids("o1", store=store) == {car, bike, helmet}
    out = BookingService.bookings_for_owner("o1", store=store)
    assert [b["_id"] for b in out] == [b3["_id"], b2["_id"], b1["_id"]]
    assert {b["vehicle"]["owner"] for b in out} == {"o1"}


def test_owner_without_vehicles_sees_nothing(store):
    vid = seed_vehicle(store, owner="o1")
    book(store, "car", vid, "2030-01-01", "u1")
    assert BookingService.bookings_for_owner("o3", store=store) == []


def test_booking_of_deleted_vehicle_keeps_its_id(store):
    vid = seed_vehicle(store, owner="o1")
    book(store, "car", vid, "2030-01-01", "u1")
    store.delete("cars", vid)
    out = BookingService.bookings_for_user("u1", store=store)
    assert out[0]["vehicle"] == vid


def test_search_available_by_location(store):
    free = seed_vehicle(store, location="Goa")
    busy = seed_vehicle(store, location="goa")
    seed_vehicle(store, location="Goa", isAvailable=False)
    seed_vehicle(store, location="Pune")
    book(store, "car", busy, "2030-01-02", "u1")

    out = BookingService.search_available("car", "GOA", "2030-01-01", "2030-01-03", store=store)
    assert [v["_id"] for v in out] == [free]
