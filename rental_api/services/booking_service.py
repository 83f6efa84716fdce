"""Booking admission, availability checks, status changes and booking listings."""

import logging
from datetime import date
from typing import Optional

from rental_api.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from rental_api.models.booking import Booking
from rental_api.models.store import Store, newest_first
from rental_api.models.vehicle import VARIANTS, VehicleRef, get_variant
from rental_api.services.common import require, resolve_store, setting, _lc
from rental_api.utils.constants import BookingStatus, STATUS_TRANSITIONS
from rental_api.utils.dates import billable_days, to_calendar_date

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Vehicle not available for selected dates"


def _parse_range(pickup_date, return_date) -> tuple[date, date]:
    tz = setting("TIMEZONE", "UTC")
    d1 = to_calendar_date(pickup_date, tz)
    d2 = to_calendar_date(return_date, tz)
    if d2 < d1:
        raise ValidationError("Return date must be on or after pickup date")
    return d1, d2


def _vehicle_doc(store: Store, ref: VehicleRef) -> dict:
    doc = store.get(ref.collection, ref.vehicle_id)
    if doc is None:
        raise NotFoundError("Vehicle not found")
    return doc


def _clashes_with(ref: VehicleRef, d1: date, d2: date):
    """Predicate over stored bookings: active, same vehicle, overlapping [d1, d2]."""

    def clashes(b: dict) -> bool:
        if b.get("vehicle") != ref.vehicle_id or b.get("vehicleType") != ref.variant:
            return False
        try:
            existing = Booking.from_dict(b)
        except (KeyError, TypeError, ValueError):
            # Skip malformed records to avoid false positives
            return False
        return existing.conflicts_with(d1, d2)

    return clashes


def _populate(store: Store, booking: dict) -> dict:
    """Copy of a booking with `vehicle` replaced by the vehicle document, when it still exists."""
    out = dict(booking)
    variant = VARIANTS.get(booking.get("vehicleType"))
    if variant is not None:
        vehicle = store.get(variant.collection, booking.get("vehicle"))
        if vehicle is not None:
            out["vehicle"] = dict(vehicle)
    return out


class BookingService:
    """
    Admission of new bookings for any vehicle variant, plus status changes and
    per-user / per-owner listings. Pass `store=` to run against a specific store.
    """

    @staticmethod
    def check_availability(vehicle_type, vehicle_id, pickup_date, return_date,
                           store: Optional[Store] = None) -> bool:
        """True when no pending/confirmed booking of this vehicle overlaps the range."""
        require(vehicle_type=vehicle_type, vehicle_id=vehicle_id,
                pickup_date=pickup_date, return_date=return_date)
        st = resolve_store(store)
        ref = VehicleRef.of(vehicle_type, vehicle_id)
        d1, d2 = _parse_range(pickup_date, return_date)
        _vehicle_doc(st, ref)
        return not st.find("bookings", where=_clashes_with(ref, d1, d2))

    @staticmethod
    def create_booking(vehicle_type, vehicle_id, pickup_date, return_date, mobile, user,
                       store: Optional[Store] = None):
        """
        Admit a booking if the vehicle is free for the range.

        `user` is the authenticated requester (a User or a user id).
        Returns:
            (ok: bool, message: str, booking: Optional[dict])
        A date conflict is reported through `ok=False`, not raised.
        """
        user_id = getattr(user, "user_id", user)
        if not user_id:
            raise AuthError()
        require(vehicle_type=vehicle_type, vehicle_id=vehicle_id, pickup_date=pickup_date,
                return_date=return_date, mobile=mobile)

        st = resolve_store(store)
        ref = VehicleRef.of(vehicle_type, vehicle_id)
        d1, d2 = _parse_range(pickup_date, return_date)
        vehicle = ref.wrap(_vehicle_doc(st, ref))

        days = billable_days(d1, d2)
        booking = Booking(
            user=str(user_id),
            vehicle_type=ref.variant,
            vehicle=ref.vehicle_id,
            pickup_date=d1,
            return_date=d2,
            mobile=str(mobile).strip(),
            price=round(vehicle.price_for_days(days), 2),
        )

        try:
            doc = st.insert_unless("bookings", booking.to_dict(), _clashes_with(ref, d1, d2))
        except ConflictError:
            logger.info("Booking refused: %s %s already booked within %s..%s",
                        ref.variant, ref.vehicle_id, d1, d2)
            return False, NOT_AVAILABLE, None

        logger.info("Booking %s admitted: %s %s %s..%s price=%s",
                    doc["_id"], ref.variant, ref.vehicle_id, d1, d2, doc["price"])
        return True, "Booking created successfully", dict(doc)

    @staticmethod
    def change_status(booking_id, status, requester_id: Optional[str] = None,
                      store: Optional[Store] = None, strict: Optional[bool] = None):
        """
        Overwrite a booking's status.

        Any state may move to any state unless `strict` (or the
        STRICT_STATUS_TRANSITIONS setting) is on. When `requester_id` is given
        it must be the owner of the booked vehicle.
        """
        require(booking_id=booking_id, status=status)
        new_status = _lc(status)
        if new_status not in BookingStatus.ALL:
            raise ValidationError("Invalid booking status")

        st = resolve_store(store)
        with st.locked():
            booking = st.get("bookings", booking_id)
            if booking is None:
                raise NotFoundError("Booking not found")

            if requester_id is not None:
                variant = VARIANTS.get(booking.get("vehicleType"))
                vehicle = st.get(variant.collection, booking.get("vehicle")) if variant else None
                if vehicle is None or vehicle.get("owner") != str(requester_id):
                    raise AuthError("Unauthorized")

            if strict is None:
                strict = bool(setting("STRICT_STATUS_TRANSITIONS", False))
            current = booking.get("status")
            if strict and new_status != current and new_status not in STATUS_TRANSITIONS.get(current, ()):
                raise ValidationError(f"Cannot change status from {current} to {new_status}")

            st.update("bookings", booking_id, {"status": new_status})

        logger.info("Booking %s status %s -> %s", booking_id, current, new_status)
        return True, "Booking status updated"

    @staticmethod
    def bookings_for_user(user_id, store: Optional[Store] = None) -> list[dict]:
        """This user's bookings with the vehicle attached, newest first."""
        st = resolve_store(store)
        docs = st.find("bookings", user=str(user_id))
        return [_populate(st, b) for b in newest_first(docs)]

    @staticmethod
    def owned_vehicle_ids(owner_id, store: Optional[Store] = None) -> set[str]:
        """Ids of every vehicle the owner lists, across all variants."""
        st = resolve_store(store)
        ids = set()
        for variant in VARIANTS.values():
            ids.update(v["_id"] for v in st.find(variant.collection, owner=str(owner_id)))
        return ids

    @staticmethod
    def bookings_for_owner(owner_id, store: Optional[Store] = None) -> list[dict]:
        """Bookings of any vehicle the owner lists, newest first."""
        st = resolve_store(store)
        owned = BookingService.owned_vehicle_ids(owner_id, store=st)
        docs = st.find("bookings", vehicle=owned)
        return [_populate(st, b) for b in newest_first(docs)]

    @staticmethod
    def search_available(vehicle_type, location, pickup_date, return_date,
                         store: Optional[Store] = None) -> list[dict]:
        """
        Listed (isAvailable) vehicles of one variant at `location` that have no
        active booking overlapping the range.
        """
        require(location=location, pickup_date=pickup_date, return_date=return_date)
        st = resolve_store(store)
        variant = get_variant(vehicle_type)
        d1, d2 = _parse_range(pickup_date, return_date)
        wanted = _lc(location)

        out = []
        for v in st.find(variant.collection, isAvailable=True):
            if _lc(v.get("location")) != wanted:
                continue
            ref = VehicleRef(variant.tag, v["_id"])
            if st.find("bookings", where=_clashes_with(ref, d1, d2)):
                continue
            out.append(dict(v))
        return out
