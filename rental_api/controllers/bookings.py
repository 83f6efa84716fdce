from flask import Blueprint, g, jsonify, request

from ..models.vehicle import VARIANTS, get_variant
from ..services.booking_service import BookingService
from ..utils.constants import VehicleType
from ..utils.decorators import login_required
from ..utils.payload import json_body

bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


def _payload() -> dict:
    body = json_body(optional=True)
    return body if body is not None else request.form.to_dict()


def _vehicle_from(body: dict):
    """
    (vehicleType, vehicleId) from the body. Older clients send
    `{"car": "<id>"}` (or bike/helmet) instead of the pair.
    """
    vtype, vid = body.get("vehicleType"), body.get("vehicleId")
    if vtype and vid:
        return vtype, vid
    for tag in VARIANTS:
        if body.get(tag):
            return tag, body[tag]
    return vtype, vid


@bp.post("/check-availability")
def check_availability():
    """
    Two shapes:
    - vehicleType + vehicleId: is this vehicle free for the dates?
    - location (+ optional vehicleType, default car): which vehicles there are free?
    """
    body = _payload()
    vtype, vid = _vehicle_from(body)

    if not vid and body.get("location"):
        variant = get_variant(vtype or VehicleType.CAR)
        found = BookingService.search_available(
            variant.tag, body.get("location"), body.get("pickupDate"), body.get("returnDate"))
        return jsonify(success=True, **{f"available{variant.label}s": found})

    free = BookingService.check_availability(vtype, vid, body.get("pickupDate"), body.get("returnDate"))
    if not free:
        return jsonify(success=False, message="Vehicle not available for selected dates")
    return jsonify(success=True, message="Vehicle available for booking")


@bp.post("/create")
@login_required
def create_booking():
    body = _payload()
    vtype, vid = _vehicle_from(body)
    ok, msg, booking = BookingService.create_booking(
        vehicle_type=vtype,
        vehicle_id=vid,
        pickup_date=body.get("pickupDate"),
        return_date=body.get("returnDate"),
        mobile=body.get("mobile"),
        user=g.user,
    )
    if not ok:
        return jsonify(success=False, message=msg)
    return jsonify(success=True, message=msg, booking=booking)


@bp.get("/user")
@login_required
def user_bookings():
    return jsonify(success=True, bookings=BookingService.bookings_for_user(g.user.user_id))


@bp.get("/owner")
@login_required
def owner_bookings():
    return jsonify(success=True, bookings=BookingService.bookings_for_owner(g.user.user_id))


@bp.post("/change-status")
@login_required
def change_status():
    body = _payload()
    ok, msg = BookingService.change_status(
        body.get("bookingId"), body.get("status"), requester_id=g.user.user_id)
    return jsonify(success=ok, message=msg)
