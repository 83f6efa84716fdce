import json

from flask import Blueprint, g, jsonify, request

from ..exceptions import ValidationError
from ..services.analytics_service import AnalyticsService
from ..services.user_service import UserService
from ..services.vehicle_service import VehicleService
from ..utils.constants import VehicleType
from ..utils.decorators import login_required, owner_required
from ..utils.payload import json_body

bp = Blueprint("owner", __name__, url_prefix="/api/owner")

VARIANT = "<any(car, bike, helmet):vtype>"
PLURAL = "<any(cars, bikes, helmets):plural>"


def _listing_payload(vtype: str) -> dict:
    """
    Listing data from a JSON body, or from the `carData`/`bikeData`/`helmetData`
    form field holding a JSON string (multipart form used by the front end).
    """
    body = json_body(optional=True)
    if body is not None:
        return body
    raw = request.form.get(f"{vtype}Data")
    if not raw:
        raise ValidationError("Missing vehicle data")
    try:
        data = json.loads(raw)
    except ValueError:
        raise ValidationError("Vehicle data must be valid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Vehicle data must be an object")
    return data


@bp.post("/change-role")
@login_required
def change_role():
    ok, msg = UserService.change_role_to_owner(g.user.user_id)
    return jsonify(success=ok, message=msg)


@bp.post("/update-image")
@login_required
def update_image():
    body = json_body()
    ok, msg = UserService.update_image(g.user.user_id, body.get("image"))
    return jsonify(success=ok, message=msg)


@bp.post(f"/add-{VARIANT}")
@owner_required
def add_vehicle(vtype):
    # add-car files the listing under whatever variant its category names
    target = None if vtype == VehicleType.CAR else vtype
    ok, msg, vehicle = VehicleService.add_vehicle(g.user.user_id, _listing_payload(vtype), target)
    return jsonify(success=ok, message=msg, vehicle=vehicle)


@bp.get(f"/{PLURAL}")
@owner_required
def owner_vehicles(plural):
    vehicles = VehicleService.owner_vehicles(g.user.user_id, plural[:-1])
    return jsonify(success=True, **{plural: vehicles})


@bp.route(f"/toggle-{VARIANT}", methods=["PATCH", "POST"])
@owner_required
def toggle_vehicle(vtype):
    body = json_body()
    ok, msg = VehicleService.toggle_availability(g.user.user_id, vtype, body.get("id"))
    return jsonify(success=ok, message=msg)


@bp.delete(f"/delete-{VARIANT}/<vehicle_id>")
@owner_required
def delete_vehicle(vtype, vehicle_id):
    ok, msg = VehicleService.delete_vehicle(g.user.user_id, vtype, vehicle_id)
    return jsonify(success=ok, message=msg)


@bp.get("/dashboard")
@owner_required
def dashboard():
    return jsonify(success=True, dashboardData=AnalyticsService.owner_dashboard(g.user.user_id))
