from flask import Blueprint, g, jsonify

from ..services.user_service import UserService
from ..services.vehicle_service import VehicleService
from ..utils.constants import VehicleType
from ..utils.decorators import login_required
from ..utils.payload import json_body

bp = Blueprint("users", __name__, url_prefix="/api/user")


@bp.post("/register")
def register():
    body = json_body()
    ok, msg, token = UserService.register(body.get("name"), body.get("email"), body.get("password"))
    if not ok:
        return jsonify(success=False, message=msg)
    return jsonify(success=True, token=token)


@bp.post("/login")
def login():
    body = json_body()
    ok, msg, token = UserService.login(body.get("email"), body.get("password"))
    if not ok:
        return jsonify(success=False, message=msg)
    return jsonify(success=True, token=token)


@bp.get("/data")
@login_required
def user_data():
    return jsonify(success=True, user=g.user.to_public())


# Public catalogue: only listings the owner has marked available
@bp.get("/cars")
def cars():
    return jsonify(success=True, cars=VehicleService.available(VehicleType.CAR))


@bp.get("/bikes")
def bikes():
    return jsonify(success=True, bikes=VehicleService.available(VehicleType.BIKE))


@bp.get("/helmets")
def helmets():
    return jsonify(success=True, helmets=VehicleService.available(VehicleType.HELMET))
