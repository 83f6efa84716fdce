from __future__ import annotations

import logging
from typing import Optional

from rental_api.exceptions import AuthError, NotFoundError, ValidationError
from rental_api.models.store import Store
from rental_api.models.vehicle import Variant, get_variant, variant_for_category
from rental_api.services.common import resolve_store, to_float_safe, valid_image_path

logger = logging.getLogger(__name__)

# Fields an owner may set on a listing; anything else in the payload is dropped
LISTING_FIELDS = (
    "brand", "model", "year", "pricePerDay", "category", "transmission",
    "fuel_type", "seating_capacity", "location", "description", "isAvailable", "image",
)
INT_FIELDS = ("year", "seating_capacity")


def normalize_listing(raw: dict) -> dict:
    """
    Clean an incoming listing payload:
    - accept `price` as an alias of `pricePerDay`
    - keep only known fields, strip strings, coerce numbers
    """
    data = dict(raw or {})
    if data.get("pricePerDay") in (None, "") and data.get("price") not in (None, ""):
        data["pricePerDay"] = data["price"]

    out = {}
    for key in LISTING_FIELDS:
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if isinstance(value, str):
            value = value.strip()
        out[key] = value

    if "pricePerDay" in out:
        price = to_float_safe(out["pricePerDay"])
        if price is None or price <= 0:
            raise ValidationError("Price per day must be a positive number")
        out["pricePerDay"] = price
    for key in INT_FIELDS:
        if key in out and out[key] != "":
            try:
                out[key] = int(out[key])
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid {key}")
    if "isAvailable" in out and not isinstance(out["isAvailable"], bool):
        out["isAvailable"] = str(out["isAvailable"]).lower() in ("1", "true", "yes", "on")
    if out.get("image") and not valid_image_path(out["image"]):
        raise ValidationError("Image must be a /static/ path or an http(s) URL")
    return out


class VehicleService:
    """Owner listing management and the public catalogue, for every variant."""

    @staticmethod
    def add_vehicle(owner_id: str, payload: dict, vehicle_type: Optional[str] = None,
                    store: Optional[Store] = None):
        """
        Create a listing owned by `owner_id`.
        Without an explicit `vehicle_type` the variant follows the category
        (scooter -> bike, helmet -> helmet, anything else -> car).

        Returns:
            (ok: bool, message: str, vehicle: dict)
        """
        st = resolve_store(store)
        data = normalize_listing(payload)
        if not data.get("category"):
            raise ValidationError("Vehicle category is required")

        variant = get_variant(vehicle_type or variant_for_category(data["category"]))
        missing = [f for f in variant.required if not data.get(f)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        data.setdefault("isAvailable", True)
        data["owner"] = str(owner_id)
        doc = st.insert(variant.collection, data)
        logger.info("Owner %s listed %s %s", owner_id, variant.tag, doc["_id"])
        return True, f"{data['category']} Added", dict(doc)

    @staticmethod
    def available(vehicle_type, store: Optional[Store] = None) -> list[dict]:
        """Public catalogue: every listing of the variant that its owner has switched on."""
        st = resolve_store(store)
        return [dict(v) for v in st.find(get_variant(vehicle_type).collection, isAvailable=True)]

    @staticmethod
    def owner_vehicles(owner_id, vehicle_type, store: Optional[Store] = None) -> list[dict]:
        st = resolve_store(store)
        return [dict(v) for v in st.find(get_variant(vehicle_type).collection, owner=str(owner_id))]

    @staticmethod
    def _owned(st: Store, variant: Variant, owner_id, vehicle_id) -> dict:
        if not vehicle_id:
            raise ValidationError("Vehicle ID required")
        doc = st.get(variant.collection, vehicle_id)
        if doc is None:
            raise NotFoundError("Vehicle not found")
        if doc.get("owner") != str(owner_id):
            raise AuthError("Unauthorized")
        return doc

    @staticmethod
    def toggle_availability(owner_id, vehicle_type, vehicle_id, store: Optional[Store] = None):
        """Flip the owner's listed/unlisted flag. Bookings are unaffected."""
        st = resolve_store(store)
        variant = get_variant(vehicle_type)
        with st.locked():
            doc = VehicleService._owned(st, variant, owner_id, vehicle_id)
            st.update(variant.collection, vehicle_id, {"isAvailable": not doc.get("isAvailable", True)})
        return True, "Availability toggled"

    @staticmethod
    def delete_vehicle(owner_id, vehicle_type, vehicle_id, store: Optional[Store] = None):
        """Remove a listing. Existing bookings are kept as they are."""
        st = resolve_store(store)
        variant = get_variant(vehicle_type)
        with st.locked():
            VehicleService._owned(st, variant, owner_id, vehicle_id)
            st.delete(variant.collection, vehicle_id)
        logger.info("Owner %s removed %s %s", owner_id, variant.tag, vehicle_id)
        return True, f"{variant.label} Removed"
