from dataclasses import dataclass, field
from typing import Optional

from rental_api.exceptions import ValidationError
from rental_api.utils.constants import VehicleType, BIKE_CATEGORIES, HELMET_CATEGORIES


@dataclass
class VehicleBase:
    """
    Base vehicle model. The Store keeps raw dicts; we wrap them into rich objects
    when pricing a booking. `price_per_day` is the listed price at booking time.
    """
    vehicle_id: str
    owner: str
    brand: str
    price_per_day: float
    model: str = ""
    is_available: bool = True
    location: str = ""

    variant = ""

    def price_for_days(self, days: int) -> float:
        """Rental price for a stay of `days` billable days."""
        return self.price_per_day * days

    @classmethod
    def from_dict(cls, d: dict) -> "VehicleBase":
        return cls(
            vehicle_id=d.get("_id"),
            owner=d.get("owner"),
            brand=d.get("brand") or "",
            model=d.get("model") or "",
            price_per_day=float(d.get("pricePerDay") or 0),
            is_available=bool(d.get("isAvailable", True)),
            location=d.get("location") or "",
        )


class Car(VehicleBase):
    variant = VehicleType.CAR


class Bike(VehicleBase):
    variant = VehicleType.BIKE


class Helmet(VehicleBase):
    variant = VehicleType.HELMET


@dataclass(frozen=True)
class Variant:
    """Dispatch entry: where a variant's documents live and how they are wrapped."""
    tag: str
    collection: str
    model: type
    label: str
    required: tuple = field(default=("brand", "model", "pricePerDay"))


# A helmet listing does not need a model name
VARIANTS = {
    VehicleType.CAR: Variant(VehicleType.CAR, "cars", Car, "Car"),
    VehicleType.BIKE: Variant(VehicleType.BIKE, "bikes", Bike, "Bike"),
    VehicleType.HELMET: Variant(VehicleType.HELMET, "helmets", Helmet, "Helmet",
                                required=("brand", "pricePerDay")),
}


def norm_variant(value: Optional[str]) -> str:
    """Normalize a variant tag ('Car', ' bike ') to its lowercase form; '' for None."""
    return (value or "").strip().lower()


def get_variant(value: Optional[str]) -> Variant:
    """Resolve a tag to its dispatch entry or raise ValidationError."""
    tag = norm_variant(value)
    if tag not in VARIANTS:
        raise ValidationError("Invalid vehicle type")
    return VARIANTS[tag]


def variant_for_category(category: Optional[str]) -> str:
    """Map a free-text listing category to the variant it is stored under."""
    label = (category or "").strip().lower()
    if label in HELMET_CATEGORIES:
        return VehicleType.HELMET
    if label in BIKE_CATEGORIES:
        return VehicleType.BIKE
    return VehicleType.CAR


@dataclass(frozen=True)
class VehicleRef:
    """
    A reference to one vehicle: the variant tag selects the collection that
    `vehicle_id` is looked up in.
    """
    variant: str
    vehicle_id: str

    @classmethod
    def of(cls, vehicle_type: Optional[str], vehicle_id) -> "VehicleRef":
        if not vehicle_type or not vehicle_id:
            raise ValidationError()
        return cls(get_variant(vehicle_type).tag, str(vehicle_id))

    @property
    def collection(self) -> str:
        return VARIANTS[self.variant].collection

    def wrap(self, doc: dict) -> VehicleBase:
        return VARIANTS[self.variant].model.from_dict(doc)
