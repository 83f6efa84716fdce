from dataclasses import dataclass
from datetime import date

from rental_api.utils.constants import BookingStatus


def overlaps(a_pickup: date, a_return: date, b_pickup: date, b_return: date) -> bool:
    """
    Check overlap between [a_pickup, a_return] and [b_pickup, b_return].
    Both ends are inclusive: a return on day X and a pickup on day X share day X.
    """
    return a_pickup <= b_return and a_return >= b_pickup


@dataclass
class Booking:
    """
    A reservation of one vehicle. Only `status` changes after creation;
    `price` is frozen from the vehicle's rate at admission time.
    """
    user: str
    vehicle_type: str
    vehicle: str
    pickup_date: date
    return_date: date
    mobile: str
    price: float
    status: str = BookingStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status in BookingStatus.ACTIVE

    def conflicts_with(self, pickup_date: date, return_date: date) -> bool:
        return self.is_active and overlaps(self.pickup_date, self.return_date, pickup_date, return_date)

    def to_dict(self) -> dict:
        return {
            "user": self.user,
            "vehicleType": self.vehicle_type,
            "vehicle": self.vehicle,
            "pickupDate": self.pickup_date.isoformat(),
            "returnDate": self.return_date.isoformat(),
            "mobile": self.mobile,
            "price": self.price,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Booking":
        return cls(
            user=d.get("user"),
            vehicle_type=d.get("vehicleType"),
            vehicle=d.get("vehicle"),
            pickup_date=date.fromisoformat(d["pickupDate"]),
            return_date=date.fromisoformat(d["returnDate"]),
            mobile=d.get("mobile") or "",
            price=float(d.get("price") or 0),
            status=d.get("status") or BookingStatus.PENDING,
        )
