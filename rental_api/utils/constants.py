# rental_api/utils/constants.py

"""
Global constants for roles, statuses and vehicle variants.
These constants are imported by both models and services.
"""

# Date format (used for pickup/return dates)
DATE_FMT = "%Y-%m-%d"


class Role:
    USER = "user"
    OWNER = "owner"


class BookingStatus:
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    ALL = (PENDING, CONFIRMED, CANCELLED)
    # Bookings in these states block the dates they cover
    ACTIVE = (PENDING, CONFIRMED)


# Allowed moves when STRICT_STATUS_TRANSITIONS is on.
# Staying in the same state is always accepted.
STATUS_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
}


class VehicleType:
    CAR = "car"
    BIKE = "bike"
    HELMET = "helmet"

    ALL = (CAR, BIKE, HELMET)


# Category labels coming from the listing form that map to a non-car variant.
# Anything else (sedan, suv, van, ...) is a car.
BIKE_CATEGORIES = {"bike", "motorbike", "scooter", "bicycle", "cycle"}
HELMET_CATEGORIES = {"helmet"}

MIN_PASSWORD_LENGTH = 8
