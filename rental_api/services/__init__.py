from .analytics_service import AnalyticsService
from .booking_service import BookingService
from .user_service import UserService
from .vehicle_service import VehicleService

__all__ = [
    "BookingService",
    "VehicleService",
    "UserService",
    "AnalyticsService",
]
