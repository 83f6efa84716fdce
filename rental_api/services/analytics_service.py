from __future__ import annotations

from typing import Optional

from rental_api.models.store import Store
from rental_api.models.vehicle import VARIANTS
from rental_api.services.booking_service import BookingService
from rental_api.services.common import resolve_store
from rental_api.utils.constants import BookingStatus, VehicleType


class AnalyticsService:
    """Aggregations for the owner dashboard."""

    @staticmethod
    def owner_dashboard(owner_id, store: Optional[Store] = None) -> dict:
        st = resolve_store(store)

        # Totals per variant
        counts = {
            tag: len(st.find(variant.collection, owner=str(owner_id)))
            for tag, variant in VARIANTS.items()
        }

        bookings = BookingService.bookings_for_owner(owner_id, store=st)
        pending = [b for b in bookings if b.get("status") == BookingStatus.PENDING]
        confirmed = [b for b in bookings if b.get("status") == BookingStatus.CONFIRMED]

        return {
            "totalCars": counts[VehicleType.CAR],
            "totalBikes": counts[VehicleType.BIKE],
            "totalHelmets": counts[VehicleType.HELMET],
            "totalVehicles": sum(counts.values()),
            "totalBookings": len(bookings),
            "pendingBookings": len(pending),
            "completedBookings": len(confirmed),
            "recentBookings": bookings[:3],
            "monthlyRevenue": round(sum(float(b.get("price") or 0) for b in confirmed), 2),
        }
