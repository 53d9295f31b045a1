"""Dashboard service - Overview numbers and recent bookings"""

import asyncio
import logging
from typing import Optional

from ...config import RECENT_BOOKINGS_LIMIT
from ...errors import StoreError
from ...models import BookingStatus
from ...shared.lookups import join_bookings, service_name_map, technician_name_map
from ...shared.messages import RECENT_BOOKINGS_LOAD_FAILED, STATS_LOAD_FAILED
from ...store import DocumentStore
from ..bookings.repository import BookingRepository
from ..catalog.repository import ServiceRepository
from ..technicians.repository import TechnicianRepository

logger = logging.getLogger(__name__)


class DashboardService:
    """Service layer for the dashboard overview"""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def get_stats(self) -> dict:
        total, pending, technicians, services = await asyncio.gather(
            BookingRepository.count_bookings(self.store),
            BookingRepository.count_bookings(self.store, status=BookingStatus.PENDING.value),
            TechnicianRepository.count_technicians(self.store),
            ServiceRepository.count_services(self.store),
        )
        return {
            "totalBookings": total,
            "pendingBookings": pending,
            "totalTechnicians": technicians,
            "totalServices": services,
        }

    async def get_recent_bookings(self, limit: int = RECENT_BOOKINGS_LIMIT) -> list[dict]:
        """Upcoming-first bookings with service and technician names"""
        services, technicians, bookings = await asyncio.gather(
            ServiceRepository.get_services(self.store),
            TechnicianRepository.get_technicians(self.store),
            BookingRepository.list_bookings(self.store, order_by="scheduledAt", limit=limit),
        )
        return join_bookings(
            bookings, service_name_map(services), technician_name_map(technicians)
        )

    async def get_overview(self) -> dict:
        """Stats and recent bookings load independently; each fails on its own"""
        stats_result, bookings_result = await asyncio.gather(
            self.get_stats(), self.get_recent_bookings(), return_exceptions=True
        )

        stats: Optional[dict] = None
        stats_error: Optional[str] = None
        if isinstance(stats_result, StoreError):
            logger.error(f"❌ Error fetching dashboard stats: {stats_result}")
            stats_error = STATS_LOAD_FAILED
        elif isinstance(stats_result, BaseException):
            raise stats_result
        else:
            stats = stats_result

        recent: list[dict] = []
        recent_error: Optional[str] = None
        if isinstance(bookings_result, StoreError):
            logger.error(f"❌ Error fetching recent bookings: {bookings_result}")
            recent_error = RECENT_BOOKINGS_LOAD_FAILED
        elif isinstance(bookings_result, BaseException):
            raise bookings_result
        else:
            recent = bookings_result

        return {
            "stats": stats,
            "statsError": stats_error,
            "recentBookings": recent,
            "recentBookingsError": recent_error,
        }
