"""Booking service - Business logic for booking pages"""

import asyncio
import logging
from typing import Optional

from fastapi import HTTPException

from ...config import BOOKINGS_PAGE_SIZE
from ...errors import StoreError
from ...models import Booking, Service, Technician
from ...shared.lookups import join_bookings, service_name_map
from ...shared.messages import BOOKING_LOAD_FAILED, BOOKING_NOT_FOUND, BOOKINGS_LOAD_FAILED
from ...store import DocumentStore
from ..catalog.repository import ServiceRepository
from ..technicians.repository import TechnicianRepository
from .assignment import AssignmentWorkflow
from .repository import BookingRepository

logger = logging.getLogger(__name__)


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.repo = BookingRepository()

    async def list_bookings(self, limit: int = BOOKINGS_PAGE_SIZE) -> list[dict]:
        """Latest bookings by creation time with resolved service names"""
        try:
            services, bookings = await asyncio.gather(
                ServiceRepository.get_services(self.store),
                self.repo.list_bookings(self.store, order_by="createdAt", limit=limit),
            )
        except StoreError as e:
            logger.error(f"❌ Error fetching bookings: {e}")
            raise HTTPException(status_code=503, detail=BOOKINGS_LOAD_FAILED) from e

        return join_bookings(bookings, service_name_map(services))

    async def open_booking(self, booking_id: str) -> AssignmentWorkflow:
        """Load everything the booking detail page shows"""
        try:
            booking = await self.repo.get_booking(self.store, booking_id)
            if booking is None:
                raise HTTPException(status_code=404, detail=BOOKING_NOT_FOUND)

            service, technician, active = await asyncio.gather(
                self._service_for(booking),
                self._technician_for(booking),
                TechnicianRepository.get_active_technicians(self.store),
            )
        except StoreError as e:
            logger.error(f"❌ Error fetching booking details for {booking_id}: {e}")
            raise HTTPException(status_code=503, detail=BOOKING_LOAD_FAILED) from e

        if booking.violates_assignment_invariant():
            logger.warning(
                f"⚠️ Booking {booking.id} has status '{booking.status}' "
                f"with technicianId={booking.technicianId!r}"
            )

        return AssignmentWorkflow(
            self.store,
            booking,
            active,
            service=service,
            technician=technician,
        )

    async def _service_for(self, booking: Booking) -> Optional[Service]:
        if not booking.serviceId:
            return None
        return await ServiceRepository.get_service(self.store, booking.serviceId)

    async def _technician_for(self, booking: Booking) -> Optional[Technician]:
        if not booking.technicianId:
            return None
        return await TechnicianRepository.get_technician(self.store, booking.technicianId)
