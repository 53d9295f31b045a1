"""Booking repository - Document store operations for bookings"""

from typing import Optional

from ...models import BOOKINGS, Booking, BookingStatus
from ...store import DocumentStore


class BookingRepository:
    """Repository for booking document operations"""

    @staticmethod
    async def get_booking(store: DocumentStore, booking_id: str) -> Optional[Booking]:
        doc = await store.get_document(BOOKINGS, booking_id)
        return Booking.from_document(doc) if doc else None

    @staticmethod
    async def list_bookings(
        store: DocumentStore, order_by: str, limit: int
    ) -> list[Booking]:
        """Newest first by the given timestamp field, first page only"""
        docs = await store.list_documents(BOOKINGS, order_by=order_by, descending=True, limit=limit)
        return [Booking.from_document(doc) for doc in docs]

    @staticmethod
    async def count_bookings(store: DocumentStore, status: Optional[str] = None) -> int:
        filters = [("status", status)] if status else []
        return await store.count_documents(BOOKINGS, filters)

    @staticmethod
    async def assign_technician(store: DocumentStore, booking_id: str, technician_id: str) -> None:
        """Write the assignment; no other booking field is touched"""
        await store.update_fields(
            BOOKINGS,
            booking_id,
            {"technicianId": technician_id, "status": BookingStatus.ASSIGNED.value},
        )
