"""Booking domain schemas - Pydantic models for requests and responses"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TechnicianSelection(BaseModel):
    """Schema for staging a technician on the assignment panel"""

    technicianId: str = ""


class BookingRow(BaseModel):
    """Schema for a booking row in the bookings table"""

    id: str
    serviceId: str
    serviceName: str
    technicianId: Optional[str] = None
    technicianName: Optional[str] = None
    customerName: str
    status: str
    scheduledAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
