"""Bookings domain - listing, booking detail and technician assignment"""

from .router import router

__all__ = ["router"]
