"""Dashboard domain - overview statistics and recent bookings"""

from .router import router

__all__ = ["router"]
