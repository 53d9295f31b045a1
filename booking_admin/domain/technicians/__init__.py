"""Technicians domain - directory of service providers"""

from .router import router

__all__ = ["router"]
