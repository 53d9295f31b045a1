"""Catalog domain - bookable services offered on the platform"""

from .router import router

__all__ = ["router"]
