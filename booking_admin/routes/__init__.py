"""Top-level routes that do not belong to a domain"""

from .auth import router as auth_router

__all__ = ["auth_router"]
