"""Admin pages router package."""

from .admin_router import router

__all__ = ["router"]
