"""
Database boundary.

Exposes the declarative base, mixins and the async session dependency.
"""

from backoffice.boundary.db.base import Base, TimestampMixin, UUIDMixin
from backoffice.boundary.db.connection import get_async_db

__all__ = ["Base", "TimestampMixin", "UUIDMixin", "get_async_db"]
