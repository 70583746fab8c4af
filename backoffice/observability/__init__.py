"""
Observability module.

Provides logging configuration and helpers for safe structured logging.
"""

from backoffice.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
