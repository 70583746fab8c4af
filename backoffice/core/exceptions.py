"""
Exception hierarchy for the back-office application.

Provides layered exception structure for admin and rendering errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class BackofficeException(Exception):
    """Base exception for all back-office errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = dict(details or {})
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NoValueException(BackofficeException):
    """
    Raised when a field has no resolvable value on an object.

    Distinct from a value of None: a None attribute is a value, a missing
    attribute (or a missing intermediate association) is not.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, details)


class AdminConfigurationError(BackofficeException):
    """Raised when an admin or field description is misconfigured."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        admin_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            field: Name of the offending field
            admin_code: Code of the admin owning the field
            details: Additional context
        """
        details = dict(details or {})
        if field:
            details["field"] = field
        if admin_code:
            details["admin_code"] = admin_code
        super().__init__(message, details)


class AdminNotFoundError(BackofficeException):
    """Raised when no admin is registered for a code or model class."""

    def __init__(self, lookup: str, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        details["lookup"] = lookup
        super().__init__(f"Admin not found: {lookup}", details)


class ObjectNotFoundError(BackofficeException):
    """Raised when an admin cannot load an object for an identifier."""

    def __init__(
        self,
        identifier: str,
        admin_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        details["identifier"] = identifier
        if admin_code:
            details["admin_code"] = admin_code
        super().__init__(f"Object not found: {identifier}", details)


class PropertyAccessError(BackofficeException):
    """Raised when a property path cannot be read from an object."""

    def __init__(
        self,
        message: str,
        property_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if property_path:
            details["property_path"] = property_path
        super().__init__(message, details)


class FieldDescriptionNotFoundError(BackofficeException):
    """Raised when an admin has no field description with the given name."""

    def __init__(
        self,
        field: str,
        admin_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        details["field"] = field
        if admin_code:
            details["admin_code"] = admin_code
        super().__init__(f"Field description not found: {field}", details)
