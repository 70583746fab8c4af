"""
Admin error handling utilities.

Provides a decorator for consistent error handling across admin
page endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from backoffice.core.exceptions import (
    AdminConfigurationError,
    AdminNotFoundError,
    FieldDescriptionNotFoundError,
    ObjectNotFoundError,
    PropertyAccessError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_admin_errors(func: F) -> F:
    """
    Decorator to handle admin errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with their details
    - Mapping lookup failures to 404 and configuration failures to 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except (AdminNotFoundError, ObjectNotFoundError, FieldDescriptionNotFoundError) as e:
            logger.warning(
                "Admin resource not found",
                extra={"error": str(e), **{f"detail_{k}": str(v) for k, v in e.details.items()}},
            )
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=e.message,
            )

        except (AdminConfigurationError, PropertyAccessError) as e:
            logger.error(
                "Admin misconfiguration",
                extra={"error": str(e), **{f"detail_{k}": str(v) for k, v in e.details.items()}},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in admin page",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred while rendering the admin page",
            )

    return wrapper  # type: ignore
