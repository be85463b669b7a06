"""
Router error handling utilities.

Provides a decorator that maps service exceptions to HTTP responses
consistently across every endpoint.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from discuss_board.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_service_errors(func: F) -> F:
    """
    Decorator to turn service exceptions into HTTPExceptions.

    This centralizes:
    - Logging of errors with their context
    - Mapping exception kinds to HTTP status codes
    - A uniform ``{"detail": ...}`` error body
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": str(e), "resource": e.resource})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        except ConflictError as e:
            logger.warning("Conflicting request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

        except ForbiddenError as e:
            logger.warning("Forbidden request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

        except AuthenticationError as e:
            logger.warning("Authentication failed", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(e),
                headers={"WWW-Authenticate": "Bearer"},
            )

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e), "field": e.field})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(),
            )

        except Exception as e:
            logger.exception("Unexpected failure in request", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
