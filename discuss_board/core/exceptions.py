"""
Exception hierarchy for the discussion board.

Services raise these with human-readable messages; the API layer maps each
kind to an HTTP status code.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DiscussBoardException(Exception):
    """Base exception for all discussion board errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return the message; details are kept for logging only."""
        return self.message


class NotFoundError(DiscussBoardException):
    """Raised when a referenced row does not exist or is soft-deleted."""

    def __init__(
        self,
        resource: str,
        resource_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not-found error.

        Args:
            resource: Human name of the missing resource ("Post", "Comment")
            resource_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        details["resource"] = resource
        self.resource = resource
        super().__init__(f"{resource} not found", details)


class ConflictError(DiscussBoardException):
    """Raised when a uniqueness rule would be violated."""


class ForbiddenError(DiscussBoardException):
    """Raised when the actor may not perform the operation."""


class AuthenticationError(DiscussBoardException):
    """Raised when credentials or tokens are invalid."""


class ValidationError(DiscussBoardException):
    """Raised when a payload breaks a business rule."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)
