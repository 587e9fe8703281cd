"""
Domain exceptions for the platform API.

Services raise these instead of building responses themselves; the
application-level handler registered in ``main.create_app`` renders them
with the standard response envelope.
"""

from typing import Any, Dict, Optional


class BaseAPIException(Exception):
    """Base exception class for API errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseAPIException):
    """Raised when input passes schema validation but breaks a business rule."""

    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class NotFoundError(BaseAPIException):
    """Raised when a requested resource is not found."""

    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class UnauthorizedError(BaseAPIException):
    status_code = 401
    error_code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ForbiddenError(BaseAPIException):
    status_code = 403
    error_code = "FORBIDDEN"
    default_message = "Access forbidden"


class ConflictError(BaseAPIException):
    """Raised on unique-field collisions (email, username, ...)."""

    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource already exists"
