"""
Service Errors

Domain exceptions raised by the service layer. Routers translate them into
HTTP responses with to_http_exception(); nothing here is fatal to the process.
"""

from typing import Any

from fastapi import HTTPException


class ServiceError(Exception):
    """Base exception for service errors."""

    retryable = False

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        extra: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.extra = extra or {}
        super().__init__(message)


class ValidationError(ServiceError):
    """Missing or malformed input. No state was changed."""

    def __init__(
        self,
        message: str,
        error_code: str = "VALIDATION_ERROR",
        extra: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, error_code=error_code, status_code=400, extra=extra)


class NotFoundError(ServiceError):
    """A referenced record does not exist (or is not owned by the caller)."""

    def __init__(self, message: str, error_code: str = "NOT_FOUND"):
        super().__init__(message=message, error_code=error_code, status_code=404)


class ExpiredError(ServiceError):
    """A verification code is past its time-to-live."""

    def __init__(self, message: str = "The verification code has expired. Request a new one."):
        super().__init__(message=message, error_code="CODE_EXPIRED", status_code=400)


class ConflictError(ServiceError):
    """The operation conflicts with current state (locked application, duplicates)."""

    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(message=message, error_code=error_code, status_code=409)


class DependencyError(ServiceError):
    """A collaborator (mail transport, storage) failed. Safe to retry."""

    retryable = True

    def __init__(self, message: str, error_code: str = "DEPENDENCY_FAILURE"):
        super().__init__(message=message, error_code=error_code, status_code=503)


class AuthenticationError(ServiceError):
    """Credentials were rejected."""

    def __init__(self, message: str = "Invalid username or password."):
        super().__init__(message=message, error_code="INVALID_CREDENTIALS", status_code=401)


def to_http_exception(error: ServiceError) -> HTTPException:
    """Build the HTTPException a router raises for a service error."""
    detail: dict[str, Any] = {
        "error": error.error_code,
        "message": error.message,
        **error.extra,
    }
    if error.retryable:
        detail["retryable"] = True
    return HTTPException(status_code=error.status_code, detail=detail)


INTERNAL_ERROR_DETAIL = {
    "error": "INTERNAL_ERROR",
    "message": "An unexpected error occurred. Please try again later.",
}
