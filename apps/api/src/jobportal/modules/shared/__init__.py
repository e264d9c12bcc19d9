"""
Shared building blocks for feature modules.
"""

from jobportal.modules.shared.errors import (
    INTERNAL_ERROR_DETAIL,
    AuthenticationError,
    ConflictError,
    DependencyError,
    ExpiredError,
    NotFoundError,
    ServiceError,
    ValidationError,
    to_http_exception,
)

__all__ = [
    "INTERNAL_ERROR_DETAIL",
    "AuthenticationError",
    "ConflictError",
    "DependencyError",
    "ExpiredError",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
    "to_http_exception",
]
