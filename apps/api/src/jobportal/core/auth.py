"""
Authentication Module

Provides the authentication dependency for applicant endpoints.
Validates the Bearer JWT issued at signup/login using the helpers in
security.py and exposes the caller as a CurrentApplicant.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobportal.core.security import decode_token

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=True,
    description="JWT Bearer token for authentication",
)


@dataclass
class CurrentApplicant:
    """
    The authenticated applicant, populated from JWT claims.

    Attributes:
        id: Applicant's unique identifier (UUID)
        email: Applicant's email address
        username: Applicant's login name
    """

    id: UUID
    email: str
    username: str

    def __str__(self) -> str:
        return f"CurrentApplicant(id={self.id}, username={self.username})"


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def validate_access_token(token: str) -> CurrentApplicant:
    """
    Validate a JWT and extract the applicant claims.

    Raises:
        HTTPException 401: Token invalid, expired, of the wrong type or
            missing claims
    """
    payload = decode_token(token)

    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired authentication token.")

    token_type = payload.get("type", "access")
    if token_type != "access":
        logger.warning(f"Invalid token type: {token_type}")
        raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    try:
        subject = payload.get("sub")
        if not subject:
            raise ValueError("Missing 'sub' claim in token")

        return CurrentApplicant(
            id=UUID(subject),
            email=payload.get("email", ""),
            username=payload.get("username", ""),
        )
    except (ValueError, TypeError) as e:
        logger.warning(f"Invalid token claims: {e}")
        raise _unauthorized(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e


async def get_current_applicant(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentApplicant:
    """
    FastAPI dependency that validates the Bearer token and returns the applicant.

    Usage:
        @router.get("/applicant")
        async def endpoint(
            current: CurrentApplicant = Depends(get_current_applicant)
        ):
            ...

    Raises:
        HTTPException 401: Token missing, invalid or expired
    """
    applicant = validate_access_token(credentials.credentials)
    logger.debug(f"Authenticated applicant: {applicant.id}")
    return applicant


__all__ = [
    "CurrentApplicant",
    "get_current_applicant",
    "validate_access_token",
]
