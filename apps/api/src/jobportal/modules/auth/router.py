"""
Authentication Router

- POST /auth/signup - Create an account with a verified email code
- POST /auth/login - Username/password login (rate limited)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.core.config import settings
from jobportal.core.database import get_db
from jobportal.core.rate_limit import rate_limit
from jobportal.core.storage import LocalStorage, get_storage
from jobportal.modules.auth import service
from jobportal.modules.auth.schemas import AuthResponse, LoginRequest, SignupRequest
from jobportal.modules.shared import INTERNAL_ERROR_DETAIL, ServiceError, to_http_exception
from jobportal.modules.verification.service import Verifier, get_verifier

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="""
Create an applicant account.

The `code` must be the one emailed by `/otp/send` for the same address; it is
used up by this call. Email, username and CNIC must be unused.
""",
    responses={
        400: {"description": "Code invalid or expired, or unknown post"},
        404: {"description": "No code outstanding for this email"},
        409: {
            "description": "Account already exists",
            "content": {
                "application/json": {
                    "example": {
                        "error": "DUPLICATE_ACCOUNT",
                        "message": "User already exists with provided email/username/cnic.",
                    }
                }
            },
        },
    },
)
async def signup(
    data: SignupRequest,
    db: AsyncSession = Depends(get_db),
    verifier: Verifier = Depends(get_verifier),
    storage: LocalStorage = Depends(get_storage),
) -> AuthResponse:
    try:
        return await service.signup(db, verifier, storage, data)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error during signup: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        ) from e


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log In",
    responses={
        401: {"description": "Invalid username or password"},
        429: {"description": "Too many login attempts"},
    },
)
@rate_limit(limit=settings.login_rate_limit, window_seconds=settings.login_rate_window_seconds)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """
    Authenticate an applicant and return a JWT access token.

    Raises:
        HTTPException 401: Invalid credentials
    """
    try:
        return await service.login(db, credentials)
    except ServiceError as e:
        raise to_http_exception(e) from e
