"""
Verification Router

Public endpoints used before an applicant account exists:
- POST /otp/send - Email a one-time code (rate limited)
- POST /otp/verify - Check a code without using it up
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from jobportal.core.config import settings
from jobportal.core.rate_limit import rate_limit
from jobportal.modules.shared import INTERNAL_ERROR_DETAIL, ServiceError, to_http_exception
from jobportal.modules.verification.schemas import (
    SendCodeRequest,
    SendCodeResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)
from jobportal.modules.verification.service import Verifier, get_verifier

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/send",
    response_model=SendCodeResponse,
    summary="Send Verification Code",
    description="""
Email a six-digit verification code to the address.

Requesting a new code replaces any earlier one for the same address.
Codes expire after 10 minutes by default.
""",
    responses={
        429: {"description": "Too many code requests"},
        503: {"description": "Email could not be sent - retry later"},
    },
)
@rate_limit(
    limit=settings.otp_send_rate_limit,
    window_seconds=settings.otp_send_rate_window_seconds,
)
async def send_code(
    request: Request,
    data: SendCodeRequest,
    verifier: Verifier = Depends(get_verifier),
) -> SendCodeResponse:
    try:
        expires_at = await verifier.issue_and_dispatch(data.email)
        return SendCodeResponse(expires_at=expires_at)
    except ServiceError as e:
        logger.warning(f"Verification code not sent: {e.message}")
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error sending verification code: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        ) from e


@router.post(
    "/verify",
    response_model=VerifyCodeResponse,
    summary="Pre-check Verification Code",
    description="""
Check a verification code without consuming it.

The same code must still be presented to `/auth/signup`, which uses it up.
""",
    responses={
        400: {
            "description": "Invalid or expired code",
            "content": {
                "application/json": {
                    "example": {
                        "error": "INVALID_CODE",
                        "message": "Invalid or expired code.",
                        "reason": "expired",
                    }
                }
            },
        },
    },
)
async def verify_code(
    data: VerifyCodeRequest,
    verifier: Verifier = Depends(get_verifier),
) -> VerifyCodeResponse:
    result = verifier.verify(data.email, data.code, consuming=False)

    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "INVALID_CODE",
                "message": "Invalid or expired code.",
                "reason": result.reason,
            },
        )

    return VerifyCodeResponse(ok=True)
