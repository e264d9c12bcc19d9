"""
Verification Schemas
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

CODE_PATTERN = r"^\d{6}$"


class SendCodeRequest(BaseModel):
    """Request body for POST /otp/send."""

    email: EmailStr


class SendCodeResponse(BaseModel):
    message: str = "Verification code sent."
    expires_at: datetime


class VerifyCodeRequest(BaseModel):
    """Request body for POST /otp/verify."""

    email: EmailStr
    code: str = Field(..., pattern=CODE_PATTERN)


class VerifyCodeResponse(BaseModel):
    ok: bool
    reason: str | None = None
    message: str = "Code verified."
