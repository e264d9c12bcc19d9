"""Authentication schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from jobportal.core.security import BCRYPT_MAX_BYTES


class SignupRequest(BaseModel):
    """Signup request schema. The code comes from POST /otp/send."""

    full_name: str = Field(..., min_length=1, max_length=200)
    cnic: str = Field(..., min_length=1, max_length=20)
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=8, max_length=72)
    post_id: int
    code: str = Field(..., pattern=r"^\d{6}$")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Login request schema."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ApplicantSummary(BaseModel):
    """Applicant fields returned with a token."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    email: str
    username: str
    post_id: int | None = None


class AuthResponse(BaseModel):
    """Token response for signup and login."""

    access_token: str
    token_type: str = "bearer"
    applicant: ApplicantSummary
