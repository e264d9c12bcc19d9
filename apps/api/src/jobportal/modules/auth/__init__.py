"""Authentication module."""

from jobportal.modules.auth.router import router
from jobportal.modules.auth.schemas import AuthResponse, LoginRequest, SignupRequest

__all__ = ["router", "AuthResponse", "LoginRequest", "SignupRequest"]
