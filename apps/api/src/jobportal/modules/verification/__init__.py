"""
Verification Module

One-time email codes that gate applicant signup.

API Endpoints:
- POST /otp/send - Email a six-digit code (10-minute expiry, rate limited)
- POST /otp/verify - Non-consuming pre-check

The consuming check happens inside POST /auth/signup.

The code store is created once at startup (see main.py) and injected into
handlers through get_code_store / get_verifier.
"""

from .jobs import register_verification_jobs
from .router import router
from .service import Verifier, get_code_store, get_verifier
from .store import CheckReason, CodeStore

__all__ = [
    "CheckReason",
    "CodeStore",
    "Verifier",
    "get_code_store",
    "get_verifier",
    "register_verification_jobs",
    "router",
]
