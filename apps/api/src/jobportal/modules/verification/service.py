"""
Verification Service

Policy layer over the code store:
- Issue a code and dispatch it by email (a failed dispatch revokes the code)
- Verify a code, either as a non-consuming pre-check or as the final,
  consuming check at signup

Callers only ever see ok/reason; the code itself is never returned.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime

from fastapi import Request

from jobportal.core.email import mask_email, send_verification_code
from jobportal.modules.shared import DependencyError, ExpiredError, NotFoundError, ValidationError
from jobportal.modules.verification.store import CheckReason, CodeStore

logger = logging.getLogger(__name__)

SendCode = Callable[[str, str, int], Awaitable[bool]]


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    reason: str | None = None


class Verifier:
    """Accept/reject decisions for one-time codes."""

    def __init__(self, store: CodeStore, send_code: SendCode | None = None):
        self._store = store
        self._send_code = send_code or send_verification_code

    def verify(self, identity: str, code: str, consuming: bool) -> VerificationResult:
        """
        Check a code for identity.

        Args:
            identity: Email address the code was issued to
            code: Code supplied by the user
            consuming: True for the final signup check (code is used up on
                success), False for a pre-check that leaves the code usable

        Returns:
            VerificationResult with ok and, on failure, the reason
        """
        if consuming:
            result = self._store.consume(identity, code)
        else:
            result = self._store.peek(identity, code)

        if result.valid:
            return VerificationResult(ok=True)

        logger.info(
            f"Code check failed for {mask_email(identity)}: {result.reason.value} "
            f"(consuming={consuming})"
        )
        return VerificationResult(ok=False, reason=result.reason.value)

    async def issue_and_dispatch(self, identity: str) -> datetime:
        """
        Issue a fresh code and email it.

        Issuing replaces any outstanding code for the same address. If the
        email cannot be sent the new code is revoked so no undelivered code
        stays usable.

        Returns:
            When the issued code expires

        Raises:
            DependencyError: The mail transport failed (retryable)
        """
        record = self._store.issue(identity)
        ttl_minutes = int(self._store.ttl.total_seconds() // 60)

        try:
            sent = await self._send_code(identity, record.code, ttl_minutes)
        except Exception as e:
            logger.error(f"Exception sending verification code to {mask_email(identity)}: {e}")
            sent = False

        if not sent:
            self._store.discard(identity, record.code)
            raise DependencyError(
                "Unable to send the verification code. Please try again.",
                error_code="EMAIL_DELIVERY_FAILED",
            )

        logger.info(f"Verification code sent to {mask_email(identity)}")
        return record.expires_at


def raise_for_result(result: VerificationResult) -> None:
    """Translate a failed verification into the matching service error."""
    if result.ok:
        return
    if result.reason == CheckReason.EXPIRED.value:
        raise ExpiredError()
    if result.reason == CheckReason.NOT_FOUND.value:
        raise NotFoundError(
            "No verification code is outstanding for this email. Request a new one.",
            error_code="CODE_NOT_FOUND",
        )
    raise ValidationError("The verification code is incorrect.", error_code="CODE_MISMATCH")


def get_code_store(request: Request) -> CodeStore:
    """FastAPI dependency returning the process-wide code store."""
    return request.app.state.code_store


def get_verifier(request: Request) -> Verifier:
    """FastAPI dependency returning a verifier bound to the code store."""
    return Verifier(get_code_store(request))
