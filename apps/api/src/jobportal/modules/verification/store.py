"""
Verification Code Store

Process-local store of outstanding one-time codes keyed by email address.

- One live record per identity; issuing again replaces the previous code
- Expired records are evicted when a check finds them, so the first check
  after expiry reports "expired" and later checks report "not_found"
- consume() is an atomic check-and-delete: of several concurrent callers
  presenting the same valid code, exactly one succeeds

The store lives in memory and is lost on restart. It is only correct for a
single API process; see DESIGN.md for the multi-instance question.
"""

import enum
import secrets
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

CODE_MIN = 100_000
CODE_SPAN = 900_000  # codes are 100000..999999


def _utcnow() -> datetime:
    return datetime.now(UTC)


def generate_code() -> str:
    """Return a uniformly random six-digit numeric code."""
    return str(CODE_MIN + secrets.randbelow(CODE_SPAN))


def normalize_identity(identity: str) -> str:
    """Emails are matched case-insensitively."""
    return identity.strip().lower()


class CheckReason(str, enum.Enum):
    """Why a code check failed."""

    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class VerificationRecord:
    identity: str
    code: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class CheckResult:
    valid: bool
    reason: CheckReason | None = None


class CodeStore:
    """
    In-memory verification code store.

    All operations take a single lock, which keeps check-and-delete atomic
    across threads. The expected number of live codes is small.
    """

    def __init__(
        self,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
        code_factory: Callable[[], str] = generate_code,
    ):
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self._ttl = ttl
        self._clock = clock
        self._code_factory = code_factory
        self._records: dict[str, VerificationRecord] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def issue(self, identity: str) -> VerificationRecord:
        """Generate a code for identity, replacing any outstanding one."""
        key = normalize_identity(identity)
        now = self._clock()
        record = VerificationRecord(
            identity=key,
            code=self._code_factory(),
            issued_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._records[key] = record
        return record

    def peek(self, identity: str, code: str) -> CheckResult:
        """Check a code without using it up."""
        with self._lock:
            return self._check(normalize_identity(identity), code, consume=False)

    def consume(self, identity: str, code: str) -> CheckResult:
        """Check a code and, if it matches, remove it so it cannot be reused."""
        with self._lock:
            return self._check(normalize_identity(identity), code, consume=True)

    def discard(self, identity: str, code: str) -> bool:
        """
        Remove the record for identity, but only if it still holds code.

        Used to revoke a code that could not be delivered without clobbering a
        newer code issued concurrently.
        """
        key = normalize_identity(identity)
        with self._lock:
            record = self._records.get(key)
            if record is None or record.code != code:
                return False
            del self._records[key]
            return True

    def purge_expired(self, grace: timedelta = timedelta(0)) -> int:
        """
        Drop records that expired more than grace ago.

        Returns:
            Number of records removed
        """
        cutoff = self._clock() - grace
        with self._lock:
            stale = [key for key, record in self._records.items() if record.expires_at < cutoff]
            for key in stale:
                del self._records[key]
        return len(stale)

    def _check(self, key: str, code: str, consume: bool) -> CheckResult:
        # Caller holds self._lock
        record = self._records.get(key)
        if record is None:
            return CheckResult(valid=False, reason=CheckReason.NOT_FOUND)

        if record.is_expired(self._clock()):
            del self._records[key]
            return CheckResult(valid=False, reason=CheckReason.EXPIRED)

        if not secrets.compare_digest(record.code.encode(), code.encode()):
            return CheckResult(valid=False, reason=CheckReason.MISMATCH)

        if consume:
            del self._records[key]
        return CheckResult(valid=True)
