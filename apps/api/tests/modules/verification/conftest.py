"""
Fixtures for verification tests.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from jobportal.modules.verification.service import Verifier
from jobportal.modules.verification.store import CodeStore

TTL = timedelta(minutes=10)


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def store(clock):
    """Code store on a fake clock with the default 10 minute TTL."""
    return CodeStore(ttl=TTL, clock=clock)


@pytest.fixture
def send_code():
    """Mail dispatcher that always succeeds."""
    return AsyncMock(return_value=True)


@pytest.fixture
def verifier(store, send_code):
    return Verifier(store, send_code=send_code)
