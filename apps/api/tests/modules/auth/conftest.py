"""
Fixtures for authentication tests.
"""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from jobportal.core.security import hash_password
from jobportal.modules.auth.schemas import SignupRequest
from jobportal.modules.verification.service import Verifier
from jobportal.modules.verification.store import CodeStore


@pytest.fixture
def mock_db():
    db = AsyncMock()
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def code_store():
    return CodeStore(ttl=timedelta(minutes=10))


@pytest.fixture
def verifier(code_store):
    return Verifier(code_store, send_code=AsyncMock(return_value=True))


@pytest.fixture
def storage():
    storage = MagicMock()
    storage.ensure_applicant_folders = AsyncMock()
    return storage


@pytest.fixture
def signup_request():
    return SignupRequest(
        full_name="Ayesha Khan",
        cnic="35202-1234567-1",
        email="Ayesha@Example.com",
        username="ayesha",
        password="s3cret-pass",
        post_id=1,
        code="000000",
    )


@pytest.fixture
def stored_applicant():
    return SimpleNamespace(
        id=uuid4(),
        full_name="Ayesha Khan",
        email="ayesha@example.com",
        username="ayesha",
        post_id=1,
        password_hash=hash_password("s3cret-pass"),
    )
