"""
Unit tests for signup and login.
"""

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError

from jobportal.core.security import decode_token
from jobportal.core.storage import StorageError
from jobportal.modules.auth.schemas import LoginRequest, SignupRequest
from jobportal.modules.auth.service import login, signup
from jobportal.modules.shared import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

SERVICE = "jobportal.modules.auth.service"


def _with_code(code_store, request):
    record = code_store.issue(request.email)
    return request.model_copy(update={"code": record.code})


class TestSignup:
    """Tests for signup."""

    @pytest.mark.asyncio
    async def test_creates_applicant_and_returns_token(
        self, mock_db, verifier, code_store, storage, signup_request, stored_applicant
    ):
        request = _with_code(code_store, signup_request)

        with (
            patch(f"{SERVICE}.applicant_repository") as mock_repo,
            patch(f"{SERVICE}.catalog_repository") as mock_catalog,
        ):
            mock_repo.find_conflicting_fields = AsyncMock(return_value=[])
            mock_repo.create = AsyncMock(return_value=stored_applicant)
            mock_catalog.get_post = AsyncMock(return_value=object())

            response = await signup(mock_db, verifier, storage, request)

            kwargs = mock_repo.create.call_args.kwargs
            assert kwargs["email"] == "ayesha@example.com"
            assert kwargs["password_hash"] != "s3cret-pass"

        assert decode_token(response.access_token)["sub"] == str(stored_applicant.id)
        assert response.applicant.username == "ayesha"
        storage.ensure_applicant_folders.assert_awaited_once_with(str(stored_applicant.id))
        # the code was consumed
        assert len(code_store) == 0

    @pytest.mark.asyncio
    async def test_wrong_code_creates_nothing(
        self, mock_db, verifier, code_store, storage, signup_request
    ):
        record = code_store.issue(signup_request.email)
        wrong_code = f"{(int(record.code) + 1) % 1_000_000:06d}"
        with patch(f"{SERVICE}.applicant_repository") as mock_repo:
            mock_repo.create = AsyncMock()

            with pytest.raises(ValidationError) as exc_info:
                await signup(
                    mock_db,
                    verifier,
                    storage,
                    signup_request.model_copy(update={"code": wrong_code}),
                )

            assert exc_info.value.error_code == "CODE_MISMATCH"
            mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_code_issued(self, mock_db, verifier, storage, signup_request):
        with pytest.raises(NotFoundError):
            await signup(mock_db, verifier, storage, signup_request)

    @pytest.mark.asyncio
    async def test_duplicate_account(
        self, mock_db, verifier, code_store, storage, signup_request
    ):
        request = _with_code(code_store, signup_request)

        with patch(f"{SERVICE}.applicant_repository") as mock_repo:
            mock_repo.find_conflicting_fields = AsyncMock(return_value=["email"])
            mock_repo.create = AsyncMock()

            with pytest.raises(ConflictError) as exc_info:
                await signup(mock_db, verifier, storage, request)

            assert exc_info.value.error_code == "DUPLICATE_ACCOUNT"
            mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_maps_to_conflict(
        self, mock_db, verifier, code_store, storage, signup_request
    ):
        request = _with_code(code_store, signup_request)

        with (
            patch(f"{SERVICE}.applicant_repository") as mock_repo,
            patch(f"{SERVICE}.catalog_repository") as mock_catalog,
        ):
            mock_repo.find_conflicting_fields = AsyncMock(return_value=[])
            mock_repo.create = AsyncMock(side_effect=IntegrityError("insert", {}, Exception()))
            mock_catalog.get_post = AsyncMock(return_value=object())

            with pytest.raises(ConflictError):
                await signup(mock_db, verifier, storage, request)

        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_post(self, mock_db, verifier, code_store, storage, signup_request):
        request = _with_code(code_store, signup_request)

        with (
            patch(f"{SERVICE}.applicant_repository") as mock_repo,
            patch(f"{SERVICE}.catalog_repository") as mock_catalog,
        ):
            mock_repo.find_conflicting_fields = AsyncMock(return_value=[])
            mock_catalog.get_post = AsyncMock(return_value=None)

            with pytest.raises(ValidationError) as exc_info:
                await signup(mock_db, verifier, storage, request)

        assert exc_info.value.error_code == "INVALID_POST"

    @pytest.mark.asyncio
    async def test_folder_failure_does_not_fail_signup(
        self, mock_db, verifier, code_store, storage, signup_request, stored_applicant
    ):
        request = _with_code(code_store, signup_request)
        storage.ensure_applicant_folders = AsyncMock(side_effect=StorageError("disk full"))

        with (
            patch(f"{SERVICE}.applicant_repository") as mock_repo,
            patch(f"{SERVICE}.catalog_repository") as mock_catalog,
        ):
            mock_repo.find_conflicting_fields = AsyncMock(return_value=[])
            mock_repo.create = AsyncMock(return_value=stored_applicant)
            mock_catalog.get_post = AsyncMock(return_value=object())

            response = await signup(mock_db, verifier, storage, request)

        assert response.access_token

    def test_schema_counts_password_bytes(self, signup_request):
        data = signup_request.model_dump()
        data["password"] = "é" * 40

        with pytest.raises(SchemaValidationError):
            SignupRequest(**data)

    @pytest.mark.asyncio
    async def test_multibyte_password_over_limit_keeps_code(
        self, mock_db, verifier, code_store, storage, signup_request
    ):
        request = _with_code(code_store, signup_request)
        # skip schema validation
        request = SignupRequest.model_construct(**{**request.model_dump(), "password": "é" * 40})

        with patch(f"{SERVICE}.applicant_repository") as mock_repo:
            mock_repo.create = AsyncMock()

            with pytest.raises(ValidationError) as exc_info:
                await signup(mock_db, verifier, storage, request)

            mock_repo.create.assert_not_called()

        assert exc_info.value.error_code == "INVALID_PASSWORD"
        assert len(code_store) == 1


class TestLogin:
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_valid_credentials(self, mock_db, stored_applicant):
        with patch(f"{SERVICE}.applicant_repository") as mock_repo:
            mock_repo.get_by_username = AsyncMock(return_value=stored_applicant)

            response = await login(mock_db, LoginRequest(username="ayesha", password="s3cret-pass"))

        assert response.token_type == "bearer"
        assert response.applicant.id == stored_applicant.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db, stored_applicant):
        with patch(f"{SERVICE}.applicant_repository") as mock_repo:
            mock_repo.get_by_username = AsyncMock(return_value=stored_applicant)

            with pytest.raises(AuthenticationError):
                await login(mock_db, LoginRequest(username="ayesha", password="wrong-pass"))

    @pytest.mark.asyncio
    async def test_unknown_username(self, mock_db):
        with patch(f"{SERVICE}.applicant_repository") as mock_repo:
            mock_repo.get_by_username = AsyncMock(return_value=None)

            with pytest.raises(AuthenticationError) as exc_info:
                await login(mock_db, LoginRequest(username="ghost", password="whatever"))

        assert exc_info.value.status_code == 401
