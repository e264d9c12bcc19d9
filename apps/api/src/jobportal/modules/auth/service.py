"""
Authentication Service

Signup (gated by a one-time email code) and username/password login.
Both return a signed access token for the applicant.
"""

import asyncio
import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.core.config import settings
from jobportal.core.email import mask_email
from jobportal.core.security import create_access_token, hash_password, verify_password
from jobportal.core.storage import LocalStorage, StorageError
from jobportal.modules.applicants import repository as applicant_repository
from jobportal.modules.applicants.models import Applicant
from jobportal.modules.auth.schemas import (
    ApplicantSummary,
    AuthResponse,
    LoginRequest,
    SignupRequest,
)
from jobportal.modules.catalog import repository as catalog_repository
from jobportal.modules.shared import AuthenticationError, ConflictError, ValidationError
from jobportal.modules.verification.service import Verifier, raise_for_result

logger = logging.getLogger(__name__)


def issue_token(applicant: Applicant) -> AuthResponse:
    """Sign an access token for the applicant."""
    token = create_access_token(
        subject=str(applicant.id),
        additional_claims={"email": applicant.email, "username": applicant.username},
        expires_delta=timedelta(hours=settings.access_token_expire_hours),
    )
    return AuthResponse(
        access_token=token,
        applicant=ApplicantSummary.model_validate(applicant),
    )


async def signup(
    db: AsyncSession,
    verifier: Verifier,
    storage: LocalStorage,
    data: SignupRequest,
) -> AuthResponse:
    """
    Create an applicant account.

    Flow:
    1. Hash the password (rejected before the code is used up)
    2. Consume the email code (a failed check leaves no account behind)
    3. Reject duplicate email, username or CNIC, then create the applicant in DRAFT
    4. Create the applicant's upload folders
    5. Return an access token

    Raises:
        ExpiredError / NotFoundError / ValidationError: Code check failed
        ConflictError: Email, username or CNIC already registered
        ValidationError: Unknown post, or password over the bcrypt limit
    """
    email = data.email.lower()

    try:
        password_hash = await asyncio.to_thread(hash_password, data.password)
    except ValueError as e:
        raise ValidationError(str(e), error_code="INVALID_PASSWORD") from e

    raise_for_result(verifier.verify(email, data.code, consuming=True))

    conflicts = await applicant_repository.find_conflicting_fields(
        db, email=email, username=data.username, cnic=data.cnic
    )
    if conflicts:
        logger.warning(f"Signup rejected for {mask_email(email)}: duplicate {conflicts}")
        raise ConflictError(
            "User already exists with provided email/username/cnic.",
            error_code="DUPLICATE_ACCOUNT",
        )

    if not await catalog_repository.get_post(db, data.post_id):
        raise ValidationError(f"Post {data.post_id} does not exist.", error_code="INVALID_POST")

    try:
        applicant = await applicant_repository.create(
            db,
            full_name=data.full_name,
            cnic=data.cnic,
            email=email,
            username=data.username,
            password_hash=password_hash,
            post_id=data.post_id,
        )
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same identity
        await db.rollback()
        raise ConflictError(
            "User already exists with provided email/username/cnic.",
            error_code="DUPLICATE_ACCOUNT",
        ) from e

    try:
        await storage.ensure_applicant_folders(str(applicant.id))
    except StorageError as e:
        logger.warning(f"Could not create upload folders for {applicant.id}: {e}")

    logger.info(f"Applicant signed up: {applicant.id} ({mask_email(email)})")
    return issue_token(applicant)


async def login(db: AsyncSession, data: LoginRequest) -> AuthResponse:
    """
    Exchange username and password for an access token.

    Raises:
        AuthenticationError: Unknown username or wrong password (same error
            for both)
    """
    applicant = await applicant_repository.get_by_username(db, data.username)

    if not applicant:
        logger.warning(f"Login attempt for unknown username: {data.username}")
        raise AuthenticationError()

    if not await asyncio.to_thread(verify_password, data.password, applicant.password_hash):
        logger.warning(f"Invalid password for username: {data.username}")
        raise AuthenticationError()

    logger.info(f"Applicant logged in: {applicant.id}")
    return issue_token(applicant)
