"""
Applicant Service Layer

Business logic for the applicant's own application record.

This module implements:
1. Profile:
   - Read the full record
   - Partial update, with uniqueness checks on email/username/CNIC

2. Qualifications and experiences:
   - Ownership-scoped create/update/delete
   - "Other" free-text fields are kept only while the matching choice is OTHER

3. Submission:
   - Readiness report
   - One-way DRAFT -> SUBMITTED transition

Every mutation takes the applicant row lock first, then checks the
submission guard, then writes. The lock is released by the commit (or by
the rollback in get_db when an error propagates).
"""

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.modules.applicants import readiness, repository
from jobportal.modules.applicants.models import (
    OTHER_CHOICE,
    Applicant,
    Experience,
    Qualification,
)
from jobportal.modules.applicants.readiness import ApplicantAggregate, ReadinessReport
from jobportal.modules.applicants.schemas import (
    ApplicantUpdate,
    ExperienceCreate,
    ExperienceUpdate,
    QualificationCreate,
    QualificationUpdate,
)
from jobportal.modules.catalog import repository as catalog_repository
from jobportal.modules.shared import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# (choice field, free-text field) pairs
QUALIFICATION_OTHER_FIELDS = (
    ("degree_type", "degree_type_other"),
    ("field_of_study", "field_of_study_other"),
    ("institution_country", "institution_country_other"),
)
EXPERIENCE_OTHER_FIELDS = (("country", "country_other"),)


# =============================================================================
# Helpers
# =============================================================================


async def load_editable(db: AsyncSession, applicant_id: UUID) -> Applicant:
    """Lock the applicant row and check the application is still editable."""
    applicant = await repository.lock_applicant(db, applicant_id)
    if not applicant:
        raise NotFoundError("Applicant not found.", error_code="APPLICANT_NOT_FOUND")

    readiness.ensure_editable(applicant)
    return applicant


def apply_other_fields(
    fields: dict[str, Any],
    pairs: tuple[tuple[str, str], ...],
    current: Any = None,
) -> dict[str, Any]:
    """
    Normalize "other" free-text fields against the effective choice.

    The effective choice is the one being set, or the stored one when the
    update leaves it alone. Free text survives only when that choice is
    OTHER; otherwise it is cleared.
    """
    result = dict(fields)
    for choice_field, other_field in pairs:
        if choice_field not in fields and other_field not in fields:
            continue

        choice = fields.get(choice_field, getattr(current, choice_field, None))
        if choice == OTHER_CHOICE:
            other = fields.get(other_field, getattr(current, other_field, None))
            result[other_field] = other or ""
        else:
            result[other_field] = None
    return result


async def _ensure_post_exists(db: AsyncSession, post_id: int | None) -> None:
    if post_id is not None and not await catalog_repository.get_post(db, post_id):
        raise ValidationError(f"Post {post_id} does not exist.", error_code="INVALID_POST")


async def _ensure_district_exists(db: AsyncSession, district_id: int | None) -> None:
    if district_id is not None and not await catalog_repository.get_district(db, district_id):
        raise ValidationError(
            f"District {district_id} does not exist.", error_code="INVALID_DISTRICT"
        )


# =============================================================================
# Profile
# =============================================================================


async def get_profile(db: AsyncSession, applicant_id: UUID) -> Applicant:
    """
    Get the applicant's full record.

    Raises:
        NotFoundError: Applicant does not exist
    """
    applicant = await repository.get_by_id(db, applicant_id)
    if not applicant:
        raise NotFoundError("Applicant not found.", error_code="APPLICANT_NOT_FOUND")
    return applicant


async def update_profile(db: AsyncSession, applicant_id: UUID, data: ApplicantUpdate) -> Applicant:
    """
    Partially update the applicant's profile.

    Only fields present in the request are changed. Document references may
    be set here as well as through the upload endpoints.

    Raises:
        NotFoundError: Applicant does not exist
        ConflictError: Application is submitted, or email/username/CNIC taken
        ValidationError: Unknown post or district
    """
    applicant = await load_editable(db, applicant_id)

    fields = data.model_dump(exclude_unset=True)
    if not fields:
        return applicant

    if fields.get("email"):
        fields["email"] = fields["email"].lower()

    conflicts = await repository.find_conflicting_fields(
        db,
        email=fields.get("email"),
        username=fields.get("username"),
        cnic=fields.get("cnic"),
        exclude_id=applicant.id,
    )
    if conflicts:
        raise ConflictError(
            f"Already registered: {', '.join(conflicts)}.", error_code="DUPLICATE_ACCOUNT"
        )

    await _ensure_post_exists(db, fields.get("post_id"))
    await _ensure_district_exists(db, fields.get("district_id"))

    try:
        applicant = await repository.update(db, applicant, fields)
    except IntegrityError as e:
        # Lost a race with another account claiming the same identity
        await db.rollback()
        raise ConflictError(
            "Email, username or CNIC is already registered.", error_code="DUPLICATE_ACCOUNT"
        ) from e

    logger.info(f"Applicant {applicant.id} updated profile fields: {sorted(fields)}")
    return applicant


# =============================================================================
# Submission
# =============================================================================


async def get_readiness(db: AsyncSession, applicant_id: UUID) -> ReadinessReport:
    """Report what still blocks submission."""
    applicant = await get_profile(db, applicant_id)
    return readiness.is_complete(ApplicantAggregate.from_model(applicant))


async def submit_application(db: AsyncSession, applicant_id: UUID) -> Applicant:
    """
    Submit the application, locking it against further edits.

    The readiness check and the status write happen under the same row lock,
    so no concurrent edit can slip in between them.

    Raises:
        NotFoundError: Applicant does not exist
        ConflictError: Already submitted
        ValidationError: Incomplete (detail lists what is missing)
    """
    applicant = await repository.lock_applicant(db, applicant_id)
    if not applicant:
        raise NotFoundError("Applicant not found.", error_code="APPLICANT_NOT_FOUND")

    readiness.submit(ApplicantAggregate.from_model(applicant))

    applicant = await repository.mark_submitted(db, applicant, datetime.now(UTC))
    logger.info(f"Applicant {applicant.id} submitted their application")
    return applicant


# =============================================================================
# Qualifications
# =============================================================================


async def list_qualifications(db: AsyncSession, applicant_id: UUID) -> list[Qualification]:
    applicant = await get_profile(db, applicant_id)
    return list(applicant.qualifications)


async def add_qualification(
    db: AsyncSession, applicant_id: UUID, data: QualificationCreate
) -> Qualification:
    """Add a qualification to a DRAFT application."""
    applicant = await load_editable(db, applicant_id)

    fields = apply_other_fields(data.model_dump(), QUALIFICATION_OTHER_FIELDS)
    qualification = await repository.create_qualification(db, applicant, fields)

    logger.info(f"Applicant {applicant_id} added qualification {qualification.id}")
    return qualification


async def update_qualification(
    db: AsyncSession, applicant_id: UUID, qualification_id: int, data: QualificationUpdate
) -> Qualification:
    """
    Update one of the applicant's qualifications.

    Raises:
        NotFoundError: No such qualification for this applicant
        ConflictError: Application is submitted
    """
    await load_editable(db, applicant_id)

    qualification = await repository.get_qualification(db, applicant_id, qualification_id)
    if not qualification:
        raise NotFoundError("Qualification not found.", error_code="QUALIFICATION_NOT_FOUND")

    fields = apply_other_fields(
        data.model_dump(exclude_unset=True), QUALIFICATION_OTHER_FIELDS, qualification
    )
    return await repository.update_child(db, qualification, fields)


async def remove_qualification(
    db: AsyncSession, applicant_id: UUID, qualification_id: int
) -> None:
    applicant = await load_editable(db, applicant_id)

    qualification = await repository.get_qualification(db, applicant_id, qualification_id)
    if not qualification:
        raise NotFoundError("Qualification not found.", error_code="QUALIFICATION_NOT_FOUND")

    await repository.delete_qualification(db, applicant, qualification)
    logger.info(f"Applicant {applicant_id} removed qualification {qualification_id}")


# =============================================================================
# Experiences
# =============================================================================


async def list_experiences(db: AsyncSession, applicant_id: UUID) -> list[Experience]:
    applicant = await get_profile(db, applicant_id)
    return list(applicant.experiences)


async def add_experience(
    db: AsyncSession, applicant_id: UUID, data: ExperienceCreate
) -> Experience:
    """Add a work experience entry to a DRAFT application."""
    applicant = await load_editable(db, applicant_id)

    await _ensure_district_exists(db, data.district_id)

    fields = apply_other_fields(data.model_dump(), EXPERIENCE_OTHER_FIELDS)
    experience = await repository.create_experience(db, applicant, fields)

    logger.info(f"Applicant {applicant_id} added experience {experience.id}")
    return experience


async def update_experience(
    db: AsyncSession, applicant_id: UUID, experience_id: int, data: ExperienceUpdate
) -> Experience:
    """
    Update one of the applicant's experiences.

    Raises:
        NotFoundError: No such experience for this applicant
        ConflictError: Application is submitted
        ValidationError: Unknown district, or end date before start date
    """
    await load_editable(db, applicant_id)

    experience = await repository.get_experience(db, applicant_id, experience_id)
    if not experience:
        raise NotFoundError("Experience not found.", error_code="EXPERIENCE_NOT_FOUND")

    fields = data.model_dump(exclude_unset=True)
    await _ensure_district_exists(db, fields.get("district_id"))

    start_date = fields.get("start_date", experience.start_date)
    end_date = fields.get("end_date", experience.end_date)
    if start_date and end_date and end_date < start_date:
        raise ValidationError("end_date cannot be before start_date.")

    fields = apply_other_fields(fields, EXPERIENCE_OTHER_FIELDS, experience)
    return await repository.update_child(db, experience, fields)


async def remove_experience(db: AsyncSession, applicant_id: UUID, experience_id: int) -> None:
    applicant = await load_editable(db, applicant_id)

    experience = await repository.get_experience(db, applicant_id, experience_id)
    if not experience:
        raise NotFoundError("Experience not found.", error_code="EXPERIENCE_NOT_FOUND")

    await repository.delete_experience(db, applicant, experience)
    logger.info(f"Applicant {applicant_id} removed experience {experience_id}")
