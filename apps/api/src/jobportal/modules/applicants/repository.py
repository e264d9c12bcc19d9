"""
Applicant Repository

Database operations for applicants and their qualifications and experiences.

Mutations follow one pattern: the service first takes the applicant row lock
with lock_applicant(), checks state, then calls one of the write functions
below. Each write commits, which ends the transaction and releases the lock.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Applicant, Experience, Qualification, SubmissionStatus

# =============================================================================
# Applicants
# =============================================================================


async def get_by_id(db: AsyncSession, id: UUID) -> Applicant | None:
    """Get applicant by ID, with qualifications and experiences loaded."""
    return await db.get(Applicant, id)


async def get_by_username(db: AsyncSession, username: str) -> Applicant | None:
    result = await db.execute(select(Applicant).where(Applicant.username == username))
    return result.scalar_one_or_none()


async def lock_applicant(db: AsyncSession, id: UUID) -> Applicant | None:
    """
    Load an applicant with SELECT ... FOR UPDATE.

    The row stays locked until the session commits or rolls back, so
    concurrent mutations and submission of the same applicant are serialized.
    """
    result = await db.execute(
        select(Applicant)
        .where(Applicant.id == id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def find_conflicting_fields(
    db: AsyncSession,
    email: str | None = None,
    username: str | None = None,
    cnic: str | None = None,
    exclude_id: UUID | None = None,
) -> list[str]:
    """
    Return which of email/username/cnic are already taken by another applicant.

    Email comparison is case-insensitive.
    """
    conditions = []
    if email:
        conditions.append(Applicant.email == email.lower())
    if username:
        conditions.append(Applicant.username == username)
    if cnic:
        conditions.append(Applicant.cnic == cnic)
    if not conditions:
        return []

    query = select(Applicant.email, Applicant.username, Applicant.cnic).where(or_(*conditions))
    if exclude_id is not None:
        query = query.where(Applicant.id != exclude_id)

    result = await db.execute(query)
    conflicts: list[str] = []
    for row in result.all():
        if email and row.email == email.lower() and "email" not in conflicts:
            conflicts.append("email")
        if username and row.username == username and "username" not in conflicts:
            conflicts.append("username")
        if cnic and row.cnic == cnic and "cnic" not in conflicts:
            conflicts.append("cnic")
    return conflicts


async def create(db: AsyncSession, **fields: Any) -> Applicant:
    """Create a new applicant in DRAFT."""
    applicant = Applicant(submission_status=SubmissionStatus.DRAFT, **fields)

    db.add(applicant)
    await db.commit()
    await db.refresh(applicant)

    return applicant


async def update(db: AsyncSession, applicant: Applicant, fields: dict[str, Any]) -> Applicant:
    """Apply a partial update to an applicant."""
    for name, value in fields.items():
        setattr(applicant, name, value)

    await db.commit()
    await db.refresh(applicant)

    return applicant


async def mark_submitted(
    db: AsyncSession, applicant: Applicant, submitted_at: datetime
) -> Applicant:
    """Persist the DRAFT -> SUBMITTED transition."""
    applicant.submission_status = SubmissionStatus.SUBMITTED
    applicant.submitted_at = submitted_at

    await db.commit()
    await db.refresh(applicant)

    return applicant


# =============================================================================
# Qualifications
# =============================================================================


async def get_qualification(
    db: AsyncSession, applicant_id: UUID, qualification_id: int
) -> Qualification | None:
    """Get a qualification only if it belongs to the applicant."""
    result = await db.execute(
        select(Qualification).where(
            Qualification.id == qualification_id,
            Qualification.applicant_id == applicant_id,
        )
    )
    return result.scalar_one_or_none()


async def create_qualification(
    db: AsyncSession, applicant: Applicant, fields: dict[str, Any]
) -> Qualification:
    qualification = Qualification(**fields)
    applicant.qualifications.append(qualification)

    await db.commit()
    await db.refresh(qualification)

    return qualification


async def delete_qualification(
    db: AsyncSession, applicant: Applicant, qualification: Qualification
) -> None:
    applicant.qualifications.remove(qualification)
    await db.commit()


# =============================================================================
# Experiences
# =============================================================================


async def get_experience(
    db: AsyncSession, applicant_id: UUID, experience_id: int
) -> Experience | None:
    """Get an experience only if it belongs to the applicant."""
    result = await db.execute(
        select(Experience).where(
            Experience.id == experience_id,
            Experience.applicant_id == applicant_id,
        )
    )
    return result.scalar_one_or_none()


async def create_experience(
    db: AsyncSession, applicant: Applicant, fields: dict[str, Any]
) -> Experience:
    experience = Experience(**fields)
    applicant.experiences.append(experience)

    await db.commit()
    await db.refresh(experience)

    return experience


async def delete_experience(
    db: AsyncSession, applicant: Applicant, experience: Experience
) -> None:
    applicant.experiences.remove(experience)
    await db.commit()


# =============================================================================
# Shared
# =============================================================================


async def update_child(
    db: AsyncSession, child: Qualification | Experience, fields: dict[str, Any]
) -> Qualification | Experience:
    """Apply a partial update to a qualification or experience."""
    for name, value in fields.items():
        setattr(child, name, value)

    await db.commit()
    await db.refresh(child)

    return child
