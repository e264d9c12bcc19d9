"""
Submission Readiness

Decides whether an application may be submitted and keeps submitted
applications read-only:
- is_complete(): which required parts of the application are still missing
- guard_mutation() / ensure_editable(): the single edit check every mutation
  goes through
- submit(): the one-way DRAFT -> SUBMITTED transition

Everything here is pure. Callers load the aggregate and persist the outcome
inside one transaction holding the applicant row lock.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Protocol

from jobportal.modules.shared import ConflictError, ValidationError

from .models import SubmissionStatus


class MissingCategory(str, enum.Enum):
    """Parts of an application that can block submission."""

    PROFILE = "profile"
    PICTURE = "picture"
    QUALIFICATIONS = "qualifications"
    EXPERIENCES = "experiences"
    DOCUMENTS = "documents"


REQUIRED_PROFILE_FIELDS = ("full_name", "cnic", "email", "username", "post_id")
DOCUMENT_FIELDS = ("url_cv", "url_academic_certs", "url_experience_certs", "url_cnic")

# DRAFT may be submitted once; SUBMITTED is terminal
VALID_STATUS_TRANSITIONS: dict[SubmissionStatus, set[SubmissionStatus]] = {
    SubmissionStatus.DRAFT: {SubmissionStatus.SUBMITTED},
    SubmissionStatus.SUBMITTED: set(),
}


class HasSubmissionStatus(Protocol):
    submission_status: SubmissionStatus


@dataclass(frozen=True)
class ApplicantAggregate:
    """Snapshot of everything submission depends on."""

    submission_status: SubmissionStatus
    profile: dict[str, Any]
    profile_picture: str | None
    qualifications: tuple[Any, ...] = ()
    experiences: tuple[Any, ...] = ()
    documents: dict[str, str | None] = field(default_factory=dict)

    @classmethod
    def from_model(cls, applicant) -> "ApplicantAggregate":
        """Build from an Applicant row with children loaded."""
        return cls(
            submission_status=applicant.submission_status,
            profile={name: getattr(applicant, name) for name in REQUIRED_PROFILE_FIELDS},
            profile_picture=applicant.url_profile_pic,
            qualifications=tuple(applicant.qualifications),
            experiences=tuple(applicant.experiences),
            documents={name: getattr(applicant, name) for name in DOCUMENT_FIELDS},
        )


@dataclass(frozen=True)
class ReadinessReport:
    missing: tuple[MissingCategory, ...] = ()
    missing_fields: tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.missing

    def __bool__(self) -> bool:
        return self.complete

    def to_dict(self) -> dict[str, Any]:
        return {
            "complete": self.complete,
            "missing": [category.value for category in self.missing],
            "missing_fields": list(self.missing_fields),
        }


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def is_complete(aggregate: ApplicantAggregate) -> ReadinessReport:
    """
    Evaluate an application against the submission requirements.

    Complete means: every required profile field is set, a profile picture
    is uploaded, at least one qualification and one experience exist, and all
    four documents are uploaded.
    """
    missing: list[MissingCategory] = []
    missing_fields: list[str] = []

    absent_profile = [
        name for name in REQUIRED_PROFILE_FIELDS if not _present(aggregate.profile.get(name))
    ]
    if absent_profile:
        missing.append(MissingCategory.PROFILE)
        missing_fields.extend(absent_profile)

    if not _present(aggregate.profile_picture):
        missing.append(MissingCategory.PICTURE)
        missing_fields.append("url_profile_pic")

    if not aggregate.qualifications:
        missing.append(MissingCategory.QUALIFICATIONS)

    if not aggregate.experiences:
        missing.append(MissingCategory.EXPERIENCES)

    absent_documents = [
        name for name in DOCUMENT_FIELDS if not _present(aggregate.documents.get(name))
    ]
    if absent_documents:
        missing.append(MissingCategory.DOCUMENTS)
        missing_fields.extend(absent_documents)

    return ReadinessReport(missing=tuple(missing), missing_fields=tuple(missing_fields))


def can_transition(current: SubmissionStatus, new: SubmissionStatus) -> bool:
    return new in VALID_STATUS_TRANSITIONS.get(current, set())


def guard_mutation(current_status: SubmissionStatus) -> bool:
    """True while the application may still be edited."""
    return current_status != SubmissionStatus.SUBMITTED


def ensure_editable(applicant: HasSubmissionStatus) -> None:
    """
    Reject edits to a submitted application.

    Raises:
        ConflictError: The application is already submitted
    """
    if not guard_mutation(applicant.submission_status):
        raise ConflictError(
            "Application already submitted, edits are not allowed.",
            error_code="APPLICATION_LOCKED",
        )


def submit(aggregate: ApplicantAggregate) -> SubmissionStatus:
    """
    Decide the DRAFT -> SUBMITTED transition.

    Returns:
        The new status (always SUBMITTED)

    Raises:
        ConflictError: Already submitted
        ValidationError: Incomplete; extra carries the missing categories
    """
    if not can_transition(aggregate.submission_status, SubmissionStatus.SUBMITTED):
        raise ConflictError("Application already submitted.", error_code="ALREADY_SUBMITTED")

    report = is_complete(aggregate)
    if not report.complete:
        raise ValidationError(
            "Application is incomplete.",
            error_code="APPLICATION_INCOMPLETE",
            extra={
                "missing": [category.value for category in report.missing],
                "missing_fields": list(report.missing_fields),
            },
        )

    return SubmissionStatus.SUBMITTED
