"""
Document Uploads

Stores the five application documents and records where they live:
- profile picture and CNIC scan: any image, re-encoded to a small JPEG
- CV, academic and experience certificates: PDF only, size capped

Uploading again replaces the previous file for that slot.
"""

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.core.config import settings
from jobportal.core.imaging import ImageDecodeError, shrink
from jobportal.core.storage import LocalStorage, StorageError
from jobportal.modules.applicants import repository
from jobportal.modules.applicants.service import load_editable
from jobportal.modules.shared import DependencyError, ValidationError

logger = logging.getLogger(__name__)

PDF_MIME_TYPES = {"application/pdf", "application/x-pdf"}
PDF_MAGIC = b"%PDF-"


@dataclass(frozen=True)
class DocumentSlot:
    """Where one kind of document is stored and which applicant field points to it."""

    kind: str
    field: str
    ref_template: str
    is_image: bool

    def ref_for(self, applicant_id: UUID) -> str:
        return self.ref_template.format(id=applicant_id)


DOCUMENT_SLOTS: dict[str, DocumentSlot] = {
    slot.kind: slot
    for slot in (
        DocumentSlot("profile", "url_profile_pic", "{id}/profile-{id}.jpg", is_image=True),
        DocumentSlot("cnic", "url_cnic", "{id}/cnic-{id}.jpg", is_image=True),
        DocumentSlot("cv", "url_cv", "{id}/cv-{id}.pdf", is_image=False),
        DocumentSlot(
            "academic",
            "url_academic_certs",
            "{id}/qualifications/academic-{id}.pdf",
            is_image=False,
        ),
        DocumentSlot(
            "experience",
            "url_experience_certs",
            "{id}/experiences/experience-{id}.pdf",
            is_image=False,
        ),
    )
}


@dataclass(frozen=True)
class StoredDocument:
    kind: str
    url: str
    size_bytes: int


def _normalize_content_type(content_type: str | None) -> str:
    value = (content_type or "").strip().lower()
    if ";" in value:
        value = value.split(";", 1)[0].strip()
    return value


def validate_pdf(content_type: str | None, data: bytes) -> None:
    """
    Check an uploaded certificate or CV.

    Raises:
        ValidationError: Not a PDF, or larger than the configured cap
    """
    if _normalize_content_type(content_type) not in PDF_MIME_TYPES:
        raise ValidationError("Only PDF files are allowed.", error_code="INVALID_FILE_TYPE")
    if len(data) > settings.max_pdf_bytes:
        raise ValidationError(
            f"File exceeds the {settings.max_pdf_bytes // (1024 * 1024)} MB limit.",
            error_code="FILE_TOO_LARGE",
        )
    if not data.startswith(PDF_MAGIC):
        raise ValidationError("File is not a valid PDF.", error_code="INVALID_FILE_TYPE")


def validate_image(content_type: str | None) -> None:
    if not _normalize_content_type(content_type).startswith("image/"):
        raise ValidationError("Only image files are allowed.", error_code="INVALID_FILE_TYPE")


def encode_image(data: bytes) -> bytes:
    """Shrink an uploaded image with the configured budget."""
    return shrink(
        data,
        target_max_bytes=settings.image_target_bytes,
        start_quality=settings.image_start_quality,
        step=settings.image_quality_step,
        max_iterations=settings.image_max_iterations,
    )


async def upload_document(
    db: AsyncSession,
    storage: LocalStorage,
    applicant_id: UUID,
    kind: str,
    content_type: str | None,
    data: bytes,
) -> StoredDocument:
    """
    Validate, store and record one document upload.

    The applicant row is locked and the submission guard checked before any
    file is written, so a submitted application never has its files replaced.

    Raises:
        NotFoundError: Applicant does not exist
        ConflictError: Application is submitted
        ValidationError: Unknown kind, empty, wrong type, too large or unreadable image
        DependencyError: The file could not be written (retryable)
    """
    slot = DOCUMENT_SLOTS.get(kind)
    if slot is None:
        raise ValidationError(f"Unknown document kind: {kind}.", error_code="UNKNOWN_DOCUMENT")

    applicant = await load_editable(db, applicant_id)

    if not data:
        raise ValidationError("No file uploaded.", error_code="EMPTY_FILE")

    if slot.is_image:
        validate_image(content_type)
        try:
            payload = await asyncio.to_thread(encode_image, data)
        except ImageDecodeError as e:
            raise ValidationError(str(e), error_code="INVALID_IMAGE") from e
        logger.info(
            f"Re-encoded {slot.kind} image for {applicant_id}: {len(data)} -> {len(payload)} bytes"
        )
    else:
        validate_pdf(content_type, data)
        payload = data

    try:
        url = await storage.store(slot.ref_for(applicant_id), payload)
    except StorageError as e:
        raise DependencyError(
            "Unable to save the uploaded file. Please try again.", error_code="STORAGE_FAILED"
        ) from e

    await repository.update(db, applicant, {slot.field: url})
    return StoredDocument(kind=slot.kind, url=url, size_bytes=len(payload))
