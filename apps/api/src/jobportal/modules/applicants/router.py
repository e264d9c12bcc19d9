"""
Applicant Router

Endpoints for the signed-in applicant's own application. All require a
Bearer token.

Endpoints:
- GET /applicant - Full application record
- PUT /applicant - Partial profile update
- GET /applicant/readiness - What still blocks submission
- POST /application/submit - Submit (locks the application)
- GET /application/pdf - Application form as PDF
- GET, POST /qualifications; PUT, DELETE /qualifications/{id}
- GET, POST /experiences; PUT, DELETE /experiences/{id}
- POST /upload/{kind} - Upload profile, cnic, cv, academic or experience document

Every mutation returns 409 APPLICATION_LOCKED once the application is submitted.
"""

import asyncio
import logging
from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.core.auth import CurrentApplicant, get_current_applicant
from jobportal.core.database import get_db
from jobportal.core.storage import LocalStorage, get_storage
from jobportal.modules.applicants import documents, service
from jobportal.modules.applicants.pdf import render_application_pdf
from jobportal.modules.applicants.schemas import (
    ApplicantResponse,
    ApplicantUpdate,
    DeleteResponse,
    ExperienceCreate,
    ExperienceResponse,
    ExperienceUpdate,
    QualificationCreate,
    QualificationResponse,
    QualificationUpdate,
    ReadinessResponse,
    SubmitResponse,
    UploadResponse,
)
from jobportal.modules.shared import INTERNAL_ERROR_DETAIL, ServiceError, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()

DocumentKind = Literal["profile", "cnic", "cv", "academic", "experience"]

LOCKED_RESPONSE = {
    409: {
        "description": "Application already submitted",
        "content": {
            "application/json": {
                "example": {
                    "error": "APPLICATION_LOCKED",
                    "message": "Application already submitted, edits are not allowed.",
                }
            }
        },
    }
}


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error while {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR_DETAIL,
    )


# =============================================================================
# Profile
# =============================================================================


@router.get("/applicant", response_model=ApplicantResponse, summary="Get Application")
async def get_applicant(
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> ApplicantResponse:
    """Full application record, including qualifications and experiences."""
    try:
        applicant = await service.get_profile(db, current.id)
        return ApplicantResponse.model_validate(applicant)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.put(
    "/applicant",
    response_model=ApplicantResponse,
    summary="Update Profile",
    description="""
Partially update the profile. Only the fields sent are changed.

Email, username and CNIC must stay unique across applicants.
""",
    responses=LOCKED_RESPONSE,
)
async def update_applicant(
    data: ApplicantUpdate,
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> ApplicantResponse:
    try:
        applicant = await service.update_profile(db, current.id, data)
        return ApplicantResponse.model_validate(applicant)
    except ServiceError as e:
        logger.warning(f"Profile update rejected for {current.id}: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("updating profile", e) from e


@router.get(
    "/applicant/readiness", response_model=ReadinessResponse, summary="Submission Readiness"
)
async def get_readiness(
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> ReadinessResponse:
    """Which parts of the application are still missing."""
    try:
        report = await service.get_readiness(db, current.id)
        return ReadinessResponse(**report.to_dict())
    except ServiceError as e:
        raise to_http_exception(e) from e


# =============================================================================
# Submission
# =============================================================================


@router.post(
    "/application/submit",
    response_model=SubmitResponse,
    summary="Submit Application",
    description="""
Submit the application. This cannot be undone: afterwards the profile,
qualifications, experiences and documents can no longer be changed.

Requires every required profile field, a profile picture, at least one
qualification, at least one experience and all four documents.
""",
    responses={
        400: {
            "description": "Application incomplete",
            "content": {
                "application/json": {
                    "example": {
                        "error": "APPLICATION_INCOMPLETE",
                        "message": "Application is incomplete.",
                        "missing": ["experiences", "documents"],
                        "missing_fields": ["url_cv"],
                    }
                }
            },
        },
        409: {"description": "Application already submitted"},
    },
)
async def submit_application(
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> SubmitResponse:
    try:
        applicant = await service.submit_application(db, current.id)
        return SubmitResponse(
            submission_status=applicant.submission_status,
            submitted_at=applicant.submitted_at,
        )
    except ServiceError as e:
        logger.info(f"Submission rejected for {current.id}: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("submitting application", e) from e


@router.get(
    "/application/pdf",
    summary="Download Application Form",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_application_pdf(
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        applicant = await service.get_profile(db, current.id)
        content = await asyncio.to_thread(render_application_pdf, applicant)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("rendering application PDF", e) from e

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="application-{current.id}.pdf"'},
    )


# =============================================================================
# Qualifications
# =============================================================================


@router.get(
    "/qualifications", response_model=list[QualificationResponse], summary="List Qualifications"
)
async def list_qualifications(
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> list[QualificationResponse]:
    try:
        qualifications = await service.list_qualifications(db, current.id)
        return [QualificationResponse.model_validate(q) for q in qualifications]
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.post(
    "/qualifications",
    response_model=QualificationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Qualification",
    responses=LOCKED_RESPONSE,
)
async def create_qualification(
    data: QualificationCreate,
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> QualificationResponse:
    try:
        qualification = await service.add_qualification(db, current.id, data)
        return QualificationResponse.model_validate(qualification)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("creating qualification", e) from e


@router.put(
    "/qualifications/{qualification_id}",
    response_model=QualificationResponse,
    summary="Update Qualification",
    responses=LOCKED_RESPONSE,
)
async def update_qualification(
    qualification_id: int,
    data: QualificationUpdate,
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> QualificationResponse:
    try:
        qualification = await service.update_qualification(db, current.id, qualification_id, data)
        return QualificationResponse.model_validate(qualification)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("updating qualification", e) from e


@router.delete(
    "/qualifications/{qualification_id}",
    response_model=DeleteResponse,
    summary="Delete Qualification",
    responses=LOCKED_RESPONSE,
)
async def delete_qualification(
    qualification_id: int,
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    try:
        await service.remove_qualification(db, current.id, qualification_id)
        return DeleteResponse()
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("deleting qualification", e) from e


# =============================================================================
# Experiences
# =============================================================================


@router.get("/experiences", response_model=list[ExperienceResponse], summary="List Experiences")
async def list_experiences(
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> list[ExperienceResponse]:
    try:
        experiences = await service.list_experiences(db, current.id)
        return [ExperienceResponse.model_validate(e) for e in experiences]
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.post(
    "/experiences",
    response_model=ExperienceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Experience",
    responses=LOCKED_RESPONSE,
)
async def create_experience(
    data: ExperienceCreate,
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> ExperienceResponse:
    try:
        experience = await service.add_experience(db, current.id, data)
        return ExperienceResponse.model_validate(experience)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("creating experience", e) from e


@router.put(
    "/experiences/{experience_id}",
    response_model=ExperienceResponse,
    summary="Update Experience",
    responses=LOCKED_RESPONSE,
)
async def update_experience(
    experience_id: int,
    data: ExperienceUpdate,
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> ExperienceResponse:
    try:
        experience = await service.update_experience(db, current.id, experience_id, data)
        return ExperienceResponse.model_validate(experience)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("updating experience", e) from e


@router.delete(
    "/experiences/{experience_id}",
    response_model=DeleteResponse,
    summary="Delete Experience",
    responses=LOCKED_RESPONSE,
)
async def delete_experience(
    experience_id: int,
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    try:
        await service.remove_experience(db, current.id, experience_id)
        return DeleteResponse()
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("deleting experience", e) from e


# =============================================================================
# Uploads
# =============================================================================


@router.post(
    "/upload/{kind}",
    response_model=UploadResponse,
    summary="Upload Document",
    description="""
Upload one application document as multipart form field `file`.

- `profile`, `cnic`: any image; re-encoded to JPEG under 150 KB where possible
- `cv`, `academic`, `experience`: PDF up to 5 MB

Uploading again replaces the previous file.
""",
    responses={
        **LOCKED_RESPONSE,
        503: {"description": "File could not be stored - retry later"},
    },
)
async def upload_document(
    kind: DocumentKind,
    file: UploadFile = File(...),
    current: CurrentApplicant = Depends(get_current_applicant),
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
) -> UploadResponse:
    try:
        data = await file.read()
        stored = await documents.upload_document(
            db, storage, current.id, kind, file.content_type, data
        )
        return UploadResponse(kind=stored.kind, url=stored.url, size_bytes=stored.size_bytes)
    except ServiceError as e:
        logger.warning(f"Upload of {kind} rejected for {current.id}: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error(f"uploading {kind}", e) from e
    finally:
        await file.close()
