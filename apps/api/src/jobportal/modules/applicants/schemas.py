"""
Applicant Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from jobportal.modules.applicants.models import SubmissionStatus
from jobportal.modules.catalog.schemas import DistrictResponse, PostResponse

# Profile fields that may be changed but never cleared
NON_NULLABLE_PROFILE_FIELDS = ("full_name", "cnic", "email", "username")


# =============================================================================
# Profile
# =============================================================================


class ApplicantUpdate(BaseModel):
    """Request body for PUT /applicant. Only the fields sent are changed."""

    full_name: str | None = Field(None, min_length=1, max_length=200)
    father_name: str | None = Field(None, max_length=200)
    cnic: str | None = Field(None, min_length=1, max_length=20)
    email: EmailStr | None = None
    username: str | None = Field(None, min_length=3, max_length=100)
    cell_no: str | None = Field(None, max_length=20)
    dob: date | None = None
    gender: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=500)
    post_id: int | None = None
    district_id: int | None = None
    other_district: str | None = Field(None, max_length=100)

    url_profile_pic: str | None = Field(None, max_length=500)
    url_cv: str | None = Field(None, max_length=500)
    url_cnic: str | None = Field(None, max_length=500)
    url_academic_certs: str | None = Field(None, max_length=500)
    url_experience_certs: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def reject_cleared_identity(self) -> "ApplicantUpdate":
        for name in NON_NULLABLE_PROFILE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self


class QualificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    degree_type: str
    degree_type_other: str | None = None
    field_of_study: str
    field_of_study_other: str | None = None
    institution_name: str
    institution_country: str
    institution_country_other: str | None = None
    graduation_year: int
    grade: str
    duration_months: int
    is_foreign: bool
    notes: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_name: str
    organization_type: str
    department: str
    designation: str
    grade: str
    start_date: date
    end_date: date | None = None
    is_current: bool
    duties_summary: str | None = None
    achievements: str | None = None
    district_id: int | None = None
    country: str
    country_other: str | None = None
    is_foreign_posting: bool


class ApplicantResponse(BaseModel):
    """Full applicant record returned by GET/PUT /applicant."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    father_name: str | None = None
    cnic: str
    email: str
    username: str
    cell_no: str | None = None
    dob: date | None = None
    gender: str | None = None
    address: str | None = None
    post_id: int | None = None
    post: PostResponse | None = None
    district_id: int | None = None
    district: DistrictResponse | None = None
    other_district: str | None = None

    url_profile_pic: str | None = None
    url_cv: str | None = None
    url_cnic: str | None = None
    url_academic_certs: str | None = None
    url_experience_certs: str | None = None

    submission_status: SubmissionStatus
    submitted_at: datetime | None = None
    qualifications: list[QualificationResponse] = []
    experiences: list[ExperienceResponse] = []


class ReadinessResponse(BaseModel):
    """Response for GET /applicant/readiness."""

    complete: bool
    missing: list[str]
    missing_fields: list[str]


class SubmitResponse(BaseModel):
    """Response after submitting an application."""

    submission_status: SubmissionStatus
    submitted_at: datetime
    message: str = "Application submitted. It can no longer be edited."


# =============================================================================
# Qualifications
# =============================================================================


class QualificationCreate(BaseModel):
    """Request body for POST /qualifications."""

    degree_type: str = Field(..., min_length=1, max_length=50)
    degree_type_other: str | None = Field(None, max_length=200)
    field_of_study: str = Field(..., min_length=1, max_length=100)
    field_of_study_other: str | None = Field(None, max_length=200)
    institution_name: str = Field(..., min_length=1, max_length=300)
    institution_country: str = Field(..., min_length=1, max_length=100)
    institution_country_other: str | None = Field(None, max_length=200)
    graduation_year: int = Field(..., ge=1900, le=2100)
    grade: str = Field(..., min_length=1, max_length=50)
    duration_months: int = Field(..., ge=0, le=240)
    is_foreign: bool
    notes: str | None = Field(None, max_length=2000)


class QualificationUpdate(BaseModel):
    """Request body for PUT /qualifications/{id}. Only the fields sent are changed."""

    degree_type: str | None = Field(None, min_length=1, max_length=50)
    degree_type_other: str | None = Field(None, max_length=200)
    field_of_study: str | None = Field(None, min_length=1, max_length=100)
    field_of_study_other: str | None = Field(None, max_length=200)
    institution_name: str | None = Field(None, min_length=1, max_length=300)
    institution_country: str | None = Field(None, min_length=1, max_length=100)
    institution_country_other: str | None = Field(None, max_length=200)
    graduation_year: int | None = Field(None, ge=1900, le=2100)
    grade: str | None = Field(None, min_length=1, max_length=50)
    duration_months: int | None = Field(None, ge=0, le=240)
    is_foreign: bool | None = None
    notes: str | None = Field(None, max_length=2000)


# =============================================================================
# Experiences
# =============================================================================


class ExperienceCreate(BaseModel):
    """Request body for POST /experiences."""

    organization_name: str = Field(..., min_length=1, max_length=300)
    organization_type: str = Field(..., min_length=1, max_length=50)
    department: str = Field(..., min_length=1, max_length=200)
    designation: str = Field(..., min_length=1, max_length=200)
    grade: str = Field(..., min_length=1, max_length=50)
    start_date: date
    end_date: date | None = None
    is_current: bool
    duties_summary: str | None = Field(None, max_length=4000)
    achievements: str | None = Field(None, max_length=4000)
    district_id: int
    country: str = Field(..., min_length=1, max_length=100)
    country_other: str | None = Field(None, max_length=200)

    @model_validator(mode="after")
    def validate_dates(self) -> "ExperienceCreate":
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ExperienceUpdate(BaseModel):
    """Request body for PUT /experiences/{id}. Only the fields sent are changed."""

    organization_name: str | None = Field(None, min_length=1, max_length=300)
    organization_type: str | None = Field(None, min_length=1, max_length=50)
    department: str | None = Field(None, min_length=1, max_length=200)
    designation: str | None = Field(None, min_length=1, max_length=200)
    grade: str | None = Field(None, min_length=1, max_length=50)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool | None = None
    duties_summary: str | None = Field(None, max_length=4000)
    achievements: str | None = Field(None, max_length=4000)
    district_id: int | None = None
    country: str | None = Field(None, min_length=1, max_length=100)
    country_other: str | None = Field(None, max_length=200)


class DeleteResponse(BaseModel):
    success: bool = True


# =============================================================================
# Uploads
# =============================================================================


class UploadResponse(BaseModel):
    """Response after a document upload."""

    kind: str
    url: str
    size_bytes: int
