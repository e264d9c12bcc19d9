"""
Applicant Models

Database models for the applicant record and its owned sub-resources.
Qualifications and experiences are deleted together with their applicant.
"""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobportal.core.database import Base
from jobportal.modules.catalog.models import District, Post

# Sentinel choice that enables the matching free-text "other" field
OTHER_CHOICE = "OTHER"
HOME_COUNTRY = "PAKISTAN"


class SubmissionStatus(str, enum.Enum):
    """Lifecycle of an application. SUBMITTED is terminal."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"


class Applicant(Base):
    """
    A candidate and their application.

    One applicant holds exactly one application, so the submission status
    lives on this row.
    """

    __tablename__ = "applicants"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Identity
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    father_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    cnic: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Personal details
    cell_no: Mapped[str | None] = mapped_column(String(20), nullable=True)
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Post and domicile
    post_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="SET NULL"), nullable=True
    )
    district_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("districts.id", ondelete="SET NULL"), nullable=True
    )
    other_district: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Document references (public locators under the uploads mount)
    url_profile_pic: Mapped[str | None] = mapped_column(String(500), nullable=True)
    url_cv: Mapped[str | None] = mapped_column(String(500), nullable=True)
    url_cnic: Mapped[str | None] = mapped_column(String(500), nullable=True)
    url_academic_certs: Mapped[str | None] = mapped_column(String(500), nullable=True)
    url_experience_certs: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Status tracking
    submission_status: Mapped[SubmissionStatus] = mapped_column(
        Enum(SubmissionStatus, name="submission_status"),
        nullable=False,
        default=SubmissionStatus.DRAFT,
    )
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    post: Mapped[Post | None] = relationship(Post, lazy="selectin")
    district: Mapped[District | None] = relationship(District, lazy="selectin")
    qualifications: Mapped[list["Qualification"]] = relationship(
        "Qualification",
        back_populates="applicant",
        cascade="all, delete-orphan",
        order_by="Qualification.id",
        lazy="selectin",
    )
    experiences: Mapped[list["Experience"]] = relationship(
        "Experience",
        back_populates="applicant",
        cascade="all, delete-orphan",
        order_by="Experience.id",
        lazy="selectin",
    )

    __table_args__ = (Index("ix_applicants_submission_status", "submission_status"),)


class Qualification(Base):
    """An academic qualification listed on an application."""

    __tablename__ = "qualifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    applicant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("applicants.id", ondelete="CASCADE"),
        nullable=False,
    )

    degree_type: Mapped[str] = mapped_column(String(50), nullable=False)
    degree_type_other: Mapped[str | None] = mapped_column(String(200), nullable=True)
    field_of_study: Mapped[str] = mapped_column(String(100), nullable=False)
    field_of_study_other: Mapped[str | None] = mapped_column(String(200), nullable=True)
    institution_name: Mapped[str] = mapped_column(String(300), nullable=False)
    institution_country: Mapped[str] = mapped_column(String(100), nullable=False)
    institution_country_other: Mapped[str | None] = mapped_column(String(200), nullable=True)
    graduation_year: Mapped[int] = mapped_column(Integer, nullable=False)
    grade: Mapped[str] = mapped_column(String(50), nullable=False)
    duration_months: Mapped[int] = mapped_column(Integer, nullable=False)
    is_foreign: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    applicant: Mapped["Applicant"] = relationship("Applicant", back_populates="qualifications")

    __table_args__ = (Index("ix_qualifications_applicant_id", "applicant_id"),)


class Experience(Base):
    """A work experience entry listed on an application."""

    __tablename__ = "experiences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    applicant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("applicants.id", ondelete="CASCADE"),
        nullable=False,
    )

    organization_name: Mapped[str] = mapped_column(String(300), nullable=False)
    organization_type: Mapped[str] = mapped_column(String(50), nullable=False)
    department: Mapped[str] = mapped_column(String(200), nullable=False)
    designation: Mapped[str] = mapped_column(String(200), nullable=False)
    grade: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    duties_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    achievements: Mapped[str | None] = mapped_column(Text, nullable=True)
    district_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("districts.id", ondelete="SET NULL"), nullable=True
    )
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    country_other: Mapped[str | None] = mapped_column(String(200), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    applicant: Mapped["Applicant"] = relationship("Applicant", back_populates="experiences")
    district: Mapped[District | None] = relationship(District, lazy="selectin")

    @property
    def is_foreign_posting(self) -> bool:
        return self.country != HOME_COUNTRY

    __table_args__ = (Index("ix_experiences_applicant_id", "applicant_id"),)
