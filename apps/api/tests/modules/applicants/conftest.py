"""
Fixtures for applicant tests.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from jobportal.modules.applicants.models import (
    Applicant,
    Experience,
    Qualification,
    SubmissionStatus,
)
from jobportal.modules.applicants.readiness import ApplicantAggregate


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def sample_qualification():
    q = MagicMock(spec=Qualification)
    q.id = 1
    q.degree_type = "BACHELORS"
    q.degree_type_other = None
    q.field_of_study = "OTHER"
    q.field_of_study_other = "Public Policy"
    q.institution_name = "University of the Punjab"
    q.institution_country = "PAKISTAN"
    q.institution_country_other = None
    q.graduation_year = 2015
    q.grade = "3.4"
    q.duration_months = 48
    q.is_foreign = False
    q.notes = None
    return q


@pytest.fixture
def sample_experience():
    e = MagicMock(spec=Experience)
    e.id = 1
    e.organization_name = "TEVTA"
    e.organization_type = "GOVERNMENT"
    e.department = "Training"
    e.designation = "Deputy Manager"
    e.grade = "BS-18"
    e.start_date = date(2016, 1, 1)
    e.end_date = None
    e.is_current = True
    e.duties_summary = "Program delivery"
    e.achievements = None
    e.district_id = 16
    e.district = None
    e.country = "PAKISTAN"
    e.country_other = None
    e.is_foreign_posting = False
    return e


@pytest.fixture
def complete_applicant(sample_qualification, sample_experience):
    """An applicant model with everything submission requires."""
    applicant = MagicMock(spec=Applicant)
    applicant.id = uuid4()
    applicant.full_name = "Ayesha Khan"
    applicant.father_name = "Imran Khan"
    applicant.cnic = "35202-1234567-1"
    applicant.email = "ayesha@example.com"
    applicant.username = "ayesha"
    applicant.password_hash = "hashed"
    applicant.cell_no = "03001234567"
    applicant.dob = date(1992, 5, 1)
    applicant.gender = "FEMALE"
    applicant.address = "Lahore"
    applicant.post_id = 1
    applicant.post = None
    applicant.district_id = 16
    applicant.district = None
    applicant.other_district = None
    applicant.url_profile_pic = "/uploads/x/profile-x.jpg"
    applicant.url_cv = "/uploads/x/cv-x.pdf"
    applicant.url_cnic = "/uploads/x/cnic-x.jpg"
    applicant.url_academic_certs = "/uploads/x/qualifications/academic-x.pdf"
    applicant.url_experience_certs = "/uploads/x/experiences/experience-x.pdf"
    applicant.submission_status = SubmissionStatus.DRAFT
    applicant.submitted_at = None
    applicant.qualifications = [sample_qualification]
    applicant.experiences = [sample_experience]
    return applicant


@pytest.fixture
def submitted_applicant(complete_applicant):
    complete_applicant.submission_status = SubmissionStatus.SUBMITTED
    return complete_applicant


@pytest.fixture
def complete_aggregate(complete_applicant):
    return ApplicantAggregate.from_model(complete_applicant)
