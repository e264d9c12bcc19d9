"""
Applicants Module

The applicant's application record: profile, qualifications, experiences,
document uploads, submission and the printable form.
"""

from .models import Applicant, Experience, Qualification, SubmissionStatus
from .router import router

__all__ = [
    "Applicant",
    "Experience",
    "Qualification",
    "SubmissionStatus",
    "router",
]
