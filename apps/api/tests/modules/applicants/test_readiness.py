"""
Unit tests for submission readiness and the edit guard.

These tests cover:
- Completeness: every single missing requirement blocks submission
- The status state machine and guard
- submit(): success, incomplete and already-submitted cases
"""

from dataclasses import replace
from types import SimpleNamespace

import pytest

from jobportal.modules.applicants.models import SubmissionStatus
from jobportal.modules.applicants.readiness import (
    DOCUMENT_FIELDS,
    REQUIRED_PROFILE_FIELDS,
    VALID_STATUS_TRANSITIONS,
    MissingCategory,
    can_transition,
    ensure_editable,
    guard_mutation,
    is_complete,
    submit,
)
from jobportal.modules.shared import ConflictError, ValidationError


class TestIsComplete:
    """Tests for is_complete."""

    def test_complete_aggregate(self, complete_aggregate):
        report = is_complete(complete_aggregate)

        assert report.complete is True
        assert bool(report) is True
        assert report.missing == ()

    @pytest.mark.parametrize("field", REQUIRED_PROFILE_FIELDS)
    def test_each_missing_profile_field_blocks(self, complete_aggregate, field):
        profile = {**complete_aggregate.profile, field: None}

        report = is_complete(replace(complete_aggregate, profile=profile))

        assert report.complete is False
        assert report.missing == (MissingCategory.PROFILE,)
        assert report.missing_fields == (field,)

    def test_blank_string_counts_as_missing(self, complete_aggregate):
        profile = {**complete_aggregate.profile, "full_name": "   "}

        report = is_complete(replace(complete_aggregate, profile=profile))

        assert report.missing == (MissingCategory.PROFILE,)

    def test_missing_picture_blocks(self, complete_aggregate):
        report = is_complete(replace(complete_aggregate, profile_picture=None))

        assert report.missing == (MissingCategory.PICTURE,)

    def test_zero_qualifications_blocks(self, complete_aggregate):
        report = is_complete(replace(complete_aggregate, qualifications=()))

        assert report.complete is False
        assert report.missing == (MissingCategory.QUALIFICATIONS,)

    def test_zero_experiences_blocks(self, complete_aggregate):
        report = is_complete(replace(complete_aggregate, experiences=()))

        assert report.missing == (MissingCategory.EXPERIENCES,)

    @pytest.mark.parametrize("field", DOCUMENT_FIELDS)
    def test_each_missing_document_blocks(self, complete_aggregate, field):
        documents = {**complete_aggregate.documents, field: None}

        report = is_complete(replace(complete_aggregate, documents=documents))

        assert report.missing == (MissingCategory.DOCUMENTS,)
        assert report.missing_fields == (field,)

    def test_reports_every_missing_category(self, complete_aggregate):
        empty = replace(
            complete_aggregate,
            profile={name: None for name in REQUIRED_PROFILE_FIELDS},
            profile_picture=None,
            qualifications=(),
            experiences=(),
            documents={},
        )

        report = is_complete(empty)

        assert set(report.missing) == set(MissingCategory)
        assert report.to_dict()["complete"] is False


class TestGuard:
    """Tests for the edit guard and state machine."""

    def test_draft_is_editable(self):
        assert guard_mutation(SubmissionStatus.DRAFT) is True

    def test_submitted_is_never_editable(self):
        for _ in range(3):
            assert guard_mutation(SubmissionStatus.SUBMITTED) is False

    def test_ensure_editable_raises_when_submitted(self):
        with pytest.raises(ConflictError) as exc_info:
            ensure_editable(SimpleNamespace(submission_status=SubmissionStatus.SUBMITTED))

        assert exc_info.value.error_code == "APPLICATION_LOCKED"
        assert exc_info.value.status_code == 409

    def test_ensure_editable_allows_draft(self):
        ensure_editable(SimpleNamespace(submission_status=SubmissionStatus.DRAFT))

    def test_submitted_is_terminal(self):
        assert VALID_STATUS_TRANSITIONS[SubmissionStatus.SUBMITTED] == set()
        assert can_transition(SubmissionStatus.DRAFT, SubmissionStatus.SUBMITTED) is True
        assert can_transition(SubmissionStatus.SUBMITTED, SubmissionStatus.DRAFT) is False


class TestSubmit:
    """Tests for submit."""

    def test_complete_draft_submits(self, complete_aggregate):
        assert submit(complete_aggregate) == SubmissionStatus.SUBMITTED

    def test_incomplete_raises_with_missing_categories(self, complete_aggregate):
        with pytest.raises(ValidationError) as exc_info:
            submit(replace(complete_aggregate, qualifications=()))

        assert exc_info.value.error_code == "APPLICATION_INCOMPLETE"
        assert exc_info.value.extra["missing"] == ["qualifications"]

    def test_second_submit_conflicts(self, complete_aggregate):
        submitted = replace(complete_aggregate, submission_status=SubmissionStatus.SUBMITTED)

        with pytest.raises(ConflictError) as exc_info:
            submit(submitted)

        assert exc_info.value.error_code == "ALREADY_SUBMITTED"
        assert submitted.submission_status == SubmissionStatus.SUBMITTED
