"""
Tests for verification background jobs.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest

from jobportal.modules.verification.jobs import (
    JOB_ID_PURGE_CODES,
    make_purge_job,
    register_verification_jobs,
)


class TestPurgeJob:
    """Tests for the code sweep job."""

    @pytest.mark.asyncio
    async def test_purges_codes_past_grace(self, store, clock):
        store.issue("a@x.com")
        clock.advance(minutes=80)

        removed = await make_purge_job(store, timedelta(minutes=60))()

        assert removed == 1
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_keeps_codes_within_grace(self, store, clock):
        store.issue("a@x.com")
        clock.advance(minutes=30)

        removed = await make_purge_job(store, timedelta(minutes=60))()

        assert removed == 0
        assert len(store) == 1

    def test_register_adds_interval_job(self, store):
        with patch("jobportal.modules.verification.jobs.register_job") as mock_register:
            register_verification_jobs(store)

        mock_register.assert_called_once()
        assert mock_register.call_args.kwargs["job_id"] == JOB_ID_PURGE_CODES
