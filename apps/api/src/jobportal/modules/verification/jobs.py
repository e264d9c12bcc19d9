"""
Verification Background Jobs

Periodic sweep of verification codes that expired long ago and were never
checked again (abandoned signups). Codes inside the grace window are left in
place so a late check still reports "expired" rather than "not_found".
"""

import logging
from datetime import timedelta

from apscheduler.triggers.interval import IntervalTrigger

from jobportal.core.config import settings
from jobportal.core.scheduler import register_job
from jobportal.modules.verification.store import CodeStore

logger = logging.getLogger(__name__)

JOB_ID_PURGE_CODES = "verification_purge_expired_codes"


def make_purge_job(store: CodeStore, grace: timedelta):
    """Build the sweep coroutine for a specific store."""

    async def purge_expired_codes() -> int:
        removed = store.purge_expired(grace)
        if removed:
            logger.info(f"Purged {removed} stale verification code(s)")
        return removed

    return purge_expired_codes


def register_verification_jobs(store: CodeStore) -> None:
    """Register the code sweep with the scheduler."""
    register_job(
        job_id=JOB_ID_PURGE_CODES,
        func=make_purge_job(store, timedelta(minutes=settings.otp_purge_grace_minutes)),
        trigger=IntervalTrigger(minutes=settings.otp_purge_interval_minutes),
    )
    logger.info(
        f"Registered job: {JOB_ID_PURGE_CODES} "
        f"(interval: {settings.otp_purge_interval_minutes} minutes)"
    )
