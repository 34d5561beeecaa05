import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ..config import SETTINGS
from ..flows import StepEngine
from .accrual import run_experience_accrual

logger = logging.getLogger(__name__)

ACCRUAL_JOB_ID = "experience_accrual"
DRAFT_EVICTION_JOB_ID = "draft_eviction"

scheduler = AsyncIOScheduler(timezone=SETTINGS.accrual_zone)


def start_scheduler(step_engine: StepEngine) -> None:
    scheduler.add_job(
        run_experience_accrual,
        "cron",
        day=SETTINGS.accrual_day,
        hour=SETTINGS.accrual_hour,
        id=ACCRUAL_JOB_ID,
        replace_existing=True,
        coalesce=True,
        max_instances=1,
    )
    if step_engine.draft_ttl is not None:
        scheduler.add_job(
            step_engine.evict_expired,
            "interval",
            minutes=SETTINGS.draft_eviction_interval_minutes,
            id=DRAFT_EVICTION_JOB_ID,
            replace_existing=True,
        )
    scheduler.start()
    logger.info(
        "Scheduler started: experience accrual on day %d at %02d:00 %s",
        SETTINGS.accrual_day,
        SETTINGS.accrual_hour,
        SETTINGS.accrual_timezone,
    )


def stop_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
