"""Monthly experience accrual.

Every user with ``experience_months`` gains one month per calendar month that
started since ``last_experience_update``. The increment is derived from the
calendar difference rather than from the number of runs, so:

- a second run in the same month finds nothing to do (the first run moved
  ``last_experience_update`` into the current month)
- a missed run is caught up by the next one

Months are counted on the calendar of ACCRUAL_TIMEZONE, the zone the trigger
fires in. Timestamps are stored in UTC.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from ..config import SETTINGS
from ..db import get_experience_candidates, increment_experience
from ..models import async_session_maker

logger = logging.getLogger(__name__)


def months_elapsed(last_update: datetime, now: datetime) -> int:
    """Whole calendar months between two timestamps, read on the calendar of
    ``now``'s timezone; the day of month is ignored.

    A naive ``last_update`` is taken as UTC.
    """
    if last_update.tzinfo is None:
        last_update = last_update.replace(tzinfo=UTC)
    last_update = last_update.astimezone(now.tzinfo)
    return (now.year - last_update.year) * 12 + (now.month - last_update.month)


@dataclass
class AccrualReport:
    scanned: int = 0
    advanced: int = 0
    stale: int = 0
    failed: int = 0
    aborted: bool = False


async def run_experience_accrual(now: datetime | None = None) -> AccrualReport:
    """Advance experience for every eligible user, best effort per record."""
    now = (now or datetime.now(UTC)).astimezone(SETTINGS.accrual_zone)
    stored_now = now.astimezone(UTC)
    report = AccrualReport()

    try:
        async with async_session_maker() as session:
            candidates = await get_experience_candidates(session)
    except Exception:
        logger.exception("Experience accrual aborted: could not load users")
        report.aborted = True
        return report

    logger.info("Experience accrual: processing %d users", len(candidates))

    for telegram_id, _, last_update in candidates:
        report.scanned += 1
        if last_update is None:
            logger.warning(
                "User telegram_id=%d has experience but no last update, skipping",
                telegram_id,
            )
            continue

        months = months_elapsed(last_update, now)
        if months < 1:
            continue

        try:
            async with async_session_maker() as session:
                applied = await increment_experience(
                    session, telegram_id, months, stored_now, last_update
                )
                await session.commit()
        except Exception:
            logger.exception(
                "Failed to accrue experience for telegram_id=%d", telegram_id
            )
            report.failed += 1
            continue

        if not applied:
            logger.info(
                "User telegram_id=%d changed since the scan, skipping", telegram_id
            )
            report.stale += 1
            continue

        report.advanced += 1
        logger.info(
            "Added %d months of experience for telegram_id=%d",
            months,
            telegram_id,
        )

    logger.info(
        "Experience accrual done: %d scanned, %d advanced, %d stale, %d failed",
        report.scanned,
        report.advanced,
        report.stale,
        report.failed,
    )
    return report
