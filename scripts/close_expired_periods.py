#!/usr/bin/env python
"""
Close every ACTIVE voting period whose end date has passed.

Meant to run from a scheduler (cron, a timer function) once a day.
"""

# Standard library imports
import asyncio
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.db import async_engine, run_with_new_session
from recognition.core.monitoring.logging import get_logger
from recognition.dependancies.common import get_post_commit_hooks, get_result_cache
from recognition.services.voting.period_services import VotingPeriodService
from recognition.settings import settings

logger = get_logger("scripts.close_expired_periods")


async def close_expired(db: AsyncSession) -> int:
    periods = VotingPeriodService(
        db, get_result_cache(), get_post_commit_hooks(), recent_limit=settings.RECENT_PERIODS_LIMIT
    )
    closed = await periods.close_expired_periods()
    for period in closed:
        logger.info(f"Closed voting period {period.year}-{period.month:02d}")
    return len(closed)


async def main() -> None:
    try:
        count = await run_with_new_session(close_expired)
        logger.info(f"{count} voting period(s) closed")
    finally:
        await async_engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
