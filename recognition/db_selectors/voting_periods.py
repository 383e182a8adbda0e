# Standard library imports
from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

# Third-party imports
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.models.voting.voting_period import VotingPeriod, VotingPeriodStatus


async def get_voting_period_by_id(db: AsyncSession, voting_period_id: UUID) -> VotingPeriod | None:
    result = await db.execute(select(VotingPeriod).where(VotingPeriod.id == voting_period_id))
    return result.scalar_one_or_none()


async def get_voting_period_by_year_month(db: AsyncSession, year: int, month: int) -> VotingPeriod | None:
    result = await db.execute(select(VotingPeriod).where(VotingPeriod.year == year, VotingPeriod.month == month))
    return result.scalars().first()


async def get_current_active_period(db: AsyncSession) -> VotingPeriod | None:
    """The most recently created ACTIVE period."""
    result = await db.execute(
        select(VotingPeriod)
        .where(VotingPeriod.status == VotingPeriodStatus.ACTIVE)
        .order_by(VotingPeriod.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_active_periods(db: AsyncSession, exclude_id: UUID | None = None) -> Sequence[VotingPeriod]:
    query = select(VotingPeriod).where(VotingPeriod.status == VotingPeriodStatus.ACTIVE)
    if exclude_id is not None:
        query = query.where(VotingPeriod.id != exclude_id)
    result = await db.execute(query)
    return result.scalars().all()


async def get_recent_periods(db: AsyncSession, limit: int) -> Sequence[VotingPeriod]:
    result = await db.execute(
        select(VotingPeriod).order_by(VotingPeriod.year.desc(), VotingPeriod.month.desc()).limit(limit)
    )
    return result.scalars().all()


async def get_expired_active_periods(db: AsyncSession, now: datetime) -> Sequence[VotingPeriod]:
    result = await db.execute(
        select(VotingPeriod).where(
            VotingPeriod.status == VotingPeriodStatus.ACTIVE,
            VotingPeriod.end_date < now,
        )
    )
    return result.scalars().all()


async def get_closed_periods(db: AsyncSession) -> Sequence[VotingPeriod]:
    """Newest first."""
    result = await db.execute(
        select(VotingPeriod)
        .where(VotingPeriod.status == VotingPeriodStatus.CLOSED)
        .order_by(VotingPeriod.year.desc(), VotingPeriod.month.desc())
    )
    return result.scalars().all()
