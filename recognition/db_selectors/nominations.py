# Standard library imports
from collections.abc import Sequence
from uuid import UUID

# Third-party imports
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.models.voting.nomination import Nomination


async def get_nomination_by_id(db: AsyncSession, nomination_id: UUID) -> Nomination | None:
    result = await db.execute(select(Nomination).where(Nomination.id == nomination_id))
    return result.scalar_one_or_none()


async def get_nominations_by_period(db: AsyncSession, voting_period_id: UUID) -> Sequence[Nomination]:
    """All nominations of a period in submission order."""
    result = await db.execute(
        select(Nomination)
        .where(Nomination.voting_period_id == voting_period_id)
        .order_by(Nomination.created_at, Nomination.id)
    )
    return result.scalars().all()


async def get_nomination_by_nominator(
    db: AsyncSession, nominator_user_id: str, voting_period_id: UUID
) -> Nomination | None:
    result = await db.execute(
        select(Nomination).where(
            Nomination.nominator_user_id == nominator_user_id,
            Nomination.voting_period_id == voting_period_id,
        )
    )
    return result.scalars().first()


async def count_nominations_by_period(db: AsyncSession, voting_period_id: UUID) -> int:
    result = await db.execute(
        select(func.count()).select_from(Nomination).where(Nomination.voting_period_id == voting_period_id)
    )
    return result.scalar_one()


async def get_paginated_nominations_by_period(
    db: AsyncSession, voting_period_id: UUID, limit: int, offset: int
) -> tuple[Sequence[Nomination], int]:
    """Newest first, with the total count for pagination."""
    total = await count_nominations_by_period(db, voting_period_id)
    result = await db.execute(
        select(Nomination)
        .where(Nomination.voting_period_id == voting_period_id)
        .order_by(Nomination.created_at.desc(), Nomination.id)
        .offset(offset)
        .limit(limit)
    )
    return result.scalars().all(), total


async def get_nominations_for_employee(
    db: AsyncSession, employee_id: UUID, voting_period_ids: Sequence[UUID]
) -> Sequence[Nomination]:
    if not voting_period_ids:
        return []
    result = await db.execute(
        select(Nomination)
        .where(
            Nomination.nominated_employee_id == employee_id,
            Nomination.voting_period_id.in_(voting_period_ids),
        )
        .order_by(Nomination.created_at.desc())
    )
    return result.scalars().all()
