# Standard library imports
from collections.abc import Sequence
from uuid import UUID

# Third-party imports
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.models.voting.winner_history import WinnerHistory, WinnerType


async def get_winner_by_id(db: AsyncSession, winner_id: UUID) -> WinnerHistory | None:
    result = await db.execute(select(WinnerHistory).where(WinnerHistory.id == winner_id))
    return result.scalar_one_or_none()


async def get_all_winners(db: AsyncSession) -> Sequence[WinnerHistory]:
    result = await db.execute(
        select(WinnerHistory).order_by(
            WinnerHistory.year.desc(),
            WinnerHistory.month.desc(),
            WinnerHistory.rank,
        )
    )
    return result.scalars().all()


async def get_winners_by_year(
    db: AsyncSession, year: int, winner_type: WinnerType | None = None
) -> Sequence[WinnerHistory]:
    query = select(WinnerHistory).where(WinnerHistory.year == year)
    if winner_type is not None:
        query = query.where(WinnerHistory.winner_type == winner_type)
    result = await db.execute(query.order_by(WinnerHistory.month.desc(), WinnerHistory.rank))
    return result.scalars().all()


async def get_winners_by_year_month(
    db: AsyncSession, year: int, month: int, winner_type: WinnerType | None = None
) -> Sequence[WinnerHistory]:
    query = select(WinnerHistory).where(WinnerHistory.year == year, WinnerHistory.month == month)
    if winner_type is not None:
        query = query.where(WinnerHistory.winner_type == winner_type)
    result = await db.execute(query.order_by(WinnerHistory.rank))
    return result.scalars().all()


async def get_winners_by_period(
    db: AsyncSession, voting_period_id: UUID, winner_type: WinnerType | None = None
) -> Sequence[WinnerHistory]:
    query = select(WinnerHistory).where(WinnerHistory.voting_period_id == voting_period_id)
    if winner_type is not None:
        query = query.where(WinnerHistory.winner_type == winner_type)
    result = await db.execute(query.order_by(WinnerHistory.rank, WinnerHistory.voting_group))
    return result.scalars().all()


async def get_general_winner_by_period(db: AsyncSession, voting_period_id: UUID) -> WinnerHistory | None:
    result = await db.execute(
        select(WinnerHistory).where(
            WinnerHistory.voting_period_id == voting_period_id,
            WinnerHistory.winner_type == WinnerType.GENERAL,
        )
    )
    return result.scalars().first()


async def get_yearly_winners(db: AsyncSession) -> Sequence[WinnerHistory]:
    result = await db.execute(
        select(WinnerHistory).where(WinnerHistory.is_yearly_winner.is_(True)).order_by(WinnerHistory.year.desc())
    )
    return result.scalars().all()


async def get_yearly_winners_for_year(db: AsyncSession, year: int) -> Sequence[WinnerHistory]:
    result = await db.execute(
        select(WinnerHistory).where(
            WinnerHistory.year == year,
            WinnerHistory.is_yearly_winner.is_(True),
        )
    )
    return result.scalars().all()
