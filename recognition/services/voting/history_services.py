"""
Winner history: recording computed winners, history queries, yearly flags
and reactions.
"""

# Standard library imports
from collections.abc import Sequence
from datetime import UTC, datetime
import random
from uuid import UUID

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.db.transactions import commit_or_raise
from recognition.core.exceptions import NoWinnersFound, WinnerNotFound
from recognition.core.monitoring.logging import get_contextual_logger
from recognition.db_selectors import voting_periods as period_selectors
from recognition.db_selectors import winner_history as history_selectors
from recognition.models.voting.voting_period import VotingPeriod, VotingPeriodStatus
from recognition.models.voting.winner_history import WinnerHistory, WinnerType
from recognition.schemas.audit.audit_schemas import Actor
from recognition.schemas.voting.result_schemas import GroupWinner, ProvisionalWinners, VoteResult
from recognition.schemas.voting.winner_schemas import Reaction, WinnerSelection
from recognition.services.events import Event, EventType, PostCommitHooks
from recognition.services.voting.aggregation_services import ResultsService
from recognition.services.voting.period_services import VotingPeriodService
from recognition.services.voting.winner_services import RandomSource, draw_general_winner, general_winner_id

logger = get_contextual_logger(__name__)


def _history_row(
    period: VotingPeriod,
    result: VoteResult,
    winner_type: WinnerType,
    row_id: UUID | None = None,
) -> WinnerHistory:
    row = WinnerHistory(
        voting_period_id=period.id,
        year=period.year,
        month=period.month,
        employee_id=result.employee_id,
        employee_name=result.employee_name,
        department=result.department,
        position=result.position,
        nomination_count=result.nomination_count,
        percentage=result.percentage,
        rank=result.rank,
        average_criteria=result.average_criteria.model_dump(),
        voting_group=result.voting_group.name,
        winner_type=winner_type,
        is_yearly_winner=False,
        reactions=[],
    )
    if row_id is not None:
        row.id = row_id
    return row


class WinnerHistoryService:
    def __init__(
        self,
        db: AsyncSession,
        results: ResultsService,
        periods: VotingPeriodService,
        hooks: PostCommitHooks,
    ) -> None:
        self.db = db
        self.results = results
        self.periods = periods
        self.hooks = hooks

    # ---- Recording ----
    async def select_and_record_winners(
        self,
        voting_period_id: UUID,
        actor: Actor,
        rng: RandomSource = random.random,
        close_period: bool = False,
    ) -> WinnerSelection:
        """
        Compute fresh results, draw the general winner among the group winners,
        replace the period's history rows, and optionally close the period.
        """
        period = await self.periods.get_period(voting_period_id)
        results = await self.results.compute_results(voting_period_id, use_cache=False)
        if not results.winners:
            raise NoWinnersFound()

        general = draw_general_winner(results.winners, rng)
        await self.record_winners(period, general, results.winners)

        if close_period and period.status != VotingPeriodStatus.CLOSED:
            await self.periods.close_period(period.id, actor)

        await self.hooks.publish(
            Event(
                type=EventType.WINNERS_RECORDED,
                entity_id=str(period.id),
                actor=actor,
                payload={
                    "year": period.year,
                    "month": period.month,
                    "general_winner": {
                        "employee_id": str(general.employee_id),
                        "employee_name": general.employee_name,
                        "department": general.department,
                        "position": general.position,
                        "nomination_count": general.nomination_count,
                        "percentage": general.percentage,
                        "voting_group": general.voting_group.display,
                    },
                    "group_winners": [str(winner.employee_id) for winner in results.winners],
                },
            )
        )
        return WinnerSelection(general_winner=general, group_winners=results.winners)

    async def record_winners(
        self,
        period: VotingPeriod,
        general: VoteResult,
        group_winners: Sequence[VoteResult],
    ) -> list[WinnerHistory]:
        """
        Replace every history row of ``period``; the GENERAL row keeps a stable id.

        A yearly flag carries over to the new row of the same employee and winner type.
        """
        yearly: set[tuple[WinnerType, UUID]] = set()
        for row in await history_selectors.get_winners_by_period(self.db, period.id):
            if row.is_yearly_winner:
                yearly.add((row.winner_type, row.employee_id))
            await self.db.delete(row)
        await self.db.flush()

        rows = [_history_row(period, general, WinnerType.GENERAL, general_winner_id(period.year, period.month))]
        rows.extend(_history_row(period, winner, WinnerType.BY_GROUP) for winner in group_winners)
        for row in rows:
            row.is_yearly_winner = (row.winner_type, row.employee_id) in yearly
        self.db.add_all(rows)
        await commit_or_raise(self.db)

        logger.bind(voting_period_id=str(period.id)).info(
            f"Recorded {len(rows)} winner rows; general winner {general.employee_name}"
        )
        return rows

    # ---- Provisional and current winners ----
    async def get_provisional_winners(self) -> list[ProvisionalWinners]:
        """Per-group leaders of recent periods that are still open, computed on the fly."""
        provisional: list[ProvisionalWinners] = []
        for period in await self.periods.get_recent_periods():
            if period.status == VotingPeriodStatus.CLOSED:
                continue
            results = await self.results.compute_results(period.id)
            provisional.append(
                ProvisionalWinners(
                    voting_period_id=period.id,
                    year=period.year,
                    month=period.month,
                    winners_by_group=[
                        GroupWinner(voting_group=winner.voting_group.display, winner=winner)
                        for winner in results.winners
                    ],
                )
            )
        return provisional

    async def get_current_winner(self) -> WinnerHistory:
        """General winner of the most recent CLOSED period that has one."""
        for period in await period_selectors.get_closed_periods(self.db):
            winner = await history_selectors.get_general_winner_by_period(self.db, period.id)
            if winner is not None:
                return winner
        raise WinnerNotFound()

    # ---- History queries ----
    async def get_winner(self, winner_id: UUID) -> WinnerHistory:
        winner = await history_selectors.get_winner_by_id(self.db, winner_id)
        if winner is None:
            raise WinnerNotFound()
        return winner

    async def get_all(self) -> Sequence[WinnerHistory]:
        return await history_selectors.get_all_winners(self.db)

    async def get_by_year(self, year: int, winner_type: WinnerType | None = None) -> Sequence[WinnerHistory]:
        return await history_selectors.get_winners_by_year(self.db, year, winner_type)

    async def get_by_year_month(
        self, year: int, month: int, winner_type: WinnerType | None = None
    ) -> Sequence[WinnerHistory]:
        return await history_selectors.get_winners_by_year_month(self.db, year, month, winner_type)

    async def get_by_period(self, voting_period_id: UUID) -> Sequence[WinnerHistory]:
        return await history_selectors.get_winners_by_period(self.db, voting_period_id)

    async def get_general_winner(self, voting_period_id: UUID) -> WinnerHistory:
        winner = await history_selectors.get_general_winner_by_period(self.db, voting_period_id)
        if winner is None:
            raise WinnerNotFound("No general winner found for this voting period")
        return winner

    async def get_group_winners(self, voting_period_id: UUID) -> Sequence[WinnerHistory]:
        winners = await history_selectors.get_winners_by_period(self.db, voting_period_id, WinnerType.BY_GROUP)
        if not winners:
            raise WinnerNotFound("No group winners found for this voting period")
        return winners

    async def get_yearly_winners(self) -> Sequence[WinnerHistory]:
        return await history_selectors.get_yearly_winners(self.db)

    async def get_yearly_winner(self, year: int) -> WinnerHistory | None:
        winners = await history_selectors.get_yearly_winners_for_year(self.db, year)
        return winners[0] if winners else None

    # ---- Yearly flag ----
    async def mark_yearly_winner(self, winner_id: UUID) -> WinnerHistory:
        """Flag ``winner_id`` as its year's winner, unflagging any previous one."""
        winner = await self.get_winner(winner_id)
        for previous in await history_selectors.get_yearly_winners_for_year(self.db, winner.year):
            if previous.id != winner.id:
                previous.is_yearly_winner = False
        winner.is_yearly_winner = True
        await commit_or_raise(self.db)
        logger.bind(winner_id=str(winner_id), year=winner.year).info("Yearly winner marked")
        return winner

    async def unmark_yearly_winner(self, winner_id: UUID) -> WinnerHistory:
        winner = await self.get_winner(winner_id)
        winner.is_yearly_winner = False
        await commit_or_raise(self.db)
        return winner

    # ---- Reactions ----
    async def add_reaction(self, winner_id: UUID, user_id: str, user_name: str, emoji: str) -> WinnerHistory:
        """Adding the same (user, emoji) twice is a no-op."""
        winner = await self.get_winner(winner_id)
        reactions = list(winner.reactions or [])
        if any(r["user_id"] == user_id and r["emoji"] == emoji for r in reactions):
            return winner

        reaction = Reaction(user_id=user_id, user_name=user_name, emoji=emoji, timestamp=datetime.now(UTC))
        # JSON columns only detect reassignment
        winner.reactions = [*reactions, reaction.model_dump(mode="json")]
        await commit_or_raise(self.db)
        return winner

    async def remove_reaction(self, winner_id: UUID, user_id: str, emoji: str) -> WinnerHistory:
        """Removing an absent (user, emoji) is a no-op."""
        winner = await self.get_winner(winner_id)
        reactions = list(winner.reactions or [])
        remaining = [r for r in reactions if not (r["user_id"] == user_id and r["emoji"] == emoji)]
        if len(remaining) == len(reactions):
            return winner

        winner.reactions = remaining
        await commit_or_raise(self.db)
        return winner

    async def get_reactions(self, winner_id: UUID) -> list[Reaction]:
        winner = await self.get_winner(winner_id)
        return [Reaction.model_validate(r) for r in winner.reactions or []]
