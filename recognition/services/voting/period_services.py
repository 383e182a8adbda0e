"""
Voting period lifecycle: PENDING -> ACTIVE -> CLOSED, plus reset and delete.

Uniqueness of (year, month) and of the ACTIVE period are checked by query
before writing. The (year, month) pair also has a storage-level constraint
that surfaces as ``DuplicatePeriod``.
"""

# Standard library imports
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

# Third-party imports
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.caching.result_cache import ResultCache
from recognition.core.db.transactions import commit_or_raise
from recognition.core.exceptions import (
    ActivePeriodExists,
    AlreadyClosed,
    DuplicatePeriod,
    RecognitionError,
    ValidationError,
    VotingPeriodNotFound,
)
from recognition.core.monitoring.logging import get_contextual_logger
from recognition.db_selectors import voting_periods as period_selectors
from recognition.db_selectors.audit import get_audit_logs_for_entity
from recognition.db_selectors.nominations import count_nominations_by_period
from recognition.db_selectors.winner_history import get_winners_by_period
from recognition.models.audit.audit_log import AuditEntity, AuditLog
from recognition.models.voting.nomination import Nomination
from recognition.models.voting.voting_period import VotingPeriod, VotingPeriodStatus
from recognition.models.voting.winner_history import WinnerHistory, WinnerType
from recognition.schemas.audit.audit_schemas import SYSTEM_ACTOR, Actor
from recognition.schemas.voting.voting_period_schemas import (
    DeleteResult,
    ResetResult,
    VotingPeriodCreate,
    VotingPeriodUpdate,
)
from recognition.services.audit.audit_services import detect_changes
from recognition.services.events import Event, EventType, PostCommitHooks
from recognition.services.voting.winner_services import general_winner_id
from recognition.utils.date_utils import ensure_aware
from recognition.utils.model_utils import model_snapshot, update_model_fields

logger = get_contextual_logger(__name__)

DEFAULT_RECENT_PERIODS = 12


class VotingPeriodService:
    def __init__(
        self,
        db: AsyncSession,
        cache: ResultCache,
        hooks: PostCommitHooks,
        recent_limit: int = DEFAULT_RECENT_PERIODS,
    ) -> None:
        self.db = db
        self.cache = cache
        self.hooks = hooks
        self.recent_limit = recent_limit

    # ---- Queries ----
    async def get_period(self, voting_period_id: UUID) -> VotingPeriod:
        period = await period_selectors.get_voting_period_by_id(self.db, voting_period_id)
        if period is None:
            raise VotingPeriodNotFound()
        return period

    async def get_current_period(self) -> VotingPeriod | None:
        """Most recently created ACTIVE period, if any."""
        return await period_selectors.get_current_active_period(self.db)

    async def get_recent_periods(self, limit: int | None = None) -> Sequence[VotingPeriod]:
        return await period_selectors.get_recent_periods(self.db, limit or self.recent_limit)

    async def get_period_audit_history(self, voting_period_id: UUID) -> Sequence[AuditLog]:
        return await get_audit_logs_for_entity(self.db, AuditEntity.VOTING_PERIOD, str(voting_period_id))

    # ---- Mutations ----
    async def create_period(self, data: VotingPeriodCreate, actor: Actor) -> VotingPeriod:
        if await period_selectors.get_voting_period_by_year_month(self.db, data.year, data.month):
            raise DuplicatePeriod(data.year, data.month)
        if data.status == VotingPeriodStatus.ACTIVE and await period_selectors.get_active_periods(self.db):
            raise ActivePeriodExists()

        period = VotingPeriod(**data.model_dump())
        self.db.add(period)
        await commit_or_raise(self.db, conflict=DuplicatePeriod(data.year, data.month))

        logger.bind(voting_period_id=str(period.id)).info(f"Voting period {period.year}-{period.month:02d} created")
        await self._publish(EventType.PERIOD_CREATED, period, actor, payload=self._describe(period))
        return period

    async def update_period(self, voting_period_id: UUID, data: VotingPeriodUpdate, actor: Actor) -> VotingPeriod:
        period = await self.get_period(voting_period_id)
        before = model_snapshot(period)

        year = data.year if data.year is not None else period.year
        month = data.month if data.month is not None else period.month
        moved = (year, month) != (period.year, period.month)
        if moved:
            existing = await period_selectors.get_voting_period_by_year_month(self.db, year, month)
            if existing is not None and existing.id != period.id:
                raise DuplicatePeriod(year, month)

        if data.status == VotingPeriodStatus.ACTIVE and period.status != VotingPeriodStatus.ACTIVE:
            if await period_selectors.get_active_periods(self.db, exclude_id=period.id):
                raise ActivePeriodExists()

        start_date = data.start_date or period.start_date
        end_date = data.end_date or period.end_date
        if ensure_aware(end_date) < ensure_aware(start_date):
            raise ValidationError("end_date must not be before start_date")

        if moved:
            await self._move_history(period, year, month)
        update_model_fields(period, data)
        await commit_or_raise(self.db, conflict=DuplicatePeriod(year, month))
        if moved:
            await self.cache.invalidate(period.id)

        changes = detect_changes(before, model_snapshot(period))
        await self._publish(EventType.PERIOD_UPDATED, period, actor, changes=changes)
        return period

    async def close_period(self, voting_period_id: UUID, actor: Actor, now: datetime | None = None) -> VotingPeriod:
        period = await self.get_period(voting_period_id)
        if period.status == VotingPeriodStatus.CLOSED:
            raise AlreadyClosed()

        before = model_snapshot(period)
        period.status = VotingPeriodStatus.CLOSED
        period.end_date = now or datetime.now(UTC)
        await commit_or_raise(self.db)

        logger.bind(voting_period_id=str(period.id)).info("Voting period closed")
        changes = detect_changes(before, model_snapshot(period))
        await self._publish(EventType.PERIOD_CLOSED, period, actor, changes=changes, payload=self._describe(period))
        return period

    async def close_expired_periods(
        self, now: datetime | None = None, actor: Actor = SYSTEM_ACTOR
    ) -> list[VotingPeriod]:
        """Close every ACTIVE period whose end date has passed."""
        now = now or datetime.now(UTC)
        closed: list[VotingPeriod] = []
        for period in await period_selectors.get_expired_active_periods(self.db, now):
            closed.append(await self.close_period(period.id, actor, now=now))
        if closed:
            logger.info(f"Closed {len(closed)} expired voting period(s)")
        return closed

    async def reset_period(self, voting_period_id: UUID, actor: Actor) -> ResetResult:
        """
        Delete the period's nominations and winners and force it back to ACTIVE.

        Never raises: failures come back as ``success=False`` with a message.
        Yearly flags on the deleted winner rows are lost with them.
        """
        result = ResetResult()
        try:
            period = await self.get_period(voting_period_id)
            before = model_snapshot(period)

            result.nominations_deleted = await count_nominations_by_period(self.db, period.id)
            await self.db.execute(delete(Nomination).where(Nomination.voting_period_id == period.id))

            result.winners_deleted = len(await get_winners_by_period(self.db, period.id))
            await self.db.execute(delete(WinnerHistory).where(WinnerHistory.voting_period_id == period.id))

            period.status = VotingPeriodStatus.ACTIVE
            await commit_or_raise(self.db)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.bind(voting_period_id=str(voting_period_id)).error(
                f"Failed to reset voting period: {e}", exc_info=True
            )
            return ResetResult(message="Failed to reset voting period: the database is unavailable")
        except RecognitionError as e:
            logger.bind(voting_period_id=str(voting_period_id)).error(f"Failed to reset voting period: {e}")
            return ResetResult(message=str(e) or "Unknown error occurred")

        await self.cache.invalidate(period.id)
        result.success = True
        result.message = (
            f"Successfully reset voting period {period.id}. Deleted {result.nominations_deleted} "
            f"nominations and {result.winners_deleted} winners."
        )
        await self._publish(
            EventType.PERIOD_RESET,
            period,
            actor,
            changes=detect_changes(before, model_snapshot(period)),
            payload={
                "year": period.year,
                "month": period.month,
                "nominations_deleted": result.nominations_deleted,
                "winners_deleted": result.winners_deleted,
            },
        )
        return result

    async def delete_period(self, voting_period_id: UUID, actor: Actor) -> DeleteResult:
        """Remove the period with its nominations and winner history. Irreversible."""
        period = await self.get_period(voting_period_id)
        snapshot = model_snapshot(period)

        nominations_deleted = await count_nominations_by_period(self.db, period.id)
        winners_deleted = len(await get_winners_by_period(self.db, period.id))
        await self.db.execute(delete(Nomination).where(Nomination.voting_period_id == period.id))
        await self.db.execute(delete(WinnerHistory).where(WinnerHistory.voting_period_id == period.id))
        await self.db.delete(period)
        await commit_or_raise(self.db)

        await self.cache.invalidate(voting_period_id)
        logger.bind(voting_period_id=str(voting_period_id)).info("Voting period deleted")
        await self.hooks.publish(
            Event(
                type=EventType.PERIOD_DELETED,
                entity_id=str(voting_period_id),
                actor=actor,
                payload={
                    **snapshot,
                    "nominations_deleted": nominations_deleted,
                    "winners_deleted": winners_deleted,
                },
            )
        )
        return DeleteResult(
            success=True,
            nominations_deleted=nominations_deleted,
            winners_deleted=winners_deleted,
            message=f"Deleted voting period {snapshot['year']}-{snapshot['month']:02d}",
        )

    # ---- Helpers ----
    async def _move_history(self, period: VotingPeriod, year: int, month: int) -> None:
        """
        Re-date the period's winner rows to the new (year, month).

        The GENERAL row gets the id derived from the new month. A yearly flag
        only survives when the year is unchanged.
        """
        for winner in await get_winners_by_period(self.db, period.id):
            if year != winner.year:
                winner.is_yearly_winner = False
            winner.year = year
            winner.month = month
            if winner.winner_type == WinnerType.GENERAL:
                winner.id = general_winner_id(year, month)

    @staticmethod
    def _describe(period: VotingPeriod) -> dict:
        return {
            "year": period.year,
            "month": period.month,
            "status": period.status.value,
            "start_date": period.start_date,
            "end_date": period.end_date,
        }

    async def _publish(
        self,
        event_type: EventType,
        period: VotingPeriod,
        actor: Actor,
        changes: Sequence = (),
        payload: dict | None = None,
    ) -> None:
        await self.hooks.publish(
            Event(
                type=event_type,
                entity_id=str(period.id),
                actor=actor,
                changes=tuple(changes),
                payload=payload or {},
            )
        )
