# Standard library imports
from collections.abc import Sequence
from uuid import UUID

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.caching.result_cache import ResultCache
from recognition.core.db.transactions import commit_or_raise
from recognition.core.exceptions import DuplicateNomination, NoActiveVotingPeriod, NominationNotFound
from recognition.core.monitoring.logging import get_contextual_logger
from recognition.db_selectors import nominations as nomination_selectors
from recognition.models.employees.employee import Employee
from recognition.models.voting.nomination import Nomination
from recognition.models.voting.voting_period import VotingPeriod, VotingPeriodStatus
from recognition.schemas.audit.audit_schemas import Actor
from recognition.schemas.common.response_schemas import PaginationMeta
from recognition.schemas.voting.nomination_schemas import (
    NominationCreate,
    NominationUpdate,
    NominationWithEmployee,
    NomineeSnapshot,
)
from recognition.services.employees.directory_services import EmployeeDirectory
from recognition.services.events import Event, EventType, PostCommitHooks
from recognition.services.voting.aggregation_services import UNKNOWN_EMPLOYEE, UNKNOWN_VALUE
from recognition.services.voting.period_services import VotingPeriodService
from recognition.services.voting.validation_services import NominationValidator

logger = get_contextual_logger(__name__)


def nominee_snapshot(employee: Employee | None) -> NomineeSnapshot:
    if employee is None:
        return NomineeSnapshot(full_name=UNKNOWN_EMPLOYEE, department=UNKNOWN_VALUE, position=UNKNOWN_VALUE)
    return NomineeSnapshot(
        full_name=employee.display_name,
        department=employee.department or UNKNOWN_VALUE,
        position=employee.position or UNKNOWN_VALUE,
    )


class NominationService:
    """
    Nomination writes and reads.

    Every write requires the period to be ACTIVE and invalidates that
    period's cached results after committing.
    """

    def __init__(
        self,
        db: AsyncSession,
        directory: EmployeeDirectory,
        validator: NominationValidator,
        periods: VotingPeriodService,
        cache: ResultCache,
        hooks: PostCommitHooks,
    ) -> None:
        self.db = db
        self.directory = directory
        self.validator = validator
        self.periods = periods
        self.cache = cache
        self.hooks = hooks

    async def _require_active_period(self) -> VotingPeriod:
        period = await self.periods.get_current_period()
        if period is None:
            raise NoActiveVotingPeriod()
        return period

    async def get_nomination(self, nomination_id: UUID) -> Nomination:
        nomination = await nomination_selectors.get_nomination_by_id(self.db, nomination_id)
        if nomination is None:
            raise NominationNotFound()
        return nomination

    async def create_nomination(self, data: NominationCreate) -> Nomination:
        period = await self._require_active_period()
        validated = await self.validator.validate(data, period.id)

        nomination = Nomination(
            nominated_employee_id=data.nominated_employee_id,
            nominator_user_id=data.nominator_user_id,
            nominator_user_name=data.nominator_user_name,
            nominator_email=data.nominator_email.strip(),
            reason=data.reason.strip(),
            criteria=validated.criteria.model_dump(),
            voting_period_id=period.id,
        )
        self.db.add(nomination)
        await commit_or_raise(self.db, conflict=DuplicateNomination())
        await self.cache.invalidate(period.id)

        nominee = nominee_snapshot(validated.nominee)
        logger.bind(voting_period_id=str(period.id), nomination_id=str(nomination.id)).info("Nomination created")
        await self.hooks.publish(
            Event(
                type=EventType.NOMINATION_CREATED,
                entity_id=str(nomination.id),
                actor=Actor(
                    user_id=data.nominator_user_id,
                    user_name=data.nominator_user_name,
                    user_email=data.nominator_email,
                ),
                payload={
                    "year": period.year,
                    "month": period.month,
                    "voting_period_id": str(period.id),
                    "nominated_employee_id": str(data.nominated_employee_id),
                    "nominee_name": nominee.full_name,
                    "nominee_department": nominee.department,
                    "nominator_email": nomination.nominator_email,
                    "reason": nomination.reason,
                },
            )
        )
        return nomination

    async def update_nomination(self, nomination_id: UUID, data: NominationUpdate) -> Nomination:
        """Re-validate only what changed."""
        nomination = await self.get_nomination(nomination_id)
        period = await self.periods.get_period(nomination.voting_period_id)
        if period.status != VotingPeriodStatus.ACTIVE:
            raise NoActiveVotingPeriod("Nominations can only be changed while their voting period is active")

        if data.nominated_employee_id is not None and data.nominated_employee_id != nomination.nominated_employee_id:
            nominee = await self.validator.validate_nominee(data.nominated_employee_id)
            self.validator.check_self_nomination(nominee, nomination.nominator_user_id, nomination.nominator_email)
            nomination.nominated_employee_id = data.nominated_employee_id

        if data.reason is not None:
            nomination.reason = self.validator.validate_reason(data.reason)

        if data.criteria is not None:
            # JSON columns only detect reassignment
            nomination.criteria = self.validator.validate_criteria(data.criteria).model_dump()

        await commit_or_raise(self.db)
        await self.cache.invalidate(period.id)
        return nomination

    async def delete_nomination(self, nomination_id: UUID) -> None:
        nomination = await self.get_nomination(nomination_id)
        voting_period_id = nomination.voting_period_id
        await self.db.delete(nomination)
        await commit_or_raise(self.db)
        await self.cache.invalidate(voting_period_id)
        logger.bind(nomination_id=str(nomination_id)).info("Nomination deleted")

    async def get_my_nomination(self, nominator_user_id: str) -> Nomination | None:
        """The caller's nomination in the current period, if any."""
        period = await self.periods.get_current_period()
        if period is None:
            return None
        return await nomination_selectors.get_nomination_by_nominator(self.db, nominator_user_id, period.id)

    async def list_current_nominations(
        self, limit: int, offset: int
    ) -> tuple[list[NominationWithEmployee], PaginationMeta]:
        period = await self._require_active_period()
        nominations, total = await nomination_selectors.get_paginated_nominations_by_period(
            self.db, period.id, limit, offset
        )
        return await self._with_employees(nominations), PaginationMeta(limit=limit, offset=offset, total_items=total)

    async def get_employee_nominations(
        self, employee_id: UUID, voting_period_id: UUID | None = None
    ) -> list[NominationWithEmployee]:
        """Nominations received by ``employee_id`` in one period, or across recent periods."""
        if voting_period_id is not None:
            period_ids = [voting_period_id]
        else:
            period_ids = [period.id for period in await self.periods.get_recent_periods()]
        nominations = await nomination_selectors.get_nominations_for_employee(self.db, employee_id, period_ids)
        return await self._with_employees(nominations)

    async def _with_employees(self, nominations: Sequence[Nomination]) -> list[NominationWithEmployee]:
        employees = await self.directory.find_many([n.nominated_employee_id for n in nominations])
        enriched: list[NominationWithEmployee] = []
        for nomination in nominations:
            enriched.append(
                NominationWithEmployee.model_validate(
                    {
                        **{
                            field: getattr(nomination, field)
                            for field in NominationWithEmployee.model_fields
                            if field != "nominated_employee"
                        },
                        "nominated_employee": nominee_snapshot(employees.get(nomination.nominated_employee_id)),
                    }
                )
            )
        return enriched
