"""
Vote aggregation.

``aggregate_results`` is a pure function of a period, its nominations and a
directory snapshot. ``ResultsService`` loads those inputs, applies the
per-group winners formula, and memoizes the outcome in the result cache.
"""

# Standard library imports
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from uuid import UUID

# Third-party imports
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.caching.result_cache import ResultCache
from recognition.core.exceptions import VotingPeriodNotFound
from recognition.core.monitoring.logging import get_contextual_logger
from recognition.db_selectors.nominations import get_nominations_by_period
from recognition.db_selectors.voting_periods import get_voting_period_by_id
from recognition.models.employees.employee import Employee
from recognition.models.voting.nomination import Nomination
from recognition.models.voting.voting_period import VotingPeriod
from recognition.schemas.voting.nomination_schemas import CRITERIA_FIELDS, AverageCriteria, Criteria
from recognition.schemas.voting.result_schemas import (
    GroupLabel,
    NominationReason,
    VoteResult,
    VotingPeriodResults,
)
from recognition.schemas.voting.voting_period_schemas import VotingPeriodSummary
from recognition.services.configuration.configuration_services import ConfigurationService
from recognition.services.employees.directory_services import EmployeeDirectory
from recognition.services.voting.voting_group_services import VotingGroupAssigner
from recognition.services.voting.winner_services import select_winners
from recognition.utils.number_utils import percentage, round_half_up

logger = get_contextual_logger(__name__)

UNKNOWN_EMPLOYEE = "Unknown Employee"
UNKNOWN_VALUE = "Unknown"


@dataclass
class _Tally:
    employee_id: UUID
    count: int = 0
    sums: dict[str, int] = field(default_factory=lambda: dict.fromkeys(CRITERIA_FIELDS, 0))
    reasons: list[NominationReason] = field(default_factory=list)

    def add(self, nomination: Nomination) -> None:
        self.count += 1
        for criterion in CRITERIA_FIELDS:
            self.sums[criterion] += int(nomination.criteria[criterion])
        self.reasons.append(
            NominationReason(
                comment=nomination.reason,
                username=nomination.nominator_user_name,
                date=nomination.created_at,
                criteria=Criteria(**{c: nomination.criteria[c] for c in CRITERIA_FIELDS}),
            )
        )

    def averages(self) -> AverageCriteria:
        # Rounded once, after accumulation
        return AverageCriteria(**{c: round_half_up(self.sums[c] / self.count, 1) for c in CRITERIA_FIELDS})


def group_nominations(
    nominations: Sequence[Nomination],
    employees: Mapping[UUID, Employee],
    assigner: VotingGroupAssigner,
) -> dict[GroupLabel, list[Nomination]]:
    """Partition nominations by the nominee's voting group, in first-seen order."""
    groups: dict[GroupLabel, list[Nomination]] = {}
    for nomination in nominations:
        label = assigner.group_label(employees.get(nomination.nominated_employee_id))
        groups.setdefault(label, []).append(nomination)
    return groups


def rank_group(
    voting_period_id: UUID,
    label: GroupLabel,
    nominations: Sequence[Nomination],
    employees: Mapping[UUID, Employee],
) -> list[VoteResult]:
    tallies: dict[UUID, _Tally] = {}
    for nomination in nominations:
        employee_id = nomination.nominated_employee_id
        tallies.setdefault(employee_id, _Tally(employee_id)).add(nomination)

    scored = [(tally, tally.averages()) for tally in tallies.values()]
    # sorted() is stable, so full ties keep first-nominated order
    scored.sort(key=lambda item: (-item[0].count, -item[1].mean()))

    group_total = len(nominations)
    results: list[VoteResult] = []
    for rank, (tally, averages) in enumerate(scored, start=1):
        employee = employees.get(tally.employee_id)
        results.append(
            VoteResult(
                voting_period_id=voting_period_id,
                employee_id=tally.employee_id,
                employee_name=employee.display_name if employee else UNKNOWN_EMPLOYEE,
                department=(employee.department if employee else None) or UNKNOWN_VALUE,
                position=(employee.position if employee else None) or UNKNOWN_VALUE,
                nomination_count=tally.count,
                percentage=percentage(tally.count, group_total),
                rank=rank,
                average_criteria=averages,
                voting_group=label,
                reasons=tally.reasons,
            )
        )
    return results


def aggregate_results(
    period: VotingPeriod,
    nominations: Sequence[Nomination],
    employees: Mapping[UUID, Employee],
    assigner: VotingGroupAssigner,
    total_active_employees: int,
) -> VotingPeriodResults:
    groups = group_nominations(nominations, employees, assigner)

    results: list[VoteResult] = []
    for label, group in groups.items():
        results.extend(rank_group(period.id, label, group, employees))
    results.sort(key=lambda result: (result.voting_group.display, result.rank))

    return VotingPeriodResults(
        voting_period=VotingPeriodSummary.model_validate(period),
        total_nominations=len(nominations),
        average_votes=percentage(len(nominations), total_active_employees),
        results=results,
    )


class ResultsService:
    def __init__(
        self,
        db: AsyncSession,
        directory: EmployeeDirectory,
        configuration: ConfigurationService,
        cache: ResultCache,
    ) -> None:
        self.db = db
        self.directory = directory
        self.configuration = configuration
        self.cache = cache

    async def compute_results(self, voting_period_id: UUID, use_cache: bool = True) -> VotingPeriodResults:
        if use_cache:
            cached = await self.cache.get(voting_period_id)
            if cached is not None:
                return cached

        period = await get_voting_period_by_id(self.db, voting_period_id)
        if period is None:
            raise VotingPeriodNotFound()

        # Refreshes the assigner's lookup tables as a side effect
        await self.configuration.get_voting_group_config()
        eligibility = await self.configuration.get_eligibility_config()

        nominations = await get_nominations_by_period(self.db, voting_period_id)
        employees = await self._load_employees(nominations)
        total_active = await self.directory.count_active()

        results = aggregate_results(period, nominations, employees, self.configuration.assigner, total_active)
        results.winners = select_winners(results.results, eligibility.winners_formula)

        logger.bind(voting_period_id=str(voting_period_id)).debug(
            f"Computed results: {results.total_nominations} nominations, {len(results.group_labels)} groups"
        )
        await self.cache.set(voting_period_id, results)
        return results

    async def invalidate(self, voting_period_id: UUID) -> None:
        await self.cache.invalidate(voting_period_id)

    async def _load_employees(self, nominations: Sequence[Nomination]) -> Mapping[UUID, Employee]:
        employee_ids = [nomination.nominated_employee_id for nomination in nominations]
        try:
            return await self.directory.find_many(employee_ids)
        except SQLAlchemyError as e:
            # Placeholders stand in for every nominee
            logger.error(f"Employee lookup failed during aggregation: {str(e)}", exc_info=True)
            return {}
