# Standard library imports
import math

# Third-party imports
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.caching.result_cache import ResultCache
from recognition.core.db.transactions import commit_or_raise
from recognition.core.exceptions import RecognitionError
from recognition.core.monitoring.logging import get_logger
from recognition.db_selectors.nominations import get_nominations_by_period
from recognition.models.voting.nomination import Nomination
from recognition.schemas.voting.nomination_schemas import CRITERIA_FIELDS, CRITERIA_MAX_SCORE, CRITERIA_MIN_SCORE
from recognition.services.employees.directory_services import EmployeeDirectory
from recognition.services.voting.period_services import VotingPeriodService
from recognition.services.voting.winner_services import RandomSource

logger = get_logger(__name__)

TEST_REASONS: tuple[str, ...] = (
    "Outstanding performance and dedication to the team",
    "Excellent problem-solving skills and innovation",
    "Great leadership and mentoring abilities",
    "Exceptional teamwork and collaboration",
    "Consistent reliability and quality work",
    "Strong communication and interpersonal skills",
    "Goes above and beyond to help colleagues",
    "Demonstrates exceptional technical expertise",
    "Shows great initiative and proactive attitude",
    "Maintains positive attitude and motivates others",
)


class GenerationResult(BaseModel):
    success: bool = False
    created: int = 0
    failed: int = 0
    errors: list[str] = []


def _index(size: int, rng: RandomSource) -> int:
    return min(int(math.floor(rng() * size)), size - 1)


async def generate_test_nominations(
    db: AsyncSession,
    directory: EmployeeDirectory,
    periods: VotingPeriodService,
    cache: ResultCache,
    count: int,
    rng: RandomSource,
) -> GenerationResult:
    """
    Create ``count`` random nominations in the current period. Development only.

    Nominations skip validation. A nominator who already nominated in the
    period counts as a failure, so ``created + failed == count``.
    """
    result = GenerationResult()

    period = await periods.get_current_period()
    if period is None:
        result.errors.append("No active voting period found")
        return result

    employees = list(await directory.find_all_active())
    if len(employees) < 2:
        result.errors.append("Not enough employees to create nominations")
        return result

    used_nominators = {n.nominator_user_id for n in await get_nominations_by_period(db, period.id)}
    for i in range(count):
        nominator_index = _index(len(employees), rng)
        nominee_index = _index(len(employees), rng)
        if nominee_index == nominator_index:
            nominee_index = (nominee_index + 1) % len(employees)
        nominator, nominee = employees[nominator_index], employees[nominee_index]

        if str(nominator.id) in used_nominators:
            result.failed += 1
            result.errors.append(f"Nomination {i + 1}: {nominator.email} already nominated in this period")
            continue

        used_nominators.add(str(nominator.id))
        db.add(
            Nomination(
                nominated_employee_id=nominee.id,
                nominator_user_id=str(nominator.id),
                nominator_user_name=nominator.display_name or f"test-user-{i}",
                nominator_email=nominator.email,
                reason=TEST_REASONS[_index(len(TEST_REASONS), rng)],
                criteria={
                    field: CRITERIA_MIN_SCORE + _index(CRITERIA_MAX_SCORE - CRITERIA_MIN_SCORE + 1, rng)
                    for field in CRITERIA_FIELDS
                },
                voting_period_id=period.id,
            )
        )
        result.created += 1

    try:
        await commit_or_raise(db)
    except RecognitionError as e:
        result.errors.append(e.message)
        result.failed += result.created
        result.created = 0
        return result

    await cache.invalidate(period.id)
    result.success = result.created > 0
    logger.info(f"Generated {result.created} test nominations ({result.failed} failed)")
    return result
