# Standard library imports
from collections.abc import Callable, Sequence
import math
import uuid

# Local application imports
from recognition.core.exceptions import NoWinnersFound
from recognition.schemas.configuration.config_schemas import WinnersFormula
from recognition.schemas.voting.result_schemas import GroupLabel, VoteResult

RandomSource = Callable[[], float]

GENERAL_WINNER_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "recognition/winner-history/general")


def winners_count(group_total: int, formula: WinnersFormula | None) -> int:
    """max(min_winners, round(group_total / divisor)); exactly 1 when unconfigured."""
    if formula is None:
        return 1
    # floor(x + 0.5) is round-half-up for the non-negative ratios seen here
    return max(formula.min_winners, math.floor(group_total / formula.divisor + 0.5))


def select_winners(results: Sequence[VoteResult], formula: WinnersFormula | None) -> list[VoteResult]:
    """
    Top-N of each group, N from the winners formula.

    ``results`` must already be ranked within each group.
    """
    by_group: dict[GroupLabel, list[VoteResult]] = {}
    for result in results:
        by_group.setdefault(result.voting_group, []).append(result)

    winners: list[VoteResult] = []
    for group_results in by_group.values():
        ranked = sorted(group_results, key=lambda result: result.rank)
        group_total = sum(result.nomination_count for result in ranked)
        winners.extend(ranked[: winners_count(group_total, formula)])
    return winners


def draw_general_winner(group_winners: Sequence[VoteResult], rng: RandomSource) -> VoteResult:
    """Uniform pick among all group winners using ``rng`` in [0, 1)."""
    if not group_winners:
        raise NoWinnersFound()
    index = min(int(math.floor(rng() * len(group_winners))), len(group_winners) - 1)
    return group_winners[index]


def general_winner_id(year: int, month: int) -> uuid.UUID:
    """Stable id of a period's GENERAL history row, so recomputation overwrites it."""
    return uuid.uuid5(GENERAL_WINNER_NAMESPACE, f"{year}-{month:02d}")
