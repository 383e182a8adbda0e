# tests/services/test_aggregation_services.py
# Standard library imports
from unittest.mock import AsyncMock
from uuid import uuid4

# Third-party imports
import pytest
from sqlalchemy.exc import OperationalError

# Local application imports
from recognition.core.exceptions import VotingPeriodNotFound
from recognition.schemas.voting import DEFAULT_GROUP, GroupLabel
from recognition.services.voting.aggregation_services import UNKNOWN_EMPLOYEE, UNKNOWN_VALUE, ResultsService
from tests.factories import ADMIN, scores


async def test_end_to_end_results_for_march(make_period, make_employee, add_nomination, results) -> None:
    period = await make_period(2025, 3)
    alice = await make_employee(full_name="Alice")
    bob = await make_employee(full_name="Bob")
    for _ in range(3):
        await add_nomination(period, alice.id)
    await add_nomination(period, bob.id)

    computed = await results.compute_results(period.id)

    assert computed.voting_period.year == 2025
    assert computed.voting_period.month == 3
    assert computed.total_nominations == 4
    assert [(r.employee_name, r.nomination_count, r.percentage, r.rank) for r in computed.results] == [
        ("Alice", 3, 75.0, 1),
        ("Bob", 1, 25.0, 2),
    ]
    assert [w.employee_name for w in computed.winners] == ["Alice"]
    assert computed.winner.employee_name == "Alice"


async def test_results_of_empty_period(make_period, results) -> None:
    period = await make_period()

    computed = await results.compute_results(period.id)

    assert computed.total_nominations == 0
    assert computed.results == []
    assert computed.winners == []
    assert computed.winner is None


async def test_unknown_period(results) -> None:
    with pytest.raises(VotingPeriodNotFound):
        await results.compute_results(uuid4())


async def test_percentages_and_counts_add_up_per_group(
    make_period, make_employee, add_nomination, results, configuration
) -> None:
    await configuration.update_voting_group_config(
        {"location_group_mappings": [{"group_name": "North", "locations": ["Tijuana", "Mexicali"]}]}, ADMIN
    )
    period = await make_period()
    north = [await make_employee(location="Tijuana"), await make_employee(location="Mexicali")]
    south = [await make_employee(location="Cancun"), await make_employee(location="Cancun")]
    for employee, votes in zip([*north, *south], [2, 1, 1, 2]):
        for _ in range(votes):
            await add_nomination(period, employee.id)

    computed = await results.compute_results(period.id)

    assert computed.group_labels == [GroupLabel.named("Cancun"), GroupLabel.named("North")]
    for label in computed.group_labels:
        group = computed.results_for_group(label)
        assert sum(r.nomination_count for r in group) == 3
        assert sum(r.percentage for r in group) == pytest.approx(100.0, abs=0.02)
        assert [r.rank for r in group] == list(range(1, len(group) + 1))
    assert sum(r.nomination_count for r in computed.results) == computed.total_nominations


async def test_ties_are_broken_by_average_score_then_first_nominated(
    make_period, make_employee, add_nomination, results
) -> None:
    period = await make_period()
    first = await make_employee(full_name="First")
    second = await make_employee(full_name="Second")
    stronger = await make_employee(full_name="Stronger")
    await add_nomination(period, first.id, scores(3))
    await add_nomination(period, second.id, scores(3))
    await add_nomination(period, stronger.id, scores(5))

    computed = await results.compute_results(period.id)

    assert [r.employee_name for r in computed.results] == ["Stronger", "First", "Second"]
    assert [r.rank for r in computed.results] == [1, 2, 3]


async def test_average_criteria_rounded_to_one_decimal(make_period, make_employee, add_nomination, results) -> None:
    period = await make_period()
    employee = await make_employee()
    await add_nomination(period, employee.id, scores(4, innovation=5))
    await add_nomination(period, employee.id, scores(4, innovation=4))
    await add_nomination(period, employee.id, scores(5, innovation=4))

    computed = await results.compute_results(period.id)

    averages = computed.results[0].average_criteria
    assert averages.communication == 4.3
    assert averages.innovation == 4.3
    assert len(computed.results[0].reasons) == 3


async def test_nominee_missing_from_directory_gets_placeholders(make_period, add_nomination, results) -> None:
    period = await make_period()
    await add_nomination(period, uuid4())

    computed = await results.compute_results(period.id)

    result = computed.results[0]
    assert result.employee_name == UNKNOWN_EMPLOYEE
    assert result.department == UNKNOWN_VALUE
    assert result.position == UNKNOWN_VALUE
    assert result.voting_group == DEFAULT_GROUP
    assert result.model_dump(mode="json")["voting_group"] == "default"


async def test_directory_failure_degrades_to_placeholders(
    db, make_period, make_employee, add_nomination, directory, configuration, cache
) -> None:
    period = await make_period()
    employee = await make_employee()
    await add_nomination(period, employee.id)
    directory.find_many = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

    computed = await ResultsService(db, directory, configuration, cache).compute_results(period.id)

    assert computed.results[0].employee_name == UNKNOWN_EMPLOYEE


async def test_average_votes_is_participation_percentage(make_period, make_employee, add_nomination, results) -> None:
    period = await make_period()
    nominee = await make_employee()
    for _ in range(3):
        await make_employee()
    await add_nomination(period, nominee.id)

    computed = await results.compute_results(period.id)

    assert computed.average_votes == 25.0


async def test_recomputation_is_deterministic(make_period, make_employee, add_nomination, results) -> None:
    period = await make_period()
    for votes in (2, 2, 1):
        employee = await make_employee()
        for _ in range(votes):
            await add_nomination(period, employee.id)

    first = await results.compute_results(period.id, use_cache=False)
    second = await results.compute_results(period.id, use_cache=False)

    assert first.model_dump() == second.model_dump()


async def test_winners_formula_applies_per_group(
    make_period, make_employee, add_nomination, results, configuration
) -> None:
    await configuration.update_eligibility_config({"winners_formula": {"divisor": 2, "min_winners": 1}}, ADMIN)
    period = await make_period()
    leaders = [await make_employee(full_name=f"Leader {i}") for i in range(3)]
    for employee, votes in zip(leaders, [2, 1, 1]):
        for _ in range(votes):
            await add_nomination(period, employee.id)

    computed = await results.compute_results(period.id)

    # 4 nominations / 2 = 2 winners in the single group
    assert [w.employee_name for w in computed.winners] == ["Leader 0", "Leader 1"]
