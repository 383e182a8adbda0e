# tests/services/test_testing_services.py
# Local application imports
from recognition.db_selectors.nominations import count_nominations_by_period, get_nominations_by_period
from recognition.services.voting.testing_services import TEST_REASONS, generate_test_nominations
from tests.factories import ScriptedRandom


async def test_generates_nominations_in_current_period(db, directory, periods, cache, make_period, make_employee):
    period = await make_period()
    for _ in range(4):
        await make_employee()

    rng = ScriptedRandom(0.0, 0.5, 0.1, 0.1, 0.1, 0.1, 0.1, 0.1, 0.1)
    result = await generate_test_nominations(db, directory, periods, cache, 3, rng)

    assert result.success is True
    assert result.created + result.failed == 3
    assert await count_nominations_by_period(db, period.id) == result.created


async def test_repeated_nominators_count_as_failures(db, directory, periods, cache, make_period, make_employee):
    await make_period()
    for _ in range(3):
        await make_employee()

    result = await generate_test_nominations(db, directory, periods, cache, 3, ScriptedRandom(0.0))

    assert (result.created, result.failed) == (1, 2)
    assert len(result.errors) == 2


async def test_generated_nominations_never_self_nominate(db, directory, periods, cache, make_period, make_employee):
    period = await make_period()
    for _ in range(3):
        await make_employee()

    await generate_test_nominations(db, directory, periods, cache, 1, ScriptedRandom(0.5))

    (nomination,) = await get_nominations_by_period(db, period.id)
    assert nomination.nominator_user_id != str(nomination.nominated_employee_id)
    assert nomination.reason in TEST_REASONS


async def test_requires_active_period(db, directory, periods, cache, make_employee):
    await make_employee()
    await make_employee()

    result = await generate_test_nominations(db, directory, periods, cache, 5, ScriptedRandom(0.3))

    assert result.success is False
    assert result.errors == ["No active voting period found"]


async def test_requires_two_employees(db, directory, periods, cache, make_period, make_employee):
    await make_period()
    await make_employee()

    result = await generate_test_nominations(db, directory, periods, cache, 5, ScriptedRandom(0.3))

    assert result.errors == ["Not enough employees to create nominations"]
