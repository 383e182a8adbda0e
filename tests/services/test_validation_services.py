# tests/services/test_validation_services.py
# Standard library imports
from datetime import UTC, datetime, timedelta
from uuid import uuid4

# Third-party imports
import pytest

# Local application imports
from recognition.core.exceptions import (
    DuplicateNomination,
    EmployeeInactive,
    EmployeeNotEligible,
    EmployeeNotFound,
    InvalidCriteria,
    InvalidNominator,
    InvalidReason,
    SelfNomination,
    ValidationError,
)
from recognition.schemas.configuration.config_schemas import EligibilityConfigSchema
from recognition.schemas.voting import NominationCreate
from recognition.services.voting.validation_services import DevelopmentPolicy, NominationValidator
from tests.factories import scores


def _payload(nominee, nominator_email: str, nominator_id: str = "user-1", **fields) -> NominationCreate:
    data = {
        "nominated_employee_id": nominee.id if hasattr(nominee, "id") else nominee,
        "nominator_user_id": nominator_id,
        "nominator_user_name": "Nominator",
        "nominator_email": nominator_email,
        "reason": "Great work on the quarterly release",
        "criteria": scores(),
        **fields,
    }
    return NominationCreate(**data)


async def test_valid_nomination_returns_parsed_criteria(validator, make_employee, make_period) -> None:
    period = await make_period()
    nominee = await make_employee()
    nominator = await make_employee()

    validated = await validator.validate(_payload(nominee, nominator.email), period.id)

    assert validated.nominee.id == nominee.id
    assert validated.criteria.communication == 4
    assert validated.criteria.teamwork == 4


async def test_unknown_nominee_is_rejected(validator, make_period) -> None:
    period = await make_period()

    with pytest.raises(EmployeeNotFound):
        await validator.validate(_payload(uuid4(), "someone@example.com"), period.id)


async def test_inactive_nominee_is_rejected(validator, make_employee, make_period) -> None:
    period = await make_period()
    nominee = await make_employee(is_active=False)
    nominator = await make_employee()

    with pytest.raises(EmployeeInactive) as exc_info:
        await validator.validate(_payload(nominee, nominator.email), period.id)

    assert exc_info.value.message == "Cannot nominate inactive employee"


async def test_unknown_nominator_is_rejected(validator, make_employee, make_period) -> None:
    period = await make_period()
    nominee = await make_employee()

    with pytest.raises(InvalidNominator):
        await validator.validate(_payload(nominee, "stranger@example.com"), period.id)


@pytest.mark.parametrize("email", ["not-an-email", "a@b.c.", "a..b@c.d", "<a>@b.c", "two@@example.com", ""])
async def test_malformed_nominator_email_is_rejected(validator, make_employee, make_period, email) -> None:
    period = await make_period()
    nominee = await make_employee()

    with pytest.raises(InvalidNominator, match="not valid"):
        await validator.validate(_payload(nominee, email), period.id)


async def test_inactive_nominator_is_rejected(validator, make_employee, make_period) -> None:
    period = await make_period()
    nominee = await make_employee()
    nominator = await make_employee(is_active=False)

    with pytest.raises(InvalidNominator):
        await validator.validate(_payload(nominee, nominator.email), period.id)


async def test_nominator_lookup_is_case_insensitive(validator, make_employee, make_period) -> None:
    period = await make_period()
    nominee = await make_employee()
    nominator = await make_employee(email="mixed.case@example.com")

    await validator.validate(_payload(nominee, "  Mixed.Case@Example.com "), period.id)


async def test_development_policy_skips_nominator_existence(db, directory, make_employee, make_period) -> None:
    period = await make_period()
    nominee = await make_employee()
    validator = NominationValidator(db, directory, policy=DevelopmentPolicy(skip_nominator_validation=True))

    validated = await validator.validate(_payload(nominee, "contractor@example.com"), period.id)

    assert validated.criteria.innovation == 4


async def test_development_policy_still_checks_everything_else(db, directory, make_employee, make_period) -> None:
    period = await make_period()
    nominee = await make_employee()
    validator = NominationValidator(db, directory, policy=DevelopmentPolicy(skip_nominator_validation=True))

    with pytest.raises(InvalidReason):
        await validator.validate(_payload(nominee, "contractor@example.com", reason="short"), period.id)


@pytest.mark.parametrize("reason", ["", "   ", "too short", "   nine ch  ", "x" * 501])
async def test_reason_length_is_enforced_after_trimming(validator, make_employee, make_period, reason) -> None:
    period = await make_period()
    nominee = await make_employee()
    nominator = await make_employee()

    with pytest.raises(InvalidReason):
        await validator.validate(_payload(nominee, nominator.email, reason=reason), period.id)


def test_reason_bounds_are_inclusive() -> None:
    assert NominationValidator.validate_reason("  " + "x" * 10 + "  ") == "x" * 10
    assert NominationValidator.validate_reason("y" * 500) == "y" * 500


@pytest.mark.parametrize(
    ("criteria", "field"),
    [
        (None, "criteria"),
        ({k: v for k, v in scores().items() if k != "leadership"}, "leadership"),
        (scores(innovation=0), "innovation"),
        (scores(teamwork=6), "teamwork"),
        (scores(reliability=3.5), "reliability"),
        (scores(communication="4"), "communication"),
        (scores(problem_solving=True), "problem_solving"),
        (scores(leadership=None), "leadership"),
    ],
)
async def test_invalid_criteria_names_the_field(validator, make_employee, make_period, criteria, field) -> None:
    period = await make_period()
    nominee = await make_employee()
    nominator = await make_employee()

    with pytest.raises(InvalidCriteria) as exc_info:
        await validator.validate(_payload(nominee, nominator.email, criteria=criteria), period.id)

    assert exc_info.value.field == field


async def test_second_nomination_in_period_is_duplicate(validator, nominate, make_employee, make_period) -> None:
    period = await make_period()
    first, second = await make_employee(), await make_employee()
    nominator = await make_employee()
    await nominate(first, nominator)

    with pytest.raises(DuplicateNomination) as exc_info:
        await validator.validate(_payload(second, nominator.email, nominator_id=str(nominator.id)), period.id)

    # Reported as both a conflict and a validation failure
    assert isinstance(exc_info.value, ValidationError)


async def test_self_nomination_by_email(validator, make_employee, make_period) -> None:
    period = await make_period()
    employee = await make_employee(email="self@example.com")

    with pytest.raises(SelfNomination):
        await validator.validate(_payload(employee, "SELF@example.com"), period.id)


async def test_self_nomination_by_user_id(validator, make_employee, make_period) -> None:
    period = await make_period()
    employee = await make_employee()
    other = await make_employee()

    with pytest.raises(SelfNomination):
        await validator.validate(_payload(employee, other.email, nominator_id=str(employee.id)), period.id)


async def test_self_nomination_reported_before_field_errors(validator, make_employee, make_period) -> None:
    period = await make_period()
    employee = await make_employee()

    with pytest.raises(SelfNomination):
        await validator.validate(
            _payload(employee, employee.email, reason="bad", criteria=scores(teamwork=9)),
            period.id,
        )


async def test_eligibility_is_enforced_when_configured(db, directory, make_employee, make_period) -> None:
    period = await make_period()
    newcomer = await make_employee(hire_date=datetime.now(UTC) - timedelta(days=30))
    nominator = await make_employee()
    validator = NominationValidator(db, directory, eligibility=EligibilityConfigSchema(minimum_days_for_eligibility=90))

    with pytest.raises(EmployeeNotEligible) as exc_info:
        await validator.validate(_payload(newcomer, nominator.email), period.id)

    assert exc_info.value.details == {"reason": "insufficient service"}
