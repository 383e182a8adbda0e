# tests/services/test_eligibility_services.py
# Standard library imports
from datetime import UTC, datetime, timedelta

# Third-party imports
import pytest

# Local application imports
from recognition.models import Employee
from recognition.schemas.configuration.config_schemas import CustomEligibilityRules, EligibilityConfigSchema
from recognition.services.voting.eligibility_services import (
    ineligibility_reason,
    is_voting_eligible,
    years_of_service,
)

NOW = datetime(2025, 3, 15, tzinfo=UTC)


def _employee(**fields) -> Employee:
    defaults = {
        "email": "e@example.com",
        "department": "Engineering",
        "position": "Developer",
        "job_title": "Developer",
        "company_code": "MX01",
        "hire_date": NOW - timedelta(days=400),
        "is_active": True,
    }
    return Employee(**{**defaults, **fields})


@pytest.mark.parametrize(
    ("fields", "config", "reason"),
    [
        ({"is_active": False}, EligibilityConfigSchema(), "inactive"),
        ({"job_title": "Director"}, EligibilityConfigSchema(excluded_job_titles=["Director"]), "excluded job title"),
        ({"department": "HR"}, EligibilityConfigSchema(excluded_departments=["HR"]), "excluded department"),
        ({"position": "Intern"}, EligibilityConfigSchema(excluded_positions=["Intern"]), "excluded position"),
        (
            {"position": "Senior Plant Manager"},
            EligibilityConfigSchema(excluded_position_keywords=["manager"]),
            "excluded position keyword",
        ),
        (
            {"company_code": "US01"},
            EligibilityConfigSchema(custom_rules=CustomEligibilityRules(allowed_company_codes=["MX01"])),
            "company code not allowed",
        ),
        (
            {},
            EligibilityConfigSchema(custom_rules=CustomEligibilityRules(excluded_company_codes=["MX01"])),
            "excluded company code",
        ),
        (
            {"direct_reports_count": 12},
            EligibilityConfigSchema(custom_rules=CustomEligibilityRules(min_direct_reports_for_exclusion=10)),
            "too many direct reports",
        ),
        ({"hire_date": None}, EligibilityConfigSchema(), "no hire date"),
        ({"hire_date": NOW - timedelta(days=100)}, EligibilityConfigSchema(), "insufficient service"),
    ],
)
def test_ineligibility_reasons(fields, config, reason) -> None:
    assert ineligibility_reason(_employee(**fields), config, NOW) == reason


def test_eligible_employee() -> None:
    assert is_voting_eligible(_employee(), EligibilityConfigSchema(), NOW)


def test_inactive_allowed_when_not_required() -> None:
    config = EligibilityConfigSchema(require_active_status=False)

    assert is_voting_eligible(_employee(is_active=False), config, NOW)


def test_rehire_date_restarts_service() -> None:
    employee = _employee(hire_date=NOW - timedelta(days=2000), rehire_date=NOW - timedelta(days=30))

    assert ineligibility_reason(employee, EligibilityConfigSchema(), NOW) == "insufficient service"
    assert years_of_service(employee.hire_date, employee.rehire_date, NOW) == 0


def test_naive_hire_dates_are_treated_as_utc() -> None:
    employee = _employee(hire_date=datetime(2023, 3, 15))

    assert is_voting_eligible(employee, EligibilityConfigSchema(), NOW)
    assert years_of_service(employee.hire_date, None, NOW) == 2


async def test_directory_filters_eligible_employees(make_employee, directory) -> None:
    veteran = await make_employee()
    await make_employee(hire_date=datetime.now(UTC) - timedelta(days=10))
    await make_employee(is_active=False)

    eligible = await directory.find_eligible(EligibilityConfigSchema())

    assert [e.id for e in eligible] == [veteran.id]
