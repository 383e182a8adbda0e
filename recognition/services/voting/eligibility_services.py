# Standard library imports
from datetime import UTC, datetime

# Local application imports
from recognition.models.employees.employee import Employee
from recognition.schemas.configuration.config_schemas import EligibilityConfigSchema
from recognition.utils.date_utils import days_between


def ineligibility_reason(
    employee: Employee, config: EligibilityConfigSchema, now: datetime | None = None
) -> str | None:
    """
    Return why ``employee`` may not take part in voting, or None when eligible.

    Rules are checked in a fixed order and the first failing one is reported.
    """
    if config.require_active_status and not employee.is_active:
        return "inactive"

    if employee.job_title and employee.job_title in config.excluded_job_titles:
        return "excluded job title"

    if employee.department and employee.department in config.excluded_departments:
        return "excluded department"

    if employee.position and employee.position in config.excluded_positions:
        return "excluded position"

    if employee.position:
        position = employee.position.lower()
        for keyword in config.excluded_position_keywords:
            if keyword and keyword.lower() in position:
                return "excluded position keyword"

    rules = config.custom_rules
    if employee.company_code:
        if rules.allowed_company_codes and employee.company_code not in rules.allowed_company_codes:
            return "company code not allowed"
        if rules.excluded_company_codes and employee.company_code in rules.excluded_company_codes:
            return "excluded company code"

    if (
        rules.min_direct_reports_for_exclusion is not None
        and employee.direct_reports_count is not None
        and employee.direct_reports_count >= rules.min_direct_reports_for_exclusion
    ):
        return "too many direct reports"

    service_start = employee.rehire_date or employee.hire_date
    if service_start is None:
        return "no hire date"

    if days_between(service_start, now or datetime.now(UTC)) < config.minimum_days_for_eligibility:
        return "insufficient service"

    return None


def is_voting_eligible(employee: Employee, config: EligibilityConfigSchema, now: datetime | None = None) -> bool:
    return ineligibility_reason(employee, config, now) is None


def years_of_service(hire_date: datetime | None, rehire_date: datetime | None, now: datetime | None = None) -> int:
    """Whole years since the rehire date, or the hire date when never rehired."""
    service_start = rehire_date or hire_date
    if service_start is None:
        return 0
    return days_between(service_start, now or datetime.now(UTC)) // 365
