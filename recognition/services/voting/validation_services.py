"""
Submission-time checks for nominations.

``NominationValidator.validate`` runs every check in a fixed order and
raises the first failure. It only reads from the directory and the
nominations table.
"""

# Standard library imports
from dataclasses import dataclass
from typing import Any
from uuid import UUID

# Third-party imports
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

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
)
from recognition.db_selectors.nominations import get_nomination_by_nominator
from recognition.models.employees.employee import Employee
from recognition.schemas.configuration.config_schemas import EligibilityConfigSchema
from recognition.schemas.voting.nomination_schemas import (
    CRITERIA_FIELDS,
    CRITERIA_MAX_SCORE,
    CRITERIA_MIN_SCORE,
    Criteria,
    NominationCreate,
)
from recognition.services.employees.directory_services import EmployeeDirectory
from recognition.services.voting.eligibility_services import ineligibility_reason

EMAIL_ADAPTER = TypeAdapter(EmailStr)
REASON_MIN_LENGTH = 10
REASON_MAX_LENGTH = 500


@dataclass(frozen=True)
class ValidatedNomination:
    nominee: Employee
    criteria: Criteria


@dataclass(frozen=True)
class DevelopmentPolicy:
    """Development-only relaxations. Only nominator existence can be skipped."""

    skip_nominator_validation: bool = False


class NominationValidator:
    def __init__(
        self,
        db: AsyncSession,
        directory: EmployeeDirectory,
        policy: DevelopmentPolicy = DevelopmentPolicy(),
        eligibility: EligibilityConfigSchema | None = None,
    ) -> None:
        self.db = db
        self.directory = directory
        self.policy = policy
        # Nominee eligibility is only enforced when a config is given
        self.eligibility = eligibility

    async def validate(self, nomination: NominationCreate, voting_period_id: UUID) -> ValidatedNomination:
        """Run all checks; returns the loaded nominee and the parsed criteria."""
        nominee = await self.validate_nominee(nomination.nominated_employee_id)
        # Self-nomination wins over any field-level failure
        self.check_self_nomination(nominee, nomination.nominator_user_id, nomination.nominator_email)
        await self.validate_nominator(nomination.nominator_email)
        self.validate_reason(nomination.reason)
        criteria = self.validate_criteria(nomination.criteria)
        await self.check_duplicate(nomination.nominator_user_id, voting_period_id)
        return ValidatedNomination(nominee=nominee, criteria=criteria)

    async def validate_nominee(self, employee_id: UUID) -> Employee:
        employee = await self.directory.find_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFound()
        if not employee.is_active:
            raise EmployeeInactive()
        if self.eligibility is not None:
            reason = ineligibility_reason(employee, self.eligibility)
            if reason is not None:
                raise EmployeeNotEligible(details={"reason": reason})
        return employee

    async def validate_nominator(self, email: str) -> Employee | None:
        try:
            EMAIL_ADAPTER.validate_python((email or "").strip())
        except PydanticValidationError:
            raise InvalidNominator("Nominator email is not valid") from None
        if self.policy.skip_nominator_validation:
            return None

        nominator = await self.directory.find_by_email(email)
        if nominator is None or not nominator.is_active:
            raise InvalidNominator()
        return nominator

    @staticmethod
    def validate_reason(reason: str | None) -> str:
        trimmed = (reason or "").strip()
        if not REASON_MIN_LENGTH <= len(trimmed) <= REASON_MAX_LENGTH:
            raise InvalidReason()
        return trimmed

    @staticmethod
    def validate_criteria(criteria: dict[str, Any] | None) -> Criteria:
        if criteria is None:
            raise InvalidCriteria("criteria", "Criteria scores are required")

        scores: dict[str, int] = {}
        for field in CRITERIA_FIELDS:
            if field not in criteria or criteria[field] is None:
                raise InvalidCriteria(field, f"{field} score is required")
            value = criteria[field]
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCriteria(field)
            if not CRITERIA_MIN_SCORE <= value <= CRITERIA_MAX_SCORE:
                raise InvalidCriteria(field)
            scores[field] = value
        return Criteria(**scores)

    async def check_duplicate(self, nominator_user_id: str, voting_period_id: UUID) -> None:
        existing = await get_nomination_by_nominator(self.db, nominator_user_id, voting_period_id)
        if existing is not None:
            raise DuplicateNomination()

    @staticmethod
    def check_self_nomination(
        nominee: Employee,
        nominator_user_id: str,
        nominator_email: str,
    ) -> None:
        same_email = nominee.email.strip().lower() == (nominator_email or "").strip().lower()
        if same_email or str(nominee.id) == nominator_user_id:
            raise SelfNomination()
