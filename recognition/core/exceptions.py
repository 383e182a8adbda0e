"""
Domain error taxonomy.

Every failure raised by the voting core is a ``RecognitionError`` so that
adapters can map it to a transport response without inspecting messages.
The five taxonomy classes carry the HTTP-ish status used by the API layer.
"""

# Standard library imports
from typing import Any


class RecognitionError(Exception):
    code: str = "error"
    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


# ---- Taxonomy ----
class ValidationError(RecognitionError):
    code = "validation_error"
    status_code = 400
    default_message = "Invalid input"


class NotFoundError(RecognitionError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class ConflictError(RecognitionError):
    code = "conflict"
    status_code = 409
    default_message = "Conflicting state"


class DependencyError(RecognitionError):
    code = "dependency_error"
    status_code = 503
    default_message = "A backing service is unavailable"


class InternalError(RecognitionError):
    code = "internal_error"
    status_code = 500


# ---- Nomination validation ----
class EmployeeNotFound(NotFoundError, ValidationError):
    code = "employee_not_found"
    default_message = "Employee not found"


class EmployeeInactive(ValidationError):
    code = "employee_inactive"
    default_message = "Cannot nominate inactive employee"


class EmployeeNotEligible(ValidationError):
    code = "employee_not_eligible"
    default_message = "Employee is not eligible for nomination"


class InvalidNominator(ValidationError):
    code = "invalid_nominator"
    default_message = "Nominator must be an active employee"


class InvalidReason(ValidationError):
    code = "invalid_reason"
    default_message = "Nomination reason must be between 10 and 500 characters"


class InvalidCriteria(ValidationError):
    code = "invalid_criteria"

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} score must be an integer between 1 and 5", details={"field": field})


class DuplicateNomination(ConflictError, ValidationError):
    code = "duplicate_nomination"
    default_message = "You can only make one nomination per voting period"


class SelfNomination(ValidationError):
    code = "self_nomination"
    default_message = "Self-nomination is not allowed"


# ---- Lookups ----
class NominationNotFound(NotFoundError):
    code = "nomination_not_found"
    default_message = "Nomination not found"


class VotingPeriodNotFound(NotFoundError):
    code = "voting_period_not_found"
    default_message = "Voting period not found"


class NoActiveVotingPeriod(NotFoundError):
    code = "no_active_voting_period"
    default_message = "No active voting period found"


class WinnerNotFound(NotFoundError):
    code = "winner_not_found"
    default_message = "Winner not found"


class NoWinnersFound(NotFoundError):
    code = "no_winners_found"
    default_message = "No winners found for this voting period"


# ---- Lifecycle ----
class DuplicatePeriod(ConflictError):
    code = "duplicate_period"

    def __init__(self, year: int, month: int) -> None:
        super().__init__(
            f"A voting period already exists for {year}-{month:02d}",
            details={"year": year, "month": month},
        )


class ActivePeriodExists(ConflictError):
    code = "active_period_exists"
    default_message = "Another voting period is already active"


class AlreadyClosed(ConflictError):
    code = "already_closed"
    default_message = "Voting period is already closed"


# ---- Configuration ----
class InvalidConfiguration(ValidationError):
    code = "invalid_configuration"
    default_message = "Invalid configuration"
