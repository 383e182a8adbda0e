# Standard library imports
from datetime import datetime
from typing import Any
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

CRITERIA_FIELDS: tuple[str, ...] = (
    "communication",
    "innovation",
    "leadership",
    "problem_solving",
    "reliability",
    "teamwork",
)

CRITERIA_MIN_SCORE = 1
CRITERIA_MAX_SCORE = 5


class Criteria(BaseModel):
    """Six integer scores, each in [1, 5]. There are no defaults."""

    model_config = ConfigDict(frozen=True)

    communication: int = Field(..., ge=CRITERIA_MIN_SCORE, le=CRITERIA_MAX_SCORE)
    innovation: int = Field(..., ge=CRITERIA_MIN_SCORE, le=CRITERIA_MAX_SCORE)
    leadership: int = Field(..., ge=CRITERIA_MIN_SCORE, le=CRITERIA_MAX_SCORE)
    problem_solving: int = Field(..., ge=CRITERIA_MIN_SCORE, le=CRITERIA_MAX_SCORE)
    reliability: int = Field(..., ge=CRITERIA_MIN_SCORE, le=CRITERIA_MAX_SCORE)
    teamwork: int = Field(..., ge=CRITERIA_MIN_SCORE, le=CRITERIA_MAX_SCORE)


class AverageCriteria(BaseModel):
    communication: float
    innovation: float
    leadership: float
    problem_solving: float
    reliability: float
    teamwork: float

    def mean(self) -> float:
        return sum(getattr(self, field) for field in CRITERIA_FIELDS) / len(CRITERIA_FIELDS)


class NominationCreate(BaseModel):
    nominated_employee_id: UUID
    nominator_user_id: str = Field(..., min_length=1)
    nominator_user_name: str = Field(..., min_length=1)
    nominator_email: str
    reason: str
    # Left loose on purpose: NominationValidator reports the offending field
    criteria: dict[str, Any] | None = None


class NominationUpdate(BaseModel):
    nominated_employee_id: UUID | None = None
    reason: str | None = None
    criteria: dict[str, Any] | None = None


class NominationBody(BaseModel):
    """Request body for the HTTP adapter; the nominator comes from the acting user."""

    nominated_employee_id: UUID
    reason: str
    criteria: dict[str, Any] | None = None


class NomineeSnapshot(BaseModel):
    full_name: str
    department: str
    position: str


class NominationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    nominated_employee_id: UUID
    nominator_user_id: str
    nominator_user_name: str
    nominator_email: str
    reason: str
    criteria: Criteria
    voting_period_id: UUID
    created_at: datetime
    updated_at: datetime | None = None


class NominationWithEmployee(NominationResponse):
    nominated_employee: NomineeSnapshot
