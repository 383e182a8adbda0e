# Standard library imports
from datetime import datetime
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Local application imports
from recognition.models.voting.voting_period import VotingPeriodStatus


class VotingPeriodCreate(BaseModel):
    year: int = Field(..., ge=2000, le=2100)
    month: int = Field(..., ge=1, le=12)
    start_date: datetime
    end_date: datetime
    status: VotingPeriodStatus = VotingPeriodStatus.ACTIVE
    description: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def check_dates(self) -> "VotingPeriodCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class VotingPeriodUpdate(BaseModel):
    year: int | None = Field(None, ge=2000, le=2100)
    month: int | None = Field(None, ge=1, le=12)
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: VotingPeriodStatus | None = None
    description: str | None = Field(None, max_length=1000)


class VotingPeriodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    year: int
    month: int
    start_date: datetime
    end_date: datetime
    status: VotingPeriodStatus
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class VotingPeriodSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    year: int
    month: int
    status: VotingPeriodStatus


class ResetResult(BaseModel):
    """Outcome of a reset; returned instead of raising so callers can branch on it."""

    success: bool = False
    nominations_deleted: int = 0
    winners_deleted: int = 0
    message: str = ""


class DeleteResult(BaseModel):
    success: bool
    nominations_deleted: int
    winners_deleted: int
    message: str
