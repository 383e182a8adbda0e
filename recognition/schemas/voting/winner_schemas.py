# Standard library imports
from datetime import datetime
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

# Local application imports
from recognition.models.voting.winner_history import WinnerType
from recognition.schemas.voting.nomination_schemas import AverageCriteria
from recognition.schemas.voting.result_schemas import VoteResult


class Reaction(BaseModel):
    user_id: str
    user_name: str
    emoji: str
    timestamp: datetime


class ReactionCreate(BaseModel):
    emoji: str = Field(..., min_length=1, max_length=32)


class WinnerHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    voting_period_id: UUID
    year: int
    month: int
    employee_id: UUID
    employee_name: str
    department: str
    position: str
    nomination_count: int
    percentage: float
    rank: int
    average_criteria: AverageCriteria
    voting_group: str | None = None
    winner_type: WinnerType
    is_yearly_winner: bool = False
    reactions: list[Reaction] = []
    created_at: datetime


class WinnerSelection(BaseModel):
    general_winner: VoteResult
    group_winners: list[VoteResult]
