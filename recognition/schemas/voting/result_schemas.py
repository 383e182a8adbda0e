# Standard library imports
from datetime import datetime
from typing import Any
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, computed_field, field_serializer, field_validator

# Local application imports
from recognition.schemas.voting.nomination_schemas import AverageCriteria, Criteria
from recognition.schemas.voting.voting_period_schemas import VotingPeriodSummary

DEFAULT_GROUP_NAME = "default"


class GroupLabel(BaseModel):
    """
    A named voting group, or the default bucket when ``name`` is None.

    The default bucket is only spelled ``"default"`` when rendered.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None

    @classmethod
    def named(cls, name: str) -> "GroupLabel":
        return cls(name=name)

    @classmethod
    def parse(cls, value: Any) -> "GroupLabel":
        if isinstance(value, GroupLabel):
            return value
        if value is None or value == DEFAULT_GROUP_NAME:
            return DEFAULT_GROUP
        if isinstance(value, dict):
            return cls(**value)
        return cls(name=str(value))

    @property
    def is_default(self) -> bool:
        return self.name is None

    @property
    def display(self) -> str:
        return DEFAULT_GROUP_NAME if self.name is None else self.name

    def __str__(self) -> str:
        return self.display


DEFAULT_GROUP = GroupLabel()


class NominationReason(BaseModel):
    comment: str
    username: str
    date: datetime
    criteria: Criteria


class VoteResult(BaseModel):
    voting_period_id: UUID
    employee_id: UUID
    employee_name: str
    department: str
    position: str
    nomination_count: int
    percentage: float
    rank: int
    average_criteria: AverageCriteria
    voting_group: GroupLabel = DEFAULT_GROUP
    reasons: list[NominationReason] = []

    @field_validator("voting_group", mode="before")
    @classmethod
    def parse_voting_group(cls, value: Any) -> GroupLabel:
        return GroupLabel.parse(value)

    @field_serializer("voting_group")
    def serialize_voting_group(self, value: GroupLabel) -> str:
        return value.display


class VotingPeriodResults(BaseModel):
    voting_period: VotingPeriodSummary
    total_nominations: int
    average_votes: float
    results: list[VoteResult]
    winners: list[VoteResult] = []

    @computed_field  # type: ignore[prop-decorator, misc]
    @property
    def winner(self) -> VoteResult | None:
        """First winner, kept for clients that expect a single one."""
        return self.winners[0] if self.winners else None

    def results_for_group(self, label: GroupLabel) -> list[VoteResult]:
        return [result for result in self.results if result.voting_group == label]

    @property
    def group_labels(self) -> list[GroupLabel]:
        labels: list[GroupLabel] = []
        for result in self.results:
            if result.voting_group not in labels:
                labels.append(result.voting_group)
        return labels


class GroupWinner(BaseModel):
    voting_group: str
    winner: VoteResult


class ProvisionalWinners(BaseModel):
    voting_period_id: UUID
    year: int
    month: int
    winners_by_group: list[GroupWinner]
