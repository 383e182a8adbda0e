# Local application imports
from recognition.schemas.voting.nomination_schemas import (
    CRITERIA_FIELDS,
    AverageCriteria,
    Criteria,
    NominationBody,
    NominationCreate,
    NominationResponse,
    NominationUpdate,
    NominationWithEmployee,
    NomineeSnapshot,
)
from recognition.schemas.voting.result_schemas import (
    DEFAULT_GROUP,
    GroupLabel,
    GroupWinner,
    NominationReason,
    ProvisionalWinners,
    VoteResult,
    VotingPeriodResults,
)
from recognition.schemas.voting.voting_period_schemas import (
    DeleteResult,
    ResetResult,
    VotingPeriodCreate,
    VotingPeriodResponse,
    VotingPeriodSummary,
    VotingPeriodUpdate,
)
from recognition.schemas.voting.winner_schemas import (
    Reaction,
    ReactionCreate,
    WinnerHistoryResponse,
    WinnerSelection,
)

__all__ = [
    "CRITERIA_FIELDS",
    "AverageCriteria",
    "Criteria",
    "DEFAULT_GROUP",
    "DeleteResult",
    "GroupLabel",
    "GroupWinner",
    "NominationBody",
    "NominationCreate",
    "NominationReason",
    "NominationResponse",
    "NominationUpdate",
    "NominationWithEmployee",
    "NomineeSnapshot",
    "ProvisionalWinners",
    "Reaction",
    "ReactionCreate",
    "ResetResult",
    "VoteResult",
    "VotingPeriodCreate",
    "VotingPeriodResponse",
    "VotingPeriodResults",
    "VotingPeriodSummary",
    "VotingPeriodUpdate",
    "WinnerHistoryResponse",
    "WinnerSelection",
]
