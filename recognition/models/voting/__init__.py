# Local application imports
from recognition.models.voting.nomination import Nomination
from recognition.models.voting.voting_period import VotingPeriod, VotingPeriodStatus
from recognition.models.voting.winner_history import WinnerHistory, WinnerType

__all__ = [
    "Nomination",
    "VotingPeriod",
    "VotingPeriodStatus",
    "WinnerHistory",
    "WinnerType",
]
