# Local application imports
from recognition.models.configuration.eligibility_config import ELIGIBILITY_CONFIG_KEY, EligibilityConfig
from recognition.models.configuration.voting_group_config import VOTING_GROUP_CONFIG_KEY, VotingGroupConfig

__all__ = [
    "ELIGIBILITY_CONFIG_KEY",
    "EligibilityConfig",
    "VOTING_GROUP_CONFIG_KEY",
    "VotingGroupConfig",
]
