# Local application imports
from recognition.schemas.configuration.config_schemas import (
    DEFAULT_ELIGIBILITY_CONFIG,
    DEFAULT_VOTING_GROUP_CONFIG,
    CustomEligibilityRules,
    DepartmentGroupMapping,
    EligibilityConfigSchema,
    LocationGroupMapping,
    MixedGroupMapping,
    VotingGroupConfigInput,
    VotingGroupConfigSchema,
    WinnersFormula,
)

__all__ = [
    "DEFAULT_ELIGIBILITY_CONFIG",
    "DEFAULT_VOTING_GROUP_CONFIG",
    "CustomEligibilityRules",
    "DepartmentGroupMapping",
    "EligibilityConfigSchema",
    "LocationGroupMapping",
    "MixedGroupMapping",
    "VotingGroupConfigInput",
    "VotingGroupConfigSchema",
    "WinnersFormula",
]
