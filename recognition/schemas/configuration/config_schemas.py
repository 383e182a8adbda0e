# Standard library imports
from datetime import datetime
from typing import Literal

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

VotingGroupStrategy = Literal["location", "department", "custom", "mixed"]
FallbackStrategy = Literal["location", "department", "none"]


class WinnersFormula(BaseModel):
    """winners = max(min_winners, round(group_total_nominations / divisor))"""

    divisor: float = Field(..., gt=0)
    min_winners: int = Field(1, ge=0)


class CustomEligibilityRules(BaseModel):
    allowed_company_codes: list[str] | None = None
    excluded_company_codes: list[str] | None = None
    min_direct_reports_for_exclusion: int | None = Field(None, ge=0)


class EligibilityConfigSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    minimum_days_for_eligibility: int = Field(365, ge=0)
    excluded_job_titles: list[str] = []
    excluded_departments: list[str] = []
    excluded_positions: list[str] = []
    excluded_position_keywords: list[str] = []
    require_active_status: bool = True
    winners_formula: WinnersFormula | None = None
    custom_rules: CustomEligibilityRules = CustomEligibilityRules()
    updated_at: datetime | None = None


class DepartmentGroupMapping(BaseModel):
    group_name: str = Field(..., min_length=1)
    departments: list[str] = []


class LocationGroupMapping(BaseModel):
    group_name: str = Field(..., min_length=1)
    locations: list[str] = []


class MixedGroupMapping(BaseModel):
    group_name: str = Field(..., min_length=1)
    departments: list[str] = []
    locations: list[str] = []


class VotingGroupConfigSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    # Stored rows may carry a strategy this build does not know; it resolves to no group
    strategy: str = "location"
    department_group_mappings: list[DepartmentGroupMapping] = []
    location_group_mappings: list[LocationGroupMapping] = []
    mixed_group_mappings: list[MixedGroupMapping] = []
    custom_mappings: dict[str, str] = {}
    fallback_strategy: str = "location"
    updated_at: datetime | None = None


class VotingGroupConfigInput(VotingGroupConfigSchema):
    """Accepted shape for writes: only known strategies."""

    strategy: VotingGroupStrategy = "location"
    fallback_strategy: FallbackStrategy = "location"


DEFAULT_ELIGIBILITY_CONFIG = EligibilityConfigSchema()
DEFAULT_VOTING_GROUP_CONFIG = VotingGroupConfigSchema()
