# Standard library imports
from typing import Any

# Third-party imports
from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from recognition.models.base import Base
from recognition.models.mixins.uuid_timestamp import UUIDTimeStampMixin

ELIGIBILITY_CONFIG_KEY = "eligibility"


class EligibilityConfig(UUIDTimeStampMixin, Base):
    """Singleton row, looked up by ``key``."""

    __tablename__ = "eligibility_config"

    key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, default=ELIGIBILITY_CONFIG_KEY)
    minimum_days_for_eligibility: Mapped[int] = mapped_column(Integer, nullable=False, default=365)
    excluded_job_titles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    excluded_departments: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    excluded_positions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    excluded_position_keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    require_active_status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # {"divisor": 25, "min_winners": 1}
    winners_formula: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    custom_rules: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
