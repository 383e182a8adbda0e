# Standard library imports
from typing import Any

# Third-party imports
from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from recognition.models.base import Base
from recognition.models.mixins.uuid_timestamp import UUIDTimeStampMixin

VOTING_GROUP_CONFIG_KEY = "voting-group"


class VotingGroupConfig(UUIDTimeStampMixin, Base):
    """Singleton row, looked up by ``key``."""

    __tablename__ = "voting_group_config"

    key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, default=VOTING_GROUP_CONFIG_KEY)
    strategy: Mapped[str] = mapped_column(String(20), nullable=False, default="location")
    # [{"group_name": "Technical", "departments": ["IT", "QA"]}]
    department_group_mappings: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    # [{"group_name": "North", "locations": ["Tijuana", "Mexicali"]}]
    location_group_mappings: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    # [{"group_name": "Field", "departments": [...], "locations": [...]}]
    mixed_group_mappings: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    # Legacy {"loc1,loc2": "Group A"}
    custom_mappings: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    fallback_strategy: Mapped[str] = mapped_column(String(20), nullable=False, default="location")
