# Standard library imports
import enum
from typing import Any
import uuid

# Third-party imports
from sqlalchemy import JSON, Boolean, Enum as SQLEnum, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from recognition.models.base import Base
from recognition.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class WinnerType(str, enum.Enum):
    GENERAL = "general"  # single winner of the period, drawn among group winners
    BY_GROUP = "by_group"


class WinnerHistory(UUIDTimeStampMixin, Base):
    __tablename__ = "winner_history"

    voting_period_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("voting_periods.id"), nullable=False, index=True
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    month: Mapped[int] = mapped_column(Integer, nullable=False)

    # Employee snapshot at the time the winners were recorded
    employee_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    employee_name: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)

    nomination_count: Mapped[int] = mapped_column(Integer, nullable=False)
    percentage: Mapped[float] = mapped_column(Float, nullable=False)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    average_criteria: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    voting_group: Mapped[str | None] = mapped_column(String(255), nullable=True)

    winner_type: Mapped[WinnerType] = mapped_column(SQLEnum(WinnerType), nullable=False, index=True)
    is_yearly_winner: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # [{"user_id": ..., "user_name": ..., "emoji": ..., "timestamp": ...}]
    reactions: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
