# Standard library imports
from datetime import datetime
import enum

# Third-party imports
from sqlalchemy import DateTime, Enum as SQLEnum, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from recognition.models.base import Base
from recognition.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class VotingPeriodStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    CLOSED = "closed"


class VotingPeriod(UUIDTimeStampMixin, Base):
    __tablename__ = "voting_periods"
    # Backstop for the query-before-write duplicate check
    __table_args__ = (UniqueConstraint("year", "month", name="unique_voting_period_year_month"),)

    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[VotingPeriodStatus] = mapped_column(
        SQLEnum(VotingPeriodStatus), default=VotingPeriodStatus.ACTIVE, nullable=False, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __str__(self) -> str:
        return f"VotingPeriod: {self.year}-{self.month:02d} ({self.status.value})"
