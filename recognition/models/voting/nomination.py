# Standard library imports
from typing import Any
import uuid

# Third-party imports
from sqlalchemy import JSON, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from recognition.models.base import Base
from recognition.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class Nomination(UUIDTimeStampMixin, Base):
    __tablename__ = "nominations"
    __table_args__ = (UniqueConstraint("nominator_user_id", "voting_period_id", name="unique_nominator_period"),)

    nominated_employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False, index=True
    )
    nominator_user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    nominator_user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    nominator_email: Mapped[str] = mapped_column(String(320), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    # {"communication": 4, "innovation": 5, ...}
    criteria: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    voting_period_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("voting_periods.id"), nullable=False, index=True
    )
