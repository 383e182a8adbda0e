# Standard library imports
import enum
from typing import Any

# Third-party imports
from sqlalchemy import JSON, Enum as SQLEnum, String
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from recognition.models.base import Base
from recognition.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class AuditAction(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    CLOSE = "close"
    RESET = "reset"


class AuditEntity(str, enum.Enum):
    VOTING_PERIOD = "voting_period"
    NOMINATION = "nomination"
    WINNER = "winner"
    CONFIGURATION = "configuration"


class AuditLog(UUIDTimeStampMixin, Base):
    __tablename__ = "audit_logs"

    entity_type: Mapped[AuditEntity] = mapped_column(SQLEnum(AuditEntity), nullable=False, index=True)
    entity_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    action: Mapped[AuditAction] = mapped_column(SQLEnum(AuditAction), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    # [{"field": "status", "old_value": "active", "new_value": "closed"}]
    changes: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    # "metadata" is reserved on declarative classes
    context: Mapped[dict[str, Any]] = mapped_column("metadata", JSON, nullable=False, default=dict)
