# Standard library imports
from datetime import datetime
from typing import Any
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict

# Local application imports
from recognition.models.audit.audit_log import AuditAction, AuditEntity


class Actor(BaseModel):
    """The user on whose behalf a mutation runs."""

    user_id: str
    user_name: str
    user_email: str | None = None


SYSTEM_ACTOR = Actor(user_id="system", user_name="System")


class AuditChange(BaseModel):
    field: str
    old_value: Any = None
    new_value: Any = None


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    entity_type: AuditEntity
    entity_id: str
    action: AuditAction
    user_id: str
    user_name: str
    user_email: str | None = None
    changes: list[AuditChange] = []
    context: dict[str, Any] = {}
    created_at: datetime
