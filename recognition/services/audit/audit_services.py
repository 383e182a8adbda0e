# Standard library imports
from collections.abc import Iterable, Mapping, Sequence
import json
from typing import Any, Protocol

# Third-party imports
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Local application imports
from recognition.core.exceptions import DependencyError
from recognition.core.monitoring.logging import get_contextual_logger
from recognition.db_selectors.audit import get_audit_logs_for_entity
from recognition.models.audit.audit_log import AuditAction, AuditEntity, AuditLog
from recognition.schemas.audit.audit_schemas import Actor, AuditChange
from recognition.utils.model_utils import IGNORED_FIELDS, to_plain

logger = get_contextual_logger(__name__)


class AuditSink(Protocol):
    async def record(
        self,
        entity_type: AuditEntity,
        entity_id: str,
        action: AuditAction,
        actor: Actor,
        changes: Sequence[AuditChange] = (),
        metadata: Mapping[str, Any] | None = None,
    ) -> None: ...


def _sanitize(value: Any) -> Any:
    value = to_plain(value)
    if isinstance(value, dict | list):
        return json.dumps(value, sort_keys=True, default=str)
    return value


def detect_changes(
    before: Mapping[str, Any] | None,
    after: Mapping[str, Any] | None,
    fields: Iterable[str] | None = None,
) -> list[AuditChange]:
    """
    Field-level differences between two snapshots.

    Returns nothing when either side is missing; ``id``, ``created_at`` and
    ``updated_at`` are never reported. Structured values are compared and
    reported as JSON text.
    """
    if not before or not after:
        return []

    changes: list[AuditChange] = []
    for field in fields or after.keys():
        if field in IGNORED_FIELDS:
            continue
        old_value = _sanitize(before.get(field))
        new_value = _sanitize(after.get(field))
        if old_value != new_value:
            changes.append(AuditChange(field=field, old_value=old_value, new_value=new_value))
    return changes


class DatabaseAuditSink:
    """Writes audit rows in a session of its own so a failure cannot touch the caller's."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def record(
        self,
        entity_type: AuditEntity,
        entity_id: str,
        action: AuditAction,
        actor: Actor,
        changes: Sequence[AuditChange] = (),
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        entry = AuditLog(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            user_id=actor.user_id,
            user_name=actor.user_name,
            user_email=actor.user_email,
            changes=[change.model_dump(mode="json") for change in changes],
            context=to_plain(dict(metadata or {})),
        )
        async with self.session_factory() as db:
            try:
                db.add(entry)
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise DependencyError("Failed to write audit log") from e

        logger.bind(entity_type=entity_type.value, entity_id=entity_id, action=action.value).debug("Audit recorded")


async def get_entity_audit_logs(db: AsyncSession, entity_type: AuditEntity, entity_id: str) -> Sequence[AuditLog]:
    return await get_audit_logs_for_entity(db, entity_type, entity_id)
