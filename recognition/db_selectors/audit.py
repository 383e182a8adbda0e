# Standard library imports
from collections.abc import Sequence

# Third-party imports
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.models.audit.audit_log import AuditEntity, AuditLog


async def get_audit_logs_for_entity(db: AsyncSession, entity_type: AuditEntity, entity_id: str) -> Sequence[AuditLog]:
    """Oldest first."""
    result = await db.execute(
        select(AuditLog)
        .where(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
        .order_by(AuditLog.created_at, AuditLog.id)
    )
    return result.scalars().all()
