# Local application imports
from recognition.schemas.audit.audit_schemas import SYSTEM_ACTOR, Actor, AuditChange, AuditLogResponse

__all__ = ["SYSTEM_ACTOR", "Actor", "AuditChange", "AuditLogResponse"]
