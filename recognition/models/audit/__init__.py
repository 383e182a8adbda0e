# Local application imports
from recognition.models.audit.audit_log import AuditAction, AuditEntity, AuditLog

__all__ = ["AuditAction", "AuditEntity", "AuditLog"]
