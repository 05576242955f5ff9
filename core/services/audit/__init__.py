from core.services.audit.helpers import record_audit
from core.services.audit.service import DEFAULT_AUDIT_LIMIT, AuditService

__all__ = ["AuditService", "record_audit", "DEFAULT_AUDIT_LIMIT"]
