from __future__ import annotations

from core.models import AuditLogEntry
from infra.db.codec import as_utc, dict_from_json, to_json
from infra.db.models import AuditLogORM


def audit_to_orm(entry: AuditLogEntry) -> AuditLogORM:
    return AuditLogORM(
        id=entry.id,
        project_id=entry.project_id,
        action=entry.action,
        user_id=entry.user_id,
        metadata_json=to_json(entry.metadata),
        created_at=entry.created_at,
    )


def audit_from_orm(obj: AuditLogORM) -> AuditLogEntry:
    return AuditLogEntry(
        id=obj.id,
        project_id=obj.project_id,
        action=obj.action,
        user_id=obj.user_id,
        metadata=dict_from_json(obj.metadata_json),
        created_at=as_utc(obj.created_at),
    )


__all__ = ["audit_to_orm", "audit_from_orm"]
