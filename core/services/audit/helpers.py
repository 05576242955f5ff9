from __future__ import annotations

from typing import Any

from core.models import AuditAction


def record_audit(
    owner: object,
    *,
    action: AuditAction,
    project_id: str,
    metadata: dict[str, Any] | None = None,
) -> None:
    """Append an audit entry through the owner's audit service, if it has one.

    The caller commits; the entry rides in the same unit of work as the change.
    """
    audit_service = getattr(owner, "_audit_service", None)
    if audit_service is None:
        return
    audit_service.record(
        action=action,
        project_id=project_id,
        metadata=metadata or {},
    )


__all__ = ["record_audit"]
