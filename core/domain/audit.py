from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from core.domain.enums import AuditAction
from core.domain.identifiers import generate_id, utc_now


@dataclass(frozen=True)
class AuditLogEntry:
    id: str
    project_id: str
    action: AuditAction
    user_id: str | None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)

    @staticmethod
    def create(
        project_id: str,
        action: AuditAction,
        *,
        user_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "AuditLogEntry":
        return AuditLogEntry(
            id=generate_id(),
            project_id=project_id,
            action=action,
            user_id=user_id,
            metadata=dict(metadata or {}),
        )


__all__ = ["AuditLogEntry"]
