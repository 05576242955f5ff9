from __future__ import annotations

from typing import Any, List

from sqlalchemy.orm import Session

from core.interfaces import AuditLogRepository
from core.models import AuditAction, AuditLogEntry
from core.services.auth.session import UserSessionContext

DEFAULT_AUDIT_LIMIT = 50


class AuditService:
    def __init__(
        self,
        session: Session,
        audit_repo: AuditLogRepository,
        user_session: UserSessionContext | None = None,
    ):
        self._session = session
        self._audit_repo = audit_repo
        self._user_session = user_session

    def record(
        self,
        *,
        action: AuditAction,
        project_id: str,
        metadata: dict[str, Any] | None = None,
        user_id: str | None = None,
        commit: bool = False,
    ) -> AuditLogEntry:
        if not isinstance(action, AuditAction):
            action = AuditAction(str(action))
        actor = user_id
        if actor is None and self._user_session is not None:
            actor = self._user_session.user_id
        entry = AuditLogEntry.create(
            project_id,
            action,
            user_id=actor,
            metadata=metadata or {},
        )
        self._audit_repo.add(entry)
        if commit:
            self._session.commit()
        return entry

    def list_recent(self, project_id: str, limit: int = DEFAULT_AUDIT_LIMIT) -> List[AuditLogEntry]:
        return self._audit_repo.list_recent(project_id, limit=limit)


__all__ = ["AuditService", "DEFAULT_AUDIT_LIMIT"]
