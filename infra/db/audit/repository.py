from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import AuditLogRepository
from core.models import AuditLogEntry
from infra.db.audit.mapper import audit_from_orm, audit_to_orm
from infra.db.models import AuditLogORM


class SqlAlchemyAuditLogRepository(AuditLogRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, entry: AuditLogEntry) -> None:
        self.session.add(audit_to_orm(entry))

    def list_recent(self, project_id: str, limit: int = 50) -> List[AuditLogEntry]:
        stmt = (
            select(AuditLogORM)
            .where(AuditLogORM.project_id == project_id)
            .order_by(AuditLogORM.created_at.desc())
            .limit(max(1, int(limit)))
        )
        rows = self.session.execute(stmt).scalars().all()
        return [audit_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.query(AuditLogORM).filter_by(project_id=project_id).delete()


__all__ = ["SqlAlchemyAuditLogRepository"]
