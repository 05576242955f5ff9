from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from core.interfaces import ProjectRepository
from core.models import Project, ProjectStatus
from infra.db.codec import to_json
from infra.db.models import ProjectORM
from infra.db.optimistic import update_with_version_check
from infra.db.project.mapper import project_from_orm, project_to_orm


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def update(self, project: Project) -> None:
        project.version = update_with_version_check(
            self.session,
            ProjectORM,
            project.id,
            getattr(project, "version", 1),
            {
                "name": project.name,
                "description": project.description,
                "status": project.status,
                "baseline_budget": project.baseline_budget,
                "overhead_percent": project.overhead_percent,
                "overhead_amount": project.overhead_amount,
                "currency": project.currency,
                "start_date": project.start_date,
                "end_date": project.end_date,
                "baseline_locked_at": project.baseline_locked_at,
                "collaborator_ids_json": to_json(list(project.collaborator_ids)),
                "pending_invites_json": to_json(list(project.pending_invites)),
                "updated_at": project.updated_at,
            },
            not_found_message="Project not found.",
            stale_message="Project was updated by another user.",
        )

    def delete(self, project_id: str) -> None:
        self.session.query(ProjectORM).filter_by(id=project_id).delete()

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def list_all(self) -> List[Project]:
        stmt = select(ProjectORM).order_by(ProjectORM.updated_at.desc())
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]

    def list_for_member(self, user_id: str) -> List[Project]:
        # LIKE narrows the scan; membership is confirmed on the decoded list.
        stmt = select(ProjectORM).where(
            or_(
                ProjectORM.owner_id == user_id,
                ProjectORM.collaborator_ids_json.contains(to_json(user_id)),
            )
        )
        rows = self.session.execute(stmt).scalars().all()
        projects = [project_from_orm(row) for row in rows]
        return [p for p in projects if p.has_member(user_id)]

    def list_by_status(self, status: ProjectStatus) -> List[Project]:
        stmt = (
            select(ProjectORM)
            .where(ProjectORM.status == status)
            .order_by(ProjectORM.updated_at.desc())
        )
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]

    def list_with_pending_invite(self, email: str) -> List[Project]:
        stmt = select(ProjectORM).where(ProjectORM.pending_invites_json.contains(to_json(email)))
        rows = self.session.execute(stmt).scalars().all()
        projects = [project_from_orm(row) for row in rows]
        return [p for p in projects if email in p.pending_invites]


__all__ = ["SqlAlchemyProjectRepository"]
