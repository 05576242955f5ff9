from __future__ import annotations

from core.models import Project
from infra.db.codec import as_utc, list_from_json, to_json
from infra.db.models import ProjectORM


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        owner_id=project.owner_id,
        name=project.name,
        description=project.description,
        status=project.status,
        baseline_budget=project.baseline_budget,
        overhead_percent=project.overhead_percent,
        overhead_amount=project.overhead_amount,
        currency=project.currency,
        start_date=project.start_date,
        end_date=project.end_date,
        baseline_locked_at=project.baseline_locked_at,
        collaborator_ids_json=to_json(list(project.collaborator_ids)),
        pending_invites_json=to_json(list(project.pending_invites)),
        created_at=project.created_at,
        updated_at=project.updated_at,
        version=project.version,
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        owner_id=obj.owner_id,
        name=obj.name,
        description=obj.description or "",
        status=obj.status,
        baseline_budget=obj.baseline_budget,
        overhead_percent=obj.overhead_percent,
        overhead_amount=obj.overhead_amount,
        currency=obj.currency,
        start_date=obj.start_date,
        end_date=obj.end_date,
        baseline_locked_at=as_utc(obj.baseline_locked_at),
        collaborator_ids=list_from_json(obj.collaborator_ids_json),
        pending_invites=list_from_json(obj.pending_invites_json),
        created_at=as_utc(obj.created_at),
        updated_at=as_utc(obj.updated_at),
        version=obj.version,
    )


__all__ = ["project_to_orm", "project_from_orm"]
