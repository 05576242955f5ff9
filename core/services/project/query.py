from __future__ import annotations

from typing import List

from core.exceptions import NotFoundError
from core.models import Project, ProjectStatus


class ProjectQueryMixin:
    def list_projects(self) -> List[Project]:
        return self._project_repo.list_all()

    def get_project(self, project_id: str) -> Project | None:
        return self._project_repo.get(project_id)

    def require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def list_projects_for_user(self, user_id: str) -> List[Project]:
        """Owned and shared projects, most recently updated first."""
        projects = {project.id: project for project in self._project_repo.list_for_member(user_id)}
        return sorted(projects.values(), key=lambda p: p.updated_at, reverse=True)

    def list_projects_by_status(self, status: ProjectStatus) -> List[Project]:
        return self._project_repo.list_by_status(status)

    def search_projects_by_name(self, query: str) -> List[Project]:
        normalized = query.strip().lower()
        return [project for project in self._project_repo.list_all() if normalized in project.name.lower()]


__all__ = ["ProjectQueryMixin"]
