from __future__ import annotations

import logging
from typing import List, Protocol

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError
from core.interfaces import ProjectRepository
from core.models import Project, utc_now
from core.services.project.validation import normalize_email, validate_email

logger = logging.getLogger(__name__)


class InviteNotifier(Protocol):
    """Delivers an invitation once it is stored. Delivery itself lives outside this package."""

    def notify_invited(self, project: Project, email: str) -> None: ...


class CollaborationService:
    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        invite_notifier: InviteNotifier | None = None,
    ):
        self._session: Session = session
        self._project_repo: ProjectRepository = project_repo
        self._invite_notifier = invite_notifier

    def _require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def _save(self, project: Project) -> None:
        project.updated_at = utc_now()
        try:
            self._project_repo.update(project)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def invite_collaborator(self, project_id: str, email: str) -> Project:
        normalized = validate_email(email)
        project = self._require_project(project_id)
        if normalized in project.pending_invites:
            return project

        project.pending_invites = [*project.pending_invites, normalized]
        self._save(project)
        logger.info("Invited collaborator to project %s", project.id)
        domain_events.invites_changed.emit(project.id)

        if self._invite_notifier is not None:
            try:
                self._invite_notifier.notify_invited(project, normalized)
            except Exception as exc:
                # The invite stays stored; delivery can be retried.
                logger.warning("Invite notification failed for project %s: %s", project.id, exc)
        return project

    def remove_pending_invite(self, project_id: str, email: str) -> Project:
        project = self._require_project(project_id)
        normalized = normalize_email(email)
        remaining = [e for e in project.pending_invites if normalize_email(e) != normalized]
        if len(remaining) == len(project.pending_invites):
            return project

        project.pending_invites = remaining
        self._save(project)
        domain_events.invites_changed.emit(project.id)
        return project

    def accept_invite(self, project_id: str, user_id: str, email: str) -> Project:
        project = self._require_project(project_id)
        normalized = normalize_email(email)
        remaining = [e for e in project.pending_invites if normalize_email(e) != normalized]
        if len(remaining) == len(project.pending_invites) and not project.has_member(user_id):
            raise BusinessRuleError(
                "No pending invite for this email.",
                code="INVITE_NOT_FOUND",
            )

        project.pending_invites = remaining
        if not project.has_member(user_id):
            project.collaborator_ids = [*project.collaborator_ids, user_id]
        self._save(project)
        logger.info("User %s joined project %s", user_id, project.id)
        domain_events.invites_changed.emit(project.id)
        domain_events.project_changed.emit(project.id)
        return project

    def decline_invite(self, project_id: str, email: str) -> Project:
        return self.remove_pending_invite(project_id, email)

    def remove_collaborator(self, project_id: str, user_id: str) -> Project:
        project = self._require_project(project_id)
        if user_id == project.owner_id:
            raise BusinessRuleError(
                "The project owner cannot be removed.",
                code="OWNER_NOT_REMOVABLE",
            )
        if user_id not in project.collaborator_ids:
            return project

        project.collaborator_ids = [uid for uid in project.collaborator_ids if uid != user_id]
        self._save(project)
        domain_events.project_changed.emit(project.id)
        return project

    def list_pending_invites_for(self, email: str) -> List[Project]:
        normalized = normalize_email(email)
        if not normalized:
            return []
        return self._project_repo.list_with_pending_invite(normalized)


__all__ = ["CollaborationService", "InviteNotifier"]
