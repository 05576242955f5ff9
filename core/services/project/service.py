from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import (
    AuditLogRepository,
    ChangeOrderRepository,
    CostRepository,
    ForecastRepository,
    ProjectRepository,
)
from core.services.audit.service import AuditService
from core.services.auth.session import UserSessionContext
from core.services.project.lifecycle import ProjectLifecycleMixin
from core.services.project.query import ProjectQueryMixin


class ProjectService(ProjectLifecycleMixin, ProjectQueryMixin):
    """Project service orchestrator: wiring repositories + composing mixins."""

    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        cost_repo: CostRepository,
        change_order_repo: ChangeOrderRepository,
        forecast_repo: ForecastRepository,
        audit_repo: AuditLogRepository,
        user_session: UserSessionContext | None = None,
        audit_service: AuditService | None = None,
    ):
        self._session: Session = session
        self._project_repo: ProjectRepository = project_repo
        self._cost_repo: CostRepository = cost_repo
        self._change_order_repo: ChangeOrderRepository = change_order_repo
        self._forecast_repo: ForecastRepository = forecast_repo
        self._audit_repo: AuditLogRepository = audit_repo
        self._user_session: UserSessionContext | None = user_session
        self._audit_service: AuditService | None = audit_service


__all__ = ["ProjectService"]
