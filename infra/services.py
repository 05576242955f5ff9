from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.audit import AuditService
from core.services.auth.session import UserSessionContext
from core.services.change_order import ChangeOrderService
from core.services.cost import CostService
from core.services.dashboard import DashboardService
from core.services.forecast import ForecastService, NarrativeProvider
from core.services.project import CollaborationService, InviteNotifier, ProjectService
from infra.db.audit import SqlAlchemyAuditLogRepository
from infra.db.change_order import SqlAlchemyChangeOrderRepository
from infra.db.cost import SqlAlchemyCostRepository
from infra.db.forecast import SqlAlchemyForecastRepository
from infra.db.project import SqlAlchemyProjectRepository


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    user_session: UserSessionContext
    audit_service: AuditService
    project_service: ProjectService
    collaboration_service: CollaborationService
    cost_service: CostService
    change_order_service: ChangeOrderService
    forecast_service: ForecastService
    dashboard_service: DashboardService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "user_session": self.user_session,
            "audit_service": self.audit_service,
            "project_service": self.project_service,
            "collaboration_service": self.collaboration_service,
            "cost_service": self.cost_service,
            "change_order_service": self.change_order_service,
            "forecast_service": self.forecast_service,
            "dashboard_service": self.dashboard_service,
        }


def build_service_graph(
    session: Session,
    *,
    invite_notifier: InviteNotifier | None = None,
    narrative_provider: NarrativeProvider | None = None,
) -> ServiceGraph:
    user_session = UserSessionContext()
    project_repo = SqlAlchemyProjectRepository(session)
    cost_repo = SqlAlchemyCostRepository(session)
    change_order_repo = SqlAlchemyChangeOrderRepository(session)
    forecast_repo = SqlAlchemyForecastRepository(session)
    audit_repo = SqlAlchemyAuditLogRepository(session)

    audit_service = AuditService(
        session=session,
        audit_repo=audit_repo,
        user_session=user_session,
    )
    project_service = ProjectService(
        session,
        project_repo,
        cost_repo,
        change_order_repo,
        forecast_repo,
        audit_repo,
        user_session=user_session,
        audit_service=audit_service,
    )
    collaboration_service = CollaborationService(
        session,
        project_repo,
        invite_notifier=invite_notifier,
    )
    cost_service = CostService(
        session,
        cost_repo,
        project_repo,
        user_session=user_session,
        audit_service=audit_service,
    )
    change_order_service = ChangeOrderService(
        session,
        change_order_repo,
        project_repo,
        user_session=user_session,
        audit_service=audit_service,
    )
    forecast_service = ForecastService(
        session,
        project_repo,
        cost_repo,
        change_order_repo,
        forecast_repo,
        user_session=user_session,
        audit_service=audit_service,
        narrative_provider=narrative_provider,
    )
    dashboard_service = DashboardService(
        project_service=project_service,
        forecast_service=forecast_service,
        collaboration_service=collaboration_service,
    )

    return ServiceGraph(
        session=session,
        user_session=user_session,
        audit_service=audit_service,
        project_service=project_service,
        collaboration_service=collaboration_service,
        cost_service=cost_service,
        change_order_service=change_order_service,
        forecast_service=forecast_service,
        dashboard_service=dashboard_service,
    )

