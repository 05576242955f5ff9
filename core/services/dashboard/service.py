from __future__ import annotations

from datetime import date
from typing import List

from core.models import Project, ProjectStatus
from core.services.budget import InsightCategory, format_money
from core.services.dashboard.models import PortfolioProjectRow, PortfolioSummary
from core.services.forecast.service import ForecastService
from core.services.project.collaboration import CollaborationService
from core.services.project.service import ProjectService


class DashboardService:
    """
    Aggregates the portfolio view for one user: owned and shared projects.
    """

    def __init__(
        self,
        project_service: ProjectService,
        forecast_service: ForecastService,
        collaboration_service: CollaborationService,
    ):
        self._projects = project_service
        self._forecasts = forecast_service
        self._collaboration = collaboration_service

    # --------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------

    def get_portfolio_summary(
        self,
        user_id: str,
        email: str | None = None,
        today: date | None = None,
    ) -> PortfolioSummary:
        projects = self._projects.list_projects_for_user(user_id)
        active = [p for p in projects if p.status == ProjectStatus.ACTIVE]
        pending = self._collaboration.list_pending_invites_for(email) if email else []

        rows = [self._build_row(project, user_id, today) for project in projects]
        return PortfolioSummary(
            user_id=user_id,
            active_count=len(active),
            archived_count=len(projects) - len(active),
            total_active_budget=sum(p.baseline_budget + p.overhead_amount for p in active),
            pending_invite_count=len(pending),
            projects=rows,
            alerts=self._build_alerts(rows, len(pending)),
        )

    # --------------------------------------------------------------
    # Helpers
    # --------------------------------------------------------------

    def _build_row(self, project: Project, user_id: str, today: date | None) -> PortfolioProjectRow:
        forecast = self._forecasts.get_forecast(project.id, today=today)
        return PortfolioProjectRow(
            project_id=project.id,
            name=project.name,
            status=project.status,
            currency=project.currency,
            total_budget=forecast.total_budget,
            cost_to_date=forecast.cost_to_date,
            remaining_budget=forecast.remaining_budget,
            insight_category=forecast.insight.category,
            approaching_limit=forecast.insight.approaching_limit,
            is_shared=project.owner_id != user_id,
        )

    def _build_alerts(self, rows: List[PortfolioProjectRow], pending_count: int) -> List[str]:
        alerts: List[str] = []

        # 1) Budget health
        for row in rows:
            if row.status != ProjectStatus.ACTIVE:
                continue
            if row.insight_category == InsightCategory.OVER_BUDGET:
                overrun = format_money(-row.remaining_budget, row.currency)
                alerts.append(f'Project "{row.name}" is over budget by {overrun} {row.currency}.')
            elif row.approaching_limit:
                alerts.append(f'Project "{row.name}" is approaching its budget limit.')

        # 2) Invitations waiting
        if pending_count:
            alerts.append(f"You have {pending_count} pending project invitation(s).")

        return alerts


__all__ = ["DashboardService"]
