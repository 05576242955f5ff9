from __future__ import annotations

import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import (
    ChangeOrderRepository,
    CostRepository,
    ForecastRepository,
    ProjectRepository,
)
from core.models import AuditAction, ChangeOrder, CostEntry, ForecastSnapshot, Project
from core.services.audit.helpers import record_audit
from core.services.auth.session import UserSessionContext
from core.services.budget import (
    ForecastResult,
    build_forecast,
    latest_snapshot,
    next_forecast_version,
)
from core.services.forecast.narrative import NarrativeProvider

logger = logging.getLogger(__name__)
DEFAULT_FORECAST_HISTORY = 10


class ForecastService:
    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        cost_repo: CostRepository,
        change_order_repo: ChangeOrderRepository,
        forecast_repo: ForecastRepository,
        user_session: UserSessionContext | None = None,
        audit_service=None,
        narrative_provider: NarrativeProvider | None = None,
    ):
        self._session: Session = session
        self._project_repo: ProjectRepository = project_repo
        self._cost_repo: CostRepository = cost_repo
        self._change_order_repo: ChangeOrderRepository = change_order_repo
        self._forecast_repo: ForecastRepository = forecast_repo
        self._user_session = user_session
        self._audit_service = audit_service
        self._narrative_provider = narrative_provider

    def _require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def load_ledgers(self, project_id: str) -> tuple[Project, List[CostEntry], List[ChangeOrder]]:
        project = self._require_project(project_id)
        return (
            project,
            self._cost_repo.list_by_project(project_id),
            self._change_order_repo.list_by_project(project_id),
        )

    def _compute(self, project: Project, today: date | None) -> ForecastResult:
        _, costs, change_orders = self.load_ledgers(project.id)
        return build_forecast(project, costs, change_orders, today or date.today())

    def get_forecast(self, project_id: str, today: date | None = None) -> ForecastResult:
        """Recompute every derived figure from the current ledgers."""
        return self._compute(self._require_project(project_id), today)

    def _summarize(self, project: Project, result: ForecastResult) -> str | None:
        if self._narrative_provider is None:
            return None
        try:
            return self._narrative_provider.summarize(project, result)
        except Exception as exc:
            logger.warning("Narrative provider failed for project %s: %s", project.id, exc)
            return None

    def save_forecast(
        self,
        project_id: str,
        manual_override: float | None = None,
        ai_summary: str | None = None,
        today: date | None = None,
    ) -> ForecastSnapshot:
        project = self._require_project(project_id)
        if manual_override is not None:
            try:
                manual_override = float(manual_override)
            except (TypeError, ValueError):
                raise ValidationError(
                    "Manual override must be a number.",
                    code="FORECAST_OVERRIDE_INVALID",
                ) from None

        result = self._compute(project, today)
        if ai_summary is None:
            ai_summary = self._summarize(project, result)

        version = next_forecast_version(self._forecast_repo.list_by_project(project_id))
        snapshot = ForecastSnapshot.create(
            project_id,
            version,
            cost_to_date=result.cost_to_date,
            burn_rate=result.burn_rate,
            remaining_budget=result.remaining_budget,
            projected_total=result.projected_total,
            manual_override=manual_override,
            insight_text=result.insight.text,
            ai_summary=ai_summary,
            created_by=self._user_session.user_id if self._user_session else None,
        )
        try:
            self._forecast_repo.add(snapshot)
            record_audit(
                self,
                action=AuditAction.FORECAST_UPDATED,
                project_id=project_id,
                metadata={"forecast_id": snapshot.id, "version": snapshot.version},
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info("Saved forecast v%s for project %s", snapshot.version, project_id)
        domain_events.forecasts_changed.emit(project_id)
        return snapshot

    def list_forecasts(
        self,
        project_id: str,
        limit: int = DEFAULT_FORECAST_HISTORY,
    ) -> List[ForecastSnapshot]:
        """Newest first."""
        return self._forecast_repo.list_by_project(project_id, limit=limit)

    def get_latest_forecast(self, project_id: str) -> ForecastSnapshot | None:
        return latest_snapshot(self._forecast_repo.list_by_project(project_id))


__all__ = ["ForecastService", "DEFAULT_FORECAST_HISTORY"]
