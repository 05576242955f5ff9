from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, ConcurrencyError, NotFoundError
from core.interfaces import (
    AuditLogRepository,
    ChangeOrderRepository,
    CostRepository,
    ForecastRepository,
    ProjectRepository,
)
from core.models import AuditAction, Project, ProjectStatus, overhead_for, utc_now
from core.services.audit.helpers import record_audit
from core.services.project.policy import is_baseline_lock_enforced
from core.services.project.validation import ProjectValidationMixin

logger = logging.getLogger(__name__)
DEFAULT_CURRENCY_CODE = "USD"


class ProjectLifecycleMixin(ProjectValidationMixin):
    _session: Session
    _project_repo: ProjectRepository
    _cost_repo: CostRepository
    _change_order_repo: ChangeOrderRepository
    _forecast_repo: ForecastRepository
    _audit_repo: AuditLogRepository

    def create_project(
        self,
        owner_id: str,
        name: str,
        description: str = "",
        baseline_budget: float = 0.0,
        overhead_percent: float = 0.0,
        currency: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
    ) -> Project:
        self._validate_project_name(name)
        self._validate_baseline(baseline_budget, overhead_percent)
        self._validate_dates(start_date, end_date)
        if not isinstance(status, ProjectStatus):
            status = ProjectStatus(str(status))
        resolved_currency = (currency or "").strip().upper() or DEFAULT_CURRENCY_CODE
        project = Project.create(
            owner_id,
            name.strip(),
            baseline_budget=float(baseline_budget),
            overhead_percent=float(overhead_percent),
            description=(description or "").strip(),
            currency=resolved_currency,
            start_date=start_date or date.today(),
            end_date=end_date,
            status=status,
        )

        try:
            self._project_repo.add(project)
            record_audit(
                self,
                action=AuditAction.PROJECT_CREATED,
                project_id=project.id,
                metadata={"name": project.name, "baseline_budget": project.baseline_budget},
            )
            self._session.commit()
            logger.info("Created project %s - %s", project.id, project.name)
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise

        domain_events.project_changed.emit(project.id)
        return project

    def update_project(
        self,
        project_id: str,
        expected_version: int | None = None,
        name: str | None = None,
        description: str | None = None,
        status: ProjectStatus | None = None,
        baseline_budget: float | None = None,
        overhead_percent: float | None = None,
        currency: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        clear_end_date: bool = False,
    ) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if expected_version is not None and project.version != expected_version:
            raise ConcurrencyError(
                "Project changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )

        changes: dict[str, object] = {}
        if name is not None:
            self._validate_project_name(name)
            project.name = name.strip()
            changes["name"] = project.name
        if description is not None:
            project.description = description.strip()
            changes["description"] = project.description
        if status is not None:
            if not isinstance(status, ProjectStatus):
                status = ProjectStatus(str(status))
            project.status = status
            changes["status"] = status.value

        if baseline_budget is not None or overhead_percent is not None:
            next_budget = project.baseline_budget if baseline_budget is None else float(baseline_budget)
            next_percent = project.overhead_percent if overhead_percent is None else float(overhead_percent)
            self._validate_baseline(next_budget, next_percent)
            baseline_changed = (
                next_budget != project.baseline_budget or next_percent != project.overhead_percent
            )
            if baseline_changed and project.is_baseline_locked:
                if is_baseline_lock_enforced():
                    raise BusinessRuleError(
                        "Baseline is locked for this project.",
                        code="BASELINE_LOCKED",
                    )
                logger.warning(
                    "Editing baseline of project %s locked at %s",
                    project.id,
                    project.baseline_locked_at,
                )
            project.baseline_budget = next_budget
            project.overhead_percent = next_percent
            project.overhead_amount = overhead_for(next_budget, next_percent)
            changes["baseline_budget"] = next_budget
            changes["overhead_percent"] = next_percent

        if currency is not None:
            project.currency = currency.strip().upper() or DEFAULT_CURRENCY_CODE
            changes["currency"] = project.currency
        if start_date is not None:
            project.start_date = start_date
            changes["start_date"] = start_date
        if clear_end_date:
            project.end_date = None
            changes["end_date"] = None
        elif end_date is not None:
            project.end_date = end_date
            changes["end_date"] = end_date
        self._validate_dates(project.start_date, project.end_date)

        project.updated_at = utc_now()
        try:
            self._project_repo.update(project)
            record_audit(
                self,
                action=AuditAction.PROJECT_UPDATED,
                project_id=project.id,
                metadata=changes,
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        domain_events.project_changed.emit(project_id)
        return project

    def archive_project(self, project_id: str, expected_version: int | None = None) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if expected_version is not None and project.version != expected_version:
            raise ConcurrencyError(
                "Project changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )
        if project.status == ProjectStatus.ARCHIVED:
            return project

        project.status = ProjectStatus.ARCHIVED
        project.updated_at = utc_now()
        try:
            self._project_repo.update(project)
            record_audit(
                self,
                action=AuditAction.PROJECT_ARCHIVED,
                project_id=project.id,
                metadata={"name": project.name},
            )
            self._session.commit()
            logger.info("Archived project %s", project.id)
        except Exception:
            self._session.rollback()
            raise

        domain_events.project_changed.emit(project_id)
        return project

    def lock_baseline(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if project.is_baseline_locked:
            return project

        stamp = utc_now()
        project.baseline_locked_at = stamp
        project.updated_at = stamp
        try:
            self._project_repo.update(project)
            record_audit(
                self,
                action=AuditAction.PROJECT_UPDATED,
                project_id=project.id,
                metadata={"baseline_locked_at": stamp},
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        domain_events.project_changed.emit(project_id)
        return project

    def delete_project(self, project_id: str) -> None:
        """Remove a project with its audit log, costs, change orders and forecasts."""
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        try:
            self._audit_repo.delete_by_project(project_id)
            self._cost_repo.delete_by_project(project_id)
            self._change_order_repo.delete_by_project(project_id)
            self._forecast_repo.delete_by_project(project_id)
            self._project_repo.delete(project_id)
            self._session.commit()
            logger.info("Deleted project %s - %s", project.id, project.name)
        except Exception:
            self._session.rollback()
            raise

        domain_events.project_changed.emit(project_id)


__all__ = ["ProjectLifecycleMixin", "DEFAULT_CURRENCY_CODE"]
