# core/services/cost/service.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import ConcurrencyError, NotFoundError, ValidationError
from core.interfaces import CostRepository, ProjectRepository
from core.models import AuditAction, CostEntry, DeductionType, utc_now
from core.services.audit.helpers import record_audit
from core.services.auth.session import UserSessionContext

logger = logging.getLogger(__name__)


def _validate_amount(amount: float) -> float:
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValidationError("Cost amount must be a number.", code="COST_AMOUNT_INVALID") from None
    if value <= 0:
        raise ValidationError("Cost amount must be greater than zero.", code="COST_AMOUNT_INVALID")
    return value


def _validate_category(category: str) -> str:
    if not category or not category.strip():
        raise ValidationError("Cost category is required.", code="COST_CATEGORY_REQUIRED")
    return category.strip()


def _validate_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError("Cost date must be a valid date.", code="COST_DATE_INVALID")
    return value


class CostService:
    def __init__(
        self,
        session: Session,
        cost_repo: CostRepository,
        project_repo: ProjectRepository,
        user_session: UserSessionContext | None = None,
        audit_service=None,
    ):
        self._session: Session = session
        self._cost_repo: CostRepository = cost_repo
        self._project_repo: ProjectRepository = project_repo
        self._user_session = user_session
        self._audit_service = audit_service

    def add_cost(
        self,
        project_id: str,
        amount: float,
        category: str,
        cost_date: date | None = None,
        vendor: str = "",
        description: str = "",
        deduction_type: DeductionType = DeductionType.MANUAL,
    ) -> CostEntry:
        if not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if not isinstance(deduction_type, DeductionType):
            deduction_type = DeductionType(str(deduction_type))

        cost = CostEntry.create(
            project_id=project_id,
            amount=_validate_amount(amount),
            category=_validate_category(category),
            date=_validate_date(cost_date or date.today()),
            vendor=(vendor or "").strip(),
            description=(description or "").strip(),
            deduction_type=deduction_type,
            created_by=self._user_session.user_id if self._user_session else None,
        )

        try:
            self._cost_repo.add(cost)
            record_audit(
                self,
                action=AuditAction.COST_ADDED,
                project_id=project_id,
                metadata={"cost_id": cost.id, "amount": cost.amount},
            )
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e

        logger.info("Added cost %s to project %s", cost.id, project_id)
        domain_events.costs_changed.emit(project_id)
        return cost

    def update_cost(
        self,
        cost_id: str,
        amount: float | None = None,
        category: str | None = None,
        cost_date: date | None = None,
        vendor: str | None = None,
        description: str | None = None,
        deduction_type: DeductionType | None = None,
        expected_version: int | None = None,
    ) -> CostEntry:
        cost = self._cost_repo.get(cost_id)
        if not cost:
            raise NotFoundError("Cost entry not found.", code="COST_NOT_FOUND")
        if expected_version is not None and cost.version != expected_version:
            raise ConcurrencyError(
                "Cost entry changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )

        changes: dict[str, object] = {}
        if amount is not None:
            cost.amount = _validate_amount(amount)
            changes["amount"] = cost.amount
        if category is not None:
            cost.category = _validate_category(category)
            changes["category"] = cost.category
        if cost_date is not None:
            cost.date = _validate_date(cost_date)
            changes["date"] = cost.date
        if vendor is not None:
            cost.vendor = vendor.strip()
            changes["vendor"] = cost.vendor
        if description is not None:
            cost.description = description.strip()
            changes["description"] = cost.description
        if deduction_type is not None:
            if not isinstance(deduction_type, DeductionType):
                deduction_type = DeductionType(str(deduction_type))
            cost.deduction_type = deduction_type
            changes["deduction_type"] = deduction_type.value

        cost.updated_at = utc_now()
        try:
            self._cost_repo.update(cost)
            record_audit(
                self,
                action=AuditAction.COST_EDITED,
                project_id=cost.project_id,
                metadata={"cost_id": cost.id, **changes},
            )
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e

        domain_events.costs_changed.emit(cost.project_id)
        return cost

    def delete_cost(self, cost_id: str) -> None:
        cost = self._cost_repo.get(cost_id)
        if not cost:
            raise NotFoundError("Cost entry not found.", code="COST_NOT_FOUND")
        try:
            self._cost_repo.delete(cost_id)
            record_audit(
                self,
                action=AuditAction.COST_DELETED,
                project_id=cost.project_id,
                metadata={"cost_id": cost.id},
            )
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e

        domain_events.costs_changed.emit(cost.project_id)

    def list_costs_for_project(self, project_id: str) -> List[CostEntry]:
        """Newest economic date first."""
        costs = self._cost_repo.list_by_project(project_id)
        return sorted(costs, key=lambda c: (c.date, c.created_at), reverse=True)

    def get_cost(self, cost_id: str) -> CostEntry | None:
        return self._cost_repo.get(cost_id)


__all__ = ["CostService"]
