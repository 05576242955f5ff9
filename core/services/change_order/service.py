from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ChangeOrderRepository, ProjectRepository
from core.models import AuditAction, ChangeOrder, ChangeOrderType
from core.services.audit.helpers import record_audit
from core.services.auth.session import UserSessionContext

logger = logging.getLogger(__name__)


class ChangeOrderService:
    def __init__(
        self,
        session: Session,
        change_order_repo: ChangeOrderRepository,
        project_repo: ProjectRepository,
        user_session: UserSessionContext | None = None,
        audit_service=None,
    ):
        self._session: Session = session
        self._change_order_repo: ChangeOrderRepository = change_order_repo
        self._project_repo: ProjectRepository = project_repo
        self._user_session = user_session
        self._audit_service = audit_service

    def _actor(self) -> str | None:
        return self._user_session.user_id if self._user_session else None

    def _require(self, change_order_id: str) -> ChangeOrder:
        order = self._change_order_repo.get(change_order_id)
        if not order:
            raise NotFoundError("Change order not found.", code="CHANGE_ORDER_NOT_FOUND")
        return order

    def add_change_order(
        self,
        project_id: str,
        type: ChangeOrderType,
        amount: float,
        description: str,
    ) -> ChangeOrder:
        if not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if not isinstance(type, ChangeOrderType):
            type = ChangeOrderType(str(type))
        try:
            value = float(amount)
        except (TypeError, ValueError):
            value = 0.0
        if value <= 0:
            raise ValidationError(
                "Change order amount must be greater than zero.",
                code="CHANGE_ORDER_AMOUNT_INVALID",
            )
        if not description or not description.strip():
            raise ValidationError(
                "Change order description is required.",
                code="CHANGE_ORDER_DESCRIPTION_REQUIRED",
            )

        order = ChangeOrder.create(
            project_id=project_id,
            type=type,
            amount=value,
            description=description.strip(),
            created_by=self._actor(),
        )
        try:
            self._change_order_repo.add(order)
            record_audit(
                self,
                action=AuditAction.CHANGE_ORDER_ADDED,
                project_id=project_id,
                metadata={
                    "change_order_id": order.id,
                    "type": order.type.value,
                    "amount": order.amount,
                    "description": order.description,
                },
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        domain_events.change_orders_changed.emit(project_id)
        return order

    def approve_change_order(self, change_order_id: str) -> ChangeOrder:
        order = self._require(change_order_id)
        # Raises InvalidTransitionError from a terminal state; nothing is written.
        order.approve(self._actor())
        try:
            self._change_order_repo.update(order)
            record_audit(
                self,
                action=AuditAction.CHANGE_ORDER_APPROVED,
                project_id=order.project_id,
                metadata={"change_order_id": order.id},
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info("Approved change order %s on project %s", order.id, order.project_id)
        domain_events.change_orders_changed.emit(order.project_id)
        return order

    def reject_change_order(self, change_order_id: str) -> ChangeOrder:
        order = self._require(change_order_id)
        order.reject()
        try:
            self._change_order_repo.update(order)
            record_audit(
                self,
                action=AuditAction.CHANGE_ORDER_REJECTED,
                project_id=order.project_id,
                metadata={"change_order_id": order.id},
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        domain_events.change_orders_changed.emit(order.project_id)
        return order

    def list_change_orders_for_project(self, project_id: str) -> List[ChangeOrder]:
        orders = self._change_order_repo.list_by_project(project_id)
        return sorted(orders, key=lambda o: o.created_at, reverse=True)


__all__ = ["ChangeOrderService"]
