from __future__ import annotations

import pytest

from core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from core.models import AuditAction, ChangeOrder, ChangeOrderStatus, ChangeOrderType


def test_change_order_approve_is_terminal():
    order = ChangeOrder.create("p-1", ChangeOrderType.POSITIVE, 500.0, "Extra bay")
    assert order.status == ChangeOrderStatus.PENDING

    order.approve("manager-1")
    assert order.status == ChangeOrderStatus.APPROVED
    assert order.approved_by == "manager-1"
    assert order.approved_at is not None

    with pytest.raises(InvalidTransitionError) as exc:
        order.reject()
    assert exc.value.code == "INVALID_TRANSITION"
    with pytest.raises(InvalidTransitionError):
        order.approve("manager-2")
    assert order.status == ChangeOrderStatus.APPROVED
    assert order.approved_by == "manager-1"


def test_change_order_reject_is_terminal():
    order = ChangeOrder.create("p-1", ChangeOrderType.NEGATIVE, 200.0, "Descoped")
    order.reject()

    assert order.status == ChangeOrderStatus.REJECTED
    assert order.signed_amount == -200.0
    with pytest.raises(InvalidTransitionError):
        order.approve("manager-1")


def test_approved_change_orders_move_the_forecast(services, project):
    cos = services["change_order_service"]
    fs = services["forecast_service"]

    up = cos.add_change_order(project.id, ChangeOrderType.POSITIVE, 500.0, "Mezzanine")
    down = cos.add_change_order(project.id, ChangeOrderType.NEGATIVE, 200.0, "Drop signage")
    pending = cos.add_change_order(project.id, ChangeOrderType.POSITIVE, 9000.0, "Still under review")

    assert fs.get_forecast(project.id).total_budget == pytest.approx(11000.0)

    approved = cos.approve_change_order(up.id)
    cos.approve_change_order(down.id)

    assert approved.approved_by == "owner-1"
    assert fs.get_forecast(project.id).total_budget == pytest.approx(11300.0)

    cos.reject_change_order(pending.id)
    assert fs.get_forecast(project.id).total_budget == pytest.approx(11300.0)

    statuses = {o.id: o.status for o in cos.list_change_orders_for_project(project.id)}
    assert statuses == {
        up.id: ChangeOrderStatus.APPROVED,
        down.id: ChangeOrderStatus.APPROVED,
        pending.id: ChangeOrderStatus.REJECTED,
    }


def test_deciding_a_decided_change_order_is_rejected_without_writing(services, project):
    cos = services["change_order_service"]
    audit = services["audit_service"]

    order = cos.add_change_order(project.id, ChangeOrderType.POSITIVE, 100.0, "Lighting")
    cos.reject_change_order(order.id)
    entries_before = len(audit.list_recent(project.id))

    with pytest.raises(InvalidTransitionError):
        cos.approve_change_order(order.id)

    stored = [o for o in cos.list_change_orders_for_project(project.id) if o.id == order.id][0]
    assert stored.status == ChangeOrderStatus.REJECTED
    assert len(audit.list_recent(project.id)) == entries_before


def test_change_order_validation(services, project):
    cos = services["change_order_service"]

    with pytest.raises(ValidationError) as exc:
        cos.add_change_order(project.id, ChangeOrderType.POSITIVE, 0.0, "Nothing")
    assert exc.value.code == "CHANGE_ORDER_AMOUNT_INVALID"

    with pytest.raises(ValidationError) as exc:
        cos.add_change_order(project.id, ChangeOrderType.POSITIVE, 10.0, "   ")
    assert exc.value.code == "CHANGE_ORDER_DESCRIPTION_REQUIRED"

    with pytest.raises(NotFoundError):
        cos.add_change_order("missing", ChangeOrderType.POSITIVE, 10.0, "Ghost")

    with pytest.raises(NotFoundError) as exc:
        cos.approve_change_order("missing")
    assert exc.value.code == "CHANGE_ORDER_NOT_FOUND"


def test_change_order_actions_are_audited(services, project):
    cos = services["change_order_service"]
    audit = services["audit_service"]

    first = cos.add_change_order(project.id, ChangeOrderType.POSITIVE, 100.0, "Racking")
    second = cos.add_change_order(project.id, "negative", 40.0, "Reuse doors")
    cos.approve_change_order(first.id)
    cos.reject_change_order(second.id)

    actions = [e.action for e in audit.list_recent(project.id)]
    assert actions.count(AuditAction.CHANGE_ORDER_ADDED) == 2
    assert AuditAction.CHANGE_ORDER_APPROVED in actions
    assert AuditAction.CHANGE_ORDER_REJECTED in actions

    added = [e for e in audit.list_recent(project.id) if e.action == AuditAction.CHANGE_ORDER_ADDED]
    assert {e.metadata["change_order_id"] for e in added} == {first.id, second.id}
    assert all(e.user_id == "owner-1" for e in added)
