from __future__ import annotations

from core.models import ChangeOrder
from infra.db.codec import as_utc
from infra.db.models import ChangeOrderORM


def change_order_to_orm(order: ChangeOrder) -> ChangeOrderORM:
    return ChangeOrderORM(
        id=order.id,
        project_id=order.project_id,
        type=order.type,
        amount=order.amount,
        description=order.description,
        status=order.status,
        approved_by=order.approved_by,
        approved_at=order.approved_at,
        created_by=order.created_by,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def change_order_from_orm(obj: ChangeOrderORM) -> ChangeOrder:
    return ChangeOrder(
        id=obj.id,
        project_id=obj.project_id,
        type=obj.type,
        amount=obj.amount,
        description=obj.description,
        status=obj.status,
        approved_by=obj.approved_by,
        approved_at=as_utc(obj.approved_at),
        created_by=obj.created_by,
        created_at=as_utc(obj.created_at),
        updated_at=as_utc(obj.updated_at),
    )


__all__ = ["change_order_to_orm", "change_order_from_orm"]
