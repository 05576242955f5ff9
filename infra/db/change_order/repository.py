from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import ChangeOrderRepository
from core.models import ChangeOrder
from infra.db.change_order.mapper import change_order_from_orm, change_order_to_orm
from infra.db.models import ChangeOrderORM


class SqlAlchemyChangeOrderRepository(ChangeOrderRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, change_order: ChangeOrder) -> None:
        self.session.add(change_order_to_orm(change_order))

    def update(self, change_order: ChangeOrder) -> None:
        stmt = (
            update(ChangeOrderORM)
            .where(ChangeOrderORM.id == change_order.id)
            .values(
                status=change_order.status,
                approved_by=change_order.approved_by,
                approved_at=change_order.approved_at,
                updated_at=change_order.updated_at,
            )
        )
        if self.session.execute(stmt).rowcount != 1:
            raise NotFoundError("Change order not found.", code="CHANGE_ORDER_NOT_FOUND")

    def get(self, change_order_id: str) -> Optional[ChangeOrder]:
        obj = self.session.get(ChangeOrderORM, change_order_id)
        return change_order_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[ChangeOrder]:
        stmt = (
            select(ChangeOrderORM)
            .where(ChangeOrderORM.project_id == project_id)
            .order_by(ChangeOrderORM.created_at.desc())
        )
        rows = self.session.execute(stmt).scalars().all()
        return [change_order_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.query(ChangeOrderORM).filter_by(project_id=project_id).delete()


__all__ = ["SqlAlchemyChangeOrderRepository"]
