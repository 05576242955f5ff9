from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import CostRepository
from core.models import CostEntry
from infra.db.cost.mapper import cost_from_orm, cost_to_orm
from infra.db.models import CostEntryORM
from infra.db.optimistic import update_with_version_check


class SqlAlchemyCostRepository(CostRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, cost: CostEntry) -> None:
        self.session.add(cost_to_orm(cost))

    def update(self, cost: CostEntry) -> None:
        cost.version = update_with_version_check(
            self.session,
            CostEntryORM,
            cost.id,
            getattr(cost, "version", 1),
            {
                "amount": cost.amount,
                "category": cost.category,
                "vendor": cost.vendor,
                "description": cost.description,
                "date": cost.date,
                "deduction_type": cost.deduction_type,
                "updated_at": cost.updated_at,
            },
            not_found_message="Cost entry not found.",
            stale_message="Cost entry was updated by another user.",
        )

    def delete(self, cost_id: str) -> None:
        self.session.query(CostEntryORM).filter_by(id=cost_id).delete()

    def get(self, cost_id: str) -> Optional[CostEntry]:
        obj = self.session.get(CostEntryORM, cost_id)
        return cost_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[CostEntry]:
        stmt = (
            select(CostEntryORM)
            .where(CostEntryORM.project_id == project_id)
            .order_by(CostEntryORM.date.desc(), CostEntryORM.created_at.desc())
        )
        rows = self.session.execute(stmt).scalars().all()
        return [cost_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.query(CostEntryORM).filter_by(project_id=project_id).delete()


__all__ = ["SqlAlchemyCostRepository"]
