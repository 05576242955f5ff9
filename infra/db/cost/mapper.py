from __future__ import annotations

from core.models import CostEntry
from infra.db.codec import as_utc
from infra.db.models import CostEntryORM


def cost_to_orm(cost: CostEntry) -> CostEntryORM:
    return CostEntryORM(
        id=cost.id,
        project_id=cost.project_id,
        amount=cost.amount,
        category=cost.category,
        vendor=cost.vendor,
        description=cost.description,
        date=cost.date,
        deduction_type=cost.deduction_type,
        created_by=cost.created_by,
        created_at=cost.created_at,
        updated_at=cost.updated_at,
        version=cost.version,
    )


def cost_from_orm(obj: CostEntryORM) -> CostEntry:
    return CostEntry(
        id=obj.id,
        project_id=obj.project_id,
        amount=obj.amount,
        category=obj.category,
        vendor=obj.vendor or "",
        description=obj.description or "",
        date=obj.date,
        deduction_type=obj.deduction_type,
        created_by=obj.created_by,
        created_at=as_utc(obj.created_at),
        updated_at=as_utc(obj.updated_at),
        version=obj.version,
    )


__all__ = ["cost_to_orm", "cost_from_orm"]
