from __future__ import annotations

from core.models import ForecastSnapshot
from infra.db.codec import as_utc
from infra.db.models import ForecastSnapshotORM


def forecast_to_orm(snapshot: ForecastSnapshot) -> ForecastSnapshotORM:
    return ForecastSnapshotORM(
        id=snapshot.id,
        project_id=snapshot.project_id,
        version=snapshot.version,
        cost_to_date=snapshot.cost_to_date,
        burn_rate=snapshot.burn_rate,
        remaining_budget=snapshot.remaining_budget,
        projected_total=snapshot.projected_total,
        manual_override=snapshot.manual_override,
        insight_text=snapshot.insight_text,
        ai_summary=snapshot.ai_summary,
        created_by=snapshot.created_by,
        created_at=snapshot.created_at,
    )


def forecast_from_orm(obj: ForecastSnapshotORM) -> ForecastSnapshot:
    return ForecastSnapshot(
        id=obj.id,
        project_id=obj.project_id,
        version=obj.version,
        cost_to_date=obj.cost_to_date,
        burn_rate=obj.burn_rate,
        remaining_budget=obj.remaining_budget,
        projected_total=obj.projected_total,
        manual_override=obj.manual_override,
        insight_text=obj.insight_text,
        ai_summary=obj.ai_summary,
        created_by=obj.created_by,
        created_at=as_utc(obj.created_at),
    )


__all__ = ["forecast_to_orm", "forecast_from_orm"]
