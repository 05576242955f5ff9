from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import ForecastRepository
from core.models import ForecastSnapshot
from infra.db.forecast.mapper import forecast_from_orm, forecast_to_orm
from infra.db.models import ForecastSnapshotORM


class SqlAlchemyForecastRepository(ForecastRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, snapshot: ForecastSnapshot) -> None:
        self.session.add(forecast_to_orm(snapshot))

    def list_by_project(self, project_id: str, limit: int | None = None) -> List[ForecastSnapshot]:
        stmt = (
            select(ForecastSnapshotORM)
            .where(ForecastSnapshotORM.project_id == project_id)
            .order_by(ForecastSnapshotORM.version.desc())
        )
        if limit is not None:
            stmt = stmt.limit(max(1, int(limit)))
        rows = self.session.execute(stmt).scalars().all()
        return [forecast_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.query(ForecastSnapshotORM).filter_by(project_id=project_id).delete()


__all__ = ["SqlAlchemyForecastRepository"]
