from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from core.domain.identifiers import generate_id, utc_now


@dataclass(frozen=True)
class ForecastSnapshot:
    id: str
    project_id: str
    version: int
    cost_to_date: float
    burn_rate: float
    remaining_budget: float
    projected_total: float
    manual_override: float | None = None
    insight_text: str | None = None
    ai_summary: str | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=utc_now)

    @staticmethod
    def create(
        project_id: str,
        version: int,
        *,
        cost_to_date: float,
        burn_rate: float,
        remaining_budget: float,
        projected_total: float,
        manual_override: float | None = None,
        insight_text: str | None = None,
        ai_summary: str | None = None,
        created_by: str | None = None,
    ) -> "ForecastSnapshot":
        return ForecastSnapshot(
            id=generate_id(),
            project_id=project_id,
            version=version,
            cost_to_date=cost_to_date,
            burn_rate=burn_rate,
            remaining_budget=remaining_budget,
            projected_total=projected_total,
            manual_override=manual_override,
            insight_text=insight_text,
            ai_summary=ai_summary,
            created_by=created_by,
        )


__all__ = ["ForecastSnapshot"]
