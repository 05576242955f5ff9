from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class ProjectionStatus(str, Enum):
    NO_END_DATE = "no-end-date"
    COMPLETED = "completed"
    PROJECTED = "projected"


class InsightCategory(str, Enum):
    NO_DATA = "no_data"
    OVER_BUDGET = "over_budget"
    SPEND_ONLY = "spend_only"
    APPROACHING_LIMIT = "approaching_limit"
    ON_TRACK = "on_track"


@dataclass(frozen=True)
class BudgetFigures:
    overhead_amount: float
    total_budget: float
    remaining_budget: float

    @property
    def is_over_budget(self) -> bool:
        return self.remaining_budget < 0


@dataclass(frozen=True)
class CompletionProjection:
    status: ProjectionStatus
    end_date: date | None = None
    days_until_end: int | None = None
    projected_cost_at_completion: float | None = None
    projected_remaining: float | None = None

    @property
    def is_overrun(self) -> bool:
        return self.projected_remaining is not None and self.projected_remaining < 0


@dataclass(frozen=True)
class ProjectInsight:
    category: InsightCategory
    text: str
    percent_spent: float
    days_of_runway: int | None = None
    # Also set for SPEND_ONLY insights once spend crosses the threshold.
    approaching_limit: bool = False


@dataclass(frozen=True)
class ForecastResult:
    project_id: str
    currency: str
    baseline_budget: float
    overhead_percent: float
    approved_change_order_total: float
    cost_to_date: float
    cost_count: int
    budget: BudgetFigures
    burn_rate: float
    projected_total: float
    completion: CompletionProjection
    insight: ProjectInsight
    as_of: date

    @property
    def total_budget(self) -> float:
        return self.budget.total_budget

    @property
    def remaining_budget(self) -> float:
        return self.budget.remaining_budget

    @property
    def overhead_amount(self) -> float:
        return self.budget.overhead_amount


__all__ = [
    "ProjectionStatus",
    "InsightCategory",
    "BudgetFigures",
    "CompletionProjection",
    "ProjectInsight",
    "ForecastResult",
]
