from __future__ import annotations

import math
from datetime import date, datetime
from typing import Iterable, Sequence

from core.domain.change_order import ChangeOrder
from core.domain.cost import CostEntry
from core.domain.project import Project
from core.services.budget.calculator import compute_budget
from core.services.budget.change_orders import compute_approved_change_order_total
from core.services.budget.costs import compute_cost_to_date, sort_costs_by_date
from core.services.budget.insight import classify_insight
from core.services.budget.models import CompletionProjection, ForecastResult, ProjectionStatus

_SECONDS_PER_DAY = 24 * 60 * 60


def _as_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_burn_rate(costs: Sequence[CostEntry], cost_to_date: float) -> float:
    """
    Average spend per day between the earliest and latest economic cost dates.

    Fewer than two entries returns 0.0 ("not enough data"). The span is floored
    at one day so same-day entries divide by 1.
    """
    if len(costs) < 2:
        return 0.0
    ordered = sort_costs_by_date(costs)
    span = ordered[-1].date - ordered[0].date
    elapsed_days = max(1.0, span.total_seconds() / _SECONDS_PER_DAY)
    return float(cost_to_date) / elapsed_days


def compute_projected_total(cost_to_date: float, remaining_budget: float) -> float:
    return float(cost_to_date) + float(remaining_budget)


def compute_completion_projection(
    end_date: date | datetime | None,
    today: date | datetime,
    cost_to_date: float,
    burn_rate: float,
    total_budget: float,
) -> CompletionProjection:
    if end_date is None:
        return CompletionProjection(status=ProjectionStatus.NO_END_DATE)

    end_day = _as_day(end_date)
    today_day = _as_day(today)
    if end_day <= today_day:
        return CompletionProjection(status=ProjectionStatus.COMPLETED, end_date=end_day)

    days_until_end = math.ceil((end_day - today_day).total_seconds() / _SECONDS_PER_DAY)
    projected_cost = float(cost_to_date) + float(burn_rate) * days_until_end
    return CompletionProjection(
        status=ProjectionStatus.PROJECTED,
        end_date=end_day,
        days_until_end=days_until_end,
        projected_cost_at_completion=projected_cost,
        projected_remaining=float(total_budget) - projected_cost,
    )


def build_forecast(
    project: Project,
    costs: Iterable[CostEntry],
    change_orders: Iterable[ChangeOrder],
    today: date | datetime,
) -> ForecastResult:
    """Every derived figure for one project, computed from already-fetched records."""
    cost_list = list(costs)
    cost_to_date = compute_cost_to_date(cost_list)
    approved_total = compute_approved_change_order_total(change_orders)
    budget = compute_budget(
        project.baseline_budget,
        project.overhead_percent,
        approved_total,
        cost_to_date,
    )
    burn_rate = compute_burn_rate(cost_list, cost_to_date)
    completion = compute_completion_projection(
        project.end_date,
        today,
        cost_to_date,
        burn_rate,
        budget.total_budget,
    )
    insight = classify_insight(
        cost_to_date,
        budget.total_budget,
        budget.remaining_budget,
        burn_rate,
        len(cost_list),
    )
    return ForecastResult(
        project_id=project.id,
        currency=project.currency,
        baseline_budget=float(project.baseline_budget),
        overhead_percent=float(project.overhead_percent),
        approved_change_order_total=approved_total,
        cost_to_date=cost_to_date,
        cost_count=len(cost_list),
        budget=budget,
        burn_rate=burn_rate,
        projected_total=compute_projected_total(cost_to_date, budget.remaining_budget),
        completion=completion,
        insight=insight,
        as_of=_as_day(today),
    )


__all__ = [
    "compute_burn_rate",
    "compute_projected_total",
    "compute_completion_projection",
    "build_forecast",
]
