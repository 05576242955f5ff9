"""Budget ledger and forecasting engine: pure functions over in-memory records."""
from .calculator import (
    compute_budget,
    compute_overhead_amount,
    format_money,
    minor_unit_digits,
    round_money,
)
from .change_orders import compute_approved_change_order_total, split_by_status
from .costs import compute_cost_to_date, cumulative_spend, sort_costs_by_date
from .forecast import (
    build_forecast,
    compute_burn_rate,
    compute_completion_projection,
    compute_projected_total,
)
from .insight import APPROACHING_LIMIT_PERCENT, classify_insight, compute_insight, compute_percent_spent
from .models import (
    BudgetFigures,
    CompletionProjection,
    ForecastResult,
    InsightCategory,
    ProjectInsight,
    ProjectionStatus,
)
from .versioning import latest_snapshot, next_forecast_version

__all__ = [
    "compute_approved_change_order_total",
    "split_by_status",
    "compute_cost_to_date",
    "sort_costs_by_date",
    "cumulative_spend",
    "compute_overhead_amount",
    "compute_budget",
    "minor_unit_digits",
    "round_money",
    "format_money",
    "compute_burn_rate",
    "compute_projected_total",
    "compute_completion_projection",
    "build_forecast",
    "APPROACHING_LIMIT_PERCENT",
    "compute_percent_spent",
    "classify_insight",
    "compute_insight",
    "next_forecast_version",
    "latest_snapshot",
    "BudgetFigures",
    "CompletionProjection",
    "ForecastResult",
    "InsightCategory",
    "ProjectInsight",
    "ProjectionStatus",
]
