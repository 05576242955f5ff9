from __future__ import annotations

import math

from core.services.budget.models import InsightCategory, ProjectInsight

APPROACHING_LIMIT_PERCENT = 90.0


def _amount(value: float) -> str:
    return f"{value:,.2f}"


def compute_percent_spent(cost_to_date: float, total_budget: float) -> float:
    # Zero or negative budgets collapse to 0%.
    if total_budget > 0:
        return cost_to_date / total_budget * 100.0
    return 0.0


def classify_insight(
    cost_to_date: float,
    total_budget: float,
    remaining_budget: float,
    burn_rate: float,
    cost_count: int,
) -> ProjectInsight:
    """
    Deterministic project health narrative.

    Rules are evaluated in priority order and the first match wins:

    1. no costs recorded
    2. over budget (remaining < 0), whatever the burn rate
    3. no usable burn rate: percent spent only, flagged when >= 90%
    4. runway estimate, either "approaching budget limit" (>= 90%) or "on track"
    """
    percent_spent = compute_percent_spent(cost_to_date, total_budget)

    if cost_count == 0:
        return ProjectInsight(
            category=InsightCategory.NO_DATA,
            text="No costs recorded yet. Add costs to track spending and burn rate.",
            percent_spent=percent_spent,
        )

    if remaining_budget < 0:
        return ProjectInsight(
            category=InsightCategory.OVER_BUDGET,
            text=(
                f"Over budget by {_amount(-remaining_budget)}. "
                "Review costs and consider adjustments."
            ),
            percent_spent=percent_spent,
        )

    approaching = percent_spent >= APPROACHING_LIMIT_PERCENT

    if burn_rate <= 0:
        if approaching:
            text = (
                f"Approaching budget limit. {percent_spent:.0f}% of budget spent. "
                "Add more cost entries to estimate burn rate."
            )
        else:
            text = (
                f"{percent_spent:.0f}% of budget spent. "
                "Add at least two cost entries with different dates to estimate burn rate."
            )
        return ProjectInsight(
            category=InsightCategory.SPEND_ONLY,
            text=text,
            percent_spent=percent_spent,
            approaching_limit=approaching,
        )

    days_of_runway = math.floor(remaining_budget / burn_rate)
    runway = (
        f"At current burn rate of {_amount(burn_rate)}/day, remaining budget will last "
        f"approximately {days_of_runway} days."
    )
    if approaching:
        return ProjectInsight(
            category=InsightCategory.APPROACHING_LIMIT,
            text=f"Approaching budget limit. {percent_spent:.0f}% spent. {runway}",
            percent_spent=percent_spent,
            days_of_runway=days_of_runway,
            approaching_limit=True,
        )
    return ProjectInsight(
        category=InsightCategory.ON_TRACK,
        text=f"On track. {percent_spent:.0f}% of budget spent. {runway}",
        percent_spent=percent_spent,
        days_of_runway=days_of_runway,
    )


def compute_insight(
    cost_to_date: float,
    total_budget: float,
    remaining_budget: float,
    burn_rate: float,
    cost_count: int,
) -> str:
    return classify_insight(
        cost_to_date,
        total_budget,
        remaining_budget,
        burn_rate,
        cost_count,
    ).text


__all__ = [
    "APPROACHING_LIMIT_PERCENT",
    "compute_percent_spent",
    "classify_insight",
    "compute_insight",
]
