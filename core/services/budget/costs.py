from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from core.domain.cost import CostEntry


def compute_cost_to_date(costs: Iterable[CostEntry]) -> float:
    return float(sum(float(cost.amount or 0.0) for cost in costs))


def sort_costs_by_date(costs: Iterable[CostEntry]) -> list[CostEntry]:
    """Ascending by economic date; ties keep input order. Input is not mutated."""
    return sorted(costs, key=lambda cost: cost.date)


def cumulative_spend(costs: Sequence[CostEntry]) -> list[tuple[date, float]]:
    """(date, running total) per cost, in date order. Used by the spend chart."""
    running = 0.0
    points: list[tuple[date, float]] = []
    for cost in sort_costs_by_date(costs):
        running += float(cost.amount or 0.0)
        points.append((cost.date, running))
    return points


__all__ = ["compute_cost_to_date", "sort_costs_by_date", "cumulative_spend"]
