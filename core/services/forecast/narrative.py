from __future__ import annotations

from typing import Any, Protocol

from core.models import Project
from core.services.budget import ForecastResult, round_money


class NarrativeProvider(Protocol):
    """Optional free-text summary source (e.g. an LLM client). Never changes figures."""

    def summarize(self, project: Project, forecast: ForecastResult) -> str | None: ...


def narrative_context(project: Project, forecast: ForecastResult) -> dict[str, Any]:
    """Plain data handed to a narrative provider."""
    currency = project.currency
    return {
        "project_id": project.id,
        "name": project.name,
        "currency": currency,
        "total_budget": round_money(forecast.total_budget, currency),
        "cost_to_date": round_money(forecast.cost_to_date, currency),
        "remaining_budget": round_money(forecast.remaining_budget, currency),
        "burn_rate": round_money(forecast.burn_rate, currency),
        "percent_spent": round(forecast.insight.percent_spent, 1),
        "insight": forecast.insight.text,
        "end_date": project.end_date.isoformat() if project.end_date else None,
    }


__all__ = ["NarrativeProvider", "narrative_context"]
