from __future__ import annotations

from datetime import date, timedelta

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.models import AuditAction, ChangeOrderType
from core.services.budget import InsightCategory, ProjectionStatus
from core.services.forecast import narrative_context
from infra.services import build_service_graph


def test_forecast_without_costs_reports_no_data(services, project):
    forecast = services["forecast_service"].get_forecast(project.id)

    assert forecast.cost_to_date == 0.0
    assert forecast.burn_rate == 0.0
    assert forecast.total_budget == pytest.approx(11000.0)
    assert forecast.projected_total == pytest.approx(11000.0)
    assert forecast.completion.status == ProjectionStatus.NO_END_DATE
    assert forecast.insight.category == InsightCategory.NO_DATA


def test_forecast_completion_uses_project_end_date(services):
    ps = services["project_service"]
    cs = services["cost_service"]
    fs = services["forecast_service"]
    start = date(2026, 4, 1)

    project = ps.create_project(
        "owner-1",
        "Roof Repair",
        baseline_budget=1000.0,
        start_date=start,
        end_date=start + timedelta(days=30),
    )
    cs.add_cost(project.id, 100.0, "Labour", cost_date=start)
    cs.add_cost(project.id, 100.0, "Labour", cost_date=start + timedelta(days=10))

    running = fs.get_forecast(project.id, today=start + timedelta(days=10))
    assert running.burn_rate == pytest.approx(20.0)
    assert running.completion.status == ProjectionStatus.PROJECTED
    assert running.completion.days_until_end == 20
    assert running.completion.projected_cost_at_completion == pytest.approx(600.0)
    assert running.completion.projected_remaining == pytest.approx(400.0)

    closed = fs.get_forecast(project.id, today=start + timedelta(days=45))
    assert closed.completion.status == ProjectionStatus.COMPLETED


def test_save_forecast_assigns_sequential_versions(services, project):
    cs = services["cost_service"]
    fs = services["forecast_service"]
    audit = services["audit_service"]

    cs.add_cost(project.id, 500.0, "Labour", cost_date=date(2026, 3, 1))
    first = fs.save_forecast(project.id)
    cs.add_cost(project.id, 700.0, "Labour", cost_date=date(2026, 3, 5))
    second = fs.save_forecast(project.id, manual_override=12500.0, ai_summary="Steady spend.")

    assert (first.version, second.version) == (1, 2)
    assert first.cost_to_date == pytest.approx(500.0)
    assert second.cost_to_date == pytest.approx(1200.0)
    assert second.burn_rate == pytest.approx(300.0)
    assert second.manual_override == 12500.0
    assert second.ai_summary == "Steady spend."
    assert second.insight_text.startswith("On track.")
    assert second.created_by == "owner-1"

    latest = fs.get_latest_forecast(project.id)
    assert latest.id == second.id

    updates = [e for e in audit.list_recent(project.id) if e.action == AuditAction.FORECAST_UPDATED]
    assert sorted(e.metadata["version"] for e in updates) == [1, 2]


def test_forecast_history_is_newest_first_and_limited(services, project):
    fs = services["forecast_service"]

    for _ in range(12):
        fs.save_forecast(project.id)

    history = fs.list_forecasts(project.id)
    assert [s.version for s in history] == list(range(12, 2, -1))
    assert [s.version for s in fs.list_forecasts(project.id, limit=3)] == [12, 11, 10]


def test_forecast_versions_are_per_project(services, project):
    ps = services["project_service"]
    fs = services["forecast_service"]
    other = ps.create_project("owner-1", "Other", baseline_budget=50.0)

    fs.save_forecast(project.id)
    fs.save_forecast(project.id)

    assert fs.save_forecast(other.id).version == 1
    assert fs.get_latest_forecast(other.id).version == 1


def test_save_forecast_rejects_non_numeric_override(services, project):
    with pytest.raises(ValidationError) as exc:
        services["forecast_service"].save_forecast(project.id, manual_override="lots")
    assert exc.value.code == "FORECAST_OVERRIDE_INVALID"
    assert services["forecast_service"].list_forecasts(project.id) == []


def test_forecast_for_unknown_project(services):
    with pytest.raises(NotFoundError):
        services["forecast_service"].get_forecast("missing")
    with pytest.raises(NotFoundError):
        services["forecast_service"].save_forecast("missing")
    assert services["forecast_service"].get_latest_forecast("missing") is None


class _Narrator:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = 0

    def summarize(self, project, forecast):
        self.calls += 1
        if self.fail:
            raise RuntimeError("narrative backend offline")
        ctx = narrative_context(project, forecast)
        return f"{ctx['name']}: {forecast.insight.category.value}"


def test_narrative_provider_fills_summary(session):
    narrator = _Narrator()
    graph = build_service_graph(session, narrative_provider=narrator)
    project = graph.project_service.create_project("owner-1", "Narrated", baseline_budget=100.0)

    snapshot = graph.forecast_service.save_forecast(project.id)
    assert snapshot.ai_summary == "Narrated: no_data"

    explicit = graph.forecast_service.save_forecast(project.id, ai_summary="Written by hand.")
    assert explicit.ai_summary == "Written by hand."
    assert narrator.calls == 1


def test_narrative_provider_failure_keeps_deterministic_insight(session):
    graph = build_service_graph(session, narrative_provider=_Narrator(fail=True))
    project = graph.project_service.create_project("owner-1", "Quiet", baseline_budget=100.0)
    graph.change_order_service.add_change_order(project.id, ChangeOrderType.POSITIVE, 5.0, "Pending")

    snapshot = graph.forecast_service.save_forecast(project.id)
    assert snapshot.ai_summary is None
    assert snapshot.insight_text == "No costs recorded yet. Add costs to track spending and burn rate."
