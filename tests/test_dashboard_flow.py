from __future__ import annotations

from datetime import date

import pytest

from core.models import ProjectStatus
from core.services.budget import InsightCategory


def test_portfolio_summary_counts_and_alerts(services, project):
    ps = services["project_service"]
    cs = services["cost_service"]
    collab = services["collaboration_service"]
    dashboard = services["dashboard_service"]

    # Over budget
    tight = ps.create_project("owner-1", "Tight", baseline_budget=1000.0)
    cs.add_cost(tight.id, 1200.0, "Labour", cost_date=date(2026, 3, 1))

    # Approaching the limit: 950 of 1000 over ten days
    close = ps.create_project("owner-1", "Close Call", baseline_budget=1000.0)
    cs.add_cost(close.id, 450.0, "Labour", cost_date=date(2026, 3, 1))
    cs.add_cost(close.id, 500.0, "Labour", cost_date=date(2026, 3, 11))

    old = ps.create_project("owner-1", "Done", baseline_budget=500.0)
    ps.archive_project(old.id)

    # Shared with owner-1, plus an invitation waiting on another project
    shared = ps.create_project("owner-2", "Partner Site", baseline_budget=100.0)
    collab.invite_collaborator(shared.id, "owner1@example.com")
    collab.accept_invite(shared.id, "owner-1", "owner1@example.com")
    invite_only = ps.create_project("owner-3", "Invite Only")
    collab.invite_collaborator(invite_only.id, "owner1@example.com")

    summary = dashboard.get_portfolio_summary("owner-1", email="owner1@example.com", today=date(2026, 3, 11))

    assert summary.active_count == 4
    assert summary.archived_count == 1
    assert summary.pending_invite_count == 1
    assert summary.total_active_budget == pytest.approx(11000.0 + 1000.0 + 1000.0 + 100.0)

    rows = {row.name: row for row in summary.projects}
    assert rows["Tight"].insight_category == InsightCategory.OVER_BUDGET
    assert rows["Close Call"].insight_category == InsightCategory.APPROACHING_LIMIT
    assert rows["Partner Site"].is_shared
    assert not rows["Tight"].is_shared
    assert rows["Done"].status == ProjectStatus.ARCHIVED

    assert 'Project "Tight" is over budget by 200.00 USD.' in summary.alerts
    assert 'Project "Close Call" is approaching its budget limit.' in summary.alerts
    assert "You have 1 pending project invitation(s)." in summary.alerts


def test_portfolio_summary_for_user_without_projects(services):
    summary = services["dashboard_service"].get_portfolio_summary("nobody")

    assert summary.active_count == 0
    assert summary.archived_count == 0
    assert summary.projects == []
    assert summary.alerts == []


def test_single_cost_near_the_limit_raises_dashboard_alert(services):
    ps = services["project_service"]
    cs = services["cost_service"]

    # One cost gives no burn rate, so the insight is spend-only.
    lone = ps.create_project("owner-1", "Lone Invoice", baseline_budget=1000.0)
    cs.add_cost(lone.id, 950.0, "Materials", cost_date=date(2026, 3, 1))

    summary = services["dashboard_service"].get_portfolio_summary("owner-1", today=date(2026, 3, 2))

    row = summary.projects[0]
    assert row.insight_category == InsightCategory.SPEND_ONLY
    assert row.approaching_limit
    assert summary.alerts == ['Project "Lone Invoice" is approaching its budget limit.']


def test_over_budget_alert_uses_currency_minor_unit(services):
    ps = services["project_service"]
    yen = ps.create_project("owner-1", "Osaka Depot", baseline_budget=10000.0, currency="JPY")
    services["cost_service"].add_cost(yen.id, 11234.6, "Labour", cost_date=date(2026, 3, 1))

    summary = services["dashboard_service"].get_portfolio_summary("owner-1")

    assert summary.alerts == ['Project "Osaka Depot" is over budget by 1,235 JPY.']
