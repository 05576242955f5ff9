from __future__ import annotations

import random
from datetime import date, datetime, timedelta, timezone

import pytest

from core.models import ChangeOrder, ChangeOrderStatus, ChangeOrderType, CostEntry, ForecastSnapshot, Project
from core.services.budget import (
    InsightCategory,
    ProjectionStatus,
    build_forecast,
    classify_insight,
    compute_approved_change_order_total,
    compute_budget,
    compute_burn_rate,
    compute_completion_projection,
    compute_cost_to_date,
    compute_insight,
    compute_percent_spent,
    compute_projected_total,
    cumulative_spend,
    format_money,
    latest_snapshot,
    next_forecast_version,
    round_money,
    split_by_status,
)

DAY0 = date(2026, 3, 2)


def _cost(amount: float, day: date = DAY0) -> CostEntry:
    return CostEntry.create("p-1", amount, "Materials", day)


def _order(
    amount: float,
    type: ChangeOrderType = ChangeOrderType.POSITIVE,
    status: ChangeOrderStatus = ChangeOrderStatus.APPROVED,
) -> ChangeOrder:
    order = ChangeOrder.create("p-1", type, amount, "scope change")
    order.status = status
    return order


# ------------------------------------------------------------------
# Change order ledger
# ------------------------------------------------------------------

def test_approved_total_is_independent_of_order():
    orders = [
        _order(500.0),
        _order(200.0, ChangeOrderType.NEGATIVE),
        _order(75.5),
        _order(40.0, ChangeOrderType.NEGATIVE),
    ]
    expected = compute_approved_change_order_total(orders)
    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(orders)
        rng.shuffle(shuffled)
        assert compute_approved_change_order_total(shuffled) == pytest.approx(expected)
    assert expected == pytest.approx(335.5)


def test_pending_and_rejected_orders_do_not_move_the_total():
    approved = [_order(500.0), _order(200.0, ChangeOrderType.NEGATIVE)]
    noise = [
        _order(10_000.0, status=ChangeOrderStatus.PENDING),
        _order(999.0, ChangeOrderType.NEGATIVE, status=ChangeOrderStatus.REJECTED),
        _order(1.0, status=ChangeOrderStatus.REJECTED),
    ]
    assert compute_approved_change_order_total(approved + noise) == compute_approved_change_order_total(approved)


def test_empty_change_order_list_totals_zero():
    assert compute_approved_change_order_total([]) == 0.0


def test_split_by_status_buckets_every_status():
    orders = [_order(1.0), _order(2.0, status=ChangeOrderStatus.PENDING)]
    buckets = split_by_status(orders)
    assert set(buckets) == set(ChangeOrderStatus)
    assert len(buckets[ChangeOrderStatus.APPROVED]) == 1
    assert len(buckets[ChangeOrderStatus.PENDING]) == 1
    assert buckets[ChangeOrderStatus.REJECTED] == []


# ------------------------------------------------------------------
# Cost ledger and budget calculator
# ------------------------------------------------------------------

def test_cost_to_date_sums_regardless_of_order():
    costs = [_cost(100.0), _cost(250.25, DAY0 + timedelta(days=3)), _cost(49.75, DAY0 - timedelta(days=1))]
    assert compute_cost_to_date(costs) == pytest.approx(400.0)
    assert compute_cost_to_date(list(reversed(costs))) == pytest.approx(400.0)
    assert compute_cost_to_date([]) == 0.0


def test_cumulative_spend_follows_economic_date():
    costs = [_cost(300.0, DAY0 + timedelta(days=4)), _cost(100.0, DAY0)]
    assert cumulative_spend(costs) == [(DAY0, 100.0), (DAY0 + timedelta(days=4), 400.0)]


def test_scenario_a_budget_with_overhead_and_change_orders():
    orders = [_order(500.0), _order(200.0, ChangeOrderType.NEGATIVE)]
    costs = [_cost(1000.0), _cost(2000.0, DAY0 + timedelta(days=2))]

    figures = compute_budget(
        10000.0,
        10.0,
        compute_approved_change_order_total(orders),
        compute_cost_to_date(costs),
    )

    assert figures.overhead_amount == pytest.approx(1000.0)
    assert figures.total_budget == pytest.approx(11300.0)
    assert figures.remaining_budget == pytest.approx(8300.0)
    assert not figures.is_over_budget


def test_total_budget_may_go_negative_without_error():
    figures = compute_budget(100.0, 0.0, -500.0, 0.0)
    assert figures.total_budget == pytest.approx(-400.0)
    assert figures.remaining_budget == pytest.approx(-400.0)
    assert figures.is_over_budget


def test_round_money_uses_currency_minor_unit():
    assert round_money(1234.565, "USD") == 1234.57
    assert round_money(1234.5, "JPY") == 1235.0
    assert round_money(1.0005, "KWD") == 1.001
    assert round_money(2.345) == 2.35


def test_format_money_prints_minor_unit_digits():
    assert format_money(1234.565, "USD") == "1,234.57"
    assert format_money(1234.5, "JPY") == "1,235"
    assert format_money(1.0005, "KWD") == "1.001"
    assert format_money(-200.0) == "-200.00"


# ------------------------------------------------------------------
# Burn rate and completion projection
# ------------------------------------------------------------------

def test_burn_rate_needs_two_costs():
    assert compute_burn_rate([], 0.0) == 0.0
    assert compute_burn_rate([_cost(500.0)], 500.0) == 0.0


def test_burn_rate_same_day_costs_divide_by_one_day():
    costs = [_cost(100.0), _cost(50.0)]
    assert compute_burn_rate(costs, 150.0) == pytest.approx(150.0)


def test_scenario_b_burn_rate_over_four_days():
    costs = [_cost(300.0, DAY0 + timedelta(days=4)), _cost(100.0, DAY0)]
    cost_to_date = compute_cost_to_date(costs)

    assert cost_to_date == pytest.approx(400.0)
    assert compute_burn_rate(costs, cost_to_date) == pytest.approx(100.0)


def test_burn_rate_sorts_instead_of_trusting_input_order():
    costs = [
        _cost(10.0, DAY0 + timedelta(days=5)),
        _cost(10.0, DAY0 + timedelta(days=10)),
        _cost(10.0, DAY0),
    ]
    original = list(costs)
    assert compute_burn_rate(costs, 30.0) == pytest.approx(3.0)
    assert costs == original


def test_completion_without_end_date():
    result = compute_completion_projection(None, DAY0, 100.0, 10.0, 1000.0)
    assert result.status == ProjectionStatus.NO_END_DATE
    assert result.days_until_end is None


def test_completion_on_or_after_end_date_is_completed():
    assert compute_completion_projection(DAY0, DAY0, 100.0, 10.0, 1000.0).status == ProjectionStatus.COMPLETED
    past = compute_completion_projection(DAY0 - timedelta(days=3), DAY0, 100.0, 10.0, 1000.0)
    assert past.status == ProjectionStatus.COMPLETED
    assert past.projected_cost_at_completion is None


def test_completion_projects_cost_to_end_date():
    result = compute_completion_projection(DAY0 + timedelta(days=20), DAY0, 400.0, 100.0, 2000.0)

    assert result.status == ProjectionStatus.PROJECTED
    assert result.days_until_end == 20
    assert result.projected_cost_at_completion == pytest.approx(2400.0)
    assert result.projected_remaining == pytest.approx(-400.0)
    assert result.is_overrun


def test_projected_total_equals_total_budget():
    figures = compute_budget(1000.0, 5.0, 0.0, 420.0)
    assert compute_projected_total(420.0, figures.remaining_budget) == pytest.approx(figures.total_budget)


# ------------------------------------------------------------------
# Insight classifier
# ------------------------------------------------------------------

def test_insight_no_costs_wins_over_everything():
    insight = classify_insight(0.0, 1000.0, -50.0, 25.0, 0)
    assert insight.category == InsightCategory.NO_DATA
    assert insight.text == "No costs recorded yet. Add costs to track spending and burn rate."


def test_scenario_c_over_budget_regardless_of_burn_rate():
    figures = compute_budget(1000.0, 0.0, 0.0, 1200.0)
    assert figures.remaining_budget == pytest.approx(-200.0)

    text = compute_insight(1200.0, figures.total_budget, figures.remaining_budget, 5.0, 3)
    assert text == "Over budget by 200.00. Review costs and consider adjustments."


def test_over_budget_even_when_percent_spent_is_low():
    # Negative total budget collapses percent spent to 0 but remaining is still negative.
    insight = classify_insight(10.0, -100.0, -110.0, 2.0, 2)
    assert insight.category == InsightCategory.OVER_BUDGET
    assert insight.percent_spent == 0.0


def test_spend_only_message_without_burn_rate():
    insight = classify_insight(400.0, 1000.0, 600.0, 0.0, 1)
    assert insight.category == InsightCategory.SPEND_ONLY
    assert insight.text == (
        "40% of budget spent. Add at least two cost entries with different dates to estimate burn rate."
    )
    assert not insight.approaching_limit


def test_spend_only_flags_approaching_limit():
    insight = classify_insight(920.0, 1000.0, 80.0, 0.0, 1)
    assert insight.category == InsightCategory.SPEND_ONLY
    assert insight.text.startswith("Approaching budget limit. 92% of budget spent.")
    assert insight.approaching_limit


def test_scenario_d_approaching_limit_with_runway():
    insight = classify_insight(950.0, 1000.0, 50.0, 10.0, 5)

    assert insight.percent_spent == pytest.approx(95.0)
    assert insight.category == InsightCategory.APPROACHING_LIMIT
    assert insight.days_of_runway == 5
    assert insight.approaching_limit
    assert insight.text == (
        "Approaching budget limit. 95% spent. At current burn rate of 10.00/day, "
        "remaining budget will last approximately 5 days."
    )


def test_on_track_runway_is_floored():
    insight = classify_insight(300.0, 1000.0, 700.0, 75.0, 4)
    assert insight.category == InsightCategory.ON_TRACK
    assert insight.days_of_runway == 9
    assert not insight.approaching_limit
    assert insight.text.startswith("On track. 30% of budget spent.")


def test_percent_spent_guards_zero_budget():
    assert compute_percent_spent(100.0, 0.0) == 0.0
    assert compute_percent_spent(50.0, 200.0) == pytest.approx(25.0)


# ------------------------------------------------------------------
# Whole forecast
# ------------------------------------------------------------------

def test_build_forecast_is_repeatable_and_leaves_inputs_untouched():
    project = Project.create(
        "owner-1",
        "Depot",
        baseline_budget=10000.0,
        overhead_percent=10.0,
        end_date=DAY0 + timedelta(days=30),
    )
    costs = [_cost(300.0, DAY0 + timedelta(days=4)), _cost(100.0, DAY0)]
    orders = [_order(500.0), _order(200.0, ChangeOrderType.NEGATIVE), _order(50.0, status=ChangeOrderStatus.PENDING)]
    costs_before = list(costs)

    first = build_forecast(project, costs, orders, DAY0 + timedelta(days=4))
    second = build_forecast(project, costs, orders, DAY0 + timedelta(days=4))

    assert first == second
    assert costs == costs_before
    assert first.total_budget == pytest.approx(11300.0)
    assert first.cost_to_date == pytest.approx(400.0)
    assert first.burn_rate == pytest.approx(100.0)
    assert first.completion.days_until_end == 26
    assert first.completion.projected_cost_at_completion == pytest.approx(3000.0)
    assert first.insight.category == InsightCategory.ON_TRACK


# ------------------------------------------------------------------
# Forecast versioning
# ------------------------------------------------------------------

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def _snap(version: int, created_at: datetime = T0) -> ForecastSnapshot:
    return ForecastSnapshot(
        id=f"s-{version}",
        project_id="p-1",
        version=version,
        cost_to_date=0.0,
        burn_rate=0.0,
        remaining_budget=0.0,
        projected_total=0.0,
        created_at=created_at,
    )


def test_first_forecast_version_is_one():
    assert next_forecast_version([]) == 1


def test_next_version_follows_the_highest_not_the_count():
    assert next_forecast_version([_snap(1), _snap(3)]) == 4
    assert next_forecast_version([_snap(5), _snap(2), _snap(4)]) == 6


def test_latest_snapshot_prefers_newest_then_highest_version():
    older = _snap(7, T0)
    newer = _snap(2, T0 + timedelta(minutes=5))
    tie = _snap(3, T0 + timedelta(minutes=5))

    assert latest_snapshot([]) is None
    assert latest_snapshot([newer, older]) is newer
    assert latest_snapshot([tie, older, newer]) is tie
