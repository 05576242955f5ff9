from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from core.services.budget.models import BudgetFigures

# ISO 4217 currencies without two minor digits; everything else rounds to cents.
_MINOR_UNITS: dict[str, int] = {
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "CLP": 0,
    "ISK": 0,
    "BHD": 3,
    "KWD": 3,
    "OMR": 3,
    "JOD": 3,
    "TND": 3,
}


def compute_overhead_amount(baseline_budget: float, overhead_percent: float) -> float:
    return float(baseline_budget) * float(overhead_percent) / 100.0


def compute_budget(
    baseline_budget: float,
    overhead_percent: float,
    approved_change_order_total: float,
    cost_to_date: float,
) -> BudgetFigures:
    """
    Total and remaining budget from baseline, overhead and approved change orders.

    No rounding happens here: negative totals and negative remaining budgets are
    legitimate results (over budget), not errors.
    """
    overhead_amount = compute_overhead_amount(baseline_budget, overhead_percent)
    total_budget = float(baseline_budget) + overhead_amount + float(approved_change_order_total)
    return BudgetFigures(
        overhead_amount=overhead_amount,
        total_budget=total_budget,
        remaining_budget=total_budget - float(cost_to_date),
    )


def minor_unit_digits(currency: str | None) -> int:
    return _MINOR_UNITS.get((currency or "").strip().upper(), 2)


def round_money(amount: float, currency: str | None = None) -> float:
    """Presentation-only rounding to the currency's minor unit."""
    digits = minor_unit_digits(currency)
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_money(amount: float, currency: str | None = None) -> str:
    """Rounded amount with thousands separators and the currency's minor digits."""
    return f"{round_money(amount, currency):,.{minor_unit_digits(currency)}f}"


__all__ = [
    "compute_overhead_amount",
    "compute_budget",
    "minor_unit_digits",
    "round_money",
    "format_money",
]
