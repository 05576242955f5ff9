from __future__ import annotations

from typing import Iterable

from core.domain.change_order import ChangeOrder
from core.domain.enums import ChangeOrderStatus, ChangeOrderType


def compute_approved_change_order_total(change_orders: Iterable[ChangeOrder]) -> float:
    """Signed sum of approved change orders; pending and rejected records are ignored."""
    total = 0.0
    for order in change_orders:
        if order.status != ChangeOrderStatus.APPROVED:
            continue
        amount = float(order.amount or 0.0)
        if order.type == ChangeOrderType.NEGATIVE:
            total -= amount
        else:
            total += amount
    return total


def split_by_status(change_orders: Iterable[ChangeOrder]) -> dict[ChangeOrderStatus, list[ChangeOrder]]:
    buckets: dict[ChangeOrderStatus, list[ChangeOrder]] = {status: [] for status in ChangeOrderStatus}
    for order in change_orders:
        buckets[order.status].append(order)
    return buckets


__all__ = ["compute_approved_change_order_total", "split_by_status"]
