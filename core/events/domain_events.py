"""Track changes in projects, costs, change orders and forecasts so readers can refresh."""
from __future__ import annotations

from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.project_changed: Signal[str] = Signal()        # project_id
        self.costs_changed: Signal[str] = Signal()          # project_id
        self.change_orders_changed: Signal[str] = Signal()  # project_id
        self.forecasts_changed: Signal[str] = Signal()      # project_id
        self.invites_changed: Signal[str] = Signal()        # project_id


# SINGLE global instance
domain_events = DomainEvents()

__all__ = ["DomainEvents", "domain_events"]
