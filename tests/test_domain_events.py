import weakref

import pytest

from core.events.domain_events import domain_events
from core.events.signal import Signal
from core.models import ChangeOrderType


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.project_changed.connect(_handler)
    domain_events.project_changed.emit("p-1")
    domain_events.project_changed.disconnect(_handler)
    domain_events.project_changed.emit("p-2")

    assert seen == ["p-1"]


def test_signal_emit_prunes_dead_weak_proxies():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    class _Listener:
        def on_change(self, payload: str) -> None:
            seen.append(payload)

    listener = _Listener()
    proxy = weakref.proxy(listener)
    signal.connect(lambda payload: proxy.on_change(payload))
    signal.emit("p-1")

    del listener
    signal.emit("p-2")

    assert seen == ["p-1"]
    assert signal.subscriber_count == 0


def test_signal_emit_keeps_other_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)

    with pytest.raises(RuntimeError, match="boom"):
        signal.emit("x")
    assert signal.subscriber_count == 1


def test_services_emit_events_after_commit(services, project):
    seen: list[tuple[str, str]] = []
    handlers = {
        "costs": lambda pid: seen.append(("costs", pid)),
        "change_orders": lambda pid: seen.append(("change_orders", pid)),
        "forecasts": lambda pid: seen.append(("forecasts", pid)),
        "invites": lambda pid: seen.append(("invites", pid)),
    }
    domain_events.costs_changed.connect(handlers["costs"])
    domain_events.change_orders_changed.connect(handlers["change_orders"])
    domain_events.forecasts_changed.connect(handlers["forecasts"])
    domain_events.invites_changed.connect(handlers["invites"])
    try:
        services["cost_service"].add_cost(project.id, 10.0, "Labour")
        services["change_order_service"].add_change_order(project.id, ChangeOrderType.POSITIVE, 5.0, "Extra")
        services["forecast_service"].save_forecast(project.id)
        services["collaboration_service"].invite_collaborator(project.id, "ali@example.com")
    finally:
        domain_events.costs_changed.disconnect(handlers["costs"])
        domain_events.change_orders_changed.disconnect(handlers["change_orders"])
        domain_events.forecasts_changed.disconnect(handlers["forecasts"])
        domain_events.invites_changed.disconnect(handlers["invites"])

    assert seen == [
        ("costs", project.id),
        ("change_orders", project.id),
        ("forecasts", project.id),
        ("invites", project.id),
    ]
