from __future__ import annotations

from typing import Iterable

from core.domain.forecast import ForecastSnapshot


def next_forecast_version(existing_snapshots: Iterable[ForecastSnapshot]) -> int:
    return max((int(s.version) for s in existing_snapshots), default=0) + 1


def latest_snapshot(snapshots: Iterable[ForecastSnapshot]) -> ForecastSnapshot | None:
    return max(snapshots, key=lambda s: (s.created_at, s.version), default=None)


__all__ = ["next_forecast_version", "latest_snapshot"]
