from __future__ import annotations

import os

BASELINE_LOCK_MODES = ("advisory", "enforced")


def baseline_lock_mode() -> str:
    mode = (os.getenv("PB_BASELINE_LOCK_MODE", "advisory") or "").strip().lower()
    if mode not in BASELINE_LOCK_MODES:
        return "advisory"
    return mode


def is_baseline_lock_enforced() -> bool:
    return baseline_lock_mode() == "enforced"


__all__ = ["BASELINE_LOCK_MODES", "baseline_lock_mode", "is_baseline_lock_enforced"]
