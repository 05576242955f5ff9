from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from core.domain.enums import ProjectStatus
from core.domain.identifiers import generate_id, utc_now


def overhead_for(baseline_budget: float, overhead_percent: float) -> float:
    return float(baseline_budget) * float(overhead_percent) / 100.0


@dataclass
class Project:
    id: str
    owner_id: str
    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.ACTIVE
    baseline_budget: float = 0.0
    overhead_percent: float = 0.0
    overhead_amount: float = 0.0
    currency: str = "USD"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    baseline_locked_at: Optional[datetime] = None
    collaborator_ids: list[str] = field(default_factory=list)
    pending_invites: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 1

    @property
    def is_baseline_locked(self) -> bool:
        return self.baseline_locked_at is not None

    def has_member(self, user_id: str) -> bool:
        return user_id == self.owner_id or user_id in self.collaborator_ids

    @staticmethod
    def create(
        owner_id: str,
        name: str,
        *,
        baseline_budget: float = 0.0,
        overhead_percent: float = 0.0,
        **extra,
    ) -> "Project":
        return Project(
            id=generate_id(),
            owner_id=owner_id,
            name=name,
            baseline_budget=baseline_budget,
            overhead_percent=overhead_percent,
            overhead_amount=overhead_for(baseline_budget, overhead_percent),
            **extra,
        )


__all__ = ["Project", "overhead_for"]
