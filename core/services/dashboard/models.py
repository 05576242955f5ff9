from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.models import ProjectStatus
from core.services.budget import InsightCategory


@dataclass
class PortfolioProjectRow:
    project_id: str
    name: str
    status: ProjectStatus
    currency: str
    total_budget: float
    cost_to_date: float
    remaining_budget: float
    insight_category: InsightCategory
    approaching_limit: bool
    is_shared: bool


@dataclass
class PortfolioSummary:
    user_id: str
    active_count: int
    archived_count: int
    total_active_budget: float
    pending_invite_count: int
    projects: List[PortfolioProjectRow] = field(default_factory=list)
    alerts: List[str] = field(default_factory=list)
