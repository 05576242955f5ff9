from dataclasses import dataclass, field
from datetime import date
from typing import List

from core.models import AuditLogEntry, ChangeOrder, CostEntry, ForecastSnapshot, Project
from core.services.budget import ForecastResult


@dataclass
class SpendChartContext:
    project_name: str
    currency: str
    points: List[tuple]
    total_budget: float
    projected_cost_at_completion: float | None = None
    end_date: date | None = None


@dataclass
class ForecastReportContext:
    project: Project
    forecast: ForecastResult
    costs: List[CostEntry]
    change_orders: List[ChangeOrder]
    snapshots: List[ForecastSnapshot]
    as_of: date


@dataclass
class PdfReportContext(ForecastReportContext):
    chart_png_path: str = ""


@dataclass
class AuditExportContext:
    project_id: str
    entries: List[AuditLogEntry] = field(default_factory=list)
