from core.domain.audit import AuditLogEntry
from core.domain.change_order import ChangeOrder
from core.domain.cost import CostEntry
from core.domain.enums import (
    AuditAction,
    ChangeOrderStatus,
    ChangeOrderType,
    DeductionType,
    ProjectStatus,
)
from core.domain.forecast import ForecastSnapshot
from core.domain.identifiers import generate_id, utc_now
from core.domain.project import Project, overhead_for

__all__ = [
    "generate_id",
    "utc_now",
    "ProjectStatus",
    "DeductionType",
    "ChangeOrderType",
    "ChangeOrderStatus",
    "AuditAction",
    "Project",
    "overhead_for",
    "CostEntry",
    "ChangeOrder",
    "ForecastSnapshot",
    "AuditLogEntry",
]
