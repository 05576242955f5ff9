from .audit import AuditService
from .change_order import ChangeOrderService
from .cost import CostService
from .dashboard import DashboardService, PortfolioProjectRow, PortfolioSummary
from .forecast import ForecastService, NarrativeProvider
from .project import CollaborationService, InviteNotifier, ProjectService

__all__ = [
    "ProjectService",
    "CollaborationService",
    "InviteNotifier",
    "AuditService",
    "CostService",
    "ChangeOrderService",
    "ForecastService",
    "NarrativeProvider",
    "DashboardService",
    "PortfolioSummary",
    "PortfolioProjectRow",
]
