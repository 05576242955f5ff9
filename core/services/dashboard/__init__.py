from .models import PortfolioProjectRow, PortfolioSummary
from .service import DashboardService

__all__ = [
    "DashboardService",
    "PortfolioSummary",
    "PortfolioProjectRow",
]
