from core.services.cost.service import CostService

__all__ = ["CostService"]
