from core.services.change_order.service import ChangeOrderService

__all__ = ["ChangeOrderService"]
