from infra.db.change_order.mapper import change_order_from_orm, change_order_to_orm
from infra.db.change_order.repository import SqlAlchemyChangeOrderRepository

__all__ = ["change_order_to_orm", "change_order_from_orm", "SqlAlchemyChangeOrderRepository"]
