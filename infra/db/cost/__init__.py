from infra.db.cost.mapper import cost_from_orm, cost_to_orm
from infra.db.cost.repository import SqlAlchemyCostRepository

__all__ = ["cost_to_orm", "cost_from_orm", "SqlAlchemyCostRepository"]
