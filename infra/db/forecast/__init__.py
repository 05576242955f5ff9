from infra.db.forecast.mapper import forecast_from_orm, forecast_to_orm
from infra.db.forecast.repository import SqlAlchemyForecastRepository

__all__ = ["forecast_to_orm", "forecast_from_orm", "SqlAlchemyForecastRepository"]
