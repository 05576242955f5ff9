from core.services.forecast.narrative import NarrativeProvider, narrative_context
from core.services.forecast.service import DEFAULT_FORECAST_HISTORY, ForecastService

__all__ = ["ForecastService", "NarrativeProvider", "narrative_context", "DEFAULT_FORECAST_HISTORY"]
