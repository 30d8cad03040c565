"""Application layer - collaborator interfaces and DTOs."""

from .dtos import ExecutionDTO, LocationDTO, TravelPlanDTO, WeatherDTO
from .interfaces import (
    IAITravelAdvisor,
    ICompletionClient,
    IGeolocationProvider,
    ITravelPlanner,
    ITravelPlanStore,
    IWeatherProvider,
)

__all__ = [
    # DTOs
    "ExecutionDTO",
    "LocationDTO",
    "TravelPlanDTO",
    "WeatherDTO",
    # Interfaces
    "IAITravelAdvisor",
    "ICompletionClient",
    "IGeolocationProvider",
    "ITravelPlanner",
    "ITravelPlanStore",
    "IWeatherProvider",
]
