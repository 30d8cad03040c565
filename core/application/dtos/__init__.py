"""Application DTOs."""

from .execution_dto import ExecutionDTO, PurgeResultDTO, StepDTO
from .location_dto import LocationDTO
from .recommendation_dto import (
    AIRecommendationRequestDTO,
    InsightsRequestDTO,
    ItineraryRequestDTO,
    RecommendationRequestDTO,
)
from .travel_dto import (
    ActivityDTO,
    AITravelPlanDTO,
    AITravelRecommendationDTO,
    ItineraryItemDTO,
    MealDTO,
    TravelInsightsDTO,
    TravelPlanDTO,
    TravelPlanInputDTO,
    TravelRecommendationDTO,
    UserProfileDTO,
)
from .weather_dto import TripWeatherDTO, WeatherDTO, WeatherForecastDTO
from .workflow_dto import (
    AITravelPlanningRequestDTO,
    LocationWorkflowRequestDTO,
    TravelPlanningRequestDTO,
    WeatherWorkflowRequestDTO,
)

__all__ = [
    "ActivityDTO",
    "AITravelPlanDTO",
    "AITravelPlanningRequestDTO",
    "AIRecommendationRequestDTO",
    "AITravelRecommendationDTO",
    "ExecutionDTO",
    "InsightsRequestDTO",
    "ItineraryItemDTO",
    "ItineraryRequestDTO",
    "LocationDTO",
    "LocationWorkflowRequestDTO",
    "MealDTO",
    "PurgeResultDTO",
    "RecommendationRequestDTO",
    "StepDTO",
    "TravelInsightsDTO",
    "TravelPlanDTO",
    "TravelPlanInputDTO",
    "TravelPlanningRequestDTO",
    "TravelRecommendationDTO",
    "TripWeatherDTO",
    "UserProfileDTO",
    "WeatherDTO",
    "WeatherForecastDTO",
    "WeatherWorkflowRequestDTO",
]
