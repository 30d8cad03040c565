"""
Travel DTOs.

Recommendations, itineraries and travel plans produced by the travel
planner and the AI travel advisor.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .weather_dto import WeatherDTO, WeatherForecastDTO


# =============================================================================
# PLAIN PLANNING
# =============================================================================

class TravelRecommendationDTO(BaseModel):
    """A suggested area or experience near a location."""

    # Completion responses may use camelCase keys.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    destination: str
    description: str
    activities: List[str] = Field(default_factory=list)
    best_time_to_visit: str = "Year-round"
    estimated_budget: str = "Not specified"
    transportation_options: List[str] = Field(default_factory=list)
    accommodation_suggestions: List[str] = Field(default_factory=list)
    duration: str = "Flexible"


class ActivityDTO(BaseModel):
    time: str
    name: str
    description: str
    location: str
    estimated_cost: Optional[str] = None
    duration: str


class MealDTO(BaseModel):
    time: str
    type: str
    restaurant: str
    cuisine: str
    estimated_cost: Optional[str] = None


class ItineraryItemDTO(BaseModel):
    day: int
    date: str
    activities: List[ActivityDTO] = Field(default_factory=list)
    meals: List[MealDTO] = Field(default_factory=list)
    accommodation: Optional[str] = None


class TravelPlanInputDTO(BaseModel):
    """Input for plan synthesis."""

    destination: str
    start_date: str
    end_date: str
    budget: Optional[str] = None
    travelers: int = Field(default=1, ge=1)
    interests: List[str] = Field(default_factory=list)
    travel_style: Optional[str] = None


class TravelPlanDTO(BaseModel):
    """A synthesized day-by-day travel plan."""

    id: str
    destination: str
    start_date: str
    end_date: str
    travelers: int = 1
    travel_style: Optional[str] = None
    itinerary: List[ItineraryItemDTO] = Field(default_factory=list)
    total_budget: str
    current_weather: Optional[WeatherDTO] = None
    weather_forecast: List[WeatherForecastDTO] = Field(default_factory=list)
    recommendations: List[TravelRecommendationDTO] = Field(default_factory=list)
    created_at: str


# =============================================================================
# AI-AUGMENTED PLANNING
# =============================================================================

class UserProfileDTO(BaseModel):
    """Traveler profile used to personalize AI output."""

    age: Optional[int] = Field(default=None, ge=0)
    interests: List[str] = Field(default_factory=list)
    travel_style: Optional[str] = None
    budget: Optional[str] = None
    group_size: Optional[int] = Field(default=None, ge=1)
    accessibility: Optional[str] = None


class AITravelRecommendationDTO(TravelRecommendationDTO):
    """Recommendation enriched by the completion service."""

    ai_insights: Optional[str] = None
    personalized_tips: List[str] = Field(default_factory=list)


class TravelInsightsDTO(BaseModel):
    """Destination insights from the completion service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    insights: str = ""
    hidden_gems: List[str] = Field(default_factory=list)
    local_tips: List[str] = Field(default_factory=list)
    cultural_notes: List[str] = Field(default_factory=list)
    seasonal_advice: str = ""


class AITravelPlanDTO(TravelPlanDTO):
    """Travel plan merged with the AI artifacts.

    ``partial_failures`` names the AI steps whose output is missing.
    """

    ai_recommendations: List[AITravelRecommendationDTO] = Field(default_factory=list)
    personalized_itinerary: Dict[str, Any] = Field(default_factory=dict)
    travel_insights: TravelInsightsDTO = Field(default_factory=TravelInsightsDTO)
    partial_failures: List[str] = Field(default_factory=list)
