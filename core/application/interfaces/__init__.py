"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.application.dtos.location_dto import LocationDTO
from core.application.dtos.travel_dto import (
    AITravelRecommendationDTO,
    TravelInsightsDTO,
    TravelPlanDTO,
    TravelPlanInputDTO,
    TravelRecommendationDTO,
    UserProfileDTO,
)
from core.application.dtos.weather_dto import WeatherDTO, WeatherForecastDTO


class IGeolocationProvider(ABC):
    """
    Interface for IP geolocation.

    Allows the workflow engine to resolve IP addresses without
    depending on a specific geolocation API.
    """

    @abstractmethod
    def is_valid_ip(self, ip: str) -> bool:
        """
        Check the syntactic form of an IP address (IPv4 or IPv6).

        Args:
            ip: Address to check

        Returns:
            True if the address is well formed
        """
        pass

    @abstractmethod
    async def get_location(self, ip: str, api_key: str) -> LocationDTO:
        """
        Resolve an IP address to a place.

        Args:
            ip: Address to resolve
            api_key: Geolocation API key

        Returns:
            Location DTO

        Raises:
            InvalidInputError: If the address is malformed
            CollaboratorError: If the API call fails
        """
        pass


class IWeatherProvider(ABC):
    """Interface for current weather and forecasts."""

    @abstractmethod
    async def get_weather(self, latitude: float, longitude: float, api_key: str) -> WeatherDTO:
        """Current conditions by coordinates."""
        pass

    @abstractmethod
    async def get_weather_by_city(
        self, city: str, country: Optional[str], api_key: str
    ) -> WeatherDTO:
        """Current conditions by place name."""
        pass

    @abstractmethod
    async def get_forecast(
        self, latitude: float, longitude: float, api_key: str
    ) -> List[WeatherForecastDTO]:
        """Up to five daily forecast summaries by coordinates."""
        pass


class ITravelPlanner(ABC):
    """Interface for local (non-AI) recommendation and plan synthesis."""

    @abstractmethod
    async def get_recommendations(
        self,
        latitude: float,
        longitude: float,
        interests: List[str],
        budget: Optional[str] = None,
        duration: Optional[str] = None,
    ) -> List[TravelRecommendationDTO]:
        pass

    @abstractmethod
    async def create_plan(self, plan_input: TravelPlanInputDTO) -> TravelPlanDTO:
        pass


class ICompletionClient(ABC):
    """Interface for a text-completion (chat) service."""

    @abstractmethod
    async def complete(self, prompt: str, api_key: str) -> str:
        """
        Send a prompt and return the reply text.

        Raises:
            InvalidCredentialError: If the key is rejected
            RateLimitError: If the service throttles the request
            CollaboratorError: For any other failure
        """
        pass


class IAITravelAdvisor(ABC):
    """Interface for AI-generated travel artifacts."""

    @abstractmethod
    async def get_ai_recommendations(
        self,
        destination: str,
        interests: List[str],
        travel_style: Optional[str],
        budget: Optional[str],
        duration: Optional[str],
        api_key: Optional[str],
    ) -> List[AITravelRecommendationDTO]:
        pass

    @abstractmethod
    async def create_personalized_itinerary(
        self,
        destination: str,
        start_date: str,
        end_date: str,
        user_profile: UserProfileDTO,
        api_key: Optional[str],
    ) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_destination_insights(
        self,
        destination: str,
        season: str,
        interests: List[str],
        api_key: Optional[str],
    ) -> TravelInsightsDTO:
        pass


class ITravelPlanStore(ABC):
    """
    Interface for keeping created travel plans.

    Plans are stored as built, so an AI-enriched plan is read back with its
    AI fields.
    """

    @abstractmethod
    async def save(self, plan: TravelPlanDTO) -> None:
        """Insert or replace the plan under ``plan.id``."""
        pass

    @abstractmethod
    async def get(self, plan_id: str) -> Optional[TravelPlanDTO]:
        pass

    @abstractmethod
    async def list(self) -> List[TravelPlanDTO]:
        """All plans, oldest first."""
        pass

    @abstractmethod
    async def delete(self, plan_id: str) -> bool:
        """Remove a plan; False when it did not exist."""
        pass
