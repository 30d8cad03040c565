"""Workflow catalog - the four location workflows and their activities."""

import json

from core.application.dtos.location_dto import LocationDTO
from core.application.dtos.travel_dto import (
    AITravelPlanDTO,
    TravelInsightsDTO,
    TravelPlanDTO,
    TravelPlanInputDTO,
    UserProfileDTO,
)
from core.application.dtos.weather_dto import TripWeatherDTO, WeatherDTO, WeatherForecastDTO
from core.application.interfaces import (
    IAITravelAdvisor,
    IGeolocationProvider,
    ITravelPlanner,
    ITravelPlanStore,
    IWeatherProvider,
)
from core.domain.clock import utc_now
from core.domain.exceptions import CollaboratorError, InvalidInputError, MissingCredentialError
from core.infrastructure.adapters.travel import describe_duration
from core.infrastructure.logging import get_logger
from core.settings.modules.app_settings import AppSettings

from .models import ExecutionContext
from .workflow import WorkflowDefinition, WorkflowStep

logger = get_logger("orchestration.workflows")

LOCATION_WORKFLOW = "location"
WEATHER_WORKFLOW = "weather"
TRAVEL_PLANNING_WORKFLOW = "travel_planning"
AI_TRAVEL_PLANNING_WORKFLOW = "ai_travel_planning"

VALIDATE_IP = "Validate IP Address"
GET_LOCATION = "Get Location from IP"
GET_WEATHER = "Get Weather for Location"
GET_FORECAST = "Get Weather Forecast"
GENERATE_RECOMMENDATIONS = "Generate Travel Recommendations"
CREATE_PLAN = "Create Travel Plan"
GENERATE_AI_RECOMMENDATIONS = "Generate AI Travel Recommendations"
GENERATE_ITINERARY = "Generate Personalized Itinerary"
GENERATE_INSIGHTS = "Generate Travel Insights"
CREATE_AI_PLAN = "Create AI Travel Plan"

AI_STEPS = (GENERATE_AI_RECOMMENDATIONS, GENERATE_ITINERARY, GENERATE_INSIGHTS)


def resolve_destination(ctx: ExecutionContext, fallback: str = "Unknown Destination") -> str:
    """Explicit destination, else the resolved ``"<city>, <country>"``, else ``fallback``."""
    destination = ctx.param("destination")
    if destination:
        return destination
    location: LocationDTO | None = ctx.output(GET_LOCATION)
    if location is not None:
        return location.display_name
    return fallback


def _has_ip(ctx: ExecutionContext) -> bool:
    return bool(ctx.param("ip"))


def _profile(ctx: ExecutionContext) -> UserProfileDTO:
    return ctx.param("user_profile") or UserProfileDTO()


class WorkflowCatalog:
    """
    Builds the workflow definitions over a set of collaborators.

    Credentials are read from settings inside each activity, so a missing
    key fails that step before any network call. Plans built by the travel
    workflows are kept in the plan store.
    """

    def __init__(
        self,
        settings: AppSettings,
        geolocation: IGeolocationProvider,
        weather: IWeatherProvider,
        travel_planner: ITravelPlanner,
        ai_advisor: IAITravelAdvisor,
        plan_store: ITravelPlanStore,
    ):
        self.settings = settings
        self.geolocation = geolocation
        self.weather = weather
        self.travel_planner = travel_planner
        self.ai_advisor = ai_advisor
        self.plan_store = plan_store

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    def definitions(self) -> dict[str, WorkflowDefinition]:
        return {
            LOCATION_WORKFLOW: self.location_workflow(),
            WEATHER_WORKFLOW: self.weather_workflow(),
            TRAVEL_PLANNING_WORKFLOW: self.travel_planning_workflow(),
            AI_TRAVEL_PLANNING_WORKFLOW: self.ai_travel_planning_workflow(),
        }

    def location_workflow(self) -> WorkflowDefinition:
        return WorkflowDefinition(
            name=LOCATION_WORKFLOW,
            steps=[
                WorkflowStep(
                    name=VALIDATE_IP,
                    activity=self.validate_ip,
                    describe_input=lambda ctx: ctx.param("ip"),
                ),
                WorkflowStep(
                    name=GET_LOCATION,
                    activity=self.get_location,
                    describe_input=self._describe_ip,
                ),
            ],
        )

    def weather_workflow(self) -> WorkflowDefinition:
        return WorkflowDefinition(
            name=WEATHER_WORKFLOW,
            steps=[
                WorkflowStep(
                    name=GET_LOCATION,
                    activity=self.get_location,
                    describe_input=self._describe_ip,
                ),
                WorkflowStep(
                    name=GET_WEATHER,
                    activity=self.get_weather,
                    describe_input=lambda ctx: resolve_destination(ctx, fallback="Unknown"),
                ),
            ],
        )

    def travel_planning_workflow(self) -> WorkflowDefinition:
        return WorkflowDefinition(
            name=TRAVEL_PLANNING_WORKFLOW,
            steps=[
                WorkflowStep(
                    name=GET_LOCATION,
                    activity=self.get_location,
                    condition=_has_ip,
                    describe_input=self._describe_ip,
                ),
                WorkflowStep(
                    name=GET_FORECAST,
                    activity=self.get_forecast,
                    required=False,
                    describe_input=lambda ctx: resolve_destination(ctx, fallback="Unknown"),
                ),
                WorkflowStep(
                    name=GENERATE_RECOMMENDATIONS,
                    activity=self.generate_recommendations,
                    required=False,
                    describe_input=self._describe_default_interests,
                ),
                WorkflowStep(
                    name=CREATE_PLAN,
                    activity=self.create_plan,
                    describe_input=self._describe_trip,
                ),
            ],
        )

    def ai_travel_planning_workflow(self) -> WorkflowDefinition:
        return WorkflowDefinition(
            name=AI_TRAVEL_PLANNING_WORKFLOW,
            steps=[
                WorkflowStep(
                    name=GET_LOCATION,
                    activity=self.get_location,
                    condition=_has_ip,
                    describe_input=self._describe_ip,
                ),
                WorkflowStep(
                    name=GET_FORECAST,
                    activity=self.get_forecast,
                    required=False,
                    describe_input=lambda ctx: resolve_destination(ctx, fallback="Unknown"),
                ),
                WorkflowStep(
                    name=GENERATE_AI_RECOMMENDATIONS,
                    activity=self.generate_ai_recommendations,
                    required=False,
                    describe_input=self._describe_interests,
                ),
                WorkflowStep(
                    name=GENERATE_ITINERARY,
                    activity=self.generate_itinerary,
                    required=False,
                    describe_input=self._describe_trip_with_profile,
                ),
                WorkflowStep(
                    name=GENERATE_INSIGHTS,
                    activity=self.generate_insights,
                    required=False,
                    describe_input=self._describe_interests,
                ),
                WorkflowStep(
                    name=CREATE_AI_PLAN,
                    activity=self.create_ai_plan,
                    describe_input=self._describe_trip_with_profile,
                ),
            ],
        )

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------

    async def validate_ip(self, ctx: ExecutionContext) -> str:
        ip = ctx.param("ip")
        if not ip or not self.geolocation.is_valid_ip(ip):
            raise InvalidInputError(f"Invalid IP address: {ip}")
        return f"IP {ip} is valid"

    async def get_location(self, ctx: ExecutionContext) -> LocationDTO:
        api_key = self.settings.ipgeolocation_api_key
        if not api_key:
            raise MissingCredentialError("IP geolocation API key not configured")
        return await self.geolocation.get_location(ctx.param("ip"), api_key)

    async def get_weather(self, ctx: ExecutionContext) -> WeatherDTO:
        api_key = self._weather_key()
        location: LocationDTO = ctx.outputs[GET_LOCATION]
        return await self.weather.get_weather(location.latitude, location.longitude, api_key)

    async def get_forecast(self, ctx: ExecutionContext) -> TripWeatherDTO:
        """Current conditions at the trip destination, plus the daily outlook
        when coordinates are known."""
        api_key = self._weather_key()
        location: LocationDTO | None = ctx.output(GET_LOCATION)
        if location is not None:
            current = await self.weather.get_weather(location.latitude, location.longitude, api_key)
            daily = await self._daily_forecast(location, api_key)
            return TripWeatherDTO(current=current, daily=daily)
        destination = ctx.param("destination")
        if destination:
            current = await self.weather.get_weather_by_city(destination, None, api_key)
            return TripWeatherDTO(current=current)
        raise InvalidInputError("No location data available for weather forecast")

    async def generate_recommendations(self, ctx: ExecutionContext):
        location: LocationDTO | None = ctx.output(GET_LOCATION)
        return await self.travel_planner.get_recommendations(
            location.latitude if location else 0.0,
            location.longitude if location else 0.0,
            self.settings.workflow.default_interests,
        )

    async def create_plan(self, ctx: ExecutionContext) -> TravelPlanDTO:
        defaults = self.settings.workflow
        plan = await self.travel_planner.create_plan(
            TravelPlanInputDTO(
                destination=resolve_destination(ctx),
                start_date=ctx.param("start_date"),
                end_date=ctx.param("end_date"),
                travelers=defaults.default_travelers,
                interests=defaults.default_interests,
                budget=defaults.default_budget,
                travel_style=defaults.default_travel_style,
            )
        )
        plan = self._with_weather(ctx, plan)
        await self.plan_store.save(plan)
        return plan

    async def generate_ai_recommendations(self, ctx: ExecutionContext):
        profile = _profile(ctx)
        return await self.ai_advisor.get_ai_recommendations(
            resolve_destination(ctx),
            self._interests(profile),
            profile.travel_style,
            profile.budget,
            describe_duration(ctx.param("start_date"), ctx.param("end_date")),
            self._openai_key(),
        )

    async def generate_itinerary(self, ctx: ExecutionContext) -> dict:
        return await self.ai_advisor.create_personalized_itinerary(
            resolve_destination(ctx),
            ctx.param("start_date"),
            ctx.param("end_date"),
            _profile(ctx),
            self._openai_key(),
        )

    async def generate_insights(self, ctx: ExecutionContext) -> TravelInsightsDTO:
        profile = _profile(ctx)
        return await self.ai_advisor.get_destination_insights(
            resolve_destination(ctx),
            utc_now().strftime("%B"),
            self._interests(profile),
            self._openai_key(),
        )

    async def create_ai_plan(self, ctx: ExecutionContext) -> AITravelPlanDTO:
        profile = _profile(ctx)
        defaults = self.settings.workflow
        base_plan = await self.travel_planner.create_plan(
            TravelPlanInputDTO(
                destination=resolve_destination(ctx),
                start_date=ctx.param("start_date"),
                end_date=ctx.param("end_date"),
                travelers=profile.group_size or defaults.default_travelers,
                interests=self._interests(profile),
                budget=profile.budget or defaults.default_budget,
                travel_style=profile.travel_style or defaults.default_travel_style,
            )
        )
        base_plan = self._with_weather(ctx, base_plan)

        plan = AITravelPlanDTO(
            **base_plan.model_dump(),
            ai_recommendations=ctx.output(GENERATE_AI_RECOMMENDATIONS, []),
            personalized_itinerary=ctx.output(GENERATE_ITINERARY, {}),
            travel_insights=ctx.output(GENERATE_INSIGHTS) or TravelInsightsDTO(),
            partial_failures=[name for name in AI_STEPS if name not in ctx.outputs],
        )
        await self.plan_store.save(plan)
        return plan

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _weather_key(self) -> str:
        api_key = self.settings.openweather_api_key
        if not api_key:
            raise MissingCredentialError("Weather API key not configured")
        return api_key

    def _openai_key(self) -> str:
        api_key = self.settings.openai_api_key
        if not api_key:
            raise MissingCredentialError("OpenAI API key not configured")
        return api_key

    def _interests(self, profile: UserProfileDTO) -> list[str]:
        return profile.interests or self.settings.workflow.default_interests

    async def _daily_forecast(
        self, location: LocationDTO, api_key: str
    ) -> list[WeatherForecastDTO]:
        try:
            return await self.weather.get_forecast(location.latitude, location.longitude, api_key)
        except CollaboratorError as exc:
            logger.warning(f"Daily forecast unavailable for {location.display_name}: {exc}")
            return []

    @staticmethod
    def _with_weather(ctx: ExecutionContext, plan: TravelPlanDTO) -> TravelPlanDTO:
        weather: TripWeatherDTO | None = ctx.output(GET_FORECAST)
        if weather is None:
            return plan
        return plan.model_copy(
            update={"current_weather": weather.current, "weather_forecast": weather.daily}
        )

    @staticmethod
    def _describe_ip(ctx: ExecutionContext) -> str:
        return f"IP: {ctx.param('ip')}"

    def _describe_default_interests(self, ctx: ExecutionContext) -> str:
        return f"Default interests: {', '.join(self.settings.workflow.default_interests)}"

    @staticmethod
    def _describe_interests(ctx: ExecutionContext) -> str:
        return json.dumps(
            {"destination": ctx.param("destination"), "interests": _profile(ctx).interests}
        )

    @staticmethod
    def _describe_trip(ctx: ExecutionContext) -> str:
        return json.dumps(
            {
                "destination": ctx.param("destination"),
                "start_date": ctx.param("start_date"),
                "end_date": ctx.param("end_date"),
            }
        )

    @staticmethod
    def _describe_trip_with_profile(ctx: ExecutionContext) -> str:
        return json.dumps(
            {
                "destination": ctx.param("destination"),
                "start_date": ctx.param("start_date"),
                "end_date": ctx.param("end_date"),
                "user_profile": _profile(ctx).model_dump(mode="json"),
            }
        )
