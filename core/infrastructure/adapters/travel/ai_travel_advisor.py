"""
AI travel advisor.

Builds prompts for the completion service and turns its replies into
recommendation, itinerary and insight DTOs. Replies that are not valid
JSON fall back to text extraction where a useful shape can be recovered.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from core.application.dtos.travel_dto import (
    AITravelRecommendationDTO,
    TravelInsightsDTO,
    UserProfileDTO,
)
from core.application.interfaces import IAITravelAdvisor, ICompletionClient
from core.domain.exceptions import MalformedResponseError, MissingCredentialError


logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def parse_json_reply(text: str) -> Any:
    """Decode a completion reply, tolerating Markdown code fences."""
    return json.loads(_FENCE.sub("", text.strip()))


def _clean_line(line: str) -> str:
    return re.sub(r"^\W+|\W+$", "", line)


def extract_lines(text: str, keywords: List[str], min_len: int, max_len: int, limit: int) -> List[str]:
    """Pick lines mentioning any keyword, trimmed of list markers."""
    found: List[str] = []
    for line in text.splitlines():
        lowered = line.lower()
        if any(k in lowered for k in keywords):
            cleaned = _clean_line(line)
            if min_len < len(cleaned) < max_len:
                found.append(cleaned)
    return found[:limit]


class AITravelAdvisor(IAITravelAdvisor):
    """
    Completion-backed implementation of IAITravelAdvisor.
    """

    def __init__(self, completion_client: ICompletionClient):
        self.completion_client = completion_client

    async def get_ai_recommendations(
        self,
        destination: str,
        interests: List[str],
        travel_style: Optional[str],
        budget: Optional[str],
        duration: Optional[str],
        api_key: Optional[str],
    ) -> List[AITravelRecommendationDTO]:
        if not api_key:
            raise MissingCredentialError("OpenAI API key is required for AI-powered recommendations")

        prompt = (
            f"Create 3-4 travel recommendations for {destination}.\n"
            f"Interests: {', '.join(interests)}\n"
            f"Travel style: {travel_style or 'balanced'}\n"
            f"Budget: {budget or 'moderate'}\n"
            f"Duration: {duration or 'flexible'}\n"
            "Reply with a JSON array of objects with keys: destination, description, "
            "activities, best_time_to_visit, estimated_budget, transportation_options, "
            "accommodation_suggestions, duration, ai_insights, personalized_tips."
        )
        reply = await self.completion_client.complete(prompt, api_key)

        try:
            items = parse_json_reply(reply)
            if isinstance(items, dict):
                items = items.get("recommendations", [items])
            return [AITravelRecommendationDTO.model_validate(item) for item in items]
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"AI recommendations were not valid JSON, using text fallback: {e}")
            return [
                AITravelRecommendationDTO(
                    destination=destination,
                    description=(reply[:200] + "...") if len(reply) > 200 else reply,
                    activities=extract_lines(reply, ["visit", "explore", "try", "experience"], 10, 100, 5),
                    best_time_to_visit="Year-round with seasonal considerations",
                    estimated_budget=budget or "$50-150 per day",
                    transportation_options=["Public transport", "Walking", "Taxi/Rideshare"],
                    accommodation_suggestions=["Local hotels", "Guesthouses", "Boutique accommodations"],
                    duration=duration or "3-5 days",
                    ai_insights=reply,
                    personalized_tips=extract_lines(reply, ["tip", "recommend", "suggest", "advice"], 15, 150, 3),
                )
            ]

    async def create_personalized_itinerary(
        self,
        destination: str,
        start_date: str,
        end_date: str,
        user_profile: UserProfileDTO,
        api_key: Optional[str],
    ) -> Dict[str, Any]:
        if not api_key:
            raise MissingCredentialError("OpenAI API key is required for personalized itinerary generation")

        prompt = (
            f"Create a day-by-day itinerary for {destination} from {start_date} to {end_date}.\n"
            f"Traveler age: {user_profile.age or 'not specified'}\n"
            f"Interests: {', '.join(user_profile.interests) or 'general sightseeing'}\n"
            f"Travel style: {user_profile.travel_style or 'balanced'}\n"
            f"Budget: {user_profile.budget or 'moderate'}\n"
            f"Group size: {user_profile.group_size or 1}\n"
            f"Accessibility needs: {user_profile.accessibility or 'none specified'}\n"
            "Reply with a JSON object with keys: itinerary (list of days with day, date, "
            "theme, activities, meals, accommodation, daily_budget), general_tips, "
            "packing_recommendations, budget_breakdown."
        )
        reply = await self.completion_client.complete(prompt, api_key)

        try:
            itinerary = parse_json_reply(reply)
        except ValueError as e:
            logger.error(f"Failed to parse itinerary JSON: {e}")
            raise MalformedResponseError("Failed to parse AI-generated itinerary") from e
        if not isinstance(itinerary, dict):
            raise MalformedResponseError("AI-generated itinerary is not a JSON object")
        return itinerary

    async def get_destination_insights(
        self,
        destination: str,
        season: str,
        interests: List[str],
        api_key: Optional[str],
    ) -> TravelInsightsDTO:
        if not api_key:
            raise MissingCredentialError("OpenAI API key is required for destination insights")

        prompt = (
            f"Provide travel insights for {destination} during {season} for someone "
            f"interested in {', '.join(interests)}.\n"
            "Reply with a JSON object with keys: insights, hidden_gems, local_tips, "
            "cultural_notes, seasonal_advice."
        )
        reply = await self.completion_client.complete(prompt, api_key)

        try:
            return TravelInsightsDTO.model_validate(parse_json_reply(reply))
        except (ValueError, ValidationError) as e:
            logger.warning(f"Insights were not valid JSON, using text fallback: {e}")
            return TravelInsightsDTO(
                insights=reply,
                hidden_gems=extract_lines(reply, ["hidden"], 10, 200, 5),
                local_tips=extract_lines(reply, ["tip"], 10, 200, 5),
                cultural_notes=extract_lines(reply, ["cultural"], 10, 200, 5),
                seasonal_advice=self._seasonal_advice(reply),
            )

    @staticmethod
    def _seasonal_advice(text: str) -> str:
        for line in text.splitlines():
            lowered = line.lower()
            if "season" in lowered or "weather" in lowered or "climate" in lowered:
                return _clean_line(line)
        return "Consider seasonal weather patterns when planning your visit."
