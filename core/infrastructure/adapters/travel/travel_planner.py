"""
Local travel planner.

Rule-based recommendation and itinerary synthesis; no external calls.
"""
import logging
import time
from datetime import date, timedelta
from typing import List, Optional
from uuid import uuid4

from core.application.dtos.travel_dto import (
    ActivityDTO,
    ItineraryItemDTO,
    MealDTO,
    TravelPlanDTO,
    TravelPlanInputDTO,
    TravelRecommendationDTO,
)
from core.application.interfaces import ITravelPlanner
from core.domain.clock import utc_now
from core.domain.exceptions import InvalidInputError


logger = logging.getLogger(__name__)


def parse_trip_dates(start_date: str, end_date: str) -> tuple[date, date]:
    """Parse ISO dates and check their order."""
    try:
        start = date.fromisoformat(start_date)
        end = date.fromisoformat(end_date)
    except ValueError as e:
        raise InvalidInputError(f"Invalid trip dates {start_date!r} - {end_date!r}: {e}") from e
    if end < start:
        raise InvalidInputError(f"End date {end_date} is before start date {start_date}")
    return start, end


def trip_length_days(start_date: str, end_date: str) -> int:
    start, end = parse_trip_dates(start_date, end_date)
    return (end - start).days + 1


def describe_duration(start_date: str, end_date: str) -> str:
    """Inclusive trip length, e.g. ``"5 days"``."""
    days = trip_length_days(start_date, end_date)
    return f"{days} day{'s' if days > 1 else ''}"


class TravelPlanner(ITravelPlanner):
    """
    Rule-based implementation of ITravelPlanner.

    Recommendations are keyed on interests; coordinates are accepted for
    interface parity but not used for lookups.
    """

    async def get_recommendations(
        self,
        latitude: float,
        longitude: float,
        interests: List[str],
        budget: Optional[str] = None,
        duration: Optional[str] = None,
    ) -> List[TravelRecommendationDTO]:
        wanted = {i.lower() for i in interests}
        recommendations: List[TravelRecommendationDTO] = []

        if wanted & {"culture", "history"}:
            recommendations.append(
                TravelRecommendationDTO(
                    destination="Local Cultural District",
                    description="Explore the rich cultural heritage and historical landmarks in the area",
                    activities=[
                        "Visit local museums",
                        "Take a historical walking tour",
                        "Explore traditional markets",
                        "Attend cultural performances",
                    ],
                    best_time_to_visit="Year-round, best in spring and fall",
                    estimated_budget=budget or "$50-100 per day",
                    transportation_options=["Walking", "Public transit", "Taxi/rideshare"],
                    accommodation_suggestions=["Boutique hotels", "Cultural guesthouses", "Historic B&Bs"],
                    duration=duration or "2-3 days",
                )
            )

        if wanted & {"nature", "outdoor"}:
            recommendations.append(
                TravelRecommendationDTO(
                    destination="Nearby Natural Areas",
                    description="Discover beautiful natural landscapes and outdoor activities",
                    activities=["Hiking trails", "Nature photography", "Bird watching", "Scenic viewpoints"],
                    best_time_to_visit="Spring through fall for best weather",
                    estimated_budget=budget or "$30-70 per day",
                    transportation_options=["Car rental", "Tour bus", "Bicycle"],
                    accommodation_suggestions=["Eco-lodges", "Camping", "Nature resorts"],
                    duration=duration or "1-2 days",
                )
            )

        if wanted & {"food", "cuisine"}:
            recommendations.append(
                TravelRecommendationDTO(
                    destination="Local Food Scene",
                    description="Experience the local culinary culture and specialties",
                    activities=["Food tours", "Cooking classes", "Local market visits", "Restaurant hopping"],
                    best_time_to_visit="Year-round",
                    estimated_budget=budget or "$40-80 per day",
                    transportation_options=["Walking", "Food tour transport", "Public transit"],
                    accommodation_suggestions=["City center hotels", "Food-focused B&Bs"],
                    duration=duration or "1-2 days",
                )
            )

        logger.info(f"Generated {len(recommendations)} recommendation(s) for interests {sorted(wanted)}")
        return recommendations

    async def create_plan(self, plan_input: TravelPlanInputDTO) -> TravelPlanDTO:
        start, end = parse_trip_dates(plan_input.start_date, plan_input.end_date)

        itinerary = self.build_itinerary(
            destination=plan_input.destination,
            start=start,
            end=end,
            interests=plan_input.interests,
            budget=plan_input.budget,
        )
        recommendations = await self.get_recommendations(
            latitude=0.0,
            longitude=0.0,
            interests=plan_input.interests,
            budget=plan_input.budget,
            duration=describe_duration(plan_input.start_date, plan_input.end_date),
        )

        plan = TravelPlanDTO(
            id=f"plan_{int(time.time() * 1000)}_{uuid4().hex[:9]}",
            destination=plan_input.destination,
            start_date=plan_input.start_date,
            end_date=plan_input.end_date,
            travelers=plan_input.travelers,
            travel_style=plan_input.travel_style,
            itinerary=itinerary,
            total_budget=plan_input.budget or "Budget not specified",
            recommendations=recommendations,
            created_at=utc_now().isoformat(),
        )
        logger.info(f"Created travel plan {plan.id} for {plan.destination} ({len(itinerary)} days)")
        return plan

    def build_itinerary(
        self,
        destination: str,
        start: date,
        end: date,
        interests: List[str],
        budget: Optional[str] = None,
    ) -> List[ItineraryItemDTO]:
        """Arrival day, themed full days, departure day; three meals each."""
        days = (end - start).days + 1
        wanted = {i.lower() for i in interests}
        itinerary: List[ItineraryItemDTO] = []

        for day in range(1, days + 1):
            current = start + timedelta(days=day - 1)
            if day == 1:
                activities = [
                    ActivityDTO(
                        time="14:00",
                        name="Check-in and City Orientation",
                        description="Arrive at accommodation and get oriented with the city",
                        location=destination,
                        duration="2 hours",
                        estimated_cost="Free",
                    ),
                    ActivityDTO(
                        time="16:30",
                        name="Welcome Walk",
                        description="Take a leisurely walk around the neighborhood",
                        location=f"Central {destination}",
                        duration="1.5 hours",
                        estimated_cost="Free",
                    ),
                ]
            elif day == days:
                activities = [
                    ActivityDTO(
                        time="10:00",
                        name="Last-minute Shopping",
                        description="Pick up souvenirs and local specialties",
                        location=f"{destination} Shopping District",
                        duration="2 hours",
                        estimated_cost="Within budget" if budget else "$20-50",
                    )
                ]
            else:
                morning, afternoon = self._themed_activities(wanted)
                activities = [
                    ActivityDTO(
                        time="09:00",
                        name=morning,
                        description=f"Explore {destination}'s {morning.lower()}",
                        location=destination,
                        duration="3 hours",
                        estimated_cost="Within budget" if budget else "$15-30",
                    ),
                    ActivityDTO(
                        time="14:00",
                        name=afternoon,
                        description=f"Participate in {afternoon.lower()}",
                        location=destination,
                        duration="2.5 hours",
                        estimated_cost="Within budget" if budget else "$25-45",
                    ),
                ]

            meals = [
                MealDTO(time="08:00", type="Breakfast", restaurant="Local Café", cuisine="Local", estimated_cost="$8-15"),
                MealDTO(time="12:30", type="Lunch", restaurant="Traditional Restaurant", cuisine="Regional", estimated_cost="$12-25"),
                MealDTO(
                    time="19:00",
                    type="Dinner",
                    restaurant="Fine Dining" if "food" in wanted else "Local Favorite",
                    cuisine="Local Specialty",
                    estimated_cost="$20-40",
                ),
            ]

            itinerary.append(
                ItineraryItemDTO(
                    day=day,
                    date=current.isoformat(),
                    activities=activities,
                    meals=meals,
                    accommodation=None if day == days else f"{destination} Hotel/Guesthouse",
                )
            )

        return itinerary

    @staticmethod
    def _themed_activities(wanted: set) -> tuple[str, str]:
        if "culture" in wanted:
            return "Museum and Cultural Sites Visit", "Traditional Craft Workshop"
        if "nature" in wanted:
            return "Nature Hike", "Scenic Photography Tour"
        if "food" in wanted:
            return "Food Market Tour", "Cooking Class"
        return "City Tour", "Local Experience"
