"""
Direct recommendation and AI endpoints.

Single planner or advisor calls without an execution record. A missing
OpenAI key answers 503; completion failures answer 502.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_ai_travel_advisor, get_settings, get_travel_planner
from core.application.dtos.recommendation_dto import (
    AIRecommendationRequestDTO,
    InsightsRequestDTO,
    ItineraryRequestDTO,
    RecommendationRequestDTO,
)
from core.application.dtos.travel_dto import (
    AITravelRecommendationDTO,
    TravelInsightsDTO,
    TravelRecommendationDTO,
)
from core.domain.clock import utc_now


router = APIRouter()


@router.post(
    "/recommendations",
    response_model=List[TravelRecommendationDTO],
    status_code=status.HTTP_200_OK,
    response_model_by_alias=False,
    summary="Rule-based recommendations",
)
async def get_recommendations(
    request: RecommendationRequestDTO,
    planner=Depends(get_travel_planner),
):
    return await planner.get_recommendations(
        request.latitude,
        request.longitude,
        request.interests,
        request.budget,
        request.duration,
    )


@router.post(
    "/ai-recommendations",
    response_model=List[AITravelRecommendationDTO],
    status_code=status.HTTP_200_OK,
    response_model_by_alias=False,
    summary="AI recommendations for a destination",
)
async def get_ai_recommendations(
    request: AIRecommendationRequestDTO,
    settings=Depends(get_settings),
    advisor=Depends(get_ai_travel_advisor),
):
    return await advisor.get_ai_recommendations(
        request.destination,
        request.interests,
        request.travel_style,
        request.budget,
        request.duration,
        settings.openai_api_key,
    )


@router.post(
    "/insights",
    response_model=TravelInsightsDTO,
    status_code=status.HTTP_200_OK,
    response_model_by_alias=False,
    summary="AI destination insights",
)
async def get_destination_insights(
    request: InsightsRequestDTO,
    settings=Depends(get_settings),
    advisor=Depends(get_ai_travel_advisor),
):
    """
    Insights, hidden gems and local tips.

    `season` defaults to the current month.
    """
    return await advisor.get_destination_insights(
        request.destination,
        request.season or utc_now().strftime("%B"),
        request.interests,
        settings.openai_api_key,
    )


@router.post(
    "/itinerary",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    response_model_by_alias=False,
    summary="AI personalized itinerary",
)
async def create_personalized_itinerary(
    request: ItineraryRequestDTO,
    settings=Depends(get_settings),
    advisor=Depends(get_ai_travel_advisor),
):
    return await advisor.create_personalized_itinerary(
        request.destination,
        request.start_date.isoformat(),
        request.end_date.isoformat(),
        request.user_profile,
        settings.openai_api_key,
    )
