"""
Travel plan endpoints.

Stored plans: the ones built here and the ones the travel planning
workflows produce.
"""
from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_travel_plan_service
from core.application.dtos.travel_dto import AITravelPlanDTO, TravelPlanDTO, TravelPlanInputDTO
from core.application.services import TravelPlanService


router = APIRouter()

StoredPlan = Union[TravelPlanDTO, AITravelPlanDTO]


def _not_found(plan_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Travel plan with ID {plan_id} not found",
    )


@router.get(
    "",
    response_model=List[StoredPlan],
    status_code=status.HTTP_200_OK,
    response_model_by_alias=False,
    summary="List stored travel plans",
)
async def list_travel_plans(service: TravelPlanService = Depends(get_travel_plan_service)):
    """Stored plans, oldest first."""
    return await service.list_plans()


@router.get(
    "/{plan_id}",
    response_model=StoredPlan,
    status_code=status.HTTP_200_OK,
    response_model_by_alias=False,
    summary="Get a travel plan",
)
async def get_travel_plan(
    plan_id: str,
    service: TravelPlanService = Depends(get_travel_plan_service),
):
    plan = await service.get_plan(plan_id)
    if plan is None:
        raise _not_found(plan_id)
    return plan


@router.post(
    "",
    response_model=TravelPlanDTO,
    status_code=status.HTTP_201_CREATED,
    response_model_by_alias=False,
    summary="Create a travel plan",
)
async def create_travel_plan(
    request: TravelPlanInputDTO,
    service: TravelPlanService = Depends(get_travel_plan_service),
):
    """
    Build a day-by-day plan and store it.

    **Returns:**
    - The stored plan; malformed or reversed dates answer 400
    """
    return await service.create_plan(request)


@router.put(
    "/{plan_id}",
    response_model=TravelPlanDTO,
    status_code=status.HTTP_200_OK,
    response_model_by_alias=False,
    summary="Rebuild a travel plan",
)
async def update_travel_plan(
    plan_id: str,
    request: TravelPlanInputDTO,
    service: TravelPlanService = Depends(get_travel_plan_service),
):
    """Rebuild the plan from new input. The id and creation time are kept."""
    plan = await service.update_plan(plan_id, request)
    if plan is None:
        raise _not_found(plan_id)
    return plan


@router.delete(
    "/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a travel plan",
)
async def delete_travel_plan(
    plan_id: str,
    service: TravelPlanService = Depends(get_travel_plan_service),
):
    if not await service.delete_plan(plan_id):
        raise _not_found(plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
