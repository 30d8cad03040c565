"""
Workflow endpoints.

Each endpoint starts one workflow. By default the call waits for the
execution to finish; with ``background: true`` it answers 202 with the
pending record and the execution continues server-side.
"""
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
import logging

from api.dependencies import get_workflow_engine
from core.application.dtos.execution_dto import ExecutionDTO
from core.application.dtos.workflow_dto import (
    AITravelPlanningRequestDTO,
    LocationWorkflowRequestDTO,
    TravelPlanningRequestDTO,
    WeatherWorkflowRequestDTO,
)
from orchestration.engine import WorkflowEngine, travel_params
from orchestration.workflows import (
    AI_TRAVEL_PLANNING_WORKFLOW,
    LOCATION_WORKFLOW,
    TRAVEL_PLANNING_WORKFLOW,
    WEATHER_WORKFLOW,
)


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=List[str],
    status_code=status.HTTP_200_OK,
    summary="List registered workflows",
)
async def list_workflows(engine: WorkflowEngine = Depends(get_workflow_engine)):
    return engine.workflow_names


async def _start(
    engine: WorkflowEngine, response: Response, name: str, **params
) -> ExecutionDTO:
    execution = await engine.start_workflow(name, **params)
    response.status_code = status.HTTP_202_ACCEPTED
    return ExecutionDTO.from_entity(execution)


# =============================================================================
# LOCATION
# =============================================================================

@router.post(
    "/location",
    response_model=ExecutionDTO,
    status_code=status.HTTP_200_OK,
    summary="Resolve an IP address to a location",
)
async def run_location_workflow(
    request: LocationWorkflowRequestDTO,
    response: Response,
    engine: WorkflowEngine = Depends(get_workflow_engine),
):
    """
    Validate IP Address -> Get Location from IP.

    **Returns:**
    - Execution record; `result` holds the location JSON when completed
    """
    if request.background:
        return await _start(engine, response, LOCATION_WORKFLOW, ip=request.ip)

    execution = await engine.execute_location_workflow(request.ip)
    return ExecutionDTO.from_entity(execution)


# =============================================================================
# WEATHER
# =============================================================================

@router.post(
    "/weather",
    response_model=ExecutionDTO,
    status_code=status.HTTP_200_OK,
    summary="Current weather for an IP address",
)
async def run_weather_workflow(
    request: WeatherWorkflowRequestDTO,
    http_request: Request,
    response: Response,
    engine: WorkflowEngine = Depends(get_workflow_engine),
):
    """
    Get Location from IP -> Get Weather for Location.

    The caller's own address is used when `ip` is omitted.
    """
    ip = request.ip or (http_request.client.host if http_request.client else "")
    logger.info(f"Weather workflow requested for {ip}")

    if request.background:
        return await _start(engine, response, WEATHER_WORKFLOW, ip=ip)

    execution = await engine.execute_weather_workflow(ip)
    return ExecutionDTO.from_entity(execution)


# =============================================================================
# TRAVEL PLANNING
# =============================================================================

@router.post(
    "/travel-planning",
    response_model=ExecutionDTO,
    status_code=status.HTTP_200_OK,
    summary="Build a travel plan",
)
async def run_travel_planning_workflow(
    request: TravelPlanningRequestDTO,
    response: Response,
    engine: WorkflowEngine = Depends(get_workflow_engine),
):
    """
    Get Location from IP (when `ip` is given) -> Get Weather Forecast ->
    Generate Travel Recommendations -> Create Travel Plan.
    """
    if request.background:
        return await _start(engine, response, TRAVEL_PLANNING_WORKFLOW, **travel_params(request))

    execution = await engine.execute_travel_planning_workflow(request)
    return ExecutionDTO.from_entity(execution)


@router.post(
    "/ai-travel-planning",
    response_model=ExecutionDTO,
    status_code=status.HTTP_200_OK,
    summary="Build an AI-enriched travel plan",
)
async def run_ai_travel_planning_workflow(
    request: AITravelPlanningRequestDTO,
    response: Response,
    engine: WorkflowEngine = Depends(get_workflow_engine),
):
    """
    Travel planning plus AI recommendations, a personalized itinerary and
    destination insights. AI steps that fail are listed in the plan's
    `partial_failures`; the execution still completes.
    """
    if request.background:
        return await _start(engine, response, AI_TRAVEL_PLANNING_WORKFLOW, **travel_params(request))

    execution = await engine.execute_ai_travel_planning_workflow(request)
    return ExecutionDTO.from_entity(execution)
