"""
FastAPI Dependencies.

Provides dependency injection for the workflow engine and collaborators.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import Depends

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.services import TravelPlanService
from core.settings import AppSettings, get_app_settings
from core.infrastructure.adapters.completion import OpenAICompletionClient
from core.infrastructure.adapters.geolocation import IPGeolocationClient
from core.infrastructure.adapters.persistence import InMemoryExecutionStore, InMemoryTravelPlanStore
from core.infrastructure.adapters.travel import AITravelAdvisor, TravelPlanner
from core.infrastructure.adapters.weather import OpenWeatherClient
from orchestration import InMemoryEventBus, WorkflowEngine, create_default_engine

if TYPE_CHECKING:
    from core.application.interfaces import (
        IAITravelAdvisor,
        IGeolocationProvider,
        ITravelPlanner,
        ITravelPlanStore,
        IWeatherProvider,
    )
    from core.domain.repositories.execution_store import ExecutionStore
    from orchestration import EventBusProtocol

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_execution_store = None
_travel_plan_store = None
_event_bus = None
_geolocation_provider = None
_weather_provider = None
_travel_planner = None
_ai_travel_advisor = None
_workflow_engine = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_settings() -> AppSettings:
    return get_app_settings()


def get_execution_store() -> ExecutionStore:
    global _execution_store

    if _execution_store is None:
        storage = get_app_settings().storage

        if storage.backend == "redis":
            from core.infrastructure.adapters.persistence.redis_execution_store import RedisExecutionStore
            _execution_store = RedisExecutionStore(
                redis_url=storage.redis_url,
                key_prefix=storage.key_prefix,
            )
            logger.info(f"Created RedisExecutionStore at {storage.redis_url}")
        else:
            _execution_store = InMemoryExecutionStore()
            logger.info("Created InMemoryExecutionStore instance")

    return _execution_store


def get_travel_plan_store() -> ITravelPlanStore:
    global _travel_plan_store

    if _travel_plan_store is None:
        storage = get_app_settings().storage

        if storage.backend == "redis":
            from core.infrastructure.adapters.persistence.redis_travel_plan_store import RedisTravelPlanStore
            _travel_plan_store = RedisTravelPlanStore(
                redis_url=storage.redis_url,
                key_prefix=storage.plan_key_prefix,
            )
            logger.info(f"Created RedisTravelPlanStore at {storage.redis_url}")
        else:
            _travel_plan_store = InMemoryTravelPlanStore()
            logger.info("Created InMemoryTravelPlanStore instance")

    return _travel_plan_store


def get_event_bus() -> EventBusProtocol:
    global _event_bus
    if _event_bus is None:
        _event_bus = InMemoryEventBus()
        logger.info("Created InMemoryEventBus instance")
    return _event_bus


def get_geolocation_provider() -> IGeolocationProvider:
    global _geolocation_provider
    if _geolocation_provider is None:
        _geolocation_provider = IPGeolocationClient(get_app_settings().integrations.ipgeolocation)
        logger.info("Created IPGeolocationClient instance")
    return _geolocation_provider


def get_weather_provider() -> IWeatherProvider:
    global _weather_provider
    if _weather_provider is None:
        _weather_provider = OpenWeatherClient(get_app_settings().integrations.openweather)
        logger.info("Created OpenWeatherClient instance")
    return _weather_provider


def get_travel_planner() -> ITravelPlanner:
    global _travel_planner
    if _travel_planner is None:
        _travel_planner = TravelPlanner()
        logger.info("Created TravelPlanner instance")
    return _travel_planner


def get_ai_travel_advisor() -> IAITravelAdvisor:
    global _ai_travel_advisor
    if _ai_travel_advisor is None:
        _ai_travel_advisor = AITravelAdvisor(
            OpenAICompletionClient(get_app_settings().integrations.openai)
        )
        logger.info("Created AITravelAdvisor instance")
    return _ai_travel_advisor


def get_travel_plan_service(
    planner=Depends(get_travel_planner),
    store=Depends(get_travel_plan_store),
) -> TravelPlanService:
    return TravelPlanService(planner=planner, store=store)


def get_workflow_engine() -> WorkflowEngine:
    global _workflow_engine

    if _workflow_engine is None:
        _workflow_engine = create_default_engine(
            settings=get_app_settings(),
            store=get_execution_store(),
            event_bus=get_event_bus(),
            geolocation=get_geolocation_provider(),
            weather=get_weather_provider(),
            travel_planner=get_travel_planner(),
            ai_advisor=get_ai_travel_advisor(),
            plan_store=get_travel_plan_store(),
        )
        logger.info("Created WorkflowEngine instance")

    return _workflow_engine


# =============================================================================
# SHUTDOWN
# =============================================================================

async def shutdown_dependencies() -> None:
    """Finish or cancel background executions, then close the stores."""
    if _workflow_engine is not None:
        await _workflow_engine.shutdown(get_app_settings().workflow.shutdown_grace_seconds)

    for store in (_execution_store, _travel_plan_store):
        disconnect = getattr(store, "disconnect", None)
        if disconnect is not None:
            await disconnect()


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _execution_store, _travel_plan_store, _event_bus, _geolocation_provider
    global _weather_provider, _travel_planner, _ai_travel_advisor, _workflow_engine

    _execution_store = None
    _travel_plan_store = None
    _event_bus = None
    _geolocation_provider = None
    _weather_provider = None
    _travel_planner = None
    _ai_travel_advisor = None
    _workflow_engine = None

    logger.info("Dependencies reset")
