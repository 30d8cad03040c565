"""Orchestration layer - workflow execution with eventing."""

from typing import TYPE_CHECKING

from .bus import EventBusProtocol, InMemoryEventBus
from .engine import UnknownWorkflowError, WorkflowEngine
from .events import Event, EventMetadata
from .models import ExecutionContext
from .orchestrator import Orchestrator
from .step_executor import run_step
from .watcher import ExecutionWatcher
from .workflow import Activity, RetryPolicy, WorkflowDefinition, WorkflowStep
from .workflows import WorkflowCatalog

if TYPE_CHECKING:
    from core.application.interfaces import (
        IAITravelAdvisor,
        IGeolocationProvider,
        ITravelPlanner,
        ITravelPlanStore,
        IWeatherProvider,
    )
    from core.domain.repositories.execution_store import ExecutionStore
    from core.settings.modules.app_settings import AppSettings

__all__ = [
    "Activity",
    "Event",
    "EventBusProtocol",
    "EventMetadata",
    "ExecutionContext",
    "ExecutionWatcher",
    "InMemoryEventBus",
    "Orchestrator",
    "RetryPolicy",
    "UnknownWorkflowError",
    "WorkflowCatalog",
    "WorkflowDefinition",
    "WorkflowEngine",
    "WorkflowStep",
    "create_default_engine",
    "run_step",
]


def create_default_engine(
    settings: "AppSettings",
    store: "ExecutionStore | None" = None,
    event_bus: EventBusProtocol | None = None,
    geolocation: "IGeolocationProvider | None" = None,
    weather: "IWeatherProvider | None" = None,
    travel_planner: "ITravelPlanner | None" = None,
    ai_advisor: "IAITravelAdvisor | None" = None,
    plan_store: "ITravelPlanStore | None" = None,
) -> WorkflowEngine:
    """Create a workflow engine, filling any missing collaborator with the default one.

    Args:
        settings: Application settings (API keys, workflow defaults)
        store: Execution store (in-memory when omitted)
        event_bus: Event bus (in-memory when omitted)
        geolocation: Geolocation provider
        weather: Weather provider
        travel_planner: Local travel planner
        ai_advisor: AI travel advisor
        plan_store: Store for the plans the travel workflows build (in-memory when omitted)

    Returns:
        WorkflowEngine instance
    """
    from core.infrastructure.adapters.completion import OpenAICompletionClient
    from core.infrastructure.adapters.geolocation import IPGeolocationClient
    from core.infrastructure.adapters.persistence import (
        InMemoryExecutionStore,
        InMemoryTravelPlanStore,
    )
    from core.infrastructure.adapters.travel import AITravelAdvisor, TravelPlanner
    from core.infrastructure.adapters.weather import OpenWeatherClient

    integrations = settings.integrations
    store = store if store is not None else InMemoryExecutionStore()
    event_bus = event_bus if event_bus is not None else InMemoryEventBus()

    catalog = WorkflowCatalog(
        settings=settings,
        geolocation=geolocation or IPGeolocationClient(integrations.ipgeolocation),
        weather=weather or OpenWeatherClient(integrations.openweather),
        travel_planner=travel_planner or TravelPlanner(),
        ai_advisor=ai_advisor or AITravelAdvisor(OpenAICompletionClient(integrations.openai)),
        plan_store=plan_store if plan_store is not None else InMemoryTravelPlanStore(),
    )
    orchestrator = Orchestrator(
        store=store,
        event_bus=event_bus,
        default_retry_policy=RetryPolicy(
            max_attempts=settings.workflow.step_max_attempts,
            backoff_seconds=settings.workflow.step_backoff_seconds,
        ),
    )
    return WorkflowEngine(
        store=store,
        event_bus=event_bus,
        orchestrator=orchestrator,
        definitions=catalog.definitions(),
    )
