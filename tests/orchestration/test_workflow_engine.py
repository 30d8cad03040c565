"""Tests for WorkflowEngine - the four workflows end to end with fake collaborators."""

import asyncio
import json
from datetime import date

import pytest

from core.application.dtos.travel_dto import UserProfileDTO
from core.application.dtos.workflow_dto import (
    AITravelPlanningRequestDTO,
    TravelPlanningRequestDTO,
)
from core.domain.enums.execution_status import ExecutionStatus
from core.domain.exceptions import CollaboratorError
from core.infrastructure.adapters.persistence import (
    InMemoryExecutionStore,
    InMemoryTravelPlanStore,
)
from orchestration import InMemoryEventBus, create_default_engine
from orchestration.engine import UnknownWorkflowError
from orchestration.events import Event
from tests.mocks.fake_collaborators import (
    FakeAITravelAdvisor,
    FakeGeolocationProvider,
    FakeWeatherProvider,
    make_settings,
)


@pytest.fixture
def geolocation():
    return FakeGeolocationProvider()


@pytest.fixture
def weather():
    return FakeWeatherProvider()


@pytest.fixture
def ai_advisor():
    return FakeAITravelAdvisor()


@pytest.fixture
def store():
    return InMemoryExecutionStore()


@pytest.fixture
def bus():
    return InMemoryEventBus()


def build_engine(store, bus, geolocation, weather, ai_advisor, plan_store=None, **keys):
    return create_default_engine(
        settings=make_settings(**keys),
        store=store,
        event_bus=bus,
        geolocation=geolocation,
        weather=weather,
        ai_advisor=ai_advisor,
        plan_store=plan_store,
    )


@pytest.fixture
def engine(store, bus, geolocation, weather, ai_advisor):
    return build_engine(store, bus, geolocation, weather, ai_advisor)


def _paris_request(**overrides) -> TravelPlanningRequestDTO:
    fields = dict(destination="Paris, France", start_date=date(2024, 6, 1), end_date=date(2024, 6, 5))
    fields.update(overrides)
    return TravelPlanningRequestDTO(**fields)


# =============================================================================
# LOCATION
# =============================================================================

@pytest.mark.asyncio
async def test_location_workflow_success(engine, geolocation):
    """Valid IP: two completed steps and a location result."""
    execution = await engine.execute_location_workflow("8.8.8.8")

    assert execution.status == ExecutionStatus.COMPLETED
    assert [s.name for s in execution.steps] == ["Validate IP Address", "Get Location from IP"]
    assert all(s.status == ExecutionStatus.COMPLETED for s in execution.steps)
    assert execution.steps[0].input == "8.8.8.8"
    assert execution.steps[1].input == "IP: 8.8.8.8"
    assert all(s.duration_ms >= 0 for s in execution.steps)
    assert execution.completed_at is not None
    assert execution.error is None

    location = json.loads(execution.result)
    assert location["ip"] == "8.8.8.8"
    assert location["city"] == "Paris"
    assert geolocation.calls == [{"ip": "8.8.8.8", "api_key": "geo-key"}]


@pytest.mark.asyncio
async def test_location_workflow_invalid_ip(engine, geolocation):
    """Malformed IP fails on the first step without any lookup."""
    execution = await engine.execute_location_workflow("999.999.999.999")

    assert execution.status == ExecutionStatus.FAILED
    assert len(execution.steps) == 1
    assert execution.steps[0].name == "Validate IP Address"
    assert execution.steps[0].status == ExecutionStatus.FAILED
    assert "Invalid IP address" in execution.error
    assert execution.result is None
    assert execution.completed_at is not None
    assert geolocation.calls == []


@pytest.mark.asyncio
async def test_location_workflow_missing_key(store, bus, geolocation, weather, ai_advisor):
    engine = build_engine(store, bus, geolocation, weather, ai_advisor, ipgeolocation_key=None)

    execution = await engine.execute_location_workflow("8.8.8.8")

    assert execution.status == ExecutionStatus.FAILED
    assert len(execution.steps) == 2
    assert execution.error == "IP geolocation API key not configured"
    assert geolocation.calls == []


@pytest.mark.asyncio
async def test_location_workflow_collaborator_error_is_recorded(store, bus, weather, ai_advisor):
    geolocation = FakeGeolocationProvider(error=CollaboratorError("Geolocation API returned status 503: down"))
    engine = build_engine(store, bus, geolocation, weather, ai_advisor)

    execution = await engine.execute_location_workflow("8.8.8.8")

    assert execution.status == ExecutionStatus.FAILED
    assert execution.error == "Geolocation API returned status 503: down"
    assert execution.steps[1].error == execution.error


# =============================================================================
# WEATHER
# =============================================================================

@pytest.mark.asyncio
async def test_weather_workflow_success(engine, weather):
    execution = await engine.execute_weather_workflow("8.8.8.8")

    assert execution.status == ExecutionStatus.COMPLETED
    assert [s.name for s in execution.steps] == ["Get Location from IP", "Get Weather for Location"]
    assert execution.steps[1].input == "Paris, France"
    assert json.loads(execution.result)["description"] == "clear sky"
    assert weather.calls == [{"method": "get_weather", "lat": 48.8566, "lon": 2.3522}]


@pytest.mark.asyncio
async def test_weather_workflow_without_geolocation_key_fails_after_one_step(
    store, bus, geolocation, weather, ai_advisor
):
    engine = build_engine(store, bus, geolocation, weather, ai_advisor, ipgeolocation_key=None)

    execution = await engine.execute_weather_workflow("8.8.8.8")

    assert execution.status == ExecutionStatus.FAILED
    assert len(execution.steps) == 1
    assert "API key not configured" in execution.error
    assert weather.calls == []


@pytest.mark.asyncio
async def test_weather_workflow_without_weather_key(store, bus, geolocation, weather, ai_advisor):
    engine = build_engine(store, bus, geolocation, weather, ai_advisor, openweather_key=None)

    execution = await engine.execute_weather_workflow("8.8.8.8")

    assert execution.status == ExecutionStatus.FAILED
    assert len(execution.steps) == 2
    assert execution.error == "Weather API key not configured"
    assert weather.calls == []


# =============================================================================
# TRAVEL PLANNING
# =============================================================================

@pytest.mark.asyncio
async def test_travel_planning_with_destination(engine, weather, geolocation):
    """No IP: location step is skipped and the explicit destination is used."""
    execution = await engine.execute_travel_planning_workflow(_paris_request())

    assert execution.status == ExecutionStatus.COMPLETED
    assert [s.name for s in execution.steps] == [
        "Get Weather Forecast",
        "Generate Travel Recommendations",
        "Create Travel Plan",
    ]
    assert execution.steps[1].input == "Default interests: culture, food, nature"
    assert json.loads(execution.steps[2].input) == {
        "destination": "Paris, France",
        "start_date": "2024-06-01",
        "end_date": "2024-06-05",
    }

    plan = json.loads(execution.result)
    assert plan["destination"] == "Paris, France"
    assert plan["start_date"] == "2024-06-01"
    assert plan["end_date"] == "2024-06-05"
    assert plan["total_budget"] == "$100-200 per day"
    assert plan["travel_style"] == "balanced"
    assert len(plan["itinerary"]) == 5
    assert plan["current_weather"]["location"] == "Paris, France"
    assert geolocation.calls == []
    assert weather.calls[0]["method"] == "get_weather_by_city"


@pytest.mark.asyncio
async def test_travel_planning_from_ip_uses_resolved_place(engine):
    execution = await engine.execute_travel_planning_workflow(
        _paris_request(destination=None, ip="8.8.8.8")
    )

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.steps[0].name == "Get Location from IP"
    assert json.loads(execution.result)["destination"] == "Paris, France"


@pytest.mark.asyncio
async def test_travel_planning_from_ip_includes_daily_forecast(engine, weather):
    execution = await engine.execute_travel_planning_workflow(
        _paris_request(destination=None, ip="8.8.8.8")
    )

    assert execution.status == ExecutionStatus.COMPLETED
    assert [c["method"] for c in weather.calls] == ["get_weather", "get_forecast"]

    forecast_output = json.loads(execution.steps[1].output)
    assert forecast_output["current"]["description"] == "clear sky"
    assert forecast_output["daily"][0]["date"] == "2024-06-01"

    plan = json.loads(execution.result)
    assert plan["current_weather"]["description"] == "clear sky"
    assert plan["weather_forecast"] == [
        {
            "date": "2024-06-01",
            "max_temp": 22.0,
            "min_temp": 14.0,
            "description": "few clouds",
            "icon": "02d",
            "precipitation": 0.0,
        }
    ]


@pytest.mark.asyncio
async def test_travel_planning_forecast_failure_keeps_current_weather(store, bus, geolocation, ai_advisor):
    weather = FakeWeatherProvider(forecast_error=CollaboratorError("Weather API returned status 500: down"))
    engine = build_engine(store, bus, geolocation, weather, ai_advisor)

    execution = await engine.execute_travel_planning_workflow(
        _paris_request(destination=None, ip="8.8.8.8")
    )

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.steps[1].status == ExecutionStatus.COMPLETED
    plan = json.loads(execution.result)
    assert plan["current_weather"]["description"] == "clear sky"
    assert plan["weather_forecast"] == []


@pytest.mark.asyncio
async def test_travel_planning_by_destination_has_no_daily_forecast(engine, weather):
    execution = await engine.execute_travel_planning_workflow(_paris_request())

    assert json.loads(execution.result)["weather_forecast"] == []
    assert "get_forecast" not in [c["method"] for c in weather.calls]


@pytest.mark.asyncio
async def test_travel_plans_are_kept_in_the_plan_store(store, bus, geolocation, weather, ai_advisor):
    plan_store = InMemoryTravelPlanStore()
    engine = build_engine(store, bus, geolocation, weather, ai_advisor, plan_store=plan_store)

    plain = await engine.execute_travel_planning_workflow(_paris_request())
    enriched = await engine.execute_ai_travel_planning_workflow(_ai_request())

    plain_id = json.loads(plain.result)["id"]
    enriched_id = json.loads(enriched.result)["id"]
    assert [p.id for p in await plan_store.list()] == [plain_id, enriched_id]
    stored = await plan_store.get(enriched_id)
    assert stored.travel_insights.hidden_gems == ["Canal Saint-Martin"]


    assert json.loads(execution.result)["destination"] == "Paris, France"


@pytest.mark.asyncio
async def test_travel_planning_weather_failure_is_best_effort(store, bus, geolocation, ai_advisor):
    weather = FakeWeatherProvider(error=CollaboratorError("Weather API timed out after 10s"))
    engine = build_engine(store, bus, geolocation, weather, ai_advisor)

    execution = await engine.execute_travel_planning_workflow(_paris_request())

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.steps[0].status == ExecutionStatus.FAILED
    assert execution.steps[0].error == "Weather API timed out after 10s"
    assert json.loads(execution.result)["current_weather"] is None


@pytest.mark.asyncio
async def test_travel_planning_without_ip_or_destination(engine):
    execution = await engine.execute_travel_planning_workflow(_paris_request(destination=None))

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.steps[0].error == "No location data available for weather forecast"
    assert json.loads(execution.result)["destination"] == "Unknown Destination"


# =============================================================================
# AI TRAVEL PLANNING
# =============================================================================

def _ai_request(**profile) -> AITravelPlanningRequestDTO:
    return AITravelPlanningRequestDTO(
        destination="Paris, France",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 3),
        user_profile=UserProfileDTO(**profile),
    )


@pytest.mark.asyncio
async def test_ai_travel_planning_success(engine, ai_advisor):
    execution = await engine.execute_ai_travel_planning_workflow(
        _ai_request(interests=["art"], group_size=2, budget="$300 per day")
    )

    assert execution.status == ExecutionStatus.COMPLETED
    assert [s.name for s in execution.steps] == [
        "Get Weather Forecast",
        "Generate AI Travel Recommendations",
        "Generate Personalized Itinerary",
        "Generate Travel Insights",
        "Create AI Travel Plan",
    ]

    plan = json.loads(execution.result)
    assert plan["destination"] == "Paris, France"
    assert plan["travelers"] == 2
    assert plan["total_budget"] == "$300 per day"
    assert plan["ai_recommendations"][0]["destination"] == "Paris, France"
    assert plan["personalized_itinerary"] == {"itinerary": [{"day": 1, "theme": "Arrival"}]}
    assert plan["travel_insights"]["hidden_gems"] == ["Canal Saint-Martin"]
    assert plan["partial_failures"] == []

    recommendations_call = ai_advisor.calls[0]
    assert recommendations_call["interests"] == ["art"]
    assert recommendations_call["duration"] == "3 days"


@pytest.mark.asyncio
async def test_ai_travel_planning_partial_failure(store, bus, geolocation, weather):
    ai_advisor = FakeAITravelAdvisor(failing={"create_personalized_itinerary"})
    engine = build_engine(store, bus, geolocation, weather, ai_advisor)

    execution = await engine.execute_ai_travel_planning_workflow(_ai_request())

    assert execution.status == ExecutionStatus.COMPLETED
    plan = json.loads(execution.result)
    assert plan["personalized_itinerary"] == {}
    assert plan["partial_failures"] == ["Generate Personalized Itinerary"]
    assert len(plan["ai_recommendations"]) == 1


@pytest.mark.asyncio
async def test_ai_travel_planning_without_openai_key(store, bus, geolocation, weather, ai_advisor):
    engine = build_engine(store, bus, geolocation, weather, ai_advisor, openai_key=None)

    execution = await engine.execute_ai_travel_planning_workflow(_ai_request())

    assert execution.status == ExecutionStatus.COMPLETED
    ai_steps = execution.steps[1:4]
    assert all(s.error == "OpenAI API key not configured" for s in ai_steps)
    assert ai_advisor.calls == []

    plan = json.loads(execution.result)
    assert plan["ai_recommendations"] == []
    assert plan["travel_insights"]["insights"] == ""
    assert len(plan["partial_failures"]) == 3


# =============================================================================
# EXECUTION RECORDS
# =============================================================================

@pytest.mark.asyncio
async def test_get_execution_is_idempotent(engine):
    execution = await engine.execute_location_workflow("8.8.8.8")

    first = await engine.get_execution(execution.id)
    second = await engine.get_execution(execution.id)

    assert first == second
    assert first.to_snapshot_dict() == execution.to_snapshot_dict()


@pytest.mark.asyncio
async def test_get_unknown_execution_returns_none(engine):
    assert await engine.get_execution("exec_0_doesnotexist") is None


@pytest.mark.asyncio
async def test_purge_removes_terminal_executions(engine):
    ok = await engine.execute_location_workflow("8.8.8.8")
    failed = await engine.execute_location_workflow("not-an-ip")

    purged = await engine.purge_terminal_executions()

    assert purged == 2
    assert await engine.get_execution(ok.id) is None
    assert await engine.get_execution(failed.id) is None
    assert await engine.purge_terminal_executions() == 0


@pytest.mark.asyncio
async def test_purge_keeps_running_executions(engine, store, geolocation):
    release = asyncio.Event()
    original = geolocation.get_location

    async def slow_get_location(ip, api_key):
        await release.wait()
        return await original(ip, api_key)

    geolocation.get_location = slow_get_location

    finished = await engine.execute_location_workflow("not-an-ip")
    running = await engine.start_workflow("location", ip="8.8.8.8")
    await asyncio.sleep(0)

    assert await engine.purge_terminal_executions() == 1
    assert await engine.get_execution(finished.id) is None
    assert await engine.get_execution(running.id) is not None

    release.set()
    await engine.wait_for_background()
    stored = await engine.get_execution(running.id)
    assert stored.status == ExecutionStatus.COMPLETED


@pytest.mark.asyncio
async def test_concurrent_executions_have_unique_ids(engine):
    executions = await asyncio.gather(
        *(engine.execute_location_workflow("8.8.8.8") for _ in range(20))
    )

    ids = {e.id for e in executions}
    assert len(ids) == 20
    assert all(e.status == ExecutionStatus.COMPLETED for e in executions)
    assert len(await engine.list_executions()) == 20


@pytest.mark.asyncio
async def test_start_workflow_returns_before_completion(engine):
    execution = await engine.start_workflow("location", ip="8.8.8.8")

    assert execution.status == ExecutionStatus.PENDING
    assert execution.steps == []

    await engine.wait_for_background()
    finished = await engine.get_execution(execution.id)
    assert finished.status == ExecutionStatus.COMPLETED
    assert len(finished.steps) == 2


@pytest.mark.asyncio
async def test_start_unknown_workflow(engine):
    with pytest.raises(UnknownWorkflowError):
        await engine.start_workflow("teleport")


@pytest.mark.asyncio
async def test_orchestrator_crash_is_recorded_as_failed_execution(engine, store):
    original_update = store.update
    calls = {"n": 0}

    async def flaky_update(execution):
        calls["n"] += 1
        if calls["n"] == 2:
            raise RuntimeError("store hiccup")
        await original_update(execution)

    store.update = flaky_update

    execution = await engine.execute_location_workflow("8.8.8.8")

    assert execution.status == ExecutionStatus.FAILED
    assert execution.error == "store hiccup"
    assert execution.completed_at is not None


@pytest.mark.asyncio
async def test_events_carry_execution_snapshots(engine, bus):
    received: list[Event] = []

    async def handler(event: Event) -> None:
        received.append(event)

    bus.subscribe("*", handler)
    execution = await engine.execute_location_workflow("8.8.8.8")

    assert [e.name for e in received] == [
        "workflow.started",
        "workflow.step.completed",
        "workflow.step.completed",
        "workflow.finished",
    ]
    assert all(e.metadata.execution_id == execution.id for e in received)
    assert received[0].payload["execution"]["status"] == "running"
    assert received[-1].payload["execution"]["status"] == "completed"


def test_workflow_names(engine):
    assert engine.workflow_names == [
        "ai_travel_planning",
        "location",
        "travel_planning",
        "weather",
    ]


# =============================================================================
# SHUTDOWN
# =============================================================================

@pytest.mark.asyncio
async def test_start_workflow_store_failure_returns_failed_execution(engine, store):
    async def broken_create(execution):
        raise ConnectionError("redis down")

    store.create = broken_create

    execution = await engine.start_workflow("location", ip="8.8.8.8")

    assert execution.status == ExecutionStatus.FAILED
    assert execution.error == "Execution store unavailable: redis down"
    assert execution.completed_at is not None
    assert engine._background == set()


@pytest.mark.asyncio
async def test_shutdown_cancels_stuck_executions_and_records_failure(engine, bus, geolocation):
    received: list[Event] = []

    async def handler(event: Event) -> None:
        received.append(event)

    async def never_returns(ip, api_key):
        await asyncio.Event().wait()

    geolocation.get_location = never_returns
    bus.subscribe("*", handler)

    execution = await engine.start_workflow("location", ip="8.8.8.8")
    await asyncio.sleep(0.01)

    await engine.shutdown(grace_seconds=0.05)

    stored = await engine.get_execution(execution.id)
    assert stored.status == ExecutionStatus.FAILED
    assert stored.error == "Execution cancelled"
    assert stored.completed_at is not None
    assert engine._background == set()

    finished = [e for e in received if e.name == "workflow.finished"]
    assert len(finished) == 1
    assert finished[0].payload["execution"]["error"] == "Execution cancelled"


@pytest.mark.asyncio
async def test_shutdown_lets_quick_executions_finish(engine):
    execution = await engine.start_workflow("location", ip="8.8.8.8")

    await engine.shutdown(grace_seconds=5)

    stored = await engine.get_execution(execution.id)
    assert stored.status == ExecutionStatus.COMPLETED


@pytest.mark.asyncio
async def test_shutdown_without_background_work(engine):
    await engine.shutdown(grace_seconds=0)
