"""Pytest configuration and fixtures for API integration tests."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api.dependencies import (
    get_ai_travel_advisor,
    get_execution_store,
    get_geolocation_provider,
    get_settings,
    get_travel_plan_store,
    get_weather_provider,
    get_workflow_engine,
    reset_dependencies,
)
from api.main import app
from core.infrastructure.adapters.persistence import (
    InMemoryExecutionStore,
    InMemoryTravelPlanStore,
)
from orchestration import InMemoryEventBus, create_default_engine
from tests.mocks.fake_collaborators import (
    FakeAITravelAdvisor,
    FakeGeolocationProvider,
    FakeWeatherProvider,
    make_settings,
)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def store():
    return InMemoryExecutionStore()


@pytest.fixture
def plan_store():
    return InMemoryTravelPlanStore()


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
def engine(settings, store, plan_store, geolocation, weather, ai_advisor):
    return create_default_engine(
        settings=settings,
        store=store,
        event_bus=InMemoryEventBus(),
        geolocation=geolocation,
        weather=weather,
        ai_advisor=ai_advisor,
        plan_store=plan_store,
    )


@pytest.fixture
def client(
    settings, store, plan_store, geolocation, weather, ai_advisor, engine
) -> Generator[TestClient, None, None]:
    """TestClient wired to in-process fakes."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_execution_store] = lambda: store
    app.dependency_overrides[get_travel_plan_store] = lambda: plan_store
    app.dependency_overrides[get_geolocation_provider] = lambda: geolocation
    app.dependency_overrides[get_weather_provider] = lambda: weather
    app.dependency_overrides[get_ai_travel_advisor] = lambda: ai_advisor
    app.dependency_overrides[get_workflow_engine] = lambda: engine

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    reset_dependencies()
