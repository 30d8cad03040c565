"""
Unit tests for TravelPlanService.
"""
import pytest

from core.application.dtos.travel_dto import TravelPlanInputDTO
from core.application.services import TravelPlanService
from core.domain.exceptions import InvalidInputError
from core.infrastructure.adapters.persistence import InMemoryTravelPlanStore
from core.infrastructure.adapters.travel import TravelPlanner


@pytest.fixture
def plan_store():
    return InMemoryTravelPlanStore()


@pytest.fixture
def service(plan_store):
    return TravelPlanService(planner=TravelPlanner(), store=plan_store)


def _input(**overrides) -> TravelPlanInputDTO:
    fields = dict(
        destination="Kyoto, Japan",
        start_date="2024-04-01",
        end_date="2024-04-03",
        budget="$150 per day",
        interests=["culture"],
    )
    fields.update(overrides)
    return TravelPlanInputDTO(**fields)


@pytest.mark.asyncio
async def test_create_plan_stores_it(service, plan_store):
    plan = await service.create_plan(_input())

    assert plan.destination == "Kyoto, Japan"
    assert len(plan.itinerary) == 3
    assert await plan_store.get(plan.id) == plan


@pytest.mark.asyncio
async def test_create_plan_with_reversed_dates_stores_nothing(service, plan_store):
    with pytest.raises(InvalidInputError):
        await service.create_plan(_input(start_date="2024-04-05", end_date="2024-04-01"))

    assert len(plan_store) == 0


@pytest.mark.asyncio
async def test_update_rebuilds_but_keeps_identity(service):
    original = await service.create_plan(_input())

    updated = await service.update_plan(
        original.id, _input(destination="Osaka, Japan", end_date="2024-04-05")
    )

    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.destination == "Osaka, Japan"
    assert len(updated.itinerary) == 5
    assert await service.get_plan(original.id) == updated
    assert len(await service.list_plans()) == 1


@pytest.mark.asyncio
async def test_update_unknown_plan_returns_none(service, plan_store):
    assert await service.update_plan("plan_missing", _input()) is None
    assert len(plan_store) == 0


@pytest.mark.asyncio
async def test_delete_plan(service):
    plan = await service.create_plan(_input())

    assert await service.delete_plan(plan.id) is True
    assert await service.delete_plan(plan.id) is False
    assert await service.get_plan(plan.id) is None


@pytest.mark.asyncio
async def test_list_plans_oldest_first(service):
    first = await service.create_plan(_input())
    second = await service.create_plan(_input(destination="Nara, Japan"))

    assert [p.id for p in await service.list_plans()] == [first.id, second.id]
