"""
Unit tests for the rule-based travel planner.
"""
import pytest

from core.application.dtos.travel_dto import TravelPlanInputDTO
from core.domain.exceptions import InvalidInputError
from core.infrastructure.adapters.travel import TravelPlanner, describe_duration


@pytest.fixture
def planner():
    return TravelPlanner()


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("2024-06-01", "2024-06-01", "1 day"),
        ("2024-06-01", "2024-06-05", "5 days"),
        ("2024-02-28", "2024-03-01", "3 days"),
    ],
)
def test_describe_duration(start, end, expected):
    assert describe_duration(start, end) == expected


def test_describe_duration_rejects_reversed_dates():
    with pytest.raises(InvalidInputError):
        describe_duration("2024-06-05", "2024-06-01")


@pytest.mark.asyncio
async def test_recommendations_follow_interests(planner):
    recs = await planner.get_recommendations(0.0, 0.0, ["culture", "food", "nature"])

    assert [r.destination for r in recs] == [
        "Local Cultural District",
        "Nearby Natural Areas",
        "Local Food Scene",
    ]


@pytest.mark.asyncio
async def test_recommendations_use_budget_and_duration(planner):
    recs = await planner.get_recommendations(0.0, 0.0, ["food"], budget="$500", duration="4 days")

    assert len(recs) == 1
    assert recs[0].estimated_budget == "$500"
    assert recs[0].duration == "4 days"


@pytest.mark.asyncio
async def test_recommendations_empty_for_unknown_interests(planner):
    assert await planner.get_recommendations(0.0, 0.0, ["skydiving"]) == []


@pytest.mark.asyncio
async def test_create_plan_builds_one_day_per_date(planner):
    plan = await planner.create_plan(
        TravelPlanInputDTO(
            destination="Paris, France",
            start_date="2024-06-01",
            end_date="2024-06-04",
            interests=["culture"],
            budget="$100-200 per day",
            travel_style="balanced",
        )
    )

    assert plan.id.startswith("plan_")
    assert plan.destination == "Paris, France"
    assert [d.date for d in plan.itinerary] == ["2024-06-01", "2024-06-02", "2024-06-03", "2024-06-04"]
    assert plan.itinerary[0].activities[0].name == "Check-in and City Orientation"
    assert plan.itinerary[1].activities[0].name == "Museum and Cultural Sites Visit"
    assert plan.itinerary[-1].accommodation is None
    assert all(len(day.meals) == 3 for day in plan.itinerary)
    assert plan.total_budget == "$100-200 per day"
    assert plan.recommendations[0].duration == "4 days"


@pytest.mark.asyncio
async def test_create_plan_without_budget(planner):
    plan = await planner.create_plan(
        TravelPlanInputDTO(destination="Rome", start_date="2024-06-01", end_date="2024-06-01")
    )

    assert plan.total_budget == "Budget not specified"
    assert len(plan.itinerary) == 1
