"""Application services."""

from .travel_plan_service import TravelPlanService

__all__ = ["TravelPlanService"]
