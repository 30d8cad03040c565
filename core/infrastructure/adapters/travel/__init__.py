"""Travel planning adapters."""
from .ai_travel_advisor import AITravelAdvisor
from .travel_planner import TravelPlanner, describe_duration

__all__ = ["AITravelAdvisor", "TravelPlanner", "describe_duration"]
