"""Persistence adapters for executions and travel plans.

The Redis backends are imported lazily by callers that select them.
"""
from .in_memory_execution_store import InMemoryExecutionStore
from .in_memory_travel_plan_store import InMemoryTravelPlanStore

__all__ = ["InMemoryExecutionStore", "InMemoryTravelPlanStore"]
