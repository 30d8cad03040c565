"""Domain value objects."""

from .value_objects import ExecutionID

__all__ = [
    "ExecutionID",
]
