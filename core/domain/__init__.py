"""Domain layer - pure domain models and interfaces."""

from .entities import Execution, StepRecord
from .enums import ExecutionStatus
from .value_objects import ExecutionID

__all__ = [
    "Execution",
    "ExecutionID",
    "ExecutionStatus",
    "StepRecord",
]
