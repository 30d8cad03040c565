"""Domain entities."""

from .execution import Execution, StepRecord

__all__ = ["Execution", "StepRecord"]
