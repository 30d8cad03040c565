"""
Execution Status Enum.

Status values for workflow executions and their steps.
"""
from enum import Enum


class ExecutionStatus(str, Enum):
    """Execution and step status values."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transitions are allowed."""
        return self in (ExecutionStatus.COMPLETED, ExecutionStatus.FAILED)
