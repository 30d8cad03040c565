"""Workflow definitions - Activity, RetryPolicy, WorkflowStep, WorkflowDefinition."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .models import ExecutionContext

# Type alias for workflow activities
Activity = Callable[[ExecutionContext], Awaitable[object]]


@dataclass
class RetryPolicy:
    """Retry policy for workflow steps. The default is a single attempt."""

    max_attempts: int = 1
    backoff_seconds: float = 0.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.backoff_seconds < 0:
            raise ValueError(f"backoff_seconds must not be negative, got {self.backoff_seconds}")


@dataclass
class WorkflowStep:
    """A single step in a workflow.

    A failed ``required`` step ends the execution; other failures are
    recorded and the workflow moves on. Steps whose ``condition`` returns
    False are skipped without a record. ``describe_input`` renders the
    step's input descriptor for the execution record.
    """

    name: str
    activity: Activity
    required: bool = True
    condition: Callable[[ExecutionContext], bool] | None = None
    describe_input: Callable[[ExecutionContext], str | None] | None = None
    retry_policy: RetryPolicy | None = None


@dataclass
class WorkflowDefinition:
    """Definition of a workflow."""

    name: str
    steps: list[WorkflowStep]
