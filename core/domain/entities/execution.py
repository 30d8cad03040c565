"""
Execution aggregate root.

CRITICAL: This file must contain ZERO imports from:
- pydantic
- fastapi
- aiohttp
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..clock import utc_now
from ..enums.execution_status import ExecutionStatus
from ..exceptions import ExecutionStateError
from ..value_objects import ExecutionID


@dataclass
class StepRecord:
    """
    One unit of work inside an execution (a single collaborator call).

    ``output`` holds the serialized form for observability. The typed value
    produced by the step is kept in ``value`` only until the orchestrator
    moves it into the execution context.
    """
    name: str
    status: ExecutionStatus = ExecutionStatus.PENDING
    input: Optional[str] = None
    output: Optional[str] = None
    error: Optional[str] = None
    duration_ms: Optional[int] = None
    attempts: int = 0
    # Typed output, handed to the execution context and never snapshotted
    value: Any = field(default=None, repr=False, compare=False)

    @property
    def succeeded(self) -> bool:
        return self.status == ExecutionStatus.COMPLETED

    def to_snapshot_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "input": self.input,
            "output": self.output,
            "error": self.error,
            "duration_ms": self.duration_ms,
            "attempts": self.attempts,
        }

    @classmethod
    def from_snapshot_dict(cls, data: Dict[str, Any]) -> "StepRecord":
        return cls(
            name=data["name"],
            status=ExecutionStatus(data["status"]),
            input=data.get("input"),
            output=data.get("output"),
            error=data.get("error"),
            duration_ms=data.get("duration_ms"),
            attempts=data.get("attempts", 0),
        )


@dataclass
class Execution:
    """
    Execution aggregate root.

    Represents one invocation of a workflow. Steps are appended in the order
    they ran and are never reordered. Once the status is terminal exactly one
    of ``result``/``error`` is set, together with ``completed_at``, and the
    record no longer accepts mutations.
    """
    id: str
    workflow: str
    started_at: datetime
    status: ExecutionStatus = ExecutionStatus.PENDING
    steps: List[StepRecord] = field(default_factory=list)
    result: Optional[str] = None
    error: Optional[str] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def create(cls, workflow: str) -> "Execution":
        """Create a new pending execution with a fresh identifier."""
        return cls(
            id=ExecutionID.generate().value,
            workflow=workflow,
            started_at=utc_now(),
        )

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def mark_running(self) -> None:
        """Move from pending to running. No-op when already running."""
        self._ensure_mutable()
        self.status = ExecutionStatus.RUNNING

    def append_step(self, step: StepRecord) -> None:
        """Append a finished step."""
        self._ensure_mutable()
        if not step.status.is_terminal:
            raise ExecutionStateError(
                f"Step '{step.name}' must be finished before it is recorded (status: {step.status.value})"
            )
        self.steps.append(step)

    def complete(self, result: str) -> None:
        """Finish successfully with a serialized result."""
        self._ensure_mutable()
        self.status = ExecutionStatus.COMPLETED
        self.result = result
        self.error = None
        self.completed_at = utc_now()

    def fail(self, error: str) -> None:
        """Finish with an execution-level error message."""
        self._ensure_mutable()
        self.status = ExecutionStatus.FAILED
        self.error = error or "Unknown error"
        self.result = None
        self.completed_at = utc_now()

    def _ensure_mutable(self) -> None:
        if self.is_terminal:
            raise ExecutionStateError(
                f"Execution {self.id} is already {self.status.value} and cannot be modified"
            )

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_snapshot_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": self.id,
            "workflow": self.workflow,
            "status": self.status.value,
            "steps": [step.to_snapshot_dict() for step in self.steps],
            "result": self.result,
            "error": self.error,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_snapshot_dict(cls, data: Dict[str, Any]) -> "Execution":
        """Rebuild an execution from ``to_snapshot_dict`` output."""
        completed_at = data.get("completed_at")
        return cls(
            id=data["id"],
            workflow=data["workflow"],
            started_at=datetime.fromisoformat(data["started_at"]),
            status=ExecutionStatus(data["status"]),
            steps=[StepRecord.from_snapshot_dict(s) for s in data.get("steps", [])],
            result=data.get("result"),
            error=data.get("error"),
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
        )
