"""
Execution DTO.

Data transfer objects for workflow execution records.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.domain.entities.execution import Execution, StepRecord
from core.domain.enums.execution_status import ExecutionStatus


class StepDTO(BaseModel):
    """DTO for one recorded step."""

    name: str
    status: ExecutionStatus
    input: Optional[str] = None
    output: Optional[str] = None
    error: Optional[str] = None
    duration_ms: Optional[int] = Field(default=None, description="Wall-clock duration in milliseconds")
    attempts: int = 0

    @classmethod
    def from_entity(cls, step: StepRecord) -> "StepDTO":
        return cls(
            name=step.name,
            status=step.status,
            input=step.input,
            output=step.output,
            error=step.error,
            duration_ms=step.duration_ms,
            attempts=step.attempts,
        )


class ExecutionDTO(BaseModel):
    """DTO for execution tracking."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "exec_1717243200000_3f9a0c1b2d4e",
                "workflow": "location",
                "status": "completed",
                "steps": [
                    {
                        "name": "Validate IP Address",
                        "status": "completed",
                        "input": "8.8.8.8",
                        "output": "IP 8.8.8.8 is valid",
                        "error": None,
                        "duration_ms": 0,
                        "attempts": 1,
                    }
                ],
                "result": "{\"ip\": \"8.8.8.8\", \"city\": \"Mountain View\"}",
                "error": None,
                "started_at": "2024-06-01T12:00:00+00:00",
                "completed_at": "2024-06-01T12:00:01+00:00",
            }
        }
    )

    id: str
    workflow: str
    status: ExecutionStatus
    steps: List[StepDTO] = Field(default_factory=list)
    result: Optional[str] = None
    error: Optional[str] = None
    started_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, execution: Execution) -> "ExecutionDTO":
        """Create ExecutionDTO from the domain record."""
        return cls(
            id=execution.id,
            workflow=execution.workflow,
            status=execution.status,
            steps=[StepDTO.from_entity(s) for s in execution.steps],
            result=execution.result,
            error=execution.error,
            started_at=execution.started_at,
            completed_at=execution.completed_at,
        )


class PurgeResultDTO(BaseModel):
    """Outcome of purging terminal executions."""

    purged: int
