"""Orchestration events - Event, EventMetadata and event names."""

from dataclasses import dataclass
from datetime import datetime

WORKFLOW_STARTED = "workflow.started"
STEP_COMPLETED = "workflow.step.completed"
STEP_FAILED = "workflow.step.failed"
WORKFLOW_FINISHED = "workflow.finished"

ALL_EVENTS = "*"


@dataclass
class EventMetadata:
    """Metadata for an event."""

    execution_id: str
    workflow: str
    timestamp: datetime


@dataclass
class Event:
    """Execution lifecycle event.

    ``payload["execution"]`` always carries the execution snapshot taken
    when the event was published; step events add ``payload["step"]``.
    """

    name: str
    payload: dict[str, object]
    metadata: EventMetadata
