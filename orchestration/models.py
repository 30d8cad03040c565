"""Orchestration models - ExecutionContext."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ExecutionContext:
    """State shared by the steps of one execution.

    ``params`` holds the caller's arguments. ``outputs`` maps step names to
    the typed values returned by steps that completed; steps that failed or
    were skipped have no entry.
    """

    execution_id: str
    workflow: str
    params: dict[str, Any] = field(default_factory=dict)
    outputs: dict[str, Any] = field(default_factory=dict)

    def param(self, name: str, default: Any = None) -> Any:
        value = self.params.get(name)
        return default if value is None else value

    def output(self, step_name: str, default: Any = None) -> Any:
        return self.outputs.get(step_name, default)
