"""Domain value objects - pure Python immutable types."""

import time
from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for workflow execution tracing.

    Format: ``exec_<epoch milliseconds>_<12 random hex chars>``.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError(f"ExecutionID must be a non-empty string, got: {self.value!r}")

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=f"exec_{int(time.time() * 1000)}_{uuid4().hex[:12]}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value
