"""Domain repository interfaces."""

from .execution_store import ExecutionStore

__all__ = ["ExecutionStore"]
