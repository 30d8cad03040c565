"""Store interface for Execution aggregates."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.execution import Execution


class ExecutionStore(ABC):
    """Abstract keyed storage for executions.

    Implementations hand out copies: mutating a returned Execution never
    changes the stored record until ``update`` is called with it.
    """

    @abstractmethod
    async def create(self, execution: Execution) -> None:
        """Insert a new execution.

        Args:
            execution: Execution to insert

        Raises:
            ValueError: If an execution with the same id already exists
        """
        pass

    @abstractmethod
    async def update(self, execution: Execution) -> None:
        """Replace the stored copy of an existing execution.

        Args:
            execution: Execution with its latest state
        """
        pass

    @abstractmethod
    async def get(self, execution_id: str) -> Optional[Execution]:
        """Retrieve an execution by id.

        Args:
            execution_id: Execution identifier

        Returns:
            Execution if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, execution_id: str) -> bool:
        """Remove an execution.

        Args:
            execution_id: Execution identifier

        Returns:
            True if something was removed, False otherwise
        """
        pass

    @abstractmethod
    async def list(self) -> List[Execution]:
        """Return every stored execution, oldest first."""
        pass
