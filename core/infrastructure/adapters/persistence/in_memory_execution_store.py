"""
In-Memory Execution Store Implementation.

Default backend: executions live in a dict owned by the event loop.
"""
import copy
import logging
from typing import Dict, List, Optional

from core.domain.entities.execution import Execution
from core.domain.repositories.execution_store import ExecutionStore


logger = logging.getLogger(__name__)


class InMemoryExecutionStore(ExecutionStore):
    """
    In-memory implementation of ExecutionStore.

    Only touched from the asyncio loop, so no locking is needed; every
    method body runs without an await point.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._storage: Dict[str, Execution] = {}
        logger.info("InMemoryExecutionStore initialized")

    async def create(self, execution: Execution) -> None:
        if execution.id in self._storage:
            raise ValueError(f"Execution {execution.id} already exists")
        self._storage[execution.id] = copy.deepcopy(execution)
        logger.debug(f"Execution stored: {execution.id}")

    async def update(self, execution: Execution) -> None:
        if execution.id not in self._storage:
            logger.warning(f"Update for unknown execution {execution.id}, inserting it")
        self._storage[execution.id] = copy.deepcopy(execution)

    async def get(self, execution_id: str) -> Optional[Execution]:
        execution = self._storage.get(execution_id)
        return copy.deepcopy(execution) if execution else None

    async def delete(self, execution_id: str) -> bool:
        return self._storage.pop(execution_id, None) is not None

    async def list(self) -> List[Execution]:
        return [copy.deepcopy(e) for e in self._storage.values()]

    def __len__(self) -> int:
        return len(self._storage)
