"""
Redis Execution Store Implementation.

Durable key-value backend for executions. Each execution is stored as a JSON
snapshot under ``<key_prefix>:<execution_id>`` so history survives restarts.
"""
import json
import logging
from typing import List, Optional

import redis.asyncio as aioredis

from core.domain.entities.execution import Execution
from core.domain.repositories.execution_store import ExecutionStore

from .redis_connection import RedisConnection


logger = logging.getLogger(__name__)


class RedisExecutionStore(RedisConnection, ExecutionStore):
    """
    Stores executions in Redis.

    Key format: wayfarer:executions:<execution_id>
    Value format: Execution.to_snapshot_dict() as JSON
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "wayfarer:executions",
        client: Optional[aioredis.Redis] = None,
    ):
        """
        Initialize Redis execution store.

        Args:
            redis_url: Redis connection URL
            key_prefix: Prefix for execution keys
            client: Optional pre-built client (tests, shared pools)
        """
        super().__init__(redis_url=redis_url, client=client)
        self.key_prefix = key_prefix

    def _key(self, execution_id: str) -> str:
        return f"{self.key_prefix}:{execution_id}"

    @staticmethod
    def _dumps(execution: Execution) -> str:
        return json.dumps(execution.to_snapshot_dict())

    @staticmethod
    def _loads(raw: str) -> Execution:
        return Execution.from_snapshot_dict(json.loads(raw))

    async def create(self, execution: Execution) -> None:
        client = await self._client()
        created = await client.set(self._key(execution.id), self._dumps(execution), nx=True)
        if not created:
            raise ValueError(f"Execution {execution.id} already exists")

    async def update(self, execution: Execution) -> None:
        client = await self._client()
        await client.set(self._key(execution.id), self._dumps(execution))

    async def get(self, execution_id: str) -> Optional[Execution]:
        client = await self._client()
        raw = await client.get(self._key(execution_id))
        if raw is None:
            return None
        return self._loads(raw)

    async def delete(self, execution_id: str) -> bool:
        client = await self._client()
        removed = await client.delete(self._key(execution_id))
        return removed > 0

    async def list(self) -> List[Execution]:
        client = await self._client()
        executions: List[Execution] = []
        async for key in client.scan_iter(match=f"{self.key_prefix}:*"):
            raw = await client.get(key)
            if raw is not None:
                executions.append(self._loads(raw))
        executions.sort(key=lambda e: e.started_at)
        return executions
