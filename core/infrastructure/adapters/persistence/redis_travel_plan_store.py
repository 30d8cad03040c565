"""
Redis Travel Plan Store Implementation.

Plans are stored as JSON under ``<key_prefix>:<plan_id>`` together with
their kind, so AI-enriched plans load back as ``AITravelPlanDTO``.
"""
import json
import logging
from typing import List, Optional

import redis.asyncio as aioredis

from core.application.dtos.travel_dto import AITravelPlanDTO, TravelPlanDTO
from core.application.interfaces import ITravelPlanStore

from .redis_connection import RedisConnection


logger = logging.getLogger(__name__)

PLAN_KINDS = {"plan": TravelPlanDTO, "ai_plan": AITravelPlanDTO}


class RedisTravelPlanStore(RedisConnection, ITravelPlanStore):
    """
    Stores travel plans in Redis.

    Key format: wayfarer:plans:<plan_id>
    Value format: {"kind": "plan" | "ai_plan", "plan": {...}}
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "wayfarer:plans",
        client: Optional[aioredis.Redis] = None,
    ):
        super().__init__(redis_url=redis_url, client=client)
        self.key_prefix = key_prefix

    def _key(self, plan_id: str) -> str:
        return f"{self.key_prefix}:{plan_id}"

    @staticmethod
    def _dumps(plan: TravelPlanDTO) -> str:
        kind = "ai_plan" if isinstance(plan, AITravelPlanDTO) else "plan"
        return json.dumps({"kind": kind, "plan": plan.model_dump(mode="json")})

    @staticmethod
    def _loads(raw: str) -> TravelPlanDTO:
        data = json.loads(raw)
        model = PLAN_KINDS.get(data.get("kind"), TravelPlanDTO)
        return model.model_validate(data["plan"])

    async def save(self, plan: TravelPlanDTO) -> None:
        client = await self._client()
        await client.set(self._key(plan.id), self._dumps(plan))

    async def get(self, plan_id: str) -> Optional[TravelPlanDTO]:
        client = await self._client()
        raw = await client.get(self._key(plan_id))
        if raw is None:
            return None
        return self._loads(raw)

    async def list(self) -> List[TravelPlanDTO]:
        client = await self._client()
        plans: List[TravelPlanDTO] = []
        async for key in client.scan_iter(match=f"{self.key_prefix}:*"):
            raw = await client.get(key)
            if raw is not None:
                plans.append(self._loads(raw))
        plans.sort(key=lambda p: p.created_at)
        return plans

    async def delete(self, plan_id: str) -> bool:
        client = await self._client()
        removed = await client.delete(self._key(plan_id))
        return removed > 0
