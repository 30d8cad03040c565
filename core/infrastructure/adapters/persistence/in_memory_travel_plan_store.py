"""
In-Memory Travel Plan Store Implementation.
"""
import logging
from typing import Dict, List, Optional

from core.application.dtos.travel_dto import TravelPlanDTO
from core.application.interfaces import ITravelPlanStore


logger = logging.getLogger(__name__)


class InMemoryTravelPlanStore(ITravelPlanStore):
    """Dict-backed plan store; hands out deep copies."""

    def __init__(self):
        self._plans: Dict[str, TravelPlanDTO] = {}

    async def save(self, plan: TravelPlanDTO) -> None:
        self._plans[plan.id] = plan.model_copy(deep=True)
        logger.debug(f"Travel plan stored: {plan.id}")

    async def get(self, plan_id: str) -> Optional[TravelPlanDTO]:
        plan = self._plans.get(plan_id)
        return plan.model_copy(deep=True) if plan is not None else None

    async def list(self) -> List[TravelPlanDTO]:
        plans = sorted(self._plans.values(), key=lambda p: p.created_at)
        return [p.model_copy(deep=True) for p in plans]

    async def delete(self, plan_id: str) -> bool:
        return self._plans.pop(plan_id, None) is not None

    def __len__(self) -> int:
        return len(self._plans)
