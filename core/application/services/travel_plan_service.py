"""Application service for travel plan operations."""

import logging
from typing import List, Optional

from core.application.dtos.travel_dto import TravelPlanDTO, TravelPlanInputDTO
from core.application.interfaces import ITravelPlanner, ITravelPlanStore


logger = logging.getLogger(__name__)


class TravelPlanService:
    """
    Application service for stored travel plans.

    Responsibilities:
    - Build plans through the travel planner
    - Keep them in the plan store
    - Rebuild a plan in place on update, keeping its id and creation time
    """

    def __init__(self, planner: ITravelPlanner, store: ITravelPlanStore) -> None:
        """Initialize travel plan service.

        Args:
            planner: Local plan synthesis
            store: Plan store
        """
        self._planner = planner
        self._store = store

    async def create_plan(self, plan_input: TravelPlanInputDTO) -> TravelPlanDTO:
        """Build and store a new plan.

        Raises:
            InvalidInputError: If the trip dates are malformed or reversed
        """
        plan = await self._planner.create_plan(plan_input)
        await self._store.save(plan)
        logger.info(f"Stored travel plan {plan.id} for {plan.destination}")
        return plan

    async def get_plan(self, plan_id: str) -> Optional[TravelPlanDTO]:
        return await self._store.get(plan_id)

    async def list_plans(self) -> List[TravelPlanDTO]:
        return await self._store.list()

    async def update_plan(
        self, plan_id: str, plan_input: TravelPlanInputDTO
    ) -> Optional[TravelPlanDTO]:
        """Rebuild a stored plan from new input.

        Returns:
            The updated plan, or None when no plan has this id
        """
        existing = await self._store.get(plan_id)
        if existing is None:
            return None

        rebuilt = await self._planner.create_plan(plan_input)
        updated = rebuilt.model_copy(update={"id": existing.id, "created_at": existing.created_at})
        await self._store.save(updated)
        logger.info(f"Updated travel plan {plan_id}")
        return updated

    async def delete_plan(self, plan_id: str) -> bool:
        deleted = await self._store.delete(plan_id)
        if deleted:
            logger.info(f"Deleted travel plan {plan_id}")
        return deleted
