"""Workflow engine - public entry point for running and inspecting executions."""

import asyncio
from typing import Any

from core.application.dtos.travel_dto import UserProfileDTO
from core.application.dtos.workflow_dto import (
    AITravelPlanningRequestDTO,
    TravelPlanningRequestDTO,
)
from core.domain.clock import utc_now
from core.domain.entities.execution import Execution
from core.domain.repositories.execution_store import ExecutionStore
from core.infrastructure.logging import get_logger

from .bus import EventBusProtocol
from .events import WORKFLOW_FINISHED, Event, EventMetadata
from .orchestrator import Orchestrator
from .watcher import ExecutionWatcher
from .workflow import WorkflowDefinition
from .workflows import (
    AI_TRAVEL_PLANNING_WORKFLOW,
    LOCATION_WORKFLOW,
    TRAVEL_PLANNING_WORKFLOW,
    WEATHER_WORKFLOW,
)


class UnknownWorkflowError(KeyError):
    """Raised by start_workflow for a name with no registered definition."""


class WorkflowEngine:
    """Runs named workflows and tracks their executions.

    ``execute_*`` methods never raise: whatever happens, the caller gets a
    terminal execution record back. ``start_workflow`` returns the pending
    record at once and finishes it in a background task.
    """

    def __init__(
        self,
        store: ExecutionStore,
        event_bus: EventBusProtocol,
        orchestrator: Orchestrator,
        definitions: dict[str, WorkflowDefinition],
    ) -> None:
        self._store = store
        self._event_bus = event_bus
        self._orchestrator = orchestrator
        self._definitions = definitions
        self._background: set[asyncio.Task] = set()
        self._logger = get_logger("orchestration.engine")

    @property
    def event_bus(self) -> EventBusProtocol:
        return self._event_bus

    @property
    def workflow_names(self) -> list[str]:
        return sorted(self._definitions)

    # =========================================================================
    # Workflows
    # =========================================================================

    async def execute_location_workflow(self, ip: str) -> Execution:
        """IP -> validation -> location."""
        return await self.execute(LOCATION_WORKFLOW, ip=ip)

    async def execute_weather_workflow(self, ip: str) -> Execution:
        """IP -> location -> current weather."""
        return await self.execute(WEATHER_WORKFLOW, ip=ip)

    async def execute_travel_planning_workflow(
        self, request: TravelPlanningRequestDTO
    ) -> Execution:
        """Location (optional) -> weather -> recommendations -> plan."""
        return await self.execute(TRAVEL_PLANNING_WORKFLOW, **travel_params(request))

    async def execute_ai_travel_planning_workflow(
        self, request: AITravelPlanningRequestDTO
    ) -> Execution:
        """Travel planning enriched with AI recommendations, itinerary and insights."""
        return await self.execute(AI_TRAVEL_PLANNING_WORKFLOW, **travel_params(request))

    async def execute(self, name: str, **params: Any) -> Execution:
        """Run a named workflow to completion."""
        definition = self._definition(name)
        execution = Execution.create(definition.name)
        try:
            await self._store.create(execution)
        except Exception as exc:
            self._logger.error(f"Could not store execution {execution.id}: {exc}", exc_info=True)
            execution.fail(f"Execution store unavailable: {exc}")
            return execution
        return await self._run(definition, execution, params)

    async def start_workflow(self, name: str, **params: Any) -> Execution:
        """Create an execution and finish it in the background.

        Returns:
            The execution as stored when the task was scheduled
        """
        definition = self._definition(name)
        execution = Execution.create(definition.name)
        try:
            await self._store.create(execution)
        except Exception as exc:
            self._logger.error(f"Could not store execution {execution.id}: {exc}", exc_info=True)
            execution.fail(f"Execution store unavailable: {exc}")
            return execution
        snapshot = Execution.from_snapshot_dict(execution.to_snapshot_dict())

        task = asyncio.create_task(self._run(definition, execution, params))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

        self._logger.info(f"Scheduled '{name}' in the background: execution={execution.id}")
        return snapshot

    async def wait_for_background(self) -> None:
        """Wait until every background execution has finished."""
        while self._background:
            await asyncio.gather(*list(self._background))

    async def shutdown(self, grace_seconds: float = 10.0) -> None:
        """Give background executions ``grace_seconds`` to finish, then cancel them.

        Cancelled executions are recorded as failed with "Execution cancelled".
        """
        pending = list(self._background)
        if not pending:
            return

        _, still_running = await asyncio.wait(pending, timeout=grace_seconds)
        if not still_running:
            return

        self._logger.warning(f"Cancelling {len(still_running)} background execution(s) on shutdown")
        for task in still_running:
            task.cancel()
        await asyncio.gather(*still_running, return_exceptions=True)

    # =========================================================================
    # Execution records
    # =========================================================================

    async def get_execution(self, execution_id: str) -> Execution | None:
        """Return the execution record, or None when it is unknown."""
        try:
            return await self._store.get(execution_id)
        except Exception as exc:
            self._logger.error(f"Failed to read execution {execution_id}: {exc}", exc_info=True)
            return None

    async def watch(
        self, execution_id: str, idle_timeout: float | None = None
    ) -> ExecutionWatcher | None:
        """Watch an execution; None when it is unknown.

        The watcher subscribes before the stored record is read, so no
        update can fall between the two.
        """
        watcher = ExecutionWatcher(self._event_bus, execution_id, idle_timeout).start()
        current = await self.get_execution(execution_id)
        if current is None:
            watcher.close()
            return None
        watcher.seed(current.to_snapshot_dict())
        return watcher

    async def list_executions(self) -> list[Execution]:
        return await self._store.list()

    async def purge_terminal_executions(self) -> int:
        """Delete completed and failed executions; running ones are kept."""
        purged = 0
        for execution in await self._store.list():
            if execution.is_terminal and await self._store.delete(execution.id):
                purged += 1
        self._logger.info(f"Purged {purged} terminal execution(s)")
        return purged

    # =========================================================================
    # Internals
    # =========================================================================

    def _definition(self, name: str) -> WorkflowDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownWorkflowError(name) from None

    async def _run(
        self, definition: WorkflowDefinition, execution: Execution, params: dict[str, Any]
    ) -> Execution:
        try:
            return await self._orchestrator.run(definition, execution, params)
        except asyncio.CancelledError:
            self._logger.warning(f"Workflow '{definition.name}' cancelled for {execution.id}")
            await self._record_failure(execution, "Execution cancelled")
            raise
        except Exception as exc:
            self._logger.error(
                f"Workflow '{definition.name}' crashed for {execution.id}: {exc}", exc_info=True
            )
            await self._record_failure(execution, str(exc) or "Unknown error")
            return execution

    async def _record_failure(self, execution: Execution, error: str) -> None:
        """Fail an interrupted execution, store it and announce the end."""
        already_finished = execution.is_terminal
        if not already_finished:
            execution.fail(error)
        try:
            await self._store.update(execution)
        except Exception as store_exc:
            self._logger.error(
                f"Could not record failure of {execution.id}: {store_exc}", exc_info=True
            )
        if already_finished:
            return
        await self._event_bus.publish(
            Event(
                name=WORKFLOW_FINISHED,
                payload={"execution": execution.to_snapshot_dict()},
                metadata=EventMetadata(
                    execution_id=execution.id,
                    workflow=execution.workflow,
                    timestamp=utc_now(),
                ),
            )
        )


def travel_params(request: TravelPlanningRequestDTO) -> dict[str, Any]:
    """Flatten a travel planning request into workflow parameters."""
    params: dict[str, Any] = {
        "ip": request.ip,
        "destination": request.destination,
        "start_date": request.start_date.isoformat(),
        "end_date": request.end_date.isoformat(),
    }
    if isinstance(request, AITravelPlanningRequestDTO):
        params["user_profile"] = request.user_profile or UserProfileDTO()
    return params
