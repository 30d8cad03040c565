"""Orchestrator - runs workflows with eventing and execution tracking."""

from functools import partial
from typing import Any

from core.domain.clock import utc_now
from core.domain.entities.execution import Execution, StepRecord
from core.domain.repositories.execution_store import ExecutionStore
from core.infrastructure.logging import get_logger

from .bus import EventBusProtocol
from .events import (
    STEP_COMPLETED,
    STEP_FAILED,
    WORKFLOW_FINISHED,
    WORKFLOW_STARTED,
    Event,
    EventMetadata,
)
from .models import ExecutionContext
from .step_executor import run_step
from .workflow import RetryPolicy, WorkflowDefinition, WorkflowStep


class Orchestrator:
    """Orchestrator for running workflows with eventing and execution tracking.

    The execution record is written to the store after every state change,
    so readers always see the steps finished so far.
    """

    def __init__(
        self,
        store: ExecutionStore,
        event_bus: EventBusProtocol,
        default_retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            store: ExecutionStore holding execution records
            event_bus: EventBusProtocol for publishing events
            default_retry_policy: Policy for steps that do not set their own
        """
        self._store = store
        self._event_bus = event_bus
        self._default_retry_policy = default_retry_policy or RetryPolicy()
        self._logger = get_logger("orchestration.orchestrator")

    async def run(
        self,
        workflow: WorkflowDefinition,
        execution: Execution,
        params: dict[str, Any] | None = None,
    ) -> Execution:
        """Run a workflow over an already stored execution record.

        Args:
            workflow: WorkflowDefinition to run
            execution: Pending execution created for this invocation
            params: Caller arguments exposed to activities

        Returns:
            The execution in its terminal state
        """
        ctx = ExecutionContext(
            execution_id=execution.id,
            workflow=workflow.name,
            params=dict(params or {}),
        )

        self._logger.info(
            f"Workflow '{workflow.name}' starting: execution={execution.id} "
            f"steps={len(workflow.steps)}"
        )

        execution.mark_running()
        await self._store.update(execution)
        await self._publish(WORKFLOW_STARTED, execution)

        last_output: str | None = None

        for step in workflow.steps:
            if step.condition is not None and not step.condition(ctx):
                self._logger.debug(f"Skipping step '{step.name}' for {execution.id}")
                continue

            record = await self._execute_step(ctx, step)
            execution.append_step(record)
            await self._store.update(execution)

            if record.succeeded:
                last_output = record.output
                await self._publish(STEP_COMPLETED, execution, record)
                continue

            await self._publish(STEP_FAILED, execution, record)
            if step.required:
                self._logger.warning(
                    f"Required step '{step.name}' failed, stopping {execution.id}: {record.error}"
                )
                execution.fail(record.error or "Unknown error")
                break

            self._logger.info(
                f"Optional step '{step.name}' failed for {execution.id}, continuing: {record.error}"
            )

        if not execution.is_terminal:
            execution.complete(last_output if last_output is not None else "null")

        await self._store.update(execution)
        await self._publish(WORKFLOW_FINISHED, execution)

        duration_ms = int((execution.completed_at - execution.started_at).total_seconds() * 1000)
        self._logger.info(
            f"Workflow '{workflow.name}' finished: execution={execution.id} "
            f"status={execution.status.value} duration_ms={duration_ms}"
        )
        return execution

    async def _execute_step(self, ctx: ExecutionContext, step: WorkflowStep) -> StepRecord:
        """Execute a single workflow step and move its typed output into the context."""
        input_ = step.describe_input(ctx) if step.describe_input else None

        record = await run_step(
            step.name,
            partial(step.activity, ctx),
            input_=input_,
            retry_policy=step.retry_policy or self._default_retry_policy,
        )

        if record.succeeded:
            ctx.outputs[step.name] = record.value
        record.value = None
        return record

    async def _publish(
        self, name: str, execution: Execution, step: StepRecord | None = None
    ) -> None:
        payload: dict[str, object] = {"execution": execution.to_snapshot_dict()}
        if step is not None:
            payload["step"] = step.to_snapshot_dict()

        metadata = EventMetadata(
            execution_id=execution.id,
            workflow=execution.workflow,
            timestamp=utc_now(),
        )
        await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
