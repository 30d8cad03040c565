"""Step executor - runs one unit of work and records its outcome."""

import asyncio
import json
import time
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel

from core.domain.entities.execution import StepRecord
from core.domain.enums.execution_status import ExecutionStatus
from core.domain.exceptions import InvalidInputError, MissingCredentialError
from core.infrastructure.logging import get_logger

from .workflow import RetryPolicy

logger = get_logger("orchestration.step_executor")

# Retrying cannot change the outcome of these
NON_RETRYABLE_ERRORS = (InvalidInputError, MissingCredentialError)


def to_jsonable(value: Any) -> Any:
    """Convert pydantic models (also nested in lists and dicts) to plain JSON data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def serialize_output(value: Any) -> str:
    """Serialize a step output. Strings are kept verbatim."""
    if isinstance(value, str):
        return value
    return json.dumps(to_jsonable(value), default=str)


async def run_step(
    name: str,
    operation: Callable[[], Awaitable[Any]],
    input_: str | None = None,
    retry_policy: RetryPolicy | None = None,
) -> StepRecord:
    """Run ``operation`` and return a finished StepRecord.

    Never raises for ordinary exceptions: a failure becomes a ``failed``
    record carrying the exception message. ``duration_ms`` covers every
    attempt, including backoff.

    Args:
        name: Step name
        operation: Zero-argument coroutine factory
        input_: Serialized input descriptor
        retry_policy: Optional retry policy (single attempt by default)

    Returns:
        StepRecord with status ``completed`` or ``failed``
    """
    policy = retry_policy or RetryPolicy()
    record = StepRecord(name=name, status=ExecutionStatus.RUNNING, input=input_)
    started = time.monotonic()

    try:
        for attempt in range(1, policy.max_attempts + 1):
            record.attempts = attempt
            try:
                value = await operation()
                output = serialize_output(value)
            except NON_RETRYABLE_ERRORS as exc:
                _mark_failed(record, exc)
                break
            except Exception as exc:
                logger.warning(
                    f"Step '{name}' attempt {attempt}/{policy.max_attempts} failed: {exc}"
                )
                if attempt < policy.max_attempts:
                    if policy.backoff_seconds > 0:
                        await asyncio.sleep(policy.backoff_seconds)
                    continue
                _mark_failed(record, exc)
            else:
                record.status = ExecutionStatus.COMPLETED
                record.output = output
                record.value = value
                break
    finally:
        record.duration_ms = max(0, int((time.monotonic() - started) * 1000))

    return record


def _mark_failed(record: StepRecord, exc: Exception) -> None:
    record.status = ExecutionStatus.FAILED
    record.error = str(exc) or "Unknown error"
    record.output = None
