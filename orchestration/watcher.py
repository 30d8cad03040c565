"""Execution watcher - push-based snapshots of one execution."""

import asyncio
from typing import Any

from core.domain.enums.execution_status import ExecutionStatus

from .bus import EventBusProtocol
from .events import ALL_EVENTS, Event

Snapshot = dict[str, Any]


def _progress(snapshot: Snapshot) -> tuple[int, int]:
    status = ExecutionStatus(snapshot["status"])
    rank = 2 if status.is_terminal else 1 if status == ExecutionStatus.RUNNING else 0
    return len(snapshot.get("steps") or []), rank


class ExecutionWatcher:
    """Async iterator over snapshots of a single execution.

    Subscribes to the event bus on ``start()`` (or ``async with``) and
    yields every snapshot published for the execution, in order, ending
    after the first terminal one. Snapshots that are not newer than the
    last one yielded are dropped.

    Example:
        async with ExecutionWatcher(bus, execution_id) as watcher:
            watcher.seed(current.to_snapshot_dict())
            async for snapshot in watcher:
                ...
    """

    def __init__(
        self,
        event_bus: EventBusProtocol,
        execution_id: str,
        idle_timeout: float | None = None,
    ) -> None:
        self._event_bus = event_bus
        self.execution_id = execution_id
        self._idle_timeout = idle_timeout
        self._queue: asyncio.Queue[Snapshot] = asyncio.Queue()
        self._seeded: Snapshot | None = None
        self._last: tuple[int, int] | None = None
        self._subscribed = False
        self._done = False

    def start(self) -> "ExecutionWatcher":
        if not self._subscribed:
            self._event_bus.subscribe(ALL_EVENTS, self._on_event)
            self._subscribed = True
        return self

    def close(self) -> None:
        if self._subscribed:
            self._event_bus.unsubscribe(ALL_EVENTS, self._on_event)
            self._subscribed = False
        self._done = True

    def seed(self, snapshot: Snapshot) -> None:
        """Set the snapshot yielded first, usually the currently stored record."""
        self._seeded = snapshot

    async def _on_event(self, event: Event) -> None:
        if event.metadata.execution_id != self.execution_id:
            return
        snapshot = event.payload.get("execution")
        if isinstance(snapshot, dict):
            self._queue.put_nowait(snapshot)

    async def __aenter__(self) -> "ExecutionWatcher":
        return self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __aiter__(self) -> "ExecutionWatcher":
        return self

    async def __anext__(self) -> Snapshot:
        while not self._done:
            if self._seeded is not None:
                snapshot, self._seeded = self._seeded, None
            else:
                try:
                    snapshot = await asyncio.wait_for(self._queue.get(), self._idle_timeout)
                except asyncio.TimeoutError:
                    self.close()
                    break

            progress = _progress(snapshot)
            if self._last is not None and progress <= self._last:
                continue
            self._last = progress

            if ExecutionStatus(snapshot["status"]).is_terminal:
                self.close()
            return snapshot

        raise StopAsyncIteration
