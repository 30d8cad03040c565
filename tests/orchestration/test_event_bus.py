"""Tests for EventBus."""

from datetime import datetime, timezone

import pytest

from orchestration.bus import InMemoryEventBus
from orchestration.events import Event, EventMetadata


def _event(name: str = "workflow.started", execution_id: str = "exec-test-123") -> Event:
    metadata = EventMetadata(
        execution_id=execution_id,
        workflow="location",
        timestamp=datetime.now(timezone.utc),
    )
    return Event(name=name, payload={"execution": {"id": execution_id}}, metadata=metadata)


@pytest.mark.asyncio
async def test_event_bus_subscribe_and_publish():
    """Test subscribing and publishing events."""
    bus = InMemoryEventBus()

    events_received: list[Event] = []

    async def handler(event: Event) -> None:
        events_received.append(event)

    bus.subscribe("workflow.started", handler)
    await bus.publish(_event())

    assert len(events_received) == 1
    assert events_received[0].name == "workflow.started"
    assert events_received[0].payload == {"execution": {"id": "exec-test-123"}}
    assert events_received[0].metadata.execution_id == "exec-test-123"
    assert events_received[0].metadata.workflow == "location"


@pytest.mark.asyncio
async def test_event_bus_multiple_handlers():
    """Test multiple handlers for the same event."""
    bus = InMemoryEventBus()

    events_1: list[Event] = []
    events_2: list[Event] = []

    async def handler1(event: Event) -> None:
        events_1.append(event)

    async def handler2(event: Event) -> None:
        events_2.append(event)

    bus.subscribe("workflow.started", handler1)
    bus.subscribe("workflow.started", handler2)
    await bus.publish(_event())

    assert len(events_1) == 1
    assert len(events_2) == 1


@pytest.mark.asyncio
async def test_event_bus_no_handlers():
    """Test publishing event with no handlers."""
    bus = InMemoryEventBus()

    # Should not raise an error
    await bus.publish(_event())


@pytest.mark.asyncio
async def test_event_bus_wildcard_receives_every_event():
    """A "*" subscriber sees events of every name."""
    bus = InMemoryEventBus()
    names: list[str] = []

    async def handler(event: Event) -> None:
        names.append(event.name)

    bus.subscribe("*", handler)
    await bus.publish(_event("workflow.started"))
    await bus.publish(_event("workflow.step.completed"))
    await bus.publish(_event("workflow.finished"))

    assert names == ["workflow.started", "workflow.step.completed", "workflow.finished"]


@pytest.mark.asyncio
async def test_event_bus_unsubscribe():
    """Unsubscribed handlers are no longer called."""
    bus = InMemoryEventBus()
    calls: list[str] = []

    async def handler(event: Event) -> None:
        calls.append(event.name)

    bus.subscribe("workflow.finished", handler)
    await bus.publish(_event("workflow.finished"))
    bus.unsubscribe("workflow.finished", handler)
    await bus.publish(_event("workflow.finished"))

    assert calls == ["workflow.finished"]
    assert bus.handler_count("workflow.finished") == 0

    # Unsubscribing twice is harmless
    bus.unsubscribe("workflow.finished", handler)


@pytest.mark.asyncio
async def test_event_bus_handler_error_does_not_stop_delivery():
    """A failing handler is logged and the next handler still runs."""
    bus = InMemoryEventBus()
    delivered: list[Event] = []

    async def broken(event: Event) -> None:
        raise RuntimeError("handler exploded")

    async def healthy(event: Event) -> None:
        delivered.append(event)

    bus.subscribe("workflow.started", broken)
    bus.subscribe("workflow.started", healthy)

    await bus.publish(_event())

    assert len(delivered) == 1
