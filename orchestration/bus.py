"""Event bus - EventBusProtocol and InMemoryEventBus."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from core.infrastructure.logging import get_logger

from .events import ALL_EVENTS, Event

EventHandler = Callable[[Event], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations."""

    async def publish(self, event: Event) -> None:
        """Publish an event.

        Args:
            event: Event to publish
        """
        ...

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event name (``"*"`` for every event).

        Args:
            event_name: Event name to subscribe to
            handler: Async handler function
        """
        ...

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        """Remove a previously subscribed handler."""
        ...


class InMemoryEventBus(EventBusProtocol):
    """In-memory event bus implementation.

    Handlers run sequentially in subscription order. A failing handler is
    logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._logger = get_logger("orchestration.event_bus")

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            self._handlers.pop(event_name, None)

    def handler_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, []))

    async def publish(self, event: Event) -> None:
        """Publish an event to its subscribers and to wildcard subscribers.

        Args:
            event: Event to publish
        """
        # Copy so handlers may unsubscribe while being notified
        handlers = list(self._handlers.get(event.name, [])) + list(
            self._handlers.get(ALL_EVENTS, [])
        )
        if not handlers:
            return

        self._logger.debug(
            f"Publishing {event.name} for {event.metadata.execution_id} "
            f"to {len(handlers)} handler(s)"
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as exc:
                self._logger.error(
                    f"Event handler {handler!r} failed for {event.name}: {exc}",
                    exc_info=True,
                )
