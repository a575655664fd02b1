"""Event bus - EventBusProtocol and InMemoryEventBus."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Protocol

from fosten_sdk.logging import get_logger

from .events import Event

EventHandler = Callable[[Event], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations."""

    async def publish(self, event: Event) -> None:
        """Publish an event and wait for every handler.

        Args:
            event: Event to publish
        """
        ...

    def emit(self, event: Event) -> None:
        """Publish an event in the background without waiting.

        Args:
            event: Event to publish
        """
        ...

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event name.

        Args:
            event_name: Event name to subscribe to
            handler: Async handler function
        """
        ...


class InMemoryEventBus(EventBusProtocol):
    """In-memory event bus implementation.

    Handler failures are logged and never reach the publisher. Background
    publications started with ``emit`` are tracked so ``drain`` can wait
    for them on shutdown.
    """

    def __init__(self) -> None:
        """Initialize in-memory event bus."""
        self._handlers: dict[str, list[EventHandler]] = {}
        self._pending: set[asyncio.Task] = set()
        self._logger = get_logger("orchestration.event_bus")

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event name.

        Args:
            event_name: Event name to subscribe to
            handler: Async handler function
        """
        if event_name not in self._handlers:
            self._handlers[event_name] = []
        self._handlers[event_name].append(handler)

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribed handlers concurrently.

        Args:
            event: Event to publish
        """
        handlers = self._handlers.get(event.name, [])
        if not handlers:
            return

        self._logger.info(
            f"📣 Publishing {event.name} "
            f"(execution={event.metadata.execution_id}, handlers={len(handlers)})"
        )

        await asyncio.gather(*(self._run(handler, event) for handler in handlers))

    async def _run(self, handler: EventHandler, event: Event) -> None:
        try:
            await handler(event)
        except Exception as exc:
            self._logger.error(
                f"Handler {getattr(handler, '__qualname__', handler)} "
                f"failed for {event.name}: {exc}",
                exc_info=True,
            )

    def emit(self, event: Event) -> None:
        """Schedule ``publish`` on the running loop and return immediately.

        Args:
            event: Event to publish
        """
        if not self._handlers.get(event.name):
            return
        task = asyncio.get_running_loop().create_task(self.publish(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every emitted event has been handled."""
        while True:
            running = [task for task in self._pending if not task.done()]
            if not running:
                return
            await asyncio.gather(*running, return_exceptions=True)
