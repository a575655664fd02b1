"""Orchestration layer - in-process eventing for side effects."""

from .bus import EventBusProtocol, EventHandler, InMemoryEventBus
from .events import Event, EventMetadata

__all__ = [
    "Event",
    "EventBusProtocol",
    "EventHandler",
    "EventMetadata",
    "InMemoryEventBus",
]
