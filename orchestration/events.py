"""Orchestration events - Event, EventMetadata."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class EventMetadata:
    """Metadata for an event."""

    execution_id: str
    service: str
    operation: str | None
    timestamp: datetime


@dataclass
class Event:
    """Domain event in the orchestration system."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata

    @classmethod
    def create(
        cls,
        name: str,
        payload: dict[str, object],
        execution_id: str,
        service: str,
        operation: str | None = None,
    ) -> "Event":
        """Build an event stamped with the current UTC time."""
        return cls(
            name=name,
            payload=payload,
            metadata=EventMetadata(
                execution_id=execution_id,
                service=service,
                operation=operation,
                timestamp=datetime.now(timezone.utc),
            ),
        )
