"""In-process real-time publisher for development and tests."""
import logging
from typing import Any, Dict, List, Tuple

from core.application.interfaces import IRealtimePublisher


logger = logging.getLogger(__name__)


class InMemoryRealtimePublisher(IRealtimePublisher):
    """Records published events instead of sending them anywhere."""

    def __init__(self) -> None:
        self.published: List[Tuple[str, str, Dict[str, Any]]] = []

    async def publish(self, room: str, event: str, data: Dict[str, Any]) -> None:
        self.published.append((room, event, data))
        logger.info(f"📡 {event} → {room}")

    def events_for(self, room: str) -> List[Tuple[str, Dict[str, Any]]]:
        return [(event, data) for r, event, data in self.published if r == room]
