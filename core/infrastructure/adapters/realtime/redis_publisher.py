"""
Redis Pub/Sub Publisher for real-time client events.

Each room (``user_<id>``) is a Redis channel; a socket gateway subscribed
to those channels forwards messages to connected clients.
"""
import json
import logging
from typing import Any, Dict, Optional

import redis.asyncio as aioredis

from core.application.interfaces import IRealtimePublisher


logger = logging.getLogger(__name__)


class RedisRealtimePublisher(IRealtimePublisher):
    """
    Publishes real-time events to Redis channels.

    Message format: {"event": str, "data": {...}}
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0"):
        """
        Initialize Redis publisher.

        Args:
            redis_url: Redis connection URL
        """
        self.redis_url = redis_url
        self.redis_client: Optional[aioredis.Redis] = None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self.redis_client is None:
            self.redis_client = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.redis_client.ping()
            logger.info(f"✅ Connected to Redis: {self.redis_url}")

    async def publish(self, room: str, event: str, data: Dict[str, Any]) -> None:
        await self.connect()
        message = json.dumps({"event": event, "data": data}, default=str)
        receivers = await self.redis_client.publish(room, message)
        logger.info(f"📡 Published {event} to {room} ({receivers} subscribers)")

    async def close(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
            logger.info("✅ Disconnected from Redis")
