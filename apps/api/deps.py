"""FastAPI dependencies for dependency injection."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from core.application.handlers import register_handlers
from core.application.interfaces import (
    INotificationChannel,
    IPaymentGateway,
    IRealtimePublisher,
)
from core.application.services import (
    DeliveryService,
    NotificationDispatcher,
    OrderLocks,
    OrderWorkflowService,
)
from core.domain.enums import NotificationType
from core.infrastructure.adapters.notifications.email_channel import EmailChannel
from core.infrastructure.adapters.notifications.push_channel import PushChannel
from core.infrastructure.adapters.notifications.sendpulse_client import SendPulseClient
from core.infrastructure.adapters.notifications.sms_channel import SmsChannel
from core.infrastructure.adapters.payments.factory import build_payment_gateway
from core.infrastructure.adapters.realtime.redis_publisher import RedisRealtimePublisher
from core.infrastructure.cache import TTLCache
from core.infrastructure.database.config import create_engine, create_session_factory
from core.settings import AppSettings
from orchestration.bus import InMemoryEventBus

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything built once per process and shared by request handlers."""

    settings: AppSettings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    event_bus: InMemoryEventBus
    gateway: IPaymentGateway
    realtime: Optional[IRealtimePublisher]
    notifications: NotificationDispatcher
    deliveries: DeliveryService
    orders: OrderWorkflowService

    async def shutdown(self) -> None:
        await self.event_bus.drain()
        if self.realtime is not None:
            await self.realtime.close()


def build_channels(settings: AppSettings) -> Dict[NotificationType, INotificationChannel]:
    """Build the relay channel per notification type from configuration."""
    email_settings = settings.notifications.email
    sendpulse = (
        SendPulseClient(email_settings, cache=TTLCache())
        if email_settings.sendpulse_configured
        else None
    )
    email = EmailChannel(email_settings, sendpulse=sendpulse)
    return {
        NotificationType.EMAIL: email,
        NotificationType.SMS: SmsChannel(settings.notifications.sms, fallback=email),
        NotificationType.PUSH: PushChannel(settings.notifications.push),
    }


def build_container(
    settings: AppSettings,
    engine: Optional[AsyncEngine] = None,
    gateway: Optional[IPaymentGateway] = None,
    realtime: Optional[IRealtimePublisher] = None,
    channels: Optional[Dict[NotificationType, INotificationChannel]] = None,
) -> ServiceContainer:
    """Wire services for one process.

    Args:
        settings: Application settings
        engine: Database engine (created from settings when omitted)
        gateway: Payment gateway (selected from PAYMENT_PROVIDER when omitted)
        realtime: Realtime publisher (Redis when REALTIME_ENABLED, else none)
        channels: Notification relays (built from settings when omitted)

    Returns:
        ServiceContainer instance
    """
    engine = engine or create_engine(settings.database)
    session_factory = create_session_factory(engine)
    event_bus = InMemoryEventBus()

    if gateway is None:
        gateway = build_payment_gateway(settings.paystack)
    if realtime is None and settings.realtime.enabled:
        realtime = RedisRealtimePublisher(settings.realtime.redis_url)
    if channels is None:
        channels = build_channels(settings)

    notifications = NotificationDispatcher(session_factory, channels)
    deliveries = DeliveryService(session_factory, event_bus, locks=OrderLocks())
    orders = OrderWorkflowService(
        session_factory,
        gateway=gateway,
        deliveries=deliveries,
        event_bus=event_bus,
        settings=settings.application,
    )
    register_handlers(
        event_bus, notifications, realtime, room_prefix=settings.realtime.channel_prefix
    )

    logger.info(
        f"🔧 Services wired (gateway={type(gateway).__name__}, "
        f"realtime={type(realtime).__name__ if realtime else 'off'})"
    )
    return ServiceContainer(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        event_bus=event_bus,
        gateway=gateway,
        realtime=realtime,
        notifications=notifications,
        deliveries=deliveries,
        orders=orders,
    )


def get_container(request: Request) -> ServiceContainer:
    """Get the process-wide ServiceContainer.

    Returns:
        ServiceContainer stored on ``app.state`` at startup
    """
    return request.app.state.container


def get_order_service(request: Request) -> OrderWorkflowService:
    """Get OrderWorkflowService instance.

    Returns:
        OrderWorkflowService instance
    """
    return get_container(request).orders


def get_delivery_service(request: Request) -> DeliveryService:
    return get_container(request).deliveries


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    return get_container(request).notifications
