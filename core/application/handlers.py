"""Subscribers that turn workflow events into notifications and realtime pushes."""

import logging
from typing import Optional

from core.application import events
from core.application.interfaces import IRealtimePublisher
from core.application.services.notification_service import NotificationDispatcher
from core.domain.enums import NotificationType, PaymentMethod
from orchestration.bus import EventBusProtocol
from orchestration.events import Event


logger = logging.getLogger(__name__)

DELIVERY_STATUS_UPDATE = "delivery_status_update"
COURIER_ASSIGNED = "courier_assigned"


def user_room(user_id: str, prefix: str = "user_") -> str:
    return f"{prefix}{user_id}"


def register_handlers(
    bus: EventBusProtocol,
    dispatcher: NotificationDispatcher,
    realtime: Optional[IRealtimePublisher] = None,
    room_prefix: str = "user_",
) -> None:
    """Wire the side effects of order and delivery events onto the bus.

    Args:
        bus: Event bus the services emit on
        dispatcher: Notification dispatcher for stored + relayed messages
        realtime: Realtime publisher; realtime pushes are skipped when None
        room_prefix: Prefix of the per-user realtime room
    """

    async def notify_order_placed(event: Event) -> None:
        payload = event.payload
        order_id = payload["orderId"]
        if payload.get("paymentMethod") == PaymentMethod.COD.value:
            title = "Order Placed (Cash on Delivery)"
            message = (
                f"Your order #{order_id} has been placed successfully "
                f"and is awaiting processing."
            )
        else:
            title = "Order Placed - Pending Payment"
            message = (
                f"Your order #{order_id} has been placed successfully "
                f"and is pending payment verification."
            )
        await dispatcher.send(payload.get("userId"), title, message, NotificationType.EMAIL)

    async def push_delivery_status(event: Event) -> None:
        payload = event.payload
        await realtime.publish(
            user_room(payload["userId"], room_prefix),
            DELIVERY_STATUS_UPDATE,
            {
                "orderId": payload["orderId"],
                "status": payload["status"],
                "message": (
                    f"Your delivery for order #{payload['orderId']} "
                    f"is now {payload['status']}."
                ),
            },
        )

    async def notify_delivery_status(event: Event) -> None:
        payload = event.payload
        await dispatcher.send(
            payload.get("userId"),
            "Delivery Status Updated",
            f"Your delivery for order #{payload['orderId']} is now {payload['status']}.",
            NotificationType.EMAIL,
        )

    async def push_courier_assigned(event: Event) -> None:
        payload = event.payload
        await realtime.publish(
            user_room(payload["userId"], room_prefix),
            COURIER_ASSIGNED,
            {
                "orderId": payload["orderId"],
                "courier": payload["courier"],
                "message": (
                    f"A courier ({payload['courier']}) has been assigned "
                    f"to your order #{payload['orderId']}."
                ),
            },
        )

    bus.subscribe(events.ORDER_PLACED, notify_order_placed)
    bus.subscribe(events.DELIVERY_STATUS_UPDATED, notify_delivery_status)

    if realtime is None:
        logger.info("Realtime publisher not configured; delivery pushes disabled")
        return

    bus.subscribe(events.DELIVERY_STATUS_UPDATED, push_delivery_status)
    bus.subscribe(events.COURIER_ASSIGNED, push_courier_assigned)
