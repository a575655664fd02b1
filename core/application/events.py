"""Names and payload builders of the side-effect events the services emit."""

from typing import Optional

from orchestration.events import Event

ORDER_PLACED = "order.placed"
DELIVERY_STATUS_UPDATED = "delivery.status_updated"
COURIER_ASSIGNED = "delivery.courier_assigned"


def order_placed(
    execution_id: str, order_id: str, user_id: str, payment_method: str
) -> Event:
    return Event.create(
        name=ORDER_PLACED,
        payload={"orderId": order_id, "userId": user_id, "paymentMethod": payment_method},
        execution_id=execution_id,
        service="orders",
        operation="place_order",
    )


def delivery_status_updated(
    execution_id: str, order_id: str, user_id: str, status: str
) -> Event:
    return Event.create(
        name=DELIVERY_STATUS_UPDATED,
        payload={"orderId": order_id, "userId": user_id, "status": status},
        execution_id=execution_id,
        service="delivery",
        operation="update_status",
    )


def courier_assigned(
    execution_id: str, order_id: str, user_id: str, courier: Optional[str]
) -> Event:
    return Event.create(
        name=COURIER_ASSIGNED,
        payload={"orderId": order_id, "userId": user_id, "courier": courier},
        execution_id=execution_id,
        service="delivery",
        operation="assign_courier",
    )
