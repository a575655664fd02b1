"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal
from uuid import uuid4

from core.domain.entities import Delivery, Notification, Order, OrderItem, User
from core.domain.enums import DeliveryStatus, NotificationType, PaymentMethod, UserRole
from core.domain.value_objects import Money

from .models import (
    DeliveryModel,
    NotificationModel,
    OrderItemModel,
    OrderModel,
    UserModel,
)


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel, currency: str) -> OrderItem:
        """Convert ORM model to domain entity.

        Args:
            model: OrderItemModel instance
            currency: Currency of the parent order

        Returns:
            OrderItem domain entity
        """
        return OrderItem(
            id=model.id,
            product_id=model.product_id,
            quantity=model.quantity,
            price=Money(amount=Decimal(str(model.price)), currency=currency),
        )

    @staticmethod
    def to_persistence(entity: OrderItem, order_id: str, position: int) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderItem domain entity
            order_id: Parent order ID
            position: Index of the item within the order

        Returns:
            OrderItemModel instance
        """
        if entity.id is None:
            entity.id = str(uuid4())
        return OrderItemModel(
            id=entity.id,
            order_id=order_id,
            position=position,
            product_id=entity.product_id,
            quantity=entity.quantity,
            price=entity.price.amount,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested items).

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        currency = model.currency or "GHS"
        items = [OrderItemMapper.to_domain(item, currency) for item in model.items]

        return Order(
            id=model.id,
            user_id=model.user_id,
            items=items,
            total=Money(amount=Decimal(str(model.total_amount)), currency=currency),
            payment_method=PaymentMethod(model.payment_method),
            payment_channel=model.payment_channel,
            address=model.address,
            payment_reference=model.payment_reference,
            status=model.status,
            is_premium=bool(model.is_premium),
            estimated_delivery=model.estimated_delivery,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model (with nested items).

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance
        """
        order_model = OrderModel(
            id=entity.id,
            user_id=entity.user_id,
            total_amount=entity.total.amount,
            currency=entity.total.currency,
            payment_method=entity.payment_method.value,
            payment_channel=entity.payment_channel,
            payment_reference=entity.payment_reference,
            address=entity.address,
            status=entity.status,
            is_premium=entity.is_premium,
            estimated_delivery=entity.estimated_delivery,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

        order_model.items = [
            OrderItemMapper.to_persistence(item, entity.id, position)
            for position, item in enumerate(entity.items)
        ]

        return order_model


class DeliveryMapper:
    """Static mapper for Delivery ↔ DeliveryModel transformation."""

    @staticmethod
    def to_domain(model: DeliveryModel) -> Delivery:
        return Delivery(
            id=model.id,
            order_id=model.order_id,
            address=model.address,
            courier=model.courier,
            status=DeliveryStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Delivery) -> DeliveryModel:
        return DeliveryModel(
            id=entity.id,
            order_id=entity.order_id,
            address=entity.address,
            courier=entity.courier,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_persistence(entity: Delivery, model: DeliveryModel) -> DeliveryModel:
        """Copy the mutable fields onto an existing row."""
        model.courier = entity.courier
        model.status = entity.status.value
        model.updated_at = entity.updated_at
        return model


class NotificationMapper:
    """Static mapper for Notification ↔ NotificationModel transformation."""

    @staticmethod
    def to_domain(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.targeted_user,
            title=model.title,
            message=model.message,
            type=NotificationType(model.type),
            is_read=bool(model.is_read),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Notification) -> NotificationModel:
        return NotificationModel(
            id=entity.id,
            targeted_user=entity.user_id,
            title=entity.title,
            message=entity.message,
            type=entity.type.value,
            is_read=entity.is_read,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class UserMapper:

    @staticmethod
    def to_domain(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            role=UserRole(model.role),
            is_active=bool(model.is_active),
        )
