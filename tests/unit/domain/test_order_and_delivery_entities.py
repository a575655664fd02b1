"""Unit tests for the Order and Delivery entities."""

from decimal import Decimal

import pytest

from core.domain.entities import DEFAULT_COURIER, NO_ADDRESS, Delivery, Order, OrderItem
from core.domain.enums import DeliveryStatus
from core.domain.exceptions import ValidationError
from core.domain.value_objects import Money, payment_from_request


def _items():
    return [OrderItem(product_id="prod-1", quantity=2, price=Money(Decimal("10.00")))]


def test_cod_order_starts_pending():
    order = Order.place(
        user_id="u1",
        items=_items(),
        total=Money(Decimal("20.00")),
        payment=payment_from_request("cod", "cod_pickup"),
    )

    assert order.status == "pending"
    assert order.payment_reference is None
    assert order.id


def test_gateway_order_awaits_payment_and_needs_reference():
    payment = payment_from_request("card", "visa")

    with pytest.raises(ValidationError):
        Order.place(user_id="u1", items=_items(), total=Money(Decimal("20")), payment=payment)

    order = Order.place(
        user_id="u1",
        items=_items(),
        total=Money(Decimal("20")),
        payment=payment,
        payment_reference="ORD-1-1",
    )
    assert order.status == "awaiting_payment"


def test_order_requires_items_and_positive_total():
    payment = payment_from_request("cod", "cod_pickup")

    with pytest.raises(ValidationError):
        Order.place(user_id="u1", items=[], total=Money(Decimal("20")), payment=payment)
    with pytest.raises(ValidationError):
        Order.place(user_id="u1", items=_items(), total=Money(Decimal("0")), payment=payment)


@pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
def test_order_item_rejects_bad_quantity(quantity):
    with pytest.raises(ValidationError):
        OrderItem(product_id="p", quantity=quantity, price=Money(Decimal("1")))


def test_provisioned_delivery_defaults():
    delivery = Delivery.provision("order-1", address="   ")

    assert delivery.address == NO_ADDRESS
    assert delivery.courier == DEFAULT_COURIER
    assert delivery.status is DeliveryStatus.PENDING


def test_assign_courier_strips_and_rejects_blank():
    delivery = Delivery.provision("order-1", address="Accra")

    delivery.assign_courier("  Kwame Express ")
    assert delivery.courier == "Kwame Express"

    with pytest.raises(ValidationError):
        delivery.assign_courier("   ")
    assert delivery.courier == "Kwame Express"


def test_delivery_status_parse():
    assert DeliveryStatus.parse("shipped") is DeliveryStatus.SHIPPED

    with pytest.raises(ValueError) as exc_info:
        DeliveryStatus.parse("lost")
    assert "Must be one of: pending, processing, shipped" in str(exc_info.value)

    with pytest.raises(ValueError):
        DeliveryStatus.parse(None)
