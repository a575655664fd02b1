"""Application service for the order workflow: placement, payment and reconciliation."""

import json
import logging
import time
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application import events
from core.application.dtos.order_dto import (
    CreateOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderTrackingDTO,
    PaymentHandoffDTO,
    PaymentVerificationResult,
    PlaceOrderResult,
    WebhookResult,
)
from core.application.dtos.payment_dto import PaymentInitialization, PaymentVerification
from core.application.interfaces import IPaymentGateway
from core.application.services.delivery_service import DeliveryService
from core.data.uow import create_uow
from core.domain.entities import Order, OrderItem
from core.domain.exceptions import (
    ForbiddenError,
    InvalidSignatureError,
    NotFoundError,
    PaymentGatewayError,
    PaymentInitializationError,
    ValidationError,
)
from core.domain.value_objects import (
    CodPayment,
    MomoPayment,
    Money,
    PaymentReference,
    PaymentSelection,
    payment_from_request,
)
from core.settings.sections.application import ApplicationSettings
from orchestration.bus import EventBusProtocol


logger = logging.getLogger(__name__)

CHARGE_SUCCESS = "charge.success"
CALLBACK_PATH = "/api/v1/orders/paystack/callback"


class OrderWorkflowService:
    """
    Application service for the order workflow.

    Responsibilities:
    - Persist orders and their items atomically
    - Hand non-COD orders over to the payment gateway
    - Reconcile payments (polling, redirect callback, webhook) idempotently
    - Provision deliveries through DeliveryService
    - Emit the order-placed side effect without waiting for it
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        deliveries: DeliveryService,
        event_bus: EventBusProtocol,
        settings: ApplicationSettings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize order workflow service.

        Args:
            session_factory: SQLAlchemy async session factory
            gateway: Payment gateway selected at startup
            deliveries: Delivery provisioner
            event_bus: Bus used for fire-and-forget side effects
            settings: Application settings (URLs, currency)
            clock: Time source for payment references
        """
        self._session_factory = session_factory
        self._gateway = gateway
        self._deliveries = deliveries
        self._event_bus = event_bus
        self._settings = settings
        self._clock = clock

    @property
    def callback_url(self) -> str:
        return f"{self._settings.backend_url.rstrip('/')}{CALLBACK_PATH}"

    def frontend_url(self, path: str, **params: str) -> str:
        base = f"{self._settings.frontend_url.rstrip('/')}{path}"
        query = {k: v for k, v in params.items() if v}
        return f"{base}?{urlencode(query)}" if query else base

    # =========================================================================
    # PLACE ORDER
    # =========================================================================

    async def place_order(self, user_id: str, request: CreateOrderRequest) -> PlaceOrderResult:
        """Place an order.

        COD orders get their delivery immediately; card and mobile-money
        orders are handed to the payment gateway.

        Args:
            user_id: Authenticated customer
            request: CreateOrderRequest DTO

        Returns:
            PlaceOrderResult with the order and either a delivery or a payment handoff

        Raises:
            ValidationError: If the payment method/channel pair is invalid
            PaymentInitializationError: If the gateway could not open a transaction
        """
        payment = payment_from_request(
            request.payment_method, request.payment_channel, request.phone
        )
        order = self._build_order(user_id, request, payment)

        uow = create_uow(self._session_factory)
        async with uow:
            await uow.orders.add(order)
            await uow.commit()
            execution_id = str(uow.execution_id)

        logger.info(
            f"🛒 Order {order.id} placed by user {user_id} "
            f"({payment.method.value}/{payment.channel}, {order.total})"
        )
        self._event_bus.emit(
            events.order_placed(execution_id, order.id, user_id, payment.method.value)
        )

        if isinstance(payment, CodPayment):
            delivery = await self._deliveries.get_or_create(order.id)
            return PlaceOrderResult(
                order=self._order_to_dto(order),
                delivery=delivery,
                redirect_url=self.frontend_url("/order-success", orderId=order.id),
            )

        handoff = await self._initialize_payment(order, payment, request.email)
        return PlaceOrderResult(
            order=self._order_to_dto(order),
            payment=handoff,
            redirect_url=handoff.authorization_url,
        )

    def _build_order(
        self, user_id: str, request: CreateOrderRequest, payment: PaymentSelection
    ) -> Order:
        currency = self._settings.currency
        items = [
            OrderItem(
                product_id=item.product_id,
                quantity=item.quantity,
                price=Money(amount=item.price, currency=currency),
            )
            for item in request.items
        ]
        reference = (
            PaymentReference.generate(self._clock).value if payment.requires_gateway else None
        )
        return Order.place(
            user_id=user_id,
            items=items,
            total=Money(amount=request.total_amount, currency=currency),
            payment=payment,
            address=request.address,
            payment_reference=reference,
            is_premium=request.is_premium,
            estimated_delivery=request.estimated_delivery,
        )

    async def _initialize_payment(
        self, order: Order, payment: PaymentSelection, email: str
    ) -> PaymentHandoffDTO:
        initialization = PaymentInitialization(
            amount_minor=order.total.to_minor_units(),
            currency=order.total.currency,
            reference=order.payment_reference,
            email=email,
            callback_url=self.callback_url,
            metadata={
                "orderId": order.id,
                "userId": order.user_id,
                "paymentMethod": payment.method.value,
            },
            channels=list(payment.gateway_channels),
            mobile_money=(
                {"phone": payment.phone, "provider": payment.provider}
                if isinstance(payment, MomoPayment)
                else None
            ),
        )

        try:
            handoff = await self._gateway.initialize(initialization)
        except PaymentGatewayError as e:
            logger.error(f"❌ Payment initialization failed for order {order.id}: {e}")
            raise PaymentInitializationError() from e

        logger.info(f"💳 Payment initialized for order {order.id} ({handoff.reference})")
        return PaymentHandoffDTO(
            method=payment.method.value,
            channel=payment.channel,
            reference=handoff.reference,
            authorization_url=handoff.authorization_url,
            access_code=handoff.access_code,
            callback_url=self.callback_url,
        )

    # =========================================================================
    # PAYMENT RECONCILIATION
    # =========================================================================

    async def verify_payment(self, reference: str) -> PaymentVerificationResult:
        """Verify a payment reference and provision the order's delivery.

        Safe to call any number of times for the same reference.

        Args:
            reference: Payment reference

        Returns:
            PaymentVerificationResult (``success=False`` on gateway failure,
            unknown order or reference mismatch; nothing is written then)
        """
        verification, order = await self._reconcile(reference)
        failed_redirect = self.frontend_url("/payment-failed", reference=reference)

        if not verification.success:
            logger.warning(f"Payment {reference} not successful: {verification.status}")
            return PaymentVerificationResult(
                success=False,
                message="Payment verification failed.",
                reference=reference,
                gateway_status=verification.status,
                redirect_url=failed_redirect,
            )

        if order is None:
            logger.error(f"Payment {reference} succeeded but no matching order was found")
            return PaymentVerificationResult(
                success=False,
                message="Order not found for this payment.",
                reference=reference,
                order_id=verification.order_id,
                gateway_status=verification.status,
                redirect_url=failed_redirect,
            )

        if not self._reference_matches(order, verification):
            return PaymentVerificationResult(
                success=False,
                message="Payment reference does not match the order.",
                reference=reference,
                order_id=order.id,
                gateway_status=verification.status,
                redirect_url=failed_redirect,
            )

        delivery = await self._deliveries.get_or_create(order.id)
        logger.info(f"✅ Payment {reference} verified for order {order.id}")
        return PaymentVerificationResult(
            success=True,
            message="Payment verified successfully.",
            reference=reference,
            order_id=order.id,
            gateway_status=verification.status,
            delivery=delivery,
            redirect_url=self.frontend_url(
                "/payment-success", orderId=order.id, reference=reference
            ),
        )

    async def handle_webhook(self, raw_body: bytes, signature: Optional[str]) -> WebhookResult:
        """Handle a signed gateway webhook.

        The signature is checked before the body is parsed or the store is
        touched.

        Raises:
            InvalidSignatureError: If the signature does not match the body
            ValidationError: If the body is malformed or has no reference
            NotFoundError: If no order matches a successful charge
        """
        if not self._gateway.verify_webhook_signature(raw_body, signature):
            logger.warning("🚫 Webhook rejected: invalid signature")
            raise InvalidSignatureError()

        try:
            payload = json.loads(raw_body)
        except ValueError:
            raise ValidationError("Invalid webhook payload") from None
        if not isinstance(payload, dict):
            raise ValidationError("Invalid webhook payload")

        event = payload.get("event")
        data = payload.get("data") if isinstance(payload.get("data"), dict) else {}

        if event != CHARGE_SUCCESS:
            logger.info(f"Webhook event {event} acknowledged without action")
            return WebhookResult(event=event)

        reference = data.get("reference")
        if not reference:
            raise ValidationError("Missing reference in webhook payload", param="reference")

        verification, order = await self._reconcile(str(reference))
        if not verification.success:
            logger.warning(
                f"Webhook {event} for {reference} not confirmed by gateway: {verification.status}"
            )
            return WebhookResult(event=event)
        if order is None:
            raise NotFoundError("Order not found for this payment")
        if not self._reference_matches(order, verification):
            raise ValidationError("Payment reference does not match the order", param="reference")

        await self._deliveries.get_or_create(order.id)
        logger.info(f"📬 Webhook {event} processed for order {order.id}")
        return WebhookResult(event=event, processed=True, order_id=order.id)

    async def _reconcile(self, reference: str) -> Tuple[PaymentVerification, Optional[Order]]:
        """Verify with the gateway and resolve the order it refers to."""
        verification = await self._gateway.verify(reference)
        if not verification.success:
            return verification, None

        uow = create_uow(self._session_factory)
        async with uow:
            order = None
            if verification.order_id:
                order = await uow.orders.get(verification.order_id)
            if order is None:
                order = await uow.orders.find_by_payment_reference(verification.reference)
        return verification, order

    @staticmethod
    def _reference_matches(order: Order, verification: PaymentVerification) -> bool:
        if order.payment_reference == verification.reference:
            return True
        logger.error(
            f"❌ Reference mismatch for order {order.id}: "
            f"stored={order.payment_reference} confirmed={verification.reference}"
        )
        return False

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_order(self, order_id: str, user_id: Optional[str] = None) -> OrderDTO:
        """Get order by ID.

        Args:
            order_id: Order identifier
            user_id: When given, the order must belong to this user

        Raises:
            NotFoundError: If the order does not exist
            ForbiddenError: If the order belongs to someone else
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load_visible(uow, order_id, user_id)
            return self._order_to_dto(order)

    async def track_order(self, order_id: str, user_id: Optional[str] = None) -> OrderTrackingDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load_visible(uow, order_id, user_id)
            delivery = await uow.deliveries.get_by_order(order_id)
            return OrderTrackingDTO(
                order_id=order.id,
                status=order.status,
                estimated_delivery=order.estimated_delivery,
                is_premium=order.is_premium,
                delivery_status=delivery.status.value if delivery else None,
                courier=delivery.courier if delivery else None,
            )

    async def list_user_orders(self, user_id: str) -> List[OrderDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.list_for_user(user_id)
            return [self._order_to_dto(order) for order in orders]

    async def list_orders(self, limit: int = 100, offset: int = 0) -> List[OrderDTO]:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of OrderDTO instances
        """
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.list_all(limit=limit, offset=offset)
            return [self._order_to_dto(order) for order in orders]

    @staticmethod
    async def _load_visible(uow, order_id: str, user_id: Optional[str]) -> Order:
        order = await uow.orders.get(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        if user_id is not None and not order.belongs_to(user_id):
            raise ForbiddenError("Access denied")
        return order

    def _order_to_dto(self, order: Order) -> OrderDTO:
        """Transform Order domain entity to OrderDTO.

        Args:
            order: Order domain entity

        Returns:
            OrderDTO instance
        """
        items = [
            OrderItemDTO(
                id=item.id,
                product_id=item.product_id,
                quantity=item.quantity,
                price=item.price.amount,
            )
            for item in order.items
        ]

        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            items=items,
            total_amount=order.total.amount,
            currency=order.total.currency,
            payment_method=order.payment_method.value,
            payment_channel=order.payment_channel,
            payment_reference=order.payment_reference,
            address=order.address,
            status=order.status,
            is_premium=order.is_premium,
            estimated_delivery=order.estimated_delivery,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
