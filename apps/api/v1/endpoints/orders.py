"""Order endpoints for REST API."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from core.application.dtos.order_dto import CreateOrderRequest
from core.application.services.order_service import OrderWorkflowService
from core.domain.entities import User
from core.domain.enums import UserRole
from core.domain.exceptions import PaymentGatewayError, ValidationError

from apps.api.deps import get_container, get_order_service
from apps.api.responses import error_response, success_response
from apps.api.security import get_current_user, require_roles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201)
async def create_order(
    request: CreateOrderRequest,
    user: User = Depends(get_current_user),
    service: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    """Place an order.

    Args:
        request: CreateOrderRequest DTO
        user: Authenticated customer
        service: OrderWorkflowService instance

    Returns:
        Envelope with the order, payment handoff or delivery, and redirect URL
    """
    result = await service.place_order(user.id, request)
    return success_response(result, message="Order placed successfully", status_code=201)


@router.get("/my-orders")
async def list_my_orders(
    user: User = Depends(get_current_user),
    service: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    orders = await service.list_user_orders(user.id)
    return success_response(orders, message="Orders retrieved successfully")


@router.get("")
async def list_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders"),
    offset: int = Query(default=0, ge=0, description="Number of orders to skip"),
    _: User = Depends(require_roles(UserRole.ADMIN)),
    service: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    """List orders with pagination.

    Args:
        limit: Maximum number of orders to return
        offset: Number of orders to skip
        service: OrderWorkflowService instance
    """
    orders = await service.list_orders(limit=limit, offset=offset)
    return success_response(orders, message="Orders retrieved successfully")


# Payment routes are declared before /{order_id} so "paystack" is never taken for an id.

@router.get("/paystack/verify/{reference}")
async def verify_payment(
    reference: str,
    _: User = Depends(get_current_user),
    service: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    """Verify a payment reference (client polling after checkout)."""
    result = await service.verify_payment(reference)
    if result.success:
        return success_response(result, message=result.message)
    return error_response(400, result.message, data=result)


@router.get("/paystack/callback")
async def payment_callback(
    reference: str = Query(default=""),
    service: OrderWorkflowService = Depends(get_order_service),
) -> RedirectResponse:
    """Browser redirect target after checkout; forwards to the frontend."""
    if not reference:
        return RedirectResponse(service.frontend_url("/payment-failed"), status_code=307)
    try:
        result = await service.verify_payment(reference)
    except PaymentGatewayError as e:
        logger.error(f"Callback verification for {reference} failed: {e}")
        failed = service.frontend_url("/payment-failed", reference=reference)
        return RedirectResponse(failed, status_code=307)
    return RedirectResponse(result.redirect_url, status_code=307)


@router.post("/paystack/webhook")
async def payment_webhook(
    request: Request,
    service: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    """Gateway webhook, authenticated by the HMAC signature header only."""
    header = get_container(request).settings.paystack.signature_header
    raw_body = await request.body()
    result = await service.handle_webhook(raw_body, request.headers.get(header))
    return success_response(result, message="Webhook received")


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    user: User = Depends(get_current_user),
    service: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    """Get order by ID. Customers only see their own orders."""
    owner = None if user.has_role(UserRole.ADMIN.value) else user.id
    order = await service.get_order(order_id, user_id=owner)
    return success_response(order, message="Order retrieved successfully")


@router.get("/{order_id}/track")
async def track_order(
    order_id: str,
    user: User = Depends(get_current_user),
    service: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    if not order_id.strip():
        raise ValidationError("Order id is required", param="orderId")
    owner = None if user.has_role(UserRole.ADMIN.value) else user.id
    tracking = await service.track_order(order_id, user_id=owner)
    return success_response(tracking, message="Order tracking retrieved successfully")
