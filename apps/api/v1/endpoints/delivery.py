"""Delivery endpoints for REST API."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.application.dtos.delivery_dto import (
    AssignCourierRequest,
    CreateDeliveryRequest,
    UpdateDeliveryStatusRequest,
)
from core.application.services import DeliveryService, OrderWorkflowService
from core.domain.entities import User
from core.domain.enums import UserRole

from apps.api.deps import get_delivery_service, get_order_service
from apps.api.responses import success_response
from apps.api.security import get_current_user, is_staff, require_roles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/delivery", tags=["delivery"])

staff_only = require_roles(UserRole.ADMIN, UserRole.MANAGER)


@router.get("/couriers/all")
async def list_couriers(
    _: User = Depends(staff_only),
    service: DeliveryService = Depends(get_delivery_service),
) -> JSONResponse:
    couriers = await service.list_couriers()
    return success_response(couriers, message="Couriers retrieved successfully")


@router.get("")
async def list_deliveries(
    _: User = Depends(staff_only),
    service: DeliveryService = Depends(get_delivery_service),
) -> JSONResponse:
    """List every delivery with its order total and customer contact."""
    deliveries = await service.list_deliveries()
    return success_response(deliveries, message="Deliveries retrieved successfully")


@router.post("", status_code=201)
async def create_delivery(
    request: CreateDeliveryRequest,
    _: User = Depends(staff_only),
    service: DeliveryService = Depends(get_delivery_service),
) -> JSONResponse:
    """Create the delivery for an order, or return the one that already exists."""
    delivery = await service.get_or_create(
        request.order_id, address=request.address, courier=request.courier
    )
    return success_response(delivery, message="Delivery created successfully", status_code=201)


@router.get("/{order_id}")
async def get_delivery(
    order_id: str,
    user: User = Depends(get_current_user),
    service: DeliveryService = Depends(get_delivery_service),
    orders: OrderWorkflowService = Depends(get_order_service),
) -> JSONResponse:
    if not is_staff(user):
        # Raises 404/403 before the delivery is looked up
        await orders.get_order(order_id, user_id=user.id)
    delivery = await service.get_delivery(order_id)
    return success_response(delivery, message="Delivery retrieved successfully")


@router.patch("/{order_id}/status")
async def update_delivery_status(
    order_id: str,
    request: UpdateDeliveryStatusRequest,
    _: User = Depends(staff_only),
    service: DeliveryService = Depends(get_delivery_service),
) -> JSONResponse:
    """Set the delivery status and mirror it on the order.

    Args:
        order_id: Order identifier
        request: New status

    Returns:
        Envelope with the updated delivery
    """
    delivery = await service.update_status(order_id, request.status)
    return success_response(delivery, message="Delivery status updated successfully")


@router.patch("/{order_id}/courier")
async def assign_courier(
    order_id: str,
    request: AssignCourierRequest,
    _: User = Depends(staff_only),
    service: DeliveryService = Depends(get_delivery_service),
) -> JSONResponse:
    delivery = await service.assign_courier(order_id, request.courier)
    return success_response(delivery, message="Courier assigned successfully")
