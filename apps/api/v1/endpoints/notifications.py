"""Notification endpoints for REST API."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.application.dtos.notification_dto import SendNotificationRequest
from core.application.services import NotificationDispatcher
from core.domain.entities import User
from core.domain.enums import UserRole

from apps.api.deps import get_notification_dispatcher
from apps.api.responses import error_response, success_response
from apps.api.security import get_current_user, require_roles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def list_my_notifications(
    user: User = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> JSONResponse:
    notifications = await dispatcher.list_for_user(user.id)
    return success_response(notifications, message="Notifications retrieved successfully")


@router.get("/all")
async def list_all_notifications(
    _: User = Depends(require_roles(UserRole.ADMIN)),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> JSONResponse:
    notifications = await dispatcher.list_all()
    return success_response(notifications, message="Notifications retrieved successfully")


@router.patch("/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    user: User = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> JSONResponse:
    notification = await dispatcher.mark_read(notification_id, user_id=user.id)
    return success_response(notification, message="Notification marked as read")


@router.post("", status_code=201)
async def send_notification(
    request: SendNotificationRequest,
    _: User = Depends(require_roles(UserRole.ADMIN)),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> JSONResponse:
    """Store a notification for a user and relay it over the requested channel."""
    notification = await dispatcher.send(
        request.target_user_id, request.title, request.message, request.type
    )
    if notification is None:
        return error_response(500, "Failed to send notification")
    return success_response(notification, message="Notification sent successfully", status_code=201)
