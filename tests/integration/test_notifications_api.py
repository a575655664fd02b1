"""Integration tests for Notification and health endpoints."""

import pytest

from core.domain.enums import NotificationType
from tests.support import CUSTOMER_ID


@pytest.mark.asyncio
async def test_admin_sends_notification(client, channels, admin_headers, customer_headers):
    body = {"targetUserId": CUSTOMER_ID, "type": "email", "title": "Promo", "message": "Free delivery"}

    created = await client.post("/api/v1/notifications", json=body, headers=admin_headers)
    mine = await client.get("/api/v1/notifications", headers=customer_headers)

    assert created.status_code == 201
    assert created.json()["data"]["user_id"] == CUSTOMER_ID
    assert [n["title"] for n in mine.json()["data"]] == ["Promo"]
    assert channels[NotificationType.EMAIL].get_notifications()[0]["title"] == "Promo"


@pytest.mark.asyncio
async def test_customer_cannot_send_notification(client, customer_headers):
    body = {"targetUserId": CUSTOMER_ID, "type": "email", "title": "Promo", "message": "Free delivery"}

    response = await client.post("/api/v1/notifications", json=body, headers=customer_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_send_notification_validation(client, admin_headers):
    body = {"targetUserId": CUSTOMER_ID, "type": "pigeon", "title": "Promo", "message": "Free delivery"}

    response = await client.post("/api/v1/notifications", json=body, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "type"


@pytest.mark.asyncio
async def test_mark_read(client, container, customer_headers, other_customer_headers):
    created = await container.notifications.send(CUSTOMER_ID, "Hello", "Message")

    foreign = await client.patch(
        f"/api/v1/notifications/{created.id}/read", headers=other_customer_headers
    )
    own = await client.patch(f"/api/v1/notifications/{created.id}/read", headers=customer_headers)

    assert foreign.status_code == 404
    assert own.status_code == 200
    assert own.json()["data"]["is_read"] is True


@pytest.mark.asyncio
async def test_list_all_is_admin_only(client, customer_headers, admin_headers):
    assert (await client.get("/api/v1/notifications/all", headers=customer_headers)).status_code == 403
    assert (await client.get("/api/v1/notifications/all", headers=admin_headers)).status_code == 200


@pytest.mark.asyncio
async def test_health_endpoints(client):
    live = await client.get("/health")
    ready = await client.get("/health/ready")

    assert live.json() == {"status": "healthy"}
    assert ready.status_code == 200
    assert ready.json() == {"status": "ready", "database": "ok"}
