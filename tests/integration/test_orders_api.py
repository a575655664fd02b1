"""Integration tests for Orders API endpoints."""

import json
import re

import pytest

from core.data.models import DeliveryModel, OrderModel
from fosten_sdk.paystack import compute_signature
from tests.support import FRONTEND_URL, WEBHOOK_SECRET, count_rows


@pytest.mark.asyncio
async def test_create_cod_order(client, customer_headers, order_payload):
    """Test POST /orders endpoint - cash on delivery."""
    response = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["order"]["status"] == "pending"
    assert data["delivery"]["status"] == "pending"
    assert data["delivery"]["address"] == "12 Ring Road, Accra"
    assert data["payment"] is None
    assert data["redirectUrl"] == f"{FRONTEND_URL}/order-success?orderId={data['order']['id']}"


@pytest.mark.asyncio
async def test_create_momo_order(client, customer_headers, order_payload):
    """Momo placement returns a gateway handoff with a generated reference."""
    order_payload.update(paymentMethod="momo", paymentChannel="mtn", phone="+233240000000")

    response = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["order"]["payment_method"] == "momo"
    assert data["payment"]["authorizationUrl"]
    assert re.fullmatch(r"ORD-\d+-\d+", data["payment"]["reference"])
    assert data["redirectUrl"] == data["payment"]["authorizationUrl"]


@pytest.mark.asyncio
async def test_create_order_requires_token(client, order_payload):
    response = await client.post("/api/v1/orders", json=order_payload)

    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_create_order_rejects_invalid_token(client, order_payload):
    response = await client.post(
        "/api/v1/orders", json=order_payload, headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override,param",
    [
        ({"items": []}, "items"),
        ({"totalAmount": 0}, "totalAmount"),
        ({"email": "not-an-email"}, "email"),
    ],
)
async def test_create_order_validation_errors(client, customer_headers, order_payload, override, param):
    order_payload.update(override)

    response = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert any(error["param"] == param for error in body["errors"])


@pytest.mark.asyncio
async def test_create_order_rejects_wrong_channel(client, customer_headers, order_payload):
    order_payload.update(paymentMethod="card", paymentChannel="mtn")

    response = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "paymentChannel"


@pytest.mark.asyncio
async def test_payment_initialization_failure_is_500(client, gateway, customer_headers, order_payload):
    gateway.fail_initialize = True
    order_payload.update(paymentMethod="card", paymentChannel="visa")

    response = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to initialize payment"


@pytest.mark.asyncio
async def test_order_access_rules(
    client, customer_headers, other_customer_headers, admin_headers, order_payload
):
    created = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)
    order_id = created.json()["data"]["order"]["id"]

    own = await client.get(f"/api/v1/orders/{order_id}", headers=customer_headers)
    foreign = await client.get(f"/api/v1/orders/{order_id}", headers=other_customer_headers)
    as_admin = await client.get(f"/api/v1/orders/{order_id}", headers=admin_headers)
    missing = await client.get("/api/v1/orders/does-not-exist", headers=admin_headers)

    assert own.status_code == 200
    assert foreign.status_code == 403
    assert as_admin.status_code == 200
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_list_orders(client, customer_headers, admin_headers, order_payload):
    await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)

    mine = await client.get("/api/v1/orders/my-orders", headers=customer_headers)
    everything = await client.get("/api/v1/orders?limit=10", headers=admin_headers)
    forbidden = await client.get("/api/v1/orders", headers=customer_headers)

    assert len(mine.json()["data"]) == 1
    assert len(everything.json()["data"]) == 1
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_track_order(client, customer_headers, order_payload):
    created = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)
    order_id = created.json()["data"]["order"]["id"]

    response = await client.get(f"/api/v1/orders/{order_id}/track", headers=customer_headers)

    assert response.status_code == 200
    assert response.json()["data"]["delivery_status"] == "pending"


# =============================================================================
# PAYMENT RECONCILIATION
# =============================================================================


async def _momo_reference(client, headers, payload) -> str:
    payload.update(paymentMethod="momo", paymentChannel="mtn")
    created = await client.post("/api/v1/orders", json=payload, headers=headers)
    return created.json()["data"]["payment"]["reference"]


@pytest.mark.asyncio
async def test_verify_endpoint(client, container, customer_headers, order_payload):
    reference = await _momo_reference(client, customer_headers, order_payload)

    first = await client.get(f"/api/v1/orders/paystack/verify/{reference}", headers=customer_headers)
    second = await client.get(f"/api/v1/orders/paystack/verify/{reference}", headers=customer_headers)

    assert first.status_code == 200
    assert first.json()["data"]["success"] is True
    assert "payment-success" in first.json()["data"]["redirectUrl"]
    assert second.json()["data"]["delivery"]["id"] == first.json()["data"]["delivery"]["id"]
    assert await count_rows(container.session_factory, DeliveryModel) == 1


@pytest.mark.asyncio
async def test_verify_endpoint_failure_is_400(client, customer_headers):
    response = await client.get("/api/v1/orders/paystack/verify/ORD-1-1", headers=customer_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["data"]["redirectUrl"] == f"{FRONTEND_URL}/payment-failed?reference=ORD-1-1"


@pytest.mark.asyncio
async def test_callback_redirects_to_frontend(client, customer_headers, order_payload):
    reference = await _momo_reference(client, customer_headers, order_payload)

    success = await client.get(f"/api/v1/orders/paystack/callback?reference={reference}")
    failure = await client.get("/api/v1/orders/paystack/callback?reference=ORD-1-1")
    missing = await client.get("/api/v1/orders/paystack/callback")

    assert success.status_code == 307
    assert success.headers["location"].startswith(f"{FRONTEND_URL}/payment-success?orderId=")
    assert failure.status_code == 307
    assert failure.headers["location"] == f"{FRONTEND_URL}/payment-failed?reference=ORD-1-1"
    assert missing.headers["location"] == f"{FRONTEND_URL}/payment-failed"


@pytest.mark.asyncio
async def test_webhook_with_bad_signature_is_401(client, container, customer_headers, order_payload):
    reference = await _momo_reference(client, customer_headers, order_payload)
    raw = json.dumps({"event": "charge.success", "data": {"reference": reference}}).encode()

    response = await client.post(
        "/api/v1/orders/paystack/webhook",
        content=raw,
        headers={"x-paystack-signature": "0" * 128, "Content-Type": "application/json"},
    )

    assert response.status_code == 401
    assert await count_rows(container.session_factory, DeliveryModel) == 0


@pytest.mark.asyncio
async def test_webhook_with_valid_signature(client, container, customer_headers, order_payload):
    reference = await _momo_reference(client, customer_headers, order_payload)
    raw = json.dumps({"event": "charge.success", "data": {"reference": reference}}).encode()

    response = await client.post(
        "/api/v1/orders/paystack/webhook",
        content=raw,
        headers={
            "x-paystack-signature": compute_signature(WEBHOOK_SECRET, raw),
            "Content-Type": "application/json",
        },
    )

    assert response.status_code == 200
    assert response.json()["data"]["processed"] is True
    assert await count_rows(container.session_factory, DeliveryModel) == 1


@pytest.mark.asyncio
async def test_sub_cent_price_is_rejected_before_any_write(client, container, customer_headers, order_payload):
    order_payload["items"] = [{"productId": "prod-1", "quantity": 1, "price": "0.001"}]

    response = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)
    mine = await client.get("/api/v1/orders/my-orders", headers=customer_headers)

    assert response.status_code == 400
    assert any(error["param"] == "items.0.price" for error in response.json()["errors"])
    assert await count_rows(container.session_factory, OrderModel) == 0
    assert mine.status_code == 200
    assert mine.json()["data"] == []


@pytest.mark.asyncio
async def test_sub_cent_total_is_rejected_before_gateway(client, container, gateway, customer_headers, order_payload):
    order_payload.update(paymentMethod="momo", paymentChannel="mtn", totalAmount="0.004")

    response = await client.post("/api/v1/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 400
    assert any(error["param"] == "totalAmount" for error in response.json()["errors"])
    assert gateway.initialized == []
    assert await count_rows(container.session_factory, OrderModel) == 0
