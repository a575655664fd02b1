"""Unit tests for the Paystack client and gateway (HTTP layer faked)."""

import json
from typing import Any, List, Tuple

import pytest

from core.application.dtos.payment_dto import PaymentInitialization
from core.domain.exceptions import PaymentGatewayError
from core.infrastructure.adapters.payments.paystack_gateway import PaystackPaymentGateway
from core.settings.sections.paystack import PaystackSettings
from fosten_sdk.paystack import (
    PaystackAPI,
    PaystackAPIError,
    PaystackTransientError,
    compute_signature,
)


class ScriptedPaystackAPI(PaystackAPI):
    """PaystackAPI whose HTTP attempts return scripted (status, body) pairs."""

    def __init__(self, responses: List[Any], **kwargs) -> None:
        kwargs.setdefault("backoff_seconds", 0)
        super().__init__(secret_key="sk_test_123", **kwargs)
        self.responses = list(responses)
        self.calls: List[Tuple[str, str, Any, Any]] = []

    async def _send(self, method, url, json=None, headers=None):
        self.calls.append((method, url, json, headers))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _initialization(**overrides) -> PaymentInitialization:
    data = {
        "amount_minor": 2000,
        "currency": "GHS",
        "reference": "ORD-1700000000000-42",
        "email": "ama@example.com",
        "callback_url": "http://api.test/api/v1/orders/paystack/callback",
        "metadata": {"orderId": "order-1", "userId": "u1", "paymentMethod": "momo"},
        "channels": ["mobile_money"],
        "mobile_money": {"phone": "+233240000000", "provider": "mtn"},
    }
    data.update(overrides)
    return PaymentInitialization(**data)


# ====================== SIGNATURES ======================


def test_signature_matches_hmac_sha512_of_raw_body():
    api = PaystackAPI(secret_key="sk_test_123")
    body = json.dumps({"event": "charge.success"}).encode()
    signature = compute_signature("sk_test_123", body)

    assert len(signature) == 128
    assert api.verify_signature(body, signature) is True
    assert api.verify_signature(body, signature.upper()) is True


def test_signature_rejects_tampering_and_missing_header():
    api = PaystackAPI(secret_key="sk_test_123")
    body = b'{"event":"charge.success"}'
    signature = compute_signature("sk_test_123", body)

    assert api.verify_signature(body + b" ", signature) is False
    assert api.verify_signature(body, None) is False
    assert api.verify_signature(body, "") is False
    assert PaystackAPI(secret_key="").verify_signature(body, signature) is False


# ====================== RETRIES ======================


@pytest.mark.asyncio
async def test_transient_errors_are_retried_until_success():
    api = ScriptedPaystackAPI(
        [
            (503, {"message": "unavailable"}),
            PaystackTransientError("timed out"),
            (200, {"status": True, "data": {"status": "success"}}),
        ],
        max_attempts=3,
    )

    body = await api.verify_transaction("ORD-1-1")

    assert body["data"]["status"] == "success"
    assert len(api.calls) == 3


@pytest.mark.asyncio
async def test_retries_are_bounded():
    api = ScriptedPaystackAPI([(500, {}), (502, {}), (429, {})], max_attempts=3)

    with pytest.raises(PaystackTransientError):
        await api.verify_transaction("ORD-1-1")
    assert len(api.calls) == 3


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    api = ScriptedPaystackAPI([(400, {"message": "Invalid key"})], max_attempts=3)

    with pytest.raises(PaystackAPIError) as exc_info:
        await api.verify_transaction("ORD-1-1")
    assert exc_info.value.status_code == 400
    assert len(api.calls) == 1


@pytest.mark.asyncio
async def test_initialize_sends_idempotency_key():
    api = ScriptedPaystackAPI(
        [(200, {"status": True, "data": {"authorization_url": "https://pay/x", "reference": "R"}})]
    )

    data = await api.initialize_transaction({"reference": "R"}, idempotency_key="R")

    assert data["authorization_url"] == "https://pay/x"
    method, url, _, headers = api.calls[0]
    assert method == "POST"
    assert url.endswith("/transaction/initialize")
    assert headers == {"Idempotency-Key": "R"}


# ====================== GATEWAY ======================


@pytest.mark.asyncio
async def test_gateway_initialize_builds_momo_payload():
    api = ScriptedPaystackAPI(
        [
            (
                200,
                {
                    "status": True,
                    "data": {
                        "authorization_url": "https://checkout.paystack.com/abc",
                        "access_code": "abc",
                        "reference": "ORD-1700000000000-42",
                    },
                },
            )
        ]
    )
    gateway = PaystackPaymentGateway(PaystackSettings(PAYSTACK_SECRET_KEY="sk_test_123"), api=api)

    handoff = await gateway.initialize(_initialization())

    assert handoff.authorization_url == "https://checkout.paystack.com/abc"
    assert handoff.access_code == "abc"
    payload = api.calls[0][2]
    assert payload["amount"] == 2000
    assert payload["currency"] == "GHS"
    assert payload["channels"] == ["mobile_money"]
    assert payload["mobile_money"] == {"phone": "+233240000000", "provider": "mtn"}
    assert payload["metadata"]["orderId"] == "order-1"


@pytest.mark.asyncio
async def test_gateway_initialize_failure_raises_gateway_error():
    api = ScriptedPaystackAPI([(401, {"message": "Invalid key"})])
    gateway = PaystackPaymentGateway(PaystackSettings(PAYSTACK_SECRET_KEY="sk_test_123"), api=api)

    with pytest.raises(PaymentGatewayError):
        await gateway.initialize(_initialization(mobile_money=None, channels=["card"]))


@pytest.mark.asyncio
async def test_gateway_verify_maps_success_and_metadata():
    api = ScriptedPaystackAPI(
        [
            (
                200,
                {
                    "status": True,
                    "message": "Verification successful",
                    "data": {
                        "status": "success",
                        "reference": "ORD-1-1",
                        "amount": 2000,
                        "metadata": {"orderId": "order-1"},
                    },
                },
            )
        ]
    )
    gateway = PaystackPaymentGateway(PaystackSettings(PAYSTACK_SECRET_KEY="sk_test_123"), api=api)

    verification = await gateway.verify("ORD-1-1")

    assert verification.success is True
    assert verification.order_id == "order-1"
    assert verification.amount_minor == 2000


@pytest.mark.asyncio
async def test_gateway_verify_reports_abandoned_and_rejected_as_failure():
    api = ScriptedPaystackAPI(
        [
            (200, {"status": True, "data": {"status": "abandoned", "reference": "ORD-1-1"}}),
            (404, {"status": False, "message": "Transaction reference not found"}),
        ]
    )
    gateway = PaystackPaymentGateway(PaystackSettings(PAYSTACK_SECRET_KEY="sk_test_123"), api=api)

    abandoned = await gateway.verify("ORD-1-1")
    rejected = await gateway.verify("ORD-1-2")

    assert abandoned.success is False
    assert abandoned.status == "abandoned"
    assert rejected.success is False
    assert rejected.status == "rejected"


@pytest.mark.asyncio
async def test_gateway_verify_raises_when_gateway_unreachable():
    api = ScriptedPaystackAPI([(503, {}), (503, {})], max_attempts=2)
    gateway = PaystackPaymentGateway(PaystackSettings(PAYSTACK_SECRET_KEY="sk_test_123"), api=api)

    with pytest.raises(PaymentGatewayError):
        await gateway.verify("ORD-1-1")
