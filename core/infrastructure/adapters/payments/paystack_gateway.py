"""
Paystack Payment Gateway Implementation.

Adapts the Paystack SDK client to IPaymentGateway.
"""
import logging
from typing import Optional

from core.application.dtos.payment_dto import (
    PaymentHandoff,
    PaymentInitialization,
    PaymentVerification,
)
from core.application.interfaces import IPaymentGateway
from core.domain.exceptions import PaymentGatewayError
from core.settings.sections.paystack import PaystackSettings
from fosten_sdk.paystack import (
    PaystackAPI,
    PaystackAPIError,
    PaystackError,
)


logger = logging.getLogger(__name__)


class PaystackPaymentGateway(IPaymentGateway):
    """
    Paystack implementation of the payment gateway.

    Transaction initialization and verification go through PaystackAPI,
    which applies the timeout and retry policy.
    """

    def __init__(self, settings: PaystackSettings, api: Optional[PaystackAPI] = None):
        """
        Initialize Paystack gateway.

        Args:
            settings: Paystack settings with secret key and retry policy
            api: Preconfigured client (built from settings when omitted)
        """
        self.settings = settings
        self.api = api or PaystackAPI(
            secret_key=settings.secret_key,
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            max_attempts=settings.max_attempts,
            backoff_seconds=settings.backoff_seconds,
        )
        if not settings.secret_key:
            logger.warning("PAYSTACK_SECRET_KEY is not set; Paystack calls will be rejected")
        logger.info("PaystackPaymentGateway initialized")

    async def initialize(self, request: PaymentInitialization) -> PaymentHandoff:
        """Open a Paystack transaction for the order."""
        payload = {
            "email": request.email,
            "amount": request.amount_minor,
            "currency": request.currency,
            "reference": request.reference,
            "metadata": request.metadata,
            "callback_url": request.callback_url,
            "channels": request.channels,
        }
        if request.mobile_money is not None:
            payload["mobile_money"] = request.mobile_money

        try:
            data = await self.api.initialize_transaction(payload, idempotency_key=request.reference)
        except PaystackError as e:
            logger.error(f"Paystack initialization failed for {request.reference}: {e}")
            raise PaymentGatewayError(f"Paystack initialization failed: {e}") from e

        authorization_url = data.get("authorization_url")
        if not authorization_url:
            raise PaymentGatewayError("Paystack returned no authorization URL")

        return PaymentHandoff(
            authorization_url=authorization_url,
            access_code=data.get("access_code"),
            reference=data.get("reference") or request.reference,
        )

    async def verify(self, reference: str) -> PaymentVerification:
        """Verify a transaction; Paystack rejections become a failed result."""
        try:
            body = await self.api.verify_transaction(reference)
        except PaystackAPIError as e:
            logger.warning(f"Paystack rejected verification of {reference}: {e}")
            return PaymentVerification(
                success=False, status="rejected", reference=reference, message=str(e)
            )
        except PaystackError as e:
            logger.error(f"Paystack verification failed for {reference}: {e}")
            raise PaymentGatewayError(f"Paystack verification failed: {e}") from e

        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        status = str(data.get("status") or "unknown")
        metadata = data.get("metadata") if isinstance(data.get("metadata"), dict) else {}
        amount = data.get("amount")

        return PaymentVerification(
            success=bool(body.get("status")) and status == "success",
            status=status,
            reference=str(data.get("reference") or reference),
            amount_minor=int(amount) if isinstance(amount, (int, float)) else None,
            metadata=metadata,
            message=body.get("message"),
        )

    def verify_webhook_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        return self.api.verify_signature(raw_body, signature)
