"""
Mock Payment Gateway Implementation.

Approves every transaction locally. Used for demos (PAYMENT_PROVIDER=mock)
and tests.
"""
import logging
from typing import Dict, List, Optional

from core.application.dtos.payment_dto import (
    PaymentHandoff,
    PaymentInitialization,
    PaymentVerification,
)
from core.application.interfaces import IPaymentGateway
from core.domain.exceptions import PaymentGatewayError
from fosten_sdk.paystack import PaystackAPI


logger = logging.getLogger(__name__)


class MockPaymentGateway(IPaymentGateway):
    """
    Mock implementation of the payment gateway.

    Remembers initialized transactions so ``verify`` can echo their metadata
    back, like the real gateway does. Webhook signatures use the same
    HMAC-SHA512 scheme as Paystack.
    """

    def __init__(self, secret_key: str = "mock-secret", checkout_url: str = "https://checkout.mock"):
        self.secret_key = secret_key
        self.checkout_url = checkout_url.rstrip("/")
        self.initialized: List[PaymentInitialization] = []
        self.verifications: List[str] = []
        self.statuses: Dict[str, str] = {}
        self.fail_initialize = False
        self._signer = PaystackAPI(secret_key=secret_key)
        logger.info("MockPaymentGateway initialized (no network)")

    async def initialize(self, request: PaymentInitialization) -> PaymentHandoff:
        if self.fail_initialize:
            raise PaymentGatewayError("Mock gateway configured to fail")
        self.initialized.append(request)
        self.statuses.setdefault(request.reference, "success")
        logger.info(f"💳 MOCK PAYMENT INITIALIZED: {request.reference} ({request.amount_minor} {request.currency})")
        return PaymentHandoff(
            authorization_url=f"{self.checkout_url}/{request.reference}",
            access_code=f"ac_{request.reference}",
            reference=request.reference,
        )

    async def verify(self, reference: str) -> PaymentVerification:
        self.verifications.append(reference)
        initialization = self._find(reference)
        if initialization is None and reference not in self.statuses:
            return PaymentVerification(
                success=False,
                status="not_found",
                reference=reference,
                message="Transaction reference not found",
            )
        status = self.statuses.get(reference, "success")
        return PaymentVerification(
            success=status == "success",
            status=status,
            reference=reference,
            amount_minor=initialization.amount_minor if initialization else None,
            metadata=dict(initialization.metadata) if initialization else {},
        )

    def verify_webhook_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        return self._signer.verify_signature(raw_body, signature)

    def _find(self, reference: str) -> Optional[PaymentInitialization]:
        for initialization in self.initialized:
            if initialization.reference == reference:
                return initialization
        return None
