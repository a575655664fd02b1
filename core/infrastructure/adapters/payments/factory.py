"""Select the payment gateway once at startup."""
import logging

from core.application.interfaces import IPaymentGateway
from core.settings.sections.paystack import PaystackSettings

from .mock_gateway import MockPaymentGateway
from .paystack_gateway import PaystackPaymentGateway


logger = logging.getLogger(__name__)


def build_payment_gateway(settings: PaystackSettings) -> IPaymentGateway:
    """
    Build the configured gateway.

    Raises:
        ValueError: If PAYMENT_PROVIDER names an unknown provider
    """
    provider = settings.provider.lower()
    if provider == "paystack":
        return PaystackPaymentGateway(settings)
    if provider == "mock":
        logger.warning("⚠️ Using mock payment gateway - no real charges will be made")
        return MockPaymentGateway(secret_key=settings.secret_key or "mock-secret")
    raise ValueError(f"Unknown payment provider: {settings.provider}")
