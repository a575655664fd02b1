from pydantic import Field
from pydantic_settings import BaseSettings


class PaystackSettings(BaseSettings):
    """
    Payment gateway settings.

    PAYMENT_PROVIDER selects the gateway implementation once at startup:
    "paystack" talks to the real API, "mock" approves everything locally.
    """

    provider: str = Field(default="paystack", alias="PAYMENT_PROVIDER")
    secret_key: str = Field(default="", alias="PAYSTACK_SECRET_KEY")
    base_url: str = Field(default="https://api.paystack.co", alias="PAYSTACK_BASE_URL")
    timeout_seconds: float = Field(default=10.0, alias="PAYSTACK_TIMEOUT_SECONDS")
    max_attempts: int = Field(default=3, alias="PAYSTACK_MAX_ATTEMPTS")
    backoff_seconds: float = Field(default=0.5, alias="PAYSTACK_BACKOFF_SECONDS")
    signature_header: str = Field(
        default="x-paystack-signature", alias="PAYSTACK_SIGNATURE_HEADER"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
