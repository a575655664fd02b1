from pydantic import Field
from pydantic_settings import BaseSettings


class EmailSettings(BaseSettings):
    """
    Email relay settings.

    SendPulse is the primary provider; SMTP is used when SendPulse is not
    configured or rejects the message.
    """

    enabled: bool = Field(default=True, alias="EMAIL_ENABLED")
    sendpulse_client_id: str = Field(default="", alias="SENDPULSE_CLIENT_ID")
    sendpulse_client_secret: str = Field(default="", alias="SENDPULSE_CLIENT_SECRET")
    sendpulse_base_url: str = Field(
        default="https://api.sendpulse.com", alias="SENDPULSE_BASE_URL"
    )
    sender_email: str = Field(default="no-reply@fosten.shop", alias="EMAIL_FROM")
    sender_name: str = Field(default="Fosten Shop", alias="EMAIL_FROM_NAME")
    smtp_host: str = Field(default="", alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_username: str = Field(default="", alias="SMTP_USER")
    smtp_password: str = Field(default="", alias="SMTP_PASS")
    smtp_start_tls: bool = Field(default=True, alias="SMTP_STARTTLS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def sendpulse_configured(self) -> bool:
        return bool(self.sendpulse_client_id and self.sendpulse_client_secret)

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host)


class SmsSettings(BaseSettings):
    """
    SMS relay settings (Twilio).
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=True, alias="SMS_ENABLED")
    account_sid: str = Field(default="", alias="TWILIO_ACCOUNT_SID")
    auth_token: str = Field(default="", alias="TWILIO_AUTH_TOKEN")
    from_number: str = Field(default="", alias="TWILIO_PHONE_NUMBER")
    base_url: str = Field(default="https://api.twilio.com", alias="TWILIO_BASE_URL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)


class PushSettings(BaseSettings):
    """
    Push relay settings (Firebase Cloud Messaging).
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=True, alias="PUSH_ENABLED")
    server_key: str = Field(default="", alias="FCM_SERVER_KEY")
    endpoint: str = Field(default="https://fcm.googleapis.com/fcm/send", alias="FCM_ENDPOINT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def configured(self) -> bool:
        return bool(self.server_key)
