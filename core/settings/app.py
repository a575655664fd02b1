# core/settings/app.py
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.sections.application import ApplicationSettings
from core.settings.sections.auth import AuthSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.notifications import EmailSettings, PushSettings, SmsSettings
from core.settings.sections.paystack import PaystackSettings
from core.settings.sections.realtime import RealtimeSettings


class NotificationSettings(BaseModel):
    """Aggregates notification relay settings as nested objects."""

    model_config = ConfigDict(extra="ignore")

    email: EmailSettings
    sms: SmsSettings
    push: PushSettings


class AppSettings(BaseModel):
    """
    Central application settings aggregator.

    Each section reads its own environment variables; the aggregator only
    groups them so dependents receive one object.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    application: ApplicationSettings
    database: DatabaseSettings
    auth: AuthSettings
    paystack: PaystackSettings
    notifications: NotificationSettings
    realtime: RealtimeSettings


def load_app_settings() -> AppSettings:
    """Build a fresh settings object from the environment."""
    return AppSettings(
        application=ApplicationSettings(),
        database=DatabaseSettings(),
        auth=AuthSettings(),
        paystack=PaystackSettings(),
        notifications=NotificationSettings(
            email=EmailSettings(),
            sms=SmsSettings(),
            push=PushSettings(),
        ),
        realtime=RealtimeSettings(),
    )


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return load_app_settings()
