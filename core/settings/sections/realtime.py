from pydantic import Field
from pydantic_settings import BaseSettings


class RealtimeSettings(BaseSettings):
    """
    Real-time publish/subscribe settings.

    When disabled, events are only logged in-process.
    """

    enabled: bool = Field(default=False, alias="REALTIME_ENABLED")
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    channel_prefix: str = Field(default="user_", alias="REALTIME_CHANNEL_PREFIX")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
