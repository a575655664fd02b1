from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Database connection settings.

    PostgreSQL (asyncpg) in production, SQLite (aiosqlite) for local runs and tests.
    """

    url: str = Field(default="sqlite+aiosqlite:///./fosten.db", alias="DATABASE_URL")
    echo: bool = Field(default=False, alias="DB_ECHO")
    pool_size: int = Field(default=10, alias="DB_POOL_SIZE")
    max_overflow: int = Field(default=20, alias="DB_MAX_OVERFLOW")
    pool_recycle: int = Field(default=3600, alias="DB_POOL_RECYCLE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")
