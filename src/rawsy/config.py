"""Application settings, loaded from ``RAWSY_``-prefixed environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    Example:
        >>> settings = Settings(env="test", event_processing="sync")
        >>> settings.database_uri is None
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="RAWSY_",
        env_file=".env",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="development, test, staging or production",
    )
    database_uri: str | None = Field(
        default=None,
        description="SQLAlchemy URL; the in-memory store is used when unset",
    )
    event_processing: Literal["sync", "async"] = Field(
        default="sync",
        description="Deliver domain events inline after commit or on a background worker",
    )
    log_level: str | None = Field(
        default=None,
        description="Overrides the per-environment default level",
    )
    log_dir: str = Field(default="logs")
    log_to_file: bool = Field(default=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()
