from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import DEFAULT_API_HOST


class Settings(BaseSettings):
    """
    SDK settings.

    Notes:
    - Every field can be set through a ``CHATKIT_``-prefixed env var,
      e.g. ``CHATKIT_INSTANCE_LOCATOR`` or ``CHATKIT_EXPIRE_IN``.
    - ``instance_locator`` and ``key`` are validated later by
      ``config.resolve``; empty values raise ConfigurationError there.
    """

    model_config = SettingsConfigDict(env_prefix="CHATKIT_", extra="ignore")

    instance_locator: str = ""
    key: str = ""
    expire_in: int | None = Field(default=None, gt=0)
    api_host: str = DEFAULT_API_HOST
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
