"""Runtime settings, read from the environment (``VECBRIDGE_*``) or ``.env``."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VECBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATABASE_URL: str = "sqlite:///:memory:"
    # k used by the search query builders when the caller passes none.
    DEFAULT_K: int = Field(default=10, ge=1)
    LOAD_EXTENSION: bool = True
    ECHO_SQL: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
