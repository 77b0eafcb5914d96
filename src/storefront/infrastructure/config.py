"""Application settings, read from STOREFRONT_* environment variables or .env."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = Path("data")
    log_level: str = "INFO"
    log_json: bool = False
    checkout_max_retries: int = Field(default=2, ge=0)
    # default caller for the CLI; the auth layer normally supplies it
    user_id: str | None = None


def get_settings() -> Settings:
    return Settings()
