"""
Configuration settings for the Wager History desk.

Uses Pydantic Settings to load environment variables for the ledger API
connection, the acting user, and logging. The acting user is turned into an
explicit `DeskContext` by `build_context` so the core never reads globals.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wager_history.domain.models import DeskContext


class Settings(BaseSettings):
    # Ledger API
    api_base_url: str = Field("http://localhost:3000/api", alias="API_BASE_URL")
    api_token: Optional[str] = Field(None, alias="API_TOKEN")
    api_timeout: float = Field(15.0, alias="API_TIMEOUT", gt=0)
    auth_check_path: str = Field("/auth/check", alias="AUTH_CHECK_PATH")

    # Acting user
    user_id: int = Field(0, alias="USER_ID")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


def build_context(settings: Settings) -> DeskContext:
    """Build the explicit session context handed to the desk and edit sessions."""
    return DeskContext(user_id=settings.user_id, token=settings.api_token)


__all__ = ["Settings", "get_settings", "build_context"]
