"""
Centralized settings (environment variables / .env).

`setup_name` is the selector used to pick a named override from the
configuration's setups table. It is read through `get_settings()` so the
current environment is honoured at resolution time.
"""
# @file purpose: Centralized settings using Pydantic Settings.

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BALIN_", env_file=".env", extra="ignore")

    setup_name: str = "default"
    browser: Literal["firefox", "chrome"] = "firefox"
    headless: bool = True
    page_load_timeout_seconds: int = 30
    driver_path: str | None = None
    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()


settings = get_settings()
