"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).
Forecast settings use the DARKSKY_ prefix so they do not collide with
other services sharing the same environment.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemas.models.forecast import DEFAULT_URL_TEMPLATE, Language, Units


class ForecastSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="DARKSKY_", extra="ignore"
    )

    # Optional so a builder can be seeded without credentials in tests
    api_key: Optional[str] = None
    base_url: str = DEFAULT_URL_TEMPLATE
    language: Language = Language.de
    units: Units = Units.si


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    # None picks "json" in production and "console" otherwise
    log_format: Optional[str] = None


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"

    # Sub-configs (composed via model_validator below)
    forecast: Optional[ForecastSettings] = None
    logging: Optional[LoggingSettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.forecast is None:
            self.forecast = ForecastSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def log_format(self) -> str:
        if self.logging.log_format:
            return self.logging.log_format
        return "json" if self.is_production else "console"
