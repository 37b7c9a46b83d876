"""
Environment-driven settings.

Site layout lives in `sitepartials.settings.store`; this module only covers
process-level options such as log export.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=None, extra="ignore", case_sensitive=True)

    logfire_enabled: bool = Field(default=False, alias="SITEPARTIALS_LOGFIRE")
    log_console: bool = Field(default=False, alias="SITEPARTIALS_LOG_CONSOLE")
    logfire_token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN")


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Load logging settings from environment variables."""
    return LoggingSettings()


def refresh_logging_settings_cache() -> None:
    """Clear cached settings so future calls reload from environment."""
    get_logging_settings.cache_clear()  # type: ignore[attr-defined]
