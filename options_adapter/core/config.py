"""Adapter configuration using Pydantic Settings.

Settings are loaded from environment variables prefixed with
``OPTIONS_ADAPTER_``.

Optionally, you may point `ENV_FILE` at a local env file (for development).
Configuration only affects logging and metrics, never the translated output.
"""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Adapter settings with type validation.

    Configuration is loaded from environment variables, with support
    for an explicitly requested env file.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None,
        env_prefix="OPTIONS_ADAPTER_",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    structured_logs: bool = True

    # Prometheus metrics for translations
    metrics_enabled: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level and reject unknown names."""
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
        return level


settings = Settings()
