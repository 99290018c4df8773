"""
Configuration Management for splitledger

Uses pydantic-settings for type-safe configuration from environment
variables and an optional .env file. Every setting has a default, so
the ledger runs with no configuration at all.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from splitledger.models.ledger import AssociationPolicy


class LedgerSettings(BaseSettings):
    """Ledger behaviour and snapshot format."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    association_policy: AssociationPolicy = Field(
        default=AssociationPolicy.IGNORE,
        description="What `part` does when asked to associate a task's owner"
    )
    snapshot_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="JSON indentation of saved snapshots"
    )
    snapshot_encoding: str = Field(
        default="utf-8",
        description="Text encoding of snapshot files"
    )
    autoload_path: Optional[str] = Field(
        default=None,
        description="Snapshot loaded when the console starts"
    )


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITLEDGER_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="WARNING",
        description="Minimum level that reaches the log"
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON instead of console key=value"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.level)


class AppSettings(BaseSettings):
    """
    Front-end settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Show tracebacks for unexpected errors"
    )
    prompt: str = Field(
        default="> ",
        description="Console prompt"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry holding the message for each failure.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "logging", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
