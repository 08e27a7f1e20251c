"""Centralized configuration for chat-query.

This module provides a single source of truth for configuration values, using
pydantic-settings for environment variable loading and validation. Nothing in
here changes the wire format; settings only affect JSON text layout and what
gets logged when decoding fails.

Configuration Sections:
    - CodecConfig: JSON text output options
    - LoggingConfig: Decode failure logging and structured event sink

Environment Variable Prefixes:
    - CHAT_QUERY_CODEC_*: Codec settings
    - CHAT_QUERY_LOG_*: Logging settings

Usage:
    from chat_query.core.config import settings

    indent = settings.codec.json_indent
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CodecConfig(BaseSettings):
    """JSON text codec configuration.

    Attributes:
        json_indent: Indentation used by codec.dumps(). None produces compact
            output with no whitespace between tokens. Range: [0, 8].
        ensure_ascii: Escape non-ASCII characters in codec.dumps() output.
            Default: False.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAT_QUERY_CODEC_",
        case_sensitive=False,
        extra="ignore",
    )

    json_indent: int | None = Field(
        default=None, ge=0, le=8, description="Indentation for JSON text (None = compact)"
    )
    ensure_ascii: bool = Field(default=False, description="Escape non-ASCII characters")


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Attributes:
        decode_failures: Emit a structured "decode_mismatch" event whenever a
            payload fails to decode. Default: True.
        payloads: Include the offending payload in the debug log line. Payloads
            can carry user content, so this is off by default.
        event_log_path: Optional JSON Lines file that structured events are
            appended to. None keeps events on the logging tree only.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAT_QUERY_LOG_",
        case_sensitive=False,
        extra="ignore",
    )

    decode_failures: bool = Field(default=True, description="Log decode failures as events")
    payloads: bool = Field(default=False, description="Include payloads in debug logs")
    event_log_path: Path | None = Field(
        default=None, description="JSON Lines file for structured events"
    )

    @field_validator("event_log_path")
    @classmethod
    def validate_event_log_path(cls, v: Path | None) -> Path | None:
        """Reject paths that point at an existing directory."""
        if v is not None and v.is_dir():
            raise ValueError(f"event_log_path must be a file, got directory {v}")
        return v


class Settings(BaseSettings):
    """Root settings class containing all configuration sections.

    Configuration is loaded from environment variables, then a .env file in
    the working directory, then defaults.

    Attributes:
        codec: JSON text codec configuration.
        logging: Logging configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    codec: CodecConfig = Field(default_factory=CodecConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    @lru_cache(maxsize=1)
    def get_settings(cls) -> Settings:
        """Get cached settings instance.

        Returns:
            Cached Settings instance. Clear with
            ``Settings.get_settings.cache_clear()`` to reload from the
            environment.
        """
        return cls()


settings = Settings.get_settings()

__all__ = [
    "CodecConfig",
    "LoggingConfig",
    "Settings",
    "settings",
]
