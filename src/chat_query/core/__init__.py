"""Core helpers for chat-query."""

from chat_query.core.config import CodecConfig, LoggingConfig, Settings, settings

__all__ = [
    "CodecConfig",
    "LoggingConfig",
    "Settings",
    "settings",
]
