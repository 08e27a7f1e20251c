"""Telemetry helpers for chat-query."""

from chat_query.telemetry.structured_logging import log_codec_event

__all__ = ["log_codec_event"]
