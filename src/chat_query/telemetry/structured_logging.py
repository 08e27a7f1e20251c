"""Structured logging utilities for chat-query.

Codec events (currently decode failures) are emitted as one JSON object per
log record on the ``chat_query.events`` logger.

Log Sink Configuration:
    - CHAT_QUERY_LOG_EVENT_LOG_PATH set: events are appended as JSON Lines to
      that file and the logger does not propagate.
    - Unset: the logger propagates to the root logger like any other module
      logger, so applications decide where events end up.

Event Schema:
    All events should include:
        - event: Event type identifier (e.g., "decode_mismatch")
        - timestamp: ISO 8601 timestamp (auto-injected if missing)
        - Additional fields: event-specific metadata (union, error_count, ...)
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter

from chat_query.core.config import settings

EVENT_LOGGER = logging.getLogger("chat_query.events")
if not EVENT_LOGGER.handlers and settings.logging.event_log_path is not None:
    EVENT_LOGGER.setLevel(logging.INFO)
    handler = logging.FileHandler(settings.logging.event_log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    EVENT_LOGGER.addHandler(handler)
    EVENT_LOGGER.propagate = False


def _json_default(value: Any) -> Any:
    """Fallback serializer for values json.dumps cannot handle.

    Args:
        value: Value json.dumps could not serialize natively.

    Returns:
        ISO 8601 string for datetimes, string form (paths included) for
        everything else.
    """
    match value:
        case datetime():
            return TypeAdapter(datetime).dump_python(value, mode="json")
        case _:
            return str(value)


def log_codec_event(event: dict[str, Any]) -> None:
    """Emit a structured codec event.

    Args:
        event: Event payload dictionary. Should contain an "event" key. A
            "timestamp" key (ISO 8601, UTC) is added when missing; note that
            this mutates the input dict.

    Example:
        >>> log_codec_event({
        ...     "event": "decode_mismatch",
        ...     "union": "message",
        ...     "error_count": 4,
        ... })
    """
    event.setdefault("timestamp", datetime.now(UTC).isoformat())
    EVENT_LOGGER.info(json.dumps(event, default=_json_default))


__all__ = ["EVENT_LOGGER", "log_codec_event"]
