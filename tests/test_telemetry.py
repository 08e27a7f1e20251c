"""
Behavioral tests for structured codec events and decode failure logging.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from chat_query import DecodeMismatchError, Message, ToolChoice
from chat_query.core.config import settings
from chat_query.telemetry import log_codec_event


def _read_events(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


class TestLogCodecEvent:
    """Tests for log_codec_event()."""

    def test_adds_timestamp(self, event_log):
        """Test that a timestamp is injected when missing."""
        log_codec_event({"event": "test"})

        (event,) = _read_events(event_log)
        assert event["event"] == "test"
        assert isinstance(event["timestamp"], str)

    def test_keeps_existing_timestamp_and_serializes_datetime(self, event_log):
        """Test datetime serialization and the string fallback."""
        stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        log_codec_event(
            {
                "event": "test",
                "timestamp": stamp,
                "path": Path("/tmp/x"),
                "ratio": Decimal("1.5"),
            }
        )

        (event,) = _read_events(event_log)
        assert event["timestamp"].startswith("2024-01-02T03:04:05")
        assert event["path"] == "/tmp/x"
        assert event["ratio"] == "1.5"


class TestDecodeFailureEvents:
    """Tests for events emitted by failed decodes."""

    def test_decode_failure_emits_event(self, event_log):
        """Test that a failed decode is recorded with its union and locations."""
        with pytest.raises(DecodeMismatchError):
            ToolChoice.from_wire("required")

        (event,) = _read_events(event_log)
        assert event["event"] == "decode_mismatch"
        assert event["union"] == "tool_choice"
        assert event["error_count"] >= 2
        assert len(event["locations"]) == event["error_count"]

    def test_successful_decode_emits_nothing(self, event_log):
        """Test that only failures are recorded."""
        ToolChoice.from_wire("auto")
        assert _read_events(event_log) == []

    def test_events_can_be_disabled(self, event_log, monkeypatch):
        """Test the decode_failures switch."""
        monkeypatch.setattr(settings.logging, "decode_failures", False)

        with pytest.raises(DecodeMismatchError):
            Message.from_wire({"role": "user"})
        assert _read_events(event_log) == []

    def test_payload_only_logged_when_enabled(self, caplog, monkeypatch):
        """Test that payload contents stay out of debug logs by default."""
        secret = {"role": "user", "content": 404, "secret": "s3cr3t"}

        with caplog.at_level(logging.DEBUG, logger="chat_query.models.base"):
            with pytest.raises(DecodeMismatchError):
                Message.from_wire(secret)
        assert "s3cr3t" not in caplog.text

        caplog.clear()
        monkeypatch.setattr(settings.logging, "payloads", True)
        with caplog.at_level(logging.DEBUG, logger="chat_query.models.base"):
            with pytest.raises(DecodeMismatchError):
                Message.from_wire(secret)
        assert "s3cr3t" in caplog.text
