"""
Pytest configuration and fixtures for chat-query tests.
"""

import logging
import sys
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from chat_query import (  # noqa: E402
    FunctionCall,
    FunctionParameters,
    ImagePart,
    JSONType,
    Message,
    Property,
    TextPart,
    ToolCallParam,
    tool,
)
from chat_query.telemetry import structured_logging  # noqa: E402

JPEG_MAGIC = bytes([0xFF, 0xD8])


@pytest.fixture
def weather_call():
    """Tool call an assistant turn might carry."""
    return ToolCallParam(
        id="call_abc123",
        function=FunctionCall(name="get_weather", arguments='{"city": "Oslo"}'),
    )


@pytest.fixture
def weather_tool():
    """Tool definition with a small nested schema."""
    return tool(
        "get_weather",
        description="Get the current weather for a city",
        parameters=FunctionParameters(
            type=JSONType.OBJECT,
            properties={
                "city": Property(type=JSONType.STRING, description="City name"),
                "unit": Property(type=JSONType.STRING, enum=["celsius", "fahrenheit"]),
            },
            required=["city"],
        ),
    )


@pytest.fixture
def vision_parts():
    """Text part followed by an image part."""
    return (
        TextPart(text="What is in this picture?"),
        ImagePart.from_image(JPEG_MAGIC),
    )


@pytest.fixture
def conversation(weather_call):
    """One message of every role, in a realistic order."""
    return (
        Message.system("You are a weather assistant.", name="forecaster"),
        Message.user("What's the weather in Oslo?"),
        Message.assistant(tool_calls=[weather_call]),
        Message.tool('{"temp_c": 4}', tool_call_id="call_abc123"),
        Message.assistant("It is 4 degrees in Oslo."),
    )


@pytest.fixture
def event_log(tmp_path):
    """Redirect structured codec events to a JSON Lines file.

    Yields the log file path. Handlers and level are restored afterwards.
    """
    logger = structured_logging.EVENT_LOGGER
    original_handlers = logger.handlers[:]
    original_level = logger.level
    original_propagate = logger.propagate
    log_path = tmp_path / "events.jsonl"
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers = [handler]
    logger.setLevel(logging.INFO)
    logger.propagate = False
    try:
        yield log_path
    finally:
        handler.close()
        logger.handlers = original_handlers
        logger.setLevel(original_level)
        logger.propagate = original_propagate
