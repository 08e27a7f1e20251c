"""Scalar value types for chat-query.

Enumerations shared by the wire models. All of them are StrEnum so a member
compares equal to its wire value and serializes as a bare JSON string.
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Conversation role. Fixed per message variant."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class JSONType(StrEnum):
    """Primitive types accepted in a function parameter schema."""

    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NUMBER = "number"
    NULL = "null"


class ImageDetail(StrEnum):
    """Fidelity the model should use when looking at an image."""

    AUTO = "auto"
    LOW = "low"
    HIGH = "high"


class ResponseFormat(StrEnum):
    """Output format requested from the model.

    On the wire this is wrapped as ``{"type": "<value>"}`` rather than sent as
    a bare string.
    """

    JSON_OBJECT = "json_object"
    TEXT = "text"


class Model(StrEnum):
    """Well-known chat model identifiers.

    ChatQuery.model accepts any string; these members are a convenience for
    callers and compare equal to their string values.
    """

    GPT4_O = "gpt-4o"
    GPT4_O_MINI = "gpt-4o-mini"
    GPT4_TURBO = "gpt-4-turbo"
    GPT4_VISION_PREVIEW = "gpt-4-vision-preview"
    GPT4 = "gpt-4"
    GPT3_5_TURBO = "gpt-3.5-turbo"


__all__ = ["ImageDetail", "JSONType", "Model", "ResponseFormat", "Role"]
