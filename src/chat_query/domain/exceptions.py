"""Domain exceptions for chat-query.

This module defines the errors raised while building or parsing chat
completion request payloads. Both concrete errors also subclass ValueError so
callers that already catch ValueError around payload handling keep working.

Exception Hierarchy:
    - ChatQueryError: Base exception for all chat-query errors
    - ConstructionRejectedError: Role/field combination is invalid
    - DecodeMismatchError: JSON value matches no variant of a union

Note:
    Numeric ranges documented by the API (temperature, penalties, logit bias,
    function name length) are never checked here. See chat_query.validators
    for opt-in caller-side checks.
"""

from __future__ import annotations

from typing import Any


class ChatQueryError(Exception):
    """Base exception for all chat-query errors.

    This exception should not be raised directly. Use ConstructionRejectedError
    or DecodeMismatchError instead.
    """


class ConstructionRejectedError(ChatQueryError, ValueError):
    """Raised when a message is built with fields its role cannot carry.

    Common causes:
        - role="system" or role="user" without content
        - role="tool" without content or without tool_call_id
        - a content-part sequence given for any role other than "user"

    Attributes:
        role: Role the caller asked for, if known.
    """

    def __init__(self, message: str, *, role: str | None = None) -> None:
        super().__init__(message)
        self.role = role


class DecodeMismatchError(ChatQueryError, ValueError):
    """Raised when a JSON value does not match any variant of a union.

    Attributes:
        union: Name of the union or model that failed (e.g. "message",
            "content", "tool_choice", "chat_query").
        errors: Structured error list reported by pydantic, one entry per
            failed location. Empty when the failure was not a validation error
            (e.g. malformed JSON text).
    """

    def __init__(
        self,
        union: str,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(f"{union}: {message}")
        self.union = union
        self.errors = errors or []
