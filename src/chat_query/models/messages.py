"""Conversation messages.

A message is one of four role-specific records. Each record serializes to a
flat object holding its own fields plus a literal ``role`` value; there is no
wrapper object naming the variant, so ``role`` is the discriminant.

Message Roles:
    - "system": Instructions for the model. Content required.
    - "user": Human input. Content required, either text or content parts.
    - "assistant": Earlier model turns, optionally with tool calls.
    - "tool": Result of a tool call. Content and tool_call_id required.

Decoding tries the variants in role order (system, user, assistant, tool).
Every variant asserts its own literal role, so a payload can only ever match
the variant its ``role`` names; a "user" payload with malformed content fails
instead of falling through to another variant.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from chat_query.domain.exceptions import ConstructionRejectedError
from chat_query.domain.value_objects import Role
from chat_query.models.base import WIRE_MODEL_CONFIG, WireMixin
from chat_query.models.content import Content, ImagePart, TextPart

# ============================================================================
# Tool Call Records
# ============================================================================


class FunctionCall(WireMixin, BaseModel):
    """Function invocation requested by the model.

    Attributes:
        name: Name of the function to call.
        arguments: JSON text produced by the model. Kept opaque: it is neither
            parsed nor re-validated here.
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "function_call"

    name: str = Field(..., description="Function name")
    arguments: str = Field(..., description="JSON string of function arguments")


class ToolCallParam(WireMixin, BaseModel):
    """Tool call carried by an earlier assistant turn.

    Attributes:
        id: Call identifier, echoed back by the tool message answering it.
        function: Function name and arguments.
        type: Always "function".
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "tool_call"

    id: str = Field(..., description="Unique tool call ID")
    function: FunctionCall = Field(..., description="Function call details")
    type: Literal["function"] = Field(default="function", description="Tool call type")


# ============================================================================
# Message Variants
# ============================================================================


class SystemMessage(WireMixin, BaseModel):
    """System instructions."""

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "system_message"

    role: Literal["system"] = "system"
    content: str = Field(..., description="Instruction text")
    name: str | None = Field(None, description="Participant name")


class UserMessage(WireMixin, BaseModel):
    """Human input, as text or as text and image parts."""

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "user_message"

    role: Literal["user"] = "user"
    content: Content = Field(..., description="Text or non-empty list of content parts")
    name: str | None = Field(None, description="Participant name")


class AssistantMessage(WireMixin, BaseModel):
    """Earlier model turn.

    Content and tool_calls may both be absent; no cross-field check is made.
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "assistant_message"

    role: Literal["assistant"] = "assistant"
    content: str | None = Field(None, description="Reply text")
    name: str | None = Field(None, description="Participant name")
    tool_calls: tuple[ToolCallParam, ...] | None = Field(
        None, description="Tool calls made by the assistant"
    )


class ToolMessage(WireMixin, BaseModel):
    """Result of a tool call."""

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "tool_message"

    role: Literal["tool"] = "tool"
    content: str = Field(..., description="Tool output")
    tool_call_id: str = Field(..., min_length=1, description="ID of the call being answered")


MessageVariant = SystemMessage | UserMessage | AssistantMessage | ToolMessage
"""Closed set of message records, in decode priority order."""


# ============================================================================
# Message Union
# ============================================================================


def _rejected(role: Role, reason: str, exc: ValidationError | None = None) -> ConstructionRejectedError:
    detail = f"{role.value} message {reason}"
    if exc is not None:
        detail = f"{detail}: {exc.error_count()} validation errors"
    return ConstructionRejectedError(detail, role=role.value)


class Message(WireMixin, RootModel):
    """One conversation message, whichever role it has.

    Build one with :meth:`create`, :meth:`vision` or the per-role shorthands,
    or wrap a variant record directly (``Message(SystemMessage(...))``). The
    accessors below are total: they answer for every role, returning None
    where the active variant has no such field.
    """

    model_config = ConfigDict(frozen=True)
    wire_name: ClassVar[str] = "message"

    root: MessageVariant = Field(..., union_mode="left_to_right")

    @field_validator("root", mode="before")
    @classmethod
    def require_role(cls, value: Any) -> Any:
        """Reject mapping payloads without a role before probing variants."""
        if isinstance(value, dict) and "role" not in value:
            raise ValueError("message object has no 'role' field")
        return value

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        role: Role | str,
        content: str | None = None,
        name: str | None = None,
        tool_calls: Sequence[ToolCallParam] | None = None,
        tool_call_id: str | None = None,
    ) -> Message:
        """Build the message variant for ``role``.

        Args:
            role: Message role.
            content: Text content. Required for system, user and tool.
            name: Participant name. Not accepted for tool messages.
            tool_calls: Tool calls. Only accepted for assistant messages.
            tool_call_id: Answered call ID. Required for tool messages and not
                accepted for any other role.

        Returns:
            Message wrapping the variant for ``role``.

        Raises:
            ConstructionRejectedError: If the role is unknown, a required
                field is missing, a field the role cannot carry is given, or a
                field has the wrong type.
        """
        try:
            role = Role(role)
        except ValueError as exc:
            raise ConstructionRejectedError(f"Unknown role {role!r}", role=str(role)) from exc

        if tool_calls is not None and role is not Role.ASSISTANT:
            raise _rejected(role, "cannot carry tool_calls")
        if tool_call_id is not None and role is not Role.TOOL:
            raise _rejected(role, "cannot carry tool_call_id")

        try:
            match role:
                case Role.SYSTEM:
                    if content is None:
                        raise _rejected(role, "requires content")
                    variant: MessageVariant = SystemMessage(content=content, name=name)
                case Role.USER:
                    if content is None:
                        raise _rejected(role, "requires content")
                    variant = UserMessage(content=content, name=name)
                case Role.ASSISTANT:
                    variant = AssistantMessage(
                        content=content,
                        name=name,
                        tool_calls=tuple(tool_calls) if tool_calls is not None else None,
                    )
                case Role.TOOL:
                    if name is not None:
                        raise _rejected(role, "cannot carry a name")
                    if content is None:
                        raise _rejected(role, "requires content")
                    if not tool_call_id:
                        raise _rejected(role, "requires tool_call_id")
                    variant = ToolMessage(content=content, tool_call_id=tool_call_id)
        except ValidationError as exc:
            raise _rejected(role, "has invalid fields", exc) from exc
        return cls(variant)

    @classmethod
    def vision(
        cls,
        role: Role | str,
        content: Sequence[TextPart | ImagePart],
        name: str | None = None,
    ) -> Message:
        """Build a user message from content parts.

        Raises:
            ConstructionRejectedError: If ``role`` is not "user" or the part
                sequence is empty.
        """
        if role != Role.USER:
            raise ConstructionRejectedError(
                f"Content parts are only accepted for user messages, got {role!r}",
                role=str(role),
            )
        if not content:
            raise _rejected(Role.USER, "requires at least one content part")
        try:
            return cls(UserMessage(content=tuple(content), name=name))
        except ValidationError as exc:
            raise _rejected(Role.USER, "has invalid content parts", exc) from exc

    @classmethod
    def system(cls, content: str, name: str | None = None) -> Message:
        return cls.create(Role.SYSTEM, content=content, name=name)

    @classmethod
    def user(
        cls,
        content: str | Sequence[TextPart | ImagePart],
        name: str | None = None,
    ) -> Message:
        if isinstance(content, str):
            return cls.create(Role.USER, content=content, name=name)
        return cls.vision(Role.USER, content, name=name)

    @classmethod
    def assistant(
        cls,
        content: str | None = None,
        name: str | None = None,
        tool_calls: Sequence[ToolCallParam] | None = None,
    ) -> Message:
        return cls.create(Role.ASSISTANT, content=content, name=name, tool_calls=tool_calls)

    @classmethod
    def tool(cls, content: str, tool_call_id: str) -> Message:
        return cls.create(Role.TOOL, content=content, tool_call_id=tool_call_id)

    # ------------------------------------------------------------------
    # Role-agnostic accessors
    # ------------------------------------------------------------------

    @property
    def variant(self) -> MessageVariant:
        """The active variant record."""
        return self.root

    @property
    def role(self) -> Role:
        return Role(self.root.role)

    @property
    def content(self) -> Content | None:
        """Content in the user content shape.

        Plain-text content of system, assistant and tool messages is wrapped
        as string content; user content is returned as is.
        """
        match self.root:
            case UserMessage(content=content):
                return content
            case AssistantMessage(content=None):
                return None
            case SystemMessage(content=text) | AssistantMessage(content=text) | ToolMessage(
                content=text
            ):
                return Content(text)
        return None

    @property
    def name(self) -> str | None:
        """Participant name. Always None for tool messages."""
        if isinstance(self.root, ToolMessage):
            return None
        return self.root.name

    @property
    def tool_call_id(self) -> str | None:
        """Answered call ID. Only tool messages have one."""
        if isinstance(self.root, ToolMessage):
            return self.root.tool_call_id
        return None

    @property
    def tool_calls(self) -> tuple[ToolCallParam, ...] | None:
        """Requested tool calls. Only assistant messages have them."""
        if isinstance(self.root, AssistantMessage):
            return self.root.tool_calls
        return None


__all__ = [
    "AssistantMessage",
    "FunctionCall",
    "Message",
    "MessageVariant",
    "SystemMessage",
    "ToolCallParam",
    "ToolMessage",
    "UserMessage",
]
