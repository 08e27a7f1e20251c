"""Chat completion request envelope.

ChatQuery aggregates the conversation, model id, sampling parameters, tools
and streaming flag into one document. Attribute names are the wire key names
(``frequency_penalty``, ``logit_bias``, ``tool_choice``, ...), so the mapping
between the two is fixed by the field declarations below.

Key Behaviors:
    - Message order is preserved exactly, in both directions.
    - Unset optional parameters are omitted from the wire form.
    - ``stream`` is always written and defaults to False.
    - ``response_format`` is written as ``{"type": "<value>"}``. Constructors
      also take the bare value ("json_object"); decoding does not.
    - ``stop`` is written as a string or a list of strings, as given.
    - Documented numeric ranges (temperature in [0, 2], penalties in [-2, 2],
      logit bias in [-100, 100], ...) are not checked. Use
      chat_query.validators for caller-side checks.

Lifecycle:
    Every field is frozen except ``stream``, which may be reassigned to send
    a streaming variant of an already built request. Assignments are
    validated.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    RootModel,
    ValidationInfo,
)

from chat_query.domain.value_objects import ResponseFormat
from chat_query.models.base import WireMixin, is_decoding
from chat_query.models.messages import Message
from chat_query.models.tools import ToolChoice, ToolParam


class Stop(WireMixin, RootModel):
    """Stop sequence(s): a single string or a list of strings."""

    model_config = ConfigDict(frozen=True)
    wire_name: ClassVar[str] = "stop"

    root: str | tuple[str, ...] = Field(..., union_mode="left_to_right")

    @property
    def sequences(self) -> tuple[str, ...]:
        """All stop sequences, whichever shape was used."""
        return (self.root,) if isinstance(self.root, str) else self.root


def _unwrap_response_format(value: Any, info: ValidationInfo) -> Any:
    # Callers may pass the bare value; the wire only carries the object form.
    match value:
        case ResponseFormat():
            return value
        case {"type": kind}:
            return kind
        case str() if not is_decoding(info):
            return value
        case _:
            raise ValueError('response_format must be an object like {"type": "json_object"}')


def _wrap_response_format(value: ResponseFormat) -> dict[str, str]:
    return {"type": value.value}


ResponseFormatField = Annotated[
    ResponseFormat,
    BeforeValidator(_unwrap_response_format),
    PlainSerializer(_wrap_response_format, return_type=dict[str, str]),
]
"""ResponseFormat carried as ``{"type": "<value>"}`` on the wire."""


class ChatQuery(WireMixin, BaseModel):
    """Chat completion request.

    Attributes:
        messages: Conversation so far, oldest first.
        model: Model identifier (see chat_query.domain.value_objects.Model).
        frequency_penalty: Penalty for frequent tokens. Documented range
            [-2.0, 2.0].
        logit_bias: Token ID (as a string) to bias. Documented range
            [-100, 100].
        logprobs: Return log probabilities of output tokens.
        max_tokens: Maximum tokens to generate.
        n: Number of choices to generate.
        presence_penalty: Penalty for tokens already present. Documented range
            [-2.0, 2.0].
        response_format: Requested output format.
        seed: Seed for best-effort deterministic sampling.
        stop: Stop sequence(s).
        temperature: Sampling temperature. Documented range [0.0, 2.0].
        tool_choice: Which tool the model must call, if any.
        tools: Tools the model may call.
        top_logprobs: Number of most likely tokens to return per position.
            Requires logprobs.
        top_p: Nucleus sampling mass. Documented range [0.0, 1.0].
        user: End-user identifier for abuse monitoring.
        stream: Request a streamed response. Default: False.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )
    wire_name: ClassVar[str] = "chat_query"

    messages: tuple[Message, ...] = Field(..., frozen=True, description="Conversation messages")
    model: str = Field(..., frozen=True, description="Model identifier")
    frequency_penalty: float | None = Field(None, frozen=True, description="Frequency penalty")
    logit_bias: dict[str, int] | None = Field(None, frozen=True, description="Token bias map")
    logprobs: bool | None = Field(None, frozen=True, description="Return log probabilities")
    max_tokens: int | None = Field(None, frozen=True, description="Maximum tokens to generate")
    n: int | None = Field(None, frozen=True, description="Number of choices")
    presence_penalty: float | None = Field(None, frozen=True, description="Presence penalty")
    response_format: ResponseFormatField | None = Field(
        None, frozen=True, description="Output format"
    )
    seed: int | None = Field(None, frozen=True, description="Sampling seed")
    stop: Stop | None = Field(None, frozen=True, description="Stop sequences")
    temperature: float | None = Field(None, frozen=True, description="Sampling temperature")
    tool_choice: ToolChoice | None = Field(None, frozen=True, description="Tool choice")
    tools: tuple[ToolParam, ...] | None = Field(None, frozen=True, description="Available tools")
    top_logprobs: int | None = Field(None, frozen=True, description="Top log probabilities")
    top_p: float | None = Field(None, frozen=True, description="Nucleus sampling mass")
    user: str | None = Field(None, frozen=True, description="End-user identifier")
    stream: bool = Field(False, description="Whether to stream the response")

    def to_wire(self) -> dict[str, Any]:
        """Serialize to a JSON value tree.

        Tools are encoded by ToolParam.to_wire(), which handles parameter
        schemas of any depth.
        """
        tools = None if self.tools is None else [entry.to_wire() for entry in self.tools]
        return self._to_wire_with({"tools": tools})

    def make_streamable(self) -> ChatQuery:
        """Return a copy of this request with ``stream=True``."""
        return self.model_copy(update={"stream": True})


__all__ = ["ChatQuery", "ResponseFormatField", "Stop"]
