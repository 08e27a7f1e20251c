"""
Behavioral tests for the ChatQuery request envelope.

Tests cover wire key names, omission of unset parameters, the special wire
shapes of response_format and stop, order preservation, and the mutable
streaming flag.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chat_query import (
    ChatQuery,
    DecodeMismatchError,
    ImagePart,
    Message,
    Model,
    ResponseFormat,
    Role,
    Stop,
    TextPart,
    ToolChoice,
)


@pytest.fixture
def full_query(conversation, weather_tool):
    """Request with every optional parameter set."""
    return ChatQuery(
        messages=conversation,
        model=Model.GPT4_O,
        frequency_penalty=0.5,
        logit_bias={"50256": -100, "1234": 5},
        logprobs=True,
        max_tokens=256,
        n=2,
        presence_penalty=-0.5,
        response_format=ResponseFormat.JSON_OBJECT,
        seed=7,
        stop=["\n\n", "END"],
        temperature=0.2,
        tool_choice=ToolChoice.named("get_weather"),
        tools=[weather_tool],
        top_logprobs=3,
        top_p=0.9,
        user="user-42",
    )


class TestChatQueryEncoding:
    """Tests for the request wire shape."""

    def test_minimal_request(self):
        """Test that only messages, model and stream are written by default."""
        query = ChatQuery(messages=[Message.user("hi")], model="gpt-4o")

        assert query.to_wire() == {
            "messages": [{"role": "user", "content": "hi"}],
            "model": "gpt-4o",
            "stream": False,
        }

    def test_all_keys_use_snake_case_wire_names(self, full_query):
        """Test the external key names of every parameter."""
        assert set(full_query.to_wire()) == {
            "messages",
            "model",
            "frequency_penalty",
            "logit_bias",
            "logprobs",
            "max_tokens",
            "n",
            "presence_penalty",
            "response_format",
            "seed",
            "stop",
            "temperature",
            "tool_choice",
            "tools",
            "top_logprobs",
            "top_p",
            "user",
            "stream",
        }

    def test_response_format_is_wrapped_in_object(self, full_query):
        """Test that response_format is {"type": ...}, not a bare string."""
        assert full_query.to_wire()["response_format"] == {"type": "json_object"}

    def test_keys_follow_declaration_order(self, full_query):
        """Test that tools are written in place, not appended last."""
        keys = list(full_query.to_wire())

        assert keys.index("tool_choice") < keys.index("tools") < keys.index("top_logprobs")
        assert keys[-1] == "stream"

    def test_response_format_accepts_bare_value_at_construction(self):
        """Test that callers may pass the plain format name."""
        query = ChatQuery(messages=[], model="m", response_format="json_object")

        assert query.response_format is ResponseFormat.JSON_OBJECT
        assert query.to_wire()["response_format"] == {"type": "json_object"}

    def test_response_format_rejects_unknown_value(self):
        """Test that an unknown format name is still a construction error."""
        with pytest.raises(ValidationError):
            ChatQuery(messages=[], model="m", response_format="xml")

    def test_stop_keeps_its_shape(self):
        """Test that a single stop string is not turned into a list."""
        single = ChatQuery(messages=[], model="m", stop="\n")
        many = ChatQuery(messages=[], model="m", stop=["a", "b"])

        assert single.to_wire()["stop"] == "\n"
        assert many.to_wire()["stop"] == ["a", "b"]
        assert single.stop.sequences == ("\n",)
        assert many.stop.sequences == ("a", "b")

    def test_tool_choice_keywords_are_bare_strings(self):
        """Test tool_choice "none"/"auto" inside the request."""
        query = ChatQuery(messages=[], model="m", tool_choice=ToolChoice.auto())
        assert query.to_wire()["tool_choice"] == "auto"

    def test_logit_bias_and_model_enum(self, full_query):
        """Test logit bias mapping and the model id string."""
        wire = full_query.to_wire()

        assert wire["logit_bias"] == {"50256": -100, "1234": 5}
        assert wire["model"] == "gpt-4o"

    def test_out_of_range_values_are_not_validated(self):
        """Test that documented ranges are left to the caller."""
        query = ChatQuery(
            messages=[],
            model="m",
            temperature=9.5,
            frequency_penalty=-7.0,
            logit_bias={"1": 500},
        )
        assert query.to_wire()["temperature"] == 9.5


class TestChatQueryDecoding:
    """Tests for request decoding."""

    def test_round_trip_preserves_order_and_stream(self):
        """Test system + two-part user message with stream=True."""
        query = ChatQuery(
            messages=[
                Message.system("Describe images."),
                Message.vision(
                    Role.USER,
                    [TextPart(text="What is this?"), ImagePart.from_image(b"\xff\xd8")],
                ),
            ],
            model=Model.GPT4_VISION_PREVIEW,
            stream=True,
        )

        decoded = ChatQuery.from_wire(query.to_wire())

        assert decoded == query
        assert [m.role for m in decoded.messages] == [Role.SYSTEM, Role.USER]
        parts = decoded.messages[1].content.parts
        assert [type(part) for part in parts] == [TextPart, ImagePart]
        assert decoded.stream is True

    def test_full_round_trip(self, full_query):
        """Test that every parameter survives encode and decode."""
        assert ChatQuery.from_wire(full_query.to_wire()) == full_query

    def test_stream_defaults_to_false_when_missing(self):
        """Test decoding a payload without stream."""
        decoded = ChatQuery.from_wire({"messages": [], "model": "m"})
        assert decoded.stream is False

    def test_response_format_requires_object_shape(self):
        """Test that a bare response_format string is rejected."""
        with pytest.raises(DecodeMismatchError):
            ChatQuery.from_wire({"messages": [], "model": "m", "response_format": "text"})

    def test_response_format_object_decodes(self):
        """Test response_format decoding."""
        decoded = ChatQuery.from_wire(
            {"messages": [], "model": "m", "response_format": {"type": "text"}}
        )
        assert decoded.response_format is ResponseFormat.TEXT

    def test_bad_message_fails_whole_request(self):
        """Test that one malformed message fails decoding with its location."""
        payload = {
            "messages": [
                {"role": "system", "content": "ok"},
                {"role": "user", "content": 12},
            ],
            "model": "m",
        }

        with pytest.raises(DecodeMismatchError) as exc_info:
            ChatQuery.from_wire(payload)

        assert exc_info.value.union == "chat_query"
        assert any(err["loc"][:2] == ("messages", 1) for err in exc_info.value.errors)

    @pytest.mark.parametrize(
        "payload",
        [
            {"model": "m"},
            {"messages": []},
            {"messages": [], "model": "m", "stop": 5},
            {"messages": [], "model": "m", "tool_choice": "required"},
            {"messages": [], "model": "m", "logit_bias": {"1": "high"}},
        ],
    )
    def test_malformed_requests_raise_decode_mismatch(self, payload):
        """Test rejection of malformed top-level fields."""
        with pytest.raises(DecodeMismatchError):
            ChatQuery.from_wire(payload)


class TestChatQueryLifecycle:
    """Tests for immutability and the streaming flag."""

    def test_stream_can_be_flipped_after_construction(self):
        """Test that stream is the one reassignable field."""
        query = ChatQuery(messages=[Message.user("hi")], model="m")
        query.stream = True

        assert query.to_wire()["stream"] is True

    def test_stream_assignment_is_validated(self):
        """Test that stream only accepts booleans."""
        query = ChatQuery(messages=[], model="m")
        with pytest.raises(ValidationError):
            query.stream = "maybe"  # type: ignore[assignment]

    @pytest.mark.parametrize(
        ("field", "value"),
        [("model", "other"), ("temperature", 1.0), ("messages", ())],
    )
    def test_other_fields_are_frozen(self, field, value):
        """Test that every other field rejects assignment."""
        query = ChatQuery(messages=[], model="m")
        with pytest.raises(ValidationError):
            setattr(query, field, value)

    def test_make_streamable_returns_copy(self):
        """Test make_streamable() leaves the original untouched."""
        query = ChatQuery(messages=[Message.user("hi")], model="m")
        streaming = query.make_streamable()

        assert streaming.stream is True
        assert query.stream is False
        assert streaming.messages == query.messages

    def test_messages_are_stored_as_tuple(self):
        """Test that the conversation cannot be mutated in place."""
        query = ChatQuery(messages=[Message.user("a"), Message.user("b")], model="m")
        assert isinstance(query.messages, tuple)


class TestStop:
    """Tests for the stop union on its own."""

    def test_decodes_string_before_list(self):
        """Test shape probing order."""
        assert Stop.from_wire("x").root == "x"
        assert Stop.from_wire(["x", "y"]).root == ("x", "y")

    @pytest.mark.parametrize("payload", [1, [1, 2], {"stop": "x"}])
    def test_rejects_other_shapes(self, payload):
        """Test that non-string shapes are rejected."""
        with pytest.raises(DecodeMismatchError) as exc_info:
            Stop.from_wire(payload)
        assert exc_info.value.union == "stop"
