"""JSON text encoding and decoding.

Thin layer over ``to_wire()``/``from_wire()`` for callers that deal in JSON
text rather than value trees. Layout of the produced text follows
chat_query.core.config.CodecConfig.
"""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from chat_query.core.config import settings
from chat_query.domain.exceptions import DecodeMismatchError
from chat_query.models.base import WireMixin
from chat_query.models.query import ChatQuery

logger = logging.getLogger(__name__)

WireModelT = TypeVar("WireModelT", bound=WireMixin)

_COMPACT_SEPARATORS = (",", ":")


def dumps(value: WireMixin, *, indent: int | None = None) -> str:
    """Serialize a wire model to JSON text.

    Args:
        value: Any wire model (ChatQuery, Message, ToolChoice, ...).
        indent: Indentation override. None falls back to
            ``settings.codec.json_indent``; compact output when both are None.

    Returns:
        JSON text.
    """
    if indent is None:
        indent = settings.codec.json_indent
    return json.dumps(
        value.to_wire(),
        indent=indent,
        separators=_COMPACT_SEPARATORS if indent is None else None,
        ensure_ascii=settings.codec.ensure_ascii,
    )


def loads(
    text: str | bytes,
    model: type[WireModelT] = ChatQuery,  # type: ignore[assignment]
) -> WireModelT:
    """Parse JSON text into a wire model.

    Args:
        text: JSON text.
        model: Wire model class to decode into. Default: ChatQuery.

    Returns:
        Decoded model instance.

    Raises:
        DecodeMismatchError: If the text is not valid JSON or the value does
            not match ``model``.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.debug("Invalid JSON text for %s: %s", model.wire_name, exc)
        raise DecodeMismatchError(model.wire_name, f"invalid JSON text: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        logger.debug("Undecodable JSON bytes for %s: %s", model.wire_name, exc)
        raise DecodeMismatchError(model.wire_name, f"invalid JSON text: {exc.reason}") from exc
    return model.from_wire(data)


__all__ = ["dumps", "loads"]
