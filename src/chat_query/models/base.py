"""Shared encode/decode surface for wire models.

Every wire model mixes in WireMixin, which gives it the two pure functions the
transport layer needs: ``to_wire()`` returning a JSON value tree and
``from_wire()`` parsing one. Pydantic does the structural work; this module
only fixes the dump options and turns validation failures into
DecodeMismatchError.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Self

from pydantic import ConfigDict, ValidationError, ValidationInfo

from chat_query.core.config import settings
from chat_query.domain.exceptions import DecodeMismatchError
from chat_query.telemetry.structured_logging import log_codec_event

logger = logging.getLogger(__name__)

WIRE_MODEL_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    extra="ignore",
)
"""Model configuration shared by every immutable wire model."""

DECODING_CONTEXT_KEY = "from_wire"
"""Validation context key set while ``from_wire()`` is decoding."""


def is_decoding(info: ValidationInfo) -> bool:
    """Whether a validator is running under ``from_wire()``."""
    return bool(info.context and info.context.get(DECODING_CONTEXT_KEY))


def decode_mismatch(union: str, exc: ValidationError, data: Any) -> DecodeMismatchError:
    """Build a DecodeMismatchError from a pydantic ValidationError and log it.

    Args:
        union: Name of the union or model that failed to decode.
        exc: Validation error raised by pydantic.
        data: The raw value that was being decoded.

    Returns:
        DecodeMismatchError carrying the union name and pydantic's error list.
    """
    errors = exc.errors(include_url=False, include_input=False)
    if settings.logging.payloads:
        logger.debug("Failed to decode %s from %r: %s", union, data, exc)
    else:
        logger.debug("Failed to decode %s (%d errors)", union, len(errors))
    if settings.logging.decode_failures:
        log_codec_event(
            {
                "event": "decode_mismatch",
                "union": union,
                "error_count": len(errors),
                "locations": [".".join(str(p) for p in err["loc"]) for err in errors],
            }
        )
    return DecodeMismatchError(
        union,
        f"value matches no variant ({len(errors)} validation errors)",
        errors=errors,
    )


class WireMixin:
    """Adds to_wire/from_wire to a pydantic model.

    Subclasses set ``wire_name`` to the name reported in DecodeMismatchError.
    """

    wire_name: ClassVar[str] = "value"

    def to_wire(self) -> Any:
        """Serialize to a JSON value tree.

        Absent optional fields are omitted rather than written as null, and
        attributes are written under their wire names.
        """
        return self.model_dump(  # type: ignore[attr-defined]
            mode="json", by_alias=True, exclude_none=True
        )

    def _to_wire_with(self, encoded: dict[str, Any]) -> dict[str, Any]:
        """Serialize like to_wire(), taking some field values already encoded.

        Fields named in ``encoded`` are not dumped by pydantic. Their encoded
        value is written at the field's position, or omitted when None.
        """
        dumped = self.model_dump(  # type: ignore[attr-defined]
            mode="json", by_alias=True, exclude_none=True, exclude=set(encoded)
        )
        wire: dict[str, Any] = {}
        for name, field in type(self).model_fields.items():  # type: ignore[attr-defined]
            key = field.alias or name
            if name in encoded:
                if encoded[name] is not None:
                    wire[key] = encoded[name]
            elif key in dumped:
                wire[key] = dumped[key]
        return wire

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        """Parse a JSON value tree.

        Raises:
            DecodeMismatchError: If ``data`` does not match this model.
        """
        try:
            return cls.model_validate(  # type: ignore[attr-defined]
                data, context={DECODING_CONTEXT_KEY: True}
            )
        except ValidationError as exc:
            raise decode_mismatch(cls.wire_name, exc, data) from exc


__all__ = [
    "DECODING_CONTEXT_KEY",
    "WIRE_MODEL_CONFIG",
    "WireMixin",
    "decode_mismatch",
    "is_decoding",
]
