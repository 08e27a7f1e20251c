"""User message content: plain text or an ordered list of content parts.

Content Formats:
    - String: ``"What is in this image?"``
    - Parts: ``[{"type": "text", "text": "..."},
      {"type": "image_url", "image_url": {"url": "...", "detail": "high"}}]``

A content part is discriminated by its literal ``type`` value. The content
itself carries no tag on the wire, so decoding tries the string shape first
and falls back to the part list.
"""

from __future__ import annotations

import base64
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel, TypeAdapter, ValidationError

from chat_query.domain.value_objects import ImageDetail
from chat_query.models.base import WIRE_MODEL_CONFIG, WireMixin, decode_mismatch

JPEG_DATA_URL_PREFIX = "data:image/jpeg;base64,"
"""Prefix of the data URL produced for raw image bytes."""


class TextPart(WireMixin, BaseModel):
    """Text fragment of a multi-part user message.

    Attributes:
        type: Always "text".
        text: Text content. May be empty.
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "content_part"

    type: Literal["text"] = Field(default="text", description="Content type: 'text'")
    text: str = Field(..., description="Text content")


class ImageURL(WireMixin, BaseModel):
    """Image reference inside an image content part.

    Attributes:
        url: HTTP(S) URL or ``data:`` URL of the image.
        detail: Image fidelity. Defaults to "high" when omitted, both at
            construction and when decoding.
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "image_url"

    url: str = Field(..., description="Image URL or data URL")
    detail: ImageDetail = Field(default=ImageDetail.HIGH, description="Image detail level")

    @classmethod
    def from_bytes(cls, data: bytes, detail: ImageDetail = ImageDetail.HIGH) -> ImageURL:
        """Build a JPEG data URL from raw image bytes.

        The bytes are base64-encoded as-is; no format sniffing or
        re-encoding happens, so callers must pass JPEG data.
        """
        encoded = base64.b64encode(data).decode("ascii")
        return cls(url=f"{JPEG_DATA_URL_PREFIX}{encoded}", detail=detail)


class ImagePart(WireMixin, BaseModel):
    """Image fragment of a multi-part user message.

    Attributes:
        type: Always "image_url".
        image_url: Image reference (URL and detail level).
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "content_part"

    type: Literal["image_url"] = Field(default="image_url", description="Content type: 'image_url'")
    image_url: ImageURL = Field(..., description="Image URL object")

    @classmethod
    def from_image(
        cls,
        source: bytes | bytearray | memoryview | str,
        detail: ImageDetail = ImageDetail.HIGH,
    ) -> ImagePart:
        """Build an image part from raw bytes or a URL string.

        Args:
            source: Raw JPEG bytes, encoded into a ``data:image/jpeg;base64,``
                URL, or a URL string used verbatim.
            detail: Image fidelity. Default: "high".

        Raises:
            TypeError: If source is neither bytes-like nor a string.
        """
        match source:
            case bytes() | bytearray() | memoryview():
                return cls(image_url=ImageURL.from_bytes(bytes(source), detail))
            case str():
                return cls(image_url=ImageURL(url=source, detail=detail))
            case _:
                raise TypeError(
                    f"Image source must be bytes or a URL string, got {type(source).__name__}"
                )


VisionContent = Annotated[TextPart | ImagePart, Field(discriminator="type")]
"""One content part, selected by its ``type`` value."""

_vision_content_adapter: TypeAdapter[TextPart | ImagePart] = TypeAdapter(VisionContent)


def content_part(
    text: str | None = None,
    image_url: str | None = None,
    detail: ImageDetail = ImageDetail.HIGH,
) -> TextPart | ImagePart:
    """Build a content part from whichever argument is given.

    ``text`` wins over ``image_url``. With neither, an empty text part is
    returned.
    """
    if text is not None:
        return TextPart(text=text)
    if image_url is not None:
        return ImagePart(image_url=ImageURL(url=image_url, detail=detail))
    return TextPart(text="")


def parse_content_part(data: Any) -> TextPart | ImagePart:
    """Parse one content part from a JSON value tree.

    Raises:
        DecodeMismatchError: If the value is not a text or image part.
    """
    try:
        return _vision_content_adapter.validate_python(data)
    except ValidationError as exc:
        raise decode_mismatch("content_part", exc, data) from exc


class Content(WireMixin, RootModel):
    """Content of a user message: a string or a non-empty tuple of parts.

    Also used by Message.content to present the plain-text content of the
    other roles in the same shape.
    """

    model_config = ConfigDict(frozen=True)
    wire_name: ClassVar[str] = "content"

    root: str | Annotated[tuple[VisionContent, ...], Field(min_length=1)] = Field(
        ..., union_mode="left_to_right"
    )

    @property
    def text(self) -> str | None:
        """The string variant, or None for part content."""
        return self.root if isinstance(self.root, str) else None

    @property
    def parts(self) -> tuple[TextPart | ImagePart, ...] | None:
        """The part variant, or None for string content."""
        return None if isinstance(self.root, str) else self.root


__all__ = [
    "Content",
    "ImagePart",
    "ImageURL",
    "JPEG_DATA_URL_PREFIX",
    "TextPart",
    "VisionContent",
    "content_part",
    "parse_content_part",
]
