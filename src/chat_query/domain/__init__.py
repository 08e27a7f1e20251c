"""Domain layer for chat-query.

Pure enumerations and exceptions with no dependency on the wire models.
"""

from chat_query.domain.exceptions import (
    ChatQueryError,
    ConstructionRejectedError,
    DecodeMismatchError,
)
from chat_query.domain.value_objects import (
    ImageDetail,
    JSONType,
    Model,
    ResponseFormat,
    Role,
)

__all__ = [
    "ChatQueryError",
    "ConstructionRejectedError",
    "DecodeMismatchError",
    "ImageDetail",
    "JSONType",
    "Model",
    "ResponseFormat",
    "Role",
]
