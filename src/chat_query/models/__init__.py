"""Wire models for chat completion requests."""

from chat_query.models.base import WireMixin
from chat_query.models.content import (
    Content,
    ImagePart,
    ImageURL,
    TextPart,
    VisionContent,
    content_part,
    parse_content_part,
)
from chat_query.models.messages import (
    AssistantMessage,
    FunctionCall,
    Message,
    MessageVariant,
    SystemMessage,
    ToolCallParam,
    ToolMessage,
    UserMessage,
)
from chat_query.models.query import ChatQuery, Stop
from chat_query.models.tools import (
    FunctionDefinition,
    FunctionParameters,
    Items,
    Property,
    ToolChoice,
    ToolParam,
    tool,
)

__all__ = [
    "AssistantMessage",
    "ChatQuery",
    "Content",
    "FunctionCall",
    "FunctionDefinition",
    "FunctionParameters",
    "ImagePart",
    "ImageURL",
    "Items",
    "Message",
    "MessageVariant",
    "Property",
    "Stop",
    "SystemMessage",
    "TextPart",
    "ToolCallParam",
    "ToolChoice",
    "ToolMessage",
    "ToolParam",
    "UserMessage",
    "VisionContent",
    "WireMixin",
    "content_part",
    "parse_content_part",
    "tool",
]
