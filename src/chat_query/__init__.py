"""chat-query - chat completion request models with wire-exact JSON encoding."""

from chat_query.codec import dumps, loads
from chat_query.domain import (
    ChatQueryError,
    ConstructionRejectedError,
    DecodeMismatchError,
    ImageDetail,
    JSONType,
    Model,
    ResponseFormat,
    Role,
)
from chat_query.models import (
    AssistantMessage,
    ChatQuery,
    Content,
    FunctionCall,
    FunctionDefinition,
    FunctionParameters,
    ImagePart,
    ImageURL,
    Items,
    Message,
    Property,
    Stop,
    SystemMessage,
    TextPart,
    ToolCallParam,
    ToolChoice,
    ToolMessage,
    ToolParam,
    UserMessage,
    content_part,
    parse_content_part,
    tool,
)

__all__ = [
    "AssistantMessage",
    "ChatQuery",
    "ChatQueryError",
    "ConstructionRejectedError",
    "Content",
    "DecodeMismatchError",
    "FunctionCall",
    "FunctionDefinition",
    "FunctionParameters",
    "ImageDetail",
    "ImagePart",
    "ImageURL",
    "Items",
    "JSONType",
    "Message",
    "Model",
    "Property",
    "ResponseFormat",
    "Role",
    "Stop",
    "SystemMessage",
    "TextPart",
    "ToolCallParam",
    "ToolChoice",
    "ToolMessage",
    "ToolParam",
    "UserMessage",
    "content_part",
    "dumps",
    "loads",
    "parse_content_part",
    "tool",
]
