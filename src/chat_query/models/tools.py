"""Tool definitions and tool choice.

Tool Definition Format:
    {
        "type": "function",
        "function": {
            "name": "get_weather",
            "description": "...",
            "parameters": {
                "type": "object",
                "properties": {"city": {"type": "string"}},
                "required": ["city"]
            }
        }
    }

Parameter schemas use a constrained JSON-Schema subset. A schema is a tree:
FunctionParameters at the root, Property under ``properties``, Items under an
array property's ``items``, and Property again under ``Items.properties``.
Property and Items are kept as separate types because their keyword sets
differ. Nesting depth is not limited: nodes are decoded leaves-first and
encoded parents-first from explicit work lists, so no call nests per level.

Absent keywords are omitted from the wire form, never written as null.
Keywords spelled in camelCase on the wire (``multipleOf``, ``minItems``,
``maxItems``, ``uniqueItems``) are snake_case attributes with aliases; both
spellings are accepted on input.

Note:
    The API requires function names to match ``^[a-zA-Z0-9_-]{1,64}$``. That
    rule is not enforced by these models; see
    chat_query.validators.is_valid_function_name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from chat_query.domain.value_objects import JSONType
from chat_query.models.base import WIRE_MODEL_CONFIG, WireMixin

# ============================================================================
# Parameter Schema
# ============================================================================


def _build_tree(raw: Any, kind: type[SchemaNode]) -> Any:
    """Validate a raw schema subtree, children before their parents.

    Each node is validated on its own once its children are already models,
    so pydantic never recurses through the tree. Values that are not mappings
    (built models, or malformed input) are returned for pydantic to handle.
    """
    if not isinstance(raw, Mapping):
        return raw

    # (node type, raw fields, container to store the built node in, key)
    visited: list[tuple[type[SchemaNode], dict[str, Any], dict[str, Any] | None, str]] = []
    pending = [(kind, dict(raw), None, "")]
    while pending:
        entry = pending.pop()
        visited.append(entry)
        node_kind, fields, _, _ = entry
        members = fields.get("properties")
        if isinstance(members, Mapping):
            members = fields["properties"] = dict(members)
            for member, child in members.items():
                if isinstance(child, Mapping):
                    pending.append((Property, dict(child), members, member))
        items = fields.get("items")
        if "items" in node_kind.model_fields and isinstance(items, Mapping):
            pending.append((Items, dict(items), fields, "items"))

    node = None
    for node_kind, fields, container, key in reversed(visited):
        node = node_kind.model_validate(fields)
        if container is not None:
            container[key] = node
    return node


class SchemaNode(WireMixin, BaseModel):
    """Encode/decode shared by FunctionParameters, Property and Items."""

    model_config = WIRE_MODEL_CONFIG

    @field_validator("properties", mode="before", check_fields=False)
    @classmethod
    def _build_properties(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {member: _build_tree(child, Property) for member, child in value.items()}

    def to_wire(self) -> dict[str, Any]:
        """Serialize the whole subtree, parents before their children."""
        root: dict[str, Any] = {}
        pending: list[tuple[SchemaNode, dict[str, Any]]] = [(self, root)]
        while pending:
            node, wire = pending.pop()
            nested: dict[str, Any] = {}
            properties = getattr(node, "properties", None)
            if properties is not None:
                members = nested["properties"] = {}
                for member, child in properties.items():
                    members[member] = {}
                    pending.append((child, members[member]))
            if isinstance(node, Property) and node.items is not None:
                nested["items"] = {}
                pending.append((node.items, nested["items"]))
            # Child dicts are filled in place when their turn comes.
            wire.update(node._to_wire_with(nested))
        return root


class Items(SchemaNode):
    """Element schema of an array property.

    Attributes:
        type: JSON type of each element.
        properties: Member schemas when elements are objects.
        pattern: Regular expression string elements must match.
        const: Single allowed value.
        enum: Allowed values.
        multiple_of: Numeric elements must be a multiple of this (wire:
            ``multipleOf``).
        minimum: Inclusive lower bound for numeric elements.
        maximum: Inclusive upper bound for numeric elements.
        min_items: Minimum length when elements are arrays (wire:
            ``minItems``).
        max_items: Maximum length when elements are arrays (wire:
            ``maxItems``).
        unique_items: Whether nested array elements must be unique (wire:
            ``uniqueItems``).
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "items"

    type: JSONType
    properties: dict[str, Property] | None = None
    pattern: str | None = None
    const: str | None = None
    enum: list[str] | None = None
    multiple_of: int | None = Field(None, alias="multipleOf")
    minimum: float | None = None
    maximum: float | None = None
    min_items: int | None = Field(None, alias="minItems")
    max_items: int | None = Field(None, alias="maxItems")
    unique_items: bool | None = Field(None, alias="uniqueItems")


class Property(SchemaNode):
    """Schema of one named parameter.

    Attributes:
        type: JSON type of the parameter.
        description: What the parameter means, for the model's benefit.
        format: Format hint (e.g. "date-time", "email").
        items: Element schema when type is "array".
        required: Names of required members when type is "object".
        pattern: Regular expression the string value must match.
        const: Single allowed value.
        enum: Allowed values.
        multiple_of: Value must be a multiple of this (wire: ``multipleOf``).
        minimum: Inclusive lower bound.
        maximum: Inclusive upper bound.
        min_items: Minimum array length (wire: ``minItems``).
        max_items: Maximum array length (wire: ``maxItems``).
        unique_items: Whether array elements must be unique (wire:
            ``uniqueItems``).
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "property"

    type: JSONType
    description: str | None = None
    format: str | None = None
    items: Items | None = None
    required: list[str] | None = None
    pattern: str | None = None
    const: str | None = None
    enum: list[str] | None = None
    multiple_of: int | None = Field(None, alias="multipleOf")
    minimum: float | None = None
    maximum: float | None = None
    min_items: int | None = Field(None, alias="minItems")
    max_items: int | None = Field(None, alias="maxItems")
    unique_items: bool | None = Field(None, alias="uniqueItems")

    @field_validator("items", mode="before")
    @classmethod
    def _build_items(cls, value: Any) -> Any:
        return _build_tree(value, Items)


class FunctionParameters(SchemaNode):
    """Root of a function's parameter schema.

    Attributes:
        type: JSON type of the argument object, normally "object".
        properties: Parameter schemas by name.
        required: Names of required parameters.
        pattern: Regular expression for string roots.
        const: Single allowed value.
        enum: Allowed values.
        multiple_of: Numeric roots must be a multiple of this (wire:
            ``multipleOf``).
        minimum: Inclusive integer lower bound.
        maximum: Inclusive integer upper bound.
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "function_parameters"

    type: JSONType
    properties: dict[str, Property] | None = None
    required: list[str] | None = None
    pattern: str | None = None
    const: str | None = None
    enum: list[str] | None = None
    multiple_of: int | None = Field(None, alias="multipleOf")
    minimum: int | None = None
    maximum: int | None = None


Items.model_rebuild()
Property.model_rebuild()
FunctionParameters.model_rebuild()


# ============================================================================
# Tool Definitions
# ============================================================================


class FunctionDefinition(WireMixin, BaseModel):
    """Function the model may call.

    Attributes:
        name: Function name.
        description: What the function does; helps the model decide when to
            call it.
        parameters: Argument schema. None for functions without arguments.
    """

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "function_definition"

    name: str = Field(..., description="Function name")
    description: str | None = Field(None, description="Function description")
    parameters: FunctionParameters | None = Field(None, description="Argument schema")

    def to_wire(self) -> dict[str, Any]:
        parameters = None if self.parameters is None else self.parameters.to_wire()
        return self._to_wire_with({"parameters": parameters})


class ToolParam(WireMixin, BaseModel):
    """Tool offered to the model. Only function tools exist."""

    model_config = WIRE_MODEL_CONFIG
    wire_name: ClassVar[str] = "tool"

    function: FunctionDefinition = Field(..., description="Function definition")
    type: Literal["function"] = Field(default="function", description="Tool type")

    def to_wire(self) -> dict[str, Any]:
        return self._to_wire_with({"function": self.function.to_wire()})


# ============================================================================
# Tool Choice
# ============================================================================


class FunctionName(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    name: str


class NamedToolChoice(BaseModel):
    """Object form of a tool choice forcing one function."""

    model_config = WIRE_MODEL_CONFIG

    type: Literal["function"] = "function"
    function: FunctionName


class ToolChoice(WireMixin, RootModel):
    """Which tool, if any, the model must call.

    Wire Shapes:
        - ``ToolChoice.none()``: ``"none"``
        - ``ToolChoice.auto()``: ``"auto"``
        - ``ToolChoice.named("f")``:
          ``{"type": "function", "function": {"name": "f"}}``

    Decoding tries the bare keywords before the object form.
    """

    model_config = ConfigDict(frozen=True)
    wire_name: ClassVar[str] = "tool_choice"

    root: Literal["none", "auto"] | NamedToolChoice = Field(..., union_mode="left_to_right")

    @classmethod
    def none(cls) -> ToolChoice:
        """Model must not call a tool."""
        return cls("none")

    @classmethod
    def auto(cls) -> ToolChoice:
        """Model decides whether to call a tool."""
        return cls("auto")

    @classmethod
    def named(cls, function_name: str) -> ToolChoice:
        """Model must call ``function_name``."""
        return cls(NamedToolChoice(function=FunctionName(name=function_name)))

    @property
    def function_name(self) -> str | None:
        """Forced function name, or None for "none" and "auto"."""
        if isinstance(self.root, NamedToolChoice):
            return self.root.function.name
        return None

    @property
    def mode(self) -> str:
        """Either "none", "auto" or "function"."""
        return "function" if isinstance(self.root, NamedToolChoice) else self.root


def tool(
    name: str,
    description: str | None = None,
    parameters: FunctionParameters | dict[str, Any] | None = None,
) -> ToolParam:
    """Shorthand for ``ToolParam(function=FunctionDefinition(...))``."""
    return ToolParam(
        function=FunctionDefinition(name=name, description=description, parameters=parameters)
    )


__all__ = [
    "FunctionDefinition",
    "FunctionName",
    "FunctionParameters",
    "Items",
    "NamedToolChoice",
    "Property",
    "SchemaNode",
    "ToolChoice",
    "ToolParam",
    "tool",
]
