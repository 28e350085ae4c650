"""Tool definitions, their input schemas and the builders that configure them."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from mcpkit.protocol import PaginatedResult, _jsonable

_CONFLICT_MESSAGE = "provide either InputSchema or RawInputSchema, not both"


class ToolSchemaConflictError(ValueError):
    """Raised when a tool has both a structured and a raw input schema."""


@dataclass
class ToolInputSchema:
    """A JSON Schema object describing a tool's parameters."""

    type: str = ""
    properties: dict[str, Any] | None = None
    required: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.properties is not None:
            out["properties"] = _jsonable(self.properties)
        if self.required:
            out["required"] = list(self.required)
        return out


@dataclass
class ToolAnnotation:
    """Optional hints describing how a tool behaves."""

    title: str = ""
    read_only_hint: bool | None = None
    destructive_hint: bool | None = None
    idempotent_hint: bool | None = None
    open_world_hint: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.title:
            out["title"] = self.title
        for key, value in (
            ("readOnlyHint", self.read_only_hint),
            ("destructiveHint", self.destructive_hint),
            ("idempotentHint", self.idempotent_hint),
            ("openWorldHint", self.open_world_hint),
        ):
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> ToolAnnotation:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("tool annotations must be a JSON object")
        return cls(
            title=data.get("title", "") or "",
            read_only_hint=data.get("readOnlyHint"),
            destructive_hint=data.get("destructiveHint"),
            idempotent_hint=data.get("idempotentHint"),
            open_world_hint=data.get("openWorldHint"),
        )


def _load_raw(raw: Any) -> Any:
    if isinstance(raw, (str, bytes, bytearray)):
        return json.loads(raw)
    return _jsonable(raw)


@dataclass
class Tool:
    """The definition of a tool that a client can call.

    Either input_schema or raw_input_schema describes the parameters, never both.
    """

    name: str
    description: str = ""
    input_schema: ToolInputSchema = field(default_factory=ToolInputSchema)
    raw_input_schema: Any = None
    annotations: ToolAnnotation = field(default_factory=ToolAnnotation)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.description:
            out["description"] = self.description
        if self.raw_input_schema is not None:
            if self.input_schema.type:
                raise ToolSchemaConflictError(
                    f"tool {self.name} has both InputSchema and RawInputSchema set: "
                    f"{_CONFLICT_MESSAGE}"
                )
            out["inputSchema"] = _load_raw(self.raw_input_schema)
        else:
            out["inputSchema"] = self.input_schema.to_dict()
        out["annotations"] = self.annotations.to_dict()
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tool:
        if not isinstance(data, dict):
            raise ValueError("tool must be a JSON object")
        schema_data = data.get("inputSchema")
        if schema_data is None:
            schema = ToolInputSchema()
        elif isinstance(schema_data, dict):
            props = schema_data.get("properties")
            if props is not None and not isinstance(props, dict):
                raise ValueError("inputSchema.properties must be a JSON object")
            req = schema_data.get("required")
            if req is not None and not (
                isinstance(req, list) and all(isinstance(item, str) for item in req)
            ):
                raise ValueError("inputSchema.required must be a list of strings")
            schema = ToolInputSchema(
                type=schema_data.get("type", "") or "",
                properties=props,
                required=list(req) if req is not None else None,
            )
        else:
            raise ValueError("inputSchema must be a JSON object")
        return cls(
            name=data.get("name", "") or "",
            description=data.get("description", "") or "",
            input_schema=schema,
            annotations=ToolAnnotation._from_dict(data.get("annotations")),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Tool:
        return cls.from_dict(json.loads(text))


@dataclass
class ListToolsResult(PaginatedResult):
    """The server's answer to tools/list."""

    tools: list[Tool] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = PaginatedResult.to_dict(self)
        out["tools"] = [tool.to_dict() for tool in self.tools]
        return out


def new_list_tools_result(tools: Iterable[Tool], next_cursor: str) -> ListToolsResult:
    return ListToolsResult(tools=list(tools), next_cursor=next_cursor)


ToolOption = Callable[[Tool], None]
PropertyOption = Callable[[dict[str, Any]], None]


def new_tool(name: str, *options: ToolOption) -> Tool:
    """Create a tool with an object input schema and apply the options in order."""
    tool = Tool(
        name=name,
        input_schema=ToolInputSchema(type="object", properties={}),
        annotations=ToolAnnotation(
            read_only_hint=False,
            destructive_hint=True,
            idempotent_hint=False,
            open_world_hint=True,
        ),
    )
    for option in options:
        option(tool)
    return tool


def new_tool_with_raw_schema(name: str, description: str, schema: Any) -> Tool:
    """Create a tool whose input schema is given as raw JSON (text, bytes or a dict)."""
    return Tool(name=name, description=description, raw_input_schema=schema)


def with_description(description: str) -> ToolOption:
    def apply(tool: Tool) -> None:
        tool.description = description

    return apply


def with_tool_annotation(annotation: ToolAnnotation) -> ToolOption:
    def apply(tool: Tool) -> None:
        tool.annotations = annotation

    return apply


def with_title_annotation(title: str) -> ToolOption:
    def apply(tool: Tool) -> None:
        tool.annotations.title = title

    return apply


def with_read_only_hint_annotation(value: bool) -> ToolOption:
    def apply(tool: Tool) -> None:
        tool.annotations.read_only_hint = value

    return apply


def with_destructive_hint_annotation(value: bool) -> ToolOption:
    def apply(tool: Tool) -> None:
        tool.annotations.destructive_hint = value

    return apply


def with_idempotent_hint_annotation(value: bool) -> ToolOption:
    def apply(tool: Tool) -> None:
        tool.annotations.idempotent_hint = value

    return apply


def with_open_world_hint_annotation(value: bool) -> ToolOption:
    def apply(tool: Tool) -> None:
        tool.annotations.open_world_hint = value

    return apply


def _set(key: str, value: Any) -> PropertyOption:
    def apply(schema: dict[str, Any]) -> None:
        schema[key] = value

    return apply


def description(desc: str) -> PropertyOption:
    return _set("description", desc)


def required() -> PropertyOption:
    """Mark a property as required; it moves to the tool schema's required list."""
    return _set("required", True)


def title(title: str) -> PropertyOption:
    return _set("title", title)


def default_string(value: str) -> PropertyOption:
    return _set("default", value)


def enum(*values: str) -> PropertyOption:
    return _set("enum", list(values))


def max_length(value: int) -> PropertyOption:
    return _set("maxLength", value)


def min_length(value: int) -> PropertyOption:
    return _set("minLength", value)


def pattern(pattern: str) -> PropertyOption:
    return _set("pattern", pattern)


def default_number(value: float) -> PropertyOption:
    return _set("default", float(value))


def maximum(value: float) -> PropertyOption:
    return _set("maximum", float(value))


def minimum(value: float) -> PropertyOption:
    return _set("minimum", float(value))


def multiple_of(value: float) -> PropertyOption:
    return _set("multipleOf", float(value))


def default_bool(value: bool) -> PropertyOption:
    return _set("default", value)


def default_array(value: Iterable[Any]) -> PropertyOption:
    return _set("default", list(value))


def _with_property(name: str, base: dict[str, Any], options: tuple[PropertyOption, ...]) -> ToolOption:
    def apply(tool: Tool) -> None:
        schema = dict(base)
        for option in options:
            option(schema)
        if tool.input_schema.properties is None:
            raise ToolSchemaConflictError(
                f"tool {tool.name} has no structured input schema to add property {name!r} to"
            )
        if schema.get("required") is True:
            del schema["required"]
            if tool.input_schema.required is None:
                tool.input_schema.required = []
            tool.input_schema.required.append(name)
        tool.input_schema.properties[name] = schema

    return apply


def with_boolean(name: str, *options: PropertyOption) -> ToolOption:
    return _with_property(name, {"type": "boolean"}, options)


def with_number(name: str, *options: PropertyOption) -> ToolOption:
    return _with_property(name, {"type": "number"}, options)


def with_string(name: str, *options: PropertyOption) -> ToolOption:
    return _with_property(name, {"type": "string"}, options)


def with_object(name: str, *options: PropertyOption) -> ToolOption:
    def apply(tool: Tool) -> None:
        _with_property(name, {"type": "object", "properties": {}}, options)(tool)

    return apply


def with_array(name: str, *options: PropertyOption) -> ToolOption:
    return _with_property(name, {"type": "array"}, options)


def properties(props: dict[str, Any]) -> PropertyOption:
    return _set("properties", props)


def additional_properties(schema: Any) -> PropertyOption:
    return _set("additionalProperties", schema)


def min_properties(value: int) -> PropertyOption:
    return _set("minProperties", value)


def max_properties(value: int) -> PropertyOption:
    return _set("maxProperties", value)


def property_names(schema: dict[str, Any]) -> PropertyOption:
    return _set("propertyNames", schema)


def items(schema: Any) -> PropertyOption:
    return _set("items", schema)


def min_items(value: int) -> PropertyOption:
    return _set("minItems", value)


def max_items(value: int) -> PropertyOption:
    return _set("maxItems", value)


def unique_items(unique: bool) -> PropertyOption:
    return _set("uniqueItems", unique)


def _typed_items(item_type: str, options: tuple[PropertyOption, ...]) -> PropertyOption:
    def apply(schema: dict[str, Any]) -> None:
        item_schema: dict[str, Any] = {"type": item_type}
        for option in options:
            option(item_schema)
        schema["items"] = item_schema

    return apply


def with_string_items(*options: PropertyOption) -> PropertyOption:
    return _typed_items("string", options)


def with_string_enum_items(values: Iterable[str]) -> PropertyOption:
    values = list(values)

    def apply(schema: dict[str, Any]) -> None:
        schema["items"] = {"type": "string", "enum": list(values)}

    return apply


def with_number_items(*options: PropertyOption) -> PropertyOption:
    return _typed_items("number", options)


def with_boolean_items(*options: PropertyOption) -> PropertyOption:
    return _typed_items("boolean", options)