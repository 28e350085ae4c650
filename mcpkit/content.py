"""Content blocks, resources, resource templates and sampling types."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mcpkit.protocol import PaginatedResult, Result, _jsonable


class Role(str, Enum):
    """Sender or recipient of a message in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Annotations:
    """Hints about who a piece of data is for and how important it is."""

    audience: list[Role] | None = None
    priority: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.audience:
            out["audience"] = [_jsonable(role) for role in self.audience]
        if self.priority:
            out["priority"] = self.priority
        return out


_PCT = r"%[0-9A-Fa-f]{2}"
_VARCHAR = rf"(?:[A-Za-z0-9_]|{_PCT})"
_VARNAME = rf"{_VARCHAR}+(?:\.{_VARCHAR}+)*"
_VARSPEC = re.compile(rf"({_VARNAME})(?::([1-9][0-9]{{0,3}})|(\*))?")
_OPERATORS = frozenset("+#./;?&")
_RESERVED_OPERATORS = frozenset("=,!@|")
_FORBIDDEN_LITERALS = frozenset(" \"'<>\\^`|")
_PCT_AT = re.compile(_PCT)


def _parse_expression(body: str, raw: str) -> list[str]:
    if not body:
        raise ValueError(f"empty expression in URI template: {raw!r}")
    if body[0] in _RESERVED_OPERATORS:
        raise ValueError(f"reserved operator {body[0]!r} in URI template: {raw!r}")
    if body[0] in _OPERATORS:
        body = body[1:]
    names = []
    for spec in body.split(","):
        match = _VARSPEC.fullmatch(spec)
        if match is None:
            raise ValueError(f"invalid variable {spec!r} in URI template: {raw!r}")
        names.append(match.group(1))
    return names


def _parse_template(raw: str) -> tuple[str, ...]:
    names: list[str] = []
    pos = 0
    while pos < len(raw):
        char = raw[pos]
        if char == "{":
            end = raw.find("}", pos + 1)
            if end < 0:
                raise ValueError(f"unclosed expression in URI template: {raw!r}")
            body = raw[pos + 1 : end]
            if "{" in body:
                raise ValueError(f"nested expression in URI template: {raw!r}")
            for name in _parse_expression(body, raw):
                if name not in names:
                    names.append(name)
            pos = end + 1
        elif char == "}":
            raise ValueError(f"unexpected '}}' in URI template: {raw!r}")
        elif char == "%":
            if not _PCT_AT.match(raw, pos):
                raise ValueError(f"invalid percent-encoding in URI template: {raw!r}")
            pos += 3
        elif char in _FORBIDDEN_LITERALS or ord(char) < 0x20 or ord(char) == 0x7F:
            raise ValueError(f"invalid character {char!r} in URI template: {raw!r}")
        else:
            pos += 1
    return tuple(names)


@dataclass(frozen=True)
class URITemplate:
    """A validated RFC 6570 URI template."""

    raw: str
    _variables: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_variables", _parse_template(self.raw))

    def __str__(self) -> str:
        return self.raw

    def variables(self) -> list[str]:
        """Names of the template's variables in order of first appearance."""
        return list(self._variables)

    def to_json(self) -> str:
        return json.dumps(self.raw)

    @classmethod
    def from_json(cls, text: str | bytes) -> URITemplate:
        value = json.loads(text)
        if not isinstance(value, str):
            raise ValueError("URI template must be a JSON string")
        return cls(value)


def _annotated(annotations: Annotations | None) -> dict[str, Any]:
    if annotations is None:
        return {}
    return {"annotations": annotations.to_dict()}


@dataclass
class Content:
    """Base of every content block sent to or from a model."""

    annotations: Annotations | None = field(default=None, kw_only=True)


@dataclass
class TextContent(Content):
    """Plain text."""

    text: str = ""
    type: str = "text"

    def to_dict(self) -> dict[str, Any]:
        out = _annotated(self.annotations)
        out["type"] = self.type
        out["text"] = self.text
        return out


@dataclass
class ImageContent(Content):
    """A base64-encoded image."""

    data: str = ""
    mime_type: str = ""
    type: str = "image"

    def to_dict(self) -> dict[str, Any]:
        out = _annotated(self.annotations)
        out["type"] = self.type
        out["data"] = self.data
        out["mimeType"] = self.mime_type
        return out


@dataclass
class AudioContent(Content):
    """Base64-encoded audio."""

    data: str = ""
    mime_type: str = ""
    type: str = "audio"

    def to_dict(self) -> dict[str, Any]:
        out = _annotated(self.annotations)
        out["type"] = self.type
        out["data"] = self.data
        out["mimeType"] = self.mime_type
        return out


class ResourceContents:
    """Base of the contents of a resource or sub-resource."""


@dataclass
class TextResourceContents(ResourceContents):
    """Resource contents that can be represented as text."""

    uri: str = ""
    text: str = ""
    mime_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"uri": self.uri}
        if self.mime_type:
            out["mimeType"] = self.mime_type
        out["text"] = self.text
        return out


@dataclass
class BlobResourceContents(ResourceContents):
    """Binary resource contents, base64-encoded."""

    uri: str = ""
    blob: str = ""
    mime_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"uri": self.uri}
        if self.mime_type:
            out["mimeType"] = self.mime_type
        out["blob"] = self.blob
        return out


@dataclass
class EmbeddedResource(Content):
    """Resource contents embedded in a prompt or tool result."""

    resource: ResourceContents | None = None
    type: str = "resource"

    def to_dict(self) -> dict[str, Any]:
        out = _annotated(self.annotations)
        out["type"] = self.type
        out["resource"] = _jsonable(self.resource)
        return out


@dataclass
class Resource:
    """A resource the server is able to read."""

    uri: str
    name: str
    description: str = ""
    mime_type: str = ""
    annotations: Annotations | None = None

    def to_dict(self) -> dict[str, Any]:
        out = _annotated(self.annotations)
        out["uri"] = self.uri
        out["name"] = self.name
        if self.description:
            out["description"] = self.description
        if self.mime_type:
            out["mimeType"] = self.mime_type
        return out


@dataclass
class ResourceTemplate:
    """A template describing a family of resources."""

    uri_template: URITemplate
    name: str
    description: str = ""
    mime_type: str = ""
    annotations: Annotations | None = None

    def to_dict(self) -> dict[str, Any]:
        out = _annotated(self.annotations)
        out["uriTemplate"] = self.uri_template.raw
        out["name"] = self.name
        if self.description:
            out["description"] = self.description
        if self.mime_type:
            out["mimeType"] = self.mime_type
        return out


@dataclass
class ReadResourceResult(Result):
    """The server's answer to resources/read."""

    contents: list[ResourceContents] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = Result.to_dict(self)
        out["contents"] = [_jsonable(item) for item in self.contents]
        return out


@dataclass
class ListResourcesResult(PaginatedResult):
    """The server's answer to resources/list."""

    resources: list[Resource] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = PaginatedResult.to_dict(self)
        out["resources"] = [resource.to_dict() for resource in self.resources]
        return out


@dataclass
class ListResourceTemplatesResult(PaginatedResult):
    """The server's answer to resources/templates/list."""

    resource_templates: list[ResourceTemplate] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = PaginatedResult.to_dict(self)
        out["resourceTemplates"] = [t.to_dict() for t in self.resource_templates]
        return out


@dataclass
class SamplingMessage:
    """A message issued to or received from a model."""

    role: Role
    content: Any

    def to_dict(self) -> dict[str, Any]:
        return {"role": _jsonable(self.role), "content": _jsonable(self.content)}


@dataclass
class ModelHint:
    """A hint for a model name, treated as a substring."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name} if self.name else {}


@dataclass
class ModelPreferences:
    """Advisory preferences for selecting a model during sampling."""

    hints: list[ModelHint] = field(default_factory=list)
    cost_priority: float = 0.0
    speed_priority: float = 0.0
    intelligence_priority: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.hints:
            out["hints"] = [hint.to_dict() for hint in self.hints]
        if self.cost_priority:
            out["costPriority"] = self.cost_priority
        if self.speed_priority:
            out["speedPriority"] = self.speed_priority
        if self.intelligence_priority:
            out["intelligencePriority"] = self.intelligence_priority
        return out


@dataclass
class ResourceReference:
    """A reference to a resource or resource template."""

    uri: str
    type: str = "ref/resource"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "uri": self.uri}


@dataclass
class PromptReference:
    """A reference to a prompt."""

    name: str
    type: str = "ref/prompt"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "name": self.name}