"""Core protocol types: JSON-RPC envelopes, identifiers, metadata and capabilities."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any

LATEST_PROTOCOL_VERSION = "2025-03-26"
VALID_PROTOCOL_VERSIONS = ("2024-11-05", LATEST_PROTOCOL_VERSION)
JSONRPC_VERSION = "2.0"

METHOD_NOTIFICATION_RESOURCES_LIST_CHANGED = "notifications/resources/list_changed"
METHOD_NOTIFICATION_RESOURCE_UPDATED = "notifications/resources/updated"
METHOD_NOTIFICATION_PROMPTS_LIST_CHANGED = "notifications/prompts/list_changed"
METHOD_NOTIFICATION_TOOLS_LIST_CHANGED = "notifications/tools/list_changed"


class MCPMethod(str, Enum):
    """Request methods defined by the protocol."""

    INITIALIZE = "initialize"
    PING = "ping"
    RESOURCES_LIST = "resources/list"
    RESOURCES_TEMPLATES_LIST = "resources/templates/list"
    RESOURCES_READ = "resources/read"
    PROMPTS_LIST = "prompts/list"
    PROMPTS_GET = "prompts/get"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    SET_LOG_LEVEL = "logging/setLevel"


class LoggingLevel(str, Enum):
    """Severity of a log message, following syslog severities."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"


class ErrorCode(IntEnum):
    """Standard JSON-RPC error codes and protocol-specific ones."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    RESOURCE_NOT_FOUND = -32002


def _jsonable(value: Any) -> Any:
    """Convert protocol objects into plain JSON-compatible values."""
    if isinstance(value, RequestId):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _dumps(data: Any) -> str:
    return json.dumps(_jsonable(data), sort_keys=True, separators=(",", ":"))


@dataclass
class Meta:
    """Metadata attached to request parameters."""

    progress_token: Any = None
    additional_fields: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        raw: dict[str, Any] = {}
        if self.progress_token is not None:
            raw["progressToken"] = _jsonable(self.progress_token)
        raw.update(_jsonable(self.additional_fields or {}))
        return raw

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Meta:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("meta must be a JSON object")
        raw = dict(data)
        token = raw.pop("progressToken", None)
        return cls(progress_token=token, additional_fields=raw)

    @classmethod
    def from_json(cls, text: str | bytes) -> Meta:
        return cls.from_dict(json.loads(text))


def _format_float(value: float) -> str:
    return format(Decimal(repr(value)), "f")


@dataclass(frozen=True)
class RequestId:
    """Identifier of a JSON-RPC request: a string, a number, or nothing."""

    value: Any = None

    def is_nil(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        v = self.value
        if v is None:
            return "<nil>"
        if isinstance(v, bool):
            return "unknown:" + ("true" if v else "false")
        if isinstance(v, str):
            return "string:" + v
        if isinstance(v, int):
            return f"int64:{v}"
        if isinstance(v, float):
            if math.isfinite(v) and v == int(v):
                return f"int64:{int(v)}"
            return "float64:" + _format_float(v)
        return f"unknown:{v}"

    def to_json(self) -> str:
        return json.dumps(self.value)

    @classmethod
    def from_json(cls, text: str | bytes) -> RequestId:
        raw = text.decode() if isinstance(text, bytes) else text
        if raw == "null":
            return cls(None)
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise ValueError(f"invalid request id: {raw}") from exc
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"invalid request id: {raw}")
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"invalid request id: {raw}")
        if number == int(number):
            return cls(int(value))
        return cls(number)


@dataclass
class Request:
    """A request method with optional metadata in its parameters."""

    method: str
    meta: Meta | None = None

    def to_dict(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.meta is not None:
            params["_meta"] = self.meta.to_dict()
        return {"method": _jsonable(self.method), "params": params}


@dataclass
class NotificationParams:
    """Parameters of a notification: reserved metadata plus free-form fields."""

    meta: dict[str, Any] | None = None
    additional_fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.meta is not None:
            out["_meta"] = _jsonable(self.meta)
        for key, value in self.additional_fields.items():
            if key != "_meta":
                out[key] = _jsonable(value)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NotificationParams:
        if not isinstance(data, dict):
            raise ValueError("notification params must be a JSON object")
        params = cls(meta={}, additional_fields={})
        for key, value in data.items():
            if key == "_meta":
                if isinstance(value, dict):
                    params.meta = value
            else:
                params.additional_fields[key] = value
        return params


@dataclass
class Notification:
    """A one-way message that expects no response."""

    method: str
    params: NotificationParams = field(default_factory=NotificationParams)

    def to_dict(self) -> dict[str, Any]:
        return {"method": _jsonable(self.method), "params": self.params.to_dict()}


@dataclass(kw_only=True)
class Result:
    """Base of every result, carrying optional metadata."""

    meta: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.meta:
            return {"_meta": _jsonable(self.meta)}
        return {}


@dataclass
class PaginatedResult(Result):
    """A result that may continue on another page."""

    next_cursor: str = field(default="", kw_only=True)

    def to_dict(self) -> dict[str, Any]:
        out = Result.to_dict(self)
        if self.next_cursor:
            out["nextCursor"] = self.next_cursor
        return out


@dataclass
class JSONRPCRequest:
    """A request that expects a response."""

    id: RequestId
    method: str
    params: Any = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "id": self.id.value,
            "method": _jsonable(self.method),
        }
        if self.params is not None:
            out["params"] = _jsonable(self.params)
        return out


@dataclass
class JSONRPCNotification:
    """A notification wrapped in a JSON-RPC envelope."""

    method: str
    params: NotificationParams = field(default_factory=NotificationParams)
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "method": _jsonable(self.method),
            "params": self.params.to_dict(),
        }


@dataclass
class JSONRPCResponse:
    """A successful response to a request."""

    id: RequestId
    result: Any
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id.value,
            "result": _jsonable(self.result),
        }


@dataclass
class JSONRPCErrorDetail:
    """The error member of an error response."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.data is not None:
            out["data"] = _jsonable(self.data)
        return out


@dataclass
class JSONRPCError:
    """A response reporting that a request failed."""

    id: RequestId
    error: JSONRPCErrorDetail
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id.value,
            "error": self.error.to_dict(),
        }


@dataclass
class Implementation:
    """Name and version of a client or server."""

    name: str
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}


def _list_changed(flag: bool) -> dict[str, Any]:
    return {"listChanged": True} if flag else {}


@dataclass
class ClientCapabilities:
    """Capabilities a client announces; roots and sampling are present when enabled."""

    experimental: dict[str, Any] | None = None
    roots: bool = False
    roots_list_changed: bool = False
    sampling: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.experimental:
            out["experimental"] = _jsonable(self.experimental)
        if self.roots:
            out["roots"] = _list_changed(self.roots_list_changed)
        if self.sampling:
            out["sampling"] = {}
        return out


@dataclass
class ServerCapabilities:
    """Capabilities a server announces; each feature is present when enabled."""

    experimental: dict[str, Any] | None = None
    logging: bool = False
    prompts: bool = False
    prompts_list_changed: bool = False
    resources: bool = False
    resources_subscribe: bool = False
    resources_list_changed: bool = False
    tools: bool = False
    tools_list_changed: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.experimental:
            out["experimental"] = _jsonable(self.experimental)
        if self.logging:
            out["logging"] = {}
        if self.prompts:
            out["prompts"] = _list_changed(self.prompts_list_changed)
        if self.resources:
            res: dict[str, Any] = {}
            if self.resources_subscribe:
                res["subscribe"] = True
            res.update(_list_changed(self.resources_list_changed))
            out["resources"] = res
        if self.tools:
            out["tools"] = _list_changed(self.tools_list_changed)
        return out


@dataclass
class InitializeParams:
    """Parameters of the initialize request."""

    protocol_version: str = LATEST_PROTOCOL_VERSION
    capabilities: ClientCapabilities = field(default_factory=ClientCapabilities)
    client_info: Implementation = field(default_factory=lambda: Implementation("", ""))

    def to_dict(self) -> dict[str, Any]:
        return {
            "protocolVersion": self.protocol_version,
            "capabilities": self.capabilities.to_dict(),
            "clientInfo": self.client_info.to_dict(),
        }


@dataclass
class InitializeResult(Result):
    """The server's answer to initialize."""

    protocol_version: str = LATEST_PROTOCOL_VERSION
    capabilities: ServerCapabilities = field(default_factory=ServerCapabilities)
    server_info: Implementation = field(default_factory=lambda: Implementation("", ""))
    instructions: str = ""

    def to_dict(self) -> dict[str, Any]:
        out = Result.to_dict(self)
        out["protocolVersion"] = self.protocol_version
        out["capabilities"] = self.capabilities.to_dict()
        out["serverInfo"] = self.server_info.to_dict()
        if self.instructions:
            out["instructions"] = self.instructions
        return out


@dataclass
class CancelledNotificationParams:
    """Parameters of a cancellation notification."""

    request_id: RequestId
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"requestId": self.request_id.value}
        if self.reason:
            out["reason"] = self.reason
        return out


@dataclass
class ProgressNotificationParams:
    """Parameters of a progress notification."""

    progress_token: Any
    progress: float
    total: float = 0.0
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "progressToken": _jsonable(self.progress_token),
            "progress": self.progress,
        }
        if self.total:
            out["total"] = self.total
        if self.message:
            out["message"] = self.message
        return out


@dataclass
class LoggingMessageNotificationParams:
    """Parameters of a log message notification."""

    level: LoggingLevel
    data: Any = None
    logger: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"level": _jsonable(self.level)}
        if self.logger:
            out["logger"] = self.logger
        out["data"] = _jsonable(self.data)
        return out


@dataclass
class CompleteResult(Result):
    """Completion options offered for an argument."""

    values: list[str] = field(default_factory=list)
    total: int = 0
    has_more: bool = False

    def to_dict(self) -> dict[str, Any]:
        out = Result.to_dict(self)
        completion: dict[str, Any] = {"values": list(self.values)}
        if self.total:
            completion["total"] = self.total
        if self.has_more:
            completion["hasMore"] = True
        out["completion"] = completion
        return out


@dataclass
class Root:
    """A root directory or file the server may operate on."""

    uri: str
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"uri": self.uri}
        if self.name:
            out["name"] = self.name
        return out


@dataclass
class ListRootsResult(Result):
    """The client's answer to a roots/list request."""

    roots: list[Root] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = Result.to_dict(self)
        out["roots"] = [root.to_dict() for root in self.roots]
        return out