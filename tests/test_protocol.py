import json

import pytest

from mcpkit.protocol import (
    JSONRPC_VERSION,
    LATEST_PROTOCOL_VERSION,
    CancelledNotificationParams,
    ClientCapabilities,
    CompleteResult,
    ErrorCode,
    Implementation,
    InitializeParams,
    InitializeResult,
    JSONRPCError,
    JSONRPCErrorDetail,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    ListRootsResult,
    LoggingLevel,
    LoggingMessageNotificationParams,
    MCPMethod,
    Meta,
    Notification,
    NotificationParams,
    PaginatedResult,
    ProgressNotificationParams,
    Request,
    RequestId,
    Result,
    Root,
    ServerCapabilities,
)


@pytest.mark.parametrize(
    "text, meta, expected",
    [
        ("{}", Meta(), Meta(additional_fields={})),
        ("{}", Meta(additional_fields={}), Meta(additional_fields={})),
        ('{"progressToken":"123"}', Meta(progress_token="123"),
         Meta(progress_token="123", additional_fields={})),
        ('{"progressToken":"123"}', Meta(progress_token="123", additional_fields={}),
         Meta(progress_token="123", additional_fields={})),
        ('{"a":2,"b":"1"}', Meta(additional_fields={"a": 2, "b": "1"}),
         Meta(additional_fields={"a": 2.0, "b": "1"})),
        ('{"a":2,"b":"1","progressToken":"123"}',
         Meta(progress_token="123", additional_fields={"a": 2, "b": "1"}),
         Meta(progress_token="123", additional_fields={"a": 2.0, "b": "1"})),
    ],
)
def test_meta_marshalling(text, meta, expected):
    assert meta.to_json() == text
    assert Meta.from_json(text) == expected


def test_meta_from_json_rejects_non_object():
    with pytest.raises(ValueError):
        Meta.from_json("[1, 2]")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("abc", "string:abc"),
        (42, "int64:42"),
        (7.0, "int64:7"),
        (1.5, "float64:1.5"),
        (0.00001, "float64:0.00001"),
        (None, "<nil>"),
    ],
)
def test_request_id_str(value, expected):
    assert str(RequestId(value)) == expected


@pytest.mark.parametrize(
    "text, expected",
    [("null", None), ('"req-1"', "req-1"), ("5", 5), ("5.0", 5), ("2.5", 2.5)],
)
def test_request_id_from_json(text, expected):
    rid = RequestId.from_json(text)
    assert rid.value == expected
    assert type(rid.value) is type(expected)


@pytest.mark.parametrize("text", ["true", "{}", "[1]", "not json"])
def test_request_id_from_json_invalid(text):
    with pytest.raises(ValueError, match="invalid request id"):
        RequestId.from_json(text)


def test_request_id_round_trip_and_nil():
    assert RequestId.from_json(RequestId("x").to_json()) == RequestId("x")
    assert RequestId(None).is_nil() is True
    assert RequestId(0).is_nil() is False


def test_request_to_dict():
    assert Request("ping").to_dict() == {"method": "ping", "params": {}}
    req = Request(MCPMethod.TOOLS_LIST, meta=Meta(progress_token=3))
    assert req.to_dict() == {"method": "tools/list", "params": {"_meta": {"progressToken": 3}}}


def test_notification_params_to_dict_skips_meta_override():
    params = NotificationParams(meta={"m": 1}, additional_fields={"_meta": "x", "k": "v"})
    assert params.to_dict() == {"_meta": {"m": 1}, "k": "v"}


def test_notification_params_from_dict():
    params = NotificationParams.from_dict({"_meta": {"a": 1}, "b": 2})
    assert params.meta == {"a": 1}
    assert params.additional_fields == {"b": 2}
    empty = NotificationParams.from_dict({"_meta": "bad"})
    assert empty.meta == {}
    assert empty.additional_fields == {}


def test_notification_and_jsonrpc_notification():
    n = Notification("notifications/initialized")
    assert n.to_dict() == {"method": "notifications/initialized", "params": {}}
    jn = JSONRPCNotification("x", NotificationParams(additional_fields={"a": 1}))
    assert jn.to_dict() == {"jsonrpc": "2.0", "method": "x", "params": {"a": 1}}


def test_result_and_paginated_result():
    assert Result().to_dict() == {}
    assert Result(meta={}).to_dict() == {}
    assert Result(meta={"k": 1}).to_dict() == {"_meta": {"k": 1}}
    assert PaginatedResult(next_cursor="c1").to_dict() == {"nextCursor": "c1"}
    assert PaginatedResult().to_dict() == {}


def test_jsonrpc_request_omits_missing_params():
    req = JSONRPCRequest(RequestId(1), MCPMethod.PING)
    assert req.to_dict() == {"jsonrpc": JSONRPC_VERSION, "id": 1, "method": "ping"}
    req2 = JSONRPCRequest(RequestId("a"), "tools/call", params={"name": "t"})
    assert req2.to_dict()["params"] == {"name": "t"}


def test_jsonrpc_response_serialises_result_objects():
    resp = JSONRPCResponse(RequestId(3), Result(meta={"x": 1}))
    assert resp.to_dict() == {"jsonrpc": "2.0", "id": 3, "result": {"_meta": {"x": 1}}}


def test_jsonrpc_error():
    err = JSONRPCError(RequestId(9), JSONRPCErrorDetail(ErrorCode.METHOD_NOT_FOUND, "nope"))
    assert err.to_dict() == {
        "jsonrpc": "2.0",
        "id": 9,
        "error": {"code": -32601, "message": "nope"},
    }
    with_data = JSONRPCErrorDetail(ErrorCode.INTERNAL_ERROR, "m", data={"d": 1})
    assert with_data.to_dict()["data"] == {"d": 1}


def test_error_codes_in_error_detail():
    parse = JSONRPCErrorDetail(ErrorCode.PARSE_ERROR, "bad json").to_dict()
    assert parse == {"code": -32700, "message": "bad json"}
    missing = JSONRPCErrorDetail(ErrorCode.RESOURCE_NOT_FOUND, "gone").to_dict()
    assert missing["code"] == -32002


def test_capabilities_to_dict():
    assert ClientCapabilities().to_dict() == {}
    assert ClientCapabilities(roots=True, roots_list_changed=True, sampling=True).to_dict() == {
        "roots": {"listChanged": True},
        "sampling": {},
    }
    caps = ServerCapabilities(
        logging=True,
        resources=True,
        resources_subscribe=True,
        tools=True,
        tools_list_changed=True,
    )
    assert caps.to_dict() == {
        "logging": {},
        "resources": {"subscribe": True},
        "tools": {"listChanged": True},
    }


def test_initialize_params_and_result():
    params = InitializeParams(client_info=Implementation("c", "1.0"))
    assert params.to_dict() == {
        "protocolVersion": LATEST_PROTOCOL_VERSION,
        "capabilities": {},
        "clientInfo": {"name": "c", "version": "1.0"},
    }
    result = InitializeResult(
        protocol_version="2024-11-05",
        server_info=Implementation("s", "2"),
        instructions="use it",
    )
    data = json.loads(json.dumps(result.to_dict()))
    assert data == {
        "protocolVersion": "2024-11-05",
        "capabilities": {},
        "serverInfo": {"name": "s", "version": "2"},
        "instructions": "use it",
    }


def test_notification_param_types():
    assert CancelledNotificationParams(RequestId(4)).to_dict() == {"requestId": 4}
    assert CancelledNotificationParams(RequestId("a"), "late").to_dict() == {
        "requestId": "a",
        "reason": "late",
    }
    assert ProgressNotificationParams("tok", 0.5).to_dict() == {
        "progressToken": "tok",
        "progress": 0.5,
    }
    assert ProgressNotificationParams(1, 2, total=10, message="m").to_dict() == {
        "progressToken": 1,
        "progress": 2,
        "total": 10,
        "message": "m",
    }
    assert LoggingMessageNotificationParams(LoggingLevel.WARNING, "hi", "lg").to_dict() == {
        "level": "warning",
        "logger": "lg",
        "data": "hi",
    }


def test_complete_and_roots_results():
    assert CompleteResult(values=["a"], total=5, has_more=True).to_dict() == {
        "completion": {"values": ["a"], "total": 5, "hasMore": True}
    }
    assert CompleteResult().to_dict() == {"completion": {"values": []}}
    roots = ListRootsResult(roots=[Root("file:///a", "A"), Root("file:///b")])
    assert roots.to_dict() == {
        "roots": [{"uri": "file:///a", "name": "A"}, {"uri": "file:///b"}]
    }


def test_method_values():
    assert MCPMethod.SET_LOG_LEVEL.value == "logging/setLevel"
    assert MCPMethod("tools/call") is MCPMethod.TOOLS_CALL