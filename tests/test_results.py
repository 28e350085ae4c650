from mcpkit.content import (
    AudioContent,
    BlobResourceContents,
    EmbeddedResource,
    ImageContent,
    Resource,
    Role,
    TextContent,
    TextResourceContents,
)
from mcpkit.prompts import Prompt
from mcpkit.protocol import (
    ErrorCode,
    Implementation,
    LATEST_PROTOCOL_VERSION,
    LoggingLevel,
    RequestId,
    ServerCapabilities,
)
from mcpkit.resources import new_resource_template
from mcpkit.results import (
    CallToolResult,
    format_number_result,
    new_audio_content,
    new_embedded_resource,
    new_get_prompt_result,
    new_image_content,
    new_initialize_result,
    new_jsonrpc_error,
    new_jsonrpc_response,
    new_list_prompts_result,
    new_list_resource_templates_result,
    new_list_resources_result,
    new_logging_message_notification,
    new_progress_notification,
    new_prompt_message,
    new_read_resource_result,
    new_text_content,
    new_tool_result_audio,
    new_tool_result_error,
    new_tool_result_error_from_err,
    new_tool_result_errorf,
    new_tool_result_image,
    new_tool_result_resource,
    new_tool_result_text,
)


def test_content_constructors_set_type():
    assert new_text_content("hi").to_dict() == {"type": "text", "text": "hi"}
    assert new_image_content("AAA", "image/png").to_dict() == {
        "type": "image",
        "data": "AAA",
        "mimeType": "image/png",
    }
    assert new_audio_content("BBB", "audio/wav").type == "audio"
    res = TextResourceContents(uri="test://r", text="x")
    embedded = new_embedded_resource(res)
    assert embedded.type == "resource"
    assert embedded.resource is res


def test_tool_result_text():
    result = new_tool_result_text("Hello, Claude!")
    assert result.to_dict() == {"content": [{"type": "text", "text": "Hello, Claude!"}]}
    assert result.is_error is False


def test_tool_result_image_and_audio():
    image = new_tool_result_image("look", "AAA", "image/png")
    assert isinstance(image.content[0], TextContent)
    assert isinstance(image.content[1], ImageContent)
    assert image.content[1].mime_type == "image/png"
    audio = new_tool_result_audio("listen", "BBB", "audio/wav")
    assert isinstance(audio.content[1], AudioContent)
    assert audio.content[1].data == "BBB"


def test_tool_result_resource():
    blob = BlobResourceContents(uri="test://b", blob="Zm9v")
    result = new_tool_result_resource("here", blob)
    assert isinstance(result.content[1], EmbeddedResource)
    assert result.to_dict()["content"][1] == {
        "type": "resource",
        "resource": {"uri": "test://b", "blob": "Zm9v"},
    }


def test_tool_result_error():
    result = new_tool_result_error("division by zero")
    assert result.is_error is True
    assert result.to_dict()["isError"] is True
    assert result.content[0].text == "division by zero"


def test_tool_result_error_from_err():
    result = new_tool_result_error_from_err("fail", ValueError("boom"))
    assert result.content[0].text == "fail: boom"
    assert result.is_error
    plain = new_tool_result_error_from_err("fail", None)
    assert plain.content[0].text == "fail"


def test_tool_result_errorf():
    result = new_tool_result_errorf("value %d too large", 7)
    assert result.content[0].text == "value 7 too large"
    assert result.is_error


def test_call_tool_result_meta():
    result = CallToolResult(content=[], meta={"a": 1})
    assert result.to_dict() == {"_meta": {"a": 1}, "content": []}


def test_format_number_result():
    assert format_number_result(2.5).content[0].text == "2.50"


def test_read_resource_result():
    result = new_read_resource_result("body")
    assert result.contents == [TextResourceContents(text="body")]


def test_list_results_carry_cursor():
    resources = new_list_resources_result([Resource(uri="u", name="n")], "next")
    assert resources.to_dict() == {"nextCursor": "next", "resources": [{"uri": "u", "name": "n"}]}
    template = new_resource_template("test://{id}", "t")
    templates = new_list_resource_templates_result([template], "")
    assert templates.to_dict() == {"resourceTemplates": [{"uriTemplate": "test://{id}", "name": "t"}]}
    prompts = new_list_prompts_result([Prompt(name="p")], "c")
    assert prompts.next_cursor == "c"
    assert prompts.prompts[0].name == "p"


def test_get_prompt_result_and_message():
    message = new_prompt_message(Role.USER, new_text_content("Hello, John!"))
    result = new_get_prompt_result("A greeting prompt", [message])
    assert result.to_dict() == {
        "description": "A greeting prompt",
        "messages": [{"role": "user", "content": {"type": "text", "text": "Hello, John!"}}],
    }


def test_initialize_result():
    result = new_initialize_result(
        LATEST_PROTOCOL_VERSION,
        ServerCapabilities(tools=True),
        Implementation("srv", "1.0.0"),
        "use tools",
    )
    data = result.to_dict()
    assert data["protocolVersion"] == "2025-03-26"
    assert data["serverInfo"] == {"name": "srv", "version": "1.0.0"}
    assert data["instructions"] == "use tools"
    assert data["capabilities"] == {"tools": {}}


def test_jsonrpc_response():
    response = new_jsonrpc_response(RequestId(1), new_tool_result_text("ok"))
    assert response.to_dict() == {
        "jsonrpc": "2.0",
        "id": 1,
        "result": {"content": [{"type": "text", "text": "ok"}]},
    }
    wrapped = new_jsonrpc_response("abc", None)
    assert wrapped.id == RequestId("abc")


def test_jsonrpc_error():
    error = new_jsonrpc_error(RequestId(1), ErrorCode.METHOD_NOT_FOUND, "nope", None)
    assert error.to_dict() == {
        "jsonrpc": "2.0",
        "id": 1,
        "error": {"code": -32601, "message": "nope"},
    }
    with_data = new_jsonrpc_error(RequestId("x"), -32602, "bad", {"field": "name"})
    assert with_data.to_dict()["error"]["data"] == {"field": "name"}


def test_progress_notification_full():
    notification = new_progress_notification("tok", 0.5, 1.0, "half")
    assert notification.method == "notifications/progress"
    assert notification.to_dict()["params"] == {
        "progressToken": "tok",
        "progress": 0.5,
        "total": 1.0,
        "message": "half",
    }


def test_progress_notification_without_optionals():
    notification = new_progress_notification(7, 0.25)
    assert notification.to_dict() == {
        "method": "notifications/progress",
        "params": {"progressToken": 7, "progress": 0.25},
    }


def test_logging_message_notification():
    notification = new_logging_message_notification(LoggingLevel.INFO, "app", {"msg": "hi"})
    assert notification.to_dict() == {
        "method": "notifications/message",
        "params": {"level": "info", "logger": "app", "data": {"msg": "hi"}},
    }
    anonymous = new_logging_message_notification(LoggingLevel.ERROR, "", "oops")
    assert "logger" not in anonymous.to_dict()["params"]