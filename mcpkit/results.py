"""Tool call results and helpers that build common protocol messages."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from mcpkit.content import (
    AudioContent,
    Content,
    EmbeddedResource,
    ImageContent,
    ListResourcesResult,
    ListResourceTemplatesResult,
    ReadResourceResult,
    Resource,
    ResourceContents,
    ResourceTemplate,
    Role,
    TextContent,
    TextResourceContents,
)
from mcpkit.prompts import GetPromptResult, ListPromptsResult, Prompt, PromptMessage
from mcpkit.protocol import (
    Implementation,
    InitializeResult,
    JSONRPCError,
    JSONRPCErrorDetail,
    JSONRPCResponse,
    LoggingLevel,
    LoggingMessageNotificationParams,
    Notification,
    NotificationParams,
    ProgressNotificationParams,
    RequestId,
    Result,
    ServerCapabilities,
    _jsonable,
)


@dataclass
class CallToolResult(Result):
    """The server's answer to a tool call.

    Errors raised by the tool itself are reported here with is_error set.
    """

    content: list[Content] = field(default_factory=list)
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        out = Result.to_dict(self)
        out["content"] = [_jsonable(item) for item in self.content]
        if self.is_error:
            out["isError"] = True
        return out


def new_text_content(text: str) -> TextContent:
    return TextContent(text=text)


def new_image_content(data: str, mime_type: str) -> ImageContent:
    return ImageContent(data=data, mime_type=mime_type)


def new_audio_content(data: str, mime_type: str) -> AudioContent:
    return AudioContent(data=data, mime_type=mime_type)


def new_embedded_resource(resource: ResourceContents) -> EmbeddedResource:
    return EmbeddedResource(resource=resource)


def new_prompt_message(role: Role, content: Content) -> PromptMessage:
    return PromptMessage(role=role, content=content)


def new_tool_result_text(text: str) -> CallToolResult:
    return CallToolResult(content=[new_text_content(text)])


def new_tool_result_image(text: str, image_data: str, mime_type: str) -> CallToolResult:
    return CallToolResult(content=[new_text_content(text), new_image_content(image_data, mime_type)])


def new_tool_result_audio(text: str, audio_data: str, mime_type: str) -> CallToolResult:
    return CallToolResult(content=[new_text_content(text), new_audio_content(audio_data, mime_type)])


def new_tool_result_resource(text: str, resource: ResourceContents) -> CallToolResult:
    return CallToolResult(content=[new_text_content(text), new_embedded_resource(resource)])


def new_tool_result_error(text: str) -> CallToolResult:
    return CallToolResult(content=[new_text_content(text)], is_error=True)


def new_tool_result_error_from_err(text: str, err: BaseException | None) -> CallToolResult:
    """An error result whose text is followed by the error's message, if any."""
    if err is not None:
        text = f"{text}: {err}"
    return new_tool_result_error(text)


def new_tool_result_errorf(format: str, *args: Any) -> CallToolResult:
    """An error result whose text is formatted printf-style from the arguments."""
    text = format % args if args else format
    return new_tool_result_error(text)


def new_list_resources_result(resources: Iterable[Resource], next_cursor: str) -> ListResourcesResult:
    return ListResourcesResult(resources=list(resources), next_cursor=next_cursor)


def new_list_resource_templates_result(
    templates: Iterable[ResourceTemplate], next_cursor: str
) -> ListResourceTemplatesResult:
    return ListResourceTemplatesResult(resource_templates=list(templates), next_cursor=next_cursor)


def new_read_resource_result(text: str) -> ReadResourceResult:
    return ReadResourceResult(contents=[TextResourceContents(text=text)])


def new_list_prompts_result(prompts: Iterable[Prompt], next_cursor: str) -> ListPromptsResult:
    return ListPromptsResult(prompts=list(prompts), next_cursor=next_cursor)


def new_get_prompt_result(description: str, messages: Iterable[PromptMessage]) -> GetPromptResult:
    return GetPromptResult(description=description, messages=list(messages))


def new_initialize_result(
    protocol_version: str,
    capabilities: ServerCapabilities,
    server_info: Implementation,
    instructions: str,
) -> InitializeResult:
    return InitializeResult(
        protocol_version=protocol_version,
        capabilities=capabilities,
        server_info=server_info,
        instructions=instructions,
    )


def _as_request_id(request_id: Any) -> RequestId:
    return request_id if isinstance(request_id, RequestId) else RequestId(request_id)


def new_jsonrpc_response(request_id: Any, result: Any) -> JSONRPCResponse:
    return JSONRPCResponse(id=_as_request_id(request_id), result=result)


def new_jsonrpc_error(request_id: Any, code: int, message: str, data: Any = None) -> JSONRPCError:
    return JSONRPCError(
        id=_as_request_id(request_id),
        error=JSONRPCErrorDetail(code=code, message=message, data=data),
    )


def new_progress_notification(
    token: Any,
    progress: float,
    total: float | None = None,
    message: str | None = None,
) -> Notification:
    """A notifications/progress message; total and message are optional."""
    params = ProgressNotificationParams(
        progress_token=token,
        progress=progress,
        total=total if total is not None else 0.0,
        message=message if message is not None else "",
    )
    return Notification(
        method="notifications/progress",
        params=NotificationParams(additional_fields=params.to_dict()),
    )


def new_logging_message_notification(level: LoggingLevel, logger: str, data: Any) -> Notification:
    """A notifications/message log message."""
    params = LoggingMessageNotificationParams(level=level, data=data, logger=logger)
    return Notification(
        method="notifications/message",
        params=NotificationParams(additional_fields=params.to_dict()),
    )


def format_number_result(value: float) -> CallToolResult:
    """A text result holding the number with two decimal places."""
    return new_tool_result_text(f"{value:.2f}")