# mcpkit

Building blocks for Model Context Protocol (MCP) messages: JSON-RPC envelopes
and protocol types, content blocks, resources and resource templates, prompts,
and tool definitions with option-style builders, plus helpers that build tool
results and other common messages. Every message type has a `to_dict()` that
produces its JSON form.

## Modules

- `mcpkit.protocol`: `MCPMethod`, `LoggingLevel`, `ErrorCode`, `Meta`,
  `RequestId`, `Request`, `Notification`, `NotificationParams`, `Result`,
  `PaginatedResult`, the JSON-RPC envelopes (`JSONRPCRequest`,
  `JSONRPCNotification`, `JSONRPCResponse`, `JSONRPCError`), capabilities,
  initialize, progress, logging, completion and roots types.
- `mcpkit.content`: `Role`, `Annotations`, `URITemplate` (a validated RFC 6570
  template), `TextContent`, `ImageContent`, `AudioContent`, `EmbeddedResource`,
  `TextResourceContents`, `BlobResourceContents`, `Resource`,
  `ResourceTemplate`, sampling and model-preference types.
- `mcpkit.resources`: `new_resource`, `new_resource_template` and their options.
- `mcpkit.prompts`: `Prompt`, `PromptArgument`, `PromptMessage`,
  `GetPromptResult`, `ListPromptsResult`, `new_prompt` and its options.
- `mcpkit.tools`: `Tool`, `ToolInputSchema`, `ToolAnnotation`,
  `ListToolsResult`, `new_tool`, `new_tool_with_raw_schema` and the tool and
  property options.
- `mcpkit.results`: `CallToolResult` and the `new_*` helpers for content, tool
  results, list results, JSON-RPC responses and errors, and progress and
  logging notifications.

## Install

```
pip install mcpkit
```

## Defining a tool

```python
from mcpkit.tools import new_tool, with_description, with_string, with_number, description, required

tool = new_tool(
    "calculate",
    with_description("Run a basic arithmetic operation"),
    with_string("operation", required(), description("add, subtract, multiply or divide")),
    with_number("x", required()),
    with_number("y", required()),
)
print(tool.to_json())
```

`required()` moves the property's name into the schema's `required` list.
A tool made by `new_tool` starts with an object schema and the annotations
`readOnlyHint=false`, `destructiveHint=true`, `idempotentHint=false`,
`openWorldHint=true`.

A tool can also be given a raw JSON Schema (text, bytes or a dict) with
`new_tool_with_raw_schema`. Setting both the structured and the raw schema
makes `to_dict()` / `to_json()` raise `ToolSchemaConflictError`.
`Tool.from_json` and `Tool.from_dict` read a tool back, always into the
structured schema.

## Results

```python
from mcpkit.results import new_tool_result_text, new_tool_result_error, new_tool_result_errorf

ok = new_tool_result_text("5")
failed = new_tool_result_error("division by zero")
formatted = new_tool_result_errorf("bad value: %s", "x")
print(ok.to_dict(), failed.to_dict())
```

Errors from a tool belong inside the result, with `is_error` set, rather than
as a protocol error.

## Prompts and resources

```python
from mcpkit.prompts import new_prompt, with_prompt_description, with_argument, required_argument
from mcpkit.resources import new_resource, new_resource_template, with_mime_type

prompt = new_prompt("greeting", with_prompt_description("Greets someone"),
                    with_argument("name", required_argument()))
resource = new_resource("file:///notes.txt", "Notes", with_mime_type("text/plain"))
template = new_resource_template("file:///notes/{name}", "Note")
print(template.uri_template.variables())  # ['name']
```

`new_resource_template` raises `ValueError` for an invalid URI template.

## Request identifiers and metadata

```python
from mcpkit.protocol import Meta, RequestId

print(str(RequestId.from_json("42")))       # int64:42
print(Meta(progress_token="123").to_json())  # {"progressToken":"123"}
```

## What this package does not do

mcpkit builds and serialises messages; it does not run a server or a client,
has no transport, and does not dispatch requests to handlers. It also offers no
accessors for reading the arguments of an incoming tool call and no parsers
that turn JSON responses back into typed tool, prompt or resource results.

## Tests

```
pip install -e ".[test]"
pytest
```