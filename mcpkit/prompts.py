"""Prompts, prompt templates and the builders that configure them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from mcpkit.content import Content, Role
from mcpkit.protocol import PaginatedResult, Result, _jsonable


@dataclass
class PromptArgument:
    """An argument that a prompt template accepts."""

    name: str
    description: str = ""
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.description:
            out["description"] = self.description
        if self.required:
            out["required"] = True
        return out


@dataclass
class Prompt:
    """A prompt or prompt template offered by a server.

    A prompt with arguments is a template; one without is static.
    """

    name: str
    description: str = ""
    arguments: list[PromptArgument] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.description:
            out["description"] = self.description
        if self.arguments:
            out["arguments"] = [arg.to_dict() for arg in self.arguments]
        return out


@dataclass
class PromptMessage:
    """A message returned as part of a prompt."""

    role: Role
    content: Content

    def to_dict(self) -> dict[str, Any]:
        return {"role": _jsonable(self.role), "content": _jsonable(self.content)}


@dataclass
class GetPromptParams:
    """Parameters of a prompts/get request."""

    name: str
    arguments: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.arguments:
            out["arguments"] = dict(self.arguments)
        return out


@dataclass
class GetPromptResult(Result):
    """The server's answer to prompts/get."""

    description: str = ""
    messages: list[PromptMessage] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = Result.to_dict(self)
        if self.description:
            out["description"] = self.description
        out["messages"] = [message.to_dict() for message in self.messages]
        return out


@dataclass
class ListPromptsResult(PaginatedResult):
    """The server's answer to prompts/list."""

    prompts: list[Prompt] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = PaginatedResult.to_dict(self)
        out["prompts"] = [prompt.to_dict() for prompt in self.prompts]
        return out


PromptOption = Callable[[Prompt], None]
ArgumentOption = Callable[[PromptArgument], None]


def new_prompt(name: str, *options: PromptOption) -> Prompt:
    """Create a prompt and apply the options in order."""
    prompt = Prompt(name=name)
    for option in options:
        option(prompt)
    return prompt


def with_prompt_description(description: str) -> PromptOption:
    def apply(prompt: Prompt) -> None:
        prompt.description = description

    return apply


def with_argument(name: str, *options: ArgumentOption) -> PromptOption:
    """Append an argument, configured by the given options, to the prompt."""

    def apply(prompt: Prompt) -> None:
        argument = PromptArgument(name=name)
        for option in options:
            option(argument)
        if prompt.arguments is None:
            prompt.arguments = []
        prompt.arguments.append(argument)

    return apply


def argument_description(desc: str) -> ArgumentOption:
    def apply(argument: PromptArgument) -> None:
        argument.description = desc

    return apply


def required_argument() -> ArgumentOption:
    def apply(argument: PromptArgument) -> None:
        argument.required = True

    return apply