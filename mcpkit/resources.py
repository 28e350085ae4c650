"""Builders for resources and resource templates."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from mcpkit.content import Annotations, Resource, ResourceTemplate, Role, URITemplate

ResourceOption = Callable[[Resource], None]
ResourceTemplateOption = Callable[[ResourceTemplate], None]


def new_resource(uri: str, name: str, *options: ResourceOption) -> Resource:
    """Create a resource and apply the options in order."""
    resource = Resource(uri=uri, name=name)
    for option in options:
        option(resource)
    return resource


def with_resource_description(description: str) -> ResourceOption:
    def apply(resource: Resource) -> None:
        resource.description = description

    return apply


def with_mime_type(mime_type: str) -> ResourceOption:
    def apply(resource: Resource) -> None:
        resource.mime_type = mime_type

    return apply


def _set_annotations(target: Resource | ResourceTemplate, audience: Iterable[Role], priority: float) -> None:
    if target.annotations is None:
        target.annotations = Annotations()
    target.annotations.audience = list(audience) if audience is not None else None
    target.annotations.priority = priority


def with_annotations(audience: Iterable[Role], priority: float) -> ResourceOption:
    def apply(resource: Resource) -> None:
        _set_annotations(resource, audience, priority)

    return apply


def new_resource_template(
    uri_template: str, name: str, *options: ResourceTemplateOption
) -> ResourceTemplate:
    """Create a resource template; raises ValueError if the template is invalid."""
    template = ResourceTemplate(uri_template=URITemplate(uri_template), name=name)
    for option in options:
        option(template)
    return template


def with_template_description(description: str) -> ResourceTemplateOption:
    def apply(template: ResourceTemplate) -> None:
        template.description = description

    return apply


def with_template_mime_type(mime_type: str) -> ResourceTemplateOption:
    def apply(template: ResourceTemplate) -> None:
        template.mime_type = mime_type

    return apply


def with_template_annotations(audience: Iterable[Role], priority: float) -> ResourceTemplateOption:
    def apply(template: ResourceTemplate) -> None:
        _set_annotations(template, audience, priority)

    return apply