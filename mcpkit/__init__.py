"""Model Context Protocol message types, content, prompts, resources, tools and result helpers."""

__version__ = "0.1.0"

__all__ = ["content", "prompts", "protocol", "resources", "results", "tools"]