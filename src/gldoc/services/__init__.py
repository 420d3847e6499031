"""Services: spec registry, HTTP app, terminal rendering, CLI."""

from gldoc.services.registry import Registry, function_summary, load_sources

__all__ = [
    "Registry",
    "function_summary",
    "load_sources",
]
