"""Output renderers and lookup by format name."""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from ..errors import InvocationError
from .base import MAX_HEADER_LEVEL, RenderOptions, Renderer
from .lint import MarkdownLinter
from .markdown import MarkdownRenderer
from .structured import StructuredRenderer

_BUILTIN_RENDERERS: Dict[str, Callable[[], Renderer]] = {
    "textual": MarkdownRenderer,
    "structured": StructuredRenderer,
}

FORMATS: Tuple[str, ...] = tuple(_BUILTIN_RENDERERS)
DEFAULT_FORMAT = "textual"


def get_renderer(name: str) -> Renderer:
    """Return a renderer instance for a format name."""
    factory = _BUILTIN_RENDERERS.get(name.lower())
    if factory is None:
        known = ", ".join(FORMATS)
        raise InvocationError(f"Unknown output format '{name}' (expected one of: {known})")
    instance = factory()
    if not isinstance(instance, Renderer):
        raise TypeError(f"Renderer factory for '{name}' did not return a Renderer instance")
    return instance


__all__ = [
    "DEFAULT_FORMAT",
    "FORMATS",
    "MAX_HEADER_LEVEL",
    "MarkdownLinter",
    "MarkdownRenderer",
    "RenderOptions",
    "Renderer",
    "StructuredRenderer",
    "get_renderer",
]
