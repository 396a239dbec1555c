"""Base classes for output renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models import Module

MAX_HEADER_LEVEL = 6


@dataclass(frozen=True)
class RenderOptions:
    """Options shared by every output encoding."""

    header_level: int = 1
    include_source: bool = True


class Renderer(ABC):
    """Contract for renderers that encode a sorted ``Module`` as bytes.

    Implementations must be pure: the same module and options always give
    the same bytes, with nothing run-specific embedded.
    """

    name: str = ""

    @abstractmethod
    def render(self, module: Module, options: RenderOptions) -> bytes:
        """Encode ``module``."""


__all__ = ["MAX_HEADER_LEVEL", "RenderOptions", "Renderer"]
