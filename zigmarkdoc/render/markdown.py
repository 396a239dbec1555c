"""Markdown (textual) renderer."""

from __future__ import annotations

from typing import List, Optional

from ..models import Category, Declaration, Module
from .base import MAX_HEADER_LEVEL, RenderOptions, Renderer
from .lint import MarkdownLinter

_CODE_LANGUAGE = "zig"


def heading(level: int) -> str:
    """Markdown heading prefix, clamped to ``#``..``######``."""
    return "#" * min(max(level, 1), MAX_HEADER_LEVEL)


class MarkdownRenderer(Renderer):
    """Renders one heading per declaration, grouped under category headings.

    Imports are collapsed into a single code block; container members follow
    their container one heading level deeper.
    """

    name = "textual"

    def __init__(self, linter: MarkdownLinter | None = None) -> None:
        self._linter = linter or MarkdownLinter()

    def render(self, module: Module, options: RenderOptions) -> bytes:
        level = options.header_level
        lines: List[str] = [f"{heading(level)} {module.name}", ""]
        if module.doc_comment is not None:
            lines.extend([module.doc_comment, ""])

        imports = [decl for decl in module.declarations if decl.category is Category.IMPORT]
        if imports:
            lines.extend([f"{heading(level + 1)} {Category.IMPORT.title}", ""])
            lines.append(f"```{_CODE_LANGUAGE}")
            lines.extend(decl.signature for decl in imports)
            lines.extend(["```", ""])

        current: Optional[Category] = None
        for decl in module.declarations:
            if decl.category is Category.IMPORT:
                continue
            if decl.category is not current:
                current = decl.category
                lines.extend([f"{heading(level + 1)} {current.title}", ""])
            self._render_declaration(lines, decl, options, level + 2)

        return self._linter.lint("\n".join(lines)).encode("utf-8")

    def _render_declaration(
        self, lines: List[str], decl: Declaration, options: RenderOptions, level: int
    ) -> None:
        lines.extend([f"{heading(level)} `{decl.name}`", ""])
        if decl.doc_comment is not None:
            lines.extend([decl.doc_comment, ""])
        if options.include_source:
            lines.extend([f"```{_CODE_LANGUAGE}", decl.signature, "```", ""])
        for member in decl.members:
            self._render_declaration(lines, member, options, level + 1)


__all__ = ["MarkdownRenderer", "heading"]
