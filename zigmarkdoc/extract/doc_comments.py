"""Doc-comment collection for modules and declarations."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..syntax import Ast, Node, declaration_start, is_container_doc_comment, is_doc_comment
from ..syntax.tree import COMMENT, CONTAINER_DOC_MARKER, DOC_MARKER


def normalise_line(text: str, marker: str) -> str:
    """Strip the comment marker, at most one leading space and trailing whitespace."""
    content = text[len(marker) :] if text.startswith(marker) else text
    if content.startswith(" "):
        content = content[1:]
    return content.rstrip()


def _join(lines: Iterable[str]) -> Optional[str]:
    text = "\n".join(lines)
    return text or None


def module_doc_comment(ast: Ast) -> Optional[str]:
    """Return the leading ``//!`` run of the document, or ``None``.

    Ordinary comments before or inside the run are skipped.
    """
    lines: List[str] = []
    for child in ast.root.children:
        if child.type != COMMENT:
            break
        text = ast.text(child)
        if is_container_doc_comment(text):
            lines.append(normalise_line(text, CONTAINER_DOC_MARKER))
        elif is_doc_comment(text):
            break
    return _join(lines)


def declaration_doc_comment(ast: Ast, node: Node) -> Optional[str]:
    """Return the ``///`` run immediately preceding ``node``, or ``None``.

    Ordinary comments and blank lines between the run and the declaration
    are invisible; any other sibling, ``//!`` lines included, ends the run.
    """
    run: List[str] = []
    sibling = declaration_start(node).prev_sibling
    while sibling is not None and sibling.type == COMMENT:
        text = ast.text(sibling)
        if is_doc_comment(text):
            run.append(normalise_line(text, DOC_MARKER))
        elif is_container_doc_comment(text):
            break
        sibling = sibling.prev_sibling
    run.reverse()
    return _join(run)


__all__ = ["declaration_doc_comment", "module_doc_comment", "normalise_line"]
