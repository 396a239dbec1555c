"""Body-free signature extraction.

Signatures are verbatim slices of the source, trimmed of surrounding
whitespace. Container and error-set signatures stop before the opening
brace, function signatures stop after the prototype.
"""

from __future__ import annotations

from ..syntax import Ast, Node, declaration_start
from ..syntax.tree import COMMENT

_TRIM = " \n\r\t"

# Children of a function declaration that never end its prototype.
_AFTER_PROTOTYPE = frozenset({";", COMMENT})


def source_range(ast: Ast, start: int, end: int) -> str:
    """Source between two byte offsets."""
    return ast.slice(start, end).strip(_TRIM)


def source_lines(ast: Ast, start: int, last: int) -> str:
    """Source from ``start`` to the end of the line holding byte ``last``."""
    return ast.slice(start, ast.line_end(last)).strip(_TRIM)


def braced_signature(ast: Ast, decl: Node, literal: Node) -> str:
    """Signature of a binding whose initializer is a braced literal."""
    start = declaration_start(decl).start_byte
    for child in literal.children:
        if child.type == "{":
            return source_range(ast, start, child.start_byte)
    return source_range(ast, start, literal.end_byte)


def function_signature(ast: Ast, node: Node) -> str:
    start = declaration_start(node).start_byte
    body = node.child_by_field_name("body")
    if body is None:
        blocks = [child for child in node.children if child.type == "block"]
        body = blocks[-1] if blocks else None
    stop = body.start_byte if body is not None else node.end_byte
    end = start
    for child in node.children:
        if child.start_byte >= stop:
            break
        if child.type not in _AFTER_PROTOTYPE:
            end = child.end_byte
    return source_range(ast, start, end)


def binding_signature(ast: Ast, node: Node) -> str:
    return source_lines(ast, declaration_start(node).start_byte, max(node.end_byte - 1, node.start_byte))


def field_signature(ast: Ast, node: Node) -> str:
    return source_lines(ast, node.start_byte, max(node.end_byte - 1, node.start_byte))


__all__ = [
    "binding_signature",
    "braced_signature",
    "field_signature",
    "function_signature",
    "source_lines",
    "source_range",
]
