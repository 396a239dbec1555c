"""Zig syntax trees from the tree-sitter Zig grammar."""

from .tree import (
    Ast,
    Node,
    SyntaxIssue,
    declaration_start,
    end_line_of,
    is_container_doc_comment,
    is_doc_comment,
    is_public,
    line_of,
    parse,
)

__all__ = [
    "Ast",
    "Node",
    "SyntaxIssue",
    "declaration_start",
    "end_line_of",
    "is_container_doc_comment",
    "is_doc_comment",
    "is_public",
    "line_of",
    "parse",
]
