"""Zig syntax trees built with tree-sitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import tree_sitter_zig
from tree_sitter import Language, Node, Parser, Tree

DOC_MARKER = "///"
CONTAINER_DOC_MARKER = "//!"

COMMENT = "comment"
BINDING = "variable_declaration"
FUNCTION = "function_declaration"
FIELD = "container_field"
TEST = "test_declaration"

_ISSUE_SNIPPET_LIMIT = 20

_PARSER: Optional[Parser] = None


@dataclass(frozen=True)
class SyntaxIssue:
    """A syntax problem at a 1-based line and column."""

    line: int
    column: int
    message: str


@dataclass(frozen=True)
class Ast:
    """A parsed document: the UTF-8 source, its tree and any syntax issues."""

    source: bytes
    tree: Tree
    errors: Tuple[SyntaxIssue, ...] = ()

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        return bool(self.errors) or self.root.has_error

    def text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8", errors="replace")

    def line_end(self, offset: int) -> int:
        """Byte offset of the newline ending the line that holds ``offset``."""
        end = self.source.find(b"\n", offset)
        return len(self.source) if end < 0 else end

    def members(self, container: Optional[Node] = None) -> List[Node]:
        """Named children of ``container`` (the document when omitted).

        Comments are left out, and so is everything before a container's
        opening brace (layout, backing types, tag types).
        """
        node = container if container is not None else self.root
        inside = container is None
        found: List[Node] = []
        for child in node.children:
            if not inside:
                inside = child.type == "{"
                continue
            if child.is_named and child.type != COMMENT:
                found.append(child)
        return found


def is_doc_comment(text: str) -> bool:
    # Four or more slashes make an ordinary comment.
    return text.startswith(DOC_MARKER) and not text.startswith("////")


def is_container_doc_comment(text: str) -> bool:
    return text.startswith(CONTAINER_DOC_MARKER)


def declaration_start(node: Node) -> Node:
    """First node of a declaration, including a ``pub`` kept as a sibling."""
    previous = node.prev_sibling
    if previous is not None and previous.type == "pub":
        return previous
    return node


def is_public(node: Node) -> bool:
    first = declaration_start(node)
    if first.type == "pub":
        return True
    keyword = node.child(0)
    return keyword is not None and keyword.type == "pub"


def line_of(node: Node) -> int:
    return node.start_point.row + 1


def end_line_of(node: Node) -> int:
    return node.end_point.row + 1


def _get_parser() -> Parser:
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser(Language(tree_sitter_zig.language()))
    return _PARSER


def parse(source: str) -> Ast:
    """Parse ``source`` and collect every error or missing node as an issue."""
    source_bytes = source.encode("utf-8")
    tree = _get_parser().parse(source_bytes)
    issues: List[SyntaxIssue] = []
    if tree.root_node.has_error:
        _collect_issues(tree.root_node, source_bytes, issues)
        if not issues:
            issues.append(SyntaxIssue(1, 1, "invalid syntax"))
    ordered = sorted(set(issues), key=lambda issue: (issue.line, issue.column, issue.message))
    return Ast(source=source_bytes, tree=tree, errors=tuple(ordered))


def _collect_issues(node: Node, source: bytes, issues: List[SyntaxIssue]) -> None:
    if node.is_missing:
        issues.append(_issue_at(node, source, f"missing '{node.type}'"))
        return
    if node.is_error:
        issues.append(_issue_at(node, source, _unexpected(node, source)))
        return
    for child in node.children:
        if child.has_error or child.is_missing:
            _collect_issues(child, source, issues)


def _unexpected(node: Node, source: bytes) -> str:
    words = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace").split()
    if not words:
        return "unexpected end of file"
    return f"unexpected '{words[0][:_ISSUE_SNIPPET_LIMIT]}'"


def _issue_at(node: Node, source: bytes, message: str) -> SyntaxIssue:
    offset = node.start_byte
    line_start = source.rfind(b"\n", 0, offset) + 1
    column = len(source[line_start:offset].decode("utf-8", errors="replace")) + 1
    return SyntaxIssue(line=node.start_point.row + 1, column=column, message=message)


__all__ = [
    "Ast",
    "BINDING",
    "COMMENT",
    "CONTAINER_DOC_MARKER",
    "DOC_MARKER",
    "FIELD",
    "FUNCTION",
    "Node",
    "SyntaxIssue",
    "TEST",
    "declaration_start",
    "end_line_of",
    "is_container_doc_comment",
    "is_doc_comment",
    "is_public",
    "line_of",
    "parse",
]
