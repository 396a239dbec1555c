"""Build the sorted documentation model of a Zig source file."""

from __future__ import annotations

from pathlib import PurePath

from ..errors import SourceSyntaxError
from ..logging import get_logger
from ..models import Module
from ..syntax import parse
from .declarations import DeclarationExtractor, classify_binding
from .doc_comments import declaration_doc_comment, module_doc_comment
from .sorting import sort_declarations, sort_key

_LOGGER = get_logger("extract")


def module_name(path: str) -> str:
    """File stem of ``path`` (``src/http.zig`` -> ``http``)."""
    return PurePath(path).stem


def build_module(source: str, path: str, *, include_private: bool = False) -> Module:
    """Parse, extract and sort ``source``.

    Raises ``SourceSyntaxError`` when the source does not parse.
    """
    ast = parse(source)
    if ast.has_errors:
        raise SourceSyntaxError(path, ast.errors)

    extractor = DeclarationExtractor(ast, include_private=include_private)
    declarations = sort_declarations(extractor.extract())
    _LOGGER.debug("Extracted %d top-level declarations from %s", len(declarations), path)
    return Module(
        path=path,
        name=module_name(path),
        doc_comment=module_doc_comment(ast),
        declarations=declarations,
    )


__all__ = [
    "DeclarationExtractor",
    "build_module",
    "classify_binding",
    "declaration_doc_comment",
    "module_doc_comment",
    "module_name",
    "sort_declarations",
    "sort_key",
]
