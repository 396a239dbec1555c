"""Declaration extraction and classification."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import Category, Declaration, Visibility
from ..syntax import Ast, Node, declaration_start, end_line_of, is_public, line_of
from ..syntax.tree import BINDING, COMMENT, FIELD, FUNCTION, TEST
from .doc_comments import declaration_doc_comment
from .signatures import binding_signature, braced_signature, field_signature, function_signature

_LOGGER = get_logger("extract")

_IMPORT_BUILTIN = "@import"
_ERROR_SET = "error_set_declaration"

_INITIALIZER_CATEGORIES = {
    "struct_declaration": Category.STRUCT,
    "union_declaration": Category.UNION,
    "enum_declaration": Category.ENUM,
    # opaque types have no fields worth listing; they document as aliases.
    "opaque_declaration": Category.TYPE_ALIAS,
    _ERROR_SET: Category.ERROR_SET,
    "function_signature": Category.TYPE_ALIAS,
}

_BRACED = frozenset(
    {"struct_declaration", "union_declaration", "enum_declaration", "opaque_declaration", _ERROR_SET}
)


def binding_parts(node: Node) -> Tuple[str, Optional[Node], Optional[Node]]:
    """Split a ``const``/``var`` binding into keyword, name and initializer."""
    keyword = "const"
    name: Optional[Node] = None
    init: Optional[Node] = None
    after_equals = False
    for child in node.children:
        if child.type == COMMENT:
            continue
        if after_equals:
            init = child
            break
        if child.type in ("const", "var") and name is None:
            keyword = child.type
        elif child.type == "identifier" and name is None:
            name = child
        elif child.type == "=":
            after_equals = True
    return keyword, name, init


def _is_import(ast: Ast, init: Node) -> bool:
    leaf = init
    while leaf.child_count:
        first = leaf.child(0)
        if first is None:
            break
        leaf = first
    return ast.text(leaf) == _IMPORT_BUILTIN


def classify_binding(ast: Ast, node: Node) -> Category:
    """Pick the category of a ``const``/``var`` binding from its initializer."""
    keyword, _, init = binding_parts(node)
    fallback = Category.VARIABLE if keyword == "var" else Category.CONSTANT
    if init is None:
        return fallback
    if _is_import(ast, init):
        return Category.IMPORT
    return _INITIALIZER_CATEGORIES.get(init.type, fallback)


class DeclarationExtractor:
    """Turns parsed container members into ``Declaration`` records.

    Private declarations are dropped unless ``include_private`` is set; fields
    are always kept. Tests and shapes other than bindings, functions and
    fields are skipped and only reported at debug level.
    """

    def __init__(self, ast: Ast, *, include_private: bool = False) -> None:
        if ast.has_errors:
            raise ValueError("cannot extract declarations from a tree with syntax errors")
        self.ast = ast
        self.include_private = include_private

    def extract(self) -> List[Declaration]:
        """Declarations of the document's top level, in source order."""
        return self.extract_members(self.ast.members())

    def extract_members(self, members: Sequence[Node]) -> List[Declaration]:
        declarations: List[Declaration] = []
        for member in members:
            declaration = self.extract_declaration(member)
            if declaration is not None:
                declarations.append(declaration)
        return declarations

    def extract_declaration(self, node: Node) -> Optional[Declaration]:
        if node.type == FIELD:
            return self._field(node)
        if node.type == TEST:
            _LOGGER.debug("Skipping test declaration at line %d", line_of(node))
            return None
        if node.type not in (BINDING, FUNCTION):
            _LOGGER.debug(
                "Skipping unsupported %s at line %d",
                node.type,
                line_of(declaration_start(node)),
            )
            return None

        visibility = self.visibility_of(node)
        if visibility is Visibility.PRIVATE and not self.include_private:
            return None
        if node.type == BINDING:
            return self._binding(node, visibility)
        return self._function(node, visibility)

    def visibility_of(self, node: Node) -> Visibility:
        return Visibility.PUBLIC if is_public(node) else Visibility.PRIVATE

    # ------------------------------------------------------------------
    # Internal helpers

    def _skip_unnamed(self, node: Node) -> None:
        _LOGGER.debug("Skipping unnamed %s at line %d", node.type, line_of(node))

    def _binding(self, node: Node, visibility: Visibility) -> Optional[Declaration]:
        _, name, init = binding_parts(node)
        if name is None:
            self._skip_unnamed(node)
            return None
        category = classify_binding(self.ast, node)
        members: List[Declaration] = []
        if init is not None and init.type in _BRACED:
            signature = braced_signature(self.ast, node, init)
            if category.is_container:
                members = self.extract_members(self.ast.members(init))
            elif category is Category.ERROR_SET:
                members = self._error_set_members(init)
        else:
            signature = binding_signature(self.ast, node)

        return Declaration(
            name=self.ast.text(name),
            category=category,
            visibility=visibility,
            doc_comment=declaration_doc_comment(self.ast, node),
            signature=signature,
            start_line=line_of(declaration_start(node)),
            end_line=end_line_of(node),
            members=tuple(members),
        )

    def _function(self, node: Node, visibility: Visibility) -> Optional[Declaration]:
        name = node.child_by_field_name("name")
        if name is None:
            self._skip_unnamed(node)
            return None
        signature = function_signature(self.ast, node)
        start_line = line_of(declaration_start(node))
        return Declaration(
            name=self.ast.text(name),
            category=Category.FUNCTION,
            visibility=visibility,
            doc_comment=declaration_doc_comment(self.ast, node),
            signature=signature,
            start_line=start_line,
            end_line=start_line + signature.count("\n"),
        )

    def _field(self, node: Node) -> Optional[Declaration]:
        # Enum variants and tuple fields carry only the ``type`` part.
        name = node.child_by_field_name("name") or node.child_by_field_name("type")
        if name is None:
            self._skip_unnamed(node)
            return None
        return Declaration(
            name=self.ast.text(name),
            category=Category.CONSTANT,
            visibility=Visibility.PUBLIC,
            doc_comment=declaration_doc_comment(self.ast, node),
            signature=field_signature(self.ast, node),
            start_line=line_of(node),
            end_line=end_line_of(node),
            is_field=True,
        )

    def _error_set_members(self, error_set: Node) -> List[Declaration]:
        members: List[Declaration] = []
        for child in self.ast.members(error_set):
            if child.type != "identifier":
                continue
            name = self.ast.text(child)
            line = line_of(child)
            members.append(
                Declaration(
                    name=name,
                    category=Category.CONSTANT,
                    visibility=Visibility.PUBLIC,
                    doc_comment=declaration_doc_comment(self.ast, child),
                    signature=name,
                    start_line=line,
                    end_line=line,
                    is_field=True,
                )
            )
        return members


__all__ = ["DeclarationExtractor", "binding_parts", "classify_binding"]
