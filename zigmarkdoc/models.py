"""Core data models shared across zigmarkdoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Category(Enum):
    """Declaration categories in their fixed sort order."""

    IMPORT = "import"
    TYPE_ALIAS = "type_alias"
    ERROR_SET = "error_set"
    ENUM = "enum"
    STRUCT = "struct"
    UNION = "union"
    CONSTANT = "constant"
    VARIABLE = "variable"
    FUNCTION = "function"

    @property
    def order(self) -> int:
        """Bucket index; lower sorts earlier."""
        return _CATEGORY_ORDER[self]

    @property
    def title(self) -> str:
        return _CATEGORY_TITLES[self]

    @property
    def is_container(self) -> bool:
        return self in _CONTAINER_CATEGORIES


_CATEGORY_ORDER = {category: index for index, category in enumerate(Category)}

_CATEGORY_TITLES = {
    Category.IMPORT: "Imports",
    Category.TYPE_ALIAS: "Type Aliases",
    Category.ERROR_SET: "Error Sets",
    Category.ENUM: "Enums",
    Category.STRUCT: "Structs",
    Category.UNION: "Unions",
    Category.CONSTANT: "Constants",
    Category.VARIABLE: "Variables",
    Category.FUNCTION: "Functions",
}

_CONTAINER_CATEGORIES = frozenset(
    {Category.ERROR_SET, Category.ENUM, Category.STRUCT, Category.UNION}
)


class Visibility(Enum):
    """Declaration visibility; public sorts before private."""

    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class Declaration:
    """A named declaration extracted from the source.

    Fields and error-set variants use ``Category.CONSTANT`` so they sort with
    constants; ``is_field`` marks them for renderers.
    """

    name: str
    category: Category
    visibility: Visibility
    doc_comment: Optional[str]
    signature: str
    start_line: int
    end_line: int
    members: Tuple["Declaration", ...] = ()
    is_field: bool = False

    @property
    def fields(self) -> Tuple["Declaration", ...]:
        return tuple(member for member in self.members if member.is_field)

    @property
    def nested(self) -> Tuple["Declaration", ...]:
        """Members that are declarations in their own right (methods, bindings)."""
        return tuple(member for member in self.members if not member.is_field)


@dataclass(frozen=True)
class Module:
    """Documentation view of one Zig source file."""

    path: str
    name: str
    doc_comment: Optional[str] = None
    declarations: Tuple[Declaration, ...] = field(default_factory=tuple)

    @property
    def fields(self) -> Tuple[Declaration, ...]:
        """Root-level container fields (a file is itself a struct)."""
        return tuple(decl for decl in self.declarations if decl.is_field)

    @property
    def nested(self) -> Tuple[Declaration, ...]:
        return tuple(decl for decl in self.declarations if not decl.is_field)


__all__ = ["Category", "Declaration", "Module", "Visibility"]
