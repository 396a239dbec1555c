"""Canonical declaration ordering."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Tuple

from ..models import Declaration, Visibility


def sort_key(declaration: Declaration) -> Tuple[int, int, bytes, bytes]:
    """Category bucket, then public before private, then name bytes.

    The signature breaks the remaining ties so the order stays total.
    """
    return (
        declaration.category.order,
        0 if declaration.visibility is Visibility.PUBLIC else 1,
        declaration.name.encode("utf-8"),
        declaration.signature.encode("utf-8"),
    )


def sort_declarations(declarations: Iterable[Declaration]) -> Tuple[Declaration, ...]:
    """Return ``declarations`` ordered at every nesting level."""
    ordered = [
        replace(declaration, members=sort_declarations(declaration.members))
        if declaration.members
        else declaration
        for declaration in declarations
    ]
    ordered.sort(key=sort_key)
    return tuple(ordered)


__all__ = ["sort_declarations", "sort_key"]
