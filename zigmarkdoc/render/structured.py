"""JSON (structured-data) renderer."""

from __future__ import annotations

import json
from typing import Dict, List, Sequence

from ..models import Declaration, Module
from .base import RenderOptions, Renderer


class StructuredRenderer(Renderer):
    """Encodes the module as a nested JSON record tree.

    Every record carries ``doc`` (``null`` when absent). The module and each
    container split their members into ``fields`` (fields and error-set
    variants; at the module level, root fields of a file-as-struct) and
    ``declarations`` (nested bindings and methods). ``signature`` is left
    out when sources are disabled.
    """

    name = "structured"

    def render(self, module: Module, options: RenderOptions) -> bytes:
        payload: Dict[str, object] = {
            "name": module.name,
            "doc": module.doc_comment,
            "fields": self._fields(module.fields, options),
            "declarations": self._declarations(module.nested, options),
        }
        text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

    def _fields(self, fields: Sequence[Declaration], options: RenderOptions) -> List[Dict[str, object]]:
        records: List[Dict[str, object]] = []
        for member in fields:
            record: Dict[str, object] = {
                "name": member.name,
                "visibility": member.visibility.value,
                "doc": member.doc_comment,
            }
            if options.include_source:
                record["signature"] = member.signature
            records.append(record)
        return records

    def _declarations(
        self, declarations: Sequence[Declaration], options: RenderOptions
    ) -> List[Dict[str, object]]:
        records: List[Dict[str, object]] = []
        for member in declarations:
            record: Dict[str, object] = {
                "name": member.name,
                "category": member.category.value,
                "visibility": member.visibility.value,
                "doc": member.doc_comment,
                "fields": self._fields(member.fields, options),
                "declarations": self._declarations(member.nested, options),
            }
            if options.include_source:
                record["signature"] = member.signature
            records.append(record)
        return records


__all__ = ["StructuredRenderer"]
