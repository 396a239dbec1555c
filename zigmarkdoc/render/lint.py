"""Whitespace normalisation for rendered markdown."""

from __future__ import annotations

from typing import List

_FENCE = "```"


class MarkdownLinter:
    """Normalises line endings and blank lines outside code fences.

    Fenced lines are kept as they are apart from line endings, since they
    hold verbatim source.
    """

    def lint(self, markdown: str) -> str:
        normalized = markdown.replace("\r\n", "\n").replace("\r", "\n")
        cleaned: List[str] = []
        in_code = False

        for line in normalized.split("\n"):
            if line.startswith(_FENCE):
                in_code = not in_code
                cleaned.append(line.rstrip())
                continue
            if in_code:
                cleaned.append(line)
                continue

            stripped = line.rstrip()
            if not stripped:
                if cleaned and cleaned[-1] != "":
                    cleaned.append("")
                continue
            if stripped.startswith("#") and cleaned and cleaned[-1] != "":
                cleaned.append("")
            cleaned.append(stripped)

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"


__all__ = ["MarkdownLinter"]
