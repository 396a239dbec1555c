"""Error taxonomy for zigmarkdoc runs.

Each fatal error maps to a process exit status. A mismatch found by
``--check`` is not an error: the orchestrator reports it as exit status 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .syntax.tree import SyntaxIssue

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_SYNTAX = 2
EXIT_RESOURCE = 3
EXIT_INVOCATION = 4


class ZigmarkdocError(RuntimeError):
    """Base class for fatal zigmarkdoc errors."""

    exit_code = EXIT_INVOCATION


class SourceSyntaxError(ZigmarkdocError):
    """Raised when the input does not parse; extraction never starts."""

    exit_code = EXIT_SYNTAX

    def __init__(self, path: str, issues: Sequence["SyntaxIssue"]) -> None:
        self.path = path
        self.issues = list(issues)
        first = self.issues[0] if self.issues else None
        detail = f"{first.line}:{first.column}: {first.message}" if first else "invalid source"
        super().__init__(f"{path}:{detail}")

    def describe(self) -> str:
        """Return one ``path:line:column: message`` line per issue."""
        if not self.issues:
            return f"{self.path}: invalid source"
        return "\n".join(
            f"{self.path}:{issue.line}:{issue.column}: {issue.message}" for issue in self.issues
        )


class ResourceError(ZigmarkdocError):
    """Raised when reading the input or writing the output fails."""

    exit_code = EXIT_RESOURCE


class InvocationError(ZigmarkdocError):
    """Raised for invalid flag combinations or options."""

    exit_code = EXIT_INVOCATION


class ConfigError(InvocationError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "ConfigError",
    "EXIT_INVOCATION",
    "EXIT_MISMATCH",
    "EXIT_OK",
    "EXIT_RESOURCE",
    "EXIT_SYNTAX",
    "InvocationError",
    "ResourceError",
    "SourceSyntaxError",
    "ZigmarkdocError",
]
