"""Deterministic Markdown and JSON documentation for Zig source files."""

__version__ = "0.1.0"

__all__ = ["__version__"]
