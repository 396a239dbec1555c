"""Pipeline orchestration: read, extract, render, then write or check."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from .config import RunConfig
from .errors import EXIT_MISMATCH, EXIT_OK, ResourceError, SourceSyntaxError
from .extract import build_module
from .logging import get_logger
from .models import Module
from .render import Renderer, get_renderer
from .syntax import SyntaxIssue

MAX_SOURCE_BYTES = 10 * 1024 * 1024


class Orchestrator:
    """Coordinates one documentation run for a single Zig source file."""

    def __init__(self, renderer_factory: Callable[[str], Renderer] | None = None) -> None:
        self.renderer_factory = renderer_factory or get_renderer
        self.logger = get_logger("orchestrator")

    def run(self, config: RunConfig, *, stdout: Optional[BinaryIO] = None) -> int:
        """Execute a run and return the process exit status.

        Fatal problems raise ``ZigmarkdocError`` subclasses; a ``--check``
        mismatch is reported through the return value.
        """
        config.validate()
        self.logger.debug("Starting %s run for %s", config.output_format, config.input_path)

        source = self.read_source(config.input_path)
        output = self.generate(source, str(config.input_path), config)

        output_path = config.output_path
        if output_path is None:
            stream = stdout if stdout is not None else sys.stdout.buffer
            stream.write(output)
            stream.flush()
            return EXIT_OK

        # validate() rejects --check without an output path.
        if config.check:
            return self.check(output_path, output)
        self.write(output_path, output)
        self.logger.info("Documentation written to %s", output_path)
        return EXIT_OK

    def build(self, source: str, path: str, config: RunConfig) -> Module:
        return build_module(source, path, include_private=config.include_private)

    def generate(self, source: str, path: str, config: RunConfig) -> bytes:
        """Render ``source`` in the configured format."""
        module = self.build(source, path, config)
        renderer = self.renderer_factory(config.output_format)
        self.logger.debug(
            "Rendering %d top-level declarations with %s renderer",
            len(module.declarations),
            renderer.name,
        )
        return renderer.render(module, config.render_options())

    def read_source(self, path: Path) -> str:
        try:
            size = path.stat().st_size
            if size > MAX_SOURCE_BYTES:
                raise ResourceError(
                    f"Input file '{path}' is too large ({size} bytes, limit {MAX_SOURCE_BYTES})"
                )
            data = path.read_bytes()
        except OSError as exc:
            raise ResourceError(f"Error reading file '{path}': {exc.strerror or exc}") from exc
        if len(data) > MAX_SOURCE_BYTES:
            raise ResourceError(
                f"Input file '{path}' is too large ({len(data)} bytes, limit {MAX_SOURCE_BYTES})"
            )
        self.logger.debug("Read %d bytes from %s", len(data), path)
        return decode_source(data, str(path))

    def check(self, output_path: Path, output: bytes) -> int:
        """Compare ``output`` with the file on disk; never writes."""
        try:
            existing = output_path.read_bytes()
        except OSError as exc:
            raise ResourceError(
                f"Error reading existing file '{output_path}' for check: {exc.strerror or exc}"
            ) from exc
        if existing != output:
            self.logger.error(
                "Documentation mismatch: %s would differ from freshly generated output",
                output_path,
            )
            return EXIT_MISMATCH
        self.logger.info("%s is up to date", output_path)
        return EXIT_OK

    def write(self, output_path: Path, output: bytes) -> None:
        """Write ``output`` through a temporary sibling and an atomic rename."""
        directory = output_path.parent
        temp_name: Optional[str] = None
        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{output_path.name}.", suffix=".tmp", dir=str(directory)
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(output)
            os.replace(temp_name, output_path)
            temp_name = None
        except OSError as exc:
            raise ResourceError(
                f"Error writing output file '{output_path}': {exc.strerror or exc}"
            ) from exc
        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)


def decode_source(data: bytes, path: str) -> str:
    """Decode UTF-8 input; a leading byte-order mark is dropped.

    Undecodable bytes are reported as a syntax error at their position.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        line = data.count(b"\n", 0, exc.start) + 1
        line_start = data.rfind(b"\n", 0, exc.start) + 1
        column = exc.start - line_start + 1
        raise SourceSyntaxError(path, [SyntaxIssue(line, column, "invalid UTF-8 byte sequence")]) from exc


__all__ = ["MAX_SOURCE_BYTES", "Orchestrator", "decode_source"]
