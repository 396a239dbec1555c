"""CLI entrypoint for zigmarkdoc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from . import __version__
from .config import FileSettings, load_config, merge_settings
from .errors import EXIT_INVOCATION, SourceSyntaxError, ZigmarkdocError
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator
from .render import FORMATS


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with the invocation exit status."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_INVOCATION, f"{self.prog}: error: {message}\n")


def _add_verbose_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="zigmarkdoc",
        description="Generate deterministic API documentation from a Zig source file.",
    )
    parser.add_argument("input", help="Zig source file to document.")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write output to this file instead of stdout.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compare generated output with --output and exit 1 if it differs; never writes.",
    )
    parser.add_argument(
        "-p",
        "--include-private",
        action="store_true",
        default=None,
        help="Include non-public declarations.",
    )
    parser.add_argument(
        "--no-source",
        dest="source",
        action="store_false",
        default=None,
        help="Omit declaration signatures from the output.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output encoding (default: textual).",
    )
    parser.add_argument(
        "--header-level",
        type=int,
        default=None,
        metavar="N",
        help="Heading level of the module title, 1-6 (default: 1).",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="YAML file providing defaults for the options above.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"zigmarkdoc {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    try:
        file_settings = load_config(Path(args.config)) if args.config else FileSettings()
        config = merge_settings(
            Path(args.input),
            output_path=Path(args.output) if args.output else None,
            check=bool(args.check),
            include_private=args.include_private,
            source=args.source,
            output_format=args.format,
            header_level=args.header_level,
            file_settings=file_settings,
        )
        return Orchestrator().run(config)
    except SourceSyntaxError as exc:
        logger.debug("Parsing %s failed with %d issue(s)", exc.path, len(exc.issues))
        parser.exit(exc.exit_code, f"{exc.describe()}\n")
    except ZigmarkdocError as exc:
        parser.exit(exc.exit_code, f"zigmarkdoc: {exc}\n")


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
