"""Command-line interface for airtypes.

Commands: ``generate`` (default), ``validate`` and ``print-config``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from rich.console import Console

from . import __version__
from .codegen.core.errors import GeneratorError
from .codegen.core.generator import GenerationOptions
from .codegen.core.templates import TemplateError
from .config import (
    ConfigError,
    load_config,
    read_config_file,
    redact_config,
    resolve_config_path,
)
from .fetcher import FetchError
from .logging_config import get_logger, setup_logging
from .pipeline import generate_types
from .utils import OutputError, emit_json, format_json

logger = get_logger(__name__)

COMMANDS = ("generate", "validate", "print-config")

# Errors reported as a one-line message with exit code 1
RUN_ERRORS = (
    ConfigError,
    FetchError,
    GeneratorError,
    TemplateError,
    OutputError,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the airtypes CLI."""
    parser = argparse.ArgumentParser(
        prog="airtypes",
        description="Generate Zod schemas and TypeScript types from Airtable bases.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="generate",
        choices=COMMANDS,
        help="generate types (default), validate the config, or print it",
    )
    parser.add_argument("-c", "--config", metavar="PATH", help="Path to config TOML")
    parser.add_argument(
        "--config-file", metavar="PATH", help="Alias for --config"
    )
    parser.add_argument("-o", "--out", metavar="PATH", help="Override output path")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable output to stdout",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Emit compact JSON (no whitespace) and no color",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Disable color output",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress non-error output"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--no-links",
        dest="links",
        action="store_false",
        help="Do not emit links metadata",
    )
    parser.add_argument(
        "--no-record-schema",
        dest="record_schema",
        action="store_false",
        help="Do not emit recordSchema helpers",
    )
    parser.add_argument(
        "-n", "--dry-run", action="store_true", help="Do not write output file"
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Output the version number",
    )
    return parser


class CLIHandler:
    """Run airtypes commands for parsed arguments."""

    def __init__(self, args: argparse.Namespace, cwd: Path | None = None) -> None:
        self.args = args
        self.cwd = cwd or Path.cwd()
        self.console = Console(
            no_color=not args.color or args.plain, highlight=False, soft_wrap=True
        )

    def config_path(self) -> Path:
        return resolve_config_path(self.cwd, self.args.config, self.args.config_file)

    def emit(self, value: Any) -> None:
        emit_json(value, plain=self.args.plain)

    def run(self) -> int:
        """Dispatch to the selected command and return the exit code."""
        handlers = {
            "generate": self._handle_generate,
            "validate": self._handle_validate,
            "print-config": self._handle_print_config,
        }
        handlers[self.args.command]()
        return 0

    def _handle_generate(self) -> None:
        config = load_config(self.config_path(), out=self.args.out, cwd=self.cwd)
        options = GenerationOptions(
            include_links=self.args.links,
            include_record_schema=self.args.record_schema,
        )
        result = generate_types(config, options=options, dry_run=self.args.dry_run)

        if self.args.json:
            self.emit(result.to_dict())
        elif not self.args.quiet:
            suffix = " [yellow](dry-run)[/yellow]" if result.dry_run else ""
            self.console.print(
                f"✅ [green]Generated {result.table_count} table(s) "
                f"from {len(result.bases)} base(s)[/green] -> {result.output_path}{suffix}"
            )

    def _handle_validate(self) -> None:
        load_config(self.config_path(), out=self.args.out, cwd=self.cwd)
        if self.args.json:
            self.emit({"valid": True})
            return
        logger.info("Config is valid.")

    def _handle_print_config(self) -> None:
        sanitized = redact_config(read_config_file(self.config_path()))
        if self.args.json:
            self.emit(sanitized)
            return
        sys.stdout.write(f"{format_json(sanitized, plain=self.args.plain)}\n")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv``.

    Returns:
        Exit code: 0 on success, 1 on run errors. Usage errors exit with 2.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        json_output=args.json,
        color=args.color and not args.plain,
    )

    try:
        return CLIHandler(args).run()
    except RUN_ERRORS as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
