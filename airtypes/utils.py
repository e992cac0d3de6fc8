"""Utility functions for writing generated output and JSON reports."""

import json
from pathlib import Path
from typing import Any, TextIO
import sys

from .logging_config import get_logger

logger = get_logger(__name__)


class OutputError(Exception):
    """Raised when the generated file cannot be written."""

    pass


def write_output(path: str | Path, contents: str) -> Path:
    """Write generated contents to ``path`` in one go.

    Args:
        path: Destination file; missing parent directories are created.
        contents: Complete rendered document.

    Returns:
        The path written.

    Raises:
        OutputError: If the directory or file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing file {path}: {e}")
        raise OutputError(f"Error writing file {path}: {e}") from e

    logger.debug(f"Wrote {len(contents)} characters to {path}")
    return path


def format_json(value: Any, plain: bool = False) -> str:
    """Serialize ``value`` as pretty (or compact when ``plain``) JSON."""
    if plain:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(value, indent=2, ensure_ascii=False)


def emit_json(value: Any, plain: bool = False, stream: TextIO | None = None) -> None:
    """Write ``value`` as JSON followed by a newline to stdout."""
    stream = stream or sys.stdout
    stream.write(f"{format_json(value, plain)}\n")
