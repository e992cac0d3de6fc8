"""Logging setup shared by every airtypes module.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach a rich handler writing to stderr.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "airtypes"


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the ``airtypes`` namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def resolve_level(
    verbose: bool = False, quiet: bool = False, json_output: bool = False
) -> int:
    """Pick the log level for the given CLI flags.

    Errors are always shown. Quiet mode and JSON mode (unless verbose)
    keep stdout clean by hiding everything below ERROR.
    """
    if quiet:
        return logging.ERROR
    if json_output and not verbose:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    json_output: bool = False,
    color: bool = True,
) -> logging.Logger:
    """Configure the ``airtypes`` logger and return it.

    Args:
        verbose: Emit debug messages.
        quiet: Suppress everything but errors.
        json_output: Machine-readable mode; behaves like quiet unless verbose.
        color: Allow colored output (also disabled by ``NO_COLOR``).

    Returns:
        The configured package logger.
    """
    use_color = color and "NO_COLOR" not in os.environ
    console = Console(stderr=True, no_color=not use_color, highlight=False)

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(resolve_level(verbose, quiet, json_output))

    return logger
