"""Logging configuration for the CLI."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from neogrove.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

_HANDLER_NAME = "neogrove-rich"


def resolve_level(verbose: bool, configured: str | None = None) -> int:
    if verbose:
        return logging.DEBUG
    name = os.getenv(LOG_LEVEL_ENV_VAR) or configured or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False, level: str | None = None) -> logging.Logger:
    """Route the package logger to stderr through rich.

    Stdout stays reserved for command output.
    """
    root = logging.getLogger("neogrove")
    root.setLevel(resolve_level(verbose, level))
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=verbose,
            rich_tracebacks=verbose,
        )
        handler.name = _HANDLER_NAME
        root.addHandler(handler)
    root.propagate = False
    return root


def silent_logger(name: str) -> logging.Logger:
    """A logger that drops everything, for noisy collaborators."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
