"""Minimal logging utilities for perlexer.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from perlexer.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Tokenizing %d characters", 120)
"""

from __future__ import annotations

import logging
import sys


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "perlexer." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'perlexer.mymodule'
    """
    if not (name == "perlexer" or name.startswith("perlexer.")):
        name = f"perlexer.{name}"
    return logging.getLogger(name)


def configure_cli_logging(debug: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger for command-line use.

    Repeated calls replace the handler, so it always writes to the
    current sys.stderr.

    Args:
        debug: Emit DEBUG records (per-warning lexer traces) when True

    Returns:
        The package root logger
    """
    root = logging.getLogger("perlexer")
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in list(root.handlers):
        if getattr(handler, "_perlexer_cli", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handler._perlexer_cli = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
