"""Utility modules for perlexer.

Provides:
- logger: get_logger for logging, configure_cli_logging for the CLI
"""

from perlexer.utils.logger import configure_cli_logging, get_logger

__all__ = [
    "configure_cli_logging",
    "get_logger",
]
