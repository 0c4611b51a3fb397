"""Exception and diagnostic classes for perlexer.

Lexing never raises: problems found while scanning are collected as
LexWarning values and returned next to the token stream. Exceptions are
reserved for the surrounding pipeline (canonicalizer, scoring).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from perlexer.location import SourceLocation


class PerlexerError(Exception):
    """Base exception for all perlexer errors.

    Subclass this for specific error categories.
    """

    pass


class CanonicalizerError(PerlexerError):
    """The external canonicalizer could not re-serialize a program.

    Raised on a non-zero exit status, a timeout, or a missing executable.
    The input is skipped; this is never a tokenizer fault.
    """

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize canonicalizer error.

        Args:
            message: Error description
            returncode: Child exit status, if the child ran at all
            stderr: Captured standard error of the child (optional)
        """
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class EmptyStreamError(PerlexerError):
    """A filtered token sequence is empty, so no score can be computed."""

    pass


class WarningKind(Enum):
    """Categories of non-fatal lexer diagnostics."""

    UNTERMINATED = "unterminated"  # quote, heredoc, pod or format never closed
    UNRECOGNIZED = "unrecognized"  # no rule matched at the cursor
    IMBALANCE = "imbalance"  # bracket or variable counters off at end of input
    NESTING = "nesting"  # delimiter nesting exceeded the configured depth


@dataclass(frozen=True, slots=True)
class LexWarning:
    """A non-fatal problem found while tokenizing.

    Attributes:
        kind: Warning category
        message: Human-readable description
        offset: Offset of the offending construct in the source
        location: Line/column of the offset (optional)

    """

    kind: WarningKind
    message: str
    offset: int
    location: SourceLocation | None = None

    def __str__(self) -> str:
        """Format as "3:7: message" or "offset 42: message"."""
        if self.location is not None:
            return f"{self.location}: {self.message}"
        return f"offset {self.offset}: {self.message}"
