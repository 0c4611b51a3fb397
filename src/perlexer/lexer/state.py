"""Mutable context carried across one scan.

Every flag here disambiguates the next rule attempt. The Lexer owns one
LexerState per tokenize() call; nothing in it is shared.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PendingHeredoc:
    """A heredoc terminator waiting for the next line break.

    Attributes:
        terminator: Text the closing line must equal
        indented: ``<<~`` form; the closing line may carry leading blanks
        offset: Offset of the ``<<`` marker (for warnings)

    """

    terminator: str
    indented: bool = False
    offset: int = 0


@dataclass(slots=True)
class LexerState:
    """Context flags for the rule table.

    Attributes:
        regex: Expect an operand; a ``/`` starts a pattern, not a division
        variable: Sigils seen whose name has not been read yet
        flat: Directly after a sigil, variable or ``->``; a word followed by
            ``}`` is a hash key, not a keyword
        canpod: At statement start; a ``=word`` line opens POD
        proto: After ``sub``; parentheses hold a prototype
        format: After a ``format`` keyword, waiting for its ``=``
        expect_format: A format body starts at the next line break
        parens: Round bracket depth
        curlies: Curly bracket depth
        brackets: Square bracket depth
        heredocs: Terminators awaiting resolution, oldest first

    """

    regex: bool = True
    variable: int = 0
    flat: bool = False
    canpod: bool = True
    proto: bool = False
    format: bool = False
    expect_format: bool = False
    parens: int = 0
    curlies: int = 0
    brackets: int = 0
    heredocs: deque[PendingHeredoc] = field(default_factory=deque)

    @property
    def has_pending_body(self) -> bool:
        """True if a heredoc or format body waits for the next line break."""
        return self.expect_format or bool(self.heredocs)
