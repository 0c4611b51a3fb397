"""Heredoc scanner mixin.

A heredoc is declared at ``<<TERM`` but its body starts on the next line.
The lexer queues the terminator and keeps scanning the declaring line;
at the next line break the oldest queued terminator is resolved. Several
heredocs on one line therefore resolve in declaration order:

    print <<A, <<B;
    body of A
    A
    body of B
    B

Supported markers: ``<<TERM``, ``<<"TERM"``, ``<<'TERM'``, ``<<\\TERM`` and
the indented forms ``<<~TERM``, ``<<~"TERM"`` (closing line may be
indented).
"""

from __future__ import annotations

from collections.abc import Callable

from perlexer.charsets import H_SPACE, is_digit, is_word_char
from perlexer.config import LexerConfig
from perlexer.errors import WarningKind
from perlexer.lexer.delimiters import match_balanced
from perlexer.lexer.state import LexerState, PendingHeredoc
from perlexer.tokens import Token, TokenType


class HeredocScannerMixin:
    """Mixin providing heredoc marker and body scanning."""

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState
    _config: LexerConfig

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _warn(self, kind: WarningKind, message: str, offset: int | None = None) -> None:
        """Record a warning. Implemented by Lexer."""
        raise NotImplementedError

    def _find_closing_line(self, start: int, is_closing: Callable[[str], bool]) -> int | None:
        """Find the line closing a block. Implemented by Lexer."""
        raise NotImplementedError

    def _try_heredoc_begin(self) -> bool:
        """Classify a heredoc marker and queue its terminator.

        ``<<`` directly followed by a digit is a left shift unless an
        operand is expected.
        """
        source = self._source
        pos = self._pos
        state = self._state
        if not source.startswith("<<", pos):
            return False

        marker = pos + 2
        indented = False
        if self._config.indented_heredocs and source.startswith("~", marker):
            indented = True
            marker += 1
        if not state.regex and marker < self._source_len and is_digit(source[marker]):
            return False

        parsed = self._parse_terminator(marker)
        if parsed is None:
            return False
        terminator, end = parsed

        self._emit(TokenType.HEREDOC_BEG, end)
        state.heredocs.append(PendingHeredoc(terminator, indented, pos))
        state.regex = False
        state.canpod = False
        return True

    def _parse_terminator(self, pos: int) -> tuple[str, int] | None:
        """Read ``\\h*"TERM"``, ``\\h*'TERM'``, ``\\TERM`` or ``TERM`` at pos.

        Returns:
            (terminator, end of marker) or None
        """
        source = self._source
        source_len = self._source_len

        quote = pos
        while quote < source_len and source[quote] in H_SPACE:
            quote += 1
        if quote < source_len and source[quote] in "\"'":
            end, _ = match_balanced(source, quote)
            if end is not None:
                return source[quote + 1 : end - 1], end

        word = pos + 1 if source.startswith("\\", pos) else pos
        end = word
        while end < source_len and is_word_char(source[end]):
            end += 1
        if end == word:
            return None
        return source[word:end], end

    def _scan_heredoc_body(self, break_len: int) -> bool:
        """Consume the body of the oldest pending heredoc.

        The cursor sits on a line break. Emits the break as vertical space,
        then the body through the terminator line. A heredoc whose
        terminator never appears is dropped with a warning.
        """
        pending = self._state.heredocs.popleft()
        terminator = pending.terminator
        if pending.indented:

            def is_closing(line: str) -> bool:
                return line.lstrip(" \t") == terminator

        else:

            def is_closing(line: str) -> bool:
                return line == terminator

        body_start = self._pos + break_len
        end = self._find_closing_line(body_start, is_closing)
        if end is None:
            self._warn(
                WarningKind.UNTERMINATED,
                f"heredoc terminator {terminator!r} not found",
                pending.offset,
            )
            return True

        self._emit(TokenType.VERTICAL_SPACE, body_start)
        self._emit(TokenType.HEREDOC, end)
        return True
