"""Sigil and variable name classifier mixin.

A sigil (``$``, ``@``, ``%``, ``*``) bumps the pending-variable counter
unless a block dereference (``${ ... }``) follows; the next name, or a
special punctuation name, settles the counter back to zero.

Examples:
    $x        scalar_sign var_name
    $#array   scalar_sign var_name ("#array")
    $$        scalar_sign special_var_name
    $$ref     scalar_sign scalar_sign var_name
    ${^WARN}  scalar_sign cbracket_beg ...
"""

from __future__ import annotations

from perlexer.charsets import H_SPACE, SIGILS, SPECIAL_VAR_NAMES, is_word_char
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType

_SIGIL_TYPES: dict[str, TokenType] = {
    "$": TokenType.SCALAR_SIGN,
    "@": TokenType.ARRAY_SIGN,
    "%": TokenType.HASH_SIGN,
    "*": TokenType.GLOB_SIGN,
}


class VariableClassifierMixin:
    """Mixin providing sigil and variable-name rules."""

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_name(self, pos: int) -> int:
        """End of a package-qualified name. Implemented by Lexer."""
        raise NotImplementedError

    def _try_variable_name(self) -> bool:
        """Read the name owed to a preceding sigil.

        Falls through (returns False) when nothing name-like follows, so
        ``$ # comment`` and ``@{`` reach the later rules.
        """
        state = self._state
        if state.variable <= 0:
            return False

        source = self._source
        pos = self._pos

        end = self._scan_name(pos)
        if end == pos and source[pos] == "#" and pos > 0 and source[pos - 1] == "$":
            # $#array: last index of @array
            name_end = self._scan_name(pos + 1)
            if name_end > pos + 1:
                end = name_end

        token_type = TokenType.VAR_NAME
        if end == pos:
            end = self._special_name_end(pos)
            token_type = TokenType.SPECIAL_VAR_NAME
        if end == pos:
            return False

        self._emit(token_type, end)
        state.regex = False
        state.variable = 0
        state.canpod = False
        state.flat = self._brace_follows(end)
        return True

    def _special_name_end(self, pos: int) -> int:
        """End of a punctuation variable name at pos, or pos if none."""
        source = self._source
        source_len = self._source_len

        if pos > 0 and source[pos - 1] in SIGILS and not self._sigil_chain_follows(pos):
            if (
                source[pos] == "^"
                and pos + 1 < source_len
                and is_word_char(source[pos + 1])
            ):
                return pos + 2
            if source[pos] in SPECIAL_VAR_NAMES:
                return pos + 1

        return self._empty_brace_name_end(pos)

    def _sigil_chain_follows(self, pos: int) -> bool:
        """True for ``$$name``: more sigils that end in a real name."""
        source = self._source
        end = pos
        while end < self._source_len and source[end] == "$":
            end += 1
        return end > pos and self._scan_name(end) > end

    def _empty_brace_name_end(self, pos: int) -> int:
        """Match ``{}}``-style names: ``\\h*{\\h*[{}]}``. Returns pos if none."""
        source = self._source
        source_len = self._source_len
        end = pos
        while end < source_len and source[end] in H_SPACE:
            end += 1
        if not source.startswith("{", end):
            return pos
        end += 1
        while end < source_len and source[end] in H_SPACE:
            end += 1
        if end + 1 < source_len and source[end] in "{}" and source[end + 1] == "}":
            return end + 2
        return pos

    def _brace_follows(self, pos: int) -> bool:
        """True if the next non-whitespace character is ``{``."""
        source = self._source
        source_len = self._source_len
        while pos < source_len and source[pos].isspace():
            pos += 1
        return pos < source_len and source[pos] == "{"

    def _try_sigil(self) -> bool:
        """Classify a sigil. ``%`` and ``*`` count only where an operand is
        expected; elsewhere they are modulus and multiplication.
        """
        state = self._state
        char = self._source[self._pos]
        if char not in _SIGIL_TYPES:
            return False
        if char in "%*" and not state.regex:
            return False

        end = self._pos + 1
        self._emit(_SIGIL_TYPES[char], end)
        if not self._block_dereference_follows(end):
            state.variable += 1
        state.regex = False
        state.canpod = False
        state.flat = True
        return True

    def _block_dereference_follows(self, pos: int) -> bool:
        """True for ``${ expr }``; false for the ``${}}`` special-name form."""
        return self._brace_follows(pos) and self._empty_brace_name_end(pos) == pos
