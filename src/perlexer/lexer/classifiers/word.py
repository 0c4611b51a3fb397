"""Keyword, bareword and named-token classifier mixin."""

from __future__ import annotations

from perlexer.charsets import (
    DATA_MARKERS,
    FILE_TEST_LETTERS,
    KEYWORDS,
    SPECIAL_FILEHANDLES,
    SPECIAL_TOKENS,
    is_word_char,
)
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType


class WordClassifierMixin:
    """Mixin providing rules for words.

    Words are tried as keywords first, then (further down the rule table)
    as file tests, ``__TOKENS__``, special filehandles and finally barewords.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _word_end(self, pos: int) -> int:
        """End of word characters at pos. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_name(self, pos: int) -> int:
        """End of a package-qualified name. Implemented by Lexer."""
        raise NotImplementedError

    def _after_dereference(self) -> bool:
        """True right after ``->``. Implemented by Lexer."""
        raise NotImplementedError

    def _hash_key_follows(self, pos: int, *, lowercase: bool = False) -> bool:
        """True for ``word }``. Implemented by Lexer."""
        raise NotImplementedError

    def _try_keyword(self) -> bool:
        """Classify a Perl keyword.

        ``format`` at statement start declares a format. Keywords are
        skipped after ``sub`` (the name comes next) and, in flat mode, when
        they look like a hash key or follow ``->``.
        """
        state = self._state
        if state.proto:
            return False

        pos = self._pos
        end = self._word_end(pos)
        if end == pos:
            return False
        word = self._source[pos:end]

        if word == "format" and state.canpod:
            self._emit(TokenType.KEYWORD, end)
            state.regex = False
            state.canpod = False
            state.format = True
            return True

        if word not in KEYWORDS:
            return False
        if state.flat and (self._hash_key_follows(pos) or self._after_dereference()):
            return False

        self._emit(TokenType.KEYWORD, end)
        state.canpod = False
        if word == "sub":
            state.proto = True
            state.regex = False
        else:
            state.regex = True
        return True

    def _try_file_test(self) -> bool:
        """Classify ``-e``, ``-f``, ``-d`` ... in operand position."""
        state = self._state
        source = self._source
        pos = self._pos
        if not state.regex or source[pos] != "-" or pos + 1 >= self._source_len:
            return False
        if source[pos + 1] not in FILE_TEST_LETTERS:
            return False
        if pos + 2 < self._source_len and is_word_char(source[pos + 2]):
            return False

        self._emit(TokenType.FILE_TEST, pos + 2)
        state.regex = True
        state.canpod = False
        return True

    def _try_double_underscore(self) -> bool:
        """Classify ``__END__``/``__DATA__`` sections and ``__FILE__`` etc."""
        source = self._source
        pos = self._pos
        if not source.startswith("__", pos):
            return False

        word = source[pos : self._word_end(pos)]
        if word in DATA_MARKERS:
            self._emit(TokenType.DATA, self._source_len)
            return True
        if word in SPECIAL_TOKENS:
            self._emit(TokenType.SPECIAL_TOKEN, pos + len(word))
            self._state.canpod = False
            self._state.regex = False
            return True
        return False

    def _try_special_filehandle(self) -> bool:
        pos = self._pos
        end = self._word_end(pos)
        if self._source[pos:end] not in SPECIAL_FILEHANDLES:
            return False

        self._emit(TokenType.SPECIAL_FH, end)
        self._state.regex = True
        self._state.canpod = False
        return True

    def _try_bareword(self) -> bool:
        """Classify a bareword: a sub name right after ``sub``, else an
        unquoted string.
        """
        state = self._state
        pos = self._pos
        end = self._scan_name(pos)
        if end == pos:
            return False

        self._emit(TokenType.SUB_NAME if state.proto else TokenType.UNQUOTED_STRING, end)
        state.regex = False
        state.canpod = False
        state.flat = False
        return True
