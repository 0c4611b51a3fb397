"""Cursor-driven Perl lexer.

At every cursor position the lexer walks a fixed, prioritized rule table
and commits to the first rule that accepts. A rule either consumes input
(emitting zero or more tokens) or changes LexerState so that the next
pass makes progress; nothing ever rewinds.

Problems never raise. They are collected as LexWarning values and returned
next to the token stream.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable

from perlexer.charsets import H_SPACE, is_word_char
from perlexer.config import LexerConfig, get_lexer_config
from perlexer.errors import LexWarning, WarningKind
from perlexer.lexer.classifiers import (
    BracketClassifierMixin,
    NumberClassifierMixin,
    OperatorClassifierMixin,
    QuoteLikeClassifierMixin,
    VariableClassifierMixin,
    WhitespaceClassifierMixin,
    WordClassifierMixin,
)
from perlexer.lexer.scanners import (
    FormatScannerMixin,
    HeredocScannerMixin,
    PodScannerMixin,
)
from perlexer.lexer.state import LexerState
from perlexer.location import SourceLocation
from perlexer.stream import TokenStream
from perlexer.tokens import TRIVIA_TYPES, Token, TokenType
from perlexer.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer(
    # Classifiers (one rule group each)
    WhitespaceClassifierMixin,
    VariableClassifierMixin,
    BracketClassifierMixin,
    QuoteLikeClassifierMixin,
    NumberClassifierMixin,
    WordClassifierMixin,
    OperatorClassifierMixin,
    # Scanners (multi-line constructs)
    PodScannerMixin,
    HeredocScannerMixin,
    FormatScannerMixin,
):
    """Perl lexer with an explicit, prioritized rule table.

    Usage:
            >>> lexer = Lexer("my $x = 1;\\n")
            >>> [t.type.value for t in lexer.tokenize()][:4]
            ['keyword', 'horizontal_space', 'scalar_sign', 'var_name']
            >>> lexer.warnings
            []

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_source_file",
        "_config",
        "_pos",
        "_lineno",
        "_col",
        "_state",
        "_tokens",
        "_warnings",
        "_rules",
        "_stream",  # Result of the first tokenize() call
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        config: LexerConfig | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Perl source text
            source_file: Optional source file path for warning locations
            config: Lexer configuration (defaults to the active context config)
        """
        self._source = source
        self._source_len = len(source)
        self._source_file = source_file
        self._config = config if config is not None else get_lexer_config()
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._state = LexerState()
        self._tokens: list[Token] = []
        self._warnings: list[LexWarning] = []
        self._stream: TokenStream | None = None

        # Priority order: first rule returning True wins the cursor position
        self._rules: tuple[Callable[[], bool], ...] = (
            self._try_pending_body,
            self._try_pod,
            self._try_whitespace,
            self._try_variable_name,
            self._try_comment,
            self._try_sigil,
            self._try_prototype,
            self._try_bracket,
            self._try_quote_like,
            self._try_string,
            self._try_number,
            self._try_keyword,
            self._try_heredoc_begin,
            self._try_punctuation,
            self._try_file_test,
            self._try_double_underscore,
            self._try_readline,
            self._try_assignment,
            self._try_dereference,
            self._try_operator,
            self._try_special_filehandle,
            self._try_bareword,
        )

    @property
    def warnings(self) -> list[LexWarning]:
        """Warnings collected so far (complete once tokenize() returns)."""
        return list(self._warnings)

    @property
    def state(self) -> LexerState:
        """Current context flags (read-only use; for diagnostics and tests)."""
        return self._state

    def tokenize(self) -> TokenStream:
        """Tokenize the whole source.

        Calling this again returns the same stream.

        Returns:
            Immutable TokenStream in scan order.

        Complexity: O(n) for ordinary input; a literal's delimiter search is
        linear in the literal's length.
        """
        if self._stream is not None:
            return self._stream

        rules = self._rules
        source_len = self._source_len
        while self._pos < source_len:
            for rule in rules:
                if rule():
                    break
            else:
                char = self._source[self._pos]
                self._warn(WarningKind.UNRECOGNIZED, f"unrecognized character {char!r}")
                self._skip_to(self._pos + 1)

        self._finish()
        self._stream = TokenStream(source=self._source, tokens=tuple(self._tokens))
        logger.debug(
            "Tokenized %d characters into %d tokens (%d warnings)",
            source_len,
            len(self._tokens),
            len(self._warnings),
        )
        return self._stream

    def _finish(self) -> None:
        """Report counters and deferred constructs left open at end of input."""
        state = self._state
        for depth, name in (
            (state.brackets, "square brackets []"),
            (state.curlies, "curly brackets {}"),
            (state.parens, "parentheses ()"),
        ):
            if depth:
                self._warn(WarningKind.IMBALANCE, f"unbalanced {name}: {depth} left open")
        if state.variable:
            self._warn(
                WarningKind.IMBALANCE,
                f"variable count error: {state.variable} sigil(s) without a name",
            )
        while state.heredocs:
            pending = state.heredocs.popleft()
            self._warn(
                WarningKind.UNTERMINATED,
                f"heredoc {pending.terminator!r} never reached its body",
                pending.offset,
            )
        if state.expect_format:
            state.expect_format = False
            self._warn(WarningKind.UNTERMINATED, "format declared without a body")

    # =========================================================================
    # Pending multi-line bodies
    # =========================================================================

    def _try_pending_body(self) -> bool:
        """Resolve a deferred format or heredoc body at a line break."""
        state = self._state
        if not state.has_pending_body:
            return False
        break_len = self._line_break_len(self._pos)
        if not break_len:
            return False
        if state.expect_format:
            return self._scan_format_body(break_len)
        return self._scan_heredoc_body(break_len)

    # =========================================================================
    # Navigation helpers
    # =========================================================================

    def _line_break_len(self, pos: int) -> int:
        """Length of the line break at pos: 1 for LF, 2 for CRLF, else 0."""
        source = self._source
        if source.startswith("\n", pos):
            return 1
        if source.startswith("\r\n", pos):
            return 2
        return 0

    def _find_closing_line(self, start: int, is_closing: Callable[[str], bool]) -> int | None:
        """Find the first line at or after start that closes a block.

        A trailing CR is not part of the line passed to is_closing.

        Returns:
            Offset just past the closing line's content (before its line
            break), or None if no line closes the block.
        """
        source = self._source
        line_start = start
        while True:
            newline = source.find("\n", line_start)
            line_end = self._source_len if newline == -1 else newline
            content_end = line_end
            if content_end > line_start and source[content_end - 1] == "\r":
                content_end -= 1
            if is_closing(source[line_start:content_end]):
                return content_end
            if newline == -1:
                return None
            line_start = newline + 1

    def _word_end(self, pos: int) -> int:
        """End of the run of word characters starting at pos."""
        source = self._source
        source_len = self._source_len
        while pos < source_len and is_word_char(source[pos]):
            pos += 1
        return pos

    def _scan_name(self, pos: int) -> int:
        """End of a package-qualified name (``Foo::Bar``, ``::x``, ``a'b``).

        Returns pos unchanged if no name starts there.
        """
        source = self._source
        source_len = self._source_len
        end = pos
        while end < source_len:
            char = source[end]
            if is_word_char(char):
                end = self._word_end(end)
            elif source.startswith("::", end):
                end += 2
            elif (
                char == "'"
                and end > pos
                and end + 1 < source_len
                and is_word_char(source[end + 1])
            ):
                end += 1
            else:
                break
        return end

    def _hash_key_follows(self, pos: int, *, lowercase: bool = False) -> bool:
        """True if a word directly followed by ``}`` starts at pos.

        Args:
            pos: Start of the word
            lowercase: Only accept ``[a-z]+`` words
        """
        source = self._source
        source_len = self._source_len
        end = pos
        if lowercase:
            while end < source_len and "a" <= source[end] <= "z":
                end += 1
        else:
            end = self._word_end(pos)
        if end == pos:
            return False
        while end < source_len and source[end] in H_SPACE:
            end += 1
        return source.startswith("}", end)

    def _last_significant(self) -> int | None:
        """Index of the last emitted token that is not whitespace or comment."""
        tokens = self._tokens
        for index in range(len(tokens) - 1, -1, -1):
            if tokens[index].type not in TRIVIA_TYPES:
                return index
        return None

    def _after_dereference(self) -> bool:
        """True if the last significant token is ``->``."""
        index = self._last_significant()
        return index is not None and self._tokens[index].type is TokenType.DEREFERENCE_OPERATOR

    # =========================================================================
    # Position and token bookkeeping
    # =========================================================================

    def _skip_to(self, end: int) -> None:
        """Advance the cursor to end, tracking line and column."""
        source = self._source
        newline_count = source.count("\n", self._pos, end)
        if newline_count:
            last_nl = source.rfind("\n", self._pos, end)
            self._lineno += newline_count
            self._col = end - last_nl
        else:
            self._col += end - self._pos
        self._pos = end

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit a token spanning the cursor to end and advance past it."""
        start = self._pos
        lineno = self._lineno
        col = self._col
        self._skip_to(end)
        token = Token(
            type=token_type,
            value=self._source[start:end],
            start=start,
            end=end,
            _lineno=lineno,
            _col=col,
            _end_lineno=self._lineno,
            _end_col=self._col,
            _source_file=self._source_file,
        )
        self._tokens.append(token)
        return token

    def _retype(self, index: int, token_type: TokenType) -> None:
        """Replace an emitted token's type in place."""
        self._tokens[index] = self._tokens[index].retyped(token_type)

    def _warn(self, kind: WarningKind, message: str, offset: int | None = None) -> None:
        """Record a warning at offset (default: the cursor)."""
        if offset is None or offset == self._pos:
            offset = self._pos
            location = SourceLocation(
                lineno=self._lineno,
                col_offset=self._col,
                offset=offset,
                end_offset=offset,
                source_file=self._source_file,
            )
        else:
            location = SourceLocation.from_offset(self._source, offset, self._source_file)
        warning = LexWarning(kind=kind, message=message, offset=offset, location=location)
        self._warnings.append(warning)
        logger.debug("%s", warning)

    def _add_warning(self, warning: LexWarning) -> None:
        """Record a warning produced by a helper (e.g. the delimiter matcher)."""
        self._warn(warning.kind, warning.message, warning.offset)
