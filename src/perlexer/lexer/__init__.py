"""Context-sensitive Perl lexer.

The lexer walks a prioritized rule table at each cursor position, threading
a small set of context flags (LexerState) from rule to rule. The crucial
one is the regex flag: ``/`` begins a pattern only where an operand is
expected, otherwise it divides.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, tokenize
├── core.py              # Lexer class (mixin composition + rule table)
├── state.py             # LexerState, PendingHeredoc
├── delimiters.py        # Balanced delimiter matcher
├── classifiers/         # Single-position rules
│   ├── whitespace.py    # Whitespace runs, comments
│   ├── variable.py      # Sigils, variable names
│   ├── bracket.py       # Brackets, sub prototypes
│   ├── quotelike.py     # q qq qw qx qr m s tr y, strings, readline
│   ├── number.py        # v-strings, hex, binary, decimal
│   ├── word.py          # Keywords, file tests, barewords
│   └── operator.py      # Punctuation, assignment, operators
└── scanners/            # Multi-line constructs
    ├── pod.py           # =pod ... =cut
    ├── heredoc.py       # <<TERM markers and bodies
    └── format.py        # format NAME = ... .

Usage:
    >>> from perlexer.lexer import tokenize
    >>> stream, warnings = tokenize("$x / 2")
    >>> [t.type.value for t in stream]
    ['scalar_sign', 'var_name', 'horizontal_space', 'operator', 'horizontal_space', 'number']

"""

from __future__ import annotations

from perlexer.config import LexerConfig
from perlexer.errors import LexWarning
from perlexer.lexer.core import Lexer
from perlexer.lexer.state import LexerState, PendingHeredoc
from perlexer.stream import TokenStream


def tokenize(
    source: str,
    *,
    source_file: str | None = None,
    config: LexerConfig | None = None,
) -> tuple[TokenStream, list[LexWarning]]:
    """Tokenize Perl source.

    Never raises on malformed input: problems come back as warnings.

    Args:
        source: Perl source text
        source_file: Optional file path used in warning locations
        config: Lexer configuration (defaults to the active context config)

    Returns:
        (token stream, warnings in scan order)
    """
    lexer = Lexer(source, source_file=source_file, config=config)
    stream = lexer.tokenize()
    return stream, lexer.warnings


__all__ = [
    "Lexer",
    "LexerState",
    "PendingHeredoc",
    "tokenize",
]
