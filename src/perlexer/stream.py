"""Immutable token stream produced by the lexer.

A TokenStream pairs the tokens with the source they were cut from. All
views (kind sequence, filtered kinds, gaps) are pure projections; nothing
mutates the stream after construction.

Thread Safety:
TokenStream is frozen and holds only immutable data.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import overload

from perlexer.tokens import Token, TokenType


@dataclass(frozen=True, slots=True)
class TokenStream:
    """Tokens in scan order plus their source text.

    Attributes:
        source: The text that was tokenized
        tokens: Tokens in scan order; offsets never decrease

    Example:
        >>> from perlexer import tokenize
        >>> stream, _ = tokenize("1;")
        >>> stream.types()
        (<TokenType.NUMBER: 'number'>, <TokenType.END_OF_STATEMENT: 'end_of_statement'>)

    """

    source: str
    tokens: tuple[Token, ...] = ()

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Token, ...]: ...

    def __getitem__(self, index: int | slice) -> Token | tuple[Token, ...]:
        return self.tokens[index]

    def types(self) -> tuple[TokenType, ...]:
        """The kind of every token, in order."""
        return tuple(token.type for token in self.tokens)

    def filtered(self, ignored: Iterable[TokenType] = ()) -> tuple[TokenType, ...]:
        """Token kinds in order, minus any kind in ignored."""
        ignored_set = frozenset(ignored)
        return tuple(token.type for token in self.tokens if token.type not in ignored_set)

    def of_type(self, *token_types: TokenType) -> tuple[Token, ...]:
        """Tokens whose kind is one of token_types."""
        wanted = frozenset(token_types)
        return tuple(token for token in self.tokens if token.type in wanted)

    def gaps(self) -> list[tuple[int, int]]:
        """Source spans not covered by any token.

        Empty for well-formed input; a skipped character (for example an
        unrecognized one) shows up as a one-character gap.
        """
        gaps: list[tuple[int, int]] = []
        covered = 0
        for token in self.tokens:
            if token.start > covered:
                gaps.append((covered, token.start))
            covered = max(covered, token.end)
        if covered < len(self.source):
            gaps.append((covered, len(self.source)))
        return gaps

    @property
    def is_complete(self) -> bool:
        """True if the tokens tile the whole source without gaps or overlaps."""
        position = 0
        for token in self.tokens:
            if token.start != position:
                return False
            position = token.end
        return position == len(self.source)
