"""Token-kind comparison for obfuscation scoring.

A program is tokenized twice: as written and after canonicalization
(``perl -MO=Deparse``). Both kind sequences are filtered through an ignore
set chosen by a strictness level and compared by longest common
subsequence. Code that survives canonicalization unchanged scores 0;
the more its token structure changes, the higher the score.

Strictness levels (each includes the ones below it):
    0   nothing ignored
    1   POD, __END__ data, comments, whitespace, ';' and quoted strings
    2   round parentheses
    3   heredocs and q/qq/qw/qx strings
    4   hex and binary literals

Usage:
    from perlexer.classify import ignored_types, obfuscation_score

    ignored = ignored_types(1)
    score = obfuscation_score(
        stream.filtered(ignored), canonical_stream.filtered(ignored)
    )

"""

from __future__ import annotations

from collections.abc import Sequence

from perlexer.errors import EmptyStreamError
from perlexer.stream import TokenStream
from perlexer.tokens import TokenType

MAX_STRICTNESS = 4

_IGNORED_BY_LEVEL: tuple[frozenset[TokenType], ...] = (
    frozenset(),
    frozenset(
        {
            TokenType.POD,
            TokenType.DATA,
            TokenType.COMMENT,
            TokenType.VERTICAL_SPACE,
            TokenType.HORIZONTAL_SPACE,
            TokenType.OTHER_SPACE,
            TokenType.END_OF_STATEMENT,
            TokenType.DOUBLE_QUOTED_STRING,
            TokenType.SINGLE_QUOTED_STRING,
        }
    ),
    frozenset({TokenType.PARENTHESE_BEG, TokenType.PARENTHESE_END}),
    frozenset(
        {
            TokenType.HEREDOC,
            TokenType.HEREDOC_BEG,
            TokenType.Q_STRING,
            TokenType.QQ_STRING,
            TokenType.QW_STRING,
            TokenType.QX_STRING,
        }
    ),
    frozenset({TokenType.HEX_NUMBER, TokenType.BINARY_NUMBER}),
)

# Verdict thresholds, highest first; the last line covers everything below 5
_VERDICTS: tuple[tuple[float, str], ...] = (
    (60, "WOW!!! We have here a score of {score:.2f}! This is obfuscation, isn't it?"),
    (40, "Outstanding! This code seems to be written by a true legend! Score: {score:.2f}"),
    (20, "Amazing! This code is very unique! Score: {score:.2f}"),
    (15, "Excellent! This code is written by a true Perl hacker. Score: {score:.2f}"),
    (10, "Awesome! This code is written by a Perl expert. Score: {score:.2f}"),
    (5, "Just OK! We have a score of {score:.2f}! This is production code, isn't it?"),
)
_BABY_VERDICT = "What is this? I guess it is some baby Perl code, isn't it? Score: {score:.2f}"


def ignored_types(strictness: int) -> frozenset[TokenType]:
    """Token kinds ignored at a strictness level.

    Levels above 4 behave like 4.

    Raises:
        ValueError: strictness is negative
    """
    if strictness < 0:
        raise ValueError(f"strictness must be >= 0, got {strictness}")
    level = min(strictness, MAX_STRICTNESS)
    ignored: frozenset[TokenType] = frozenset()
    for kinds in _IGNORED_BY_LEVEL[: level + 1]:
        ignored |= kinds
    return ignored


def identify(stream: TokenStream, strictness: int) -> tuple[TokenType, ...]:
    """Filtered kind sequence of stream at a strictness level."""
    return stream.filtered(ignored_types(strictness))


def lcs_length(a: Sequence[TokenType], b: Sequence[TokenType]) -> int:
    """Length of the longest common subsequence of two kind sequences.

    A program and its canonical form usually share long runs at both ends.
    The common prefix and suffix are matched directly, and only the
    differing middle goes through the classic dynamic program:
    O(len(a) * len(b)) time, one row of O(min(len(a), len(b))) memory.
    """
    lo = 0
    hi_a, hi_b = len(a), len(b)
    while lo < hi_a and lo < hi_b and a[lo] == b[lo]:
        lo += 1
    while hi_a > lo and hi_b > lo and a[hi_a - 1] == b[hi_b - 1]:
        hi_a -= 1
        hi_b -= 1
    common = lo + (len(a) - hi_a)

    a, b = a[lo:hi_a], b[lo:hi_b]
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return common

    previous = [0] * (len(b) + 1)
    for item in a:
        current = [0]
        for j, other in enumerate(b, start=1):
            if item == other:
                current.append(previous[j - 1] + 1)
            else:
                current.append(max(previous[j], current[j - 1]))
        previous = current
    return common + previous[-1]


def obfuscation_score(
    types: Sequence[TokenType], canonical_types: Sequence[TokenType]
) -> float:
    """Score how far a program's token structure is from its canonical form.

    ``100 - (LCS - |len(a) - len(b)|) / len(a) * 100``. Identical
    sequences score exactly 0.0; the score grows as structure diverges and
    can exceed 100 when the lengths differ wildly.

    Raises:
        EmptyStreamError: either sequence is empty
    """
    if not types or not canonical_types:
        raise EmptyStreamError("cannot score an empty token sequence")
    common = lcs_length(types, canonical_types) - abs(len(types) - len(canonical_types))
    return 100 - common / len(types) * 100


def verdict(score: float) -> str:
    """Human-readable line for a score."""
    for threshold, template in _VERDICTS:
        if score >= threshold:
            return template.format(score=score)
    return _BABY_VERDICT.format(score=score)


__all__ = [
    "MAX_STRICTNESS",
    "identify",
    "ignored_types",
    "lcs_length",
    "obfuscation_score",
    "verdict",
]
