"""Balanced delimiter matching for quote-like literals.

Shared by every quote-like operator, by bare ``/.../`` patterns, by
angle-bracket readline tokens and by both spans of ``s``, ``tr`` and ``y``.

Paired delimiters (``<>``, ``()``, ``{}``, ``[]``) nest: only the *same*
pair is counted, so ``q{a(b}`` closes at the ``}``. Any other character
delimits itself. A backslash escapes the next character, except when the
backslash is itself the delimiter: then the span ends at the next
backslash.

Nesting is tracked with a plain depth counter, bounded by
``max_depth``; no recursion is involved, so deeply nested input cannot
exhaust the call stack.

Example:
    >>> match_balanced("q{a{b}c} x", 1)
    (8, None)
    >>> match_balanced("'abc", 0)[0] is None
    True

"""

from __future__ import annotations

from perlexer.charsets import PAIRED_DELIMITERS
from perlexer.config import DEFAULT_MAX_NESTING_DEPTH
from perlexer.errors import LexWarning, WarningKind


def match_balanced(
    text: str,
    start: int,
    *,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> tuple[int | None, LexWarning | None]:
    """Match a delimited span whose opening delimiter is ``text[start]``.

    Args:
        text: Full source text
        start: Offset of the opening delimiter
        max_depth: Deepest nesting of a paired delimiter to follow

    Returns:
        ``(end, None)`` where end is the offset just past the closing
        delimiter, or ``(None, warning)`` when the span never closes or
        nests deeper than max_depth.
    """
    if start >= len(text):
        return None, LexWarning(
            WarningKind.UNTERMINATED, "missing delimiter at end of input", start
        )

    opener = text[start]
    closer = PAIRED_DELIMITERS.get(opener)
    if closer is not None:
        return _match_paired(text, start, opener, closer, max_depth)

    end = _match_same(text, start, opener)
    if end is None:
        return None, LexWarning(
            WarningKind.UNTERMINATED,
            f"unterminated literal delimited by {opener!r}",
            start,
        )
    return end, None


def _match_paired(
    text: str, start: int, opener: str, closer: str, max_depth: int
) -> tuple[int | None, LexWarning | None]:
    depth = 1
    pos = start + 1
    text_len = len(text)
    while pos < text_len:
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == opener:
            depth += 1
            if depth > max_depth:
                return None, LexWarning(
                    WarningKind.NESTING,
                    f"{opener}{closer} nested deeper than {max_depth} levels",
                    start,
                )
        elif char == closer:
            depth -= 1
            if depth == 0:
                return pos + 1, None
        pos += 1

    return None, LexWarning(
        WarningKind.UNTERMINATED,
        f"unterminated literal delimited by {opener}{closer}",
        start,
    )


def _match_same(text: str, start: int, delim: str) -> int | None:
    if delim == "\\":
        end = text.find("\\", start + 1)
        return None if end == -1 else end + 1

    pos = start + 1
    text_len = len(text)
    while pos < text_len:
        char = text[pos]
        if char == "\\":
            pos += 2
        elif char == delim:
            return pos + 1
        else:
            pos += 1
    return None


def match_modifiers(text: str, pos: int, allowed: frozenset[str]) -> int:
    """Consume trailing modifier letters (``/gimsx`` etc.).

    Returns:
        Offset just past the last allowed letter.
    """
    text_len = len(text)
    while pos < text_len and text[pos] in allowed:
        pos += 1
    return pos
