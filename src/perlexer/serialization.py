"""Token stream serialization: JSON round-trip for TokenStream.

Converts streams (and lexer warnings) to/from JSON-compatible dicts. Used
by ``perlexer --tokens`` and handy for debugging or caching.

Token values are not stored: they are always ``source[start:end]`` and
are rebuilt from the source on load.

Example:
    from perlexer import tokenize
    from perlexer.serialization import to_json, from_json

    stream, _ = tokenize("my $x = 1;")
    restored = from_json(to_json(stream))
    assert restored == stream

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from perlexer.errors import LexWarning, WarningKind
from perlexer.location import SourceLocation
from perlexer.stream import TokenStream
from perlexer.tokens import Token, TokenType


def token_to_dict(token: Token) -> dict[str, Any]:
    """Convert a token to a JSON-compatible dict (kind name, offsets, lines)."""
    return {
        "type": token.type.value,
        "start": token.start,
        "end": token.end,
        "lineno": token.lineno,
        "col": token.col,
        "end_lineno": token._end_lineno,
        "end_col": token._end_col,
    }


def to_dict(stream: TokenStream, *, source_file: str | None = None) -> dict[str, Any]:
    """Convert a token stream to a JSON-compatible dict.

    Args:
        stream: Stream to serialize
        source_file: Optional path recorded alongside the tokens

    Returns:
        Dict with ``_type``, ``source``, ``source_file`` and ``tokens``.
    """
    return {
        "_type": "TokenStream",
        "source": stream.source,
        "source_file": source_file,
        "tokens": [token_to_dict(token) for token in stream.tokens],
    }


def from_dict(data: dict[str, Any]) -> TokenStream:
    """Reconstruct a TokenStream from a dict produced by to_dict.

    Raises:
        ValueError: If ``_type`` is missing or wrong, or a kind is unknown.
    """
    type_name = data.get("_type")
    if type_name != "TokenStream":
        msg = f"Expected TokenStream, got {type_name!r}"
        raise ValueError(msg)

    source: str = data["source"]
    source_file = data.get("source_file")
    tokens = []
    for raw in data.get("tokens", []):
        start = raw["start"]
        end = raw["end"]
        tokens.append(
            Token(
                type=TokenType(raw["type"]),
                value=source[start:end],
                start=start,
                end=end,
                _lineno=raw.get("lineno", 1),
                _col=raw.get("col", 1),
                _end_lineno=raw.get("end_lineno"),
                _end_col=raw.get("end_col"),
                _source_file=source_file,
            )
        )
    return TokenStream(source=source, tokens=tuple(tokens))


def warning_to_dict(warning: LexWarning) -> dict[str, Any]:
    """Convert a lexer warning to a JSON-compatible dict."""
    result: dict[str, Any] = {
        "kind": warning.kind.value,
        "message": warning.message,
        "offset": warning.offset,
    }
    if warning.location is not None:
        result["lineno"] = warning.location.lineno
        result["col"] = warning.location.col_offset
    return result


def warning_from_dict(data: dict[str, Any]) -> LexWarning:
    """Reconstruct a lexer warning from warning_to_dict output."""
    location = None
    if "lineno" in data:
        location = SourceLocation(
            lineno=data["lineno"],
            col_offset=data.get("col", 1),
            offset=data["offset"],
            end_offset=data["offset"],
        )
    return LexWarning(
        kind=WarningKind(data["kind"]),
        message=data["message"],
        offset=data["offset"],
        location=location,
    )


def to_json(
    stream: TokenStream,
    *,
    warnings: list[LexWarning] | None = None,
    source_file: str | None = None,
    indent: int | None = None,
) -> str:
    """Serialize a token stream (and optionally its warnings) to JSON.

    Output is deterministic (sorted keys).

    Args:
        stream: Stream to serialize
        warnings: Lexer warnings to include under ``warnings``
        source_file: Optional path recorded alongside the tokens
        indent: JSON indentation level (None for compact)

    Returns:
        JSON string.
    """
    data = to_dict(stream, source_file=source_file)
    if warnings is not None:
        data["warnings"] = [warning_to_dict(w) for w in warnings]
    return json.dumps(data, sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> TokenStream:
    """Deserialize a TokenStream from a JSON string produced by to_json.

    Raises:
        ValueError: If the JSON doesn't represent a TokenStream.
    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise ValueError(msg)
    return from_dict(raw)
