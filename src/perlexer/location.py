"""Source location tracking for diagnostics.

Provides SourceLocation dataclass for tracking positions in source text.
Used by tokens and lexer warnings.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for warnings and debugging.

    Lines and columns are 1-indexed; offsets are 0-indexed code points.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source
        end_offset: Absolute end offset in source
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(1, 1, 0, 0, source_file="script.pl")
            >>> str(loc)
            'script.pl:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location as "file.pl:10:5" or "10:5"."""
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls, source: str, offset: int, source_file: str | None = None
    ) -> SourceLocation:
        """Compute line and column for an absolute offset.

        Offsets past the end of source are clamped to the end.
        """
        offset = max(0, min(offset, len(source)))
        lineno = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(
            lineno=lineno,
            col_offset=offset - line_start + 1,
            offset=offset,
            end_offset=offset,
            source_file=source_file,
        )
