"""Public result and option types for line diffs."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class ChangeType(enum.Enum):
    """Kind of a contiguous diff region."""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"


@dataclass(slots=True)
class LineRange:
    """Half-open range of lines ``[start, start + count)``.

    For an empty range, ``start`` is the insertion point.
    """

    start: int = 0
    count: int = 0

    def end(self) -> int:
        """Index one past the last line of the range."""
        return self.start + self.count

    def is_empty(self) -> bool:
        """True if the range holds no lines."""
        return self.count == 0


@dataclass(slots=True)
class Hunk:
    """One contiguous region of a diff."""

    type: ChangeType
    left_range: LineRange = field(default_factory=LineRange)
    right_range: LineRange = field(default_factory=LineRange)


@dataclass(slots=True)
class DiffOptions:
    """Options controlling how lines are compared and hunks are shaped."""

    ignore_whitespace: bool = False
    ignore_trailing_whitespace: bool = False
    ignore_case: bool = False
    ignore_blank_lines: bool = False
    ignore_eol_style: bool = True
    merge_replace_hunks: bool = True
    coalesce_adjacent_same_type: bool = True
    apply_slider_heuristics: bool = True


@dataclass(slots=True)
class DiffStats:
    """Summary counts for a diff."""

    additions: int = 0
    deletions: int = 0
    modifications: int = 0
    edit_distance: int = 0


@dataclass(slots=True)
class DiffResult:
    """Complete result of comparing two line sequences."""

    hunks: list[Hunk] = field(default_factory=list)
    stats: DiffStats = field(default_factory=DiffStats)
    left_line_count: int = 0
    right_line_count: int = 0

    def is_identical(self) -> bool:
        """True if the two inputs compared equal."""
        if not self.hunks:
            return True
        return len(self.hunks) == 1 and self.hunks[0].type is ChangeType.EQUAL