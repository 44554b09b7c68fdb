"""Slider-placement heuristics for Insert and Delete hunks.

A hunk that can slide up or down without changing the diff is moved to
the boundary a human reader would usually pick.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Sequence

from diffmerge.types import ChangeType, Hunk


class HeuristicId(enum.IntEnum):
    """Identifies which heuristic moved a block."""

    NONE = 0
    H1 = 1  # run of blank / bare comment lines -> slide forward
    H2 = 2  # indent drop -> slide back
    H3 = 3  # single-line section separator -> slide back 1
    H3B = 4  # multi-line doc comment -> slide back
    H4 = 5  # #pragma mark / // MARK / @ -> slide back
    H5 = 6  # "},\n{" boundary -> slide back 1
    H6 = 7  # series of // comments -> slide back
    H7 = 8  # blank + content group separator -> slide back 1


HEURISTIC_COUNT = len(HeuristicId)


@dataclass(frozen=True, slots=True)
class HeuristicProbe:
    """Outcome of probing the heuristics for one block.

    ``pos`` is the final 0-based position, ``pos_after_excl`` the position
    after the exclusive phase only.
    """

    pos: int
    exclusive: HeuristicId = HeuristicId.NONE
    pos_after_excl: int = 0
    h1_applied: bool = False


_SEPARATOR_PREFIXES = ("/*", ";;***", ";***", ";;;;", "#---")
_MARK_PREFIXES = ("#pragma mark", "// MARK", "@")


def _indent_width(line: str) -> int:
    """Leading indentation in columns; a tab counts as 4."""
    width = 0
    for ch in line:
        if ch == "\t":
            width += 4
        elif ch == " ":
            width += 1
        else:
            break
    return width


def _is_mark(line: str) -> bool:
    return line.strip().startswith(_MARK_PREFIXES)


def _slide_left_range(p: int, size: int, rel: Sequence[str]) -> int:
    """Largest k with rel[p-i] == rel[p+size-i] for i in 1..k."""
    n = len(rel)
    k = 0
    while p - (k + 1) >= 0 and p + size - (k + 1) < n and rel[p - (k + 1)] == rel[p + size - (k + 1)]:
        k += 1
    return k


def _exclusive_heuristic(p: int, size: int, rel: Sequence[str]) -> tuple[int, HeuristicId]:
    """First matching backward-sliding heuristic, or the unchanged position."""
    n = len(rel)

    if (
        p >= 2
        and p + size - 1 < n
        and rel[p - 2].strip() == "},"
        and rel[p - 1].strip() == "{"
        and rel[p - 2] == rel[p + size - 2]
        and rel[p - 1] == rel[p + size - 1]
    ):
        return p - 1, HeuristicId.H5

    k = _slide_left_range(p, size, rel)

    # Doc comment must be checked before the indent drop: the closing "*/"
    # is usually indented less than the code and would stop H2 too early.
    if k > 0 and rel[p - k].strip().startswith("/*") and rel[p - 1].strip().endswith("*/"):
        return p - k, HeuristicId.H3B

    if k > 0:
        run = 0
        while run < k and rel[p - run - 1].strip().startswith("//"):
            run += 1
        if run > 0:
            return p - run, HeuristicId.H6

    if k >= 2 and not rel[p - 2].strip() and rel[p - 1].strip():
        return p - 1, HeuristicId.H7

    if k > 0:
        first_indent = _indent_width(rel[p])
        for j in range(1, k + 1):
            if _indent_width(rel[p - j]) < first_indent:
                return p - j, HeuristicId.H2
        if _indent_width(rel[p - k]) == first_indent and all(
            rel[p - i].strip().startswith(("//", "#")) for i in range(1, k + 1)
        ):
            return p - k, HeuristicId.H2

    if p > 0 and p + size - 1 < n and rel[p - 1] == rel[p + size - 1]:
        if rel[p - 1].strip().startswith(_SEPARATOR_PREFIXES):
            return p - 1, HeuristicId.H3

    for j in range(k, 0, -1):
        if _is_mark(rel[p - j]):
            return p - j, HeuristicId.H4
    if p > 0 and _is_mark(rel[p - 1]):
        return p - 1, HeuristicId.H4

    return p, HeuristicId.NONE


def _apply_h1(p1: int, size: int, rel: Sequence[str]) -> int:
    """Move a leading run of blank, bare "//" or bare "#" lines to the block's end."""
    n = len(rel)
    if p1 >= n:
        return p1

    first = rel[p1].strip()
    if first not in ("", "//", "#"):
        return p1

    def same_type(line: str) -> bool:
        return line.strip() == first

    leading = 0
    while leading < size and p1 + leading < n and same_type(rel[p1 + leading]):
        leading += 1
    trailing = 0
    while p1 + size + trailing < n and same_type(rel[p1 + size + trailing]):
        trailing += 1
    return p1 + min(leading, trailing)


def probe_heuristic(p: int, size: int, rel: Sequence[str]) -> HeuristicProbe:
    """Report where the heuristics would move a block of ``size`` lines at ``p``."""
    if p < 0 or p >= len(rel) or size < 1:
        return HeuristicProbe(p, HeuristicId.NONE, p, False)
    p1, exclusive = _exclusive_heuristic(p, size, rel)
    p2 = _apply_h1(p1, size, rel)
    return HeuristicProbe(p2, exclusive, p1, p2 != p1)


def apply_slider_heuristics(hunks: Iterable[Hunk], left: Sequence[str], right: Sequence[str]) -> None:
    """Shift every Insert and Delete hunk in place to its preferred position."""
    for hunk in hunks:
        if hunk.type is ChangeType.INSERT:
            old = hunk.right_range.start
            delta = probe_heuristic(old, hunk.right_range.count, right).pos - old
        elif hunk.type is ChangeType.DELETE:
            old = hunk.left_range.start
            delta = probe_heuristic(old, hunk.left_range.count, left).pos - old
        else:
            continue
        hunk.left_range.start += delta
        hunk.right_range.start += delta