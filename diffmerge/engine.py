"""High-level line diff producing hunks and statistics."""

from __future__ import annotations

from typing import Iterable, Sequence

from diffmerge.heuristics import apply_slider_heuristics
from diffmerge.interner import LineInterner
from diffmerge.onp import Block, Diff, EditType
from diffmerge.types import ChangeType, DiffOptions, DiffResult, DiffStats, Hunk, LineRange

_CHANGE_TYPES = {
    EditType.INSERT: ChangeType.INSERT,
    EditType.DELETE: ChangeType.DELETE,
    EditType.EQUAL: ChangeType.EQUAL,
}


def _hunk_from_block(block: Block, swapped: bool) -> Hunk:
    """Build a hunk with X as left and Y as right, undoing an internal swap."""
    kind = block.type
    sx, sy, ex, ey = block.start_x, block.start_y, block.end_x, block.end_y
    if swapped:
        sx, sy, ex, ey = sy, sx, ey, ex
        if kind is EditType.INSERT:
            kind = EditType.DELETE
        elif kind is EditType.DELETE:
            kind = EditType.INSERT
    return Hunk(_CHANGE_TYPES[kind], LineRange(sx, ex - sx), LineRange(sy, ey - sy))


def _merge_replace_hunks(hunks: list[Hunk]) -> list[Hunk]:
    """Merge adjacent Delete+Insert (either order) into a Replace hunk."""
    out: list[Hunk] = []
    i = 0
    while i < len(hunks):
        current = hunks[i]
        if i + 1 < len(hunks):
            following = hunks[i + 1]
            pair = {current.type, following.type} == {ChangeType.INSERT, ChangeType.DELETE}
            if pair:
                deleted = current if current.type is ChangeType.DELETE else following
                inserted = current if current.type is ChangeType.INSERT else following
                out.append(
                    Hunk(
                        ChangeType.REPLACE,
                        LineRange(deleted.left_range.start, deleted.left_range.count),
                        LineRange(inserted.right_range.start, inserted.right_range.count),
                    )
                )
                i += 2
                continue
        out.append(current)
        i += 1
    return out


def _coalesce_adjacent_hunks(hunks: list[Hunk]) -> list[Hunk]:
    """Merge runs of consecutive hunks of one type into a single hunk."""
    out: list[Hunk] = []
    for hunk in hunks:
        if out and out[-1].type is hunk.type:
            out[-1].left_range.count += hunk.left_range.count
            out[-1].right_range.count += hunk.right_range.count
        else:
            out.append(
                Hunk(
                    hunk.type,
                    LineRange(hunk.left_range.start, hunk.left_range.count),
                    LineRange(hunk.right_range.start, hunk.right_range.count),
                )
            )
    return out


def _compute_stats(hunks: Iterable[Hunk], edit_distance: int) -> DiffStats:
    stats = DiffStats(edit_distance=edit_distance)
    for hunk in hunks:
        if hunk.type is ChangeType.INSERT:
            stats.additions += hunk.right_range.count
        elif hunk.type is ChangeType.DELETE:
            stats.deletions += hunk.left_range.count
        elif hunk.type is ChangeType.REPLACE:
            stats.deletions += hunk.left_range.count
            stats.additions += hunk.right_range.count
            stats.modifications += 1
    return stats


def _trivial_result(left: Sequence[str], right: Sequence[str]) -> DiffResult:
    """Result when at least one side is empty."""
    result = DiffResult(left_line_count=len(left), right_line_count=len(right))
    if not left and not right:
        return result
    if not left:
        result.hunks.append(Hunk(ChangeType.INSERT, LineRange(0, 0), LineRange(0, len(right))))
        result.stats = DiffStats(additions=len(right), edit_distance=len(right))
    else:
        result.hunks.append(Hunk(ChangeType.DELETE, LineRange(0, len(left)), LineRange(0, 0)))
        result.stats = DiffStats(deletions=len(left), edit_distance=len(left))
    return result


class DiffEngine:
    """Compares two sequences of lines."""

    def compute(
        self,
        left: Iterable[str],
        right: Iterable[str],
        opts: DiffOptions | None = None,
    ) -> DiffResult:
        """Diff ``left`` against ``right`` and return hunks with statistics."""
        if opts is None:
            opts = DiffOptions()
        left = list(left)
        right = list(right)

        if not left or not right:
            return _trivial_result(left, right)

        ids = LineInterner().intern(left, right, opts)
        if ids.left_ids == ids.right_ids:
            return DiffResult(
                hunks=[Hunk(ChangeType.EQUAL, LineRange(0, len(left)), LineRange(0, len(right)))],
                left_line_count=len(left),
                right_line_count=len(right),
            )

        diff = Diff(ids.left_ids, ids.right_ids)
        blocks = diff.walk()
        hunks = [_hunk_from_block(block, diff.swapped()) for block in blocks]

        if opts.merge_replace_hunks:
            hunks = _merge_replace_hunks(hunks)
        if opts.coalesce_adjacent_same_type:
            hunks = _coalesce_adjacent_hunks(hunks)
        if opts.apply_slider_heuristics:
            apply_slider_heuristics(hunks, left, right)

        return DiffResult(
            hunks=hunks,
            stats=_compute_stats(hunks, diff.edit_distance()),
            left_line_count=len(left),
            right_line_count=len(right),
        )