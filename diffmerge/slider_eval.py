"""Evaluation of slider placement against a human-annotated corpus."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from diffmerge.heuristics import HEURISTIC_COUNT, HeuristicId
from diffmerge.types import ChangeType, DiffResult

# With an annotated system-diff anchor the hunk must lie within this many lines.
_ANCHOR_TOLERANCE = 3

_HEURISTIC_NAMES = {
    HeuristicId.H1: "H1 (empty/bare)   ",
    HeuristicId.H2: "H2 (indent drop)  ",
    HeuristicId.H3: "H3 (separator/1) ",
    HeuristicId.H3B: "H3b(doc comment) ",
    HeuristicId.H4: "H4 (mark)         ",
    HeuristicId.H5: "H5 (},{)          ",
    HeuristicId.H6: "H6 (// series)    ",
    HeuristicId.H7: "H7 (empty outer)  ",
}


@dataclass(slots=True)
class SliderCase:
    """One ambiguous diff block from the corpus.

    ``sign`` is ``'+'`` for an insertion into the right file and ``'-'`` for a
    deletion from the left one. Positions are 1-based; the human-preferred
    position is ``block_begin + delta``. ``diff_pos`` is where the system
    diff placed the block, or -1 when unknown.
    """

    sign: str = "+"
    block_begin: int = 0
    delta: int = 0
    diff_pos: int = -1


@dataclass(slots=True)
class CsvEntry:
    """One file pair (by digest) and the sliders that refer to it."""

    digest: str = ""
    sliders: list[SliderCase] = field(default_factory=list)


@dataclass(slots=True)
class HeuristicStats:
    """How often one heuristic fired and how it compared to no heuristic."""

    fired: int = 0
    better: int = 0
    worse: int = 0
    tie: int = 0


@dataclass(slots=True)
class EvalStats:
    """Accumulated evaluation statistics."""

    total: int = 0
    not_found: int = 0
    gnu_wrong: int = 0
    sys_total: int = 0
    sys_wrong: int = 0
    dm_wrong: int = 0
    dm_better: int = 0
    dm_worse: int = 0
    dm_tie: int = 0
    dm_better_than_sys: int = 0
    dm_worse_than_sys: int = 0
    dm_tie_with_sys: int = 0
    error_hist: Counter = field(default_factory=Counter)
    h_stats: list[HeuristicStats] = field(
        default_factory=lambda: [HeuristicStats() for _ in range(HEURISTIC_COUNT)]
    )


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def parse_csv_line(line: str) -> CsvEntry:
    """Parse a line such as ``"a1b2c3,+ 1999 -1,- 2050 0"``.

    A line that cannot be parsed yields an entry with an empty digest.
    """
    fields = line.strip().split(",")
    if len(fields) < 2:
        return CsvEntry()
    digest = fields[0].strip()
    if not digest:
        return CsvEntry()

    entry = CsvEntry(digest)
    for raw in fields[1:]:
        parts = [part for part in raw.strip().split(" ") if part]
        if len(parts) < 3:
            continue
        case = SliderCase(
            sign=parts[0][0],
            block_begin=_to_int(parts[1]),
            delta=_to_int(parts[2]),
        )
        if len(parts) >= 4:
            case.diff_pos = _to_int(parts[3])
        if case.block_begin <= 0:
            continue
        entry.sliders.append(case)
    return entry


def load_csv_file(csv_path: str | Path) -> list[CsvEntry]:
    """Load all entries with sliders from a CSV file.

    Blank and malformed lines are skipped; an unreadable file yields no entries.
    """
    try:
        with open(csv_path, encoding="utf-8", errors="replace") as handle:
            lines = handle.read().splitlines()
    except OSError:
        return []
    entries = (parse_csv_line(line) for line in lines if line.strip())
    return [entry for entry in entries if entry.digest and entry.sliders]


def find_diffmerge_pos(result: DiffResult, case: SliderCase, max_slide: int = 10) -> int | None:
    """Find where the diff placed the slider's block (1-based).

    Only Insert hunks are searched for ``'+'`` and only Delete hunks for
    ``'-'``. The hunk nearest the system-diff anchor is chosen; without an
    anchor, or if the nearest hunk is too far away, None is returned.
    """
    if case.diff_pos <= 0:
        return None
    target = case.diff_pos - 1
    best_pos: int | None = None
    best_dist: int | None = None

    for hunk in result.hunks:
        if case.sign == "+" and hunk.type is not ChangeType.INSERT:
            continue
        if case.sign == "-" and hunk.type is not ChangeType.DELETE:
            continue
        start = hunk.right_range.start if case.sign == "+" else hunk.left_range.start
        dist = abs(start - target)
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_pos = start + 1

    effective_max = _ANCHOR_TOLERANCE if case.diff_pos > 0 else max_slide
    if best_dist is None or best_dist > effective_max:
        return None
    return best_pos


def _pct(n: int, base: int) -> str:
    if base == 0:
        return "-"
    return f"{n} / {base}  ({100.0 * n / base:.1f}%)"


def _ratio(n: int, base: int) -> str:
    return f"{100.0 * n / base if base else 0.0:.1f}"


def format_stats(stats: EvalStats) -> str:
    """Render the statistics as a human-readable report."""
    if stats.total == 0:
        return "No sliders evaluated.\n"

    s = stats
    found = s.total - s.not_found
    out: list[str] = [
        f"Total sliders      : {s.total}\n",
        f"Hunk found (<=maxSlide): {found}  not found: {s.not_found}\n\n",
        "                 Wrong (\u2260 human)       Right (= human)\n",
        f"Git diff :  {_pct(s.gnu_wrong, s.total)}   {_pct(s.total - s.gnu_wrong, s.total)}\n",
    ]
    if s.sys_total > 0:
        out.append(
            f"Sys diff :  {_pct(s.sys_wrong, s.sys_total)}   "
            f"{_pct(s.sys_total - s.sys_wrong, s.sys_total)}  (on {s.sys_total} annotated)\n"
        )
    out.append(f"Diffmerge:  {_pct(s.dm_wrong, found)}   {_pct(found - s.dm_wrong, found)}\n")

    out.append(f"\nDiffmerge vs Git diff (on {found} found sliders):\n")
    out.append(f"  Better (closer to human) : {_pct(s.dm_better, found)}\n")
    out.append(f"  Worse  (further from human): {_pct(s.dm_worse, found)}\n")
    out.append(f"  Tie    (same distance)    : {_pct(s.dm_tie, found)}\n")

    if s.sys_total > 0:
        sys_cmp = s.dm_better_than_sys + s.dm_worse_than_sys + s.dm_tie_with_sys
        out.append(f"\nDiffmerge vs Sys diff (on {sys_cmp} sliders with diffPos):\n")
        out.append(f"  Better (closer to human) : {_pct(s.dm_better_than_sys, sys_cmp)}\n")
        out.append(f"  Worse  (further from human): {_pct(s.dm_worse_than_sys, sys_cmp)}\n")
        out.append(f"  Tie    (same distance)    : {_pct(s.dm_tie_with_sys, sys_cmp)}\n")

    out.append("\nError histogram  (diffmerge_pos - human_pos):\n")
    out.append("  shift   count\n")
    for shift, count in sorted(s.error_hist.items()):
        if count == 0:
            continue
        bar = "#" * min(count * 40 // s.total + 1, 40)
        out.append(f"  {shift:>4}  {count:>6}  {bar}\n")

    fired = [(hid, s.h_stats[hid]) for hid in _HEURISTIC_NAMES if s.h_stats[hid].fired > 0]
    if fired:
        out.append("\nHeuristic stats (vs no-heuristic base):\n")
        out.append("  heuristic           fired   better    worse     tie\n")
        for hid, h in fired:
            out.append(
                f"  {_HEURISTIC_NAMES[hid]}  {h.fired:>6}"
                f"   {h.better:>6} ({_ratio(h.better, h.fired)}%)"
                f"   {h.worse:>6} ({_ratio(h.worse, h.fired)}%)"
                f"   {h.tie:>6} ({_ratio(h.tie, h.fired)}%)\n"
            )
    return "".join(out)