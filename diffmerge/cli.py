"""Command-line evaluation of slider placement against a human corpus."""

from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from diffmerge.engine import DiffEngine
from diffmerge.heuristics import HeuristicId, HeuristicProbe, probe_heuristic
from diffmerge.slider_eval import (
    EvalStats,
    SliderCase,
    find_diffmerge_pos,
    format_stats,
    load_csv_file,
)
from diffmerge.types import ChangeType, DiffOptions

_SEPARATOR = "  +------------------------------------------\n"

# Log files cover dm_error values from _LOG_MIN to _LOG_MAX inclusive.
_LOG_MIN = -1
_LOG_MAX = 3

_PROBE_NAMES = {
    HeuristicId.H1: "H1",
    HeuristicId.H2: "H2",
    HeuristicId.H3: "H3",
    HeuristicId.H3B: "H3b",
    HeuristicId.H4: "H4",
    HeuristicId.H5: "H5",
    HeuristicId.H6: "H6",
    HeuristicId.H7: "H7",
}


def load_lines(path: str | Path) -> list[str]:
    """Read a text file into lines without terminators; unreadable files give []."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            text = handle.read()
    except OSError:
        return []
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def find_pair_file(repo_dir: str | Path, digest: str, side: int) -> Path | None:
    """Locate ``<digest>_<side>.*`` in ``repo_dir``, or None if absent."""
    prefix = f"{digest}_{side}."
    directory = Path(repo_dir)
    try:
        candidates = [
            entry for entry in directory.iterdir() if entry.is_file() and entry.name.startswith(prefix)
        ]
    except OSError:
        return None
    if not candidates:
        return None
    return min(candidates, key=lambda entry: (entry.name.lower(), entry.name))


def print_fragment(
    out: TextIO,
    lines: Sequence[str],
    pos: int,
    block_size: int,
    sign: str,
    ctx: int = 3,
) -> None:
    """Write the block at 1-based ``pos`` with ``ctx`` lines of context around it."""
    block_end = pos + block_size - 1
    first = max(1, pos - ctx)
    last = min(len(lines), block_end + ctx)
    for i in range(first, last + 1):
        in_block = pos <= i <= block_end
        if i == pos:
            out.write(_SEPARATOR)
        prefix = sign if in_block else " "
        out.write(f"  {prefix} {i:>5}  {lines[i - 1]}\n")
        if i == block_end:
            out.write(_SEPARATOR)


def probe_label(probe: HeuristicProbe) -> str:
    """Short name of the heuristics that moved a block, or an empty string."""
    exclusive = _PROBE_NAMES.get(probe.exclusive) if probe.exclusive is not HeuristicId.NONE else None
    if exclusive and probe.h1_applied:
        return f"{exclusive}+H1"
    if exclusive:
        return exclusive
    if probe.h1_applied:
        return "H1"
    return ""


def _print_slider_detail(
    out: TextIO,
    case: SliderCase,
    digest: str,
    human_pos: int,
    dm_pos: int,
    dm_error: int,
    block_size: int,
    lines_a: Sequence[str],
    lines_b: Sequence[str],
    probe: HeuristicProbe,
) -> None:
    out.write("\n========================================\n")
    out.write(
        f"  digest={digest}  {case.sign} blockBegin={case.block_begin} delta={case.delta}"
        f"  blockSize={block_size}\n"
    )
    out.write(
        f"  git={case.block_begin}  sys={case.diff_pos}  human={human_pos}"
        f"  dm={dm_pos}  dm_error={dm_error}\n"
    )

    rel = lines_b if case.sign == "+" else lines_a
    side = "B" if case.sign == "+" else "A"

    def section(label: str, pos: int, suffix: str = "") -> None:
        if pos <= 0:
            return
        if suffix:
            out.write(f"\n  -- {label} (file {side}, line {pos})  [{suffix}] --\n")
        else:
            out.write(f"\n  -- {label} (file {side}, line {pos}) --\n")
        print_fragment(out, rel, pos, block_size, case.sign)

    section("sys diff ", case.diff_pos)
    section("human    ", human_pos)
    section("diffmerge", dm_pos, probe_label(probe))


def _percent(n: int, base: int) -> str:
    return f"{100.0 * n / base if base else 0.0:.1f}"


def evaluate_repo(
    csv_path: str | Path,
    repo_dir: str | Path,
    max_slide: int,
    show_errors_min: int,
    use_heuristics: bool,
    logs: Mapping[int, TextIO] | None,
    stats: EvalStats,
    out: TextIO,
) -> None:
    """Evaluate every slider of one repository, adding to ``stats``.

    ``logs`` maps a dm_error value to a stream receiving verbose details of
    sliders with that error.
    """
    logs = logs or {}
    entries = load_csv_file(csv_path)
    if not entries:
        return

    engine = DiffEngine()
    repo_total = repo_dm_wrong = repo_gnu_wrong = 0

    for entry in entries:
        path_a = find_pair_file(repo_dir, entry.digest, 0)
        path_b = find_pair_file(repo_dir, entry.digest, 1)
        if path_a is None or path_b is None:
            continue
        lines_a = load_lines(path_a)
        lines_b = load_lines(path_b)
        if not lines_a and not lines_b:
            continue

        base_diff = engine.compute(lines_a, lines_b, DiffOptions(apply_slider_heuristics=False))

        for case in entry.sliders:
            human_pos = case.block_begin + case.delta
            base_dm_pos = find_diffmerge_pos(base_diff, case, max_slide)

            stats.total += 1
            repo_total += 1

            gnu_error = -case.delta
            if gnu_error != 0:
                stats.gnu_wrong += 1
                repo_gnu_wrong += 1

            if base_dm_pos is None:
                stats.not_found += 1
                continue

            rel = lines_b if case.sign == "+" else lines_a
            block_size = 1
            probe = HeuristicProbe(base_dm_pos - 1, HeuristicId.NONE, base_dm_pos - 1, False)
            for hunk in base_diff.hunks:
                if case.sign == "+" and hunk.type is ChangeType.INSERT:
                    start, size = hunk.right_range.start, hunk.right_range.count
                elif case.sign == "-" and hunk.type is ChangeType.DELETE:
                    start, size = hunk.left_range.start, hunk.left_range.count
                else:
                    continue
                if start + 1 == base_dm_pos:
                    block_size = size
                    probe = probe_heuristic(start, size, rel)
                    break

            heuristic_dm_pos = probe.pos + 1
            dm_pos = heuristic_dm_pos if use_heuristics else base_dm_pos

            def track(hid: HeuristicId, adjusted_pos: int) -> None:
                h = stats.h_stats[hid]
                h.fired += 1
                base_err = abs(base_dm_pos - human_pos)
                h_err = abs(adjusted_pos - human_pos)
                if h_err < base_err:
                    h.better += 1
                elif h_err > base_err:
                    h.worse += 1
                else:
                    h.tie += 1

            if probe.exclusive is not HeuristicId.NONE:
                track(probe.exclusive, probe.pos_after_excl + 1)
            if probe.h1_applied:
                track(HeuristicId.H1, heuristic_dm_pos)

            dm_error = dm_pos - human_pos
            stats.error_hist[dm_error] += 1
            if dm_error != 0:
                stats.dm_wrong += 1
                repo_dm_wrong += 1

            abs_dm = abs(dm_error)
            abs_gnu = abs(gnu_error)
            if abs_dm < abs_gnu:
                stats.dm_better += 1
            elif abs_dm > abs_gnu:
                stats.dm_worse += 1
            else:
                stats.dm_tie += 1

            if case.diff_pos > 0:
                stats.sys_total += 1
                sys_error = case.diff_pos - human_pos
                if sys_error != 0:
                    stats.sys_wrong += 1
                abs_sys = abs(sys_error)
                if abs_dm < abs_sys:
                    stats.dm_better_than_sys += 1
                elif abs_dm > abs_sys:
                    stats.dm_worse_than_sys += 1
                else:
                    stats.dm_tie_with_sys += 1

            detail = (case, entry.digest, human_pos, dm_pos, dm_error, block_size, lines_a, lines_b, probe)
            if show_errors_min > 0 and abs_dm >= show_errors_min:
                _print_slider_detail(out, *detail)
            log = logs.get(dm_error)
            if log is not None:
                _print_slider_detail(log, *detail)

    base_name = Path(csv_path).name.split(".")[0]
    out.write(
        f"  {base_name:<30}  sliders: {repo_total}"
        f"  gnu_wrong: {repo_gnu_wrong} ({_percent(repo_gnu_wrong, repo_total)}%)"
        f"  dm_wrong: {repo_dm_wrong} ({_percent(repo_dm_wrong, repo_total)}%)\n"
    )
    out.flush()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slider-eval",
        description="Evaluate diffmerge's slider placement against the human corpus.",
    )
    parser.add_argument(
        "--corpus", metavar="path", default="corpusDiff",
        help="Path to corpusDiff directory (output of corpus-dl).",
    )
    parser.add_argument(
        "--max-slide", metavar="N", type=int, default=10,
        help="Ignore a hunk match if it is more than N lines from blockBegin. Default: 10.",
    )
    parser.add_argument(
        "--repos", metavar="N", type=int, default=0,
        help="Process at most N repositories (0 = all).",
    )
    parser.add_argument(
        "--start", metavar="N", type=int, default=0,
        help="Skip the first N repositories. Default: 0.",
    )
    parser.add_argument(
        "--show-errors", metavar="N", type=int, default=0,
        help="Print file context for every slider where |dm_error| >= N.",
    )
    parser.add_argument(
        "--logs", metavar="DIR", default="",
        help="Write verbose slider details into DIR/log-1 .. DIR/log3, one file per shift value.",
    )
    parser.add_argument(
        "--heuristics", action="store_true",
        help="Apply slider-placement heuristics before measuring dm_error.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the evaluation over a corpus directory; returns the exit status."""
    args = _build_parser().parse_args(argv)
    out = sys.stdout

    with ExitStack() as stack:
        logs: dict[int, TextIO] = {}
        if args.logs:
            Path(args.logs).mkdir(parents=True, exist_ok=True)
            for shift in range(_LOG_MIN, _LOG_MAX + 1):
                log_path = Path(args.logs) / f"log{shift}"
                try:
                    logs[shift] = stack.enter_context(open(log_path, "w", encoding="utf-8"))
                except OSError:
                    sys.stderr.write(f"cannot open: {log_path}\n")

        out.write(f"Corpus   : {args.corpus}\n")
        out.write(f"max-slide: {args.max_slide} lines\n")
        if args.show_errors > 0:
            out.write(f"show-errors: |dm_error| >= {args.show_errors}\n")
        if args.logs:
            out.write(f"logs dir : {args.logs}/log-1 .. log3\n")
        if args.heuristics:
            out.write("heuristics: ON\n")
        out.write("\n")

        corpus = Path(args.corpus)
        if not corpus.is_dir():
            sys.stderr.write(f"directory not found: {args.corpus}\n")
            return 2

        csv_files = sorted(
            entry.name for entry in corpus.iterdir()
            if entry.is_file() and entry.name.lower().endswith(".csv")
        )
        total_files = len(csv_files)
        if args.start > 0:
            csv_files = csv_files[args.start:]
        if args.repos > 0:
            csv_files = csv_files[: args.repos]

        out.write(f"Repositories to process: {len(csv_files)} (of {total_files} total")
        if args.start > 0:
            out.write(f", starting at #{args.start + 1}")
        out.write(")\n\n")

        stats = EvalStats()
        for index, csv_name in enumerate(csv_files, start=1):
            out.write(f"[{index}/{len(csv_files)}] {csv_name}\n")
            out.flush()
            evaluate_repo(
                corpus / csv_name,
                corpus / csv_name.split(".")[0],
                args.max_slide,
                args.show_errors,
                args.heuristics,
                logs,
                stats,
                out,
            )

        out.write("\n=== SUMMARY ===\n")
        out.write(format_stats(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())