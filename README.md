# diffmerge

A line-oriented diff library built on the Wu/Manber/Myers O(NP) algorithm.
It moves "sliders" to the place a human reader would expect them. A slider
is an insert or delete block that could sit at more than one position. The
package also has a command that measures how well this placement matches a
corpus of hand-annotated cases.

## Installation

```
pip install .
```

## Computing a diff

```python
from diffmerge.engine import DiffEngine
from diffmerge.types import ChangeType, DiffOptions

left = ["alpha", "beta", "gamma"]
right = ["alpha", "BETA", "gamma", "delta"]

result = DiffEngine().compute(left, right, DiffOptions(ignore_case=True))
for hunk in result.hunks:
    print(hunk.type, hunk.left_range, hunk.right_range)

print(result.stats.additions, result.stats.deletions, result.stats.modifications)
print(result.is_identical())
```

`DiffEngine.compute` takes two sequences of lines, without line terminators,
and returns a `DiffResult`. A `DiffResult` holds the following:

- `hunks`: a list of `Hunk`. Each hunk has a `ChangeType` (`EQUAL`, `INSERT`,
  `DELETE` or `REPLACE`) and two half-open `LineRange` values, `left_range`
  and `right_range`. A `LineRange` has `start`, `count`, `end()` and
  `is_empty()`.
- `stats`: a `DiffStats` with `additions`, `deletions`, `modifications` and
  `edit_distance`. `modifications` counts Replace hunks.
- `left_line_count` and `right_line_count`.
- `is_identical()`.

Inputs that compare equal give a single `EQUAL` hunk. If one side is empty,
the result is a single `INSERT` or `DELETE` hunk.

### Options

`DiffOptions` has these fields.

| field | default | effect |
|---|---|---|
| `ignore_whitespace` | `False` | collapse whitespace runs to one space and drop leading and trailing whitespace before comparing |
| `ignore_trailing_whitespace` | `False` | drop trailing whitespace before comparing |
| `ignore_case` | `False` | compare case-folded lines |
| `merge_replace_hunks` | `True` | merge an adjacent Delete and Insert into one Replace hunk |
| `coalesce_adjacent_same_type` | `True` | join consecutive hunks of the same type |
| `apply_slider_heuristics` | `True` | move Insert and Delete hunks to the preferred boundary |

`ignore_blank_lines` and `ignore_eol_style` are also fields of `DiffOptions`,
but the engine does not read them.

## Lower-level pieces

- `diffmerge.interner.LineInterner.intern(left, right, opts)` gives every
  distinct normalised line an integer id. `diffmerge.interner.normalize` gives
  the comparison key of a single line.
- `diffmerge.onp.Diff(a, b)` runs the O(NP) algorithm over any two sequences
  whose items can be compared with `==`. `walk()` returns a list of `Block`
  edit-script entries, and `edit_distance()` and `swapped()` describe the run.
  If `a` is longer than `b`, the two are swapped internally, and the blocks
  then refer to the swapped axes.
- `diffmerge.heuristics.probe_heuristic(p, size, lines)` reports where the
  heuristics would move a block of `size` lines at 0-based position `p`. It
  returns a `HeuristicProbe` with these fields:
  - `pos`: the final position;
  - `exclusive`: which exclusive `HeuristicId` fired;
  - `pos_after_excl`: the position after that heuristic;
  - `h1_applied`: whether H1 then moved the block.

  `probe_heuristic` changes nothing.
- `diffmerge.heuristics.apply_slider_heuristics(hunks, left, right)` shifts
  the Insert and Delete hunks in the list, in place.

## Evaluating slider placement

The `slider-eval` command reads a corpus directory, which holds two kinds of
entry:

- `<repo>.csv` files, one line per file pair:

  ```
  digest,+ blockBegin delta diffPos,- blockBegin delta diffPos,...
  ```

  `+` marks an insertion and `-` marks a deletion. Positions are 1-based. The
  human-preferred position is `blockBegin + delta`. `diffPos` is where a
  system diff placed the block.
- `<repo>/` directories. Each one holds the pairs `<digest>_0.*` (left) and
  `<digest>_1.*` (right).

For each slider, the engine's block is looked up near `diffPos`, within 3
lines. A slider without `diffPos` is counted as "not found". The command
prints a line for each repository, then a summary: error rates, comparisons
with git and system diff, an error histogram, and per-heuristic counts.

```
slider-eval --corpus corpusDiff --heuristics
slider-eval --corpus corpusDiff --repos 5 --start 10 --show-errors 2
slider-eval --corpus corpusDiff --logs logs
```

| option | meaning |
|---|---|
| `--corpus path` | corpus directory (default `corpusDiff`) |
| `--max-slide N` | printed in the header; the 3-line anchor tolerance is what decides matching |
| `--repos N` | process at most N repositories (0 = all) |
| `--start N` | skip the first N repositories |
| `--show-errors N` | print file context for sliders with \|dm_error\| >= N |
| `--logs DIR` | write details per shift to `DIR/log-1` … `DIR/log3` |
| `--heuristics` | measure positions after the slider heuristics |

The command exits with status 2 if the corpus directory does not exist.

The same steps can also be called from Python:

- `diffmerge.slider_eval` provides `parse_csv_line`, `load_csv_file`,
  `find_diffmerge_pos`, `EvalStats` and `format_stats`.
- `diffmerge.cli` provides `evaluate_repo` and `main`.

## What it does not do

The package has no command for diffing two files, and it does not print
unified or side-by-side output. It does not read files or split text into
lines for the library API, so callers pass lists of lines. It does not
download or build the evaluation corpus either: `slider-eval` only reads a
corpus that already exists.

## Running the tests

```
pip install .[test]
pytest
```