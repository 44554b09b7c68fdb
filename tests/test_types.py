from diffmerge.types import (
    ChangeType,
    DiffOptions,
    DiffResult,
    DiffStats,
    Hunk,
    LineRange,
)


def test_line_range_defaults_are_empty():
    r = LineRange()
    assert r.start == 0
    assert r.count == 0
    assert r.is_empty() is True
    assert r.end() == r.start


def test_line_range_end_is_start_plus_count():
    r = LineRange(start=12, count=5)
    assert r.end() - r.start == r.count
    assert r.is_empty() is False


def test_line_range_empty_keeps_insertion_point():
    r = LineRange(start=9, count=0)
    assert r.is_empty() is True
    assert r.end() == 9


def test_hunk_ranges_are_independent():
    a = Hunk(ChangeType.INSERT)
    b = Hunk(ChangeType.INSERT)
    a.left_range.start = 4
    assert b.left_range.start == 0
    assert a.right_range == LineRange()


def test_diff_options_defaults():
    opts = DiffOptions()
    assert opts.ignore_whitespace is False
    assert opts.ignore_trailing_whitespace is False
    assert opts.ignore_case is False
    assert opts.ignore_blank_lines is False
    assert opts.ignore_eol_style is True
    assert opts.merge_replace_hunks is True
    assert opts.coalesce_adjacent_same_type is True
    assert opts.apply_slider_heuristics is True


def test_diff_stats_default_zero():
    s = DiffStats()
    assert (s.additions, s.deletions, s.modifications, s.edit_distance) == (0, 0, 0, 0)


def test_empty_result_is_identical():
    assert DiffResult().is_identical() is True


def test_single_equal_hunk_is_identical():
    r = DiffResult(hunks=[Hunk(ChangeType.EQUAL, LineRange(0, 3), LineRange(0, 3))])
    assert r.is_identical() is True


def test_insert_hunk_is_not_identical():
    r = DiffResult(hunks=[Hunk(ChangeType.INSERT, LineRange(0, 0), LineRange(0, 2))])
    assert r.is_identical() is False


def test_two_equal_hunks_are_not_identical():
    r = DiffResult(
        hunks=[
            Hunk(ChangeType.EQUAL, LineRange(0, 1), LineRange(0, 1)),
            Hunk(ChangeType.EQUAL, LineRange(1, 1), LineRange(1, 1)),
        ]
    )
    assert r.is_identical() is False


def test_results_do_not_share_hunk_lists():
    a = DiffResult()
    b = DiffResult()
    a.hunks.append(Hunk(ChangeType.DELETE))
    assert b.hunks == []
    assert b.is_identical() is True