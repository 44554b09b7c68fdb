import pytest

from diffmerge.heuristics import (
    HeuristicId,
    HeuristicProbe,
    apply_slider_heuristics,
    probe_heuristic,
)
from diffmerge.types import ChangeType, Hunk, LineRange

H5_REL = ["{", "a", "},", "{", "b", "},", "{", "c", "}"]
H3B_REL = ["x", "/**", " * d", " */", "f();", "/**", " * d", " */", "end"]
H6_REL = ["code", "// note", "stuff", "// note", "more"]
H7_REL = ["a", "", "x", "b", "", "x", "c"]
H2_REL = ["start", "x", "  y", "x", "  y", "end"]
H3_REL = ["a", ";;;; sep", "b", ";;;; sep", "c"]
H4_REL = ["a", "@end", "b", "@end", "c"]
H1_REL = ["a", "", "b", "", "c"]

CASES = [
    (H5_REL, 4, 3, HeuristicId.H5),
    (H3B_REL, 4, 4, HeuristicId.H3B),
    (H6_REL, 2, 2, HeuristicId.H6),
    (H7_REL, 3, 3, HeuristicId.H7),
    (H2_REL, 2, 2, HeuristicId.H2),
    (H3_REL, 2, 2, HeuristicId.H3),
    (H4_REL, 2, 2, HeuristicId.H4),
]


def _without(rel, pos, size):
    return rel[:pos] + rel[pos + size :]


@pytest.mark.parametrize("rel,p,size,expected", CASES)
def test_exclusive_heuristic_identified(rel, p, size, expected):
    probe = probe_heuristic(p, size, rel)
    assert probe.exclusive is expected
    assert probe.pos < p
    assert probe.pos_after_excl == probe.pos
    assert probe.h1_applied is False


@pytest.mark.parametrize("rel,p,size,expected", CASES + [(H1_REL, 1, 2, HeuristicId.NONE)])
def test_slide_keeps_remaining_lines(rel, p, size, expected):
    probe = probe_heuristic(p, size, rel)
    assert _without(rel, probe.pos, size) == _without(rel, p, size)


def test_h5_slides_back_one():
    p = 4
    assert probe_heuristic(p, 3, H5_REL).pos == p - 1


def test_h3b_slides_to_comment_opening():
    probe = probe_heuristic(4, 4, H3B_REL)
    assert H3B_REL[probe.pos] == "/**"


def test_h6_slides_to_comment_series():
    probe = probe_heuristic(2, 2, H6_REL)
    assert H6_REL[probe.pos] == "// note"


def test_h7_slides_back_one():
    p = 3
    assert probe_heuristic(p, 3, H7_REL).pos == p - 1


def test_h1_moves_blank_line_to_block_end():
    p = 1
    probe = probe_heuristic(p, 2, H1_REL)
    assert probe == HeuristicProbe(p + 1, HeuristicId.NONE, p, True)


def test_no_heuristic_leaves_position():
    rel = ["alpha", "beta", "gamma", "delta"]
    assert probe_heuristic(1, 2, rel) == HeuristicProbe(1, HeuristicId.NONE, 1, False)


@pytest.mark.parametrize("p,size", [(-1, 1), (5, 1), (0, 0)])
def test_out_of_range_is_unchanged(p, size):
    rel = ["a", "b", "c", "d", "e"]
    probe = probe_heuristic(p, size, rel)
    assert probe == HeuristicProbe(p, HeuristicId.NONE, p, False)


@pytest.mark.parametrize(
    "rel,p,size,index",
    [
        (H2_REL, 2, 2, 2),
        (H3_REL, 2, 2, 3),
        (H3B_REL, 4, 4, 4),
        (H4_REL, 2, 2, 5),
        (H5_REL, 4, 3, 6),
        (H6_REL, 2, 2, 7),
        (H7_REL, 3, 3, 8),
        (["alpha", "beta", "gamma", "delta"], 1, 2, 0),
    ],
)
def test_probe_reports_heuristic_index(rel, p, size, index):
    assert int(probe_heuristic(p, size, rel).exclusive) == index


def test_apply_shifts_insert_hunk_on_both_sides():
    right = H5_REL
    left = _without(right, 4, 3)
    hunk = Hunk(ChangeType.INSERT, LineRange(4, 0), LineRange(4, 3))
    apply_slider_heuristics([hunk], left, right)
    expected = probe_heuristic(4, 3, right).pos
    assert hunk.right_range.start == expected
    assert hunk.left_range.start == expected
    assert hunk.right_range.count == 3


def test_apply_shifts_delete_hunk_using_left():
    left = H6_REL
    right = _without(left, 2, 2)
    hunk = Hunk(ChangeType.DELETE, LineRange(2, 2), LineRange(2, 0))
    apply_slider_heuristics([hunk], left, right)
    assert left[hunk.left_range.start] == "// note"
    assert hunk.right_range.start == hunk.left_range.start
    assert _without(left, hunk.left_range.start, 2) == right


def test_apply_ignores_equal_and_replace():
    rel = H5_REL
    equal = Hunk(ChangeType.EQUAL, LineRange(4, 3), LineRange(4, 3))
    replace = Hunk(ChangeType.REPLACE, LineRange(4, 3), LineRange(4, 3))
    apply_slider_heuristics([equal, replace], rel, rel)
    assert equal.left_range == LineRange(4, 3)
    assert replace.right_range == LineRange(4, 3)