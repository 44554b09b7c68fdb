from diffmerge.interner import LineInterner, normalize
from diffmerge.types import DiffOptions


def test_identical_lines_share_id():
    r = LineInterner().intern(["foo", "bar"], ["foo", "baz"], DiffOptions())
    assert len(r.left_ids) == 2
    assert len(r.right_ids) == 2
    assert r.left_ids[0] == r.right_ids[0]
    assert r.left_ids[1] != r.right_ids[1]


def test_distinct_lines_get_distinct_ids():
    r = LineInterner().intern(["a", "b", "c"], [], DiffOptions())
    assert r.left_ids == [0, 1, 2]


def test_repeated_line_reuses_id():
    r = LineInterner().intern(["x", "x", "x"], [], DiffOptions())
    assert r.left_ids[0] == r.left_ids[1] == r.left_ids[2]


def test_ignore_case():
    r = LineInterner().intern(["Hello"], ["HELLO"], DiffOptions(ignore_case=True))
    assert r.left_ids[0] == r.right_ids[0]


def test_ignore_whitespace_collapses():
    r = LineInterner().intern(["foo  bar"], ["foo bar"], DiffOptions(ignore_whitespace=True))
    assert r.left_ids[0] == r.right_ids[0]


def test_ignore_trailing_whitespace():
    opts = DiffOptions(ignore_trailing_whitespace=True)
    r = LineInterner().intern(["hello   "], ["hello"], opts)
    assert r.left_ids[0] == r.right_ids[0]


def test_ignore_trailing_does_not_affect_leading():
    opts = DiffOptions(ignore_trailing_whitespace=True)
    r = LineInterner().intern(["   hello"], ["hello"], opts)
    assert r.left_ids[0] != r.right_ids[0]


def test_case_sensitive_by_default():
    r = LineInterner().intern(["Hello"], ["hello"], DiffOptions())
    assert r.left_ids[0] != r.right_ids[0]


def test_empty_lines_are_interned():
    r = LineInterner().intern(["", "x", ""], ["", "x"], DiffOptions())
    assert r.left_ids[0] == r.left_ids[2]
    assert r.left_ids[0] == r.right_ids[0]


def test_default_options_when_omitted():
    r = LineInterner().intern(["A"], ["a"])
    assert r.left_ids[0] != r.right_ids[0]


def test_ids_persist_across_calls():
    interner = LineInterner()
    first = interner.intern(["foo"], [], DiffOptions())
    second = interner.intern([], ["foo"], DiffOptions())
    assert first.left_ids == second.right_ids


def test_normalize_whitespace_drops_leading_and_trailing():
    assert normalize("  foo \t bar  ", DiffOptions(ignore_whitespace=True)) == "foo bar"


def test_normalize_trailing_only():
    assert normalize("  foo  ", DiffOptions(ignore_trailing_whitespace=True)) == "  foo"


def test_normalize_whitespace_takes_precedence_over_trailing():
    opts = DiffOptions(ignore_whitespace=True, ignore_trailing_whitespace=True)
    assert normalize("  a   b ", opts) == "a b"


def test_normalize_case_folds():
    assert normalize("Hello", DiffOptions(ignore_case=True)) == "hello"


def test_normalize_without_options_is_identity():
    assert normalize("  Mixed  Case  ", DiffOptions()) == "  Mixed  Case  "