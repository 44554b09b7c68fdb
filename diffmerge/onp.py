"""O(NP) sequence difference with edit-script reconstruction.

The forward phase records every diagonal extension it makes; the main
edit path is then recovered by walking that record backwards.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


class EditType(enum.Enum):
    """Kind of an edit-script block."""

    INSERT = "insert"
    DELETE = "delete"
    EQUAL = "equal"


@dataclass(slots=True)
class Block:
    """Half-open ranges ``[start_x, end_x)`` in A and ``[start_y, end_y)`` in B."""

    type: EditType
    start_x: int
    start_y: int
    end_x: int
    end_y: int


class Diff(Generic[T]):
    """Difference of two sequences; the shorter one is always used as A.

    If the first sequence is longer the two are swapped internally and
    :meth:`swapped` reports it; blocks then refer to the swapped axes.
    """

    def __init__(self, a: Sequence[T], b: Sequence[T]) -> None:
        self._swapped = len(a) > len(b)
        if self._swapped:
            a, b = b, a
        self._a = a
        self._b = b
        self._m = len(a)
        self._n = len(b)
        self._offset = self._m + 1
        self._fp: list[int] = []
        self._collection: list[tuple[int, int, int]] = []
        self._edit_distance = 0

    @property
    def a(self) -> Sequence[T]:
        """The (possibly swapped) first sequence."""
        return self._a

    @property
    def b(self) -> Sequence[T]:
        """The (possibly swapped) second sequence."""
        return self._b

    def walk(self) -> list[Block]:
        """Run the algorithm and return the edit script as blocks."""
        self._compare()
        return self._backtrack()

    def edit_distance(self) -> int:
        """Number of insertions plus deletions; valid after :meth:`walk`."""
        return self._edit_distance

    def swapped(self) -> bool:
        """True if the inputs were swapped because A was longer than B."""
        return self._swapped

    def _snake(self, k: int, y: int) -> int:
        x = y - k
        a, b, m, n = self._a, self._b, self._m, self._n
        while x < m and y < n and a[x] == b[y]:
            x += 1
            y += 1
        return y

    def _collect(self, k: int) -> int:
        fp, off = self._fp, self._offset
        v0 = fp[k - 1 + off] + 1
        v1 = fp[k + 1 + off]
        # +1: came from diagonal k-1 (insert); -1: from k+1 (delete).
        direction = 1 if v0 > v1 else -1
        y = self._snake(k, max(v0, v1))
        self._collection.append((k, y, direction))
        return y

    def _compare(self) -> None:
        delta = self._n - self._m
        off = self._offset
        self._fp = [-1] * (self._m + self._n + 3)
        self._collection = []
        fp = self._fp
        p = -1
        while True:
            p += 1
            for k in range(-p, delta):
                fp[k + off] = self._collect(k)
            for k in range(delta + p, delta, -1):
                fp[k + off] = self._collect(k)
            fp[delta + off] = self._collect(delta)
            if fp[delta + off] == self._n:
                break
        self._edit_distance = delta + 2 * p

    def _main_branch(self) -> list[tuple[int, int, int]]:
        branch: list[tuple[int, int, int]] = []
        next_k = self._collection[-1][0]
        for entry in reversed(self._collection):
            k, _, direction = entry
            if k != next_k:
                continue
            assert direction in (1, -1)
            next_k = k - direction
            branch.append(entry)
        branch.reverse()
        return branch

    def _backtrack(self) -> list[Block]:
        branch = self._main_branch()
        result: list[Block] = []
        if not branch:
            return result

        def close_run(kind: EditType, sx: int, sy: int, lx: int, ly: int) -> Block:
            return Block(
                kind,
                sx,
                sy,
                lx + (1 if kind is EditType.DELETE else 0),
                ly + (1 if kind is EditType.INSERT else 0),
            )

        last_dir = 0
        last_x = -1
        last_y = -1
        run_type = EditType.EQUAL
        start_x = start_y = 0

        for (k, y, _), (_, _, direction) in zip(branch, branch[1:]):
            assert y >= 0
            x = y - k
            assert x >= 0
            if direction != last_dir or y != last_y:
                if last_x == -1:
                    assert x == y
                    if x > 0:
                        result.append(Block(EditType.EQUAL, 0, 0, x, y))
                else:
                    result.append(close_run(run_type, start_x, start_y, last_x, last_y))
                    assert abs((x - last_x) - (y - last_y)) == 1
                    eq_len = min(x - last_x, y - last_y)
                    if eq_len > 0:
                        result.append(Block(EditType.EQUAL, x - eq_len, y - eq_len, x, y))
                run_type = EditType.DELETE if direction < 0 else EditType.INSERT
                start_x, start_y = x, y
            last_dir = direction
            last_x, last_y = x, y

        if run_type is not EditType.EQUAL:
            result.append(close_run(run_type, start_x, start_y, last_x, last_y))

        m, n = self._m, self._n
        end_a = m == last_x
        end_b = n == last_y
        assert not (end_a and end_b)
        if not end_a and not end_b and last_x >= 0:
            assert abs((m - last_x) - (n - last_y)) == 1
            eq_len = min(m - last_x, n - last_y)
            result.append(Block(EditType.EQUAL, m - eq_len, n - eq_len, m, n))
        return result