"""Mapping of (normalized) lines to integer ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from diffmerge.types import DiffOptions


def normalize(line: str, opts: DiffOptions) -> str:
    """Return the comparison key of a line under the given options."""
    key = line
    if opts.ignore_whitespace:
        # Collapse whitespace runs to one space, dropping leading and trailing runs.
        key = " ".join(key.split())
    elif opts.ignore_trailing_whitespace:
        key = key.rstrip()
    if opts.ignore_case:
        key = key.casefold()
    return key


@dataclass(slots=True)
class InternResult:
    """One id per line of each input."""

    left_ids: list[int] = field(default_factory=list)
    right_ids: list[int] = field(default_factory=list)


class LineInterner:
    """Assigns the same id to lines that compare equal after normalization."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    def _id_for(self, line: str, opts: DiffOptions) -> int:
        key = normalize(line, opts)
        return self._ids.setdefault(key, len(self._ids))

    def intern(
        self,
        left: Iterable[str],
        right: Iterable[str],
        opts: DiffOptions | None = None,
    ) -> InternResult:
        """Intern both sequences with one shared dictionary."""
        if opts is None:
            opts = DiffOptions()
        return InternResult(
            left_ids=[self._id_for(line, opts) for line in left],
            right_ids=[self._id_for(line, opts) for line in right],
        )