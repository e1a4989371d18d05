"""Immutable filter sets and the keep/skip decision for one entry."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from dirwalker.traversal.matching import candidate_name, match
from dirwalker.traversal.types import Decision, Entry


class FilterSet:
    """
    An ordered, duplicate-free, immutable collection of glob patterns.

    Any single matching pattern counts as a match; order only reflects insertion.
    `extend()` returns a new set, so a set handed to a subdirectory is never
    changed by what that subdirectory loads.
    """

    __slots__ = ("_patterns",)

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._patterns: tuple[str, ...] = tuple(dict.fromkeys(patterns))

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def extend(self, patterns: Iterable[str]) -> FilterSet:
        """Union of this set and `patterns`; `self` is returned when nothing is new."""
        added = [p for p in patterns if p not in self._patterns]
        if not added:
            return self
        return FilterSet(self._patterns + tuple(added))

    def matches(self, name: str) -> bool:
        return any(match(name, pattern) for pattern in self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._patterns

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self._patterns == other._patterns

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"FilterSet({list(self._patterns)!r})"


def classify(entry: Entry, ignore: FilterSet, always_include: FilterSet) -> Decision:
    """
    Decide whether `entry` is kept.

    Always-include patterns are checked first against the bare basename, for
    files and directories alike, and win outright. Otherwise any ignore pattern
    matching the type-qualified name (see `candidate_name`) skips the entry.
    """
    if always_include.matches(entry.basename):
        return Decision.KEEP
    if ignore.matches(candidate_name(entry)):
        return Decision.SKIP
    return Decision.KEEP
