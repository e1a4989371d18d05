"""Value types shared by the walker: configuration, entries, decisions and events."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from dirwalker.traversal.defaults import (
    DEFAULT_IGNORE,
    DEFAULT_IGNORE_FILES,
    DEFAULT_NEVER_IGNORE,
)
from dirwalker.traversal.ignore_files import parse_ignore_file_spec


class EntryType(str, Enum):
    file = "file"
    directory = "directory"


class Decision(Enum):
    """Outcome of classifying one entry against the active filters."""

    KEEP = "keep"
    SKIP = "skip"


class WalkControl(Enum):
    """Values a walk callback may return to steer the walk."""

    CONTINUE = "continue"
    STOP = "stop"


STOP = WalkControl.STOP


@dataclass(frozen=True)
class Entry:
    """
    One filesystem object found during a walk.

    `relname` is the `/`-joined path relative to the walk root and is the stable
    identity to compare results across runs. `pathname` is the path used for I/O.
    """

    basename: str
    dirname: Path
    pathname: Path
    relname: str
    type: EntryType
    stats: os.stat_result = field(repr=False, compare=False)

    @property
    def is_directory(self) -> bool:
        return self.type is EntryType.directory


def _pattern_tuple(name: str, values: Iterable[str] | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        raise TypeError(f"`{name}` must be a list of strings, not a single string")
    result = tuple(values)
    for value in result:
        if not isinstance(value, str):
            raise TypeError(f"`{name}` entries must be strings, got {type(value).__name__}")
    return result


@dataclass(frozen=True)
class WalkerConfig:
    """
    Immutable walker configuration, accepted once at construction.

    `never_ignore` patterns are matched against basenames and always win.
    `default_ignore` patterns apply at every depth. Each `ignore_files` string is
    a comma- or space-separated fallback chain of filenames, e.g.
    `".npmignore, .gitignore"`: the first one present in a directory is loaded.
    """

    never_ignore: tuple[str, ...] = ()
    default_ignore: tuple[str, ...] = ()
    ignore_files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Callers may pass lists; store tuples.
        for name in ("never_ignore", "default_ignore", "ignore_files"):
            object.__setattr__(self, name, _pattern_tuple(name, getattr(self, name)))

    @property
    def ignore_file_specs(self) -> tuple[tuple[str, ...], ...]:
        """Each `ignore_files` string split into its ordered candidate filenames."""
        specs = (parse_ignore_file_spec(spec) for spec in self.ignore_files)
        return tuple(spec for spec in specs if spec)

    @classmethod
    def npm(cls) -> WalkerConfig:
        """Preset that selects files the way `npm publish` does."""
        return cls(
            never_ignore=tuple(DEFAULT_NEVER_IGNORE),
            default_ignore=tuple(DEFAULT_IGNORE),
            ignore_files=tuple(DEFAULT_IGNORE_FILES),
        )


@dataclass(frozen=True)
class WalkOptions:
    """Per-call walk options. By default only the root's direct children are considered."""

    recurse: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> WalkOptions:
        """Build options from a plain mapping, accepting `recursive` as a synonym."""
        if not options:
            return cls()
        return cls(recurse=bool(options.get("recurse") or options.get("recursive")))


class WalkError(Exception):
    """
    A recoverable failure during a walk: a directory could not be listed
    (`operation="list"`) or a path could not be stat-ed (`operation="stat"`).
    """

    def __init__(self, path: Path, operation: str, cause: OSError) -> None:
        self.path: Path = path
        self.operation: str = operation
        self.cause: OSError = cause
        super().__init__(f"cannot {operation} {path}: {cause.strerror or cause}")


@dataclass(frozen=True)
class EntryEvent:
    entry: Entry


@dataclass(frozen=True)
class ErrorEvent:
    error: WalkError


@dataclass(frozen=True)
class CompleteEvent:
    """The walk finished; always the last event."""


WalkEvent = EntryEvent | ErrorEvent | CompleteEvent


@dataclass
class WalkResult:
    """Everything one walk produced."""

    entries: list[Entry] = field(default_factory=list)
    errors: list[WalkError] = field(default_factory=list)
    stopped: bool = False

    @property
    def relnames(self) -> list[str]:
        return [entry.relname for entry in self.entries]
