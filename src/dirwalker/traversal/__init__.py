"""
Directory walking with layered, npm/git-style ignore rules.

Self-contained: no imports from `dirwalker` outside this package.

Usage::

    from dirwalker.traversal import DirWalker, WalkerConfig, WalkOptions

    walker = DirWalker(
        WalkerConfig(
            never_ignore=["package.json", "README.*"],
            default_ignore=["node_modules/", ".git"],
            ignore_files=[".npmignore, .gitignore"],
        )
    )
    for event in walker.iter_events("my-package", WalkOptions(recurse=True)):
        ...
"""

from dirwalker.traversal.defaults import (
    DEFAULT_IGNORE,
    DEFAULT_IGNORE_FILES,
    DEFAULT_NEVER_IGNORE,
)
from dirwalker.traversal.filters import FilterSet, classify
from dirwalker.traversal.ignore_files import load_ignore_files, parse_ignore_lines
from dirwalker.traversal.matching import match
from dirwalker.traversal.types import (
    STOP,
    CompleteEvent,
    Decision,
    Entry,
    EntryEvent,
    EntryType,
    ErrorEvent,
    WalkControl,
    WalkerConfig,
    WalkError,
    WalkEvent,
    WalkOptions,
    WalkResult,
)
from dirwalker.traversal.walker import DirWalker

__all__ = [
    "DEFAULT_IGNORE",
    "DEFAULT_IGNORE_FILES",
    "DEFAULT_NEVER_IGNORE",
    "STOP",
    "CompleteEvent",
    "Decision",
    "DirWalker",
    "Entry",
    "EntryEvent",
    "EntryType",
    "ErrorEvent",
    "FilterSet",
    "WalkControl",
    "WalkError",
    "WalkEvent",
    "WalkOptions",
    "WalkResult",
    "WalkerConfig",
    "classify",
    "load_ignore_files",
    "match",
    "parse_ignore_lines",
]
