"""
DirWalker: main entry point for walking a directory tree.

Walks a tree depth-first in directory listing order, applying default
ignore patterns, per-directory ignore files inherited by each subtree, and
never-ignore overrides, and reports each kept file to the consumer.
"""

from __future__ import annotations

import logging
import os
import posixpath
import stat
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from dirwalker.traversal.filters import FilterSet, classify
from dirwalker.traversal.ignore_files import load_ignore_files
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

logger = logging.getLogger(__name__)

EntryCallback = Callable[[Entry], WalkControl | None]
ErrorCallback = Callable[[WalkError], WalkControl | None]
CompleteCallback = Callable[[WalkResult], None]


@dataclass
class _DirectoryFrame:
    """An open directory on the walk stack and the filters in force inside it."""

    directory: Path
    prefix: str
    filters: FilterSet
    names: Iterator[str]


class DirWalker:
    """
    Walks directories according to an immutable `WalkerConfig`.

    A single instance can run any number of walks, including concurrently:
    all per-walk state lives on the stack of the walk that owns it.
    """

    def __init__(self, config: WalkerConfig | None = None) -> None:
        self._config: WalkerConfig = config if config is not None else WalkerConfig()
        self._ignore_file_specs: tuple[tuple[str, ...], ...] = self._config.ignore_file_specs
        self._always_include: FilterSet = FilterSet(self._config.never_ignore)
        self._default_ignore: FilterSet = FilterSet(self._config.default_ignore)

    @property
    def config(self) -> WalkerConfig:
        return self._config

    def iter_events(
        self, root: str | Path, options: WalkOptions | None = None
    ) -> Iterator[WalkEvent]:
        """
        Lazily walk `root`, yielding an `EntryEvent` per kept file and an
        `ErrorEvent` per failed listing or stat, then exactly one `CompleteEvent`.

        Closing the generator early stops all further filesystem access.
        """
        options = options if options is not None else WalkOptions()
        root_path = Path(root)
        logger.debug("Walking %s (recurse=%s)", root_path, options.recurse)
        yield from self._walk_tree(root_path, options.recurse)
        yield CompleteEvent()

    def walk(
        self,
        root: str | Path,
        options: WalkOptions | None = None,
        on_entry: EntryCallback | None = None,
        on_error: ErrorCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ) -> WalkResult:
        """
        Walk `root`, invoking callbacks as entries and errors are found.

        Returning `STOP` from `on_entry` or `on_error` ends the walk early.
        `on_complete` is called exactly once either way, with the same
        `WalkResult` that is returned.
        """
        result = WalkResult()
        events = self.iter_events(root, options)
        try:
            for event in events:
                if isinstance(event, EntryEvent):
                    result.entries.append(event.entry)
                    if on_entry is not None and on_entry(event.entry) is STOP:
                        result.stopped = True
                        break
                elif isinstance(event, ErrorEvent):
                    result.errors.append(event.error)
                    if on_error is not None and on_error(event.error) is STOP:
                        result.stopped = True
                        break
        finally:
            events.close()

        if on_complete is not None:
            on_complete(result)
        return result

    def collect(self, root: str | Path, options: WalkOptions | None = None) -> WalkResult:
        """Walk `root` to completion and return all entries and errors."""
        return self.walk(root, options)

    def _walk_tree(self, root: Path, recurse: bool) -> Iterator[WalkEvent]:
        # Depth-first over an explicit stack of open directories, so tree depth
        # is not bounded by the interpreter's recursion limit.
        opened = self._open_directory(root, "", self._default_ignore)
        if isinstance(opened, ErrorEvent):
            yield opened
            return
        stack = [opened]

        while stack:
            frame = stack[-1]
            name = next(frame.names, None)
            if name is None:
                stack.pop()
                continue

            pathname = frame.directory / name
            try:
                stats = os.stat(pathname)
            except OSError as e:
                # Abandon the rest of this listing; the parent directory carries on.
                yield self._error(pathname, "stat", e)
                stack.pop()
                continue

            is_directory = stat.S_ISDIR(stats.st_mode)
            entry = Entry(
                basename=name,
                dirname=frame.directory,
                pathname=pathname,
                relname=posixpath.join(frame.prefix, name),
                type=EntryType.directory if is_directory else EntryType.file,
                stats=stats,
            )

            if classify(entry, frame.filters, self._always_include) is Decision.SKIP:
                logger.debug("Skipping %s", entry.relname)
                continue

            if is_directory:
                if recurse:
                    opened = self._open_directory(pathname, entry.relname, frame.filters)
                    if isinstance(opened, ErrorEvent):
                        yield opened
                    else:
                        stack.append(opened)
                continue

            if stat.S_ISREG(stats.st_mode):
                yield EntryEvent(entry)

    def _open_directory(
        self, directory: Path, prefix: str, inherited: FilterSet
    ) -> _DirectoryFrame | ErrorEvent:
        """Load a directory's ignore files and list it, ready to visit its children."""
        filters = inherited.extend(load_ignore_files(directory, self._ignore_file_specs))
        try:
            names = os.listdir(directory)
        except OSError as e:
            return self._error(directory, "list", e)
        return _DirectoryFrame(directory, prefix, filters, iter(names))

    def _error(self, path: Path, operation: str, cause: OSError) -> ErrorEvent:
        error = WalkError(path, operation, cause)
        logger.debug("Walk error: %s", error)
        return ErrorEvent(error)
