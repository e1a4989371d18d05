"""Discovery and parsing of per-directory ignore files (`.npmignore`, `.gitignore`, ...)."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

_SPEC_SPLITTER = re.compile(r"[\s,]+")


def parse_ignore_file_spec(spec: str) -> tuple[str, ...]:
    """
    Split a spec like `".npmignore, .gitignore"` into its candidate filenames,
    in fallback order.
    """
    return tuple(name for name in _SPEC_SPLITTER.split(spec.strip()) if name)


def parse_ignore_lines(text: str) -> list[str]:
    """
    Return the glob patterns in ignore-file text. Carriage returns are dropped
    so either line-ending convention works; blank lines and `#` comments are skipped.
    """
    lines = text.replace("\r", "").split("\n")
    return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]


def find_ignore_file(directory: Path, candidates: Sequence[str]) -> Path | None:
    """First candidate that exists in `directory`, or `None`."""
    for name in candidates:
        candidate = directory / name
        if candidate.exists():
            return candidate
    return None


def read_ignore_file(path: Path) -> list[str]:
    """
    Patterns from one ignore file. A missing, unreadable or non-UTF-8 file
    contributes no patterns; this is never an error for the walk.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Ignoring unreadable ignore file %s: %s", path, e)
        return []
    return parse_ignore_lines(text)


def load_ignore_files(directory: Path, specs: Sequence[Sequence[str]]) -> list[str]:
    """
    Resolve every spec against `directory` and concatenate the patterns of the
    selected files in spec order. Fallback applies within a spec, not across specs.
    """
    if not specs:
        return []

    patterns: list[str] = []
    for candidates in specs:
        selected = find_ignore_file(directory, candidates)
        if selected is None:
            continue
        loaded = read_ignore_file(selected)
        logger.debug("Loaded %d pattern(s) from %s", len(loaded), selected)
        patterns.extend(loaded)
    return patterns
