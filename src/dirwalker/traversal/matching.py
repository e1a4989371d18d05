"""
Shell-glob matching of single names against single patterns, using `pathspec`.

Supported syntax: `*`, `**`, `?`, `[...]`, and a trailing `/` restricting a
pattern to directories. Candidates are basenames, with `/` appended when the
entry is a directory. As in shell globs, wildcards do not match a leading dot:
`*` skips `.env`, while `.*` matches it.
"""

from __future__ import annotations

import logging
from functools import cache

import pathspec

from dirwalker.traversal.types import Entry

logger = logging.getLogger(__name__)


@cache
def _compile(pattern: str) -> pathspec.PathSpec | None:
    try:
        return pathspec.PathSpec.from_lines("gitignore", [pattern])
    except ValueError as e:
        # Malformed patterns never match.
        logger.debug("Skipping invalid pattern %r: %s", pattern, e)
        return None


def _has_literal_leading_dot(pattern: str) -> bool:
    # `**/` may match zero segments, so `**/.env` still names a dotfile.
    while pattern.startswith("**/"):
        pattern = pattern[3:]
    return pattern.startswith(".")


def match(name: str, pattern: str) -> bool:
    """
    True if `name` matches the glob `pattern`.

    Names starting with `.` only match patterns that start with a literal `.`.
    Patterns anchored with a leading `/` never match a bare name. Negated
    (`!x`), comment and malformed patterns never match.
    """
    if not pattern.strip() or pattern.startswith(("!", "/")):
        return False
    if name.startswith(".") and not _has_literal_leading_dot(pattern):
        return False
    spec = _compile(pattern)
    return spec is not None and spec.match_file(name)


def candidate_name(entry: Entry) -> str:
    """The name ignore patterns see: the basename, plus `/` for directories."""
    return entry.basename + "/" if entry.is_directory else entry.basename
