"""
Default ignore, never-ignore and ignore-file presets.

These mirror what `npm publish` does: a fixed list of junk that is always
skipped, a few files that are always shipped, and `.npmignore` falling back
to `.gitignore` in every directory. Directory-only patterns end with `/`.
"""

from __future__ import annotations

DEFAULT_IGNORE: list[str] = [
    # Dependencies are not walked (bundled dependencies are not supported)
    "node_modules/",
    # Editor and OS droppings
    ".*.swp",
    "_*",
    "DS_Store",
    # Version control
    ".git",
    ".hg",
    ".svn",
    "CVS",
    # Build tool state
    ".lock-wscript",
    ".wafpickle-*",
    "npm-debug.log",
]

DEFAULT_NEVER_IGNORE: list[str] = [
    "package.json",
    "README.*",
]

# A single spec: load `.npmignore`, or `.gitignore` when there is no `.npmignore`.
DEFAULT_IGNORE_FILES: list[str] = [".npmignore, .gitignore"]
