"""
Walk settings from TOML files.

The directory being walked, or its nearest ancestor holding one, may provide
`.dirwalker.toml`, `dirwalker.toml`, or a `pyproject.toml` with a
`[tool.dirwalker]` table. Keys are checked as they are read: unknown keys and
wrongly typed values are errors rather than being silently dropped.

Example::

    recurse = true
    ignore-files = [".npmignore, .gitignore"]
    default-ignore = ["node_modules/", "*.log"]
    never-ignore = ["package.json"]
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """A config file that cannot be parsed or holds invalid settings."""

    def __init__(self, path: Path, message: str) -> None:
        self.path: Path = path
        super().__init__(f"invalid config {path}: {message}")


@dataclass(frozen=True)
class DirwalkerConfig:
    """
    Settings read from one config file. `None` means "not set", so explicit
    command-line flags and built-in defaults can be told apart from it.
    """

    never_ignore: list[str] | None = None
    default_ignore: list[str] | None = None
    ignore_files: list[str] | None = None
    recurse: bool | None = None
    source: Path | None = field(default=None, compare=False)

    def overrides(self, explicit_flags: set[str]) -> dict[str, Any]:
        """Settings to apply on top of the command line, skipping flags given explicitly."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name != "source" and value is not None and f.name not in explicit_flags:
                result[f.name] = value
        return result


def _pattern_list(key: str, value: object) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in cast(list[object], value)):
        return list(cast(list[str], value))
    raise TypeError(f"`{key}` must be a string or a list of strings")


def _flag(key: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"`{key}` must be true or false")
    return value


# TOML key -> (DirwalkerConfig field, validator)
_KEYS: dict[str, tuple[str, Callable[[str, object], Any]]] = {
    "recurse": ("recurse", _flag),
    "recursive": ("recurse", _flag),
    "ignore-files": ("ignore_files", _pattern_list),
    "default-ignore": ("default_ignore", _pattern_list),
    "never-ignore": ("never_ignore", _pattern_list),
}

# Per directory, in order: file name and the table inside it holding our settings.
_SOURCES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (".dirwalker.toml", ()),
    ("dirwalker.toml", ()),
    ("pyproject.toml", ("tool", "dirwalker")),
)


def _read_table(path: Path, table_path: tuple[str, ...]) -> dict[str, Any] | None:
    """The settings table in `path`, or `None` if the file has no such table."""
    try:
        data: Any = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        if table_path:
            # A broken pyproject.toml belongs to some other tool; it just has no settings for us.
            logger.debug("Skipping unparseable %s: %s", path, e)
            return None
        raise ConfigError(path, str(e)) from e
    for name in table_path:
        if not isinstance(data, dict) or name not in data:
            return None
        data = cast(dict[str, Any], data)[name]
    if not isinstance(data, dict):
        raise ConfigError(path, f"`{'.'.join(table_path)}` must be a table")
    return cast(dict[str, Any], data)


def _parse_table(table: dict[str, Any], path: Path) -> DirwalkerConfig:
    values: dict[str, Any] = {}
    for key, value in table.items():
        known = _KEYS.get(key.replace("_", "-"))
        if known is None:
            raise ConfigError(path, f"unknown key `{key}`")
        name, check = known
        try:
            values[name] = check(key, value)
        except TypeError as e:
            raise ConfigError(path, str(e)) from e
    return DirwalkerConfig(source=path, **values)


def load_config(path: Path) -> DirwalkerConfig:
    """
    Read settings from one config file. A `pyproject.toml` without a
    `[tool.dirwalker]` table yields an empty config.
    """
    table_path = () if path.name != "pyproject.toml" else ("tool", "dirwalker")
    table = _read_table(path, table_path)
    return _parse_table(table or {}, path)


def find_config(start: Path) -> DirwalkerConfig | None:
    """
    Settings for walking `start`: from the first config source found in
    `start` itself or its nearest ancestor, or `None` when there is none.
    """
    start = start.resolve()
    for directory in (start, *start.parents):
        for filename, table_path in _SOURCES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            table = _read_table(candidate, table_path)
            if table is not None:
                logger.debug("Using config file %s", candidate)
                return _parse_table(table, candidate)
    return None
