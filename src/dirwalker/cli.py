#!/usr/bin/env python3
"""
dirwalker: list the files in a directory tree, honoring npm/git-style ignore files

Common usage:
  dirwalker --npm -r .
  dirwalker -r --ignore-file '.npmignore, .gitignore' --default-ignore 'node_modules/' .
  dirwalker -r --never-ignore 'package.json' --default-ignore '*.json' src/

Settings may also come from `.dirwalker.toml`, `dirwalker.toml`, or
`[tool.dirwalker]` in `pyproject.toml`, found in each walked directory or its
nearest ancestor; explicit flags take precedence.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path

from dirwalker.config import ConfigError, find_config
from dirwalker.traversal import (
    STOP,
    DirWalker,
    Entry,
    WalkControl,
    WalkerConfig,
    WalkError,
    WalkOptions,
)


@dataclass
class Options:
    """Command-line options for the dirwalker tool."""

    roots: list[str]
    recurse: bool
    ignore_files: list[str]
    default_ignore: list[str]
    never_ignore: list[str]
    npm: bool
    sort: bool
    absolute: bool
    strict: bool
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)`, where `explicit_flags` holds the
    option names the user actually passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="dirwalker",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "roots",
        nargs="*",
        type=str,
        default=[],
        help="Directories to walk (use '.' for the current directory)",
    )
    # Tracked options default to None so we can tell whether they were given.
    parser.add_argument(
        "-r",
        "--recurse",
        "--recursive",
        dest="recurse",
        action="store_true",
        default=None,
        help="Descend into subdirectories (default: only the directory's own files)",
    )
    parser.add_argument(
        "--ignore-file",
        dest="ignore_files",
        action="append",
        default=None,
        metavar="SPEC",
        help="Ignore file to load in every directory; alternatives separated by commas or "
        "spaces are tried in order (e.g., '.npmignore, .gitignore'). Can be repeated",
    )
    parser.add_argument(
        "--default-ignore",
        dest="default_ignore",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Pattern ignored at every level (e.g., 'node_modules/'). Can be repeated",
    )
    parser.add_argument(
        "--never-ignore",
        dest="never_ignore",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Basename pattern that is always kept, overriding ignore rules. Can be repeated",
    )
    parser.add_argument(
        "--npm",
        action="store_true",
        help="Start from the npm publish rules (default ignores, package.json and README.* "
        "always kept, .npmignore falling back to .gitignore)",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort the files of each directory argument by relative name before printing",
    )
    parser.add_argument(
        "--absolute",
        action="store_true",
        help="Print full paths instead of paths relative to the walked directory",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first error (unreadable directory or path) and exit with status 1",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details (ignore files loaded, entries skipped) to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    tracked = ("recurse", "ignore_files", "default_ignore", "never_ignore")
    explicit_flags = {name for name in tracked if getattr(opts, name) is not None}

    return (
        Options(
            roots=opts.roots,
            recurse=bool(opts.recurse),
            ignore_files=opts.ignore_files or [],
            default_ignore=opts.default_ignore or [],
            never_ignore=opts.never_ignore or [],
            npm=opts.npm,
            sort=opts.sort,
            absolute=opts.absolute,
            strict=opts.strict,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _walker_config(options: Options) -> WalkerConfig:
    """The walker configuration: the npm preset if requested, extended by options."""
    base = WalkerConfig.npm() if options.npm else WalkerConfig()
    return WalkerConfig(
        never_ignore=base.never_ignore + tuple(options.never_ignore),
        default_ignore=base.default_ignore + tuple(options.default_ignore),
        ignore_files=base.ignore_files + tuple(options.ignore_files),
    )


def _format(entry: Entry, absolute: bool) -> str:
    return str(entry.pathname) if absolute else entry.relname


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the dirwalker CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage errors or an error under
        `--strict`, 2 if any directory or path could not be read)
    """
    options, explicit_flags = _parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if options.version:
        try:
            version = importlib.metadata.version("dirwalker")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.roots:
        print(
            "Error: No directory specified (use '.' for current directory, --help for more options)",
            file=sys.stderr,
        )
        return 1

    error_count = 0

    def on_entry(entry: Entry) -> None:
        if not options.sort:
            print(_format(entry, options.absolute))

    def on_error(error: WalkError) -> WalkControl | None:
        nonlocal error_count
        error_count += 1
        print(f"Error: {error}", file=sys.stderr)
        return STOP if options.strict else None

    for root in options.roots:
        try:
            config = find_config(Path(root))
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        root_options = replace(options, **config.overrides(explicit_flags)) if config else options

        walker = DirWalker(_walker_config(root_options))
        walk_options = WalkOptions(recurse=root_options.recurse)
        result = walker.walk(root, walk_options, on_entry=on_entry, on_error=on_error)
        if options.sort:
            for entry in sorted(result.entries, key=lambda e: e.relname):
                print(_format(entry, options.absolute))
        if options.strict and result.errors:
            return 1

    return 2 if error_count else 0


if __name__ == "__main__":
    sys.exit(main())
