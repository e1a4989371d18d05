from dirwalker.traversal import (
    STOP,
    DirWalker,
    Entry,
    WalkerConfig,
    WalkError,
    WalkOptions,
    WalkResult,
)

__all__ = [
    "STOP",
    "DirWalker",
    "Entry",
    "WalkError",
    "WalkOptions",
    "WalkResult",
    "WalkerConfig",
]
