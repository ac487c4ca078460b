"""
Disk discovery for the storage root.
"""

from .walker import (
    WALK_ABORTED,
    WALK_COMPLETE,
    WALK_ROOT_UNREADABLE,
    DiskFileEntry,
    DiskWalker,
    SkippedSubtree,
    WalkResult,
)

__all__ = [
    "WALK_ABORTED",
    "WALK_COMPLETE",
    "WALK_ROOT_UNREADABLE",
    "DiskFileEntry",
    "DiskWalker",
    "SkippedSubtree",
    "WalkResult",
]
