"""
Single-pass walk of the storage root that collects files no attachment claims.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from dataclasses import dataclass
from typing import AbstractSet, Callable, Iterator, Optional

from inventory.paths import normalize_path, relative_to_root
from utils import ResourceMonitor

WALK_COMPLETE = "complete"
WALK_ROOT_UNREADABLE = "root_unreadable"
WALK_ABORTED = "aborted"


@dataclass(frozen=True)
class DiskFileEntry:
    """Regular file on disk with no matching attachment."""

    relative: str
    absolute: str
    size: int

    def to_dict(self) -> dict:
        return {"relative": self.relative, "absolute": self.absolute, "size": self.size}


@dataclass(frozen=True)
class SkippedSubtree:
    """Path the walk could not read."""

    path: str
    error: str

    def to_dict(self) -> dict:
        return {"path": self.path, "error": self.error}


@dataclass(frozen=True)
class WalkResult:
    """Outcome of one walk: capped orphans plus scan counters."""

    orphans: tuple[DiskFileEntry, ...]
    total_files_scanned: int
    truncated: bool
    status: str
    skipped: tuple[SkippedSubtree, ...] = ()


class DiskWalker:
    """Walk a directory tree once and report files missing from a known set."""

    def __init__(
        self,
        max_orphan_files: int = 300,
        deadline_seconds: float = 0.0,
        monitor: Optional[ResourceMonitor] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_orphan_files = max_orphan_files
        self.deadline_seconds = deadline_seconds
        self.monitor = monitor
        self.logger = logger or logging.getLogger("media_hygiene")
        self.clock = clock

    def walk(self, root: str | os.PathLike, known_paths: AbstractSet[str]) -> WalkResult:
        """Count every regular file under ``root`` and collect unmatched ones.

        Unreadable directories are recorded and skipped. A root that cannot
        be listed produces an empty result instead of an error.
        """
        raw_root = os.path.abspath(os.fspath(root))
        root_value = normalize_path(raw_root)
        if not os.path.isdir(raw_root):
            self.logger.warning("Storage root is not a readable directory: %s", root_value)
            return WalkResult(
                orphans=(),
                total_files_scanned=0,
                truncated=False,
                status=WALK_ROOT_UNREADABLE,
                skipped=(SkippedSubtree(path=root_value, error="not a directory"),),
            )

        skipped: list[SkippedSubtree] = []
        orphans: list[DiskFileEntry] = []
        total = 0
        truncated = False
        status = WALK_COMPLETE
        started = self.clock() if self.deadline_seconds > 0 else 0.0

        for raw_path, file_stat in self._iter_files(raw_root, skipped):
            if self.deadline_seconds > 0 and (self.clock() - started) > self.deadline_seconds:
                self.logger.warning(
                    "Walk of %s stopped after %.1fs deadline (%s files scanned).",
                    root_value,
                    self.deadline_seconds,
                    total,
                )
                status = WALK_ABORTED
                truncated = True
                break
            if self.monitor is not None:
                self.monitor.throttle()

            total += 1
            relative = relative_to_root(raw_path, raw_root)
            if relative in known_paths:
                continue
            if len(orphans) < self.max_orphan_files:
                orphans.append(
                    DiskFileEntry(
                        relative=relative,
                        absolute=normalize_path(raw_path),
                        size=file_stat.st_size,
                    )
                )
            else:
                truncated = True

        if total == 0 and any(entry.path == root_value for entry in skipped):
            return WalkResult(
                orphans=(),
                total_files_scanned=0,
                truncated=False,
                status=WALK_ROOT_UNREADABLE,
                skipped=tuple(skipped),
            )

        return WalkResult(
            orphans=tuple(orphans),
            total_files_scanned=total,
            truncated=truncated,
            status=status,
            skipped=tuple(skipped),
        )

    def _iter_files(
        self, root: str, skipped: list[SkippedSubtree]
    ) -> Iterator[tuple[str, os.stat_result]]:
        """Yield on-disk paths of regular files in sorted order.

        Paths are yielded as the OS reports them; only comparison and
        display use the normalized form.
        """

        def on_error(error: OSError) -> None:
            path = normalize_path(error.filename or root)
            message = error.strerror or str(error)
            self.logger.warning("Skipping unreadable directory %s: %s", path, message)
            skipped.append(SkippedSubtree(path=path, error=message))

        for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=on_error, followlinks=False):
            dirnames.sort()
            for filename in sorted(filenames):
                raw_path = os.path.join(dirpath, filename)
                try:
                    file_stat = os.stat(raw_path)
                except OSError as exc:
                    if os.path.islink(raw_path):
                        # Dangling link, not a regular file.
                        continue
                    path = normalize_path(raw_path)
                    self.logger.warning("Skipping unreadable file %s: %s", path, exc)
                    skipped.append(SkippedSubtree(path=path, error=exc.strerror or str(exc)))
                    continue
                if not stat.S_ISREG(file_stat.st_mode):
                    continue
                yield raw_path, file_stat
