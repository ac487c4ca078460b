"""
Classify attachment records against the storage root.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Optional

from database import AttachmentEntry

from .paths import join_root, normalize_relative


@dataclass(frozen=True)
class AttachmentRecord:
    """Attachment finding: a missing file or a file over the size threshold."""

    attachment_id: int
    meta: str
    absolute: str
    exists: bool
    size: int = 0
    title: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.attachment_id,
            "title": self.title,
            "meta": self.meta,
            "absolute": self.absolute,
            "exists": self.exists,
            "size": self.size,
        }


@dataclass(frozen=True)
class InventoryResult:
    """Broken and large attachments plus the relative paths found on disk."""

    broken: tuple[AttachmentRecord, ...]
    large: tuple[AttachmentRecord, ...]
    known_paths: frozenset[str]
    processed: int


class InventoryBuilder:
    """Resolve each attachment to its expected file and probe the filesystem."""

    def __init__(
        self,
        storage_root: str | os.PathLike,
        large_file_threshold: int,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.storage_root = os.fspath(storage_root)
        self.large_file_threshold = large_file_threshold
        self.logger = logger or logging.getLogger("media_hygiene")

    def build(self, attachments: Iterable[AttachmentEntry]) -> InventoryResult:
        """Classify every attachment; probes are read-only and never fatal."""
        broken: list[AttachmentRecord] = []
        large: list[AttachmentRecord] = []
        known_paths: set[str] = set()
        processed = 0

        for entry in attachments:
            processed += 1
            attached_file = entry.attached_file
            if not isinstance(attached_file, str) or not attached_file:
                # No usable path stored for this attachment.
                broken.append(
                    AttachmentRecord(
                        attachment_id=entry.attachment_id,
                        meta="",
                        absolute="",
                        exists=False,
                        title=entry.title,
                    )
                )
                continue

            relative_path = normalize_relative(attached_file)
            absolute_path = join_root(self.storage_root, relative_path)

            if not os.path.isfile(absolute_path):
                broken.append(
                    AttachmentRecord(
                        attachment_id=entry.attachment_id,
                        meta=relative_path,
                        absolute=absolute_path,
                        exists=False,
                        title=entry.title,
                    )
                )
                continue

            known_paths.add(relative_path)
            size = self._file_size(absolute_path)
            if size is not None and size >= self.large_file_threshold:
                large.append(
                    AttachmentRecord(
                        attachment_id=entry.attachment_id,
                        meta=relative_path,
                        absolute=absolute_path,
                        exists=True,
                        size=size,
                        title=entry.title,
                    )
                )

        return InventoryResult(
            broken=tuple(broken),
            large=tuple(large),
            known_paths=frozenset(known_paths),
            processed=processed,
        )

    def _file_size(self, absolute_path: str) -> Optional[int]:
        try:
            return os.path.getsize(absolute_path)
        except OSError as exc:
            self.logger.debug("Size probe failed for %s: %s", absolute_path, exc)
            return None
