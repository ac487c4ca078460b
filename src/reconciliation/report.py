"""
Immutable result of one reconciliation run.
"""

from __future__ import annotations

from dataclasses import dataclass

from config import AuditSettings
from discovery import WALK_COMPLETE, WALK_ROOT_UNREADABLE, DiskFileEntry, SkippedSubtree, WalkResult
from inventory import AttachmentRecord, InventoryResult


@dataclass(frozen=True)
class ReconciliationReport:
    """Broken, large and orphaned media plus walk counters.

    ``orphans`` never holds more than ``orphan_cap`` entries. ``truncated``
    is set when a candidate was dropped at the cap or when the walk hit its
    deadline (``status == "aborted"``). ``skipped_subtrees`` lists paths the
    walk could not read; those never turn into findings.
    """

    storage_root: str
    broken: tuple[AttachmentRecord, ...]
    large: tuple[AttachmentRecord, ...]
    orphans: tuple[DiskFileEntry, ...]
    total_files_scanned: int
    truncated: bool
    status: str
    skipped_subtrees: tuple[SkippedSubtree, ...]
    size_threshold: int
    orphan_cap: int
    attachments_processed: int = 0

    @classmethod
    def assemble(
        cls,
        storage_root: str,
        inventory: InventoryResult,
        walk: WalkResult,
        settings: AuditSettings,
    ) -> "ReconciliationReport":
        """Combine inventory and walk output as-is."""
        return cls(
            storage_root=storage_root,
            broken=inventory.broken,
            large=inventory.large,
            orphans=walk.orphans,
            total_files_scanned=walk.total_files_scanned,
            truncated=walk.truncated,
            status=walk.status,
            skipped_subtrees=walk.skipped,
            size_threshold=settings.large_file_threshold,
            orphan_cap=settings.max_orphan_files,
            attachments_processed=inventory.processed,
        )

    @classmethod
    def unreadable_root(cls, storage_root: str, settings: AuditSettings, reason: str) -> "ReconciliationReport":
        """Empty report for a storage root that is missing or not a directory."""
        return cls(
            storage_root=storage_root,
            broken=(),
            large=(),
            orphans=(),
            total_files_scanned=0,
            truncated=False,
            status=WALK_ROOT_UNREADABLE,
            skipped_subtrees=(SkippedSubtree(path=storage_root, error=reason),),
            size_threshold=settings.large_file_threshold,
            orphan_cap=settings.max_orphan_files,
        )

    @property
    def root_readable(self) -> bool:
        return self.status != WALK_ROOT_UNREADABLE

    @property
    def complete(self) -> bool:
        return self.status == WALK_COMPLETE and not self.skipped_subtrees

    def to_dict(self) -> dict:
        return {
            "storage_root": self.storage_root,
            "status": self.status,
            "size_threshold": self.size_threshold,
            "orphan_cap": self.orphan_cap,
            "attachments_processed": self.attachments_processed,
            "total_files_scanned": self.total_files_scanned,
            "truncated": self.truncated,
            "broken": [record.to_dict() for record in self.broken],
            "large": [record.to_dict() for record in self.large],
            "orphans": [entry.to_dict() for entry in self.orphans],
            "skipped_subtrees": [entry.to_dict() for entry in self.skipped_subtrees],
        }
