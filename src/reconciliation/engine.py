"""
Reconciliation between attachment metadata and the storage root.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Iterable, Optional

from config import AuditSettings
from database import AttachmentEntry
from discovery import DiskWalker
from inventory import InventoryBuilder, normalize_path
from utils import ResourceMonitor

from .report import ReconciliationReport


class ReconciliationEngine:
    """Build the attachment inventory, walk the disk once, and report.

    The engine never writes to the content store or the file tree and keeps
    no state between runs, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        settings: AuditSettings,
        logger: Optional[logging.Logger] = None,
        performance_logger: Optional[logging.Logger] = None,
        monitor: Optional[ResourceMonitor] = None,
    ) -> None:
        self.settings = settings
        self.logger = logger or logging.getLogger("media_hygiene")
        self.performance_logger = performance_logger or logging.getLogger("media_hygiene.performance")
        self.monitor = monitor

    def run(
        self, storage_root: str | os.PathLike, attachments: Iterable[AttachmentEntry]
    ) -> ReconciliationReport:
        """Audit ``storage_root`` against ``attachments``."""
        root = normalize_path(os.path.abspath(os.fspath(storage_root)))
        if not os.path.isdir(root):
            self.logger.warning("Storage root missing or not a directory: %s", root)
            return ReconciliationReport.unreadable_root(root, self.settings, "not a directory")

        self.logger.info(
            "Starting media audit of %s (threshold=%s bytes, orphan cap=%s)",
            root,
            self.settings.large_file_threshold,
            self.settings.max_orphan_files,
        )

        started = time.monotonic()
        builder = InventoryBuilder(root, self.settings.large_file_threshold, logger=self.logger)
        inventory = builder.build(attachments)
        inventory_seconds = time.monotonic() - started

        started = time.monotonic()
        walker = DiskWalker(
            max_orphan_files=self.settings.max_orphan_files,
            deadline_seconds=self.settings.walk_deadline_seconds,
            monitor=self.monitor,
            logger=self.logger,
        )
        walk = walker.walk(root, inventory.known_paths)
        walk_seconds = time.monotonic() - started

        self.performance_logger.info(
            "Audit timings | inventory=%.3fs attachments=%s walk=%.3fs files=%s",
            inventory_seconds,
            inventory.processed,
            walk_seconds,
            walk.total_files_scanned,
        )

        report = ReconciliationReport.assemble(root, inventory, walk, self.settings)
        self.logger.info(
            "Media audit finished: status=%s broken=%s large=%s orphans=%s scanned=%s truncated=%s skipped=%s",
            report.status,
            len(report.broken),
            len(report.large),
            len(report.orphans),
            report.total_files_scanned,
            report.truncated,
            len(report.skipped_subtrees),
        )
        return report
