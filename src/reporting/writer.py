"""
Persist reconciliation reports as JSON and CSV and summarize them for logs.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from config import ensure_directories
from database import ContentItem
from discovery import WALK_ABORTED
from inventory import AttachmentRecord
from reconciliation import ReconciliationReport

from .formatting import format_bytes


class AuditReportWriter:
    """Write audit reports under a reports directory."""

    def __init__(
        self,
        reports_root: Path,
        report_prefix: str = "media_audit",
        admin_url: str = "",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.reports_root = reports_root
        self.report_prefix = report_prefix
        self.admin_url = admin_url.rstrip("/")
        self.logger = logger or logging.getLogger("media_hygiene")

    def edit_link(self, post_id: int) -> Optional[str]:
        """Admin edit URL for a post, or None without a configured admin URL."""
        if not self.admin_url:
            return None
        return f"{self.admin_url}/post.php?post={post_id}&action=edit"

    def build_payload(
        self,
        report: ReconciliationReport,
        missing_featured: Optional[Sequence[ContentItem]] = None,
    ) -> dict:
        payload = report.to_dict()
        payload["generated_at"] = datetime.utcnow().isoformat()
        payload["broken"] = self._describe_attachments(report.broken)
        payload["large"] = self._describe_attachments(report.large)
        if missing_featured is not None:
            payload["missing_featured"] = [
                {
                    "id": item.post_id,
                    "title": item.title,
                    "post_type": item.post_type,
                    "author": item.author or "Unknown",
                    "published_at": item.published_at,
                    "edit_link": self.edit_link(item.post_id),
                }
                for item in missing_featured
            ]
        return payload

    def write_json(
        self,
        report: ReconciliationReport,
        missing_featured: Optional[Sequence[ContentItem]] = None,
    ) -> Path:
        """Write the full report as JSON and return its path."""
        ensure_directories([self.reports_root])
        payload = self.build_payload(report, missing_featured)
        report_path = self.reports_root / f"{self.report_prefix}_{_timestamp()}.json"
        report_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        self.logger.info("Audit report written to %s", report_path)
        return report_path

    def write_csv(self, report: ReconciliationReport) -> dict[str, Path]:
        """Write one CSV per finding section and return the paths by section."""
        ensure_directories([self.reports_root])
        stamp = _timestamp()
        sections = {
            "broken": (
                ["id", "title", "meta", "absolute"],
                [
                    [row["id"], row["title"], row["meta"], row["absolute"]]
                    for row in self._describe_attachments(report.broken)
                ],
            ),
            "large": (
                ["id", "title", "meta", "size", "size_label"],
                [
                    [row["id"], row["title"], row["meta"], row["size"], format_bytes(row["size"])]
                    for row in self._describe_attachments(report.large)
                ],
            ),
            "orphans": (
                ["relative", "size", "size_label"],
                [[entry.relative, entry.size, format_bytes(entry.size)] for entry in report.orphans],
            ),
        }
        written: dict[str, Path] = {}
        for section, (header, rows) in sections.items():
            csv_path = self.reports_root / f"{self.report_prefix}_{stamp}_{section}.csv"
            with csv_path.open("w", encoding="utf-8", newline="") as handle:
                writer = csv.writer(handle)
                writer.writerow(header)
                writer.writerows(rows)
            written[section] = csv_path
        self.logger.info("CSV exports written to %s", self.reports_root)
        return written

    def _describe_attachments(self, records: Iterable[AttachmentRecord]) -> list[dict]:
        rows = []
        for record in records:
            row = record.to_dict()
            row["title"] = record.title or f"Attachment {record.attachment_id}"
            row["edit_link"] = self.edit_link(record.attachment_id)
            rows.append(row)
        return rows


def summary_lines(
    report: ReconciliationReport, missing_featured: Optional[Sequence[ContentItem]] = None
) -> list[str]:
    """Short plain-text summary of a report."""
    if not report.root_readable:
        return [
            f"Storage root: {report.storage_root}",
            "Could not read the storage root. Check paths.storage_root in the configuration.",
        ]
    orphan_line = (
        f"Orphaned files: {len(report.orphans)} (scanned {report.total_files_scanned} files)"
    )
    if report.truncated:
        orphan_line += f"; list truncated at {report.orphan_cap}"
    lines = [
        f"Storage root: {report.storage_root}",
        f"Attachments checked: {report.attachments_processed}",
        f"Broken attachments: {len(report.broken)}",
        f"Large attachments (>= {format_bytes(report.size_threshold)}): {len(report.large)}",
        orphan_line,
    ]
    if report.status == WALK_ABORTED:
        lines.append("Walk stopped at its deadline; orphan results are partial.")
    if report.skipped_subtrees:
        lines.append(f"Unreadable paths skipped: {len(report.skipped_subtrees)}")
    if missing_featured is not None:
        lines.append(f"Published content without featured image (sample): {len(missing_featured)}")
    return lines


def _timestamp() -> str:
    return datetime.utcnow().strftime("%Y%m%d_%H%M%S")
