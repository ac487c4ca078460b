"""
Command line entry point for running a media audit.
"""

from __future__ import annotations

import argparse
import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from config import AppConfig, AuditSettings
from database import ContentItem, DatabaseManager
from reconciliation import ReconciliationEngine, ReconciliationReport
from reporting import AuditReportWriter, summary_lines
from utils import ResourceMonitor, setup_logging


@dataclass
class AuditOutcome:
    """Report plus the files written for it."""

    report: ReconciliationReport
    missing_featured: Optional[list[ContentItem]]
    json_path: Path
    csv_paths: dict[str, Path]


class AuditRunner:
    """Wire configuration, content store, engine and report output together."""

    def __init__(
        self,
        config: AppConfig,
        settings: Optional[AuditSettings] = None,
        storage_root: Optional[Path] = None,
    ) -> None:
        self.config = config
        self.settings = settings or AuditSettings.from_config(config)
        self.storage_root = storage_root or config.resolve_path("paths", "storage_root")
        self.loggers = setup_logging(self.config.resolve_path("paths", "logs", default="logs"))
        self.logger = self.loggers["main"]
        self.db_path = self.config.resolve_path("databases", "content", default="data/content.sqlite")
        self.db_manager = DatabaseManager(self.db_path, read_only=True)
        self.engine = ReconciliationEngine(
            self.settings,
            logger=self.logger,
            performance_logger=self.loggers["performance"],
            monitor=ResourceMonitor.from_config(config),
        )
        self.writer = AuditReportWriter(
            self.config.resolve_path("paths", "reports", default="reports"),
            report_prefix=str(self.config.get("reports", "prefix", default="media_audit")),
            admin_url=str(self.config.get("site", "admin_url", default="") or ""),
            logger=self.logger,
        )

    def run(self, include_featured: bool = True, export_csv: bool = False) -> AuditOutcome:
        """Run one read-only audit and write its report."""
        if not self.db_path.exists():
            raise FileNotFoundError(f"Content database not found: {self.db_path}")
        try:
            attachments = self.db_manager.iter_attachments(page_size=self.settings.attachment_page_size)
            report = self.engine.run(self.storage_root, attachments)
            missing_featured = None
            if include_featured:
                missing_featured = self.db_manager.find_published_without_thumbnail(
                    limit=self.settings.missing_featured_limit
                )
            json_path = self.writer.write_json(report, missing_featured)
            csv_paths = self.writer.write_csv(report) if export_csv else {}
        finally:
            self.db_manager.close()

        for line in summary_lines(report, missing_featured):
            self.logger.info(line)
        return AuditOutcome(
            report=report,
            missing_featured=missing_featured,
            json_path=json_path,
            csv_paths=csv_paths,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit media storage for broken, oversized and orphaned files. Nothing is deleted."
    )
    parser.add_argument("--config", default=None, help="Optional config path override")
    parser.add_argument("--root", default=None, help="Override the storage root to audit")
    parser.add_argument("--threshold", type=int, default=None, help="Large file threshold in bytes")
    parser.add_argument("--cap", type=int, default=None, help="Maximum number of orphaned files to list")
    parser.add_argument("--csv", action="store_true", help="Also export each section as CSV")
    parser.add_argument(
        "--no-featured", action="store_true", help="Skip the missing featured image query"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    config = AppConfig.load(Path(args.config) if args.config else None)

    settings = AuditSettings.from_config(config)
    overrides = {}
    if args.threshold is not None:
        overrides["large_file_threshold"] = args.threshold
    if args.cap is not None:
        overrides["max_orphan_files"] = args.cap
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    storage_root = Path(args.root).expanduser().resolve() if args.root else None
    runner = AuditRunner(config, settings=settings, storage_root=storage_root)
    try:
        outcome = runner.run(include_featured=not args.no_featured, export_csv=args.csv)
    except Exception:
        runner.logger.exception("Media audit failed.")
        return 1
    return 0 if outcome.report.root_readable else 1


if __name__ == "__main__":
    raise SystemExit(main())
