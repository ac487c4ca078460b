from pathlib import Path

from config import AuditSettings
from helpers import make_entries, write_file
from reconciliation import ReconciliationEngine

MIB = 1024 * 1024


def test_clean_tree(uploads: Path) -> None:
    for name in ("2024/a.jpg", "2024/b.jpg", "c.png"):
        write_file(uploads / name)
    engine = ReconciliationEngine(AuditSettings())

    report = engine.run(uploads, make_entries("2024/a.jpg", "2024/b.jpg", "c.png"))

    assert report.broken == ()
    assert report.large == ()
    assert report.orphans == ()
    assert report.total_files_scanned == 3
    assert report.truncated is False
    assert report.status == "complete"
    assert report.complete is True


def test_broken_attachment(uploads: Path) -> None:
    engine = ReconciliationEngine(AuditSettings())

    report = engine.run(uploads, make_entries("2024/img.jpg"))

    assert [(record.meta, record.exists) for record in report.broken] == [("2024/img.jpg", False)]


def test_oversized_file(uploads: Path) -> None:
    write_file(uploads / "2024" / "raw.tiff", size=6 * MIB)
    engine = ReconciliationEngine(AuditSettings(large_file_threshold=5 * MIB))

    report = engine.run(uploads, make_entries("2024/raw.tiff"))

    assert len(report.large) == 1
    assert report.large[0].size == 6 * MIB
    assert report.orphans == ()


def test_orphans_over_cap(uploads: Path) -> None:
    for index in range(5):
        write_file(uploads / f"stray_{index}.jpg")
    engine = ReconciliationEngine(AuditSettings(max_orphan_files=2))

    report = engine.run(uploads, [])

    assert len(report.orphans) == 2
    assert report.truncated is True
    assert report.total_files_scanned == 5
    assert report.orphan_cap == 2


def test_orphans_under_cap_report_true_count(uploads: Path) -> None:
    write_file(uploads / "known.jpg")
    write_file(uploads / "stray_1.jpg")
    write_file(uploads / "nested" / "stray_2.jpg")
    engine = ReconciliationEngine(AuditSettings(max_orphan_files=10))

    report = engine.run(uploads, make_entries("known.jpg"))

    assert len(report.orphans) == 2
    assert report.truncated is False
    assert report.total_files_scanned >= len(report.orphans)
    assert report.total_files_scanned == 3


def test_metadata_separator_style_does_not_create_orphans(uploads: Path) -> None:
    write_file(uploads / "2024" / "05" / "photo.jpg")
    write_file(uploads / "2024" / "05" / "other.jpg")
    engine = ReconciliationEngine(AuditSettings())

    report = engine.run(uploads, make_entries("2024\\05\\photo.jpg", "/2024//05/./other.jpg"))

    assert report.orphans == ()
    assert report.broken == ()


def test_runs_are_idempotent(uploads: Path) -> None:
    write_file(uploads / "a.jpg", size=2048)
    write_file(uploads / "stray" / "b.jpg")
    entries = make_entries("a.jpg", "missing.jpg", None)
    engine = ReconciliationEngine(AuditSettings(large_file_threshold=1024))

    first = engine.run(uploads, entries)
    second = engine.run(uploads, entries)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_broken_and_large_never_overlap(uploads: Path) -> None:
    write_file(uploads / "big.bin", size=4096)
    engine = ReconciliationEngine(AuditSettings(large_file_threshold=1024))

    report = engine.run(uploads, make_entries("big.bin", "gone.bin", "big.bin"))

    broken_ids = {record.attachment_id for record in report.broken}
    large_ids = {record.attachment_id for record in report.large}
    assert broken_ids.isdisjoint(large_ids)


def test_missing_root_gives_empty_report(tmp_path: Path) -> None:
    engine = ReconciliationEngine(AuditSettings())

    report = engine.run(tmp_path / "nope", make_entries("a.jpg"))

    assert report.root_readable is False
    assert report.broken == ()
    assert report.orphans == ()
    assert report.total_files_scanned == 0
    assert report.truncated is False


def test_report_to_dict(uploads: Path) -> None:
    write_file(uploads / "stray.jpg", size=3)
    engine = ReconciliationEngine(AuditSettings())

    payload = engine.run(uploads, make_entries("gone.jpg")).to_dict()

    assert payload["total_files_scanned"] == 1
    assert payload["orphans"][0]["relative"] == "stray.jpg"
    assert payload["orphans"][0]["size"] == 3
    assert payload["broken"][0]["meta"] == "gone.jpg"
    assert payload["attachments_processed"] == 1
    assert payload["status"] == "complete"
