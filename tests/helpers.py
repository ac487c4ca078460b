from pathlib import Path

from database import AttachmentEntry


def write_file(path: Path, size: int = 4) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as handle:
        handle.truncate(size)
    return path


def make_entries(*attached_files) -> list[AttachmentEntry]:
    return [
        AttachmentEntry(attachment_id=index, title=f"Attachment {index}", attached_file=value)
        for index, value in enumerate(attached_files, start=1)
    ]
