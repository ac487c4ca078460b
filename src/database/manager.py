"""
SQLite access layer for the content store: attachments, posts and post types.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .schema import create_content_db

ATTACHED_FILE_KEY = "_wp_attached_file"
THUMBNAIL_KEY = "_thumbnail_id"
ATTACHMENT_TYPE = "attachment"


@dataclass(frozen=True)
class AttachmentEntry:
    """Attachment row as stored in the content store."""

    attachment_id: int
    title: str
    attached_file: Optional[object]


@dataclass(frozen=True)
class ContentItem:
    """Published content item lacking a featured image."""

    post_id: int
    title: str
    post_type: str
    author: Optional[str]
    published_at: str


class DatabaseManager:
    """Manage the content store connection and its queries."""

    def __init__(self, db_path: Path, read_only: bool = False) -> None:
        self.db_path = db_path
        self.read_only = read_only
        self._conn: Optional[sqlite3.Connection] = None

    def initialize(self) -> None:
        """Create the database file and tables."""
        if self.read_only:
            raise PermissionError(f"Content database opened read-only: {self.db_path}")
        create_content_db(self.db_path)

    def connect(self) -> None:
        """Open the database connection if it is not already open.

        Read-only managers open the file with ``mode=ro`` and leave its
        journal mode untouched.
        """
        if self._conn is not None:
            return
        if self.read_only:
            uri = f"{Path(self.db_path).resolve().as_uri()}?mode=ro"
            self._conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
            return
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL;")

    def close(self) -> None:
        """Close the open database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def count_attachments(self) -> int:
        """Count attachment records eligible for auditing."""
        self.connect()
        cursor = self._conn.execute(
            "SELECT COUNT(*) FROM posts WHERE post_type = ? AND post_status = 'inherit'",
            (ATTACHMENT_TYPE,),
        )
        row = cursor.fetchone()
        return int(row[0]) if row else 0

    def iter_attachments(self, page_size: int = 500) -> Iterable[AttachmentEntry]:
        """Yield attachments page by page, ordered by ID.

        Pages are keyed on the last seen ID, so each call restarts from the
        beginning and memory stays bounded by ``page_size``.
        """
        self.connect()
        last_id = 0
        while True:
            rows = self._conn.execute(
                """
                SELECT p.id, p.post_title, m.meta_value
                FROM posts p
                LEFT JOIN postmeta m
                    ON m.post_id = p.id AND m.meta_key = ?
                WHERE p.post_type = ? AND p.post_status = 'inherit' AND p.id > ?
                ORDER BY p.id
                LIMIT ?
                """,
                (ATTACHED_FILE_KEY, ATTACHMENT_TYPE, last_id, page_size),
            ).fetchall()
            if not rows:
                return
            for attachment_id, title, attached_file in rows:
                yield AttachmentEntry(
                    attachment_id=int(attachment_id),
                    title=str(title) if title is not None else "",
                    attached_file=attached_file,
                )
            last_id = int(rows[-1][0])
            if len(rows) < page_size:
                return

    def list_public_post_types(self) -> list[str]:
        """Return public content types, excluding attachments."""
        self.connect()
        cursor = self._conn.execute(
            "SELECT name FROM post_types WHERE public = 1 AND name != ? ORDER BY name",
            (ATTACHMENT_TYPE,),
        )
        return [str(row[0]) for row in cursor.fetchall()]

    def find_published_without_thumbnail(self, limit: int = 100) -> list[ContentItem]:
        """Return published items of public types with no featured image set."""
        public_types = self.list_public_post_types()
        if not public_types or limit <= 0:
            return []
        placeholders = ", ".join("?" for _ in public_types)
        self.connect()
        cursor = self._conn.execute(
            f"""
            SELECT p.id, p.post_title, p.post_type, u.display_name, p.post_date
            FROM posts p
            LEFT JOIN users u ON u.id = p.post_author
            WHERE p.post_type IN ({placeholders})
                AND p.post_status = 'publish'
                AND NOT EXISTS (
                    SELECT 1 FROM postmeta m
                    WHERE m.post_id = p.id AND m.meta_key = ?
                )
            ORDER BY p.post_date DESC, p.id DESC
            LIMIT ?
            """,
            (*public_types, THUMBNAIL_KEY, limit),
        )
        return [
            ContentItem(
                post_id=int(post_id),
                title=str(title) if title is not None else "",
                post_type=str(post_type),
                author=str(author) if author is not None else None,
                published_at=str(published_at) if published_at is not None else "",
            )
            for post_id, title, post_type, author, published_at in cursor.fetchall()
        ]

    def get_title(self, post_id: int) -> Optional[str]:
        """Look up the title of a post or attachment."""
        self.connect()
        row = self._conn.execute("SELECT post_title FROM posts WHERE id = ?", (post_id,)).fetchone()
        return str(row[0]) if row and row[0] is not None else None

    def register_post_type(self, name: str, public: bool = True) -> None:
        """Insert or update a content type definition."""
        self.connect()
        self._conn.execute(
            """
            INSERT INTO post_types (name, public) VALUES (?, ?)
            ON CONFLICT(name) DO UPDATE SET public = excluded.public
            """,
            (name, 1 if public else 0),
        )
        self._conn.commit()

    def add_user(self, display_name: str) -> int:
        """Insert a user and return its ID."""
        self.connect()
        cursor = self._conn.execute("INSERT INTO users (display_name) VALUES (?)", (display_name,))
        self._conn.commit()
        return int(cursor.lastrowid)

    def add_post(
        self,
        post_type: str,
        title: str,
        status: str = "publish",
        author_id: Optional[int] = None,
        post_date: Optional[str] = None,
    ) -> int:
        """Insert a post row and return its ID."""
        self.connect()
        cursor = self._conn.execute(
            """
            INSERT INTO posts (post_type, post_status, post_title, post_author, post_date)
            VALUES (?, ?, ?, ?, ?)
            """,
            (post_type, status, title, author_id, post_date or datetime.utcnow().isoformat()),
        )
        self._conn.commit()
        return int(cursor.lastrowid)

    def add_attachment(self, title: str, attached_file: Optional[str], status: str = "inherit") -> int:
        """Insert an attachment and its stored file path, returning its ID."""
        attachment_id = self.add_post(ATTACHMENT_TYPE, title, status=status)
        if attached_file is not None:
            self.set_post_meta(attachment_id, ATTACHED_FILE_KEY, attached_file)
        return attachment_id

    def set_post_meta(self, post_id: int, key: str, value: str) -> None:
        """Insert or replace a single meta value."""
        self.connect()
        self._conn.execute(
            """
            INSERT INTO postmeta (post_id, meta_key, meta_value) VALUES (?, ?, ?)
            ON CONFLICT(post_id, meta_key) DO UPDATE SET meta_value = excluded.meta_value
            """,
            (post_id, key, value),
        )
        self._conn.commit()
