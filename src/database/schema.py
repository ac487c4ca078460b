"""
Database schema definitions for the content store.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path


def create_content_db(db_path: Path) -> None:
    """Create the content database and its tables."""
    conn = _connect(db_path)
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS posts (
            id INTEGER PRIMARY KEY,
            post_type TEXT,
            post_status TEXT,
            post_title TEXT,
            post_author INTEGER,
            post_date TIMESTAMP
        )
        """
    )
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS postmeta (
            id INTEGER PRIMARY KEY,
            post_id INTEGER,
            meta_key TEXT,
            meta_value TEXT,
            FOREIGN KEY (post_id) REFERENCES posts (id),
            UNIQUE (post_id, meta_key)
        )
        """
    )
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS post_types (
            name TEXT PRIMARY KEY,
            public BOOLEAN
        )
        """
    )
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY,
            display_name TEXT
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_posts_type_status ON posts(post_type, post_status)")
    conn.execute("CREATE INDEX IF NOT EXISTS idx_postmeta_key ON postmeta(meta_key, post_id)")
    conn.commit()
    conn.close()


def _connect(db_path: Path) -> sqlite3.Connection:
    """Create a SQLite connection with WAL enabled."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA journal_mode=WAL;")
    return conn

