"""
Database package for the content store schema and queries.
"""

from .manager import AttachmentEntry, ContentItem, DatabaseManager
from .schema import create_content_db

__all__ = [
    "AttachmentEntry",
    "ContentItem",
    "DatabaseManager",
    "create_content_db",
]
