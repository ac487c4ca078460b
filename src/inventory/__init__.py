"""
Attachment inventory and path normalization.
"""

from .builder import AttachmentRecord, InventoryBuilder, InventoryResult
from .paths import join_root, normalize_path, normalize_relative, relative_to_root

__all__ = [
    "AttachmentRecord",
    "InventoryBuilder",
    "InventoryResult",
    "join_root",
    "normalize_path",
    "normalize_relative",
    "relative_to_root",
]
