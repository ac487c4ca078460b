"""
Human-readable sizes for report output.
"""

from __future__ import annotations

_UNITS = ("KB", "MB", "GB", "TB")


def format_bytes(size: int) -> str:
    """Render a byte count as ``"512 B"``, ``"1.50 KB"``, ``"6.00 MB"`` and so on."""
    size = int(size)
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    index = 0
    while value >= 1024 and index < len(_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{value:,.2f} {_UNITS[index]}"
