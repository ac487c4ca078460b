"""
Path normalization shared by the inventory builder and the disk walker.

Metadata paths and disk paths only compare equal after both went through
the same helpers here.
"""

from __future__ import annotations

import os
import posixpath
import re

_REPEATED_SEPARATORS = re.compile(r"/{2,}")


def normalize_path(value: str | os.PathLike) -> str:
    """Return ``value`` with forward slashes and no redundant segments.

    Backslashes become ``/``, runs of separators collapse, ``.`` and
    ``name/..`` segments fold away and a Windows drive letter is
    upper-cased. Applying it twice gives the same result.
    """
    text = os.fspath(value)
    if not text:
        return ""
    text = _REPEATED_SEPARATORS.sub("/", text.replace("\\", "/"))
    text = posixpath.normpath(text)
    if text == ".":
        return ""
    if len(text) >= 2 and text[1] == ":" and text[0].isalpha():
        text = text[0].upper() + text[1:]
    return text


def normalize_relative(value: str | os.PathLike) -> str:
    """Normalize a root-relative path; the result never starts with ``/``."""
    return normalize_path(value).lstrip("/")


def relative_to_root(absolute: str | os.PathLike, root: str | os.PathLike) -> str:
    """Express an absolute path under ``root`` in normalized relative form."""
    absolute_value = normalize_path(absolute)
    root_value = normalize_path(root)
    if absolute_value == root_value:
        return ""
    prefix = root_value.rstrip("/") + "/"
    if not absolute_value.startswith(prefix):
        raise ValueError(f"{absolute_value} is not under {root_value}")
    return normalize_relative(absolute_value[len(prefix):])


def join_root(root: str | os.PathLike, relative: str | os.PathLike) -> str:
    """Resolve a relative path against ``root`` as a normalized absolute path."""
    root_value = normalize_path(root).rstrip("/")
    relative_value = normalize_relative(relative)
    if not relative_value:
        return normalize_path(root)
    return normalize_path(f"{root_value}/{relative_value}")
