"""POSIX-style path helpers for filesystem paths inside one container.

All helpers operate on absolute, normalized paths: ``/`` is the root, no
trailing separator otherwise, no ``.``/``..`` segments.
"""

from __future__ import annotations

import posixpath

SEPARATOR = "/"
ROOT = "/"


def normalize_path(path: str) -> str:
    value = (path or "").strip()
    if not value.startswith(SEPARATOR):
        raise ValueError(f"Filesystem path must be absolute: {path!r}")
    normalized = posixpath.normpath(value)
    # normpath keeps a leading "//" as-is on POSIX
    if normalized.startswith("//"):
        normalized = SEPARATOR + normalized.lstrip(SEPARATOR)
    return normalized


def is_root(path: str) -> bool:
    return normalize_path(path) == ROOT


def parent_of(path: str) -> str | None:
    """Return the parent directory, or None for the root."""

    normalized = normalize_path(path)
    if normalized == ROOT:
        return None
    return posixpath.dirname(normalized)


def basename(path: str) -> str:
    return posixpath.basename(normalize_path(path))


def join_path(base: str, name: str) -> str:
    return normalize_path(posixpath.join(normalize_path(base), name.lstrip(SEPARATOR)))


def is_descendant(ancestor: str, candidate: str) -> bool:
    """True when ``candidate`` lies strictly below ``ancestor``."""

    parent = normalize_path(ancestor)
    child = normalize_path(candidate)
    if parent == child:
        return False
    if parent == ROOT:
        return True
    return child.startswith(parent + SEPARATOR)


def relative_to(base: str, path: str) -> str:
    """Return ``path`` relative to ``base`` without a leading separator."""

    parent = normalize_path(base)
    child = normalize_path(path)
    if parent == ROOT:
        return child.lstrip(SEPARATOR)
    if not is_descendant(parent, child):
        raise ValueError(f"{path} is not under {base}")
    return child[len(parent) + 1 :]
