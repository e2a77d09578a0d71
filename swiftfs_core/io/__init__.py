"""URI and path helpers."""

from swiftfs_core.io.paths import (
    ROOT,
    SEPARATOR,
    basename,
    is_descendant,
    is_root,
    join_path,
    normalize_path,
    parent_of,
    relative_to,
)
from swiftfs_core.io.uri import (
    SWIFT_SCHEME,
    FilesystemUri,
    ParsedUri,
    parse_filesystem_uri,
    parse_uri,
)

__all__ = [
    "ROOT",
    "SEPARATOR",
    "SWIFT_SCHEME",
    "FilesystemUri",
    "ParsedUri",
    "basename",
    "is_descendant",
    "is_root",
    "join_path",
    "normalize_path",
    "parent_of",
    "parse_filesystem_uri",
    "parse_uri",
    "relative_to",
]
