from __future__ import annotations

from dataclasses import dataclass

from swiftfs_core.io import paths as fs_paths
from swiftfs_core.io.uri import FilesystemUri, parse_uri


@dataclass(frozen=True)
class ObjectAddress:
    """Flat store address of a filesystem path.

    ``key`` never starts with a separator. The directory-marker form of a path
    ends with one (``trailing_slash=True``); the object form does not. The root
    maps to the container itself in both forms, told apart by the flag.
    """

    container: str
    key: str
    trailing_slash: bool = False

    @property
    def is_container(self) -> bool:
        return not self.key

    @property
    def prefix(self) -> str:
        """Key prefix under which this address's children are listed."""

        if not self.key:
            return ""
        return self.key if self.key.endswith("/") else self.key + "/"

    @property
    def fs_path(self) -> str:
        return fs_paths.normalize_path("/" + self.key)

    def as_directory(self) -> ObjectAddress:
        if self.trailing_slash:
            return self
        return ObjectAddress(self.container, self.prefix, trailing_slash=True)

    def as_object(self) -> ObjectAddress:
        if not self.trailing_slash:
            return self
        return ObjectAddress(self.container, self.key.rstrip("/"), trailing_slash=False)

    def uri_path(self) -> str:
        if not self.key:
            return f"/{self.container}"
        return f"/{self.container}/{self.key}"

    def __str__(self) -> str:
        return self.uri_path()


def resolve_path(filesystem: FilesystemUri, path: str) -> str:
    """Return the normalized absolute filesystem path for ``path``.

    ``path`` may be absolute (``/a/b``) or qualified under the same
    scheme/authority (``swift://container.service/a/b``).
    """

    value = (path or "").strip()
    if "://" in value:
        parsed = parse_uri(value)
        if parsed.scheme != filesystem.scheme or parsed.authority != filesystem.authority:
            raise ValueError(f"Path {path} is not under {filesystem}")
        value = parsed.path or fs_paths.ROOT
    return fs_paths.normalize_path(value)


def to_object_address(
    filesystem: FilesystemUri, path: str, *, directory: bool = False
) -> ObjectAddress:
    """Map a filesystem path to its object or directory-marker address."""

    normalized = resolve_path(filesystem, path)
    key = normalized.lstrip("/")
    if directory:
        return ObjectAddress(filesystem.container, key + "/" if key else "", trailing_slash=True)
    return ObjectAddress(filesystem.container, key, trailing_slash=False)
