from __future__ import annotations

import json
import logging
from typing import BinaryIO

from swiftfs_core.config import SwiftFSConfig
from swiftfs_core.errors import DirectoryNotEmptyError, NotFoundError, ProtocolError
from swiftfs_core.io import paths as fs_paths
from swiftfs_core.observability import log_event
from swiftfs_core.store import listing, multipart
from swiftfs_core.store.address import ObjectAddress, resolve_path, to_object_address
from swiftfs_core.store.metadata import FileStatus
from swiftfs_core.store.rename import RenameEngine
from swiftfs_core.store.transport import (
    DIRECTORY_CONTENT_TYPE,
    HEADER_CONTENT_TYPE,
    ByteRange,
    SwiftTransport,
)

logger = logging.getLogger(__name__)


class SwiftNativeStore:
    """Filesystem operations over a flat object store.

    Every call is a fresh sequence of requests; statuses are never cached.
    Directories are emulated: a zero-length marker object whose name ends in
    ``/``, or simply the presence of objects under the prefix.
    """

    def __init__(self, config: SwiftFSConfig, transport: SwiftTransport | None = None) -> None:
        self.config = config
        self.filesystem = config.filesystem
        if transport is None:
            from swiftfs_core.store.rest import HttpxSwiftTransport

            transport = HttpxSwiftTransport(config)
        self.transport = transport
        self._renamer = RenameEngine(
            transport=transport,
            filesystem=self.filesystem,
            stat=self.stat,
            list_directory=self.list,
            strict=config.strict_rename,
        )

    def __repr__(self) -> str:
        return f"SwiftNativeStore({self.filesystem}, transport={self.transport!r})"

    def _object_address(self, path: str) -> ObjectAddress:
        return to_object_address(self.filesystem, path)

    def _directory_address(self, path: str) -> ObjectAddress:
        return to_object_address(self.filesystem, path, directory=True)

    def _locate(self, path: str) -> tuple[ObjectAddress | None, FileStatus]:
        """Find what answers for ``path``: the object, its marker, or only children.

        Returns the address that answered (None for a directory implied only
        by its children) together with the synthesized status.
        """

        fs_path = resolve_path(self.filesystem, path)
        for address in (self._object_address(fs_path), self._directory_address(fs_path)):
            if address.is_container and address.trailing_slash:
                continue
            try:
                return address, listing.stat_address(self.transport, self.filesystem, address)
            except NotFoundError:
                continue

        directory = self._directory_address(fs_path)
        if listing.has_children(self.transport, directory):
            implied = FileStatus(
                length=0,
                is_directory=True,
                last_modified=None,
                path=self.filesystem.qualify(fs_path),
            )
            return None, implied
        raise NotFoundError(f"Not found: {self.filesystem.qualify(fs_path)}")

    def stat(self, path: str) -> FileStatus:
        return self._locate(path)[1]

    def object_exists(self, path: str) -> bool:
        try:
            self.stat(path)
        except NotFoundError:
            return False
        return True

    def list(self, path: str) -> list[FileStatus]:
        """Return the statuses of everything under ``path`` (empty when nothing is)."""

        directory = self._directory_address(path)
        return listing.list_directory(self.transport, self.filesystem, directory)

    def create_directory(self, path: str) -> None:
        address = self._directory_address(path)
        self.transport.put(address, b"", 0, {HEADER_CONTENT_TYPE: DIRECTORY_CONTENT_TYPE})
        log_event(logger, "swiftfs.create_directory", path=address.fs_path)

    def get_object(self, path: str, byte_range: ByteRange | None = None) -> BinaryIO:
        return self.transport.get(self._object_address(path), byte_range)

    def upload_object(self, path: str, data: bytes | BinaryIO, length: int) -> None:
        self.transport.put(self._object_address(path), data, length)

    def upload_part(
        self, path: str, part_number: int, data: bytes | BinaryIO, length: int
    ) -> ObjectAddress:
        return multipart.upload_part(
            self.transport, self.filesystem, path, part_number, data, length
        )

    def finalize_manifest(self, path: str) -> str:
        return multipart.finalize_manifest(self.transport, self.filesystem, path)

    def copy(self, src: str, dst: str) -> bool:
        return self.transport.copy(self._object_address(src), self._object_address(dst))

    def rename(self, src: str, dst: str) -> bool:
        return self._renamer.rename(src, dst)

    def delete(self, path: str, recursive: bool = False) -> bool:
        """Delete a file or directory; False when nothing was there.

        Directory deletion is a sequence of single-object deletes, deepest
        names first, followed by the directory's own marker. The root is only
        ever emptied.
        """

        fs_path = resolve_path(self.filesystem, path)
        try:
            answered, status = self._locate(fs_path)
        except NotFoundError:
            return False

        if status.is_file:
            deleted = self.transport.delete(self._object_address(fs_path))
            log_event(logger, "swiftfs.delete", path=fs_path, kind="file", deleted=deleted)
            return deleted

        directory = self._directory_address(fs_path)
        names = [
            name.lstrip("/")
            for name in listing.iter_object_names(self.transport, directory)
            if name.lstrip("/") != directory.key
        ]
        if names and not recursive:
            raise DirectoryNotEmptyError(f"Directory {fs_path} is not empty")

        removed = 0
        for key in sorted(names, key=lambda k: (k.rstrip("/").count("/"), k), reverse=True):
            entry = ObjectAddress(directory.container, key, trailing_slash=key.endswith("/"))
            if self.transport.delete(entry):
                removed += 1

        if fs_paths.is_root(fs_path):
            log_event(logger, "swiftfs.delete", path=fs_path, kind="root", removed=removed)
            return removed > 0

        if answered is not None:
            self.transport.delete(answered)
        log_event(logger, "swiftfs.delete", path=fs_path, kind="directory", removed=removed)
        return True

    def resolve_locations(self, path: str) -> list[str]:
        """Return the storage node URLs that hold ``path``."""

        payload = self.transport.object_location(self._object_address(path))
        try:
            locations = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ProtocolError(f"Unparseable object location response for {path}") from exc
        if not isinstance(locations, list) or not all(isinstance(u, str) for u in locations):
            raise ProtocolError(f"Object location response for {path} must be a list of URLs")
        return locations
