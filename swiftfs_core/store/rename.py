"""Rename through copy-and-delete.

The store hashes objects by their full name, so there is no server-side
rename: every object is copied to its new name and the original deleted
afterwards. A rename interrupted partway leaves both trees partially
populated and nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from swiftfs_core.errors import CopyFailureError, NotFoundError
from swiftfs_core.io import paths as fs_paths
from swiftfs_core.io.uri import FilesystemUri
from swiftfs_core.observability import log_event
from swiftfs_core.store.address import ObjectAddress, resolve_path, to_object_address
from swiftfs_core.store.metadata import FileStatus
from swiftfs_core.store.transport import SwiftTransport

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    ABSENT = "absent"


def _kind_of(status: FileStatus | None) -> EntryKind:
    if status is None:
        return EntryKind.ABSENT
    return EntryKind.DIRECTORY if status.is_directory else EntryKind.FILE


@dataclass(frozen=True)
class RenamePlan:
    source_kind: EntryKind
    destination_exists: bool
    destination_kind: EntryKind
    target: str | None

    @property
    def is_viable(self) -> bool:
        return self.target is not None


def plan_rename(
    src: str, src_status: FileStatus, dst: str, dst_status: FileStatus | None
) -> RenamePlan:
    """Classify source and destination and resolve where the source ends up.

    A destination that is an existing file is never overwritten, whatever the
    source is; an existing directory receives the source under its own name.
    """

    source_kind = _kind_of(src_status)
    destination_kind = _kind_of(dst_status)

    if destination_kind is EntryKind.FILE:
        target = None
    elif destination_kind is EntryKind.DIRECTORY:
        target = fs_paths.join_path(dst, fs_paths.basename(src))
    else:
        target = fs_paths.normalize_path(dst)

    return RenamePlan(
        source_kind=source_kind,
        destination_exists=destination_kind is not EntryKind.ABSENT,
        destination_kind=destination_kind,
        target=target,
    )


class RenameEngine:
    def __init__(
        self,
        *,
        transport: SwiftTransport,
        filesystem: FilesystemUri,
        stat: Callable[[str], FileStatus],
        list_directory: Callable[[str], list[FileStatus]],
        strict: bool = False,
    ) -> None:
        self._transport = transport
        self._filesystem = filesystem
        self._stat = stat
        self._list_directory = list_directory
        self._strict = strict

    def _address(self, path: str) -> ObjectAddress:
        return to_object_address(self._filesystem, path)

    def _stat_or_none(self, path: str) -> FileStatus | None:
        try:
            return self._stat(path)
        except NotFoundError:
            return None

    def rename(self, src: str, dst: str) -> bool:
        """Move ``src`` to ``dst``; False for renames that cannot apply.

        I/O and protocol failures propagate. A failed copy raises
        CopyFailureError and leaves that source object in place.
        """

        src_path = resolve_path(self._filesystem, src)
        dst_path = resolve_path(self._filesystem, dst)
        logger.debug("mv %s %s", src_path, dst_path)

        if src_path == dst_path:
            logger.debug("Destination==source -failing")
            return False
        if fs_paths.is_root(src_path):
            logger.debug("cannot rename root dir")
            return False
        if fs_paths.is_descendant(src_path, dst_path):
            logger.debug("cannot move a directory under itself")
            return False

        src_status = self._stat_or_none(src_path)
        if src_status is None:
            logger.debug("source path not found -failing")
            return False
        dst_status = self._stat_or_none(dst_path)

        # same parent, or a root destination, means the parent exists already
        src_parent = fs_paths.parent_of(src_path)
        dst_parent = fs_paths.parent_of(dst_path)
        if dst_parent is not None and dst_parent != src_parent:
            if self._stat_or_none(dst_parent) is None:
                logger.debug("destination parent directory %s doesn't exist", dst_parent)
                return False

        plan = plan_rename(src_path, src_status, dst_path, dst_status)
        if not plan.is_viable:
            logger.debug(
                "cannot rename a %s over an existing file %s", plan.source_kind.value, dst_path
            )
            return False
        if plan.target == src_path or fs_paths.is_descendant(src_path, plan.target):
            logger.debug("rename of %s resolves onto itself via %s -failing", src_path, dst_path)
            return False

        if plan.source_kind is EntryKind.FILE:
            self._copy_then_delete(self._address(src_path), self._address(plan.target))
            log_event(
                logger,
                "swiftfs.rename",
                src=src_path,
                dst=dst_path,
                target=plan.target,
                kind=plan.source_kind.value,
                moved=1,
                skipped=0,
            )
            return True

        return self._move_directory(src_path, dst_path, plan)

    def _move_directory(self, src_path: str, dst_path: str, plan: RenamePlan) -> bool:
        # markers are not migrated: the tree is implied by the leaf object names
        moved = 0
        skipped = 0
        for child in self._list_directory(src_path):
            if child.is_directory:
                continue
            target = fs_paths.join_path(plan.target, fs_paths.relative_to(src_path, child.fs_path))
            try:
                self._copy_then_delete(self._address(child.fs_path), self._address(target))
            except NotFoundError as exc:
                if self._strict:
                    raise CopyFailureError(
                        f"Source object {child.path} vanished during rename of {src_path}"
                    ) from exc
                logger.warning("Skipping rename of %s: no longer present", child.path)
                skipped += 1
                continue
            moved += 1

        log_event(
            logger,
            "swiftfs.rename",
            src=src_path,
            dst=dst_path,
            target=plan.target,
            kind=plan.source_kind.value,
            moved=moved,
            skipped=skipped,
        )
        return True

    def _copy_then_delete(self, source: ObjectAddress, destination: ObjectAddress) -> None:
        """Copy an object, then delete the original only if the copy worked."""

        if not self._transport.copy(source, destination):
            raise CopyFailureError(f"Copy of {source} to {destination} failed")
        self._transport.delete(source)
