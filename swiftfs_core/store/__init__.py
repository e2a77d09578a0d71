"""Filesystem emulation over the object store: addressing, metadata, listing, rename, uploads."""

from swiftfs_core.store.address import ObjectAddress, resolve_path, to_object_address
from swiftfs_core.store.metadata import FileStatus, classify_headers, synthesize_status
from swiftfs_core.store.native_store import SwiftNativeStore
from swiftfs_core.store.rename import EntryKind, RenameEngine, RenamePlan, plan_rename
from swiftfs_core.store.rest import HttpxSwiftTransport
from swiftfs_core.store.transport import SwiftTransport

__all__ = [
    "EntryKind",
    "FileStatus",
    "HttpxSwiftTransport",
    "ObjectAddress",
    "RenameEngine",
    "RenamePlan",
    "SwiftNativeStore",
    "SwiftTransport",
    "classify_headers",
    "plan_rename",
    "resolve_path",
    "synthesize_status",
    "to_object_address",
]
