"""Stable public imports for `swiftfs_core`.

Prefer importing from these symbols when wiring a filesystem layer on top.
Lower-level helpers should be imported from their submodules explicitly.
"""

from swiftfs_core.config import SwiftFSConfig, build_swift_config_from_env, load_swift_config
from swiftfs_core.errors import (
    ConfigurationError,
    CopyFailureError,
    DirectoryNotEmptyError,
    InvalidResponseError,
    NotFoundError,
    ProtocolError,
    SwiftFSError,
)
from swiftfs_core.store import (
    FileStatus,
    HttpxSwiftTransport,
    ObjectAddress,
    RenamePlan,
    SwiftNativeStore,
    SwiftTransport,
    to_object_address,
)

__all__ = [
    "ConfigurationError",
    "CopyFailureError",
    "DirectoryNotEmptyError",
    "FileStatus",
    "HttpxSwiftTransport",
    "InvalidResponseError",
    "NotFoundError",
    "ObjectAddress",
    "ProtocolError",
    "RenamePlan",
    "SwiftFSConfig",
    "SwiftFSError",
    "SwiftNativeStore",
    "SwiftTransport",
    "build_swift_config_from_env",
    "load_swift_config",
    "to_object_address",
]
