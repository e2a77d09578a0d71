"""Large-object uploads as numbered parts plus a manifest object.

Parts live under ``<key>/`` and are named with a zero-padded index: the store
concatenates a manifest's parts in lexicographic name order, so padding keeps
part 10 after part 9.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

from swiftfs_core.io.uri import FilesystemUri
from swiftfs_core.observability import log_event
from swiftfs_core.store.address import ObjectAddress, to_object_address
from swiftfs_core.store.transport import X_OBJECT_MANIFEST, SwiftTransport

logger = logging.getLogger(__name__)

PART_NAME_WIDTH = 6


def part_address(filesystem: FilesystemUri, path: str, part_number: int) -> ObjectAddress:
    if part_number < 1:
        raise ValueError(f"part_number must be >= 1, got {part_number}")
    logical = to_object_address(filesystem, path)
    if logical.is_container:
        raise ValueError("Cannot upload parts for the filesystem root")
    key = f"{logical.prefix}{part_number:0{PART_NAME_WIDTH}d}"
    return ObjectAddress(logical.container, key, trailing_slash=False)


def manifest_value(address: ObjectAddress) -> str:
    """Prefix shared by every part of ``address``: ``<container>/<key>/``."""

    value = f"{address.container}/{address.key}"
    if not value.endswith("/"):
        value += "/"
    return value.lstrip("/")


def upload_part(
    transport: SwiftTransport,
    filesystem: FilesystemUri,
    path: str,
    part_number: int,
    data: bytes | BinaryIO,
    length: int,
) -> ObjectAddress:
    address = part_address(filesystem, path, part_number)
    transport.put(address, data, length)
    logger.debug("Uploaded part %s of %s (%d bytes)", part_number, path, length)
    return address


def finalize_manifest(transport: SwiftTransport, filesystem: FilesystemUri, path: str) -> str:
    """Write the zero-length manifest object that stitches the parts together.

    Call only once every part has landed; a manifest over a partial set of
    parts is served as a truncated object.
    """

    address = to_object_address(filesystem, path)
    if address.is_container:
        raise ValueError("Cannot write a manifest for the filesystem root")
    value = manifest_value(address)
    transport.put(address, b"", 0, {X_OBJECT_MANIFEST: value})
    log_event(logger, "swiftfs.finalize_manifest", path=address.fs_path, manifest=value)
    return value
