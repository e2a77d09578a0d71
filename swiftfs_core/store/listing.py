from __future__ import annotations

import logging
from collections.abc import Iterator
from http import HTTPStatus

from swiftfs_core.errors import InvalidResponseError, NotFoundError, ProtocolError
from swiftfs_core.io.uri import FilesystemUri
from swiftfs_core.store.address import ObjectAddress
from swiftfs_core.store.metadata import FileStatus, synthesize_status
from swiftfs_core.store.transport import SwiftTransport

logger = logging.getLogger(__name__)


def stat_address(
    transport: SwiftTransport, filesystem: FilesystemUri, address: ObjectAddress
) -> FileStatus:
    headers = transport.head(address)
    return synthesize_status(headers, address, filesystem.qualify(address.fs_path))


def _first_page(transport: SwiftTransport, address: ObjectAddress) -> bytes:
    """Fetch the first listing page, mapping empty/absent outcomes.

    The root of the filesystem is the container itself: an absent or empty
    container lists as empty. Anywhere else both outcomes mean "not found".
    """

    is_root = address.is_container
    try:
        return transport.list_by_prefix(address, None)
    except NotFoundError:
        logger.debug("Directory not found %s", address)
        if is_root:
            return b""
        raise
    except InvalidResponseError as exc:
        if exc.status_code != HTTPStatus.NO_CONTENT:
            raise
        logger.debug("lsdir %s status code says NO_CONTENT; %s", address, exc)
        if is_root:
            return b""
        raise NotFoundError(f"Not found: {address}") from exc


def _next_page(transport: SwiftTransport, address: ObjectAddress, marker: str) -> bytes:
    try:
        return transport.list_by_prefix(address, marker)
    except NotFoundError:
        return b""
    except InvalidResponseError as exc:
        if exc.status_code == HTTPStatus.NO_CONTENT:
            return b""
        raise


def _split_names(payload: bytes) -> list[str]:
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProtocolError("Listing response is not valid UTF-8") from exc
    return [line for line in text.split("\n") if line.strip()]


def iter_object_names(transport: SwiftTransport, address: ObjectAddress) -> Iterator[str]:
    """Yield every raw object name under the address prefix, following pagination."""

    directory = address.as_directory()
    names = _split_names(_first_page(transport, directory))
    while names:
        yield from names
        marker = names[-1]
        names = _split_names(_next_page(transport, directory, marker))
        if names and names[-1] == marker:
            break


def _entry_address(directory: ObjectAddress, name: str) -> ObjectAddress:
    path_in_store = name if name.startswith("/") else "/" + name
    key = path_in_store.lstrip("/")
    return ObjectAddress(directory.container, key, trailing_slash=key.endswith("/"))


def list_directory(
    transport: SwiftTransport, filesystem: FilesystemUri, address: ObjectAddress
) -> list[FileStatus]:
    """List every object under a directory prefix, one HEAD per entry.

    The listing is recursive (plain prefix match). The directory's own marker
    is left out; entries that disappear between listing and HEAD are skipped.
    """

    directory = address.as_directory()
    statuses: list[FileStatus] = []
    for name in iter_object_names(transport, directory):
        entry = _entry_address(directory, name)
        if entry.key == directory.key:
            continue
        try:
            statuses.append(stat_address(transport, filesystem, entry))
        except NotFoundError:
            logger.debug("Listed entry vanished before HEAD %s", entry)
    return statuses


def has_children(transport: SwiftTransport, address: ObjectAddress) -> bool:
    """True when at least one object other than the marker lives under the prefix."""

    directory = address.as_directory()
    try:
        for name in iter_object_names(transport, directory):
            if name.lstrip("/") != directory.key:
                return True
    except NotFoundError:
        return False
    return False
