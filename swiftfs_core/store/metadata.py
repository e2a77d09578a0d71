"""Turn store response headers into filesystem status records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import urlparse

from swiftfs_core.errors import NotFoundError, ProtocolError
from swiftfs_core.store.address import ObjectAddress
from swiftfs_core.store.transport import (
    DIRECTORY_CONTENT_TYPE,
    HEADER_CONTENT_LENGTH,
    HEADER_CONTENT_TYPE,
    HEADER_LAST_MODIFIED,
    LAST_MODIFIED_FORMAT,
    X_CONTAINER_BYTES_USED,
    X_CONTAINER_OBJECT_COUNT,
    Headers,
)

_AGGREGATE_HEADERS = {X_CONTAINER_OBJECT_COUNT.lower(), X_CONTAINER_BYTES_USED.lower()}


@dataclass(frozen=True)
class FileStatus:
    length: int
    is_directory: bool
    last_modified: datetime | None
    path: str

    @property
    def fs_path(self) -> str:
        return urlparse(self.path).path or "/"

    @property
    def is_file(self) -> bool:
        return not self.is_directory


def _header_map(headers: Headers) -> dict[str, str]:
    # last value wins, matching how the store collapses repeated headers
    return {name.lower(): value for name, value in headers}


def classify_headers(headers: Headers, address: ObjectAddress) -> tuple[bool, int]:
    """Return ``(is_directory, length)`` for a HEAD response.

    Container aggregate headers mark the address as directory-like and force a
    zero length. A hit on a directory-marker address, or a marker content
    type, is also a directory.
    """

    values = _header_map(headers)
    if _AGGREGATE_HEADERS & values.keys():
        return True, 0

    is_directory = address.trailing_slash or (
        values.get(HEADER_CONTENT_TYPE.lower(), "").split(";")[0].strip() == DIRECTORY_CONTENT_TYPE
    )
    raw_length = values.get(HEADER_CONTENT_LENGTH.lower())
    if raw_length is None or is_directory:
        return is_directory, 0
    try:
        length = int(raw_length.strip())
    except ValueError as exc:
        raise ProtocolError(f"Failed to parse {HEADER_CONTENT_LENGTH}: {raw_length!r}") from exc
    if length < 0:
        raise ProtocolError(f"Negative {HEADER_CONTENT_LENGTH}: {raw_length!r}")
    return False, length


def parse_last_modified(value: str) -> datetime:
    try:
        parsed = datetime.strptime(value.strip(), LAST_MODIFIED_FORMAT)
    except ValueError as exc:
        raise ProtocolError(f"Failed to parse {HEADER_LAST_MODIFIED}: {value!r}") from exc
    return parsed.replace(tzinfo=UTC)


def synthesize_status(headers: Headers, address: ObjectAddress, qualified_path: str) -> FileStatus:
    """Build a FileStatus from a HEAD response; no headers means the address is absent."""

    if not headers:
        raise NotFoundError(f"Not found: {qualified_path}")

    is_directory, length = classify_headers(headers, address)
    raw_modified = _header_map(headers).get(HEADER_LAST_MODIFIED.lower())
    last_modified = parse_last_modified(raw_modified) if raw_modified is not None else None
    return FileStatus(
        length=length,
        is_directory=is_directory,
        last_modified=last_modified,
        path=qualified_path,
    )
