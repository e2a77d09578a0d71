from __future__ import annotations

from collections.abc import Mapping
from typing import BinaryIO, Protocol

from swiftfs_core.store.address import ObjectAddress

Headers = list[tuple[str, str]]
ByteRange = tuple[int, int]

HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_LAST_MODIFIED = "Last-Modified"
HEADER_RANGE = "Range"
X_AUTH_TOKEN = "X-Auth-Token"
X_CONTAINER_OBJECT_COUNT = "X-Container-Object-Count"
X_CONTAINER_BYTES_USED = "X-Container-Bytes-Used"
X_COPY_FROM = "X-Copy-From"
X_NEWEST = "X-Newest"
X_OBJECT_MANIFEST = "X-Object-Manifest"

DIRECTORY_CONTENT_TYPE = "application/directory"
LAST_MODIFIED_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"


class SwiftTransport(Protocol):
    """Request surface of the object store.

    Every method is a single request. Nothing here is atomic across calls:
    copy followed by delete is two requests that can be interleaved with
    other writers.
    """

    def head(self, address: ObjectAddress) -> Headers:
        """Return response headers, or an empty list when the address is absent."""

    def get(self, address: ObjectAddress, byte_range: ByteRange | None = None) -> BinaryIO:
        """Return object content; ``byte_range`` is an inclusive ``(start, end)`` pair."""

    def put(
        self,
        address: ObjectAddress,
        data: bytes | BinaryIO,
        length: int,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Write (overwrite) an object."""

    def delete(self, address: ObjectAddress) -> bool:
        """Return True when this call removed the object."""

    def copy(self, source: ObjectAddress, destination: ObjectAddress) -> bool:
        """Server-side copy; raises NotFoundError when the source is absent."""

    def list_by_prefix(self, address: ObjectAddress, marker: str | None = None) -> bytes:
        """Return newline-separated object names under ``address.prefix`` after ``marker``."""

    def object_location(self, address: ObjectAddress) -> bytes:
        """Return the raw endpoint-lookup payload for an object."""
