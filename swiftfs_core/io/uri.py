from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from swiftfs_core.errors import ConfigurationError

SWIFT_SCHEME = "swift"


@dataclass(frozen=True)
class ParsedUri:
    scheme: str
    authority: str
    path: str


@dataclass(frozen=True)
class FilesystemUri:
    """Identity of one filesystem root: ``swift://<container>.<service>/``."""

    scheme: str
    authority: str
    container: str
    service: str

    def qualify(self, path: str) -> str:
        """Render an absolute filesystem path under this scheme/authority."""

        return f"{self.scheme}://{self.authority}{path}"

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}/"


def parse_uri(uri: str) -> ParsedUri:
    if not uri:
        raise ValueError("uri is required")
    parsed = urlparse(uri)
    if not parsed.scheme:
        raise ValueError(f"URI missing scheme: {uri}")
    return ParsedUri(scheme=parsed.scheme, authority=parsed.netloc, path=parsed.path)


def parse_filesystem_uri(uri: str) -> FilesystemUri:
    """Parse the root URI of a filesystem.

    The container is the first dot-separated label of the host; whatever follows
    names the service (connection profile) and may be empty.
    """

    try:
        parsed = parse_uri((uri or "").strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid filesystem URI: {uri!r}") from exc
    if parsed.scheme != SWIFT_SCHEME:
        raise ConfigurationError(f"Filesystem URI must use the {SWIFT_SCHEME}:// scheme: {uri}")
    if not parsed.authority:
        raise ConfigurationError(f"Filesystem URI missing container: {uri}")

    host = parsed.authority.split("@")[-1].split(":")[0]
    container, _, service = host.partition(".")
    if not container:
        raise ConfigurationError(f"Filesystem URI missing container: {uri}")
    return FilesystemUri(
        scheme=parsed.scheme,
        authority=parsed.authority,
        container=container,
        service=service,
    )
