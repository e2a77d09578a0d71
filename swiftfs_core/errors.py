from __future__ import annotations


class SwiftFSError(Exception):
    """Base error for swiftfs_core."""


class NotFoundError(SwiftFSError, FileNotFoundError):
    """Raised when an object or prefix is absent from the store."""


class ProtocolError(SwiftFSError):
    """Raised when the store returns a malformed or unparseable response."""


class InvalidResponseError(ProtocolError):
    """Raised when the store answers with an unexpected HTTP status code."""

    def __init__(self, message: str, *, status_code: int, method: str = "", url: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        if self.method and self.url:
            return f"{base} ({self.method} {self.url} -> {self.status_code})"
        return f"{base} (status={self.status_code})"


class ConfigurationError(SwiftFSError):
    """Raised when the filesystem URI or connection settings are malformed."""


class CopyFailureError(SwiftFSError):
    """Raised when a server-side copy during rename did not succeed."""


class DirectoryNotEmptyError(SwiftFSError):
    """Raised when a non-recursive delete targets a directory with children."""
