"""Object store transport over the Swift REST API, built on HTTPX.

Authentication is out of scope: the transport is handed a storage URL and a
token that is already valid. No retries happen here.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from typing import BinaryIO
from urllib.parse import quote

import httpx

from swiftfs_core.config import SwiftFSConfig
from swiftfs_core.errors import ConfigurationError, InvalidResponseError, NotFoundError
from swiftfs_core.store.address import ObjectAddress
from swiftfs_core.store.transport import (
    HEADER_CONTENT_LENGTH,
    HEADER_RANGE,
    X_AUTH_TOKEN,
    X_COPY_FROM,
    X_NEWEST,
    ByteRange,
    Headers,
)

logger = logging.getLogger(__name__)


def _raise_for_status(response: httpx.Response, message: str) -> None:
    if response.status_code == httpx.codes.NOT_FOUND:
        raise NotFoundError(f"{message}: not found ({response.request.url})")
    if not response.is_success:
        raise InvalidResponseError(
            message,
            status_code=response.status_code,
            method=response.request.method,
            url=str(response.request.url),
        )


class HttpxSwiftTransport:
    """SwiftTransport speaking HTTP to a storage URL (``.../v1/AUTH_account``)."""

    def __init__(self, config: SwiftFSConfig, client: httpx.Client | None = None) -> None:
        if not config.storage_url:
            raise ConfigurationError("storage_url is required for the REST transport")
        self._config = config
        self._storage_url = config.storage_url.rstrip("/")
        headers: dict[str, str] = {}
        if config.auth_token:
            headers[X_AUTH_TOKEN] = config.auth_token
        self._client = client or httpx.Client(timeout=config.timeout_seconds)
        self._client.headers.update(headers)

    def __repr__(self) -> str:
        return f"HttpxSwiftTransport({self._storage_url})"

    def close(self) -> None:
        self._client.close()

    def _url(self, address: ObjectAddress) -> str:
        url = f"{self._storage_url}/{quote(address.container, safe='')}"
        if address.key:
            url += "/" + quote(address.key, safe="/")
        return url

    def _read_headers(self) -> dict[str, str]:
        return {X_NEWEST: "true"} if self._config.newest_reads else {}

    def head(self, address: ObjectAddress) -> Headers:
        response = self._client.head(self._url(address), headers=self._read_headers())
        if response.status_code == httpx.codes.NOT_FOUND:
            return []
        _raise_for_status(response, f"HEAD {address}")
        return list(response.headers.multi_items())

    def get(self, address: ObjectAddress, byte_range: ByteRange | None = None) -> BinaryIO:
        headers = self._read_headers()
        if byte_range is not None:
            start, end = byte_range
            headers[HEADER_RANGE] = f"bytes={start}-{end}"
        response = self._client.get(self._url(address), headers=headers)
        _raise_for_status(response, f"GET {address}")
        return io.BytesIO(response.content)

    def put(
        self,
        address: ObjectAddress,
        data: bytes | BinaryIO,
        length: int,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        request_headers = {HEADER_CONTENT_LENGTH: str(length)}
        request_headers.update(headers or {})
        response = self._client.put(self._url(address), content=data, headers=request_headers)
        _raise_for_status(response, f"PUT {address}")

    def delete(self, address: ObjectAddress) -> bool:
        response = self._client.delete(self._url(address))
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        _raise_for_status(response, f"DELETE {address}")
        return True

    def copy(self, source: ObjectAddress, destination: ObjectAddress) -> bool:
        copy_from = quote(f"/{source.container}/{source.key}", safe="/")
        response = self._client.put(
            self._url(destination),
            content=b"",
            headers={X_COPY_FROM: copy_from, HEADER_CONTENT_LENGTH: "0"},
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(f"Copy source not found: {source}")
        if not response.is_success:
            logger.warning(
                "Copy of %s to %s returned status %s", source, destination, response.status_code
            )
            return False
        return True

    def list_by_prefix(self, address: ObjectAddress, marker: str | None = None) -> bytes:
        params: dict[str, str] = {"limit": str(self._config.list_page_size)}
        if address.prefix:
            params["prefix"] = address.prefix
        if marker:
            params["marker"] = marker
        container = ObjectAddress(address.container, "")
        response = self._client.get(
            self._url(container),
            params=params,
            headers={**self._read_headers(), "Accept": "text/plain"},
        )
        if response.status_code == httpx.codes.NO_CONTENT:
            raise InvalidResponseError(
                f"No content listing {address}",
                status_code=response.status_code,
                method="GET",
                url=str(response.request.url),
            )
        _raise_for_status(response, f"LIST {address}")
        return response.content

    def object_location(self, address: ObjectAddress) -> bytes:
        if not self._config.endpoints_url:
            raise ConfigurationError("endpoints_url is required to resolve object locations")
        url = f"{self._config.endpoints_url.rstrip('/')}{quote(address.uri_path(), safe='/')}"
        response = self._client.get(url)
        _raise_for_status(response, f"ENDPOINTS {address}")
        return response.content
