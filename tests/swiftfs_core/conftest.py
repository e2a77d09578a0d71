from __future__ import annotations

from collections.abc import Callable

import pytest

from swiftfs_core.config import SwiftFSConfig
from swiftfs_core.store.native_store import SwiftNativeStore
from swiftfs_core.testing.memory_transport import InMemorySwiftTransport

ROOT_URI = "swift://data.cluster/"


@pytest.fixture
def config() -> SwiftFSConfig:
    return SwiftFSConfig(root_uri=ROOT_URI)


@pytest.fixture
def transport() -> InMemorySwiftTransport:
    return InMemorySwiftTransport(["data"])


@pytest.fixture
def store(config: SwiftFSConfig, transport: InMemorySwiftTransport) -> SwiftNativeStore:
    return SwiftNativeStore(config, transport)


@pytest.fixture
def put_file(store: SwiftNativeStore) -> Callable[[str, int], None]:
    def _put(path: str, size: int) -> None:
        store.upload_object(path, b"x" * size, size)

    return _put
