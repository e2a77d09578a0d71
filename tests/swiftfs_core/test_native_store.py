from __future__ import annotations

import logging
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from swiftfs_core.config import SwiftFSConfig
from swiftfs_core.errors import DirectoryNotEmptyError, NotFoundError, ProtocolError
from swiftfs_core.store.address import ObjectAddress
from swiftfs_core.store.native_store import SwiftNativeStore
from swiftfs_core.testing.memory_transport import InMemorySwiftTransport


@freeze_time("2024-03-01 12:30:45")
def test_stat_after_put_reports_length_and_time(store, put_file) -> None:
    put_file("/a/file.txt", 17)

    status = store.stat("/a/file.txt")

    assert status.length == 17
    assert status.is_file
    assert status.last_modified == datetime(2024, 3, 1, 12, 30, 45, tzinfo=UTC)
    assert status.path == "swift://data.cluster/a/file.txt"


def test_stat_root_is_a_directory(store) -> None:
    status = store.stat("/")
    assert status.is_directory
    assert status.length == 0
    assert status.path == "swift://data.cluster/"


def test_stat_directory_marker(store) -> None:
    store.create_directory("/dir")
    status = store.stat("/dir")
    assert status.is_directory
    assert status.fs_path == "/dir"


def test_stat_directory_implied_by_children(store, put_file) -> None:
    put_file("/implied/child.txt", 3)
    status = store.stat("/implied")
    assert status.is_directory
    assert status.last_modified is None


def test_stat_missing_raises_not_found(store) -> None:
    with pytest.raises(NotFoundError):
        store.stat("/missing")
    assert store.object_exists("/missing") is False


def test_stat_missing_container_raises_not_found() -> None:
    config = SwiftFSConfig(root_uri="swift://absent.cluster/")
    store = SwiftNativeStore(config, InMemorySwiftTransport())
    with pytest.raises(NotFoundError):
        store.stat("/")


def test_create_directory_writes_marker(store, transport) -> None:
    store.create_directory("/a/b")
    op = transport.mutations()[-1]
    assert op.name == "put"
    assert op.args == (ObjectAddress("data", "a/b/", trailing_slash=True), 0)
    assert transport.containers["data"]["a/b/"].content_type == "application/directory"


def test_create_root_directory_creates_container() -> None:
    transport = InMemorySwiftTransport()
    store = SwiftNativeStore(SwiftFSConfig(root_uri="swift://fresh.cluster/"), transport)

    store.create_directory("/")

    assert "fresh" in transport.containers
    assert store.list("/") == []


def test_list_root_of_populated_container(store, put_file) -> None:
    put_file("/a", 1)
    put_file("/b/c", 2)
    assert sorted(s.fs_path for s in store.list("/")) == ["/a", "/b/c"]


def test_list_missing_directory_raises(store) -> None:
    with pytest.raises(NotFoundError):
        store.list("/nope")


def test_delete_file(store, put_file) -> None:
    put_file("/a/file.txt", 4)
    assert store.delete("/a/file.txt") is True
    assert not store.object_exists("/a/file.txt")


def test_delete_missing_is_false(store) -> None:
    assert store.delete("/missing") is False
    assert store.delete("/missing", recursive=True) is False


def test_delete_empty_directory_removes_marker(store) -> None:
    store.create_directory("/empty")
    assert store.delete("/empty") is True
    assert not store.object_exists("/empty")


def test_delete_non_empty_directory_requires_recursive(store, transport, put_file) -> None:
    put_file("/d/f1", 1)
    transport.ops.clear()

    with pytest.raises(DirectoryNotEmptyError):
        store.delete("/d")
    assert transport.mutations() == []


def test_recursive_delete_removes_children_deepest_first(store, transport, put_file) -> None:
    store.create_directory("/d")
    store.create_directory("/d/sub")
    put_file("/d/f1", 1)
    put_file("/d/sub/f2", 1)
    transport.ops.clear()

    assert store.delete("/d", recursive=True) is True

    deleted = [op.args[0].key for op in transport.mutations()]
    assert deleted == ["d/sub/f2", "d/sub/", "d/f1", "d/"]
    assert transport.containers["data"] == {}


def test_recursive_delete_of_root_empties_container(store, transport, put_file) -> None:
    put_file("/a", 1)
    put_file("/b/c", 1)

    assert store.delete("/", recursive=True) is True

    assert "data" in transport.containers
    assert transport.containers["data"] == {}
    assert store.delete("/", recursive=True) is False


def test_delete_logs_event(store, put_file, caplog) -> None:
    caplog.set_level(logging.INFO)
    put_file("/a/file.txt", 4)
    store.delete("/a/file.txt")
    assert any(
        "swiftfs.delete" in r.getMessage() and "kind=file" in r.getMessage() for r in caplog.records
    )


def test_get_object_with_byte_range(store) -> None:
    store.upload_object("/r.bin", b"0123456789", 10)
    assert store.get_object("/r.bin").read() == b"0123456789"
    assert store.get_object("/r.bin", (2, 5)).read() == b"2345"


def test_get_missing_object_raises(store) -> None:
    with pytest.raises(NotFoundError):
        store.get_object("/missing")


def test_copy_keeps_source(store, put_file) -> None:
    put_file("/a", 3)
    assert store.copy("/a", "/b") is True
    assert store.stat("/a").length == 3
    assert store.stat("/b").length == 3


def test_resolve_locations_parses_url_list(store, put_file) -> None:
    put_file("/a/file.txt", 1)
    assert store.resolve_locations("/a/file.txt") == [
        "http://storage-1.local:6000/sda1/0/AUTH_test/data/a/file.txt"
    ]


@pytest.mark.parametrize("payload", [b"not json", b'{"url": "x"}', b"[1, 2]"])
def test_resolve_locations_rejects_malformed_payload(config, payload: bytes) -> None:
    transport = MagicMock()
    transport.object_location.return_value = payload
    store = SwiftNativeStore(config, transport)
    with pytest.raises(ProtocolError):
        store.resolve_locations("/a")


def test_stores_for_different_roots_coexist() -> None:
    transport = InMemorySwiftTransport(["one", "two"])
    first = SwiftNativeStore(SwiftFSConfig(root_uri="swift://one.cluster/"), transport)
    second = SwiftNativeStore(SwiftFSConfig(root_uri="swift://two.cluster/"), transport)

    first.upload_object("/f", b"1", 1)

    assert first.object_exists("/f")
    assert not second.object_exists("/f")
    assert second.stat("/").is_directory
