from __future__ import annotations

import logging

import pytest

from swiftfs_core.io.uri import parse_filesystem_uri
from swiftfs_core.store.address import ObjectAddress
from swiftfs_core.store.multipart import manifest_value, part_address

FS = parse_filesystem_uri("swift://data.cluster/")


def test_part_keys_sit_under_the_logical_key() -> None:
    assert part_address(FS, "/big/file.bin", 1) == ObjectAddress("data", "big/file.bin/000001")
    assert part_address(FS, "/big/file.bin/", 12).key == "big/file.bin/000012"


def test_part_keys_sort_in_numeric_order() -> None:
    keys = [part_address(FS, "/f", n).key for n in (1, 2, 9, 10, 11)]
    assert keys == sorted(keys)


@pytest.mark.parametrize("part_number", [0, -3])
def test_part_numbers_start_at_one(part_number: int) -> None:
    with pytest.raises(ValueError):
        part_address(FS, "/f", part_number)


def test_manifest_value_has_no_leading_and_one_trailing_separator() -> None:
    assert manifest_value(ObjectAddress("data", "big/file.bin")) == "data/big/file.bin/"


def test_three_part_upload_reports_summed_length(store, transport) -> None:
    for number, size in enumerate([5, 7, 11], start=1):
        store.upload_part("/big/file.bin", number, b"p" * size, size)

    value = store.finalize_manifest("/big/file.bin")

    assert value == "data/big/file.bin/"
    assert store.stat("/big/file.bin").length == 23
    manifest_put = transport.mutations()[-1]
    assert manifest_put.name == "put"
    assert manifest_put.args == (ObjectAddress("data", "big/file.bin"), 0)
    assert store.get_object("/big/file.bin").read() == b"p" * 23


def test_manifest_is_sent_as_header(store, transport, monkeypatch) -> None:
    captured = {}
    original_put = transport.put

    def _put(address, data, length, headers=None):
        captured[address.key] = dict(headers or {})
        return original_put(address, data, length, headers)

    monkeypatch.setattr(transport, "put", _put)
    store.upload_part("/f", 1, b"abc", 3)
    store.finalize_manifest("/f")

    assert captured["f"] == {"X-Object-Manifest": "data/f/"}
    assert captured["f/000001"] == {}


def test_finalize_logs_event(store, caplog) -> None:
    caplog.set_level(logging.INFO)
    store.upload_part("/f", 1, b"abc", 3)
    store.finalize_manifest("/f")
    assert any(
        "swiftfs.finalize_manifest" in r.getMessage() and "manifest=data/f/" in r.getMessage()
        for r in caplog.records
    )


def test_root_cannot_be_a_multipart_target(store) -> None:
    with pytest.raises(ValueError):
        store.upload_part("/", 1, b"a", 1)
    with pytest.raises(ValueError):
        store.finalize_manifest("/")
