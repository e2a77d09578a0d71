"""Test doubles for the object store."""

from swiftfs_core.testing.memory_transport import InMemorySwiftTransport, StoreOp

__all__ = ["InMemorySwiftTransport", "StoreOp"]
