"""Services package."""

from splitledger.services.storage import (
    FileSnapshotStorage,
    InMemorySnapshotStorage,
    SnapshotStorageInterface,
)

__all__ = [
    # Storage services
    "FileSnapshotStorage",
    "InMemorySnapshotStorage",
    "SnapshotStorageInterface",
]
