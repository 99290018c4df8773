"""
Storage Services Package

Provides the abstract snapshot storage interface and its file and
in-memory implementations.
"""

from splitledger.services.storage.interface import SnapshotStorageInterface
from splitledger.services.storage.file_storage import (
    FileSnapshotStorage,
    InMemorySnapshotStorage,
)

__all__ = [
    # Interfaces
    "SnapshotStorageInterface",
    # Implementations
    "FileSnapshotStorage",
    "InMemorySnapshotStorage",
]
