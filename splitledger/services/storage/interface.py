"""
Abstract Snapshot Storage Interface

The ledger persists exactly one thing: a snapshot document. Storage
only moves that text in and out; encoding and validation belong to
the SnapshotCodec.

Implementations:
1. FileSnapshotStorage - files on local disk (the console)
2. InMemorySnapshotStorage - a dict (tests, the Streamlit front end)
"""

from abc import ABC, abstractmethod


class SnapshotStorageInterface(ABC):
    """
    Abstract interface for snapshot document storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def read_document(self, location: str) -> str:
        """
        Read a whole snapshot document.

        Args:
            location: Where the document lives (a path for files)

        Returns:
            The document text

        Raises:
            IOFailureError: If the document is absent or unreadable
        """
        pass

    @abstractmethod
    def write_document(self, location: str, document: str) -> None:
        """
        Write a snapshot document, replacing whatever was there.

        Args:
            location: Where to write the document
            document: The full document text

        Raises:
            IOFailureError: If the document cannot be written
        """
        pass

    @abstractmethod
    def exists(self, location: str) -> bool:
        """Check whether a document exists at location."""
        pass
