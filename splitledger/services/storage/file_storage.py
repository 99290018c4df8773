"""
File and In-Memory Snapshot Storage

FileSnapshotStorage overwrites snapshots wholesale: the document is
written to a temporary sibling file first and moved over the target
with Path.replace, so a failed write leaves the previous file intact.
The move is retried briefly while another process holds the target open.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from splitledger.errors import IOFailureError
from splitledger.services.storage.interface import SnapshotStorageInterface


class FileSnapshotStorage(SnapshotStorageInterface):
    """Snapshot documents as files on local disk."""

    def __init__(self, encoding: str = "utf-8", base_dir: Optional[Path] = None):
        """
        Args:
            encoding: Text encoding of the files
            base_dir: Directory relative locations resolve against
                      (the current directory when None)
        """
        self._encoding = encoding
        self._base_dir = base_dir

    def _resolve(self, location: str) -> Path:
        path = Path(location).expanduser()
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        return path

    def read_document(self, location: str) -> str:
        path = self._resolve(location)
        try:
            return path.read_text(encoding=self._encoding)
        except FileNotFoundError:
            raise IOFailureError(location, "no such file") from None
        except IsADirectoryError:
            raise IOFailureError(location, "is a directory") from None
        except UnicodeDecodeError as e:
            raise IOFailureError(location, f"not valid {self._encoding} text") from e
        except OSError as e:
            raise IOFailureError(location, e.strerror or str(e)) from e

    def write_document(self, location: str, document: str) -> None:
        path = self._resolve(location)
        directory = path.parent if str(path.parent) else Path(".")
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.",
                suffix=".tmp",
                dir=directory,
            )
            with os.fdopen(fd, "w", encoding=self._encoding) as handle:
                handle.write(document)
                if not document.endswith("\n"):
                    handle.write("\n")
            _replace(Path(tmp_name), path)
        except OSError as e:
            if tmp_name is not None and Path(tmp_name).exists():
                Path(tmp_name).unlink()
            raise IOFailureError(location, e.strerror or str(e)) from e

    def exists(self, location: str) -> bool:
        return self._resolve(location).is_file()


@retry(
    retry=retry_if_exception_type(PermissionError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, max=1),
    reraise=True,
)
def _replace(source: Path, target: Path) -> None:
    source.replace(target)


class InMemorySnapshotStorage(SnapshotStorageInterface):
    """Snapshot documents kept in a dict, keyed by location."""

    def __init__(self):
        self.documents: dict[str, str] = {}

    def read_document(self, location: str) -> str:
        try:
            return self.documents[location]
        except KeyError:
            raise IOFailureError(location, "no such document") from None

    def write_document(self, location: str, document: str) -> None:
        self.documents[location] = document

    def exists(self, location: str) -> bool:
        return location in self.documents
