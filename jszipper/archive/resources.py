"""File-like entries that can be added to an archive."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO


class ArchiveResource(ABC):
    """A virtual file: existence, size, modification time and readable content."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable identifier used in log and error messages."""

    @property
    @abstractmethod
    def exists(self) -> bool: ...

    @property
    def is_file(self) -> bool:
        return self.exists

    @property
    @abstractmethod
    def size(self) -> int: ...

    @property
    @abstractmethod
    def last_modified(self) -> int:
        """Modification time in epoch milliseconds."""

    @abstractmethod
    def open(self) -> BinaryIO:
        """Return a fresh binary stream over the content."""

    def read_bytes(self) -> bytes:
        with self.open() as stream:
            return stream.read()


class FileResource(ArchiveResource):
    """Resource backed by a file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @property
    def is_file(self) -> bool:
        return self.path.is_file()

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    @property
    def last_modified(self) -> int:
        return int(self.path.stat().st_mtime * 1000)

    def open(self) -> BinaryIO:
        return self.path.open("rb")


class BytesResource(ArchiveResource):
    """Resource held entirely in memory; the content is fixed at construction."""

    def __init__(self, name: str, data: bytes, last_modified: int) -> None:
        self._name = name
        self._data = bytes(data)
        self._last_modified = last_modified

    @property
    def name(self) -> str:
        return self._name

    @property
    def exists(self) -> bool:
        return True

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def last_modified(self) -> int:
        return self._last_modified

    def open(self) -> BinaryIO:
        return io.BytesIO(self._data)


__all__ = ["ArchiveResource", "FileResource", "BytesResource"]
