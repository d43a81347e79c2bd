"""Storage backend interface definitions.

A backend holds the serialized bytes of exactly one document. Config files
read and write through it; translating bytes to values is the job of a
serializer.
"""
from __future__ import annotations
from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Abstract single-document storage backend."""

    @abstractmethod
    def read(self) -> bytes:
        """Return the stored bytes.

        Should raise `KeyError` if nothing has been stored yet.
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Replace the stored bytes with `data`.

        Implementations should ensure atomic writes when possible.
        """

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a document is stored."""

    @abstractmethod
    def delete(self) -> None:
        """Delete the stored document. Raise `KeyError` if not found."""

    def describe(self) -> str:
        return type(self).__name__
