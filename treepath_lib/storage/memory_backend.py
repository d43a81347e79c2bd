"""Simple memory-backed storage backend.

Keeps the serialized document in memory; handy for tests and for config
files that should never touch the disk.
"""
from threading import RLock
from typing import Optional

from .base import StorageBackend


class MemoryStorage(StorageBackend):
    def __init__(self, initial: Optional[bytes] = None):
        self._lock = RLock()
        self._data: Optional[bytes] = initial

    def read(self) -> bytes:
        with self._lock:
            if self._data is None:
                raise KeyError("memory")
            return self._data

    def write(self, data: bytes) -> None:
        with self._lock:
            self._data = bytes(data)

    def exists(self) -> bool:
        with self._lock:
            return self._data is not None

    def delete(self) -> None:
        with self._lock:
            if self._data is None:
                raise KeyError("memory")
            self._data = None
