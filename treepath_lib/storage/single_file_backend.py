"""Storage backend that maps all operations to a single specific file.

Writes go to a temporary sibling file first, are fsynced, then renamed
over the target so a crash never leaves a half-written document behind.
"""
from __future__ import annotations
import os
from pathlib import Path
import logging

from .base import StorageBackend

logger = logging.getLogger(__name__)


class SingleFileStorage(StorageBackend):
    """Backend that targets a single on-disk file.

    Parameters
    - file_path: path to the file used for all reads/writes.
      If the file does not exist, `read` will raise `KeyError`.
    """

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)

    def _ensure_parent(self) -> None:
        # Ensure parent directory exists so writes succeed.
        if not self.file_path.parent.exists():
            os.makedirs(self.file_path.parent, exist_ok=True)

    def write(self, data: bytes) -> None:
        self._ensure_parent()
        path = self.file_path
        tmp = path.with_suffix(path.suffix + ".tmp")
        with open(tmp, "wb") as f:
            f.write(bytes(data))
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
        logger.debug("SingleFileStorage wrote %s (%d bytes)", path, len(data))

    def read(self) -> bytes:
        path = self.file_path
        if not path.exists():
            raise KeyError(str(path))
        with open(path, "rb") as f:
            data = f.read()
            logger.debug("SingleFileStorage loaded %s (%d bytes)", path, len(data))
            return data

    def exists(self) -> bool:
        return self.file_path.exists()

    def delete(self) -> None:
        if not self.file_path.exists():
            raise KeyError(str(self.file_path))
        self.file_path.unlink()

    def describe(self) -> str:
        return str(self.file_path)
