"""Storage abstraction package: byte backends plus value serializers."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from .base import StorageBackend
from .memory_backend import MemoryStorage
from .serializer import EncryptedSerializer, JSONSerializer, Serializer, YAMLSerializer
from .single_file_backend import SingleFileStorage

__all__ = [
    "StorageBackend",
    "SingleFileStorage",
    "MemoryStorage",
    "Serializer",
    "JSONSerializer",
    "YAMLSerializer",
    "EncryptedSerializer",
    "create_backend",
    "create_serializer",
    "serializer_for_path",
]


def create_serializer(name: str = "json", **options: Any) -> Serializer:
    """Build a serializer by name: 'json', 'yaml' or 'encrypted'.

    For 'encrypted' pass `key` or `password`; `base` selects the inner
    serializer ('json' by default).
    """
    name = name.lower()
    indent = options.get("indent", 4)
    if name == "json":
        return JSONSerializer(indent=indent)
    if name in ("yaml", "yml"):
        return YAMLSerializer(indent=indent)
    if name == "encrypted":
        base = create_serializer(options.get("base", "json"), indent=indent)
        return EncryptedSerializer(
            key=options.get("key"),
            password=options.get("password"),
            base_serializer=base,
        )
    raise ValueError(f"unknown serializer {name!r}")


def create_backend(name: str = "file", **options: Any) -> StorageBackend:
    """Build a backend by name: 'file' (requires `file_path`) or 'memory'."""
    name = name.lower()
    if name == "file":
        fp = options.get("file_path") or options.get("path")
        if not fp:
            raise ValueError("file backend requires `file_path`")
        return SingleFileStorage(fp)
    if name == "memory":
        return MemoryStorage(options.get("initial"))
    raise ValueError(f"unknown backend {name!r}")


def serializer_for_path(path: str | Path, indent: int = 4) -> Serializer:
    """Pick a serializer from the file extension: YAML for .yml/.yaml, JSON otherwise."""
    suffix = Path(path).suffix.lower()
    if suffix in (".yml", ".yaml"):
        return YAMLSerializer(indent=indent)
    return JSONSerializer(indent=indent)
