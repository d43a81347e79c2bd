"""Readonly, cache-free reader over a value.

`JsonReader` wraps a value (typically a detached subtree or freshly loaded
data) and offers the typed guards plus key-aware iteration. It never
writes, and every ``get`` resolves immediately, so it has nothing to keep
in sync.
"""
from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional, Tuple, TypeVar

from treepath_lib import navigator
from treepath_lib.errors import InvalidTypeError
from treepath_lib.guards import TypedReadMixin
from treepath_lib.options import DEFAULT_OPTIONS, JsonOptions
from treepath_lib.values import ABSENT, Key

T = TypeVar("T")


class JsonReader(TypedReadMixin):
    def __init__(self, data: Any, options: Optional[JsonOptions] = None) -> None:
        self.data = data
        self.options = options or DEFAULT_OPTIONS

    def get_value(self, *keys: Key) -> Any:
        return navigator.read_value(self.data, keys)

    def get(self, *keys: Key) -> "JsonReader":
        return JsonReader(navigator.read_value(self.data, keys), self.options)

    def __getitem__(self, key: Key) -> "JsonReader":
        return self.get(key)

    def has(self, *keys: Key) -> bool:
        return navigator.read_value(self.data, keys) is not ABSENT

    def exists(self) -> bool:
        return self.data is not ABSENT

    def _entries(self, require: Optional[type] = None) -> Iterator[Tuple[Key, "JsonReader"]]:
        data = self.data
        if not isinstance(data, (list, dict)) or (require is not None and not isinstance(data, require)):
            raise InvalidTypeError(data)
        items = enumerate(data) if isinstance(data, list) else data.items()
        for key, value in items:
            yield key, JsonReader(value, self.options)

    # map
    def map_entries(self, callback: Callable[[Key, "JsonReader"], T]) -> List[T]:
        return [callback(key, reader) for key, reader in self._entries()]

    def map_sequence(self, callback: Callable[[int, "JsonReader"], T]) -> List[T]:
        return [callback(key, reader) for key, reader in self._entries(list)]

    def map_mapping(self, callback: Callable[[str, "JsonReader"], T]) -> List[T]:
        return [callback(key, reader) for key, reader in self._entries(dict)]

    # find
    def find_entry(self, predicate: Callable[[Key, "JsonReader"], bool]) -> Optional[Tuple[Key, "JsonReader"]]:
        return self._find(predicate, None)

    def find_in_sequence(self, predicate: Callable[[int, "JsonReader"], bool]) -> Optional[Tuple[int, "JsonReader"]]:
        return self._find(predicate, list)

    def find_in_mapping(self, predicate: Callable[[str, "JsonReader"], bool]) -> Optional[Tuple[str, "JsonReader"]]:
        return self._find(predicate, dict)

    def _find(self, predicate, require):
        for key, reader in self._entries(require):
            if predicate(key, reader):
                return key, reader
        return None

    # filter
    def filter_entries(self, predicate: Callable[[Key, "JsonReader"], bool]) -> List[Tuple[Key, "JsonReader"]]:
        return [(key, reader) for key, reader in self._entries() if predicate(key, reader)]

    def filter_sequence(self, predicate: Callable[[int, "JsonReader"], bool]) -> List[Tuple[int, "JsonReader"]]:
        return [(key, reader) for key, reader in self._entries(list) if predicate(key, reader)]

    def filter_mapping(self, predicate: Callable[[str, "JsonReader"], bool]) -> List[Tuple[str, "JsonReader"]]:
        return [(key, reader) for key, reader in self._entries(dict) if predicate(key, reader)]

    # for each
    def for_each_entry(self, callback: Callable[[Key, "JsonReader"], None]) -> None:
        for key, reader in self._entries():
            callback(key, reader)

    def for_each_in_sequence(self, callback: Callable[[int, "JsonReader"], None]) -> None:
        for key, reader in self._entries(list):
            callback(key, reader)

    def for_each_in_mapping(self, callback: Callable[[str, "JsonReader"], None]) -> None:
        for key, reader in self._entries(dict):
            callback(key, reader)

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"JsonReader({self.data!r})"
