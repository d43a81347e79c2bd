"""Root accessor and path handles over a shared value tree.

A `JsonManager` owns the canonical root. ``manager.get("a", 0)`` returns a
`PathHandle`: a cursor holding a non-owning reference to the manager and an
immutable route. All handles of a manager read and write the same root, so
a write through one handle is visible to every handle that reads the tree.

Fast mode
---------
With ``fast_mode=True`` a handle caches the value at its route the first
time it is observed and serves later reads from that cache. A handle
derived with ``get`` remembers the cache of the handle it came from (when
that one had been read) and resolves its own cache by indexing into it, so
walking down a big tree never starts again from the root. A write through
a handle drops that handle's cache; the next read walks the root again.
Other handles are never touched: a handle that cached a scalar before
someone else overwrote it keeps returning the old scalar. Containers are
shared by reference, so cached mappings and sequences do see in-place
changes made elsewhere.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Iterator, List, Optional, Tuple

from treepath_lib import navigator
from treepath_lib.errors import EditReadonlyError, InvalidTypeError, RouteNotFoundError
from treepath_lib.guards import TypedReadMixin
from treepath_lib.options import DEFAULT_OPTIONS, JsonOptions
from treepath_lib.values import ABSENT, Key, Route, Value, ValueKind

logger = logging.getLogger(__name__)

# cache / seed not computed yet
_UNSET: Any = object()


class _TreeAccessor(TypedReadMixin):
    """Operations shared by the root accessor and its path handles."""

    route: Route

    @property
    def manager(self) -> "JsonManager":
        raise NotImplementedError

    @property
    def data(self) -> Value:
        return self.manager.data

    @property
    def readonly(self) -> bool:
        return self.manager.readonly

    @property
    def fast_mode(self) -> bool:
        return self.manager.fast_mode

    @property
    def options(self) -> JsonOptions:
        return self.manager.options

    # -- hooks -------------------------------------------------------------

    def _seed_for(self, keys: Tuple[Key, ...]) -> Any:
        """Seed handed to a child handle created with `keys` appended."""
        return _UNSET

    def _invalidate(self) -> None:
        pass

    # -- navigation --------------------------------------------------------

    def get(self, *keys: Key) -> "PathHandle":
        route = self.route + keys
        seed = self._seed_for(keys) if self.fast_mode else _UNSET
        return self.manager._make_handle(route, seed)

    def __getitem__(self, key: Key) -> "PathHandle":
        return self.get(key)

    def get_value(self, *keys: Key) -> Any:
        return navigator.read_value(self.data, self.route + keys)

    def has(self, *keys: Key) -> bool:
        return navigator.read_value(self.get_value(), keys) is not ABSENT

    def __contains__(self, key: Key) -> bool:
        return self.has(key)

    def exists(self) -> bool:
        return self.get_value() is not ABSENT

    # -- mutation ----------------------------------------------------------

    def _check_writable(self) -> None:
        if self.readonly:
            raise EditReadonlyError()

    def _adopt(self, new_root: Value, changed: bool, op: str) -> None:
        self.manager._replace_root(new_root)
        self._invalidate()
        if changed:
            logger.debug("%s at %r changed the tree structure", op, list(self.route))

    def set(self, key: Key, value: Value):
        self._check_writable()
        new_root, changed = navigator.write_value(self.data, self.route + (key,), value)
        self._adopt(new_root, changed, "set")
        return self

    def __setitem__(self, key: Key, value: Value) -> None:
        self.set(key, value)

    def set_here(self, value: Value):
        """Write `value` at this accessor's own route."""
        self._check_writable()
        new_root, changed = navigator.write_value(self.data, self.route, value)
        self._adopt(new_root, changed, "set_here")
        return self

    def add(self, value: Value):
        """Append `value` to the sequence here; anything else is replaced by [] first."""
        self._check_writable()
        new_root, changed = navigator.append_value(self.data, self.route, value)
        self._adopt(new_root, changed, "add")
        return self

    def create_path(self, last: Optional[ValueKind] = None) -> bool:
        """Create the containers leading to this route; returns whether anything changed."""
        self._check_writable()
        new_root, changed = navigator.create_path(self.data, self.route, last)
        self._adopt(new_root, changed, "create_path")
        return changed

    def delete(self, key: Key) -> bool:
        self._check_writable()
        removed = navigator.delete_value(self.data, self.route + (key,))
        self._invalidate()
        return removed

    def __delitem__(self, key: Key) -> None:
        if not self.delete(key):
            raise RouteNotFoundError(self.route + (key,))

    # -- structure ---------------------------------------------------------

    def keys(self) -> List[Key]:
        value = self.get_value()
        if isinstance(value, list):
            return list(range(len(value)))
        if isinstance(value, dict):
            return list(value.keys())
        raise InvalidTypeError(value)

    def _children(self) -> List["PathHandle"]:
        value = self.get_value()
        keys = self.keys()
        return [
            self.manager._make_handle(
                self.route + (key,),
                (value[key], ()) if self.fast_mode else _UNSET,
            )
            for key in keys
        ]

    def __iter__(self) -> Iterator["PathHandle"]:
        return iter(self._children())

    def map(self, callback: Callable[["PathHandle"], Any]) -> List[Any]:
        return [callback(child) for child in self._children()]

    def find(self, predicate: Callable[["PathHandle"], bool]) -> Optional["PathHandle"]:
        for child in self._children():
            if predicate(child):
                return child
        return None

    def filter(self, predicate: Callable[["PathHandle"], bool]) -> List["PathHandle"]:
        return [child for child in self._children() if predicate(child)]

    def for_each(self, callback: Callable[["PathHandle"], None]) -> None:
        for child in self._children():
            callback(child)

    def as_mapping(self):
        value = self.get_value()
        if not isinstance(value, dict):
            raise InvalidTypeError(value)
        return self

    def as_sequence(self):
        value = self.get_value()
        if not isinstance(value, list):
            raise InvalidTypeError(value)
        return self

    def reset_path(self) -> "PathHandle":
        """Return a handle on the same root with an empty route."""
        return self.manager._make_handle((), _UNSET)

    def detach(self) -> "JsonManager":
        """Return a new root accessor over a deep copy of the value here."""
        value = self.get_value()
        if value is ABSENT:
            raise RouteNotFoundError(self.route)
        return JsonManager(copy.deepcopy(value), readonly=self.readonly, fast_mode=self.fast_mode, options=self.options)

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"{type(self).__name__}(route={list(self.route)!r}, value={self.get_value()!r})"


class JsonManager(_TreeAccessor):
    """Root accessor owning a value tree.

    Parameters
    - data: the root value; it is used as-is, not copied.
    - readonly: forbid every mutation through this manager and its handles.
    - fast_mode: cache resolved values on handles (see module docs).
    - options: capability flags, e.g. big-integer support.
    """

    def __init__(self, data: Value, readonly: bool = False, fast_mode: bool = False, options: Optional[JsonOptions] = None) -> None:
        self._data = data
        self._readonly = readonly
        self._fast_mode = fast_mode
        self._options = options or DEFAULT_OPTIONS
        self.route: Route = ()

    @property
    def manager(self) -> "JsonManager":
        return self

    @property
    def data(self) -> Value:
        return self._data

    @data.setter
    def data(self, value: Value) -> None:
        self._check_writable()
        self._replace_root(value)

    @property
    def readonly(self) -> bool:
        return self._readonly

    @property
    def fast_mode(self) -> bool:
        return self._fast_mode

    @property
    def options(self) -> JsonOptions:
        return self._options

    def _replace_root(self, value: Value) -> None:
        self._data = value

    def _make_handle(self, route: Route, seed: Any) -> "PathHandle":
        return PathHandle(self, route, seed)

    def reset_path(self) -> "PathHandle":
        return self._make_handle((), _UNSET)


class PathHandle(_TreeAccessor):
    """Cursor over a manager's tree at a fixed route.

    `seed` is ``(base, keys)``: in fast mode the first read resolves `keys`
    inside `base` instead of walking the manager's root.
    """

    def __init__(self, manager: JsonManager, route: Route, seed: Any = _UNSET) -> None:
        self._manager = manager
        self.route = tuple(route)
        self._seed = seed
        self._cache: Any = _UNSET

    @property
    def manager(self) -> JsonManager:
        return self._manager

    def _cached_value(self) -> Any:
        if self._cache is _UNSET:
            if self._seed is not _UNSET:
                base, keys = self._seed
                self._cache = navigator.read_value(base, keys)
            else:
                self._cache = navigator.read_value(self.data, self.route)
            self._seed = _UNSET
        return self._cache

    def _seed_for(self, keys: Tuple[Key, ...]) -> Any:
        if self._cache is not _UNSET:
            return (self._cache, keys)
        if self._seed is not _UNSET:
            base, seed_keys = self._seed
            return (base, seed_keys + keys)
        return _UNSET

    def _invalidate(self) -> None:
        self._cache = _UNSET
        self._seed = _UNSET

    def get_value(self, *keys: Key) -> Any:
        if not self.fast_mode:
            return navigator.read_value(self.data, self.route + keys)
        return navigator.read_value(self._cached_value(), keys)
