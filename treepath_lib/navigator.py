"""Pure navigation and path creation over value trees.

Every function takes the root explicitly and keeps no state. Routes are
sequences of keys: an ``int`` indexes a sequence, a ``str`` indexes a
mapping. Reads never raise on a missing or mismatched step, they return
`ABSENT`. Writes create missing containers on the way down and replace a
node only when its kind conflicts with the key used on it; whatever that
node held is discarded.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

from treepath_lib.errors import InvalidRouteError
from treepath_lib.values import ABSENT, NOT_OBJECT, Key, Value, ValueKind, is_container, is_key

logger = logging.getLogger(__name__)


def _container_kind(node: Any) -> Optional[ValueKind]:
    if isinstance(node, list):
        return ValueKind.SEQUENCE
    if isinstance(node, dict):
        return ValueKind.MAPPING
    return None


def _key_kind(key: Key) -> ValueKind:
    return ValueKind.SEQUENCE if isinstance(key, int) else ValueKind.MAPPING


def _assign(container: Any, key: Key, value: Any) -> None:
    if isinstance(container, list) and key >= len(container):
        # unset slots before the new index serialize as null
        container.extend([None] * (key - len(container) + 1))
    container[key] = value


def step(node: Any, key: Key) -> Any:
    """Index one level down from `node`.

    Returns ABSENT when `node` is not a container, when the key kind does
    not match the container kind, or when the entry does not exist.
    """
    if not is_key(key):
        return ABSENT
    kind = _container_kind(node)
    if kind is None or kind is not _key_kind(key):
        return ABSENT
    if kind is ValueKind.SEQUENCE:
        return node[key] if key < len(node) else ABSENT
    return node.get(key, ABSENT)


def resolve_container_at_route(root: Any, route: Sequence[Key]) -> Any:
    """Walk `route` from `root` and return the container found at its end.

    Returns ABSENT when the walk cannot be completed (root or an
    intermediate node is not a container, an entry is missing, a key kind
    does not match) and NOT_OBJECT when the final node exists but is not a
    container.
    """
    if not is_container(root):
        return ABSENT
    node = root
    for key in route:
        node = step(node, key)
        if node is ABSENT:
            return ABSENT
    return node if is_container(node) else NOT_OBJECT


def read_value(root: Any, route: Sequence[Key]) -> Any:
    """Return the value at `route`, or ABSENT. An empty route returns `root`."""
    if not route:
        return root
    parent = resolve_container_at_route(root, route[:-1])
    if parent is ABSENT or parent is NOT_OBJECT:
        return ABSENT
    return step(parent, route[-1])


def check_route(route: Sequence[Key]) -> Tuple[Key, ...]:
    route = tuple(route)
    for key in route:
        if not is_key(key):
            raise InvalidRouteError(key)
    return route


def create_path(root: Any, route: Sequence[Key], last: Optional[ValueKind] = None) -> Tuple[Value, bool]:
    """Make every container along `route` exist.

    A sequence is created (or substituted) where the next key is an int, a
    mapping where it is a str. At the end of the route `last` forces a
    container of that kind, replacing anything else found there; with
    `last=None` an existing node is kept and a missing one becomes null.

    Returns ``(new_root, changed)``. The root is modified in place unless it
    had to be replaced, so callers must always adopt `new_root`.
    """
    route = check_route(route)
    changed = False

    def mark(node: Any, kind: ValueKind, depth: int) -> None:
        nonlocal changed
        changed = True
        if node is not ABSENT and node is not None:
            logger.debug("Replacing %s at depth %d with a new %s", type(node).__name__, depth, kind.value)

    def ensure(node: Any, depth: int) -> Any:
        if depth == len(route):
            if last is None:
                if node is ABSENT:
                    mark(node, ValueKind.NULL, depth)
                    return None
                return node
            if _container_kind(node) is last:
                return node
            mark(node, last, depth)
            return [] if last is ValueKind.SEQUENCE else {}

        key = route[depth]
        kind = _key_kind(key)
        if _container_kind(node) is not kind:
            mark(node, kind, depth)
            node = [] if kind is ValueKind.SEQUENCE else {}

        _assign(node, key, ensure(step(node, key), depth + 1))
        return node

    new_root = ensure(root, 0)
    return new_root, changed


def write_value(root: Any, route: Sequence[Key], value: Value) -> Tuple[Value, bool]:
    """Set `value` at `route`, creating the path first.

    An empty route replaces the root. Returns ``(new_root, changed)`` where
    `changed` tells whether containers were created or replaced on the way
    (replacing the whole root counts as a change).
    """
    route = check_route(route)
    if not route:
        return value, True
    new_root, changed = create_path(root, route[:-1], last=_key_kind(route[-1]))
    _assign(resolve_container_at_route(new_root, route[:-1]), route[-1], value)
    return new_root, changed


def ensure_sequence(root: Any, route: Sequence[Key]) -> Tuple[Value, bool]:
    """Make the node at `route` a sequence, replacing anything else with []."""
    current = read_value(root, route)
    if isinstance(current, list):
        return root, False
    if current is not ABSENT:
        logger.debug("Discarding %s at %r to start a sequence", type(current).__name__, list(route))
    new_root, _ = write_value(root, route, [])
    return new_root, True


def append_value(root: Any, route: Sequence[Key], value: Value) -> Tuple[Value, bool]:
    """Append `value` to the sequence at `route`, creating the sequence if needed."""
    new_root, changed = ensure_sequence(root, route)
    read_value(new_root, route).append(value)
    return new_root, changed


def delete_value(root: Any, route: Sequence[Key]) -> bool:
    """Remove the entry at `route`. Sequence items after it shift down.

    Returns False when there is nothing to delete. The root itself (empty
    route) cannot be deleted.
    """
    if not route:
        raise InvalidRouteError(())
    parent = resolve_container_at_route(root, route[:-1])
    if parent is ABSENT or parent is NOT_OBJECT:
        return False
    key = route[-1]
    if step(parent, key) is ABSENT:
        return False
    if isinstance(parent, list):
        parent.pop(key)
    else:
        del parent[key]
    return True
