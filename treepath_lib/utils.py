"""Small helpers around value trees and the files that hold them."""
from __future__ import annotations

import copy
import logging
import os
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_pure_mapping(value: Any) -> bool:
    """True for plain ``dict`` instances (not subclasses such as OrderedDict)."""
    return type(value) is dict


def deep_copy(value: T) -> T:
    return copy.deepcopy(value)


def bind_options(defaults: Mapping[str, Any], options: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge `options` over `defaults` recursively.

    For overlapping keys: recurse when both sides are plain mappings,
    otherwise the value from `options` wins. Keys only in `options` are
    added. Neither input is modified.
    """
    result = copy.deepcopy(dict(defaults))
    for key, value in options.items():
        current = result.get(key)
        if key in result and is_pure_mapping(current) and is_pure_mapping(value):
            result[key] = bind_options(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def generate_uuid() -> str:
    """Random UUID version 4 as a string."""
    return str(uuid.uuid4())


def separate_by_value(items: Iterable[T], key_func: Callable[[T], str]) -> Dict[str, List[T]]:
    """Group `items` by the string `key_func` returns, keeping input order."""
    result: Dict[str, List[T]] = {}
    for item in items:
        result.setdefault(key_func(item), []).append(item)
    return result


def rename_keys(mapping: Mapping[str, Any], new_keys: Mapping[str, str]) -> Dict[str, Any]:
    """Return a copy of `mapping` with keys renamed per `new_keys`; order is kept."""
    return {new_keys.get(key) or key: value for key, value in mapping.items()}


def move_file(file_from: str | Path, file_to: str | Path) -> None:
    os.replace(file_from, file_to)


def move(dir_from: str | Path, dir_to: str | Path) -> None:
    """Move the contents of `dir_from` into `dir_to`, merging directories.

    Existing files in `dir_to` are overwritten. Emptied source
    subdirectories are removed; `dir_from` itself is left in place.
    """
    src = Path(dir_from)
    dst = Path(dir_to)
    for entry in src.iterdir():
        target = dst / entry.name
        if entry.is_dir() and not entry.is_symlink():
            target.mkdir(exist_ok=True)
            move(entry, target)
            entry.rmdir()
        else:
            move_file(entry, target)
    logger.debug("Moved contents of %s to %s", src, dst)
