"""Value model for JSON-shaped trees.

A value is one of: number, boolean, string, null, sequence (``list``) or
mapping (``dict`` with ``str`` keys), plus an optional big-integer kind
enabled through `JsonOptions`. Values coming from untyped sources are
validated recursively with `is_value` before they are trusted.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from treepath_lib.options import DEFAULT_OPTIONS, JsonOptions

# Largest integer a JSON (double precision) number carries exactly.
MAX_SAFE_INTEGER = 2 ** 53 - 1

Value = Union[None, bool, int, float, str, List["Value"], Dict[str, "Value"]]
Key = Union[str, int]
Route = Tuple[Key, ...]


class Sentinel(Enum):
    """Navigation results that are not values."""

    ABSENT = "absent"
    NOT_OBJECT = "not_object"

    def __repr__(self) -> str:
        return self.name


ABSENT = Sentinel.ABSENT
NOT_OBJECT = Sentinel.NOT_OBJECT


class ValueKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    BIG_INTEGER = "big_integer"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


CONTAINER_KINDS = frozenset((ValueKind.SEQUENCE, ValueKind.MAPPING))


def kind_of(value: Any, options: Optional[JsonOptions] = None) -> Optional[ValueKind]:
    """Classify the top level of `value`; None when it is not a value kind.

    Children of containers are not inspected, see `is_value` for that.
    """
    opts = options or DEFAULT_OPTIONS
    if value is None:
        return ValueKind.NULL
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        # without the big-integer kind every int is a plain number
        if opts.allow_big_integer and not -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
            return ValueKind.BIG_INTEGER
        return ValueKind.NUMBER
    if isinstance(value, float):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    return None


def kind_name(value: Any) -> str:
    if value is ABSENT:
        return "absent"
    kind = kind_of(value, JsonOptions(allow_big_integer=True))
    return kind.value if kind is not None else type(value).__name__


def is_value(value: Any, options: Optional[JsonOptions] = None) -> bool:
    kind = kind_of(value, options)
    if kind is None:
        return False
    if kind is ValueKind.SEQUENCE:
        return all(is_value(v, options) for v in value)
    if kind is ValueKind.MAPPING:
        return all(isinstance(k, str) and is_value(v, options) for k, v in value.items())
    return True


def is_mapping(value: Any, options: Optional[JsonOptions] = None) -> bool:
    return isinstance(value, dict) and is_value(value, options)


def is_sequence(value: Any, options: Optional[JsonOptions] = None) -> bool:
    return isinstance(value, list) and is_value(value, options)


def is_container(value: Any) -> bool:
    """Shallow test: a list or dict that can hold addressable children."""
    return isinstance(value, (list, dict))


def is_number(value: Any, options: Optional[JsonOptions] = None) -> bool:
    return kind_of(value, options) is ValueKind.NUMBER


def is_big_integer(value: Any) -> bool:
    """True for any Python int that is not a bool.

    Python ints are arbitrary precision, so a big-integer read narrows to
    ``int`` whatever the magnitude.
    """
    return isinstance(value, int) and not isinstance(value, bool)


def is_key(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    return isinstance(key, str)
