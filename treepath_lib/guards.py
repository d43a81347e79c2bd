"""Typed read guards.

`TypedReadMixin` narrows the result of ``get_value(*keys)`` to one value
kind and raises `InvalidTypeError` otherwise. Nothing is coerced: ``True``
is not a number and ``"5"`` is not a number. The ``*_with_default``
variants only cover absence; a present value of the wrong kind still
raises.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from treepath_lib.errors import BigIntegerNotAllowedError, InvalidTypeError
from treepath_lib.options import JsonOptions
from treepath_lib.values import ABSENT, Key, Value, is_big_integer, is_mapping, is_number, is_sequence

T = TypeVar("T")


def check_value(value: Any, predicate: Callable[[Any], bool], nullable: bool = False) -> Any:
    if nullable and value is None:
        return value
    if value is ABSENT or not predicate(value):
        raise InvalidTypeError(value)
    return value


def check_value_with_default(value: Any, predicate: Callable[[Any], bool], default: Any, nullable: bool = False) -> Any:
    if value is ABSENT:
        return default
    return check_value(value, predicate, nullable)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


class TypedReadMixin:
    """Adds ``get_as_*`` guards to anything with ``get_value`` and ``options``."""

    options: JsonOptions

    def get_value(self, *keys: Key) -> Any:  # pragma: no cover - provided by subclasses
        raise NotImplementedError

    def get_as(self, *keys: Key) -> Any:
        """Untyped read; same as ``get_value``."""
        return self.get_value(*keys)

    def _require_big_integer(self) -> None:
        if not self.options.allow_big_integer:
            raise BigIntegerNotAllowedError()

    def _is_mapping(self, value: Any) -> bool:
        return is_mapping(value, self.options)

    def _is_sequence(self, value: Any) -> bool:
        return is_sequence(value, self.options)

    def _is_number(self, value: Any) -> bool:
        return is_number(value, self.options)

    def _is_number_or_big_integer(self, value: Any) -> bool:
        return is_number(value, self.options) or is_big_integer(value)

    # number
    def get_as_number(self, *keys: Key) -> Union[int, float]:
        return check_value(self.get_value(*keys), self._is_number)

    def get_as_nullable_number(self, *keys: Key) -> Optional[Union[int, float]]:
        return check_value(self.get_value(*keys), self._is_number, nullable=True)

    def get_as_number_with_default(self, default: T, *keys: Key) -> Union[int, float, T]:
        return check_value_with_default(self.get_value(*keys), self._is_number, default)

    def get_as_nullable_number_with_default(self, default: T, *keys: Key) -> Union[int, float, None, T]:
        return check_value_with_default(self.get_value(*keys), self._is_number, default, nullable=True)

    # string
    def get_as_string(self, *keys: Key) -> str:
        return check_value(self.get_value(*keys), _is_string)

    def get_as_nullable_string(self, *keys: Key) -> Optional[str]:
        return check_value(self.get_value(*keys), _is_string, nullable=True)

    def get_as_string_with_default(self, default: T, *keys: Key) -> Union[str, T]:
        return check_value_with_default(self.get_value(*keys), _is_string, default)

    def get_as_nullable_string_with_default(self, default: T, *keys: Key) -> Union[str, None, T]:
        return check_value_with_default(self.get_value(*keys), _is_string, default, nullable=True)

    # boolean
    def get_as_boolean(self, *keys: Key) -> bool:
        return check_value(self.get_value(*keys), _is_boolean)

    def get_as_nullable_boolean(self, *keys: Key) -> Optional[bool]:
        return check_value(self.get_value(*keys), _is_boolean, nullable=True)

    def get_as_boolean_with_default(self, default: T, *keys: Key) -> Union[bool, T]:
        return check_value_with_default(self.get_value(*keys), _is_boolean, default)

    def get_as_nullable_boolean_with_default(self, default: T, *keys: Key) -> Union[bool, None, T]:
        return check_value_with_default(self.get_value(*keys), _is_boolean, default, nullable=True)

    # big integer
    def get_as_big_integer(self, *keys: Key) -> int:
        self._require_big_integer()
        return check_value(self.get_value(*keys), is_big_integer)

    def get_as_nullable_big_integer(self, *keys: Key) -> Optional[int]:
        self._require_big_integer()
        return check_value(self.get_value(*keys), is_big_integer, nullable=True)

    def get_as_big_integer_with_default(self, default: T, *keys: Key) -> Union[int, T]:
        self._require_big_integer()
        return check_value_with_default(self.get_value(*keys), is_big_integer, default)

    def get_as_nullable_big_integer_with_default(self, default: T, *keys: Key) -> Union[int, None, T]:
        self._require_big_integer()
        return check_value_with_default(self.get_value(*keys), is_big_integer, default, nullable=True)

    # number or big integer
    def get_as_number_or_big_integer(self, *keys: Key) -> Union[int, float]:
        self._require_big_integer()
        return check_value(self.get_value(*keys), self._is_number_or_big_integer)

    def get_as_nullable_number_or_big_integer(self, *keys: Key) -> Optional[Union[int, float]]:
        self._require_big_integer()
        return check_value(self.get_value(*keys), self._is_number_or_big_integer, nullable=True)

    def get_as_number_or_big_integer_with_default(self, default: T, *keys: Key) -> Union[int, float, T]:
        self._require_big_integer()
        return check_value_with_default(self.get_value(*keys), self._is_number_or_big_integer, default)

    def get_as_nullable_number_or_big_integer_with_default(self, default: T, *keys: Key) -> Union[int, float, None, T]:
        self._require_big_integer()
        return check_value_with_default(self.get_value(*keys), self._is_number_or_big_integer, default, nullable=True)

    # mapping
    def get_as_mapping(self, *keys: Key) -> Dict[str, Value]:
        return check_value(self.get_value(*keys), self._is_mapping)

    def get_as_nullable_mapping(self, *keys: Key) -> Optional[Dict[str, Value]]:
        return check_value(self.get_value(*keys), self._is_mapping, nullable=True)

    def get_as_mapping_with_default(self, default: T, *keys: Key) -> Union[Dict[str, Value], T]:
        return check_value_with_default(self.get_value(*keys), self._is_mapping, default)

    def get_as_nullable_mapping_with_default(self, default: T, *keys: Key) -> Union[Dict[str, Value], None, T]:
        return check_value_with_default(self.get_value(*keys), self._is_mapping, default, nullable=True)

    # sequence
    def get_as_sequence(self, *keys: Key) -> List[Value]:
        return check_value(self.get_value(*keys), self._is_sequence)

    def get_as_nullable_sequence(self, *keys: Key) -> Optional[List[Value]]:
        return check_value(self.get_value(*keys), self._is_sequence, nullable=True)

    def get_as_sequence_with_default(self, default: T, *keys: Key) -> Union[List[Value], T]:
        return check_value_with_default(self.get_value(*keys), self._is_sequence, default)

    def get_as_nullable_sequence_with_default(self, default: T, *keys: Key) -> Union[List[Value], None, T]:
        return check_value_with_default(self.get_value(*keys), self._is_sequence, default, nullable=True)
