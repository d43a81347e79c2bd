"""Public error types for treepath."""

from __future__ import annotations

from typing import Any

from treepath_lib.values import kind_name


class TreePathError(Exception):
    """Base class for all treepath errors."""


class EditReadonlyError(TreePathError):
    """Raised when attempting to mutate a readonly root or one of its handles."""

    def __init__(self, message: str = "cannot edit a readonly value tree") -> None:
        super().__init__(message)


class InvalidTypeError(TreePathError, TypeError):
    """Raised when a value read through a typed guard has the wrong kind.

    The offending value and its runtime kind are kept for diagnostics.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        self.kind = kind_name(value)
        shown = f'"{value}"' if isinstance(value, str) else repr(value)
        super().__init__(f"Unexpected value {shown} (type: {self.kind}) detected.")


class BigIntegerNotAllowedError(TreePathError):
    """Raised by big-integer guards when the options do not enable big integers."""

    def __init__(self) -> None:
        super().__init__("big integers are not allowed by these JsonOptions")


class RouteNotFoundError(TreePathError, KeyError):
    """Raised when an operation needs a value but the route resolves to nothing."""

    def __init__(self, route: tuple) -> None:
        self.route = route
        super().__init__(f"no value at route {list(route)!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidRouteError(TreePathError, ValueError):
    """Raised when a write path contains a key that is neither str nor a non-negative int."""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"invalid route key {key!r}: expected str or non-negative int")


class MalformedDataError(TreePathError, ValueError):
    """Raised by serializers when persisted bytes cannot be parsed into a value."""
