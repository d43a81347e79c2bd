"""treepath: typed path accessors over JSON-shaped value trees."""

from .config_file import ConfigFile, ConfigPathHandle
from .errors import (
    BigIntegerNotAllowedError,
    EditReadonlyError,
    InvalidRouteError,
    InvalidTypeError,
    MalformedDataError,
    RouteNotFoundError,
    TreePathError,
)
from .handle import JsonManager, PathHandle
from .options import ConfigFileSettings, JsonOptions, load_settings
from .reader import JsonReader
from .transformer import FunctionTransformer, JsonTransformer, JsonTransformerChain
from .values import ABSENT, NOT_OBJECT, ValueKind, is_mapping, is_sequence, is_value, kind_of

__all__ = [
    "ABSENT",
    "NOT_OBJECT",
    "BigIntegerNotAllowedError",
    "ConfigFile",
    "ConfigFileSettings",
    "ConfigPathHandle",
    "EditReadonlyError",
    "FunctionTransformer",
    "InvalidRouteError",
    "InvalidTypeError",
    "JsonManager",
    "JsonOptions",
    "JsonReader",
    "JsonTransformer",
    "JsonTransformerChain",
    "MalformedDataError",
    "PathHandle",
    "RouteNotFoundError",
    "TreePathError",
    "ValueKind",
    "is_mapping",
    "is_sequence",
    "is_value",
    "kind_of",
    "load_settings",
]
