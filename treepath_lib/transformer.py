"""Value transformers applied to freshly loaded trees.

A `ConfigFile` can be given a transformer; it runs on every successfully
parsed document before the document replaces the in-memory tree. Chains
apply their members in order, which makes them a natural fit for upgrade
steps of a persisted format.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from treepath_lib.options import DEFAULT_OPTIONS, JsonOptions
from treepath_lib.values import Value


class JsonTransformer(ABC):
    def __init__(self, options: Optional[JsonOptions] = None) -> None:
        self.options = options or DEFAULT_OPTIONS

    @abstractmethod
    def transform(self, value: Value) -> Value:
        """Return the transformed value. May modify `value` in place."""


class FunctionTransformer(JsonTransformer):
    """Adapts a plain callable to the transformer interface."""

    def __init__(self, func: Callable[[Value], Value], options: Optional[JsonOptions] = None) -> None:
        super().__init__(options)
        self.func = func

    def transform(self, value: Value) -> Value:
        return self.func(value)


class JsonTransformerChain(JsonTransformer):
    def __init__(self, transformers: Sequence[JsonTransformer], options: Optional[JsonOptions] = None) -> None:
        super().__init__(options)
        self.transformers = list(transformers)

    def transform(self, value: Value) -> Value:
        for transformer in self.transformers:
            value = transformer.transform(value)
        return value
