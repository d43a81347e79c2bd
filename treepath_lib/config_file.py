"""Persistent root accessor.

`ConfigFile` is a `JsonManager` whose tree can be saved to and loaded from
a storage backend. It starts from a deep copy of a default value; the
first load of a missing document writes that default out, then reads it
back.

Usage:

    config = ConfigFile("settings.json", {})
    await config.load()
    config.set("a", 2)
    config.get("c").set("d", [])
    config.get("c", "d").add(6)
    await config.save()
"""
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Optional, Union

import anyio.to_thread

from treepath_lib.errors import MalformedDataError
from treepath_lib.handle import JsonManager, PathHandle
from treepath_lib.options import ConfigFileSettings, JsonOptions
from treepath_lib.storage import (
    JSONSerializer,
    Serializer,
    SingleFileStorage,
    StorageBackend,
    create_serializer,
    serializer_for_path,
)
from treepath_lib.transformer import JsonTransformer
from treepath_lib.values import Route, Value, is_value

logger = logging.getLogger(__name__)

Locator = Union[None, str, Path, StorageBackend]


class ConfigFile(JsonManager):
    """A value tree bound to a persisted document.

    Parameters
    - locator: None (load/save do nothing), a file path, or a StorageBackend.
    - default: initial value; deep-copied, also used by `reset_data`.
    - readonly / fast_mode / options: as for `JsonManager`.
    - serializer: defaults to YAML for .yml/.yaml paths and JSON otherwise.
    - transformer: applied to every parsed document before it is adopted.
    """

    def __init__(
        self,
        locator: Locator,
        default: Value,
        readonly: bool = False,
        fast_mode: bool = False,
        options: Optional[JsonOptions] = None,
        serializer: Optional[Serializer] = None,
        transformer: Optional[JsonTransformer] = None,
        compact: bool = False,
    ) -> None:
        super().__init__(copy.deepcopy(default), readonly=readonly, fast_mode=fast_mode, options=options)
        self.default_config = copy.deepcopy(default)
        self.transformer = transformer
        self.compact = compact
        if locator is None or isinstance(locator, StorageBackend):
            self.backend: Optional[StorageBackend] = locator
            self.serializer = serializer or JSONSerializer()
        else:
            self.backend = SingleFileStorage(locator)
            self.serializer = serializer or serializer_for_path(locator)

    @classmethod
    def from_settings(
        cls,
        settings: ConfigFileSettings,
        default: Value,
        transformer: Optional[JsonTransformer] = None,
    ) -> "ConfigFile":
        serializer = None
        if settings.format:
            serializer = create_serializer(settings.format, indent=settings.indent)
        elif settings.path:
            serializer = serializer_for_path(settings.path, indent=settings.indent)
        return cls(
            settings.path,
            default,
            readonly=settings.readonly,
            fast_mode=settings.fast_mode,
            options=settings.json_options(),
            serializer=serializer,
            transformer=transformer,
            compact=settings.compact,
        )

    @property
    def file_path(self) -> Optional[Path]:
        if isinstance(self.backend, SingleFileStorage):
            return self.backend.file_path
        return None

    def _make_handle(self, route: Route, seed: Any) -> "ConfigPathHandle":
        return ConfigPathHandle(self, route, seed)

    def save_sync(self, compact: Optional[bool] = None) -> "ConfigFile":
        if self.backend is None:
            return self
        if compact is None:
            compact = self.compact
        self.backend.write(self.serializer.dump(self.data, compact))
        logger.debug("Saved config to %s", self.backend.describe())
        return self

    def load_sync(self) -> "ConfigFile":
        if self.backend is None:
            return self
        if not self.backend.exists():
            logger.info("Config %s not found, writing defaults", self.backend.describe())
            self.save_sync()
        self._adopt_document(self.backend.read())
        return self

    async def save(self, compact: Optional[bool] = None) -> "ConfigFile":
        if self.backend is None:
            return self
        return await anyio.to_thread.run_sync(self.save_sync, compact)

    async def load(self) -> "ConfigFile":
        if self.backend is None:
            return self
        return await anyio.to_thread.run_sync(self.load_sync)

    def _adopt_document(self, raw: bytes) -> None:
        # readonly files still load
        try:
            value = self.serializer.load(raw)
        except MalformedDataError as e:
            logger.error("Failed to parse config %s, keeping current data: %s", self.backend.describe(), e, exc_info=True)
            return
        if not is_value(value, self.options):
            logger.error("Config %s does not hold a JSON value tree, keeping current data", self.backend.describe())
            return
        if self.transformer is not None:
            value = self.transformer.transform(value)
            if not is_value(value, self.options):
                logger.error("Transformer for config %s did not return a JSON value tree, keeping current data", self.backend.describe())
                return
        self._replace_root(value)
        logger.debug("Loaded config from %s", self.backend.describe())

    def reset_data(self) -> "ConfigFile":
        self.data = copy.deepcopy(self.default_config)
        return self


class ConfigPathHandle(PathHandle):
    """Path handle whose persistence calls go to the owning `ConfigFile`."""

    @property
    def config_file(self) -> ConfigFile:
        return self.manager  # type: ignore[return-value]

    @property
    def file_path(self) -> Optional[Path]:
        return self.config_file.file_path

    def save_sync(self, compact: Optional[bool] = None) -> ConfigFile:
        return self.config_file.save_sync(compact)

    def load_sync(self) -> ConfigFile:
        return self.config_file.load_sync()

    async def save(self, compact: Optional[bool] = None) -> ConfigFile:
        return await self.config_file.save(compact)

    async def load(self) -> ConfigFile:
        return await self.config_file.load()

    def reset_data(self) -> ConfigFile:
        return self.config_file.reset_data()
