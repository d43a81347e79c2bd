"""Option and settings models.

`JsonOptions` carries the capability flags shared by every accessor over a
value tree. `ConfigFileSettings` describes a persisted config file and can be
read from a YAML settings file with `load_settings`.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class JsonOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Enables the arbitrary-precision integer value kind (ints outside the
    # +/-(2**53 - 1) range a JSON double can carry exactly).
    allow_big_integer: bool = False


DEFAULT_OPTIONS = JsonOptions()


class ConfigFileSettings(BaseModel):
    path: Optional[str] = None
    # None picks the serializer from the file extension
    format: Optional[Literal["json", "yaml"]] = None
    readonly: bool = False
    fast_mode: bool = False
    compact: bool = False
    indent: int = 4
    allow_big_integer: bool = False
    log_level: Optional[str] = None

    def json_options(self) -> JsonOptions:
        return JsonOptions(allow_big_integer=self.allow_big_integer)


def load_settings(path: str | Path) -> ConfigFileSettings:
    """Load `ConfigFileSettings` from a YAML file.

    A missing or empty file yields the defaults. Unknown keys are ignored so
    the settings can live inside a larger application config.
    """
    p = Path(path)
    if not p.exists():
        logger.debug("Settings file %s not found, using defaults", p)
        return ConfigFileSettings()
    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"settings file {p} must contain a mapping")
    fields = ConfigFileSettings.model_fields
    return ConfigFileSettings(**{k: v for k, v in raw.items() if k in fields})
