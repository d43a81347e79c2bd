from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional

from treepath_lib.options import load_settings

DEFAULT_SETTINGS_FILE = Path('treepath.yml')


def configure_logging(config_path: Optional[Path] = None) -> logging.Logger:
    """Configure root logging for applications embedding treepath.

    Establishes an early NOTSET basic config so reading the settings file
    can log, then reconfigures the root logger with the `log_level` from
    those settings (WARNING when absent or unreadable). Returns the package
    logger.
    """
    logging.basicConfig(level=logging.NOTSET, format='%(asctime)s INFO %(message)s')
    level = logging.WARNING

    try:
        settings = load_settings(config_path or DEFAULT_SETTINGS_FILE)
        if settings.log_level:
            level = getattr(logging, settings.log_level.upper())
    except (OSError, yaml.YAMLError, ValueError, AttributeError):
        level = logging.WARNING

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger('treepath_lib')
    logger.info("Log level set to %s", logging.getLevelName(level))
    return logger
