# -*- coding: utf-8 -*-

import os
import logging

import yaml

from hashlens.common.constants import SETTINGS_FILE, LOGLEVELS
from hashlens.common.errors import SettingsFileError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "catalog": None,        # None means the catalog shipped with the package
    "loglevel": "warning",
    "max_workers": None,    # None lets ThreadPoolExecutor pick
}

def load_settings(path=SETTINGS_FILE) -> dict:
    """Reads a YAML settings file and merges it over the defaults.
    A missing file is not an error: the defaults are returned.

    Arguments:
    path    -- path where the settings file is located
    """
    settings = dict(DEFAULT_SETTINGS)
    if not os.path.exists(path):
        logger.debug(f"No settings file at \"{path}\", using defaults")
        return settings

    try:
        with open(path, 'r') as file:
            content = yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as e:
        raise SettingsFileError(f"Cannot read settings file \"{path}\": {e}") from e

    if content is None:
        return settings
    if not isinstance(content, dict):
        raise SettingsFileError(f"Settings file \"{path}\" must contain a mapping")

    for key, value in content.items():
        if key not in DEFAULT_SETTINGS:
            logger.warning(f"Unknown setting \"{key}\" in \"{path}\" ignored")
            continue
        settings[key] = value

    loglevel = settings["loglevel"]
    if not isinstance(loglevel, str) or loglevel.lower() not in LOGLEVELS:
        raise SettingsFileError(f"loglevel must be one of {', '.join(LOGLEVELS)} (got {loglevel!r})")
    settings["loglevel"] = loglevel.lower()

    max_workers = settings["max_workers"]
    if max_workers is not None:
        # bool is an int subclass
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            raise SettingsFileError(f"max_workers must be a positive integer (got {max_workers!r})")

    logger.debug(f"Settings loaded from \"{path}\": {settings}")
    return settings
