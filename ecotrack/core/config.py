"""
Configuration loading.

Settings live in TOML files under ``ecotrack/cfg``; a handful of secrets can be
overridden from the environment so they never have to be committed.
"""
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import toml

from ecotrack.utils.constants import ConfigFile

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "cfg"

# environment variable -> (section, key)
ENV_OVERRIDES = {
    "JWT_SECRET": ("auth", "jwt_secret"),
    "GEMINI_API_KEY": ("insights", "api_key"),
    "DATABASE_URL": ("db", "url"),
}


class Config:
    """Parsed configuration file."""

    def __init__(self, data: dict[str, Any], source: str = ""):
        self.data = data
        self.source = source

    def section(self, name: str) -> dict[str, Any]:
        """Return a config section, or an empty dict if it is absent."""
        return self.data.get(name, {})


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            logger.debug(f"Overriding {section}.{key} from {env_var}")
            data.setdefault(section, {})[key] = value
    return data


@lru_cache
def get_config(config_file: str = ConfigFile.DEVELOPMENT) -> Config:
    """
    Load a configuration file from the cfg directory.

    Args:
        config_file: File name, one of the ``ConfigFile`` constants

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = CONFIG_DIR / config_file
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = toml.load(path)
    # test runs must never pick up a developer's secrets or database
    if config_file != ConfigFile.TEST:
        data = _apply_env_overrides(data)
    logger.info(f"Loaded configuration from {path.name}")
    return Config(data, source=path.name)


__all__ = ["Config", "ConfigFile", "get_config"]
