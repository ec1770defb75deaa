"""Configuration file loading and merging."""

import logging
import os
from pathlib import Path

import yaml

from sprout.config.schema import DEFAULT_CONFIG, SproutConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"
HOME_ENV = "SPROUT_HOME"


def get_sprout_home() -> Path:
    """Get the sprout home directory: $SPROUT_HOME or ~/.sprout."""
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".sprout"


def get_home_config_path(home: Path | None = None) -> Path:
    """Get path to global config: <home>/config.yaml."""
    return (home or get_sprout_home()) / CONFIG_FILENAME


def get_local_config_path() -> Path:
    """Get path to local config: ./.sprout/config.yaml."""
    return Path.cwd() / ".sprout" / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found, empty or invalid."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Ignoring malformed config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    result: dict[str, object] = data
    return result


def load_config(home: Path | None = None) -> SproutConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (<home>/config.yaml)
    3. Local config (./.sprout/config.yaml)
    """
    config = DEFAULT_CONFIG

    for path in (get_home_config_path(home), get_local_config_path()):
        data = load_yaml_config(path)
        if data:
            config = config.merge(SproutConfig.from_dict(data))

    return config

