"""Configuration loading and runtime context."""

from sprout.config.context import SproutContext
from sprout.config.loader import (
    get_home_config_path,
    get_local_config_path,
    get_sprout_home,
    load_config,
)
from sprout.config.schema import DEFAULT_CONFIG, SproutConfig

__all__ = [
    "DEFAULT_CONFIG",
    "SproutConfig",
    "SproutContext",
    "get_home_config_path",
    "get_local_config_path",
    "get_sprout_home",
    "load_config",
]
