"""Configuration and override rules for uselex."""

from rules.config import (
    CONFIG_FILENAME,
    ConfigError,
    UselexConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "UselexConfig",
    "load_config",
]
