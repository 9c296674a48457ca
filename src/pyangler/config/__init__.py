"""Configuration for pyangler."""

from pyangler.config.loader import CONFIG_FILENAME, load_config
from pyangler.config.schema import (
    ChangelogConfig,
    PublishConfig,
    PyAnglerConfig,
    ReleaseConfig,
)

__all__ = [
    "CONFIG_FILENAME",
    "ChangelogConfig",
    "PublishConfig",
    "PyAnglerConfig",
    "ReleaseConfig",
    "load_config",
]
