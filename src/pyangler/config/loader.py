"""Configuration loading."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from pyangler.config.schema import PyAnglerConfig
from pyangler.errors import ConfigurationError

CONFIG_FILENAME = "pyangler.yaml"


def load_config(root: Path) -> PyAnglerConfig:
    """Load pyangler.yaml from the repository root.

    Args:
        root: Repository root.

    Returns:
        Parsed configuration, or defaults when the file does not exist.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation.
    """
    path = root / CONFIG_FILENAME
    if not path.is_file():
        return PyAnglerConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", path=path) from e

    if data is None:
        return PyAnglerConfig()
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a mapping", path=path)

    try:
        return PyAnglerConfig.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {errors}", path=path) from e
