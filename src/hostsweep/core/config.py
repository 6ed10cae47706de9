"""Configuration loading for hostsweep.

A YAML file may override any field of the stock configuration. Fields
it does not mention keep their defaults, so a file containing only
``keywords:`` still scans the standard locations.
"""

from pathlib import Path
from typing import Any

import pydantic
import yaml

from hostsweep.core.errors import ConfigError
from hostsweep.core.logging import debug
from hostsweep.models.config import SweepConfig


def load_config(path: Path | None = None) -> SweepConfig:
    """Build the effective sweep configuration.

    Args:
        path: Optional YAML file with overrides

    Returns:
        Validated SweepConfig

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    defaults = SweepConfig.default()
    if path is None:
        return defaults

    overrides = _read_yaml(path)
    debug(f"Loaded configuration overrides from {path}", fields=sorted(overrides))

    merged = defaults.model_dump()
    merged.update(overrides)
    try:
        return SweepConfig.model_validate(merged)
    except pydantic.ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise ConfigError(f"Invalid configuration in {path}", path=str(path), errors=errors)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file: {e}", path=str(path))

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error: {e}", path=str(path))

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping", path=str(path))
    return data
