"""YAML Configuration Loader

This module reads engine configuration files written in YAML.

File format (every key optional):
    effects:
      no_effects: false
      noise_coulomb: true
      msc_model: Highland
      brems_table: migdal
    stepping:
      max_rel_mom_loss: 0.01
      min_step: 1.0e-4

Usage:
    from matfx.config.yaml_loader import load_config
    config = load_config("material_effects.yaml")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from matfx.config.engine_config import MaterialEffectsConfig, create_default_config

CONFIG_PATH_ENV = "MATFX_CONFIG_PATH"


def _get_yaml_path(path: str | Path | None = None) -> Path | None:
    """Resolve the configuration file to read.

    The file is searched for in the following order:
    1. The explicit path argument
    2. Environment variable MATFX_CONFIG_PATH

    Returns:
        Path to the configuration file, or None if neither is given.

    Raises:
        FileNotFoundError: If the resolved file does not exist.
    """
    if path is None:
        env_path = os.getenv(CONFIG_PATH_ENV)
        if not env_path:
            return None
        path = env_path

    yaml_path = Path(path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
    return yaml_path


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    An empty file gives an empty dictionary.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: str | Path | None = None) -> MaterialEffectsConfig:
    """Load the engine configuration.

    Args:
        path: YAML file to read. If None, MATFX_CONFIG_PATH is consulted;
            without it the defaults are returned.

    Returns:
        MaterialEffectsConfig instance

    Example:
        >>> config = load_config()
        >>> config.effects.msc_model.value
        'GEANE'
    """
    yaml_path = _get_yaml_path(path)
    if yaml_path is None:
        return create_default_config()
    return MaterialEffectsConfig.from_dict(load_yaml_config(yaml_path))


def save_config(config: MaterialEffectsConfig, path: str | Path) -> None:
    """Write a configuration as YAML."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
