"""Configuration Module - Single Source of Truth for Engine Parameters

Recommended Usage:
    from matfx.config import MaterialEffectsConfig, create_validated_config
    from matfx.config.enums import ScatteringModel

    # Create a default config (already validated)
    config = create_validated_config()

    # Override toggles and thresholds with validation
    config = create_validated_config(msc_model="Highland", noise_brems=False)

    # Or load from YAML
    from matfx.config import load_config
    config = load_config("material_effects.yaml")

Import Policy:
    DO NOT use: from matfx.config import *

Submodules:
    enums: Configuration enumerations (ScatteringModel, BremsstrahlungTable)
    defaults: Default constants
    engine_config: Configuration dataclasses (EffectsConfig, SteppingConfig, ...)
    yaml_loader: YAML configuration loader
    validation: Validation utilities (validate_config, warn_if_unsafe, ...)
"""

from matfx.config.enums import BremsstrahlungTable, ScatteringModel
from matfx.config.engine_config import (
    EffectsConfig,
    MaterialEffectsConfig,
    SteppingConfig,
    create_default_config,
    parse_brems_table,
    parse_msc_model,
)
from matfx.config.yaml_loader import load_config, load_yaml_config, save_config
from matfx.config.validation import (
    ConfigurationError,
    ConfigurationWarning,
    check_invariants,
    create_validated_config,
    validate_config,
    warn_if_unsafe,
)

__all__ = [
    # Enums
    "ScatteringModel",
    "BremsstrahlungTable",
    # Config classes
    "EffectsConfig",
    "SteppingConfig",
    "MaterialEffectsConfig",
    # Factory functions
    "create_default_config",
    "create_validated_config",
    "parse_msc_model",
    "parse_brems_table",
    # YAML
    "load_config",
    "load_yaml_config",
    "save_config",
    # Validation
    "ConfigurationError",
    "ConfigurationWarning",
    "validate_config",
    "check_invariants",
    "warn_if_unsafe",
]
