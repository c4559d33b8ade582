"""
Configuration Validation Utilities

This module provides validation functions for engine configurations.
It includes invariant checking and warnings for settings that are legal but
probably not what the user meant.

Import Policy:
    from matfx.config.validation import validate_config, check_invariants, warn_if_unsafe

DO NOT use: from matfx.config.validation import *
"""

import warnings

from matfx.config.engine_config import MaterialEffectsConfig


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigurationWarning(Warning):
    """Warning for potentially unsafe configuration choices."""

    pass


def validate_config(
    config: MaterialEffectsConfig, raise_on_error: bool = True
) -> tuple[bool, list[str]]:
    """Validate an engine configuration.

    Args:
        config: MaterialEffectsConfig to validate
        raise_on_error: If True, raise ConfigurationError on validation failure

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        ConfigurationError: If validation fails and raise_on_error=True
    """
    errors = config.validate()

    if errors:
        if raise_on_error:
            raise ConfigurationError(
                f"Configuration validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {err}" for err in errors)
            )
        return False, errors

    return True, []


def check_invariants(config: MaterialEffectsConfig) -> bool:
    """Return True if the configuration passes validation."""
    is_valid, _ = validate_config(config, raise_on_error=False)
    return is_valid


def warn_if_unsafe(config: MaterialEffectsConfig) -> list[str]:
    """Check for configuration choices that are legal but suspicious.

    Warnings are issued via Python's warnings module.

    Args:
        config: MaterialEffectsConfig to check

    Returns:
        List of warning messages (empty if no warnings)
    """
    effects = config.effects
    warnings_list = []

    # Straggling noise is only computed together with the matching loss
    if effects.noise_bethe_bloch and not effects.energy_loss_bethe_bloch:
        warnings_list.append(
            "noise_bethe_bloch is enabled but energy_loss_bethe_bloch is disabled; "
            "ionization straggling noise will not be added."
        )

    if effects.noise_brems and not effects.energy_loss_brems:
        warnings_list.append(
            "noise_brems is enabled but energy_loss_brems is disabled; "
            "bremsstrahlung straggling noise will not be added."
        )

    if not effects.ignore_boundaries_between_equal_materials:
        warnings_list.append(
            "ignore_boundaries_between_equal_materials is disabled; every geometry "
            "boundary limits the step, even between identical materials."
        )

    if config.stepping.max_rel_mom_loss > 0.05:
        warnings_list.append(
            f"max_rel_mom_loss ({config.stepping.max_rel_mom_loss}) is large. "
            "The linear momentum-loss estimate used for step limiting degrades."
        )

    for msg in warnings_list:
        warnings.warn(msg, ConfigurationWarning, stacklevel=2)

    return warnings_list


def create_validated_config(**overrides) -> MaterialEffectsConfig:
    """Create a configuration with field overrides and validate it.

    Keyword arguments are matched against EffectsConfig fields first, then
    SteppingConfig fields.

    Example:
        >>> config = create_validated_config(msc_model="Highland", min_step=2e-4)

    Raises:
        ConfigurationError: If validation fails
        TypeError: For a keyword that names no configuration field
        UnknownScatteringModelError: For an unknown msc_model name
        UnknownBremsstrahlungTableError: For an unknown brems_table name
    """
    config = MaterialEffectsConfig()

    for key, value in overrides.items():
        if hasattr(config.effects, key):
            setattr(config.effects, key, value)
        elif hasattr(config.stepping, key):
            setattr(config.stepping, key, value)
        else:
            raise TypeError(f"Unknown configuration field: {key}")

    validate_config(config)
    return config
