"""Engine Configuration - Single Source of Truth (SSOT)

This module provides the configuration dataclasses for the material-effects
engine. ALL toggles, model choices and step-limiting thresholds flow through
these classes.

Import Policy:
    from matfx.config.engine_config import MaterialEffectsConfig, EffectsConfig, SteppingConfig

DO NOT use: from matfx.config.engine_config import *
"""

import copy
from dataclasses import asdict, dataclass, field

from matfx.config.defaults import (
    DEFAULT_BREMS_PHOTON_CUTOFF,
    DEFAULT_BREMS_TABLE,
    DEFAULT_DEBUG_LEVEL,
    DEFAULT_ENERGY_LOSS_BETHE_BLOCH,
    DEFAULT_ENERGY_LOSS_BREMS,
    DEFAULT_IGNORE_BOUNDARIES_BETWEEN_EQUAL_MATERIALS,
    DEFAULT_MAX_BOUNDARY_ITERATIONS,
    DEFAULT_MAX_REL_MOM_LOSS,
    DEFAULT_MIN_EFFECTS_STEP,
    DEFAULT_MIN_MOMENTUM,
    DEFAULT_MIN_STEP,
    DEFAULT_MSC_MODEL,
    DEFAULT_NO_EFFECTS,
    DEFAULT_NOISE_BETHE_BLOCH,
    DEFAULT_NOISE_BREMS,
    DEFAULT_NOISE_COULOMB,
    DEFAULT_VACUUM_Z_THRESHOLD,
)
from matfx.config.enums import BremsstrahlungTable, ScatteringModel
from matfx.core.exceptions import UnknownBremsstrahlungTableError, UnknownScatteringModelError


def parse_msc_model(model) -> ScatteringModel:
    """Convert a model name or enum to ScatteringModel.

    Raises:
        UnknownScatteringModelError: If the name matches no model

    """
    if isinstance(model, ScatteringModel):
        return model
    for candidate in ScatteringModel:
        if model == candidate.value:
            return candidate
    raise UnknownScatteringModelError(str(model), [m.value for m in ScatteringModel])


def parse_brems_table(table) -> BremsstrahlungTable:
    """Convert a table name or enum to BremsstrahlungTable.

    Raises:
        UnknownBremsstrahlungTableError: If the name matches no table

    """
    if isinstance(table, BremsstrahlungTable):
        return table
    for candidate in BremsstrahlungTable:
        if table == candidate.value:
            return candidate
    raise UnknownBremsstrahlungTableError(str(table), [t.value for t in BremsstrahlungTable])


@dataclass
class EffectsConfig:
    """Physics effect toggles and model selection.

    Attributes:
        no_effects: Disable all material effects
        energy_loss_bethe_bloch: Ionization energy loss
        noise_bethe_bloch: Ionization straggling noise (needs the loss enabled)
        noise_coulomb: Multiple-scattering noise
        energy_loss_brems: Bremsstrahlung energy loss (e+/e- only)
        noise_brems: Bremsstrahlung straggling noise (needs the loss enabled)
        ignore_boundaries_between_equal_materials: Continue the boundary
            search across boundaries with the same material on both sides
        msc_model: Multiple-scattering variance model
        brems_table: Bremsstrahlung coefficient table
        brems_photon_cutoff: Soft-photon cutoff [GeV]
        debug_level: Debug verbosity

    """

    no_effects: bool = DEFAULT_NO_EFFECTS
    energy_loss_bethe_bloch: bool = DEFAULT_ENERGY_LOSS_BETHE_BLOCH
    noise_bethe_bloch: bool = DEFAULT_NOISE_BETHE_BLOCH
    noise_coulomb: bool = DEFAULT_NOISE_COULOMB
    energy_loss_brems: bool = DEFAULT_ENERGY_LOSS_BREMS
    noise_brems: bool = DEFAULT_NOISE_BREMS
    ignore_boundaries_between_equal_materials: bool = DEFAULT_IGNORE_BOUNDARIES_BETWEEN_EQUAL_MATERIALS
    msc_model: ScatteringModel = ScatteringModel(DEFAULT_MSC_MODEL)
    brems_table: BremsstrahlungTable = BremsstrahlungTable(DEFAULT_BREMS_TABLE)
    brems_photon_cutoff: float = DEFAULT_BREMS_PHOTON_CUTOFF
    debug_level: int = DEFAULT_DEBUG_LEVEL

    def __setattr__(self, name, value):
        # model choices are parsed on every assignment, including in __init__
        if name == "msc_model":
            value = parse_msc_model(value)
        elif name == "brems_table":
            value = parse_brems_table(value)
        super().__setattr__(name, value)

    def set_msc_model(self, model) -> None:
        """Select the multiple-scattering model by name or enum.

        Raises:
            UnknownScatteringModelError: Immediately, for an unknown name

        """
        self.msc_model = model

    def validate(self) -> list[str]:
        """Validate effect configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        if self.brems_photon_cutoff <= 0:
            errors.append(f"brems_photon_cutoff must be > 0, got {self.brems_photon_cutoff}")

        if self.debug_level < 0:
            errors.append(f"debug_level must be >= 0, got {self.debug_level}")

        return errors


@dataclass
class SteppingConfig:
    """Step-limiting thresholds.

    Attributes:
        max_rel_mom_loss: Maximum relative momentum loss per step
        min_momentum: Minimum momentum for propagation [GeV]
        min_step: Minimum step and boundary probe length [cm]
        max_boundary_iterations: Iteration cap of the boundary search
        vacuum_z_threshold: Z at or below which a material is vacuum
        min_effects_step: Steps shorter than this [cm] get no effects

    """

    max_rel_mom_loss: float = DEFAULT_MAX_REL_MOM_LOSS
    min_momentum: float = DEFAULT_MIN_MOMENTUM
    min_step: float = DEFAULT_MIN_STEP
    max_boundary_iterations: int = DEFAULT_MAX_BOUNDARY_ITERATIONS
    vacuum_z_threshold: float = DEFAULT_VACUUM_Z_THRESHOLD
    min_effects_step: float = DEFAULT_MIN_EFFECTS_STEP

    def validate(self) -> list[str]:
        """Validate stepping configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        if not 0 < self.max_rel_mom_loss < 1:
            errors.append(f"max_rel_mom_loss must be in (0, 1), got {self.max_rel_mom_loss}")

        if self.min_momentum <= 0:
            errors.append(f"min_momentum must be > 0, got {self.min_momentum}")

        if self.min_step <= 0:
            errors.append(f"min_step must be > 0, got {self.min_step}")

        if self.max_boundary_iterations <= 0:
            errors.append(
                f"max_boundary_iterations must be > 0, got {self.max_boundary_iterations}"
            )

        if self.vacuum_z_threshold < 0:
            errors.append(f"vacuum_z_threshold must be >= 0, got {self.vacuum_z_threshold}")

        if self.min_effects_step < 0:
            errors.append(f"min_effects_step must be >= 0, got {self.min_effects_step}")

        return errors


@dataclass
class MaterialEffectsConfig:
    """Complete engine configuration (SSOT).

    Example:
        >>> config = MaterialEffectsConfig()
        >>> config.effects.set_msc_model("Highland")
        >>> config.validate()
        []

    Attributes:
        effects: Effect toggles and model selection
        stepping: Step-limiting thresholds

    """

    effects: EffectsConfig = field(default_factory=EffectsConfig)
    stepping: SteppingConfig = field(default_factory=SteppingConfig)

    def validate(self) -> list[str]:
        """Validate the complete configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []
        errors.extend(self.effects.validate())
        errors.extend(self.stepping.validate())
        return errors

    def copy(self) -> "MaterialEffectsConfig":
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for serialization.

        Returns:
            Dictionary representation of configuration

        """
        config_dict = asdict(self)
        config_dict["effects"]["msc_model"] = self.effects.msc_model.value
        config_dict["effects"]["brems_table"] = self.effects.brems_table.value
        return config_dict

    @classmethod
    def from_dict(cls, data: dict) -> "MaterialEffectsConfig":
        """Create configuration from dictionary.

        Missing keys take their defaults; unknown keys raise TypeError.

        Args:
            data: Dictionary representation of configuration

        Returns:
            MaterialEffectsConfig instance

        """
        effects = EffectsConfig(**(data.get("effects") or {}))
        stepping = SteppingConfig(**(data.get("stepping") or {}))
        return cls(effects=effects, stepping=stepping)


def create_default_config() -> MaterialEffectsConfig:
    """Create a default engine configuration.

    Returns:
        Valid MaterialEffectsConfig instance

    """
    config = MaterialEffectsConfig()
    errors = config.validate()

    if errors:
        raise ValueError("Default configuration is invalid:\n" + "\n".join(errors))

    return config
