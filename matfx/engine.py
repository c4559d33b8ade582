"""Material-effects engine facade.

MaterialEffectsEngine owns the configuration, the energy-loss and noise
models and the step limiter, and exposes the two operations consumed by a
track fit:

- effects(): momentum loss and process noise of a committed trajectory segment
- stepper(): admissible step length during propagation

Engines are ordinary objects. Create one per fitting session (or per
thread); nothing is shared between instances except the read-only default
particle table.

Example:
    >>> from matfx import create_engine
    >>> from matfx.geometry import HomogeneousMaterialInterface
    >>> from matfx.core.materials import create_iron_material
    >>> engine = create_engine(HomogeneousMaterialInterface(create_iron_material()))
    >>> engine.set_msc_model("Highland")
"""

from __future__ import annotations

import logging
import warnings
from typing import Sequence

import numpy as np

from matfx.config.engine_config import MaterialEffectsConfig, create_default_config
from matfx.config.validation import create_validated_config, validate_config, warn_if_unsafe
from matfx.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from matfx.core.exceptions import (
    MaterialInterfaceNotInitializedError,
    MomentumLossExceededError,
    MomentumTooLowError,
)
from matfx.core.materials import MaterialProperties
from matfx.core.particles import DEFAULT_PARTICLE_TABLE, ParticleTable
from matfx.core.state import StepContext, StepLimits, StepRecord, check_noise_matrix
from matfx.physics.energy_loss import EnergyLossModel, relativistic_kinematics
from matfx.physics.process_noise import ProcessNoiseModel
from matfx.stepping.interfaces import MaterialInterface, Propagator
from matfx.stepping.step_limiter import StepLimiter, StepLimitResult

logger = logging.getLogger(__name__)


class MaterialEffectsEngine:
    """Energy loss, process noise and step limiting for one fitting session.

    The effect toggles live in `config.effects` and are read on every call,
    so setters take effect immediately and can be flipped back without
    leaving state behind. The bremsstrahlung table is taken from the
    configuration at construction; assigning `config.effects.brems_table`
    afterwards does not switch it.

    Attributes:
        config: Engine configuration (shared with the models)
        particles: PDG code to mass/charge lookup
        energy_loss: Mean energy-loss model
        noise_model: Process-noise model
    """

    def __init__(
        self,
        config: MaterialEffectsConfig | None = None,
        material_interface: MaterialInterface | None = None,
        particles: ParticleTable | None = None,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
    ):
        self.config = config if config is not None else create_default_config()
        self.particles = particles if particles is not None else DEFAULT_PARTICLE_TABLE
        self.energy_loss = EnergyLossModel(self.config, self.particles, constants)
        self.noise_model = ProcessNoiseModel(self.config, self.particles, constants)
        self._step_limiter = StepLimiter(self.energy_loss, None, self.config)
        self._material_interface: MaterialInterface | None = None

        if material_interface is not None:
            self.init(material_interface)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def material_interface(self) -> MaterialInterface | None:
        return self._material_interface

    def init(self, material_interface: MaterialInterface) -> None:
        """Attach the material interface used by all entry points."""
        if self._material_interface is not None:
            warnings.warn(
                "MaterialEffectsEngine already has a material interface. Replacing it.",
                UserWarning,
                stacklevel=2,
            )
        self._material_interface = material_interface
        self._step_limiter.material_interface = material_interface

        if self.config.effects.debug_level > 1:
            material_interface.set_debug_level(self.config.effects.debug_level - 1)

    def is_initialized(self) -> bool:
        return self._material_interface is not None

    # ------------------------------------------------------------------
    # Configuration setters
    # ------------------------------------------------------------------

    def set_no_effects(self, flag: bool = True) -> None:
        self.config.effects.no_effects = flag

    def set_energy_loss_bethe_bloch(self, flag: bool = True) -> None:
        self.config.effects.energy_loss_bethe_bloch = flag

    def set_noise_bethe_bloch(self, flag: bool = True) -> None:
        self.config.effects.noise_bethe_bloch = flag

    def set_noise_coulomb(self, flag: bool = True) -> None:
        self.config.effects.noise_coulomb = flag

    def set_energy_loss_brems(self, flag: bool = True) -> None:
        self.config.effects.energy_loss_brems = flag

    def set_noise_brems(self, flag: bool = True) -> None:
        self.config.effects.noise_brems = flag

    def set_ignore_boundaries_between_equal_materials(self, flag: bool = True) -> None:
        self.config.effects.ignore_boundaries_between_equal_materials = flag

    def set_msc_model(self, model) -> None:
        """Select the multiple-scattering model ("GEANE" or "Highland").

        Raises:
            UnknownScatteringModelError: For an unknown model name
        """
        self.config.effects.set_msc_model(model)

    def set_debug_level(self, level: int) -> None:
        """Set the debug verbosity; levels above 1 reach the material interface as level - 1."""
        self.config.effects.debug_level = level
        if self._material_interface is not None and level > 1:
            self._material_interface.set_debug_level(level - 1)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def effects(
        self,
        steps: Sequence[StepRecord],
        start: int,
        stop: int,
        mom: float,
        pdg: int,
        noise: np.ndarray | None = None,
    ) -> float:
        """Momentum loss and process noise of the steps[start:stop] segment.

        Steps shorter than the minimum effects step and vacuum steps are
        skipped. Noise contributions are added to `noise` when one is given;
        the step records are never modified.

        Args:
            steps: Step records of the trajectory
            start: First step of the segment
            stop: One past the last step of the segment
            mom: Momentum at the segment start [GeV]
            pdg: PDG particle code
            noise: 7x7 noise matrix to accumulate into, or None

        Returns:
            Momentum loss over the segment [GeV] (signed with the direction of travel)

        Raises:
            MaterialInterfaceNotInitializedError: If no material interface is attached
            EnergyBelowMassError: If the energy drops to the rest mass
            BetheBlochValidityError: If beta*gamma falls below 0.05
            MomentumLossExceededError: If the loss reaches the initial momentum
        """
        effects = self.config.effects
        stepping = self.config.stepping
        debug = effects.debug_level > 0

        if debug:
            logger.debug("MaterialEffectsEngine.effects")

        if effects.no_effects:
            return 0.0

        if self._material_interface is None:
            raise MaterialInterfaceNotInitializedError()

        do_noise = noise is not None
        if do_noise:
            check_noise_matrix(noise)

        mass = self.particles.get_mass(pdg)
        mom_loss = 0.0

        for record in steps[start:stop]:
            real_path = record.step_size
            if abs(real_path) < stepping.min_effects_step:
                # do material effects only if distance is not too small
                continue

            material = record.material
            if debug:
                suffix = " and noise" if do_noise else ""
                logger.debug(f"calculate matFX{suffix} for stepSize = {real_path}\t{material}")

            if material.is_vacuum_at(stepping.vacuum_z_threshold):
                continue

            step_sign = -1.0 if real_path < 0 else 1.0
            context = StepContext(step_size=abs(real_path), material=material)

            mom_loss += self.energy_loss.momentum_loss(
                step_sign, mom - mom_loss, False, pdg, context
            )

            if do_noise:
                self._add_noise(noise, context, record.direction, mass, pdg)

        if mom_loss >= mom:
            raise MomentumLossExceededError(mom_loss, mom)

        return mom_loss

    def _add_noise(
        self,
        noise: np.ndarray,
        context: StepContext,
        direction: np.ndarray,
        mass: float,
        pdg: int,
    ) -> None:
        """Add all enabled noise contributions of one step, at mid-step kinematics."""
        effects = self.config.effects
        gamma, gamma_sq, beta_sq, p = relativistic_kinematics(
            context.energy, mass, "MaterialEffectsEngine.effects"
        )
        p_sq = p * p

        if effects.energy_loss_bethe_bloch and effects.noise_bethe_bloch:
            self.noise_model.noise_bethe_bloch(
                noise, context, p, beta_sq, gamma, gamma_sq, pdg
            )

        if effects.noise_coulomb:
            self.noise_model.noise_coulomb(noise, context, direction, p_sq, beta_sq, pdg)

        if effects.energy_loss_brems and effects.noise_brems:
            self.noise_model.noise_brems(noise, context, p_sq, beta_sq, pdg)

    def stepper(
        self,
        propagator: Propagator,
        state7: np.ndarray,
        mom: float,
        rel_mom_loss: float,
        pdg: int,
        current_material: MaterialProperties | None,
        limits: StepLimits,
        var_field: bool = True,
    ) -> StepLimitResult:
        """Limit the next propagation step by momentum loss and material boundaries.

        `limits` is updated in place; `state7` is left untouched. See
        StepLimiter.limit_step for the algorithm.

        Returns:
            StepLimitResult with the updated relative momentum loss and the
            material at the step start

        Raises:
            MomentumTooLowError: If mom is below the propagation minimum
            MaterialInterfaceNotInitializedError: If no material interface is attached
        """
        if mom < self.config.stepping.min_momentum:
            raise MomentumTooLowError(mom)

        if self.config.effects.no_effects:
            return StepLimitResult(rel_mom_loss, current_material)

        return self._step_limiter.limit_step(
            propagator, state7, mom, rel_mom_loss, pdg, current_material, limits, var_field
        )


def create_engine(
    material_interface: MaterialInterface | None = None,
    config: MaterialEffectsConfig | None = None,
    particles: ParticleTable | None = None,
    **overrides,
) -> MaterialEffectsEngine:
    """Create an engine with a validated configuration.

    Keyword overrides are applied to a default configuration as in
    create_validated_config(); they cannot be combined with `config`.
    Suspicious but legal settings are reported with ConfigurationWarning.

    Raises:
        ConfigurationError: If the configuration is invalid
        ValueError: If both `config` and overrides are given
    """
    if config is not None and overrides:
        raise ValueError("Pass either a config or keyword overrides, not both")

    if config is None:
        config = create_validated_config(**overrides)
    else:
        validate_config(config)

    warn_if_unsafe(config)

    return MaterialEffectsEngine(config, material_interface, particles)
