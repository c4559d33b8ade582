"""Step-length limiting from momentum loss and material boundaries.

One call to StepLimiter.limit_step():
  1. Rejects momenta below the propagation minimum; if the accumulated
     relative momentum loss already exceeds its maximum, the momentum-loss
     limit is set to zero and nothing else is done.
  2. Returns early when the current step is below the minimum step.
  3. Probes the material one minimum step ahead and derives the step at
     which the relative momentum loss would reach its maximum.
  4. Searches for the next boundary, walking across boundaries between
     identical materials when allowed, for at most a fixed number of
     iterations; exhausting them silently accepts the distance so far.
  5. Adds the relative momentum loss of the chosen step to the running total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from matfx.config.engine_config import MaterialEffectsConfig
from matfx.core.exceptions import MaterialInterfaceNotInitializedError, MomentumTooLowError
from matfx.core.materials import MaterialProperties
from matfx.core.state import MAX_LIMIT, StepContext, StepLimits, StepLimitType
from matfx.physics.energy_loss import EnergyLossModel
from matfx.stepping.interfaces import MaterialInterface, Propagator

logger = logging.getLogger(__name__)


@dataclass
class StepLimitResult:
    """Outcome of one step-limiting call.

    Attributes:
        rel_mom_loss: Updated accumulated relative momentum loss
        current_material: Material at the step start (None if never probed)
        rel_mom_loss_per_cm: Relative momentum loss rate used [1/cm]
        boundary_iterations: Boundary-search iterations performed

    """

    rel_mom_loss: float
    current_material: MaterialProperties | None
    rel_mom_loss_per_cm: float = 0.0
    boundary_iterations: int = 0


class StepLimiter:
    """Finds the admissible step length before material effects must be applied."""

    def __init__(
        self,
        energy_loss: EnergyLossModel,
        material_interface: MaterialInterface | None = None,
        config: MaterialEffectsConfig | None = None,
    ):
        self.energy_loss = energy_loss
        self.material_interface = material_interface
        self.config = config if config is not None else energy_loss.config

    def _probe(self, state7: np.ndarray, step_sign: int) -> MaterialProperties:
        """Move one minimum step ahead and return the material found there."""
        min_step = self.config.stepping.min_step
        state7[0:3] += step_sign * min_step * state7[3:6]
        self.material_interface.init_track(state7[0:3].copy(), step_sign * state7[3:6])
        return self.material_interface.get_material_parameters()

    def limit_step(
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
        """Set the momentum-loss and boundary limits of the next step.

        Args:
            propagator: Propagator used to follow the track to boundaries
            state7: State at the step start (not modified)
            mom: Momentum [GeV]
            rel_mom_loss: Relative momentum loss accumulated so far
            pdg: PDG particle code
            current_material: Material known for the step start
            limits: Candidate limits; updated in place
            var_field: Whether the field varies along the step

        Returns:
            StepLimitResult with the updated relative momentum loss and the
            material at the step start

        Raises:
            MomentumTooLowError: If mom is below the propagation minimum
            MaterialInterfaceNotInitializedError: If no material interface is set
        """
        stepping = self.config.stepping
        debug = self.config.effects.debug_level > 0

        if mom < stepping.min_momentum:
            raise MomentumTooLowError(mom)

        if self.material_interface is None:
            raise MaterialInterfaceNotInitializedError()

        if rel_mom_loss > stepping.max_rel_mom_loss:
            limits.set_limit(StepLimitType.MOMENTUM_LOSS, 0.0)
            return StepLimitResult(rel_mom_loss, current_material)

        s_max = limits.get_lowest_limit_signed_val()

        if abs(s_max) < stepping.min_step:
            return StepLimitResult(rel_mom_loss, current_material)

        state = np.array(state7, dtype=np.float64)
        step_sign = limits.step_sign

        current_material = self._probe(state, step_sign)
        if debug:
            logger.debug(f"currentMaterial {current_material}")

        # limit due to momentum loss, per cm of path
        rel_mom_loss_per_cm = 0.0
        if not current_material.is_vacuum_at(stepping.vacuum_z_threshold):
            context = StepContext(step_size=1.0, material=current_material)
            rel_mom_loss_per_cm = (
                self.energy_loss.momentum_loss(step_sign, mom, True, pdg, context) / mom
            )

        if rel_mom_loss_per_cm != 0.0:
            max_step_mom_loss = abs(
                (stepping.max_rel_mom_loss - abs(rel_mom_loss)) / rel_mom_loss_per_cm
            )
        else:
            max_step_mom_loss = MAX_LIMIT
        limits.set_limit(StepLimitType.MOMENTUM_LOSS, max_step_mom_loss)

        if debug:
            logger.debug(
                f"momLoss exceeded after a step of {max_step_mom_loss}; "
                f"relMomLoss up to now = {rel_mom_loss}"
            )

        # now look for boundaries
        s_max = limits.get_lowest_limit_signed_val()
        step_size = step_sign * stepping.min_step
        boundary_step = s_max
        iterations = 0

        while iterations < stepping.max_boundary_iterations:
            iterations += 1
            step = self.material_interface.find_next_boundary(
                propagator, state, boundary_step, var_field
            )
            step_size += step
            boundary_step -= step

            if debug:
                if step == 0:
                    logger.debug("material interface returned a step of 0")
                logger.debug(f"made a step of {step}")

            if not self.config.effects.ignore_boundaries_between_equal_materials:
                break

            if abs(step_size) >= abs(s_max):
                break

            # propagate to the boundary, then cross it
            state = propagator.propagate(state, step, var_field)
            material_after = self._probe(state, step_sign)

            if debug:
                logger.debug(f"material after step: {material_after}")

            if material_after != current_material:
                break
        else:
            if debug:
                logger.debug(
                    f"boundary search stopped after {iterations} iterations at {step_size}"
                )

        limits.set_limit(StepLimitType.BOUNDARY, step_size)

        rel_mom_loss += rel_mom_loss_per_cm * limits.get_lowest_limit_val()

        return StepLimitResult(rel_mom_loss, current_material, rel_mom_loss_per_cm, iterations)
