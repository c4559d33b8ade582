"""Mean energy loss of a charged particle over a step.

Implements the EnergyLossModel:
- Bethe-Bloch ionization loss, valid for beta*gamma >= 0.05
- Bremsstrahlung loss for electrons and positrons (see bremsstrahlung.py)
- Integration of dE/dx over the step, either a single evaluation (linear,
  used while limiting steps) or classical 4th-order Runge-Kutta in energy

Units: GeV, cm, g/cm³; mean excitation energy in eV.
"""

from __future__ import annotations

import logging
import math

from matfx.config.defaults import DEFAULT_BETA_GAMMA_MIN
from matfx.config.engine_config import MaterialEffectsConfig, create_default_config
from matfx.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from matfx.core.exceptions import BetheBlochValidityError, EnergyBelowMassError
from matfx.core.materials import MaterialProperties
from matfx.core.particles import DEFAULT_PARTICLE_TABLE, ParticleTable
from matfx.core.state import StepContext
from matfx.physics.bremsstrahlung import dedx_brems

logger = logging.getLogger(__name__)


def relativistic_kinematics(
    energy: float, mass: float, where: str = "relativistic_kinematics"
) -> tuple[float, float, float, float]:
    """Return (gamma, gamma², beta², momentum) for total energy and mass.

    Raises:
        EnergyBelowMassError: If energy <= mass
    """
    if energy <= mass:
        raise EnergyBelowMassError(where, energy, mass)

    gamma = energy / mass
    gamma_sq = gamma * gamma
    beta_sq = 1.0 - 1.0 / gamma_sq
    mom = energy * math.sqrt(beta_sq)
    return gamma, gamma_sq, beta_sq, mom


class EnergyLossModel:
    """Differential and integrated energy loss.

    The model reads the effect toggles of the shared configuration on every
    call, so flipping a toggle on the engine takes effect immediately. The
    bremsstrahlung table is fixed when the model is built; later changes to
    `config.effects.brems_table` do not reach an existing model.
    """

    def __init__(
        self,
        config: MaterialEffectsConfig | None = None,
        particles: ParticleTable | None = None,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
    ):
        self.config = config if config is not None else create_default_config()
        self.particles = particles if particles is not None else DEFAULT_PARTICLE_TABLE
        self.constants = constants
        self.brems_table = self.config.effects.brems_table

    def dedx(
        self,
        energy: float,
        mass: float,
        charge: int,
        pdg: int,
        material: MaterialProperties,
    ) -> float:
        """Total dE/dx [GeV/cm] of all enabled energy-loss processes.

        Raises:
            EnergyBelowMassError: If energy <= mass
            BetheBlochValidityError: If ionization is enabled and beta*gamma < 0.05
        """
        gamma, gamma_sq, beta_sq, mom = relativistic_kinematics(
            energy, mass, "EnergyLossModel.dedx"
        )
        effects = self.config.effects

        result = 0.0

        if effects.energy_loss_bethe_bloch:
            result += self.dedx_bethe_bloch(beta_sq, gamma, gamma_sq, mass, charge, material)

        if effects.energy_loss_brems:
            result += self.dedx_brems(mom, pdg, material)

        return result

    def dedx_bethe_bloch(
        self,
        beta_sq: float,
        gamma: float,
        gamma_sq: float,
        mass: float,
        charge: int,
        material: MaterialProperties,
    ) -> float:
        """Bethe-Bloch mean ionization loss [GeV/cm], clamped to >= 0.

        No density-effect or shell corrections are applied.

        Raises:
            BetheBlochValidityError: If beta*gamma < 0.05
        """
        if beta_sq * gamma_sq < DEFAULT_BETA_GAMMA_MIN * DEFAULT_BETA_GAMMA_MIN:
            raise BetheBlochValidityError(math.sqrt(beta_sq * gamma_sq), DEFAULT_BETA_GAMMA_MIN)

        m_e = self.constants.m_e
        result = (
            self.constants.K * material.Z / material.A * material.density / beta_sq
            * charge * charge
        )
        mass_ratio = m_e / mass
        # me in MeV, I in MeV
        argument = (
            gamma_sq * beta_sq * m_e * 1.0e3 * 2.0
            / ((1.0e-6 * material.mean_excitation_energy)
               * math.sqrt(1.0 + 2.0 * gamma * mass_ratio + mass_ratio * mass_ratio))
        )
        result *= math.log(argument) - beta_sq  # [MeV/cm]
        result *= 1.0e-3  # [GeV/cm]

        return max(result, 0.0)

    def dedx_brems(self, mom: float, pdg: int, material: MaterialProperties) -> float:
        """Bremsstrahlung dE/dx [GeV/cm] with the table chosen at construction."""
        return dedx_brems(
            mom, pdg, material, self.brems_table, self.config.effects.brems_photon_cutoff
        )

    def momentum_loss(
        self,
        step_sign: float,
        mom: float,
        linear: bool,
        pdg: int,
        context: StepContext,
    ) -> float:
        """Momentum lost over the step described by `context`.

        dE/dx is integrated in energy over the signed step
        `context.step_size * step_sign`:

            k1 = dEdx(E0)
            k2 = dEdx(E0 - h/2 * k1)
            k3 = dEdx(E0 - h/2 * k2)
            k4 = dEdx(E0 - h   * k3)
            <dEdx> = (k1 + 2 k2 + 2 k3 + k4) / 6

        With `linear` only k1 is evaluated. The average dE/dx and the energy
        in the middle of the step are written to `context` for the noise model.

        Args:
            step_sign: Direction of travel (+1 forward, -1 backward)
            mom: Momentum at the step start [GeV]
            linear: Use a single evaluation instead of RK4
            pdg: PDG particle code
            context: Step length and material; receives dedx and energy

        Returns:
            Momentum loss [GeV], positive for forward steps. Equal to `mom`
            if the step would stop the particle.
        """
        particle = self.particles.get(pdg)
        mass = particle.mass
        charge = particle.charge
        material = context.material

        e0 = math.hypot(mom, mass)
        step = context.step_size * step_sign

        dedx1 = self.dedx(e0, mass, charge, pdg, material)

        if linear:
            context.dedx = dedx1
        else:
            e1 = e0 - dedx1 * step / 2.0
            dedx2 = self.dedx(e1, mass, charge, pdg, material)

            e2 = e0 - dedx2 * step / 2.0
            dedx3 = self.dedx(e2, mass, charge, pdg, material)

            e3 = e0 - dedx3 * step
            dedx4 = self.dedx(e3, mass, charge, pdg, material)

            context.dedx = (dedx1 + 2.0 * dedx2 + 2.0 * dedx3 + dedx4) / 6.0

        context.energy = e0 - context.dedx * step * 0.5

        d_e = step * context.dedx  # positive for positive step sign

        if e0 - d_e <= mass:
            # Step would stop particle (E_kin <= 0)
            return mom

        mom_loss = mom - math.sqrt((e0 - d_e) ** 2 - mass * mass)

        if self.config.effects.debug_level > 0:
            logger.debug(
                f"momentum_loss: mom = {mom}; E0 = {e0}; dEdx = {context.dedx}; "
                f"dE = {d_e}; mass = {mass}"
            )

        return mom_loss
