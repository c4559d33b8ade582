"""Process noise from material interactions.

Implements the ProcessNoiseModel. Three independent contributions are added
into a caller-owned 7x7 covariance matrix (never overwritten):

- Ionization straggling: energy-loss variance from a regime switch
  between Gaussian (Vavilov limit), truncated Landau and the Urban
  three-component collision model (GEANT 3 ERLAND), propagated to q/p
- Multiple Coulomb scattering: angular variance from the linear GEANE
  model or the Highland formula, spread over the position/direction block
- Bremsstrahlung straggling: Bethe-Heitler variance for e+/e-, propagated to q/p

The models read the step length, material and average dE/dx from the
StepContext filled by the energy-loss model for the same step.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

import numpy as np

from matfx.config.defaults import DEFAULT_KAPPA_GAUSSIAN, DEFAULT_LANDAU_MIN_COLLISIONS
from matfx.config.engine_config import MaterialEffectsConfig, create_default_config
from matfx.config.enums import ScatteringModel
from matfx.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from matfx.core.particles import DEFAULT_PARTICLE_TABLE, ParticleTable
from matfx.core.state import StepContext

logger = logging.getLogger(__name__)

QOP_INDEX = 6


class StragglingRegime(Enum):
    """Approximation used for the ionization energy-loss variance.

    Options:
        GAUSSIAN: Thick absorber, zeta/E_max > 0.01 (Vavilov-Gaussian limit)
        LANDAU: Thin absorber with many collisions, truncated Landau width
        URBAN: Thin absorber with few collisions, Urban collision model
    """
    GAUSSIAN = "gaussian"
    LANDAU = "landau"
    URBAN = "urban"


def landau_sigma_alpha(rlamax: float, sigma_alpha_max: float = 54.6) -> float:
    """Width of the truncated Landau distribution from lambda_max.

    Empirical polynomial from the GEANT 3 manual (W5013), clamped at
    `sigma_alpha_max` (alpha = 54.6 corresponds to a 0.9996 cut).
    """
    if rlamax <= 1010.0:
        sigma_alpha = (
            1.975560
            + 9.898841e-02 * rlamax
            - 2.828670e-04 * rlamax ** 2
            + 5.345406e-07 * rlamax ** 3
            - 4.942035e-10 * rlamax ** 4
            + 1.729807e-13 * rlamax ** 5
        )
    else:
        sigma_alpha = 1.871887E+01 + 1.296254E-02 * rlamax
    return min(sigma_alpha, sigma_alpha_max)


def coulomb_noise_block(sigma2: float, step: float, direction: np.ndarray) -> np.ndarray:
    """Small-angle multiple-scattering covariance over (x, y, z, ax, ay, az).

    With P = I - a aᵀ the projector transverse to the unit direction a
    (PDG 2010, sec. 27.3):

        cov(x, x) = σ² L²/3 P,  cov(x, a) = σ² L/2 P,  cov(a, a) = σ² P

    Returns:
        Symmetric 6x6 array
    """
    a = np.asarray(direction, dtype=np.float64)
    projector = sigma2 * (np.eye(3) - np.outer(a, a))
    return np.block([
        [step * step / 3.0 * projector, step * 0.5 * projector],
        [step * 0.5 * projector, projector],
    ])


class ProcessNoiseModel:
    """Builds the material process-noise contributions of one step."""

    def __init__(
        self,
        config: MaterialEffectsConfig | None = None,
        particles: ParticleTable | None = None,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
    ):
        self.config = config if config is not None else create_default_config()
        self.particles = particles if particles is not None else DEFAULT_PARTICLE_TABLE
        self.constants = constants

    # ------------------------------------------------------------------
    # Ionization straggling
    # ------------------------------------------------------------------

    def ionization_energy_variance(
        self,
        context: StepContext,
        beta_sq: float,
        gamma: float,
        gamma_sq: float,
        mass: float,
        charge: int,
    ) -> tuple[float, StragglingRegime]:
        """Energy-loss variance sigma²(E) [GeV²] over the step.

        Args:
            context: Step length, material and average dE/dx
            beta_sq, gamma, gamma_sq: Kinematics at the step middle
            mass: Particle mass [GeV]
            charge: Particle charge [e]

        Returns:
            (variance, regime) with variance clamped to >= 0
        """
        material = context.material
        z_mat = material.Z
        step = abs(context.step_size)
        m_e = self.constants.m_e

        zeta = (
            self.constants.ZETA_FACTOR * charge * charge / beta_sq
            * z_mat / material.A * material.density * step
        )  # eV
        e_max = (
            2.0e9 * m_e * beta_sq * gamma_sq
            / (1.0 + 2.0 * gamma * m_e / mass + (m_e / mass) ** 2)
        )  # eV
        kappa = zeta / e_max

        if kappa > DEFAULT_KAPPA_GAUSSIAN:
            sigma2_e = zeta * e_max * (1.0 - beta_sq / 2.0)  # eV^2
            regime = StragglingRegime.GAUSSIAN
        else:
            # Urban/Landau: estimate the number of collisions
            ionization = 16.0 * z_mat ** 0.9  # eV
            f2 = 2.0 / z_mat if z_mat > 2.0 else 0.0
            f1 = 1.0 - f2
            e2 = 10.0 * z_mat * z_mat  # eV
            e1 = (ionization / e2 ** f2) ** (1.0 / f1)  # eV

            mbbgg2 = 2.0e9 * mass * beta_sq * gamma_sq  # eV
            dedx_ev = context.dedx * 1.0e9  # eV/cm
            denominator = math.log(mbbgg2 / ionization) - beta_sq
            sigma1 = dedx_ev * f1 / e1 * (math.log(mbbgg2 / e1) - beta_sq) / denominator * 0.6
            sigma2 = dedx_ev * f2 / e2 * (math.log(mbbgg2 / e2) - beta_sq) / denominator * 0.6
            sigma3 = (
                dedx_ev * e_max
                / (ionization * (e_max + ionization) * math.log((e_max + ionization) / ionization))
                * 0.4
            )  # 1/cm

            n_collisions = (sigma1 + sigma2 + sigma3) * step

            if n_collisions > DEFAULT_LANDAU_MIN_COLLISIONS:
                rlamed = -0.422784 - beta_sq - math.log(zeta / e_max)
                rlamax = 0.60715 + 1.1934 * rlamed + (0.67794 + 0.052382 * rlamed) * math.exp(
                    0.94753 + 0.74442 * rlamed
                )
                sigma_alpha = landau_sigma_alpha(rlamax, self.constants.SIGMA_ALPHA_MAX)
                sigma2_e = sigma_alpha * sigma_alpha * zeta * zeta  # eV^2
                regime = StragglingRegime.LANDAU
            else:
                alpha = self.constants.URBAN_ALPHA
                e_alpha = ionization / (1.0 - alpha * e_max / (e_max + ionization))  # eV
                mean_e32 = ionization * (e_max + ionization) / e_max * (e_alpha - ionization)
                sigma2_e = step * (sigma1 * e1 * e1 + sigma2 * e2 * e2 + sigma3 * mean_e32)
                regime = StragglingRegime.URBAN

        return max(sigma2_e, 0.0) * 1.0e-18, regime  # eV^2 -> GeV^2

    def noise_bethe_bloch(
        self,
        noise: np.ndarray,
        context: StepContext,
        mom: float,
        beta_sq: float,
        gamma: float,
        gamma_sq: float,
        pdg: int,
    ) -> None:
        """Add ionization straggling to the q/p variance of `noise`."""
        particle = self.particles.get(pdg)
        sigma2_e, regime = self.ionization_energy_variance(
            context, beta_sq, gamma, gamma_sq, particle.mass, particle.charge
        )

        if self.config.effects.debug_level > 1:
            logger.debug(f"ionization straggling ({regime.value}): sigma2E = {sigma2_e} GeV^2")

        # linear error propagation from E to q/p
        charge = particle.charge
        noise[QOP_INDEX, QOP_INDEX] += charge * charge / beta_sq / mom ** 4 * sigma2_e

    # ------------------------------------------------------------------
    # Multiple Coulomb scattering
    # ------------------------------------------------------------------

    def coulomb_variance(
        self, context: StepContext, mom_sq: float, beta_sq: float, charge: int
    ) -> float:
        """Projected scattering-angle variance sigma² [rad²], clamped to >= 0."""
        material = context.material
        step = abs(context.step_size)
        z_mat = material.Z
        prefactor = charge * charge / (beta_sq * mom_sq)
        model = self.config.effects.msc_model

        if model is ScatteringModel.GEANE:
            # PANDA report PV/01-07 eq. (43); linear in step length
            sigma2 = (
                self.constants.GEANE_CONSTANT * prefactor * step / material.radiation_length
                * z_mat / (z_mat + 1.0)
                * math.log(159.0 * z_mat ** (-1.0 / 3.0)) / math.log(287.0 * z_mat ** -0.5)
            )
        else:
            # Highland, PDG 2011; not linear in step length
            step_over_rad_length = step / material.radiation_length
            log_cor = 1.0 + self.constants.HIGHLAND_LOG_COEFF * math.log(step_over_rad_length)
            sigma2 = (
                self.constants.HIGHLAND_CONSTANT ** 2 * prefactor
                * step_over_rad_length * log_cor * log_cor
            )

        return max(sigma2, 0.0)

    def noise_coulomb(
        self,
        noise: np.ndarray,
        context: StepContext,
        direction: np.ndarray,
        mom_sq: float,
        beta_sq: float,
        pdg: int,
    ) -> None:
        """Add the multiple-scattering block to positions and directions of `noise`."""
        charge = self.particles.get_charge(pdg)
        sigma2 = self.coulomb_variance(context, mom_sq, beta_sq, charge)
        noise[:6, :6] += coulomb_noise_block(sigma2, abs(context.step_size), direction)

    # ------------------------------------------------------------------
    # Bremsstrahlung straggling
    # ------------------------------------------------------------------

    def brems_energy_variance(self, context: StepContext, mom_sq: float) -> float:
        """Bethe-Heitler energy-loss variance [GeV²], assuming E ≈ p.

        The 1.44 scale is an empirical correction, not part of the
        Bethe-Heitler model.
        """
        minus_x_over_ln2 = (
            -self.constants.LOG2_E * abs(context.step_size) / context.material.radiation_length
        )
        sigma2_e = (
            self.constants.BREMS_STRAGGLING_FACTOR
            * (3.0 ** minus_x_over_ln2 - 4.0 ** minus_x_over_ln2)
            * mom_sq
        )
        return max(sigma2_e, 0.0)

    def noise_brems(
        self,
        noise: np.ndarray,
        context: StepContext,
        mom_sq: float,
        beta_sq: float,
        pdg: int,
    ) -> None:
        """Add bremsstrahlung straggling to the q/p variance (e+/e- only)."""
        if abs(pdg) != 11:
            return

        charge = self.particles.get_charge(pdg)
        sigma2_e = self.brems_energy_variance(context, mom_sq)
        noise[QOP_INDEX, QOP_INDEX] += charge * charge / beta_sq / (mom_sq * mom_sq) * sigma2_e
