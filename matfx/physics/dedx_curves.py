"""dE/dx curves over a momentum range.

Evaluates the ionization and radiative parts of the energy-loss model
separately on a log-spaced momentum grid, for plotting or for comparison
with tabulated stopping powers.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from matfx.core.exceptions import MaterialEffectsError
from matfx.core.materials import MaterialProperties
from matfx.physics.energy_loss import EnergyLossModel

logger = logging.getLogger(__name__)


def _single_process_model(
    model: EnergyLossModel, bethe_bloch: bool, brems: bool
) -> EnergyLossModel:
    """Copy of `model` with only the requested energy-loss processes enabled."""
    config = model.config.copy()
    config.effects.energy_loss_bethe_bloch = bethe_bloch
    config.effects.energy_loss_brems = brems
    return EnergyLossModel(config, model.particles, model.constants)


def sample_dedx_curves(
    model: EnergyLossModel,
    material: MaterialProperties,
    pdg: int,
    min_mom: float = 1.0e-5,
    max_mom: float = 1.0e4,
    n_points: int = 10000,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Sample Bethe-Bloch and bremsstrahlung dE/dx [GeV/cm] versus momentum.

    `model` itself is not modified. Points where the model raises a
    MaterialEffectsError (for example below the Bethe-Bloch validity floor)
    are NaN.

    Args:
        model: Energy-loss model providing particle table and constants
        material: Material to evaluate in
        pdg: PDG particle code
        min_mom: Lowest momentum [GeV]
        max_mom: Highest momentum [GeV]
        n_points: Number of grid points

    Returns:
        (log10_mom, dedx_bethe, dedx_brems) arrays of length n_points
    """
    if not 0 < min_mom < max_mom:
        raise ValueError(f"Need 0 < min_mom < max_mom, got {min_mom}, {max_mom}")
    if n_points < 2:
        raise ValueError(f"n_points must be >= 2, got {n_points}")

    particle = model.particles.get(pdg)
    bethe_model = _single_process_model(model, bethe_bloch=True, brems=False)
    brems_model = _single_process_model(model, bethe_bloch=False, brems=True)

    log10_mom = np.linspace(math.log10(min_mom), math.log10(max_mom), n_points)
    dedx_bethe = np.full(n_points, np.nan)
    dedx_brems = np.full(n_points, np.nan)

    n_failed = 0
    for i, log_p in enumerate(log10_mom):
        energy = math.hypot(10.0 ** log_p, particle.mass)

        try:
            dedx_bethe[i] = bethe_model.dedx(energy, particle.mass, particle.charge, pdg, material)
        except MaterialEffectsError:
            n_failed += 1

        try:
            dedx_brems[i] = brems_model.dedx(energy, particle.mass, particle.charge, pdg, material)
        except MaterialEffectsError:
            n_failed += 1

    if n_failed:
        logger.info(f"sample_dedx_curves: {n_failed} evaluations outside model validity set to NaN")

    return log10_mom, dedx_bethe, dedx_brems
