"""Physics models of the material-effects engine.

Submodules:
    bremsstrahlung: Radiative dE/dx fit for electrons and positrons
    energy_loss: EnergyLossModel (Bethe-Bloch + bremsstrahlung, RK4 integration)
    process_noise: ProcessNoiseModel (straggling and multiple scattering)
    dedx_curves: dE/dx sampling over a momentum range
"""

from matfx.physics.bremsstrahlung import dedx_brems, positron_correction
from matfx.physics.dedx_curves import sample_dedx_curves
from matfx.physics.energy_loss import EnergyLossModel, relativistic_kinematics
from matfx.physics.process_noise import (
    ProcessNoiseModel,
    StragglingRegime,
    coulomb_noise_block,
    landau_sigma_alpha,
)

__all__ = [
    "EnergyLossModel",
    "relativistic_kinematics",
    "ProcessNoiseModel",
    "StragglingRegime",
    "coulomb_noise_block",
    "landau_sigma_alpha",
    "dedx_brems",
    "positron_correction",
    "sample_dedx_curves",
]
