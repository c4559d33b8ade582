"""Core data structures for the material-effects engine.

This module contains physics constants, the error hierarchy, material
snapshots, the particle table and step bookkeeping.
"""

from matfx.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from matfx.core.exceptions import (
    BetheBlochValidityError,
    EnergyBelowMassError,
    ErrorKind,
    MaterialEffectsError,
    MaterialInterfaceNotInitializedError,
    MomentumLossExceededError,
    MomentumTooLowError,
    UnknownBremsstrahlungTableError,
    UnknownParticleError,
    UnknownScatteringModelError,
)
from matfx.core.materials import VACUUM, MaterialProperties, create_iron_material
from matfx.core.particles import (
    DEFAULT_PARTICLE_TABLE,
    ParticleProperties,
    ParticleTable,
    get_particle_charge,
    get_particle_mass,
)
from matfx.core.state import (
    MAX_LIMIT,
    STATE_DIM,
    StepContext,
    StepLimits,
    StepLimitType,
    StepRecord,
    check_noise_matrix,
    create_noise_matrix,
)

__all__ = [
    "PhysicsConstants",
    "DEFAULT_CONSTANTS",
    # Errors
    "ErrorKind",
    "MaterialEffectsError",
    "MaterialInterfaceNotInitializedError",
    "EnergyBelowMassError",
    "BetheBlochValidityError",
    "MomentumLossExceededError",
    "MomentumTooLowError",
    "UnknownParticleError",
    "UnknownScatteringModelError",
    "UnknownBremsstrahlungTableError",
    # Materials and particles
    "MaterialProperties",
    "VACUUM",
    "create_iron_material",
    "ParticleProperties",
    "ParticleTable",
    "DEFAULT_PARTICLE_TABLE",
    "get_particle_mass",
    "get_particle_charge",
    # Step bookkeeping
    "STATE_DIM",
    "MAX_LIMIT",
    "StepLimitType",
    "StepLimits",
    "StepRecord",
    "StepContext",
    "create_noise_matrix",
    "check_noise_matrix",
]
