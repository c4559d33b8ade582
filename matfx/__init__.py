"""Material effects for Kalman track fitting

Computes, for a charged particle crossing detector material along a
propagated trajectory, the momentum lost to ionization and bremsstrahlung
and the process noise added to the track covariance, and limits the
propagation step by momentum loss and material boundaries.

Key Principles:
- Bethe-Bloch and bremsstrahlung dE/dx, integrated with RK4 in energy
- Ionization straggling with Gaussian/Landau/Urban regimes
- Multiple scattering with the GEANE or Highland model
- Explicitly owned engine instances, no global state

Version: 1.0
"""

__version__ = "1.0"

from matfx.config import MaterialEffectsConfig, create_validated_config, load_config
from matfx.config.enums import BremsstrahlungTable, ScatteringModel
from matfx.core.exceptions import ErrorKind, MaterialEffectsError
from matfx.core.materials import VACUUM, MaterialProperties, create_iron_material
from matfx.core.state import StepLimits, StepLimitType, StepRecord, create_noise_matrix
from matfx.engine import MaterialEffectsEngine, create_engine
from matfx.stepping import MaterialInterface, Propagator, StepLimitResult

__all__ = [
    # Version
    "__version__",
    # Engine
    "MaterialEffectsEngine",
    "create_engine",
    "StepLimitResult",
    # Configuration
    "MaterialEffectsConfig",
    "create_validated_config",
    "load_config",
    "ScatteringModel",
    "BremsstrahlungTable",
    # Data model
    "MaterialProperties",
    "VACUUM",
    "create_iron_material",
    "StepRecord",
    "StepLimits",
    "StepLimitType",
    "create_noise_matrix",
    # Collaborator interfaces
    "MaterialInterface",
    "Propagator",
    # Errors
    "ErrorKind",
    "MaterialEffectsError",
]
