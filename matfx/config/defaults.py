"""
Default Configuration Constants for the material-effects engine

This module contains ALL default values used by the engine.
This is the Single Source of Truth (SSOT) for default configuration.

IMPORTANT Import Policies:
    1. DO NOT use: from matfx.config.defaults import *
       This causes namespace pollution and makes tracking difficult.

    2. DO use explicit imports:
       from matfx.config.defaults import DEFAULT_MIN_STEP, DEFAULT_MAX_REL_MOM_LOSS

    3. DO NOT define defaults elsewhere. All defaults must be in this file.
"""

# =============================================================================
# Effect Toggles
# =============================================================================

# Global switch; True turns every entry point into a no-op
DEFAULT_NO_EFFECTS = False

# Ionization (Bethe-Bloch) energy loss and its straggling noise
DEFAULT_ENERGY_LOSS_BETHE_BLOCH = True
DEFAULT_NOISE_BETHE_BLOCH = True

# Multiple Coulomb scattering noise
DEFAULT_NOISE_COULOMB = True

# Bremsstrahlung energy loss and its straggling noise (electrons/positrons only)
DEFAULT_ENERGY_LOSS_BREMS = True
DEFAULT_NOISE_BREMS = True

# Keep searching past boundaries that separate identical materials
DEFAULT_IGNORE_BOUNDARIES_BETWEEN_EQUAL_MATERIALS = True

# =============================================================================
# Model Selection
# =============================================================================

# Multiple-scattering model name (see enums.ScatteringModel)
DEFAULT_MSC_MODEL = "GEANE"

# Bremsstrahlung coefficient table (see enums.BremsstrahlungTable)
DEFAULT_BREMS_TABLE = "migdal"

# Soft-photon cutoff for bremsstrahlung energy loss [GeV]
# Photons up to this energy count as continuous loss; clamped to the momentum.
DEFAULT_BREMS_PHOTON_CUTOFF = 10000.0

# Debug verbosity; > 0 enables logger.debug narration
DEFAULT_DEBUG_LEVEL = 0

# =============================================================================
# Step Limiting Defaults
# =============================================================================

# Maximum relative momentum loss accumulated before the step must stop
DEFAULT_MAX_REL_MOM_LOSS = 0.01

# Minimum momentum for propagation [GeV] (4 MeV)
DEFAULT_MIN_MOMENTUM = 4.0e-3

# Minimum step [cm] (1 µm); also the probe length used to cross boundaries
DEFAULT_MIN_STEP = 1.0e-4

# Iteration cap of the boundary search; exhaustion accepts the partial step
DEFAULT_MAX_BOUNDARY_ITERATIONS = 100

# =============================================================================
# Numerical Thresholds
# =============================================================================

# Materials with Z at or below this value are vacuum
DEFAULT_VACUUM_Z_THRESHOLD = 1.0e-3

# Steps shorter than this [cm] get no material effects
DEFAULT_MIN_EFFECTS_STEP = 1.0e-8

# Bethe-Bloch validity floor on beta*gamma
DEFAULT_BETA_GAMMA_MIN = 0.05

# Vavilov/Gaussian straggling when zeta / E_max exceeds this ratio
DEFAULT_KAPPA_GAUSSIAN = 0.01

# Truncated-Landau straggling above this number of collisions
DEFAULT_LANDAU_MIN_COLLISIONS = 50.0
