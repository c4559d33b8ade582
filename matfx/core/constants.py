"""Physics constants for the material-effects engine.

This module is the Single Source of Truth (SSOT) for all physics constants
used in energy-loss and process-noise calculations. Import from here rather
than defining constants locally.

Units: GeV for energies, momenta and masses; cm for lengths; g/cm³ for
densities; eV for mean excitation energies.

Import Policy:
    from matfx.core.constants import DEFAULT_CONSTANTS, ELECTRON_MASS

DO NOT use: from matfx.core.constants import *
"""

from dataclasses import dataclass

# =============================================================================
# Fundamental Physical Constants
# =============================================================================

# Electron mass [GeV/c²]
ELECTRON_MASS = 0.510998910e-3

# Avogadro's number times 1 barn [mol⁻¹ cm²]
# Converts cross sections in barn to per-gram quantities: N_A * 1e-24
AVOGADRO_BARN = 0.60221367

# =============================================================================
# Material-Effects Physics Constants
# =============================================================================


@dataclass
class PhysicsConstants:
    """Empirical and fundamental constants used by the physics models.

    Units as documented per field.
    """

    m_e: float = ELECTRON_MASS
    """Electron mass [GeV/c²]"""

    K: float = 0.307075
    """Bethe formula constant 4πN_A r_e² m_e c² [MeV·cm²/mol]"""

    ZETA_FACTOR: float = 153.4e3
    """Landau characteristic energy constant K/2 [eV·cm²/g]"""

    HIGHLAND_CONSTANT: float = 0.0136
    """Highland formula constant [GeV]"""

    HIGHLAND_LOG_COEFF: float = 0.038
    """Coefficient of the logarithmic step-length correction"""

    GEANE_CONSTANT: float = 225.0e-6
    """Linear multiple-scattering constant, (15 MeV)² [GeV²]"""

    BREMS_STRAGGLING_FACTOR: float = 1.44
    """Empirical scale of the Bethe-Heitler straggling variance"""

    LOG2_E: float = 1.442695
    """log₂(e), converts path in radiation lengths to powers of 2"""

    SIGMA_ALPHA_MAX: float = 54.6
    """Upper clamp on the truncated-Landau width (0.9996 cut)"""

    URBAN_ALPHA: float = 0.996
    """Urban model cut on the fraction of maximal energy transfer"""


DEFAULT_CONSTANTS = PhysicsConstants()
