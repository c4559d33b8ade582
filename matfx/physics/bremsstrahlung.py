"""Radiative (bremsstrahlung) energy loss of electrons and positrons.

Parametrized fit of the soft-photon bremsstrahlung loss as a double power
series in X = ln(T/m_e) and Y = ln(k_c/(E·v_l)), following the GEANT 3
routine GBRELE. Two coefficient tables exist: one fitted including the
Migdal suppression (default) and one plain Bethe-Heitler fit.

Coefficient layout (1-based, index 0 unused):
    1..36   S part, 6 powers of X × 2 low powers of Y, then
            4 higher powers of Y with a +24 offset when Y > 0
    61..95  SS part (multiplied by Z), 5 powers of X, same scheme with +15
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from matfx.config.defaults import DEFAULT_BREMS_PHOTON_CUTOFF
from matfx.config.enums import BremsstrahlungTable
from matfx.core.constants import AVOGADRO_BARN, ELECTRON_MASS
from matfx.core.materials import MaterialProperties

_MIGDAL_COEFFICIENTS = np.array([
    0.0, -0.960613E-01, 0.631029E-01, -0.142819E-01, 0.150437E-02, -0.733286E-04,
    0.131404E-05, 0.859343E-01, -0.529023E-01, 0.131899E-01, -0.159201E-02,
    0.926958E-04, -0.208439E-05, -0.684096E+01, 0.370364E+01, -0.786752E+00,
    0.822670E-01, -0.424710E-02, 0.867980E-04, -0.200856E+01, 0.129573E+01,
    -0.306533E+00, 0.343682E-01, -0.185931E-02, 0.392432E-04, 0.127538E+01,
    -0.515705E+00, 0.820644E-01, -0.641997E-02, 0.245913E-03, -0.365789E-05,
    0.115792E+00, -0.463143E-01, 0.725442E-02, -0.556266E-03, 0.208049E-04,
    -0.300895E-06, -0.271082E-01, 0.173949E-01, -0.452531E-02, 0.569405E-03,
    -0.344856E-04, 0.803964E-06, 0.419855E-02, -0.277188E-02, 0.737658E-03,
    -0.939463E-04, 0.569748E-05, -0.131737E-06, -0.318752E-03, 0.215144E-03,
    -0.579787E-04, 0.737972E-05, -0.441485E-06, 0.994726E-08, 0.938233E-05,
    -0.651642E-05, 0.177303E-05, -0.224680E-06, 0.132080E-07, -0.288593E-09,
    -0.245667E-03, 0.833406E-04, -0.129217E-04, 0.915099E-06, -0.247179E-07,
    0.147696E-03, -0.498793E-04, 0.402375E-05, 0.989281E-07, -0.133378E-07,
    -0.737702E-02, 0.333057E-02, -0.553141E-03, 0.402464E-04, -0.107977E-05,
    -0.641533E-02, 0.290113E-02, -0.477641E-03, 0.342008E-04, -0.900582E-06,
    0.574303E-05, 0.908521E-04, -0.256900E-04, 0.239921E-05, -0.741271E-07,
    -0.341260E-04, 0.971711E-05, -0.172031E-06, -0.119455E-06, 0.704166E-08,
    0.341740E-05, -0.775867E-06, -0.653231E-07, 0.225605E-07, -0.114860E-08,
    -0.119391E-06, 0.194885E-07, 0.588959E-08, -0.127589E-08, 0.608247E-10,
])

_BETHE_COEFFICIENTS = np.array([
    0.0, 0.834459E-02, 0.443979E-02, -0.101420E-02, 0.963240E-04, -0.409769E-05,
    0.642589E-07, 0.464473E-02, -0.290378E-02, 0.547457E-03, -0.426949E-04,
    0.137760E-05, -0.131050E-07, -0.547866E-02, 0.156218E-02, -0.167352E-03,
    0.101026E-04, -0.427518E-06, 0.949555E-08, -0.406862E-02, 0.208317E-02,
    -0.374766E-03, 0.317610E-04, -0.130533E-05, 0.211051E-07, 0.158941E-02,
    -0.385362E-03, 0.315564E-04, -0.734968E-06, -0.230387E-07, 0.971174E-09,
    0.467219E-03, -0.154047E-03, 0.202400E-04, -0.132438E-05, 0.431474E-07,
    -0.559750E-09, -0.220958E-02, 0.100698E-02, -0.596464E-04, -0.124653E-04,
    0.142999E-05, -0.394378E-07, 0.477447E-03, -0.184952E-03, -0.152614E-04,
    0.848418E-05, -0.736136E-06, 0.190192E-07, -0.552930E-04, 0.209858E-04,
    0.290001E-05, -0.133254E-05, 0.116971E-06, -0.309716E-08, 0.212117E-05,
    -0.103884E-05, -0.110912E-06, 0.655143E-07, -0.613013E-08, 0.169207E-09,
    0.301125E-04, -0.461920E-04, 0.871485E-05, -0.622331E-06, 0.151800E-07,
    -0.478023E-04, 0.247530E-04, -0.381763E-05, 0.232819E-06, -0.494487E-08,
    -0.336230E-04, 0.223822E-04, -0.384583E-05, 0.252867E-06, -0.572599E-08,
    0.105335E-04, -0.567074E-06, -0.216564E-06, 0.237268E-07, -0.658131E-09,
    0.282025E-05, -0.671965E-06, 0.565858E-07, -0.193843E-08, 0.211839E-10,
    0.157544E-04, -0.304104E-05, -0.624410E-06, 0.120124E-06, -0.457445E-08,
    -0.188222E-05, -0.407118E-06, 0.375106E-06, -0.466881E-07, 0.158312E-08,
    0.945037E-07, 0.564718E-07, -0.319231E-07, 0.371926E-08, -0.123111E-09,
])


@dataclass(frozen=True)
class BremsCoefficients:
    """One bremsstrahlung fit.

    Attributes:
        table: Which fit this is
        c: 101 fit coefficients (index 0 unused)
        xi: Electron-screening term in Z(Z + xi)
        beta: Exponent of the cutoff scaling (k_c/T)^beta
        vl: Y-variable normalization
        migdal: Whether the Migdal correction factor applies

    """

    table: BremsstrahlungTable
    c: np.ndarray
    xi: float
    beta: float
    vl: float
    migdal: bool


BREMS_COEFFICIENTS = {
    BremsstrahlungTable.MIGDAL: BremsCoefficients(
        BremsstrahlungTable.MIGDAL, _MIGDAL_COEFFICIENTS, xi=2.51, beta=0.99, vl=0.00004, migdal=True,
    ),
    BremsstrahlungTable.BETHE: BremsCoefficients(
        BremsstrahlungTable.BETHE, _BETHE_COEFFICIENTS, xi=2.10, beta=1.00, vl=0.001, migdal=False,
    ),
}

# Above THIGH the fit is evaluated at THIGH and rescaled
T_HIGH = 100.0  # [GeV]
C_HIGH = 50.0  # [GeV]

MIGDAL_FACTOR = 0.805485E-10

# Positron correction parameters
_POSITRON_AA = 7522100.0
_POSITRON_A1 = 0.415
_POSITRON_A3 = 0.0021
_POSITRON_A5 = 0.00054


def _series(c: np.ndarray, x: float, y: float) -> tuple[float, float]:
    """Evaluate the two power series S and SS of the fit."""
    s = 0.0
    yy = 1.0
    for i in range(1, 7):
        xx = 1.0
        for j in range(1, 7):
            k = 6 * i + j - 6
            if i > 2 and y > 0.0:
                k += 24
            s += c[k] * xx * yy
            xx *= x
        yy *= y

    ss = 0.0
    yy = 1.0
    for i in range(1, 6):
        xx = 1.0
        for j in range(1, 6):
            k = 5 * i + j + 55
            if i > 2 and y > 0.0:
                k += 15
            ss += c[k] * xx * yy
            xx *= x
        yy *= y

    return s, ss


def _high_energy_ratio(rat: float) -> float:
    return 1.0 - 0.5 * rat + 2.0 * rat * rat / 9.0


def dedx_brems_electron(
    mom: float,
    material: MaterialProperties,
    coefficients: BremsCoefficients = BREMS_COEFFICIENTS[BremsstrahlungTable.MIGDAL],
    photon_cutoff: float = DEFAULT_BREMS_PHOTON_CUTOFF,
) -> float:
    """Electron bremsstrahlung dE/dx [GeV/cm], before any positron correction.

    Args:
        mom: Momentum [GeV]
        material: Material snapshot
        coefficients: Fit to use
        photon_cutoff: Soft-photon cutoff [GeV], clamped to the momentum

    Returns:
        Non-negative energy loss per unit length [GeV/cm]
    """
    if photon_cutoff <= 0.0:
        return 0.0

    bcut = min(photon_cutoff, mom)

    if mom > T_HIGH:
        t = T_HIGH
        kc = C_HIGH if bcut >= T_HIGH else bcut
    else:
        t = mom
        kc = bcut

    e = t + ELECTRON_MASS
    if bcut > t:
        kc = t

    x = math.log(t / ELECTRON_MASS)
    y = math.log(kc / (e * coefficients.vl))

    s, ss = _series(coefficients.c, x, y)
    s += material.Z * ss

    if s <= 0.0:
        return 0.0

    corr = 1.0
    if coefficients.migdal:
        corr = 1.0 / (
            1.0 + MIGDAL_FACTOR * material.density * material.Z * e * e / (material.A * kc * kc)
        )

    fac = material.Z * (material.Z + coefficients.xi) * e * e / (e + ELECTRON_MASS)
    if coefficients.beta == 1.0:
        fac *= kc * corr / t
    else:
        fac *= math.exp(coefficients.beta * math.log(kc * corr / t))
    if fac <= 0.0:
        return 0.0

    dedx = fac * s

    if mom >= T_HIGH:
        if bcut < T_HIGH:
            scale = _high_energy_ratio(bcut / mom) / _high_energy_ratio(bcut / t)
        else:
            scale = bcut * _high_energy_ratio(bcut / mom) / (kc * _high_energy_ratio(kc / t))
        dedx *= scale  # GeV barn

    dedx *= AVOGADRO_BARN * material.density / material.A
    return max(dedx, 0.0)


def positron_correction(
    mom: float, Z: float, photon_cutoff: float = DEFAULT_BREMS_PHOTON_CUTOFF
) -> float:
    """Ratio of positron to electron bremsstrahlung loss.

    Uses the auxiliary variable eta = 1/2 + atan(W)/pi with W an odd
    polynomial in ln(AA·p/Z²).
    """
    eta = 0.0
    if Z > 0.0:
        x = math.log(_POSITRON_AA * mom / (Z * Z))
        if x > -8.0:
            if x >= 9.0:
                eta = 1.0
            else:
                w = _POSITRON_A1 * x + _POSITRON_A3 * x ** 3 + _POSITRON_A5 * x ** 5
                eta = 0.5 + math.atan(w) / math.pi

    if eta < 0.0001:
        return 1.0e-10
    if eta > 0.9999:
        return 1.0

    e0 = min(min(photon_cutoff, mom) / mom, 1.0)
    if e0 < 1.0e-8:
        return 1.0
    return eta * (1.0 - (1.0 - e0) ** (1.0 / eta)) / e0


def dedx_brems(
    mom: float,
    pdg: int,
    material: MaterialProperties,
    table: BremsstrahlungTable = BremsstrahlungTable.MIGDAL,
    photon_cutoff: float = DEFAULT_BREMS_PHOTON_CUTOFF,
) -> float:
    """Bremsstrahlung dE/dx [GeV/cm]; zero for anything but e+/e-."""
    if abs(pdg) != 11:
        return 0.0

    dedx = dedx_brems_electron(mom, material, BREMS_COEFFICIENTS[table], photon_cutoff)

    if pdg == -11:
        dedx *= positron_correction(mom, material.Z, photon_cutoff)

    return dedx
