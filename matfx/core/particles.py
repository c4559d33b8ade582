"""Particle mass and charge lookup by PDG code.

Provides the particle-properties collaborator of the engine: a small table
of the charged particles relevant to tracking, extensible at runtime.
"""

from dataclasses import dataclass

from matfx.core.constants import ELECTRON_MASS
from matfx.core.exceptions import UnknownParticleError


@dataclass(frozen=True)
class ParticleProperties:
    """Static properties of a particle species.

    Attributes:
        name: Particle name
        mass: Rest mass [GeV/c²]
        charge: Electric charge in units of the elementary charge

    """

    name: str
    mass: float
    charge: int


# Masses from the PDG particle listings [GeV/c²], keyed by positive PDG code.
# Charges are those of the particle; the antiparticle has the opposite sign.
_PARTICLES = {
    11: ParticleProperties("e-", ELECTRON_MASS, -1),
    13: ParticleProperties("mu-", 0.1056583745, -1),
    211: ParticleProperties("pi+", 0.13957061, 1),
    321: ParticleProperties("K+", 0.493677, 1),
    2212: ParticleProperties("p", 0.938272081, 1),
    1000010020: ParticleProperties("deuteron", 1.875612928, 1),
    1000020040: ParticleProperties("alpha", 3.727379378, 2),
}

_CHARGE_CONJUGATE = {"+": "-", "-": "+"}


class ParticleTable:
    """PDG code to mass/charge lookup.

    Runtime API:
        - get(pdg) -> ParticleProperties
        - get_mass(pdg) -> float
        - get_charge(pdg) -> int
        - register(pdg, properties) -> None
    """

    def __init__(self):
        self._particles: dict[int, ParticleProperties] = dict(_PARTICLES)

    def register(self, pdg: int, properties: ParticleProperties) -> None:
        """Register a particle under a positive PDG code."""
        if pdg <= 0:
            raise ValueError(f"Register particles under a positive PDG code, got {pdg}")
        self._particles[pdg] = properties

    def get(self, pdg: int) -> ParticleProperties:
        """Look up a particle; negative codes give the antiparticle."""
        base = self._particles.get(abs(pdg))
        if base is None:
            raise UnknownParticleError(pdg)
        if pdg > 0:
            return base
        if base.name[-1] in _CHARGE_CONJUGATE:
            name = base.name[:-1] + _CHARGE_CONJUGATE[base.name[-1]]
        else:
            name = "anti-" + base.name
        return ParticleProperties(name, base.mass, -base.charge)

    def get_mass(self, pdg: int) -> float:
        return self.get(pdg).mass

    def get_charge(self, pdg: int) -> int:
        return self.get(pdg).charge

    def __contains__(self, pdg: int) -> bool:
        return abs(pdg) in self._particles


DEFAULT_PARTICLE_TABLE = ParticleTable()


def get_particle_mass(pdg: int) -> float:
    """Rest mass [GeV/c²] of the particle with the given PDG code."""
    return DEFAULT_PARTICLE_TABLE.get_mass(pdg)


def get_particle_charge(pdg: int) -> int:
    """Charge [e] of the particle with the given PDG code."""
    return DEFAULT_PARTICLE_TABLE.get_charge(pdg)
