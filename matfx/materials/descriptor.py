"""Material descriptors built from elemental composition.

A MaterialDescriptor describes a material the way it is written in a
material table (density plus either element constants or a composition) and
derives the quantities the engine needs. to_properties() produces the
MaterialProperties snapshot handed out by material interfaces.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from matfx.core.materials import VACUUM, MaterialProperties


def estimate_mean_excitation_energy(Z: float) -> float:
    """Rough elemental mean excitation energy I ≈ 16 Z^0.9 [eV]."""
    return 16.0 * Z ** 0.9


def radiation_length_element(Z: float, A: float) -> float:
    """Elemental radiation length [g/cm²].

    Formula:
        X0 [g/cm²] = 716.4 * A / (Z * (Z+1) * ln(287/sqrt(Z)))

    Args:
        Z: Atomic number
        A: Atomic mass [g/mol]

    """
    if Z <= 0:
        raise ValueError(f"Atomic number must be positive: Z={Z}")

    return 716.4 * A / (Z * (Z + 1) * math.log(287 / math.sqrt(Z)))


@dataclass
class ElementComponent:
    """Single element in a material composition.

    Attributes:
        symbol: Element symbol (e.g., 'H', 'O', 'Fe')
        Z: Atomic number
        A: Atomic mass [g/mol]
        weight_fraction: Mass fraction in compound (0-1)
        I_mean: Mean excitation energy [eV]; estimated from Z when None

    """

    symbol: str
    Z: int
    A: float
    weight_fraction: float
    I_mean: float | None = None

    def __post_init__(self):
        """Validate element component."""
        if self.Z <= 0:
            raise ValueError(f"Atomic number must be positive: Z={self.Z}")

        if self.A <= 0:
            raise ValueError(f"Atomic mass must be positive: A={self.A}")

        if not (0 < self.weight_fraction <= 1):
            raise ValueError(
                f"Weight fraction must be in (0, 1]: {self.weight_fraction}",
            )

        if self.I_mean is not None and self.I_mean <= 0:
            raise ValueError(f"Mean excitation energy must be positive: I_mean={self.I_mean}")

    @property
    def mean_excitation_energy(self) -> float:
        if self.I_mean is not None:
            return self.I_mean
        return estimate_mean_excitation_energy(self.Z)


@dataclass
class MaterialDescriptor:
    """Material definition for the material-effects engine.

    A material is given either by element constants (Z, A) or by a
    composition. Whatever is not given directly is derived:

    - Z, A: weight-fraction averages over the composition
    - X0: Bragg additivity, 1/X0 = Σ wi/X0_i, converted to cm at density rho
    - I_mean: Bragg's rule, ln I = Σ wi (Zi/Ai) ln Ii / Σ wi (Zi/Ai)

    A descriptor with Z == 0 and no composition is vacuum.

    Attributes:
        name: Material identifier
        rho: Density [g/cm³]
        X0: Radiation length [cm] (direct or derived)
        composition: Elemental composition for compounds
        I_mean: Mean excitation energy [eV] (direct or derived)
        Z: Atomic number (direct or effective)
        A: Atomic mass [g/mol] (direct or effective)
        X0_derived: True if X0 was computed rather than given
    """

    name: str
    rho: float
    X0: float | None = None
    composition: list[ElementComponent] | None = None
    I_mean: float | None = None
    Z: float | None = None
    A: float | None = None
    X0_derived: bool = field(init=False, default=False)

    def __post_init__(self):
        """Validate and compute derived properties."""
        if self.is_vacuum:
            return

        if self.rho <= 0:
            raise ValueError(f"Density must be positive: rho={self.rho}")

        if self.composition:
            total = sum(e.weight_fraction for e in self.composition)
            if abs(total - 1.0) > 1e-3:
                raise ValueError(
                    f"Material '{self.name}': composition fractions sum to {total}, not 1.0",
                )
            Z_eff, A_eff = self.get_effective_Z_A()
            if self.Z is None:
                self.Z = Z_eff
            if self.A is None:
                self.A = A_eff
        elif self.Z is None or self.A is None:
            raise ValueError(
                f"Material '{self.name}': must provide either Z and A or composition",
            )

        if self.X0 is None:
            self.X0 = self._compute_X0()
            self.X0_derived = True
        elif self.X0 <= 0:
            raise ValueError(f"Radiation length must be positive: X0={self.X0}")

        if self.I_mean is None:
            self.I_mean = self._compute_I_mean()
        elif self.I_mean <= 0:
            raise ValueError(f"Mean excitation energy must be positive: I_mean={self.I_mean}")

    @property
    def is_vacuum(self) -> bool:
        return not self.composition and self.Z == 0

    def _elements(self) -> list[ElementComponent]:
        if self.composition:
            return self.composition
        return [ElementComponent(self.name, self.Z, self.A, 1.0)]

    def _compute_X0(self) -> float:
        """Compute radiation length [cm] using Bragg additivity.

        Formula:
            1/X0_mix = Σ (wi / X0_i)   [g/cm²]

        """
        inv_X0_sum = sum(
            e.weight_fraction / radiation_length_element(e.Z, e.A) for e in self._elements()
        )
        return 1.0 / inv_X0_sum / self.rho

    def _compute_I_mean(self) -> float:
        """Compute mean excitation energy [eV] using Bragg's rule."""
        elements = self._elements()
        weights = [e.weight_fraction * e.Z / e.A for e in elements]
        log_I = sum(
            w * math.log(e.mean_excitation_energy) for w, e in zip(weights, elements)
        )
        return math.exp(log_I / sum(weights))

    def get_effective_Z_A(self) -> tuple[float, float]:
        """Compute effective Z and A for compound.

        Returns:
            (Z_eff, A_eff) weighted by mass fraction

        """
        if not self.composition:
            raise ValueError("Composition required for effective Z/A calculation")

        Z_eff = sum(e.weight_fraction * e.Z for e in self.composition)
        A_eff = sum(e.weight_fraction * e.A for e in self.composition)

        return Z_eff, A_eff

    def to_properties(self) -> MaterialProperties:
        """Snapshot for the engine."""
        if self.is_vacuum:
            return VACUUM

        return MaterialProperties(
            density=self.rho,
            Z=self.Z,
            A=self.A,
            radiation_length=self.X0,
            mean_excitation_energy=self.I_mean,
        )

    def to_dict(self) -> dict:
        """Convert descriptor to dictionary for serialization.

        Derived values are written out as well, so a reloaded descriptor
        gives identical properties.
        """
        data = {
            "name": self.name,
            "rho": self.rho,
            "Z": self.Z,
            "A": self.A,
        }

        if self.X0 is not None:
            data["X0"] = self.X0

        if self.I_mean is not None:
            data["I_mean"] = self.I_mean

        if self.composition:
            data["composition"] = []
            for e in self.composition:
                element = {
                    "symbol": e.symbol,
                    "Z": e.Z,
                    "A": e.A,
                    "weight_fraction": e.weight_fraction,
                }
                if e.I_mean is not None:
                    element["I_mean"] = e.I_mean
                data["composition"].append(element)

        return data

    @classmethod
    def from_dict(cls, data: dict) -> "MaterialDescriptor":
        """Create descriptor from dictionary.

        Args:
            data: Dictionary representation

        Returns:
            MaterialDescriptor instance

        """
        composition = None
        if "composition" in data:
            composition = [
                ElementComponent(
                    symbol=e["symbol"],
                    Z=e["Z"],
                    A=e["A"],
                    weight_fraction=e["weight_fraction"],
                    I_mean=e.get("I_mean"),
                )
                for e in data["composition"]
            ]

        return cls(
            name=data["name"],
            rho=data["rho"],
            X0=data.get("X0"),
            composition=composition,
            I_mean=data.get("I_mean"),
            Z=data.get("Z"),
            A=data.get("A"),
        )
