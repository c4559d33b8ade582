"""Material properties seen by the material-effects engine.

A MaterialProperties instance is an immutable snapshot returned by the
material interface for one position. Snapshots compare by value, which is
how the step limiter detects that a boundary separates different materials.
"""

from dataclasses import astuple, dataclass

from matfx.config.defaults import DEFAULT_VACUUM_Z_THRESHOLD

# Iron (Fe) reference values, PDG
IRON_DENSITY = 7.874  # [g/cm³]
IRON_Z = 26.0
IRON_A = 55.845  # [g/mol]
IRON_RADIATION_LENGTH = 1.757  # [cm]
IRON_MEAN_EXCITATION_ENERGY = 286.0  # [eV]


@dataclass(frozen=True)
class MaterialProperties:
    """Local material properties for energy loss and scattering.

    Attributes:
        density: Density [g/cm³]
        Z: Atomic number (effective for compounds)
        A: Atomic mass [g/mol] (effective for compounds)
        radiation_length: Radiation length X0 [cm]
        mean_excitation_energy: Mean excitation energy I [eV]

    """

    density: float = 0.0
    Z: float = 0.0
    A: float = 0.0
    radiation_length: float = 0.0
    mean_excitation_energy: float = 0.0

    def __post_init__(self):
        """Validate material properties."""
        for name, value in zip(self.field_names(), astuple(self)):
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {name}={value}")

        if self.is_vacuum:
            return

        if self.density <= 0:
            raise ValueError(f"Density must be positive: density={self.density}")

        if self.A <= 0:
            raise ValueError(f"Atomic mass must be positive: A={self.A}")

        if self.radiation_length <= 0:
            raise ValueError(
                f"Radiation length must be positive: radiation_length={self.radiation_length}"
            )

        if self.mean_excitation_energy <= 0:
            raise ValueError(
                f"Mean excitation energy must be positive: I={self.mean_excitation_energy}"
            )

    @staticmethod
    def field_names() -> tuple[str, ...]:
        return ("density", "Z", "A", "radiation_length", "mean_excitation_energy")

    def is_vacuum_at(self, z_threshold: float) -> bool:
        """True if Z is at or below `z_threshold`, so no effect is computed."""
        return self.Z <= z_threshold

    @property
    def is_vacuum(self) -> bool:
        """Vacuum at the default Z threshold.

        Engines use is_vacuum_at() with their configured threshold.
        """
        return self.is_vacuum_at(DEFAULT_VACUUM_Z_THRESHOLD)

    def get_material_properties(self) -> tuple[float, float, float, float, float]:
        """Return (density, Z, A, radiation_length, mean_excitation_energy)."""
        return astuple(self)

    def __str__(self) -> str:
        return (
            f"Density = {self.density}, Z = {self.Z}, A = {self.A}, "
            f"radiation length = {self.radiation_length}, "
            f"mean excitation energy = {self.mean_excitation_energy}"
        )


VACUUM = MaterialProperties()


def create_iron_material() -> MaterialProperties:
    """Create iron material properties.

    Returns:
        MaterialProperties for pure iron

    """
    return MaterialProperties(
        density=IRON_DENSITY,
        Z=IRON_Z,
        A=IRON_A,
        radiation_length=IRON_RADIATION_LENGTH,
        mean_excitation_energy=IRON_MEAN_EXCITATION_ENERGY,
    )
