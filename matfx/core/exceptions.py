"""Error types raised by the material-effects engine.

Every error produced by the core is fatal for the trajectory being fitted:
the caller's fit loop is expected to abort that trajectory rather than
retry. The error kind is carried on the exception so callers can dispatch
on it without matching concrete classes.
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of material-effects errors.

    Options:
        FATAL: The current trajectory extrapolation or fit must be aborted
    """
    FATAL = "fatal"


class MaterialEffectsError(Exception):
    """Base class for all material-effects errors.

    Attributes:
        message: Human readable description
        kind: Error classification (always FATAL in this package)
    """

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.FATAL):
        super().__init__(message)
        self.message = message
        self.kind = kind

    @property
    def fatal(self) -> bool:
        return self.kind is ErrorKind.FATAL

    def set_fatal(self) -> None:
        self.kind = ErrorKind.FATAL


class MaterialInterfaceNotInitializedError(MaterialEffectsError):
    """Raised when an entry point is used before a material interface is set."""

    def __init__(self):
        super().__init__(
            "MaterialEffectsEngine hasn't been initialized with a material interface!"
        )


class EnergyBelowMassError(MaterialEffectsError):
    """Raised when the total energy is at or below the particle rest mass."""

    def __init__(self, where: str, energy: float, mass: float):
        super().__init__(
            f"{where} - Energy <= mass (E = {energy:.6g} GeV, m = {mass:.6g} GeV)"
        )
        self.energy = energy
        self.mass = mass


class BetheBlochValidityError(MaterialEffectsError):
    """Raised when beta*gamma falls below the Bethe-Bloch validity floor."""

    def __init__(self, beta_gamma: float, floor: float):
        super().__init__(
            f"beta*gamma = {beta_gamma:.4g} < {floor}, "
            "Bethe-Bloch implementation not valid anymore!"
        )
        self.beta_gamma = beta_gamma


class MomentumLossExceededError(MaterialEffectsError):
    """Raised when the momentum lost over a segment reaches the momentum."""

    def __init__(self, mom_loss: float, mom: float):
        super().__init__(
            f"momLoss ({mom_loss:.6g} GeV) >= momentum ({mom:.6g} GeV), "
            "aborting extrapolation!"
        )
        self.mom_loss = mom_loss
        self.mom = mom


class MomentumTooLowError(MaterialEffectsError):
    """Raised when the momentum is below the minimum for propagation."""

    def __init__(self, mom: float):
        super().__init__(f"momentum too low: {mom * 1000.0:.4g} MeV")
        self.mom = mom


class UnknownParticleError(MaterialEffectsError, KeyError):
    """Raised when a PDG code has no registered mass and charge."""

    def __init__(self, pdg: int):
        MaterialEffectsError.__init__(self, f"Unknown particle with PDG code {pdg}")
        self.pdg = pdg

    def __str__(self) -> str:
        return self.message


class UnknownScatteringModelError(MaterialEffectsError, ValueError):
    """Raised when an unrecognized multiple-scattering model is selected."""

    def __init__(self, model_name: str, available: list[str]):
        MaterialEffectsError.__init__(
            self,
            f'There is no MSC model called "{model_name}". Maybe it is not '
            f"implemented or you misspelled the model name "
            f"(available: {', '.join(available)})",
        )
        self.model_name = model_name


class UnknownBremsstrahlungTableError(MaterialEffectsError, ValueError):
    """Raised when an unrecognized bremsstrahlung coefficient table is selected."""

    def __init__(self, table_name: str, available: list[str]):
        MaterialEffectsError.__init__(
            self,
            f'There is no bremsstrahlung table called "{table_name}" '
            f"(available: {', '.join(available)})",
        )
        self.table_name = table_name
