"""Step bookkeeping shared by the engine, the step limiter and callers.

State vector layout (length 7): (x, y, z, ax, ay, az, q/p), positions in cm,
(ax, ay, az) the unit direction. The process-noise matrix uses the same basis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from matfx.core.materials import MaterialProperties

STATE_DIM = 7
"""Dimension of the track state vector and of the noise matrix"""

MAX_LIMIT = 99.0e99
"""Magnitude of an unset step limit"""


class StepLimitType(Enum):
    """Named reasons for limiting a propagation step.

    Options:
        NO_LIMIT: No limit has been set
        FIELD_CURVATURE: Step limited by field curvature
        MOMENTUM_LOSS: Step limited by the allowed relative momentum loss
        S_MAX: Step limited by the maximum extrapolation length
        S_MAX_PLANE: Step limited by the distance to a target plane
        BOUNDARY: Step limited by a material boundary
        PLANE: Step ends on a target plane
    """
    NO_LIMIT = "no_limit"
    FIELD_CURVATURE = "field_curvature"
    MOMENTUM_LOSS = "momentum_loss"
    S_MAX = "s_max"
    S_MAX_PLANE = "s_max_plane"
    BOUNDARY = "boundary"
    PLANE = "plane"


class StepLimits:
    """Candidate step limits with a shared direction of travel.

    Each limit is stored as an unsigned magnitude; the effective step is the
    smallest magnitude carrying the common step sign. All limits are kept so
    the caller can tell which constraint bound the step.
    """

    def __init__(self, step_sign: float = 1.0):
        self._limits: dict[StepLimitType, float] = {}
        self._step_sign = 1
        self.reset()
        self.set_step_sign(step_sign)

    def reset(self) -> None:
        """Unset all limits and restore a forward step sign."""
        self._limits = {
            t: MAX_LIMIT for t in StepLimitType if t is not StepLimitType.NO_LIMIT
        }
        self._step_sign = 1

    @property
    def step_sign(self) -> int:
        return self._step_sign

    def set_step_sign(self, signed_value: float) -> None:
        """Set the direction of travel from the sign of a value."""
        self._step_sign = 1 if signed_value >= 0 else -1

    def get_limit(self, limit_type: StepLimitType) -> float:
        return self._limits[limit_type]

    def set_limit(self, limit_type: StepLimitType, value: float) -> None:
        self._limits[limit_type] = abs(value)

    def reduce_limit(self, limit_type: StepLimitType, value: float) -> None:
        """Set a limit only if it is tighter than the current one."""
        if abs(value) < self._limits[limit_type]:
            self._limits[limit_type] = abs(value)

    def remove_limit(self, limit_type: StepLimitType) -> None:
        self._limits[limit_type] = MAX_LIMIT

    def get_lowest_limit(self) -> tuple[StepLimitType, float]:
        """Return the binding limit and its magnitude.

        On ties the limit declared first in StepLimitType is reported.
        """
        lowest_type = StepLimitType.NO_LIMIT
        lowest = MAX_LIMIT
        for limit_type, value in self._limits.items():
            if value < lowest:
                lowest_type = limit_type
                lowest = value
        return lowest_type, lowest

    def get_lowest_limit_val(self) -> float:
        return min(self._limits.values())

    def get_lowest_limit_signed_val(self) -> float:
        return self._step_sign * self.get_lowest_limit_val()

    def __str__(self) -> str:
        lines = [f"StepLimits (step sign {self._step_sign:+d}):"]
        for limit_type, value in self._limits.items():
            if value < MAX_LIMIT:
                lines.append(f"  {limit_type.value:>16}: {value:.6g}")
        return "\n".join(lines)


@dataclass
class StepRecord:
    """One step of a propagated trajectory.

    Attributes:
        state7: State vector at the start of the step
        material: Material valid for the whole step
        step_size: Signed step length [cm]

    """

    state7: np.ndarray
    material: MaterialProperties
    step_size: float

    def __post_init__(self):
        self.state7 = np.asarray(self.state7, dtype=np.float64)
        if self.state7.shape != (STATE_DIM,):
            raise ValueError(f"state7 must have shape ({STATE_DIM},), got {self.state7.shape}")

    @property
    def position(self) -> np.ndarray:
        return self.state7[0:3]

    @property
    def direction(self) -> np.ndarray:
        return self.state7[3:6]


@dataclass
class StepContext:
    """Per-step values shared between energy loss and process noise.

    Created fresh for every step so nothing carries over between calls.

    Attributes:
        step_size: Absolute step length [cm]
        material: Material snapshot for the step
        dedx: Average dE/dx over the step [GeV/cm], set by the energy-loss model
        energy: Total energy at the middle of the step [GeV]

    """

    step_size: float
    material: MaterialProperties
    dedx: float = 0.0
    energy: float = 0.0


def create_noise_matrix() -> np.ndarray:
    """Create an empty 7x7 process-noise matrix."""
    return np.zeros((STATE_DIM, STATE_DIM), dtype=np.float64)


def check_noise_matrix(noise: np.ndarray) -> None:
    """Raise ValueError unless `noise` is a 7x7 float array."""
    if not isinstance(noise, np.ndarray) or noise.shape != (STATE_DIM, STATE_DIM):
        shape = getattr(noise, "shape", None)
        raise ValueError(f"noise must be a ({STATE_DIM}, {STATE_DIM}) numpy array, got {shape}")
    if not np.issubdtype(noise.dtype, np.floating):
        raise ValueError(f"noise must have a floating dtype, got {noise.dtype}")
