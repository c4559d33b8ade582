"""Material interfaces for simple geometries.

HomogeneousMaterialInterface fills all space with one material.
SlabMaterialInterface stacks material layers along the z axis; each layer
is bounded by two planes perpendicular to z. Boundary distances are
straight-line distances, which is exact for the field-free propagator and
a first approximation otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from matfx.core.materials import VACUUM, MaterialProperties
from matfx.stepping.interfaces import MaterialInterface, Propagator

logger = logging.getLogger(__name__)


class HomogeneousMaterialInterface(MaterialInterface):
    """One material everywhere; there are no boundaries."""

    def __init__(self, material: MaterialProperties):
        self.material = material
        self.position = np.zeros(3)
        self.direction = np.array([0.0, 0.0, 1.0])

    def init_track(self, position: np.ndarray, direction: np.ndarray) -> bool:
        self.position = np.asarray(position, dtype=np.float64)
        self.direction = np.asarray(direction, dtype=np.float64)
        return False

    def get_material_parameters(self) -> MaterialProperties:
        return self.material

    def find_next_boundary(
        self,
        propagator: Propagator,
        state7: np.ndarray,
        s_max: float,
        var_field: bool = True,
    ) -> float:
        return s_max


@dataclass(frozen=True)
class Slab:
    """Material layer between two z planes.

    Attributes:
        z_min: Lower plane [cm]
        z_max: Upper plane [cm]
        material: Material filling the layer

    """

    z_min: float
    z_max: float
    material: MaterialProperties

    def __post_init__(self):
        if self.z_max <= self.z_min:
            raise ValueError(f"Slab must have z_max > z_min, got [{self.z_min}, {self.z_max}]")

    def contains(self, z: float) -> bool:
        return self.z_min <= z < self.z_max


class SlabMaterialInterface(MaterialInterface):
    """Material layers perpendicular to the z axis.

    Points outside every slab are filled with `outside`. Slabs may touch but
    not overlap.

    Example:
        >>> iron = create_iron_material()
        >>> interface = SlabMaterialInterface([Slab(0.0, 10.0, iron)])
    """

    def __init__(self, slabs, outside: MaterialProperties = VACUUM):
        self.slabs = sorted(
            (s if isinstance(s, Slab) else Slab(*s) for s in slabs), key=lambda s: s.z_min
        )
        for lower, upper in zip(self.slabs, self.slabs[1:]):
            if upper.z_min < lower.z_max:
                raise ValueError(
                    f"Slabs overlap: [{lower.z_min}, {lower.z_max}] and [{upper.z_min}, {upper.z_max}]"
                )
        self.outside = outside
        self._planes = np.unique([z for s in self.slabs for z in (s.z_min, s.z_max)])
        self.position = np.zeros(3)
        self.direction = np.array([0.0, 0.0, 1.0])
        self._current: Slab | None = None

    def _slab_at(self, z: float) -> Slab | None:
        for slab in self.slabs:
            if slab.contains(z):
                return slab
        return None

    def init_track(self, position: np.ndarray, direction: np.ndarray) -> bool:
        self.position = np.asarray(position, dtype=np.float64)
        self.direction = np.asarray(direction, dtype=np.float64)
        previous = self._current
        self._current = self._slab_at(self.position[2])

        if self.debug_level > 0:
            logger.debug(f"init_track at z = {self.position[2]}: {self.get_material_parameters()}")

        return self._current is not previous

    def get_material_parameters(self) -> MaterialProperties:
        if self._current is None:
            return self.outside
        return self._current.material

    def find_next_boundary(
        self,
        propagator: Propagator,
        state7: np.ndarray,
        s_max: float,
        var_field: bool = True,
    ) -> float:
        sign = -1.0 if s_max < 0 else 1.0
        z = state7[2]
        az = sign * state7[5]

        if az == 0.0 or len(self._planes) == 0:
            return s_max

        distances = (self._planes - z) / az
        ahead = distances[distances > 0.0]
        if ahead.size == 0:
            return s_max

        distance = min(float(ahead.min()), abs(s_max))

        if self.debug_level > 0:
            logger.debug(f"next boundary in {sign * distance} cm")

        return sign * distance
