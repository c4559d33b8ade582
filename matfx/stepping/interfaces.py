"""Collaborator interfaces consumed by the material-effects engine.

The engine does not model geometry or track propagation itself. It talks
to a MaterialInterface for material lookups and boundary distances, and to
a Propagator for advancing the state vector through the field.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from matfx.core.materials import MaterialProperties


class Propagator(ABC):
    """Advances a 7-component state (x, y, z, ax, ay, az, q/p) along its path."""

    @abstractmethod
    def propagate(self, state7: np.ndarray, step: float, var_field: bool = True) -> np.ndarray:
        """Return the state after a signed path length `step` [cm].

        Args:
            state7: State at the start of the step (not modified)
            step: Signed path length [cm]
            var_field: Whether the field varies along the step
        """


class MaterialInterface(ABC):
    """Material geometry lookup.

    A track is first placed with init_track(); get_material_parameters()
    then describes the material at that point and find_next_boundary()
    measures the distance to the next material discontinuity.
    """

    debug_level: int = 0

    @abstractmethod
    def init_track(self, position: np.ndarray, direction: np.ndarray) -> bool:
        """Place the track at `position` moving along `direction`.

        Returns:
            True if the track entered a different volume
        """

    @abstractmethod
    def get_material_parameters(self) -> MaterialProperties:
        """Material at the current track position."""

    @abstractmethod
    def find_next_boundary(
        self,
        propagator: Propagator,
        state7: np.ndarray,
        s_max: float,
        var_field: bool = True,
    ) -> float:
        """Signed distance to the next material boundary.

        Args:
            propagator: Used to follow curved tracks
            state7: Current state
            s_max: Signed maximum distance to look; its sign is the direction
            var_field: Whether the field varies along the path

        Returns:
            Signed distance, at most |s_max| in magnitude
        """

    def set_debug_level(self, level: int) -> None:
        self.debug_level = level
