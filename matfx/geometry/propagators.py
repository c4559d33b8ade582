"""Propagators for simple setups and tests."""

from __future__ import annotations

import numpy as np

from matfx.stepping.interfaces import Propagator


class StraightLinePropagator(Propagator):
    """Field-free propagation: the position moves along the fixed direction."""

    def propagate(self, state7: np.ndarray, step: float, var_field: bool = True) -> np.ndarray:
        state = np.array(state7, dtype=np.float64)
        state[0:3] += step * state[3:6]
        return state
