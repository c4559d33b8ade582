"""Simple geometries and propagators implementing the engine's collaborator interfaces."""

from matfx.geometry.material_interfaces import (
    HomogeneousMaterialInterface,
    Slab,
    SlabMaterialInterface,
)
from matfx.geometry.propagators import StraightLinePropagator

__all__ = [
    "HomogeneousMaterialInterface",
    "Slab",
    "SlabMaterialInterface",
    "StraightLinePropagator",
]
