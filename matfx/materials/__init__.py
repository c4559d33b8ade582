"""Material catalogue.

Module structure:
    descriptor: MaterialDescriptor and ElementComponent classes
    registry: MaterialRegistry and global convenience functions

Example usage:
    >>> from matfx.materials import get_material, list_materials
    >>> iron = get_material("iron")
    >>> print(iron.density, iron.radiation_length)
    7.874 1.757
    >>> "silicon" in list_materials()
    True
"""

from matfx.materials.descriptor import (
    ElementComponent,
    MaterialDescriptor,
    estimate_mean_excitation_energy,
    radiation_length_element,
)
from matfx.materials.registry import (
    MaterialRegistry,
    get_global_registry,
    get_material,
    list_materials,
    register_material,
)

__all__ = [
    # Descriptor classes
    "MaterialDescriptor",
    "ElementComponent",
    "estimate_mean_excitation_energy",
    "radiation_length_element",
    # Registry classes
    "MaterialRegistry",
    "get_global_registry",
    # Convenience functions
    "get_material",
    "list_materials",
    "register_material",
]
