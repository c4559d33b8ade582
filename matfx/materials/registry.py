"""Material registry.

Holds named MaterialDescriptors, loaded from YAML. The packaged
materials.yaml next to this module provides common detector materials
(PDG values).
"""

from __future__ import annotations

import warnings
from pathlib import Path

import yaml

from matfx.core.materials import MaterialProperties
from matfx.materials.descriptor import MaterialDescriptor

DEFAULT_MATERIALS_PATH = Path(__file__).parent / "materials.yaml"


class MaterialRegistry:
    """Central registry for material definitions.

    Runtime API:
        - get_descriptor(name) -> MaterialDescriptor
        - get_material(name) -> MaterialProperties
        - list_materials() -> List[str]
        - register_material(descriptor) -> None

    Validation:
        - Value ranges and composition (in MaterialDescriptor)
        - Duplicate names (warning, later definition wins)
    """

    def __init__(self, config_path: str | Path | None = None):
        """Initialize material registry.

        Args:
            config_path: Path to materials.yaml config file

        """
        self._materials: dict[str, MaterialDescriptor] = {}
        self._config_path = config_path

        if config_path:
            self.load_from_yaml(config_path)

    def register_material(self, descriptor: MaterialDescriptor) -> None:
        """Register a material descriptor.

        Args:
            descriptor: MaterialDescriptor to register

        """
        name = descriptor.name

        if name in self._materials:
            warnings.warn(
                f"Material '{name}' already registered. Overwriting.",
                UserWarning,
                stacklevel=2,
            )

        self._materials[name] = descriptor

    def get_descriptor(self, name: str) -> MaterialDescriptor:
        """Get material descriptor by name.

        Raises:
            KeyError: If material not found

        """
        if name not in self._materials:
            available = ", ".join(self.list_materials())
            raise KeyError(
                f"Material '{name}' not found. Available: {available}",
            )

        return self._materials[name]

    def get_material(self, name: str) -> MaterialProperties:
        """Get the engine material snapshot by name.

        Raises:
            KeyError: If material not found

        """
        return self.get_descriptor(name).to_properties()

    def list_materials(self) -> list[str]:
        return list(self._materials.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._materials

    def load_from_yaml(self, yaml_path: str | Path) -> None:
        """Load materials from YAML file.

        Expected format:
            materials:
              - name: iron
                rho: 7.874
                Z: 26
                A: 55.845
                X0: 1.757
                I_mean: 286.0
              - name: water
                rho: 1.0
                I_mean: 75.0
                composition:
                  - {symbol: H, Z: 1, A: 1.008, weight_fraction: 0.111894}
                  - {symbol: O, Z: 8, A: 15.999, weight_fraction: 0.888106}

        Entries that fail validation are skipped with a warning.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If YAML format is invalid

        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Material config not found: {yaml_path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or "materials" not in data:
            raise ValueError("YAML must contain 'materials' key")

        for mat_data in data["materials"]:
            try:
                descriptor = MaterialDescriptor.from_dict(mat_data)
            except (KeyError, TypeError, ValueError) as e:
                warnings.warn(
                    f"Failed to load material '{mat_data.get('name', 'unknown')}': {e}",
                    UserWarning,
                    stacklevel=2,
                )
                continue
            self.register_material(descriptor)

    def save_to_yaml(self, yaml_path: str | Path) -> None:
        """Save all registered materials to YAML file."""
        data = {
            "materials": [mat.to_dict() for mat in self._materials.values()],
        }

        path = Path(yaml_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global registry instance
_global_registry: MaterialRegistry | None = None


def get_global_registry() -> MaterialRegistry:
    """Get or create the global registry, loaded from the packaged materials.yaml."""
    global _global_registry
    if _global_registry is None:
        if DEFAULT_MATERIALS_PATH.exists():
            _global_registry = MaterialRegistry(DEFAULT_MATERIALS_PATH)
        else:
            warnings.warn(
                f"Default material config not found: {DEFAULT_MATERIALS_PATH}. Using empty registry.",
                UserWarning,
                stacklevel=2,
            )
            _global_registry = MaterialRegistry()

    return _global_registry


def get_material(name: str) -> MaterialProperties:
    """Get material properties from the global registry.

    Raises:
        KeyError: If material not found

    """
    return get_global_registry().get_material(name)


def list_materials() -> list[str]:
    return get_global_registry().list_materials()


def register_material(descriptor: MaterialDescriptor) -> None:
    """Register material in global registry."""
    get_global_registry().register_material(descriptor)
