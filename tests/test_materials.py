"""Tests for the material catalogue: descriptors and registry.

Reference values (PDG Atomic and Nuclear Properties):
- Iron: X0 = 13.84 g/cm², I = 286 eV
- Lead: X0 = 6.37 g/cm²
- Polyethylene: X0 = 44.77 g/cm², I = 57.4 eV
"""

import math

import pytest
from numpy.testing import assert_allclose

from matfx.core.materials import VACUUM, MaterialProperties, create_iron_material
from matfx.materials import (
    ElementComponent,
    MaterialDescriptor,
    MaterialRegistry,
    estimate_mean_excitation_energy,
    get_global_registry,
    get_material,
    list_materials,
    radiation_length_element,
)


class TestElementFormulas:
    """Tests for per-element estimates."""

    def test_radiation_length_iron(self):
        """Test the X0 fit against the PDG value for iron."""
        assert_allclose(radiation_length_element(26, 55.845), 13.84, rtol=0.03)

    def test_radiation_length_lead(self):
        """Test the X0 fit against the PDG value for lead."""
        assert_allclose(radiation_length_element(82, 207.2), 6.37, rtol=0.03)

    def test_radiation_length_invalid_z(self):
        """Test Z must be positive."""
        with pytest.raises(ValueError, match="Atomic number"):
            radiation_length_element(0, 1.0)

    def test_excitation_estimate(self):
        """Test the 16 Z^0.9 eV estimate."""
        assert_allclose(estimate_mean_excitation_energy(26), 16.0 * 26 ** 0.9)


class TestMaterialDescriptor:
    """Tests for MaterialDescriptor derivations."""

    def test_element_with_direct_values(self):
        """Test an element given by Z, A, X0 and I."""
        iron = MaterialDescriptor("iron", rho=7.874, Z=26, A=55.845, X0=1.757, I_mean=286.0)

        assert not iron.X0_derived
        assert iron.to_properties() == create_iron_material()

    def test_element_derived_x0(self):
        """Test X0 derived for an element is converted to cm."""
        iron = MaterialDescriptor("iron", rho=7.874, Z=26, A=55.845, I_mean=286.0)

        assert iron.X0_derived
        assert_allclose(iron.X0, radiation_length_element(26, 55.845) / 7.874)

    def test_element_estimated_excitation(self):
        """Test I defaults to the Z-based estimate for an element."""
        iron = MaterialDescriptor("iron", rho=7.874, Z=26, A=55.845, X0=1.757)

        assert_allclose(iron.I_mean, estimate_mean_excitation_energy(26), rtol=1e-12)

    def test_compound_derivations(self):
        """Test effective Z/A, Bragg additivity and Bragg's rule for polyethylene."""
        poly = MaterialDescriptor(
            "polyethylene",
            rho=0.94,
            composition=[
                ElementComponent("H", 1, 1.008, 0.143711, I_mean=19.2),
                ElementComponent("C", 6, 12.011, 0.856289, I_mean=78.0),
            ],
        )

        assert_allclose(poly.Z, 0.143711 * 1 + 0.856289 * 6)
        assert_allclose(poly.A, 0.143711 * 1.008 + 0.856289 * 12.011)
        assert poly.X0_derived
        assert_allclose(poly.X0 * poly.rho, 44.77, rtol=0.03)
        assert_allclose(poly.I_mean, 57.4, rtol=0.1)

        weights = [0.143711 / 1.008, 0.856289 * 6 / 12.011]
        expected_I = math.exp(
            (weights[0] * math.log(19.2) + weights[1] * math.log(78.0)) / sum(weights)
        )
        assert_allclose(poly.I_mean, expected_I)

    def test_vacuum(self):
        """Test Z = 0 without composition describes vacuum."""
        vacuum = MaterialDescriptor("vacuum", rho=0.0, Z=0, A=0.0)

        assert vacuum.is_vacuum
        assert vacuum.to_properties() == VACUUM

    def test_missing_z_a(self):
        """Test an element needs Z and A."""
        with pytest.raises(ValueError, match="must provide either Z and A or composition"):
            MaterialDescriptor("unknown", rho=1.0, X0=10.0)

    def test_invalid_density(self):
        """Test density must be positive for real materials."""
        with pytest.raises(ValueError, match="Density must be positive"):
            MaterialDescriptor("iron", rho=-1.0, Z=26, A=55.845)

    def test_fractions_must_sum_to_one(self):
        """Test compositions must be complete."""
        with pytest.raises(ValueError, match="fractions sum"):
            MaterialDescriptor(
                "broken",
                rho=1.0,
                composition=[
                    ElementComponent("H", 1, 1.008, 0.5),
                    ElementComponent("O", 8, 15.999, 0.3),
                ],
            )

    def test_invalid_weight_fraction(self):
        """Test weight fractions must be in (0, 1]."""
        with pytest.raises(ValueError, match="Weight fraction"):
            ElementComponent("H", 1, 1.008, 1.5)

    def test_dict_round_trip(self):
        """Test to_dict/from_dict preserve the engine properties."""
        poly = get_global_registry().get_descriptor("polyethylene")
        reloaded = MaterialDescriptor.from_dict(poly.to_dict())

        assert reloaded.to_properties() == poly.to_properties()


class TestMaterialRegistry:
    """Tests for MaterialRegistry."""

    def test_packaged_materials(self):
        """Test the packaged catalogue."""
        names = list_materials()

        for name in ("vacuum", "air", "water", "silicon", "aluminium",
                     "iron", "copper", "lead", "polyethylene"):
            assert name in names

    def test_get_material_returns_properties(self):
        """Test lookups return engine snapshots."""
        iron = get_material("iron")

        assert isinstance(iron, MaterialProperties)
        assert iron == create_iron_material()
        assert get_material("vacuum").is_vacuum

    def test_water(self):
        """Test water effective properties."""
        water = get_material("water")

        assert water.density == 1.0
        assert water.radiation_length == 36.08
        assert_allclose(water.Z / water.A, 0.5, rtol=0.02)

    def test_unknown_material(self):
        """Test unknown names raise KeyError listing the catalogue."""
        with pytest.raises(KeyError, match="Available"):
            get_material("unobtainium")

    def test_duplicate_warns(self):
        """Test re-registering a name warns and overwrites."""
        registry = MaterialRegistry()
        registry.register_material(MaterialDescriptor("x", rho=1.0, Z=6, A=12.011))

        with pytest.warns(UserWarning, match="already registered"):
            registry.register_material(MaterialDescriptor("x", rho=2.0, Z=6, A=12.011))

        assert registry.get_material("x").density == 2.0

    def test_load_skips_invalid_entries(self, tmp_path):
        """Test invalid YAML entries are skipped with a warning."""
        path = tmp_path / "materials.yaml"
        path.write_text(
            "materials:\n"
            "  - {name: good, rho: 2.0, Z: 6, A: 12.011}\n"
            "  - {name: bad, rho: -1.0, Z: 6, A: 12.011}\n"
        )

        with pytest.warns(UserWarning, match="Failed to load material 'bad'"):
            registry = MaterialRegistry(path)

        assert registry.list_materials() == ["good"]

    def test_load_requires_materials_key(self, tmp_path):
        """Test the top-level key is required."""
        path = tmp_path / "materials.yaml"
        path.write_text("elements: []\n")

        with pytest.raises(ValueError, match="'materials' key"):
            MaterialRegistry(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            MaterialRegistry(tmp_path / "none.yaml")

    def test_save_and_reload(self, tmp_path):
        """Test saving and reloading reproduces every material."""
        original = get_global_registry()
        path = tmp_path / "out" / "materials.yaml"

        original.save_to_yaml(path)
        reloaded = MaterialRegistry(path)

        assert reloaded.list_materials() == original.list_materials()
        for name in original.list_materials():
            assert reloaded.get_material(name) == original.get_material(name)
