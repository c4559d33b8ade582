"""Tests for core modules: materials, particles, state, exceptions."""

import dataclasses

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from matfx.core.exceptions import (
    BetheBlochValidityError,
    ErrorKind,
    MaterialEffectsError,
    MomentumTooLowError,
    UnknownParticleError,
    UnknownScatteringModelError,
)
from matfx.core.materials import VACUUM, MaterialProperties, create_iron_material
from matfx.core.particles import (
    ParticleProperties,
    ParticleTable,
    get_particle_charge,
    get_particle_mass,
)
from matfx.core.state import (
    MAX_LIMIT,
    StepLimits,
    StepLimitType,
    StepRecord,
    check_noise_matrix,
    create_noise_matrix,
)


class TestMaterialProperties:
    """Tests for the MaterialProperties snapshot."""

    def test_iron_values(self):
        """Test iron reference values."""
        iron = create_iron_material()

        assert iron.density == 7.874
        assert iron.Z == 26.0
        assert iron.A == 55.845
        assert iron.radiation_length == 1.757
        assert iron.mean_excitation_energy == 286.0
        assert not iron.is_vacuum

    def test_equality_by_value(self):
        """Test snapshots with equal values compare equal."""
        assert create_iron_material() == create_iron_material()
        assert create_iron_material() != VACUUM

    def test_vacuum(self):
        """Test the default snapshot is vacuum."""
        assert VACUUM.is_vacuum
        assert MaterialProperties() == VACUUM

    def test_low_z_is_vacuum(self):
        """Test Z at the vacuum threshold counts as vacuum."""
        assert MaterialProperties(Z=1.0e-3).is_vacuum

    def test_vacuum_at_threshold(self, iron):
        """Test the vacuum check against an explicit Z threshold."""
        assert not iron.is_vacuum_at(1.0e-3)
        assert iron.is_vacuum_at(26.0)
        assert VACUUM.is_vacuum_at(0.0)

    def test_immutable(self):
        """Test snapshots cannot be modified."""
        iron = create_iron_material()
        with pytest.raises(dataclasses.FrozenInstanceError):
            iron.Z = 27.0

    def test_negative_value_raises(self):
        """Test negative properties are rejected."""
        with pytest.raises(ValueError, match="must be non-negative"):
            MaterialProperties(density=-1.0, Z=26.0, A=55.845,
                               radiation_length=1.757, mean_excitation_energy=286.0)

    def test_zero_density_material_raises(self):
        """Test a non-vacuum material needs a positive density."""
        with pytest.raises(ValueError, match="Density must be positive"):
            MaterialProperties(density=0.0, Z=26.0, A=55.845,
                               radiation_length=1.757, mean_excitation_energy=286.0)

    def test_zero_excitation_energy_raises(self):
        """Test a non-vacuum material needs a mean excitation energy."""
        with pytest.raises(ValueError, match="Mean excitation energy"):
            MaterialProperties(density=7.874, Z=26.0, A=55.845, radiation_length=1.757)

    def test_get_material_properties(self):
        """Test the tuple accessor order."""
        assert create_iron_material().get_material_properties() == (
            7.874, 26.0, 55.845, 1.757, 286.0,
        )

    def test_str(self):
        """Test the printable form names every property."""
        text = str(create_iron_material())
        assert "Density = 7.874" in text
        assert "radiation length = 1.757" in text


class TestParticleTable:
    """Tests for PDG code lookup."""

    def test_muon(self):
        """Test muon mass and charge."""
        assert_allclose(get_particle_mass(13), 0.1056583745)
        assert get_particle_charge(13) == -1

    def test_antiparticle_flips_charge(self):
        """Test negative codes give the charge-conjugate particle."""
        table = ParticleTable()

        mu_plus = table.get(-13)
        assert mu_plus.charge == 1
        assert mu_plus.name == "mu+"
        assert mu_plus.mass == table.get(13).mass

        assert table.get(-211).name == "pi-"
        assert table.get(-2212).name == "anti-p"

    def test_positron(self):
        """Test positron charge."""
        assert get_particle_charge(-11) == 1
        assert get_particle_charge(11) == -1

    def test_alpha_charge(self):
        """Test doubly charged particles."""
        assert get_particle_charge(1000020040) == 2

    def test_unknown_particle(self):
        """Test unknown codes raise a fatal KeyError."""
        table = ParticleTable()
        with pytest.raises(UnknownParticleError, match="PDG code 99999"):
            table.get(99999)
        with pytest.raises(KeyError):
            table.get_mass(99999)

    def test_register(self):
        """Test registering a new particle."""
        table = ParticleTable()
        table.register(3312, ParticleProperties("Xi-", 1.32171, -1))

        assert 3312 in table
        assert -3312 in table
        assert table.get_charge(-3312) == 1

    def test_register_negative_code_raises(self):
        """Test particles are registered under positive codes only."""
        with pytest.raises(ValueError, match="positive PDG code"):
            ParticleTable().register(-13, ParticleProperties("mu+", 0.105, 1))

    def test_tables_are_independent(self):
        """Test registering in one table leaves others untouched."""
        table = ParticleTable()
        table.register(3312, ParticleProperties("Xi-", 1.32171, -1))

        assert 3312 not in ParticleTable()


class TestStepLimits:
    """Tests for StepLimits bookkeeping."""

    def test_no_limit_by_default(self):
        """Test a fresh set reports no limit."""
        limits = StepLimits()

        assert limits.get_lowest_limit() == (StepLimitType.NO_LIMIT, MAX_LIMIT)
        assert limits.get_lowest_limit_val() == MAX_LIMIT
        assert limits.step_sign == 1

    def test_lowest_limit(self):
        """Test the smallest magnitude wins."""
        limits = StepLimits()
        limits.set_limit(StepLimitType.S_MAX, 10.0)
        limits.set_limit(StepLimitType.BOUNDARY, 2.5)
        limits.set_limit(StepLimitType.MOMENTUM_LOSS, 4.0)

        assert limits.get_lowest_limit() == (StepLimitType.BOUNDARY, 2.5)
        assert limits.get_limit(StepLimitType.S_MAX) == 10.0

    def test_limits_are_unsigned(self):
        """Test limits are stored as magnitudes."""
        limits = StepLimits()
        limits.set_limit(StepLimitType.BOUNDARY, -3.0)

        assert limits.get_limit(StepLimitType.BOUNDARY) == 3.0

    def test_signed_value_uses_step_sign(self):
        """Test the signed lowest value carries the direction of travel."""
        limits = StepLimits(step_sign=-2.0)
        limits.set_limit(StepLimitType.S_MAX, 5.0)

        assert limits.step_sign == -1
        assert limits.get_lowest_limit_signed_val() == -5.0

    def test_tie_reports_first_declared(self):
        """Test ties are reported for the limit declared first."""
        limits = StepLimits()
        limits.set_limit(StepLimitType.BOUNDARY, 1.0)
        limits.set_limit(StepLimitType.MOMENTUM_LOSS, 1.0)

        assert limits.get_lowest_limit()[0] is StepLimitType.MOMENTUM_LOSS

    def test_reduce_limit(self):
        """Test reduce_limit only tightens."""
        limits = StepLimits()
        limits.set_limit(StepLimitType.S_MAX, 5.0)
        limits.reduce_limit(StepLimitType.S_MAX, 7.0)
        assert limits.get_limit(StepLimitType.S_MAX) == 5.0

        limits.reduce_limit(StepLimitType.S_MAX, 3.0)
        assert limits.get_limit(StepLimitType.S_MAX) == 3.0

    def test_remove_and_reset(self):
        """Test removing one limit and resetting all."""
        limits = StepLimits(step_sign=-1)
        limits.set_limit(StepLimitType.S_MAX, 5.0)
        limits.set_limit(StepLimitType.PLANE, 2.0)

        limits.remove_limit(StepLimitType.PLANE)
        assert limits.get_lowest_limit() == (StepLimitType.S_MAX, 5.0)

        limits.reset()
        assert limits.get_lowest_limit_val() == MAX_LIMIT
        assert limits.step_sign == 1

    def test_str_lists_set_limits(self):
        """Test the printable form shows only set limits."""
        limits = StepLimits()
        limits.set_limit(StepLimitType.BOUNDARY, 2.0)

        text = str(limits)
        assert "boundary" in text
        assert "s_max" not in text


class TestStepRecord:
    """Tests for StepRecord."""

    def test_accessors(self, iron):
        """Test position and direction views."""
        record = StepRecord([1, 2, 3, 0, 0, 1, 0.5], iron, 2.0)

        assert record.state7.dtype == np.float64
        assert_array_equal(record.position, [1.0, 2.0, 3.0])
        assert_array_equal(record.direction, [0.0, 0.0, 1.0])

    def test_wrong_shape_raises(self, iron):
        """Test the state must have 7 components."""
        with pytest.raises(ValueError, match="shape"):
            StepRecord(np.zeros(6), iron, 1.0)


class TestNoiseMatrix:
    """Tests for noise-matrix helpers."""

    def test_create(self):
        """Test a fresh noise matrix is a 7x7 zero matrix."""
        noise = create_noise_matrix()

        assert noise.shape == (7, 7)
        assert not noise.any()
        check_noise_matrix(noise)

    def test_wrong_shape(self):
        """Test wrong shapes are rejected."""
        with pytest.raises(ValueError, match="7, 7"):
            check_noise_matrix(np.zeros((6, 6)))

    def test_integer_dtype(self):
        """Test integer matrices are rejected."""
        with pytest.raises(ValueError, match="floating dtype"):
            check_noise_matrix(np.zeros((7, 7), dtype=int))


class TestExceptions:
    """Tests for the error hierarchy."""

    def test_all_errors_are_fatal(self):
        """Test errors carry the FATAL kind."""
        error = BetheBlochValidityError(0.01, 0.05)

        assert isinstance(error, MaterialEffectsError)
        assert error.kind is ErrorKind.FATAL
        assert error.fatal

    def test_momentum_too_low_message(self):
        """Test the message reports the momentum in MeV."""
        error = MomentumTooLowError(3.0e-3)
        assert str(error) == "momentum too low: 3 MeV"

    def test_unknown_model_is_value_error(self):
        """Test the unknown-model error is also a ValueError."""
        error = UnknownScatteringModelError("Moliere", ["GEANE", "Highland"])

        assert isinstance(error, ValueError)
        assert 'There is no MSC model called "Moliere"' in str(error)
