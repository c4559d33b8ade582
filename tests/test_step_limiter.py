"""Tests for step limiting by momentum loss and material boundaries.

Geometry: SlabMaterialInterface layers along z with the field-free
StraightLinePropagator, so boundary distances are known exactly.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from matfx.config.engine_config import create_default_config
from matfx.core.exceptions import MaterialInterfaceNotInitializedError, MomentumTooLowError
from matfx.core.materials import VACUUM
from matfx.core.state import MAX_LIMIT, StepLimits, StepLimitType
from matfx.geometry import HomogeneousMaterialInterface, Slab, SlabMaterialInterface
from matfx.physics.energy_loss import EnergyLossModel
from matfx.stepping.step_limiter import StepLimiter

MUON = 13


def make_limiter(interface, config=None):
    config = config if config is not None else create_default_config()
    return StepLimiter(EnergyLossModel(config), interface, config)


def s_max_limits(value, step_sign=1):
    limits = StepLimits(step_sign=step_sign)
    limits.set_limit(StepLimitType.S_MAX, value)
    return limits


class TestGuards:
    """Tests for the early exits of the step limiter."""

    def test_momentum_too_low(self, iron_interface, propagator, make_state):
        """Test momenta below 4 MeV are fatal."""
        limiter = make_limiter(iron_interface)

        with pytest.raises(MomentumTooLowError, match="momentum too low") as excinfo:
            limiter.limit_step(propagator, make_state(), 3.0e-3, 0.0, MUON, None, s_max_limits(10.0))
        assert excinfo.value.fatal

    def test_no_interface(self, propagator, make_state):
        """Test a missing material interface is reported."""
        limiter = make_limiter(None)

        with pytest.raises(MaterialInterfaceNotInitializedError):
            limiter.limit_step(propagator, make_state(), 1.0, 0.0, MUON, None, s_max_limits(10.0))

    def test_momentum_loss_exhausted(self, iron_interface, propagator, make_state):
        """Test an exceeded relative momentum loss stops the step."""
        limiter = make_limiter(iron_interface)
        limits = s_max_limits(10.0)

        result = limiter.limit_step(propagator, make_state(), 1.0, 0.02, MUON, None, limits)

        assert limits.get_limit(StepLimitType.MOMENTUM_LOSS) == 0.0
        assert limits.get_lowest_limit() == (StepLimitType.MOMENTUM_LOSS, 0.0)
        assert result.rel_mom_loss == 0.02
        assert result.current_material is None

    def test_step_below_minimum(self, iron, iron_interface, propagator, make_state):
        """Test steps below 1 µm are left alone."""
        limiter = make_limiter(iron_interface)
        limits = s_max_limits(5.0e-5)

        result = limiter.limit_step(propagator, make_state(), 1.0, 0.003, MUON, iron, limits)

        assert result.rel_mom_loss == 0.003
        assert result.current_material == iron
        assert limits.get_limit(StepLimitType.MOMENTUM_LOSS) == MAX_LIMIT
        assert limits.get_limit(StepLimitType.BOUNDARY) == MAX_LIMIT


class TestMomentumLossLimit:
    """Tests for the momentum-loss limit in homogeneous material."""

    def test_loss_reaches_maximum(self, iron, iron_interface, propagator, make_state):
        """Test the step is cut where the relative loss reaches 1%."""
        limiter = make_limiter(iron_interface)
        limits = s_max_limits(100.0)

        result = limiter.limit_step(propagator, make_state(), 1.0, 0.0, MUON, None, limits)

        lowest_type, lowest = limits.get_lowest_limit()
        assert lowest_type is StepLimitType.MOMENTUM_LOSS
        assert_allclose(lowest * result.rel_mom_loss_per_cm, 0.01)
        assert_allclose(result.rel_mom_loss, 0.01)
        assert result.current_material == iron

    def test_accumulated_loss_shortens_step(self, iron_interface, propagator, make_state):
        """Test loss accumulated earlier leaves a shorter step."""
        limiter = make_limiter(iron_interface)
        fresh = s_max_limits(100.0)
        used = s_max_limits(100.0)

        limiter.limit_step(propagator, make_state(), 1.0, 0.0, MUON, None, fresh)
        result = limiter.limit_step(propagator, make_state(), 1.0, 0.006, MUON, None, used)

        assert_allclose(
            used.get_limit(StepLimitType.MOMENTUM_LOSS),
            0.4 * fresh.get_limit(StepLimitType.MOMENTUM_LOSS),
        )
        assert_allclose(result.rel_mom_loss, 0.01)

    def test_short_step_not_cut(self, iron_interface, propagator, make_state):
        """Test a short candidate step is kept and adds its own loss."""
        limiter = make_limiter(iron_interface)
        limits = s_max_limits(0.1)

        result = limiter.limit_step(propagator, make_state(), 1.0, 0.0, MUON, None, limits)

        assert limits.get_lowest_limit() == (StepLimitType.S_MAX, 0.1)
        assert_allclose(result.rel_mom_loss, 0.1 * result.rel_mom_loss_per_cm)

    def test_state_not_modified(self, iron_interface, propagator, make_state):
        """Test the caller's state vector is left untouched."""
        limiter = make_limiter(iron_interface)
        state = make_state(position=(1.0, 2.0, 3.0))
        original = state.copy()

        limiter.limit_step(propagator, state, 1.0, 0.0, MUON, None, s_max_limits(10.0))

        assert np.array_equal(state, original)

    def test_probe_position(self, iron_interface, propagator, make_state):
        """Test the material is probed one minimum step ahead."""
        limiter = make_limiter(iron_interface)

        limiter.limit_step(propagator, make_state(direction=(0.0, 1.0, 0.0)), 1.0, 0.0, MUON,
                           None, s_max_limits(10.0, step_sign=-1))

        assert_allclose(iron_interface.position, [0.0, -1.0e-4, 0.0])
        assert_allclose(iron_interface.direction, [0.0, -1.0, 0.0])

    def test_configured_vacuum_threshold(self, iron_interface, propagator, make_state):
        """Test materials at or below the configured Z threshold add no momentum loss."""
        config = create_default_config()
        config.stepping.vacuum_z_threshold = 26.0
        limiter = make_limiter(iron_interface, config)
        limits = s_max_limits(10.0)

        result = limiter.limit_step(propagator, make_state(), 1.0, 0.0, MUON, None, limits)

        assert result.rel_mom_loss == 0.0
        assert limits.get_limit(StepLimitType.MOMENTUM_LOSS) == MAX_LIMIT


class TestBoundarySearch:
    """Tests for the search across material boundaries."""

    def test_vacuum_to_iron(self, iron, propagator, make_state):
        """Test the step stops at the first material boundary; vacuum adds no loss."""
        interface = SlabMaterialInterface([Slab(0.0, 10.0, iron)])
        limiter = make_limiter(interface)
        limits = s_max_limits(20.0)

        result = limiter.limit_step(
            propagator, make_state(position=(0.0, 0.0, -5.0)), 1.0, 0.0, MUON, None, limits,
        )

        assert result.current_material == VACUUM
        assert result.rel_mom_loss == 0.0
        assert result.rel_mom_loss_per_cm == 0.0
        assert limits.get_limit(StepLimitType.MOMENTUM_LOSS) == MAX_LIMIT
        assert limits.get_lowest_limit()[0] is StepLimitType.BOUNDARY
        assert_allclose(limits.get_limit(StepLimitType.BOUNDARY), 5.0, atol=1e-9)

    def test_backward_step(self, iron, propagator, make_state):
        """Test boundaries are found against the direction of the state for negative steps."""
        interface = SlabMaterialInterface([Slab(0.0, 10.0, iron)])
        limiter = make_limiter(interface)
        limits = s_max_limits(20.0, step_sign=-1)

        result = limiter.limit_step(
            propagator, make_state(position=(0.0, 0.0, 15.0)), 1.0, 0.0, MUON, None, limits,
        )

        assert result.current_material == VACUUM
        assert_allclose(limits.get_limit(StepLimitType.BOUNDARY), 5.0, atol=1e-9)
        assert_allclose(limits.get_lowest_limit_signed_val(), -5.0, atol=1e-9)

    def test_equal_materials_skipped(self, silicon, propagator, make_state):
        """Test boundaries between identical materials are crossed."""
        interface = SlabMaterialInterface([Slab(0.0, 1.0, silicon), Slab(1.0, 2.0, silicon)])
        limiter = make_limiter(interface)
        limits = s_max_limits(10.0)

        result = limiter.limit_step(
            propagator, make_state(position=(0.0, 0.0, 0.5)), 1.0, 0.0, MUON, None, limits,
        )

        assert result.current_material == silicon
        assert result.boundary_iterations == 2
        assert_allclose(limits.get_limit(StepLimitType.BOUNDARY), 1.5, atol=2e-4)
        assert limits.get_lowest_limit()[0] is StepLimitType.BOUNDARY
        assert_allclose(
            result.rel_mom_loss,
            result.rel_mom_loss_per_cm * limits.get_limit(StepLimitType.BOUNDARY),
        )

    def test_equal_materials_not_skipped(self, silicon, propagator, make_state):
        """Test every boundary limits the step when skipping is disabled."""
        config = create_default_config()
        config.effects.ignore_boundaries_between_equal_materials = False
        interface = SlabMaterialInterface([Slab(0.0, 1.0, silicon), Slab(1.0, 2.0, silicon)])
        limiter = make_limiter(interface, config)
        limits = s_max_limits(10.0)

        result = limiter.limit_step(
            propagator, make_state(position=(0.0, 0.0, 0.5)), 1.0, 0.0, MUON, None, limits,
        )

        assert result.boundary_iterations == 1
        assert_allclose(limits.get_limit(StepLimitType.BOUNDARY), 0.5, atol=1e-9)

    def test_iteration_cap_accepts_partial_step(self, silicon, propagator, make_state):
        """Test running out of iterations silently keeps the distance found so far."""
        config = create_default_config()
        config.stepping.max_boundary_iterations = 1
        interface = SlabMaterialInterface([Slab(0.0, 1.0, silicon), Slab(1.0, 2.0, silicon)])
        limiter = make_limiter(interface, config)
        limits = s_max_limits(10.0)

        result = limiter.limit_step(
            propagator, make_state(position=(0.0, 0.0, 0.5)), 1.0, 0.0, MUON, None, limits,
        )

        assert result.boundary_iterations == 1
        assert_allclose(limits.get_limit(StepLimitType.BOUNDARY), 0.5, atol=1e-9)

    def test_no_boundary_within_step(self, iron, propagator, make_state):
        """Test the boundary limit equals the candidate step when nothing is in range."""
        interface = HomogeneousMaterialInterface(iron)
        limiter = make_limiter(interface)
        limits = s_max_limits(0.2)

        limiter.limit_step(propagator, make_state(), 1.0, 0.0, MUON, None, limits)

        assert_allclose(limits.get_limit(StepLimitType.BOUNDARY), 0.2 + 1.0e-4)
        assert limits.get_lowest_limit() == (StepLimitType.S_MAX, 0.2)

    def test_debug_logging(self, iron, propagator, make_state, caplog):
        """Test the search is narrated at debug level."""
        config = create_default_config()
        config.effects.debug_level = 1
        interface = SlabMaterialInterface([Slab(0.0, 10.0, iron)])
        limiter = make_limiter(interface, config)

        with caplog.at_level("DEBUG", logger="matfx.stepping.step_limiter"):
            limiter.limit_step(propagator, make_state(position=(0.0, 0.0, -5.0)), 1.0, 0.0,
                               MUON, None, s_max_limits(20.0))

        assert "currentMaterial" in caplog.text
        assert "made a step of" in caplog.text
