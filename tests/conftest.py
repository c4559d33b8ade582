"""Pytest configuration and shared fixtures for matfx tests."""

import numpy as np
import pytest

from matfx.config.engine_config import create_default_config
from matfx.core.materials import MaterialProperties, create_iron_material
from matfx.engine import MaterialEffectsEngine
from matfx.geometry import HomogeneousMaterialInterface, StraightLinePropagator
from matfx.physics.energy_loss import EnergyLossModel
from matfx.physics.process_noise import ProcessNoiseModel


# Fixtures for materials


@pytest.fixture
def iron():
    """Iron (Z=26, A=55.845, rho=7.874, X0=1.757 cm, I=286 eV)."""
    return create_iron_material()


@pytest.fixture
def silicon():
    """Silicon, PDG values."""
    return MaterialProperties(
        density=2.329,
        Z=14.0,
        A=28.0855,
        radiation_length=9.370,
        mean_excitation_energy=173.0,
    )


@pytest.fixture
def lead():
    """Lead, PDG values."""
    return MaterialProperties(
        density=11.35,
        Z=82.0,
        A=207.2,
        radiation_length=0.5612,
        mean_excitation_energy=823.0,
    )


# Fixtures for models and engine


@pytest.fixture
def config():
    """Default engine configuration."""
    return create_default_config()


@pytest.fixture
def energy_loss_model(config):
    """Energy-loss model on the default configuration."""
    return EnergyLossModel(config)


@pytest.fixture
def noise_model(config):
    """Process-noise model on the default configuration."""
    return ProcessNoiseModel(config)


@pytest.fixture
def propagator():
    """Field-free propagator."""
    return StraightLinePropagator()


@pytest.fixture
def iron_interface(iron):
    """All space filled with iron."""
    return HomogeneousMaterialInterface(iron)


@pytest.fixture
def iron_engine(config, iron_interface):
    """Engine in an iron-filled world."""
    return MaterialEffectsEngine(config, iron_interface)


@pytest.fixture
def make_state():
    """Factory for 7-component states (x, y, z, ax, ay, az, q/p)."""

    def _make(position=(0.0, 0.0, 0.0), direction=(0.0, 0.0, 1.0), qop=1.0):
        a = np.asarray(direction, dtype=np.float64)
        a = a / np.linalg.norm(a)
        return np.concatenate([np.asarray(position, dtype=np.float64), a, [qop]])

    return _make
