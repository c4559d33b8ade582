"""
Configuration Enums for the material-effects engine

This module defines the enumeration types used in the engine configuration.
These enums provide type-safe configuration options and improve code documentation.

Import Policy:
    from matfx.config.enums import ScatteringModel, BremsstrahlungTable

DO NOT use: from matfx.config.enums import *
"""

from enum import Enum


class ScatteringModel(Enum):
    """Multiple Coulomb scattering variance model.

    Options:
        GEANE: Variance linear in step length (PANDA report PV/01-07, eq. 43)
        HIGHLAND: Highland formula with logarithmic step-length correction
            (PDG 2011); not linear in step length

    Note:
        Values are the model names accepted by
        EffectsConfig.set_msc_model() and in YAML configuration files.
    """
    GEANE = "GEANE"
    HIGHLAND = "Highland"


class BremsstrahlungTable(Enum):
    """Coefficient table for the bremsstrahlung energy-loss fit.

    Options:
        MIGDAL: Fit including the Migdal (LPM/dielectric) suppression (default)
        BETHE: Plain Bethe-Heitler fit without Migdal corrections

    Note:
        The table is chosen once when the engine is constructed; it is not
        meant to be switched between steps of a fit.
    """
    MIGDAL = "migdal"
    BETHE = "bethe"
