"""Step limiting during track propagation.

Submodules:
    interfaces: MaterialInterface and Propagator base classes
    step_limiter: StepLimiter and StepLimitResult
"""

from matfx.stepping.interfaces import MaterialInterface, Propagator
from matfx.stepping.step_limiter import StepLimiter, StepLimitResult

__all__ = [
    "MaterialInterface",
    "Propagator",
    "StepLimiter",
    "StepLimitResult",
]
