"""
Spalart-Allmaras turbulence source terms with analytic Jacobians.

Quick start::

    from turbsa import PointState, make_sa_source

    source = make_sa_source('negative')
    point = PointState(nu_tilde=1e-4, nu_tilde_gradient=(0.0, 0.0),
                       density=1.0, laminar_viscosity=1e-5,
                       wall_distance=1e-3, vorticity=(0.0, 0.0, 100.0))
    residual, jacobian = source.evaluate(point)
"""

from .physics.sa_model import SAConstants, DEFAULT_CONSTANTS
from .numerics.sa_state import PointState, SourceResult
from .numerics.sa_sources import (
    ModelVariant,
    MODEL_PRESETS,
    SASourceEvaluator,
    make_sa_source,
    resolve_variant,
)

__version__ = "0.1.0"

__all__ = [
    'SAConstants',
    'DEFAULT_CONSTANTS',
    'PointState',
    'SourceResult',
    'ModelVariant',
    'MODEL_PRESETS',
    'SASourceEvaluator',
    'make_sa_source',
    'resolve_variant',
]
