"""
Numerical evaluation of the SA turbulence source terms.

This module provides:
- Point state, intermediate record and result types
- The SA source evaluator composed from per-family corrections
- Velocity-gradient kinematics (vorticity, strain rate)
"""

from .sa_state import (
    PointState,
    SAModelVariables,
    SourceAccumulator,
    SourceResult,
)

from .sa_sources import (
    ModelVariant,
    MODEL_PRESETS,
    SASourceEvaluator,
    make_sa_source,
    resolve_variant,
)

from .kinematics import (
    vorticity_vector,
    strain_rate_magnitude,
)

__all__ = [
    # State records
    'PointState',
    'SAModelVariables',
    'SourceAccumulator',
    'SourceResult',
    # Evaluator
    'ModelVariant',
    'MODEL_PRESETS',
    'SASourceEvaluator',
    'make_sa_source',
    'resolve_variant',
    # Kinematics
    'vorticity_vector',
    'strain_rate_magnitude',
]
