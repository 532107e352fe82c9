"""
Configuration module for the SA source evaluator.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    SourceConfig,
    ModelConfig,
    ConstantsConfig,
    EvaluationConfig,
    LoggingConfig,
    baseline_preset,
    edwards_preset,
    negative_preset,
)

from .loader import (
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
    load_point_state,
    point_state_from_dict,
)

__all__ = [
    # Schema classes
    'SourceConfig',
    'ModelConfig',
    'ConstantsConfig',
    'EvaluationConfig',
    'LoggingConfig',
    # Presets
    'baseline_preset',
    'edwards_preset',
    'negative_preset',
    # Loader functions
    'load_yaml',
    'from_dict',
    'apply_cli_overrides',
    'save_yaml',
    'load_point_state',
    'point_state_from_dict',
]
