"""
YAML configuration loader with validation.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union
from dataclasses import fields, is_dataclass, replace

from .schema import (
    SourceConfig, ModelConfig, ConstantsConfig, EvaluationConfig, LoggingConfig,
    baseline_preset, edwards_preset, negative_preset,
)
from ..numerics.sa_state import PointState


def _merge_dict(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_type(value, field_type):
    """Coerce value to the expected field type."""
    # Handle string representations of numbers (e.g., "1.2e-1")
    if field_type == float and isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    if field_type == int and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    if field_type == bool and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', 'yes', 'on', '1'):
            return True
        if lowered in ('false', 'no', 'off', '0'):
            return False
    return value


def _dict_to_dataclass(cls, data: dict):
    """Convert a nested dictionary to a dataclass instance."""
    if not is_dataclass(cls):
        return data

    field_types = {f.name: f.type for f in fields(cls)}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            continue  # Skip unknown fields

        field_type = field_types[key]

        # Handle nested dataclasses
        if is_dataclass(field_type) and isinstance(value, dict):
            kwargs[key] = _dict_to_dataclass(field_type, value)
        else:
            # Coerce types for primitive values
            kwargs[key] = _coerce_type(value, field_type)

    return cls(**kwargs)


def load_yaml(path: Union[str, Path]) -> SourceConfig:
    """
    Load source evaluator configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        SourceConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return from_dict(data)


def from_dict(data: Dict[str, Any]) -> SourceConfig:
    """
    Create SourceConfig from a dictionary.

    Handles nested structures and applies defaults for missing values.
    A top-level ``preset`` key selects the model variant; explicit ``model``
    entries still override it.
    """
    data = dict(data)

    # Check for preset
    preset = data.pop('preset', None)
    if preset:
        model_preset = {
            'baseline': baseline_preset(),
            'edwards': edwards_preset(),
            'negative': negative_preset(),
        }.get(preset)
        if model_preset is None:
            raise ValueError(f"Unknown preset: {preset!r}. Use 'baseline', 'edwards' or 'negative'")
        preset_dict = {f.name: getattr(model_preset, f.name) for f in fields(ModelConfig)}
        data['model'] = _merge_dict(preset_dict, data.get('model') or {})

    # Build config section by section
    config_dict = {}

    sections = {
        'model': ModelConfig,
        'constants': ConstantsConfig,
        'evaluation': EvaluationConfig,
        'logging': LoggingConfig,
    }
    for name, cls in sections.items():
        if isinstance(data.get(name), dict):
            config_dict[name] = _dict_to_dataclass(cls, data[name])

    return SourceConfig(**config_dict)


def apply_cli_overrides(config: SourceConfig, args) -> SourceConfig:
    """
    Apply command-line argument overrides to a configuration.

    Only overrides values that were explicitly set (not None).

    Args:
        config: Base configuration
        args: argparse.Namespace with CLI arguments

    Returns:
        Updated SourceConfig
    """
    # Convert to dict for easier manipulation
    config_dict = config.to_dict()

    # Map CLI args to config paths
    cli_mapping = {
        # Model
        'variant': ('model', 'variant'),
        'vorticity': ('model', 'vorticity'),
        'trip': ('model', 'trip'),
        'modified_vorticity': ('model', 'modified_vorticity'),
        'damping': ('model', 'damping'),
        'assembly': ('model', 'assembly'),

        # Evaluation
        'backend': ('evaluation', 'backend'),
        'check_finite': ('evaluation', 'check_finite'),

        # Logging
        'log_level': ('logging', 'level'),
    }

    for cli_name, config_path in cli_mapping.items():
        if hasattr(args, cli_name):
            value = getattr(args, cli_name)
            if value is not None:
                # Navigate to the right nested dict
                target = config_dict
                for key in config_path[:-1]:
                    target = target[key]
                target[config_path[-1]] = value

    return from_dict(config_dict)


def save_yaml(config: SourceConfig, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


_POINT_REQUIRED = ('nu_tilde', 'density', 'laminar_viscosity', 'wall_distance')
_POINT_FLOATS = ('nu_tilde', 'density', 'laminar_viscosity', 'wall_distance',
                 'roughness', 'volume', 'strain_magnitude')


def point_state_from_dict(data: Dict[str, Any]) -> PointState:
    """
    Create a PointState from a dictionary.

    If ``velocity_gradient`` is given and ``vorticity`` is not, the vorticity
    vector and strain-rate magnitude are derived from the gradient.

    Raises:
        KeyError: If a required entry is missing
    """
    for key in _POINT_REQUIRED:
        if key not in data:
            raise KeyError(f"Point state is missing required entry: {key!r}")

    kwargs = {key: float(data[key]) for key in _POINT_FLOATS if key in data}

    grad_velocity = data.get('velocity_gradient')
    n_dim = len(grad_velocity) if grad_velocity is not None else 3
    kwargs['nu_tilde_gradient'] = tuple(
        float(v) for v in data.get('nu_tilde_gradient', [0.0] * n_dim)
    )
    kwargs['rotating_frame'] = bool(_coerce_type(data.get('rotating_frame', False), bool))
    if 'n_dim' in data:
        kwargs['n_dim'] = int(data['n_dim'])

    if grad_velocity is not None:
        grad_velocity = tuple(tuple(float(v) for v in row) for row in grad_velocity)

    if grad_velocity is not None and 'vorticity' not in data:
        strain_magnitude = kwargs.pop('strain_magnitude', None)
        point = PointState.from_velocity_gradient(grad_velocity, **kwargs)
        if strain_magnitude is not None:
            # Keep the caller's strain magnitude, derive only the vorticity
            point = replace(point, strain_magnitude=strain_magnitude)
        return point

    kwargs['vorticity'] = tuple(float(v) for v in data.get('vorticity', (0.0, 0.0, 0.0)))
    kwargs['velocity_gradient'] = grad_velocity
    return PointState(**kwargs)


def load_point_state(path: Union[str, Path]) -> PointState:
    """
    Load a single point state from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        KeyError: If a required entry is missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Point state file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return point_state_from_dict(data)
