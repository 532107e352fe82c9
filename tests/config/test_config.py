"""
Tests for the YAML configuration layer and the point-state loader.
"""

import argparse

import pytest
import numpy as np

from turbsa.config import (
    SourceConfig,
    ModelConfig,
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
    load_point_state,
    point_state_from_dict,
)
from turbsa.numerics.sa_sources import ModelVariant, MODEL_PRESETS, make_sa_source
from turbsa.physics.sa_model import DEFAULT_CONSTANTS


def _cli_args(**values):
    defaults = dict(
        variant=None, vorticity=None, trip=None, modified_vorticity=None,
        damping=None, assembly=None, backend=None, check_finite=None, log_level=None,
    )
    defaults.update(values)
    return argparse.Namespace(**defaults)


class TestSourceConfig:

    def test_defaults(self):
        config = SourceConfig()
        assert config.model.variant == "baseline"
        assert config.evaluation.backend == "numpy"
        assert config.evaluation.check_finite is False
        assert config.logging.level == "INFO"

    def test_default_constants_match_calibration(self):
        assert SourceConfig().constants.to_constants() == DEFAULT_CONSTANTS

    def test_model_to_variant(self):
        model = ModelConfig(variant="edwards", trip="nonzero")
        assert model.to_variant() == MODEL_PRESETS['edwards']._replace(trip='nonzero')

    def test_bad_override_rejected(self):
        with pytest.raises(ValueError, match="Unknown assembly model"):
            ModelConfig(assembly="edwards").to_variant()

    def test_build_evaluator(self):
        config = from_dict({
            'model': {'variant': 'negative'},
            'constants': {'cb1': 0.2},
            'evaluation': {'check_finite': True},
        })
        evaluator = config.build_evaluator()
        assert evaluator.variant == MODEL_PRESETS['negative']
        assert evaluator.constants.cb1 == 0.2
        assert evaluator.check_finite is True
        assert evaluator.backend == 'numpy'

    def test_factory_accepts_config(self):
        config = from_dict({'preset': 'edwards', 'evaluation': {'backend': 'jax'}})
        evaluator = make_sa_source(config)
        assert evaluator.variant == MODEL_PRESETS['edwards']
        assert evaluator.backend == 'jax'


class TestFromDict:

    def test_empty(self):
        assert from_dict({}) == SourceConfig()

    def test_preset(self):
        config = from_dict({'preset': 'edwards'})
        assert config.model.variant == 'edwards'
        assert config.model.to_variant() == MODEL_PRESETS['edwards']

    def test_preset_with_model_overrides(self):
        config = from_dict({'preset': 'negative', 'model': {'trip': 'nonzero'}})
        assert config.model.to_variant() == ModelVariant(
            'baseline', 'nonzero', 'negative', 'baseline', 'negative',
        )

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            from_dict({'preset': 'sst'})

    def test_does_not_mutate_input(self):
        data = {'preset': 'edwards'}
        from_dict(data)
        assert data == {'preset': 'edwards'}

    def test_unknown_keys_are_ignored(self):
        config = from_dict({'model': {'variant': 'negative', 'limiter': 'minmod'}, 'grid': {'n': 3}})
        assert config.model.variant == 'negative'

    def test_string_coercion(self):
        config = from_dict({
            'constants': {'cb1': '1.2e-1', 'kappa': 'not-a-number'},
            'evaluation': {'check_finite': 'on'},
            'logging': {'show_time': 'false'},
        })
        assert config.constants.cb1 == 0.12
        assert config.constants.kappa == 'not-a-number'
        assert config.evaluation.check_finite is True
        assert config.logging.show_time is False


class TestYamlFiles:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == SourceConfig()

    def test_exponent_without_dot(self, tmp_path):
        """PyYAML reads 1e-1 as a string; the loader coerces it."""
        path = tmp_path / "source.yaml"
        path.write_text("constants:\n  cb1: 1e-1\n")
        assert load_yaml(path).constants.cb1 == 0.1

    def test_full_file(self, tmp_path):
        path = tmp_path / "source.yaml"
        path.write_text(
            "preset: edwards\n"
            "model:\n"
            "  damping: baseline\n"
            "evaluation:\n"
            "  backend: jax\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        config = load_yaml(path)
        assert config.model.to_variant() == MODEL_PRESETS['edwards']._replace(damping='baseline')
        assert config.evaluation.backend == 'jax'
        assert config.logging.level == 'DEBUG'

    def test_save_and_reload(self, tmp_path):
        config = from_dict({
            'model': {'variant': 'negative', 'trip': 'nonzero'},
            'constants': {'sigma': 2.0 / 3.0, 'cr1': 0.25},
            'evaluation': {'check_finite': True},
        })
        path = tmp_path / "nested" / "saved.yaml"
        save_yaml(config, path)
        assert load_yaml(path) == config


class TestCliOverrides:

    def test_unset_arguments_keep_config(self):
        config = from_dict({'preset': 'edwards'})
        assert apply_cli_overrides(config, _cli_args()) == config

    def test_overrides(self):
        config = apply_cli_overrides(
            SourceConfig(),
            _cli_args(variant='negative', trip='nonzero', backend='jax', check_finite=True, log_level='DEBUG'),
        )
        assert config.model.to_variant() == MODEL_PRESETS['negative']._replace(trip='nonzero')
        assert config.evaluation.backend == 'jax'
        assert config.evaluation.check_finite is True
        assert config.logging.level == 'DEBUG'

    def test_partial_namespace(self):
        config = apply_cli_overrides(SourceConfig(), argparse.Namespace(damping='edwards'))
        assert config.model.damping == 'edwards'


class TestPointState:

    def test_minimal(self):
        point = point_state_from_dict({
            'nu_tilde': 1e-4, 'density': 1.0, 'laminar_viscosity': 1e-5, 'wall_distance': 0.01,
        })
        assert point.nu_tilde_gradient == (0.0, 0.0, 0.0)
        assert point.vorticity == (0.0, 0.0, 0.0)
        assert point.roughness == 0.0
        assert point.volume == 1.0
        assert point.rotating_frame is False

    @pytest.mark.parametrize("missing", ['nu_tilde', 'density', 'laminar_viscosity', 'wall_distance'])
    def test_missing_required(self, missing):
        data = {'nu_tilde': 1e-4, 'density': 1.0, 'laminar_viscosity': 1e-5, 'wall_distance': 0.01}
        del data[missing]
        with pytest.raises(KeyError, match=missing):
            point_state_from_dict(data)

    def test_derived_from_velocity_gradient(self):
        point = point_state_from_dict({
            'nu_tilde': 1e-4, 'density': 1.0, 'laminar_viscosity': 1e-5, 'wall_distance': 0.01,
            'velocity_gradient': [[0.0, 250.0], [0.0, 0.0]],
        })
        assert point.vorticity == (0.0, 0.0, -250.0)
        assert point.strain_magnitude == pytest.approx(250.0)
        assert point.nu_tilde_gradient == (0.0, 0.0)
        assert point.dimension == 2

    def test_explicit_strain_is_kept(self):
        point = point_state_from_dict({
            'nu_tilde': 1e-4, 'density': 1.0, 'laminar_viscosity': 1e-5, 'wall_distance': 0.01,
            'velocity_gradient': [[0.0, 250.0], [0.0, 0.0]],
            'strain_magnitude': 100.0,
            'rotating_frame': 'yes',
        })
        assert point.vorticity == (0.0, 0.0, -250.0)
        assert point.strain_magnitude == 100.0
        assert point.rotating_frame is True

    def test_explicit_vorticity_wins(self):
        point = point_state_from_dict({
            'nu_tilde': 1e-4, 'density': 1.0, 'laminar_viscosity': 1e-5, 'wall_distance': 0.01,
            'vorticity': [0.0, 0.0, 5.0],
            'velocity_gradient': [[0.0, 250.0], [0.0, 0.0]],
        })
        assert point.vorticity == (0.0, 0.0, 5.0)
        assert point.velocity_gradient == ((0.0, 250.0), (0.0, 0.0))

    def test_load_point_state(self, point_yaml):
        point = load_point_state(point_yaml)
        assert point.nu_tilde == 5e-4
        assert point.volume == 1e-3
        assert point.nu_tilde_gradient == (0.02, 0.3)
        assert np.hypot(*point.vorticity[:2]) == 0.0
        assert point.vorticity[2] == -250.0

    def test_load_missing_point_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_point_state(tmp_path / "nope.yaml")
