"""
Shared pytest fixtures for the test suite.

Point states are chosen in the regimes the SA source terms actually see:
a log-layer point, a near-wall point where r saturates, and a point with
negative nuHat (numerical undershoot).
"""

import pytest

from turbsa.numerics.sa_state import PointState


# Simple shear du/dy = 250 1/s: |ω| = |S| = 250
SHEAR_GRADIENT = ((0.0, 250.0), (0.0, 0.0))


def make_point(**overrides) -> PointState:
    """Log-layer point in air (nu = 1.5e-5), 2D simple shear."""
    kwargs = dict(
        nu_tilde=5e-4,
        nu_tilde_gradient=(0.02, 0.3),
        density=1.2,
        laminar_viscosity=1.8e-5,
        wall_distance=2e-3,
        roughness=0.0,
        volume=1e-3,
    )
    kwargs.update(overrides)
    return PointState.from_velocity_gradient(SHEAR_GRADIENT, **kwargs)


@pytest.fixture
def log_layer_point():
    """Point with 1 < r < 10 and Ji ~ 33."""
    return make_point()


@pytest.fixture
def saturated_point():
    """Large nuHat close to the wall without shear: r hits the clamp of 10."""
    return PointState(
        nu_tilde=1.0,
        nu_tilde_gradient=(0.0, 0.0),
        density=1.0,
        laminar_viscosity=1e-5,
        wall_distance=0.01,
        vorticity=(0.0, 0.0, 0.0),
    )


@pytest.fixture
def negative_point():
    """nuHat undershoot below zero."""
    return make_point(nu_tilde=-1e-4)


@pytest.fixture
def point_yaml(tmp_path):
    """Point state file as read by the loader and the CLI."""
    path = tmp_path / "point.yaml"
    path.write_text(
        "nu_tilde: 5.0e-4\n"
        "nu_tilde_gradient: [0.02, 0.3]\n"
        "density: 1.2\n"
        "laminar_viscosity: 1.8e-5\n"
        "wall_distance: 2.0e-3\n"
        "volume: 1.0e-3\n"
        "velocity_gradient:\n"
        "  - [0.0, 250.0]\n"
        "  - [0.0, 0.0]\n"
    )
    return path


@pytest.fixture
def point_factory():
    """``make_point`` with keyword overrides."""
    return make_point
