"""
Array backend selection for the SA source terms.

The model functions only use ``exp``, ``tanh``, ``sqrt``, ``maximum`` and
``minimum`` from the backend module, so the same code runs on:

- ``numpy``: np.float64 scalars, the default for per-point evaluation.
- ``jax``: jax.numpy scalars, differentiable with ``jax.grad``.
"""

import numpy as np

BACKENDS = ('numpy', 'jax')


def get_backend(name: str = "numpy"):
    """Return the math module for a backend name."""
    if name == "numpy":
        return np
    if name == "jax":
        from .jax_config import jnp
        return jnp
    raise ValueError(f"Unknown backend: {name!r}. Use one of {BACKENDS}")


def to_scalar(xp, value):
    """Convert a Python/NumPy number to a 64-bit scalar of backend ``xp``."""
    if xp is np:
        return np.float64(value)
    # jnp.asarray keeps tracers traced, so autodiff reaches the inputs
    return xp.asarray(value, dtype=xp.float64)
