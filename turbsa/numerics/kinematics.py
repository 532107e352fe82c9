"""
Velocity-gradient kinematics for a single point.

Derives the inputs the SA source terms need from the velocity-gradient
tensor grad[i][j] = ∂u_i/∂x_j (2D or 3D):

    ω = ∇ × u
    |S| = sqrt(2 S_ij S_ij),  S_ij = 0.5 (∂u_i/∂x_j + ∂u_j/∂x_i)
"""

import numpy as np


def vorticity_vector(velocity_gradient) -> tuple:
    """
    Compute the vorticity vector from a velocity-gradient tensor.

    For 2D flow only the z-component is non-zero:
        ω_z = ∂v/∂x - ∂u/∂y

    Parameters
    ----------
    velocity_gradient : array_like, shape (2, 2) or (3, 3)
        grad[i][j] = ∂u_i/∂x_j.

    Returns
    -------
    omega : tuple of 3 floats
    """
    grad = np.asarray(velocity_gradient, dtype=np.float64)
    if grad.shape == (2, 2):
        return (0.0, 0.0, float(grad[1, 0] - grad[0, 1]))
    if grad.shape != (3, 3):
        raise ValueError(f"Velocity gradient must be 2x2 or 3x3, got {grad.shape}")
    return (
        float(grad[2, 1] - grad[1, 2]),
        float(grad[0, 2] - grad[2, 0]),
        float(grad[1, 0] - grad[0, 1]),
    )


def strain_rate_magnitude(velocity_gradient) -> float:
    """
    Compute the strain-rate magnitude |S| = sqrt(2 S_ij S_ij).

    Parameters
    ----------
    velocity_gradient : array_like, shape (n_dim, n_dim)
        grad[i][j] = ∂u_i/∂x_j.

    Returns
    -------
    S_mag : float
    """
    grad = np.asarray(velocity_gradient, dtype=np.float64)
    S_ij = 0.5 * (grad + grad.T)
    return float(np.sqrt(2.0 * np.sum(S_ij * S_ij)))
