"""
Spalart-Allmaras Model Corrections.

Each quantity that changes between SA variants has its own family of
interchangeable functions. A model variant picks exactly one function per
family when the evaluator is built:

    VORTICITY_MODELS           Omega  (vorticity / strain magnitude)
    TRIP_MODELS                ft2    (trip term)
    MODIFIED_VORTICITY_MODELS  Shat   (modified vorticity S_tilde)
    DAMPING_MODELS             r      (argument of the fw damping chain)

All functions write their outputs, and the derivatives with respect to
nuHat, into the ``SAModelVariables`` record. They read only fields written
by earlier pipeline steps and never call each other, except that the
negative-nuHat and Edwards variants reuse the baseline formulas.

References:
    Allmaras, Johnson & Spalart, "Modifications and Clarifications for the
    Implementation of the Spalart-Allmaras Turbulence Model", ICCFD7, 2012.
    Edwards & Chandra, "Comparison of Eddy Viscosity-Transport Turbulence
    Models for Three-Dimensional, Shock-Separated Flowfields", AIAA J., 1996.
"""

from .. import constants as C


# =============================================================================
# Vorticity
# =============================================================================

def omega_baseline(var, point, xp):
    """Omega = |ω|, Euclidean norm of the vorticity vector."""
    w = point.vorticity
    var.Omega = xp.sqrt(w[0] * w[0] + w[1] * w[1] + w[2] * w[2])


def omega_edwards(var, point, xp):
    """
    Strain-based vorticity of the Edwards variant.

    Sbar = Σ_ij (∂u_i/∂x_j + ∂u_j/∂x_i) ∂u_i/∂x_j - (2/3) Σ_i (∂u_i/∂x_i)²
    Omega = sqrt(max(Sbar, 0))
    """
    if point.velocity_gradient is None:
        raise ValueError("Edwards vorticity requires PointState.velocity_gradient")

    grad = point.velocity_gradient
    n_dim = point.dimension

    Sbar = 0.0
    for i in range(n_dim):
        for j in range(n_dim):
            Sbar += (grad[i][j] + grad[j][i]) * grad[i][j]
    for i in range(n_dim):
        Sbar -= (2.0 / 3.0) * grad[i][i] ** 2

    # Round-off can push Sbar slightly negative
    var.Omega = xp.sqrt(xp.maximum(Sbar, 0.0))


# =============================================================================
# Trip term ft2
# =============================================================================

def ft2_off(var, xp):
    """No trip term: ft2 = 0."""
    var.ft2 = 0.0
    var.dft2 = 0.0


def ft2_nonzero(var, xp):
    """
    ft2 = ct3 exp(-ct4 Ji²)

    d(ft2)/d(nuHat) = -2 ct4 Ji ft2 dJi
    """
    var.ft2 = var.ct3 * xp.exp(-var.ct4 * var.Ji ** 2)
    var.dft2 = -2.0 * var.ct4 * var.Ji * var.ft2 * var.dJi


# =============================================================================
# Modified vorticity S_tilde
# =============================================================================

def shat_baseline(var, xp):
    """
    S_tilde = max(S + nuHat fv2 / (κ² d²), 1e-10)

    The derivative is zero when the floor is active.
    Required: S, fv2, dfv2, inv_k2_d2.
    """
    nue = var.nue
    Sbar = nue * var.fv2 * var.inv_k2_d2

    var.Shat = xp.maximum(var.S + Sbar, C.SHAT_MIN)

    dSbar = (var.fv2 + nue * var.dfv2) * var.inv_k2_d2
    var.dShat = 0.0 if var.Shat <= C.SHAT_MIN else dSbar


def shat_edwards(var, xp):
    """
    S_tilde = S (1/Ji + fv1), floored at 1e-16 and then at 1e-10.

    Required: S, nu, Ji, fv1, dfv1.
    """
    Shat = xp.maximum(var.S * (1.0 / xp.maximum(var.Ji, C.JI_MIN) + var.fv1), C.SHAT_MIN_EDWARDS)
    var.Shat = xp.maximum(Shat, C.SHAT_MIN)

    dShat = -var.S / (var.Ji ** 2 * var.nu) + var.S * var.dfv1
    var.dShat = 0.0 if var.Shat <= C.SHAT_MIN else dShat


def shat_negative(var, xp):
    """
    Negative-nuHat variant (SA-neg).

    Positive nuHat uses the baseline S_tilde without the Sbar >= -cv2 S
    check (Allmaras et al. 2012, eq. 12). For nuHat <= 0 Shat/dShat keep
    their initial value; the negative source terms never read them.
    """
    if var.nue > 0.0:
        shat_baseline(var, xp)


# =============================================================================
# Damping-chain argument r
# =============================================================================

def r_baseline(var, xp):
    """
    r = min(nuHat / (S_tilde κ² d²), 10)

    The derivative is zero when the clamp is active.
    Required: Shat, dShat, inv_Shat, inv_k2_d2.
    """
    nue = var.nue
    var.r = xp.minimum(nue * var.inv_Shat * var.inv_k2_d2, C.R_MAX)
    dr = (var.Shat - nue * var.dShat) * var.inv_Shat * var.inv_Shat * var.inv_k2_d2
    var.dr = 0.0 if var.r == C.R_MAX else dr


def r_edwards(var, xp):
    """
    r = tanh(r_bsl) / tanh(1)

    The derivative factor (1 - tanh²) is evaluated at the transformed r.
    """
    r_baseline(var, xp)
    tanh_1 = xp.tanh(1.0)
    var.r = xp.tanh(var.r) / tanh_1
    var.dr = (1.0 - xp.tanh(var.r) ** 2) * var.dr / tanh_1


# =============================================================================
# Registries
# =============================================================================

VORTICITY_MODELS = {
    'baseline': omega_baseline,
    'edwards': omega_edwards,
}

TRIP_MODELS = {
    'off': ft2_off,
    'nonzero': ft2_nonzero,
}

MODIFIED_VORTICITY_MODELS = {
    'baseline': shat_baseline,
    'edwards': shat_edwards,
    'negative': shat_negative,
}

DAMPING_MODELS = {
    'baseline': r_baseline,
    'edwards': r_edwards,
}
