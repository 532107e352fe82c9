"""
Spalart-Allmaras Model Constants and Closed-Form Functions.

This module holds the pieces of the SA source terms that every model variant
shares:

- ``SAConstants``: the calibrated coefficient bundle, including the derived
  combinations (k2, cv1_3, cw3_6, cb2_sigma, cw1) the source terms use.
- The roughness-modified viscosity ratio Ji and the viscous damping
  functions fv1, fv2.
- The destruction damping chain g -> glim -> fw.

Every function returns ``(value, derivative)`` where the derivative is taken
with respect to the SA working variable nuHat, ready for the point-implicit
Jacobian.

Backend Agnostic:
    Functions only use arithmetic and ``xp`` operations, so they work with
    NumPy scalars as well as jax.numpy tracers.
"""

from typing import NamedTuple

from .. import constants as C


class SAConstants(NamedTuple):
    """
    SA coefficient bundle, fixed for the lifetime of an evaluator.

    Use ``SAConstants.from_coefficients`` to build it from the raw model
    coefficients; the derived fields are never set independently.
    """
    cb1: float
    cb2: float
    cw1: float
    cw2: float
    cw3_6: float
    sigma: float
    cb2_sigma: float
    k2: float
    cv1_3: float
    cr1: float
    ct3: float
    ct4: float

    @classmethod
    def from_coefficients(
        cls,
        cb1: float = C.CB1,
        cb2: float = C.CB2,
        sigma: float = C.SIGMA,
        kappa: float = C.KAPPA,
        cv1: float = C.CV1,
        cw2: float = C.CW2,
        cw3: float = C.CW3,
        cr1: float = C.CR1,
        ct3: float = C.CT3,
        ct4: float = C.CT4,
    ) -> "SAConstants":
        """
        Build the bundle from raw SA coefficients.

        cw1 = cb1 / kappa² + (1 + cb2) / sigma
        """
        k2 = kappa ** 2
        return cls(
            cb1=cb1,
            cb2=cb2,
            cw1=cb1 / k2 + (1.0 + cb2) / sigma,
            cw2=cw2,
            cw3_6=cw3 ** 6,
            sigma=sigma,
            cb2_sigma=cb2 / sigma,
            k2=k2,
            cv1_3=cv1 ** 3,
            cr1=cr1,
            ct3=ct3,
            ct4=ct4,
        )


DEFAULT_CONSTANTS = SAConstants.from_coefficients()


def viscosity_ratio(nuHat, nu, roughness, dist, cr1):
    """
    Returns (Ji, d(Ji)/d(nuHat)).

    Ji = nuHat/nu + cr1 * k_s / (d + eps)

    Roughness-modified ratio (Aupoix & Spalart 2003); reduces to the usual
    chi = nuHat/nu on smooth walls (k_s = 0).
    """
    Ji = nuHat / nu + cr1 * (roughness / (dist + C.EPS))
    dJi = 1.0 / nu
    return Ji, dJi


def fv1(Ji, nu, cv1_3):
    """
    Returns (fv1, d(fv1)/d(nuHat)).

    fv1 = Ji³ / (Ji³ + cv1³)
    """
    Ji_2 = Ji * Ji
    Ji_3 = Ji_2 * Ji
    val = Ji_3 / (Ji_3 + cv1_3)
    # d/dJi = 3 Ji² cv1³ / (Ji³ + cv1³)², times dJi/dnuHat = 1/nu
    grad = 3.0 * Ji_2 * cv1_3 / (nu * (Ji_3 + cv1_3) ** 2)
    return val, grad


def fv2(nuHat, nu, Ji, fv1_val, fv1_grad):
    """
    Returns (fv2, d(fv2)/d(nuHat)).

    fv2 = 1 - nuHat / (nu + nuHat * fv1)

    Written in terms of nuHat rather than Ji so that the roughness shift
    does not change S_tilde (NASA TMR form).
    """
    val = 1.0 - nuHat / (nu + nuHat * fv1_val)
    grad = -(1.0 / nu - Ji * Ji * fv1_grad) / (1.0 + Ji * fv1_val) ** 2
    return val, grad


def fw(r, dr, cw2, cw3_6):
    """
    Compute the destruction damping chain from r.

    g    = r + cw2 (r⁶ - r)
    glim = ((1 + cw3⁶) / (g⁶ + cw3⁶))^(1/6)
    fw   = g · glim

    Returns
    -------
    g, g_6, glim, fw : scalars
        Chain values (g_6 = g⁶ is reused by the derivative).
    dg, dfw : scalars
        Derivatives with respect to nuHat, through dr.
    """
    g = r + cw2 * (r ** 6 - r)
    g_6 = g ** 6
    glim = ((1.0 + cw3_6) / (g_6 + cw3_6)) ** (1.0 / 6.0)
    fw_val = g * glim

    dg = dr * (1.0 + cw2 * (6.0 * r ** 5 - 1.0))
    # dfw/dg = glim * (1 - g⁶ / (g⁶ + cw3⁶))
    dfw = dg * glim * (1.0 - g_6 / (g_6 + cw3_6))

    return g, g_6, glim, fw_val, dg, dfw
