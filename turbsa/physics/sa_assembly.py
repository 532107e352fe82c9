"""
Spalart-Allmaras source term assembly.

Computes Production, Destruction and CrossProduction from the intermediate
record and accumulates d(Production - Destruction)/d(nuHat) into the point
Jacobian:

    P  = cb1 (1 - ft2) S_tilde ν̃
    D  = (cw1 fw - cb1 ft2 / κ²) (ν̃/d)²
    CP = (cb2/σ) |∇ν̃|²

The cross-production term is treated explicitly: it never contributes to the
Jacobian.
"""


# =============================================================================
# Baseline (original SA)
# =============================================================================

def production_baseline(nue, var, acc):
    acc.production = var.cb1 * (1.0 - var.ft2) * var.Shat * nue
    acc.jacobian += var.cb1 * (-var.Shat * nue * var.dft2 + (1.0 - var.ft2) * (nue * var.dShat + var.Shat))


def destruction_baseline(nue, var, acc):
    coeff = var.cw1 * var.fw - var.cb1 * var.ft2 / var.k2
    acc.destruction = coeff * nue * nue / var.dist_i_2
    acc.jacobian -= ((var.cw1 * var.dfw - var.cb1 / var.k2 * var.dft2) * nue * nue / var.dist_i_2
                     + coeff * 2.0 * nue / var.dist_i_2)


def cross_production(nue, var, acc):
    acc.cross_production = var.cb2_sigma * var.norm2_Grad


def assemble_baseline(var, acc):
    """Baseline source terms."""
    nue = var.nue
    production_baseline(nue, var, acc)
    destruction_baseline(nue, var, acc)
    cross_production(nue, var, acc)


# =============================================================================
# Negative nuHat (SA-neg)
# =============================================================================

def production_negative(nue, var, acc):
    acc.production = var.cb1 * (1.0 - var.ct3) * var.S * nue
    acc.jacobian += var.cb1 * (1.0 - var.ct3) * var.S


def destruction_negative(nue, var, acc):
    acc.destruction = var.cw1 * nue * nue / var.dist_i_2
    acc.jacobian -= 2.0 * var.cw1 * nue / var.dist_i_2


def assemble_negative(var, acc):
    """
    SA-neg source terms.

    For nuHat > 0 this is the baseline model. Otherwise production uses the
    unmodified vorticity S and destruction has no fw damping, so neither
    Shat nor the fw chain is read.
    """
    nue = var.nue
    if nue > 0.0:
        assemble_baseline(var, acc)
        return

    production_negative(nue, var, acc)
    destruction_negative(nue, var, acc)
    cross_production(nue, var, acc)


SOURCE_ASSEMBLY_MODELS = {
    'baseline': assemble_baseline,
    'negative': assemble_negative,
}
