"""
Spalart-Allmaras source term evaluation at one control volume.

Source terms: P - D + CP
  - P:  Production = cb1 (1 - ft2) S_tilde nuHat
  - D:  Destruction = (cw1 fw - cb1 ft2 / κ²) (nuHat/d)²
  - CP: CrossProduction = (cb2/σ) |∇nuHat|²

The evaluator is composed once from one function per correction family
(see ``turbsa.physics.sa_corrections`` and ``turbsa.physics.sa_assembly``)
and then runs the same fixed pipeline for every point:

     1. reset residual, terms and Jacobian
     2. read point primitives
     3. vorticity Omega
     4. rotating-frame correction
     5. wall-distance guard (d <= 1e-10 gives zero residual and Jacobian)
     6. roughness-modified ratio Ji
     7. fv1, fv2
     8. trip term ft2
     9. modified vorticity S_tilde
    10. r, then g -> glim -> fw
    11. |∇nuHat|²
    12. Production, Destruction, CrossProduction and Jacobian
    13. volume integration
"""

from typing import NamedTuple, Optional, Tuple

import numpy as np
from loguru import logger

from .. import constants as C
from ..physics.backend import get_backend, to_scalar
from ..physics.sa_model import SAConstants, DEFAULT_CONSTANTS, viscosity_ratio, fv1, fv2, fw
from ..physics.sa_corrections import (
    VORTICITY_MODELS,
    TRIP_MODELS,
    MODIFIED_VORTICITY_MODELS,
    DAMPING_MODELS,
)
from ..physics.sa_assembly import SOURCE_ASSEMBLY_MODELS
from .sa_state import PointState, SAModelVariables, SourceAccumulator, SourceResult


class ModelVariant(NamedTuple):
    """One choice per correction family."""
    vorticity: str = 'baseline'
    trip: str = 'off'
    modified_vorticity: str = 'baseline'
    damping: str = 'baseline'
    assembly: str = 'baseline'


MODEL_PRESETS = {
    'baseline': ModelVariant(),
    'edwards': ModelVariant(
        vorticity='edwards',
        modified_vorticity='edwards',
        damping='edwards',
    ),
    'negative': ModelVariant(
        modified_vorticity='negative',
        assembly='negative',
    ),
}

_FAMILIES = {
    'vorticity': VORTICITY_MODELS,
    'trip': TRIP_MODELS,
    'modified_vorticity': MODIFIED_VORTICITY_MODELS,
    'damping': DAMPING_MODELS,
    'assembly': SOURCE_ASSEMBLY_MODELS,
}


def resolve_variant(preset: str = 'baseline', **overrides) -> ModelVariant:
    """
    Build a ``ModelVariant`` from a preset name and per-family overrides.

    ``None`` overrides are ignored, so config sections can be passed through
    unchanged.

    Raises
    ------
    ValueError
        Unknown preset, family, or family member.
    """
    if preset not in MODEL_PRESETS:
        raise ValueError(f"Unknown SA variant: {preset!r}. Use one of {list(MODEL_PRESETS)}")

    overrides = {k: v for k, v in overrides.items() if v is not None}
    for family in overrides:
        if family not in _FAMILIES:
            raise ValueError(f"Unknown correction family: {family!r}. Use one of {list(_FAMILIES)}")

    variant = MODEL_PRESETS[preset]._replace(**overrides)
    _check_variant(variant)
    return variant


def _check_variant(variant: ModelVariant) -> None:
    for family, name in variant._asdict().items():
        registry = _FAMILIES[family]
        if name not in registry:
            raise ValueError(
                f"Unknown {family} model: {name!r}. Use one of {list(registry)}"
            )


class SASourceEvaluator:
    """
    Point-implicit SA source term with analytic Jacobian.

    The model variant, constants and backend are fixed at construction. Each
    ``evaluate`` call builds its own intermediate record, so one instance can
    be reused for every point of a mesh. Instances are not thread-safe: the
    term accumulators are overwritten on each call.

    Parameters
    ----------
    variant : str or ModelVariant
        Preset name ('baseline', 'edwards', 'negative') or explicit variant.
    constants : SAConstants, optional
        Model coefficients (default: standard SA calibration).
    backend : str
        'numpy' or 'jax'.
    check_finite : bool
        Log a warning when the residual or Jacobian is not finite. Values are
        returned unchanged either way.
    """

    def __init__(
        self,
        variant='baseline',
        constants: Optional[SAConstants] = None,
        backend: str = 'numpy',
        check_finite: bool = False,
    ):
        if isinstance(variant, str):
            variant = resolve_variant(variant)
        else:
            variant = ModelVariant(*variant)
            _check_variant(variant)

        self._variant = variant
        self._constants = constants if constants is not None else DEFAULT_CONSTANTS
        self._backend = backend
        self._xp = get_backend(backend)
        self.check_finite = check_finite

        self._vorticity = VORTICITY_MODELS[variant.vorticity]
        self._trip = TRIP_MODELS[variant.trip]
        self._modified_vorticity = MODIFIED_VORTICITY_MODELS[variant.modified_vorticity]
        self._damping = DAMPING_MODELS[variant.damping]
        self._assemble = SOURCE_ASSEMBLY_MODELS[variant.assembly]

        self._acc = SourceAccumulator()
        self._residual = 0.0

        logger.debug(f"SA source evaluator: {variant} (backend={backend})")

    @property
    def variant(self) -> ModelVariant:
        return self._variant

    @property
    def constants(self) -> SAConstants:
        return self._constants

    @property
    def backend(self) -> str:
        return self._backend

    @property
    def production(self):
        """Production of the last evaluated point (not volume-integrated)."""
        return self._acc.production

    @property
    def destruction(self):
        """Destruction of the last evaluated point (not volume-integrated)."""
        return self._acc.destruction

    @property
    def cross_production(self):
        """Cross-production of the last evaluated point (not volume-integrated)."""
        return self._acc.cross_production

    @property
    def residual(self):
        return self._residual

    @property
    def jacobian(self):
        return self._acc.jacobian

    def evaluate(self, point: PointState) -> SourceResult:
        """
        Compute the volume-integrated source residual and its Jacobian.

        Never raises for numerical reasons: NaN/Inf from degenerate inputs
        propagate into the result. The Edwards vorticity raises ValueError
        when the point carries no velocity_gradient.
        """
        result, _ = self._run(point)
        return result

    def evaluate_with_diagnostics(self, point: PointState) -> Tuple[SourceResult, dict]:
        """
        Like ``evaluate``, also returning a snapshot of every intermediate
        quantity (as floats) for debugging.
        """
        result, var = self._run(point)
        diagnostics = var.to_dict()
        diagnostics['rough_wall'] = point.roughness > 0.0
        diagnostics['production'] = float(self._acc.production)
        diagnostics['destruction'] = float(self._acc.destruction)
        diagnostics['cross_production'] = float(self._acc.cross_production)
        return result, diagnostics

    def _run(self, point: PointState) -> Tuple[SourceResult, SAModelVariables]:
        if self._xp is np:
            with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
                result, var = self._compute(point)
        else:
            result, var = self._compute(point)

        if self.check_finite and not (self._xp.isfinite(result.residual) and self._xp.isfinite(result.jacobian)):
            logger.warning(
                f"Non-finite SA source: residual={result.residual}, jacobian={result.jacobian} "
                f"(nu_tilde={point.nu_tilde}, wall_distance={point.wall_distance})"
            )
        return result, var

    def _compute(self, point: PointState) -> Tuple[SourceResult, SAModelVariables]:
        xp = self._xp
        zero = to_scalar(xp, 0.0)

        var = SAModelVariables.create(self._constants, zero)
        acc = self._acc
        acc.reset(zero)
        self._residual = zero

        nue = to_scalar(xp, point.nu_tilde)
        density = to_scalar(xp, point.density)
        laminar_viscosity = to_scalar(xp, point.laminar_viscosity)
        dist = to_scalar(xp, point.wall_distance)
        roughness = to_scalar(xp, point.roughness)
        volume = to_scalar(xp, point.volume)
        var.nue = nue

        self._vorticity(var, point, xp)

        if point.rotating_frame:
            strain_mag = to_scalar(xp, point.strain_magnitude)
            var.Omega = var.Omega + 2.0 * xp.minimum(0.0, strain_mag - var.Omega)

        if dist > C.WALL_DIST_MIN:
            var.S = var.Omega

            var.dist_i_2 = dist * dist
            var.nu = laminar_viscosity / density
            var.inv_k2_d2 = 1.0 / (var.k2 * var.dist_i_2)

            var.Ji, var.dJi = viscosity_ratio(nue, var.nu, roughness, dist, var.cr1)
            var.fv1, var.dfv1 = fv1(var.Ji, var.nu, var.cv1_3)
            var.fv2, var.dfv2 = fv2(nue, var.nu, var.Ji, var.fv1, var.dfv1)

            self._trip(var, xp)

            self._modified_vorticity(var, xp)
            var.inv_Shat = 1.0 / var.Shat

            self._damping(var, xp)
            var.g, var.g_6, var.glim, var.fw, var.dg, var.dfw = fw(var.r, var.dr, var.cw2, var.cw3_6)

            grad = point.nu_tilde_gradient
            norm2_Grad = zero
            for i in range(point.dimension):
                norm2_Grad = norm2_Grad + grad[i] * grad[i]
            var.norm2_Grad = norm2_Grad

            self._assemble(var, acc)

            self._residual = (acc.production - acc.destruction + acc.cross_production + acc.add_source_term) * volume
            acc.jacobian = acc.jacobian * volume

        return SourceResult(self._residual, acc.jacobian), var


def make_sa_source(
    variant='baseline',
    constants: Optional[SAConstants] = None,
    backend: str = 'numpy',
    check_finite: bool = False,
    **overrides,
) -> SASourceEvaluator:
    """
    Create an evaluator from a preset name and optional per-family overrides,
    or from a ``SourceConfig`` (which then carries everything else).

    Example
    -------
    >>> source = make_sa_source('baseline', trip='nonzero')
    >>> source.variant.trip
    'nonzero'
    """
    from ..config.schema import SourceConfig

    if isinstance(variant, SourceConfig):
        return variant.build_evaluator()

    return SASourceEvaluator(
        resolve_variant(variant, **overrides),
        constants=constants,
        backend=backend,
        check_finite=check_finite,
    )
