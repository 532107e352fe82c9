"""
Debug SA turbulence source terms at a single point.

Dumps all terms of the SA source:
- Production: P = cb1 * (1 - ft2) * S_tilde * nuHat
- Destruction: D = (cw1 * fw - cb1 * ft2 / kappa^2) * (nuHat/d)^2
- Cross production: (cb2/sigma) * |grad_nuHat|^2
- Volume-integrated residual and Jacobian d(residual)/d(nuHat)

together with the intermediate functions (Ji, fv1, fv2, S_tilde, r, g, fw).

Usage:
    turbsa-debug point.yaml --variant negative
    turbsa-debug point.yaml --config source.yaml --trip nonzero
"""

import argparse
import sys

from loguru import logger

from .config.loader import load_yaml, from_dict, apply_cli_overrides, load_point_state
from .physics.backend import BACKENDS
from .numerics.sa_sources import MODEL_PRESETS
from .utils.logging import setup_logging


_TERMS = ('production', 'destruction', 'cross_production')
_INTERMEDIATES = (
    'Omega', 'S', 'nu', 'Ji', 'fv1', 'fv2', 'ft2',
    'Shat', 'dShat', 'r', 'dr', 'g', 'glim', 'fw', 'dfw', 'norm2_Grad',
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dump SA source terms for one point")
    parser.add_argument("point_file", help="YAML file with the point state")
    parser.add_argument("--config", default=None, help="YAML source configuration")
    parser.add_argument("--variant", choices=list(MODEL_PRESETS), default=None)
    parser.add_argument("--vorticity", default=None)
    parser.add_argument("--trip", default=None)
    parser.add_argument("--modified-vorticity", dest="modified_vorticity", default=None)
    parser.add_argument("--damping", default=None)
    parser.add_argument("--assembly", default=None)
    parser.add_argument("--backend", choices=BACKENDS, default=None)
    parser.add_argument("--check-finite", dest="check_finite", action="store_true", default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    return parser


def format_report(variant, result, diagnostics) -> str:
    """Render the term breakdown as text."""
    lines = [f"SA variant: {variant}", ""]
    lines.append("Source terms (per unit volume):")
    for name in _TERMS:
        lines.append(f"  {name:<18s} {diagnostics[name]: .6e}")
    lines.append("")
    lines.append(f"  {'residual':<18s} {float(result.residual): .6e}")
    lines.append(f"  {'jacobian':<18s} {float(result.jacobian): .6e}")
    lines.append("")
    lines.append("Intermediate functions:")
    for name in _INTERMEDIATES:
        lines.append(f"  {name:<18s} {diagnostics[name]: .6e}")
    lines.append(f"  {'rough_wall':<18s} {diagnostics['rough_wall']}")
    return "\n".join(lines)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_yaml(args.config) if args.config else from_dict({})
    config = apply_cli_overrides(config, args)

    setup_logging(config.logging.level, show_time=config.logging.show_time)

    evaluator = config.build_evaluator()
    logger.info(f"Evaluating {args.point_file} with {evaluator.variant}")
    if config.evaluation.backend == "jax":
        from .physics.jax_config import get_device_info
        logger.info(get_device_info())

    point = load_point_state(args.point_file)
    result, diagnostics = evaluator.evaluate_with_diagnostics(point)

    print(format_report(evaluator.variant, result, diagnostics))
    return 0


if __name__ == "__main__":
    sys.exit(main())
