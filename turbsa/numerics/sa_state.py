"""
Data records for SA source-term evaluation.

- ``PointState``: read-only flow/turbulence state at one control volume,
  supplied by the caller.
- ``SAModelVariables``: scratch record holding the model constants and every
  intermediate function of one evaluation. Created fresh per call.
- ``SourceAccumulator``: Production, Destruction, CrossProduction, the
  additional source term, and the Jacobian being assembled.
- ``SourceResult``: the (residual, Jacobian) pair handed back to the solver.
"""

from dataclasses import dataclass, fields, asdict
from typing import NamedTuple, Optional, Sequence

from .kinematics import vorticity_vector, strain_rate_magnitude


@dataclass(frozen=True)
class PointState:
    """
    Flow state at one control volume.

    Attributes
    ----------
    nu_tilde : float
        SA working variable nuHat.
    nu_tilde_gradient : sequence of float, length n_dim
        Gradient of nuHat.
    density, laminar_viscosity : float
        Density and dynamic laminar viscosity (nu = mu / rho).
    wall_distance : float
        Distance to the nearest wall.
    roughness : float
        Equivalent sand-grain roughness of the nearest wall (0 = smooth).
    volume : float
        Control-volume size; the residual and Jacobian are integrated over it.
    vorticity : sequence of float, length 3
        Vorticity vector (only the z-component is non-zero in 2D).
    velocity_gradient : (n_dim, n_dim) nested sequence, optional
        velocity_gradient[i][j] = ∂u_i/∂x_j. Required by the strain-based
        (Edwards) vorticity definition.
    strain_magnitude : float
        Strain-rate magnitude, used by the rotating-frame correction.
    rotating_frame : bool
        Apply the rotation correction to the vorticity.
    n_dim : int, optional
        Spatial dimensionality; defaults to the length of nu_tilde_gradient
        and may not exceed it.
    """
    nu_tilde: float
    nu_tilde_gradient: Sequence[float]
    density: float
    laminar_viscosity: float
    wall_distance: float
    roughness: float = 0.0
    volume: float = 1.0
    vorticity: Sequence[float] = (0.0, 0.0, 0.0)
    velocity_gradient: Optional[Sequence[Sequence[float]]] = None
    strain_magnitude: float = 0.0
    rotating_frame: bool = False
    n_dim: Optional[int] = None

    def __post_init__(self):
        if self.n_dim is not None and self.n_dim > len(self.nu_tilde_gradient):
            raise ValueError(
                f"n_dim={self.n_dim} exceeds the length of nu_tilde_gradient "
                f"({len(self.nu_tilde_gradient)})"
            )

    @property
    def dimension(self) -> int:
        if self.n_dim is not None:
            return self.n_dim
        return len(self.nu_tilde_gradient)

    @classmethod
    def from_velocity_gradient(cls, velocity_gradient, **kwargs) -> "PointState":
        """
        Build a point state whose vorticity vector and strain-rate magnitude
        are derived from the velocity-gradient tensor.
        """
        return cls(
            velocity_gradient=velocity_gradient,
            vorticity=vorticity_vector(velocity_gradient),
            strain_magnitude=strain_rate_magnitude(velocity_gradient),
            **kwargs,
        )


@dataclass
class SAModelVariables:
    """
    Intermediate-state record of one SA source evaluation.

    Constants are copied in from ``SAConstants``; every other field starts at
    zero and is written exactly once, in pipeline order.
    """
    # Model constants
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

    # Point primitives
    nue: float = 0.0
    nu: float = 0.0

    # Vorticity
    Omega: float = 0.0
    S: float = 0.0

    # Viscosity ratio and viscous damping
    Ji: float = 0.0
    dJi: float = 0.0
    fv1: float = 0.0
    dfv1: float = 0.0
    fv2: float = 0.0
    dfv2: float = 0.0

    # Trip term
    ft2: float = 0.0
    dft2: float = 0.0

    # Modified vorticity
    Shat: float = 0.0
    dShat: float = 0.0

    # Destruction damping chain
    r: float = 0.0
    dr: float = 0.0
    g: float = 0.0
    dg: float = 0.0
    glim: float = 0.0
    fw: float = 0.0
    dfw: float = 0.0

    # Helpers
    dist_i_2: float = 0.0
    inv_k2_d2: float = 0.0
    inv_Shat: float = 0.0
    g_6: float = 0.0
    norm2_Grad: float = 0.0

    @classmethod
    def create(cls, constants, zero) -> "SAModelVariables":
        """
        Fresh record with ``constants`` copied in and every intermediate set
        to ``zero`` (a backend scalar, so later divisions follow IEEE rules).
        """
        var = cls(**constants._asdict())
        n_constants = len(constants._fields)
        for f in fields(cls)[n_constants:]:
            setattr(var, f.name, zero)
        return var

    def to_dict(self) -> dict:
        """Snapshot of all fields as plain floats."""
        return {key: float(value) for key, value in asdict(self).items()}


@dataclass
class SourceAccumulator:
    """Source term components and the Jacobian being assembled."""
    production: float = 0.0
    destruction: float = 0.0
    cross_production: float = 0.0
    add_source_term: float = 0.0
    jacobian: float = 0.0

    def reset(self, zero) -> None:
        self.production = zero
        self.destruction = zero
        self.cross_production = zero
        self.add_source_term = zero
        self.jacobian = zero


class SourceResult(NamedTuple):
    """
    Volume-integrated source residual and its derivative with respect to
    nuHat (the 1x1 point Jacobian).
    """
    residual: float
    jacobian: float
