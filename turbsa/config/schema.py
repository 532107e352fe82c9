"""
Configuration schema for the SA source evaluator.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional

from .. import constants as C


@dataclass
class ModelConfig:
    """SA model variant: a preset plus optional per-family overrides."""
    
    variant: str = "baseline"   # baseline | edwards | negative
    
    # Per-family overrides (None = take the preset's choice)
    vorticity: Optional[str] = None           # baseline | edwards
    trip: Optional[str] = None                # off | nonzero
    modified_vorticity: Optional[str] = None  # baseline | edwards | negative
    damping: Optional[str] = None             # baseline | edwards
    assembly: Optional[str] = None            # baseline | negative
    
    def to_variant(self):
        """Resolve to a validated ModelVariant."""
        from turbsa.numerics.sa_sources import resolve_variant
        
        return resolve_variant(
            self.variant,
            vorticity=self.vorticity,
            trip=self.trip,
            modified_vorticity=self.modified_vorticity,
            damping=self.damping,
            assembly=self.assembly,
        )


@dataclass
class ConstantsConfig:
    """Raw SA coefficients; derived combinations are computed from these."""
    
    cb1: float = C.CB1
    cb2: float = C.CB2
    sigma: float = C.SIGMA
    kappa: float = C.KAPPA
    cv1: float = C.CV1
    cw2: float = C.CW2
    cw3: float = C.CW3
    cr1: float = C.CR1        # Roughness extension
    ct3: float = C.CT3        # Trip term
    ct4: float = C.CT4
    
    def to_constants(self):
        """Build the SAConstants bundle."""
        from turbsa.physics.sa_model import SAConstants
        
        return SAConstants.from_coefficients(**asdict(self))


@dataclass
class EvaluationConfig:
    """Evaluation backend settings."""
    
    backend: str = "numpy"      # numpy | jax
    check_finite: bool = False  # Warn on NaN/Inf residuals (values unchanged)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    
    level: str = "INFO"
    show_time: bool = True


@dataclass
class SourceConfig:
    """Complete source evaluator configuration."""
    
    model: ModelConfig = field(default_factory=ModelConfig)
    constants: ConstantsConfig = field(default_factory=ConstantsConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    
    def build_evaluator(self):
        """Create the SASourceEvaluator described by this configuration."""
        from turbsa.numerics.sa_sources import SASourceEvaluator
        
        return SASourceEvaluator(
            self.model.to_variant(),
            constants=self.constants.to_constants(),
            backend=self.evaluation.backend,
            check_finite=self.evaluation.check_finite,
        )
    
    def to_dict(self) -> dict:
        """Convert to nested dictionary."""
        return asdict(self)


# Preset model configurations
def baseline_preset() -> ModelConfig:
    """Original SA model."""
    return ModelConfig(variant="baseline")


def edwards_preset() -> ModelConfig:
    """SA-Edwards: strain-based vorticity, modified S_tilde and r."""
    return ModelConfig(variant="edwards")


def negative_preset() -> ModelConfig:
    """SA-neg: dedicated source terms for nuHat <= 0."""
    return ModelConfig(variant="negative")
