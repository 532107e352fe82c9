"""
Spalart-Allmaras model physics.

- sa_model: coefficient bundle and the closed-form functions shared by all
  variants (Ji, fv1, fv2, fw chain)
- sa_corrections: interchangeable vorticity, trip, modified-vorticity and
  damping definitions
- sa_assembly: production / destruction / cross-production assembly
"""

from .sa_model import SAConstants, DEFAULT_CONSTANTS
from .backend import get_backend, BACKENDS

__all__ = [
    'SAConstants',
    'DEFAULT_CONSTANTS',
    'get_backend',
    'BACKENDS',
]
