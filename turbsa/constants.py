"""
Global constants for the SA source-term engine.

Default calibration of the Spalart-Allmaras model and the numerical guard
thresholds shared by every model variant.
"""

# SA model coefficients (standard calibration)
CB1 = 0.1355
CB2 = 0.622
SIGMA = 2.0 / 3.0
KAPPA = 0.41
CV1 = 7.1
CW2 = 0.3
CW3 = 2.0

# Roughness extension (Aupoix & Spalart 2003)
CR1 = 0.5

# Trip/transition term
CT3 = 1.2
CT4 = 0.5

# Points closer to the wall than this get no source contribution
WALL_DIST_MIN = 1e-10

# Floors for the modified vorticity
SHAT_MIN = 1e-10
SHAT_MIN_EDWARDS = 1e-16
JI_MIN = 1e-16

# Upper clamp of the destruction blending argument r
R_MAX = 10.0

# Regularization of the roughness term at the wall
EPS = 1e-16
