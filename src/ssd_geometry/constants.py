"""Fixed constants: angles, default sampling resolutions, numeric tolerances."""

import math

TWOPI = 2.0 * math.pi

# Mesh sampling defaults (angular segments per ring, vertical wireframe lines)
DEFAULT_N_ARC = 36
DEFAULT_N_VERT_LINES = 4

# Outline edges drawn along the generating lines of a mantle
DEFAULT_N_OUTLINE_EDGES = 2

# Length unit applied to coordinates before rendering (1.0 = meters)
DEFAULT_LENGTH_UNIT = 1.0

# Allowed deviation of R^T R from identity for a rotation matrix
DEFAULT_ORTHONORMAL_TOL = 1e-6

# Tolerance when testing whether a point lies within the mantle height
DEFAULT_HEIGHT_TOL = 1e-12

# Relative tolerance for the degenerate branches of the line/mantle solver
INTERSECTION_REL_TOL = 1e-12
