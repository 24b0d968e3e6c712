"""Vector utilities for 3-vectors held as plain float tuples."""

from __future__ import annotations

import math
from typing import Sequence

from ssd_geometry.csg.errors import InvalidGeometryError

Vec3 = tuple[float, float, float]

NAN_POINT: Vec3 = (math.nan, math.nan, math.nan)


def _v3t(v: Sequence[float]) -> Vec3:
    """Return a 3-vector as a fixed-length float tuple; v must have exactly 3 components."""
    if len(v) != 3:
        raise InvalidGeometryError(f'expected a 3-vector, got {len(v)} components: {v!r}')
    return (float(v[0]), float(v[1]), float(v[2]))


def _vnorm(v: Sequence[float]) -> float:
    """Euclidean norm of a 3-vector."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def _vsub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Vector difference a - b."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _vadd(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Vector sum a + b."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _vscl(s: float, v: Sequence[float]) -> Vec3:
    """Scale vector: s * v."""
    return (s * v[0], s * v[1], s * v[2])


def _vhat(v: Sequence[float]) -> Vec3:
    """Unit vector in direction of v; zero vector if v is zero."""
    n = _vnorm(v)
    if n == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / n, v[1] / n, v[2] / n)


def cylindrical_from_cartesian(p: Sequence[float]) -> Vec3:
    """Convert Cartesian (x, y, z) to cylindrical (r, phi, z) with phi in [0, 2pi)."""
    r = math.hypot(p[0], p[1])
    phi = math.atan2(p[1], p[0])
    if phi < 0.0:
        phi += 2.0 * math.pi
    return (r, phi, float(p[2]))


def cartesian_from_cylindrical(r: float, phi: float, z: float) -> Vec3:
    """Convert cylindrical (r, phi, z) to Cartesian; negative r flips through the axis."""
    return (r * math.cos(phi), r * math.sin(phi), z)


def is_nan_point(p: Sequence[float]) -> bool:
    """True if every coordinate of p is NaN (the no-intersection sentinel)."""
    return all(math.isnan(c) for c in p)
