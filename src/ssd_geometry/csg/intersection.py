"""Closed-form intersection of a line with a cone mantle.

The line ``L + lam * D`` is expressed in the mantle's local frame and
substituted into the implicit surface ``x^2 + y^2 = (r_bot + (hZ + z) S)^2``
(``S`` = dr/dz; ``S = 0`` and ``r_bot = r`` for a cylinder), which gives the
quadratic ``f1 lam^2 - 2 term3 lam + c = 0`` with::

    f1    = D1^2 + D2^2 - D3^2 S^2
    term3 = -D1 L1 - D2 L2 + D3 S (r_bot + S (hZ + L3))
    c     = L1^2 + L2^2 - (r_bot + S (hZ + L3))^2

Two points are always returned, in no particular order along the line:

- two crossings: the two distinct points;
- tangent line, or direction parallel to a generating line (``f1`` zero
  relative to its summands, a single crossing): the same point twice;
- line lying on the surface: the line origin twice;
- no crossing: two all-NaN points (see ``is_nan_point``).

The surface is the unbounded cone (both nappes) or cylinder; results are not
clipped to ``[-hZ, hZ]`` or to the angular range. Use
``ConeMantle.contains_height`` to restrict them to the finite mantle.
"""

from __future__ import annotations

import logging
import math

from ssd_geometry.constants import INTERSECTION_REL_TOL
from ssd_geometry.csg.cone_mantle import ConeMantle
from ssd_geometry.csg.line import Line
from ssd_geometry.csg.transform import to_global, to_local
from ssd_geometry.csg.vec_math import NAN_POINT, Vec3

logger = logging.getLogger(__name__)


def _solve(cm: ConeMantle, line: Line, check_sign: bool) -> tuple[Vec3, Vec3]:
    obj_l = to_local(line, cm)  # direction is not normalized
    L1, L2, L3 = obj_l.origin
    D1, D2, D3 = obj_l.direction

    hZ = cm.hZ
    R0 = cm.radii[0]
    S = cm.slope()

    f1 = D1**2 + D2**2 - D3**2 * S**2
    r_at_l = R0 + S * (hZ + L3)
    c = L1**2 + L2**2 - r_at_l**2
    term3 = -D1 * L1 - D2 * L2 + D3 * S * r_at_l

    # Degenerate tests are relative to the magnitude of their summands.
    eps = INTERSECTION_REL_TOL
    f1_is_zero = abs(f1) <= eps * (D1**2 + D2**2 + D3**2 * S**2)
    term3_is_zero = abs(term3) <= eps * (abs(D1 * L1) + abs(D2 * L2) + abs(D3 * S * r_at_l))
    c_is_zero = abs(c) <= eps * (L1**2 + L2**2 + r_at_l**2)

    if f1_is_zero:
        # One crossing at most; the quadratic collapses to -2 term3 lam + c = 0.
        if term3_is_zero:
            if c_is_zero:
                logger.debug('Line lies on %s surface; returning its origin', cm.label_name)
                return line.origin, line.origin
            logger.debug('Line parallel to %s surface without touching it', cm.label_name)
            return NAN_POINT, NAN_POINT
        lam = c / (2 * term3)
        logger.debug('Single intersection with %s at lam=%g', cm.label_name, lam)
        pt = to_global(obj_l.point_at(lam), cm)
        return pt, pt

    term4 = (2 * term3) ** 2 - 4 * f1 * c
    if term4 < 0:
        if check_sign:
            logger.debug('No intersection with %s (discriminant %g)', cm.label_name, term4)
            return NAN_POINT, NAN_POINT
        sq = math.sqrt(abs(term4))
    else:
        sq = math.sqrt(term4)

    lam1 = (term3 - sq / 2) / f1
    lam2 = (term3 + sq / 2) / f1
    return to_global(obj_l.point_at(lam1), cm), to_global(obj_l.point_at(lam2), cm)


def intersection(cm: ConeMantle, line: Line) -> tuple[Vec3, Vec3]:
    """Intersections of a line with a cone mantle (NaN points when there are none).

    Parameters:
        cm: Cone mantle, constant or varying radius.
        line: Line in global coordinates.

    Returns:
        Two global points; see the module docstring for the degenerate cases.
    """
    return _solve(cm, line, check_sign=True)


def intersection_raw(cm: ConeMantle, line: Line) -> tuple[Vec3, Vec3]:
    """Like intersection(), but uses sqrt(|discriminant|) and never reports a miss.

    Lines that miss the surface still yield two finite points (the solutions
    of the quadratic with the discriminant's sign flipped). Kept for callers
    that depend on always receiving finite points.
    """
    return _solve(cm, line, check_sign=False)
