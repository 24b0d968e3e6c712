"""Cone mantle: lateral surface of a cylinder, cone or frustum.

The mantle is axis-aligned with local z and spans ``z in [-hZ, +hZ]`` in its
own frame. Its variant is carried by the field types:

- ``r``: a float gives a constant-radius (cylinder) mantle; an
  ``(r_bot, r_top)`` pair gives a varying-radius (frustum) mantle.
- ``phi``: ``None`` for a full 2pi mantle, ``(phi_min, phi_max)`` for a
  partial one.
- ``normal_direction``: whether normals of a varying-radius mantle point
  away from (outwards) or towards (inwards) the axis.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

import numpy as np

from ssd_geometry.config import get_orthonormal_tol
from ssd_geometry.constants import DEFAULT_HEIGHT_TOL, DEFAULT_N_OUTLINE_EDGES, TWOPI
from ssd_geometry.csg.circle import Circle
from ssd_geometry.csg.errors import InvalidArgumentError, InvalidGeometryError
from ssd_geometry.csg.line import Edge
from ssd_geometry.csg.mesh import (
    check_n_arc,
    check_n_vert_lines,
    shell_connections,
    wireframe_connections,
)
from ssd_geometry.csg.primitive import check_length, check_origin, check_phi, phi_limits
from ssd_geometry.csg.transform import as_rotation, to_global, to_local, vector_to_global
from ssd_geometry.csg.vec_math import (
    Vec3,
    _vhat,
    cartesian_from_cylindrical,
    cylindrical_from_cartesian,
)


class NormalDirection(str, Enum):
    """Side of a varying-radius mantle its normals point to."""

    INWARDS = 'inwards'
    OUTWARDS = 'outwards'


def radius_at_z(hZ: float, r_bot: float, r_top: float, z: float) -> float:
    """Radius of a linearly varying mantle at height z (r_bot when hZ is zero)."""
    if hZ == 0:
        return r_bot
    return r_bot + (hZ + z) * (r_top - r_bot) / (2 * hZ)


def radius_slope(hZ: float, r_bot: float, r_top: float) -> float:
    """dr/dz of a linearly varying mantle; inf (or NaN if r_bot == r_top) when hZ is zero."""
    dr = r_top - r_bot
    if hZ == 0:
        return math.nan if dr == 0 else math.copysign(math.inf, dr)
    return dr / (2 * hZ)


def _check_radius(r: Any) -> float | tuple[float, float]:
    if isinstance(r, (tuple, list, np.ndarray)):
        if len(r) != 2:
            raise InvalidGeometryError(f'r must be a number or an (r_bot, r_top) pair, got {r!r}')
        return (check_length('r_bot', r[0]), check_length('r_top', r[1]))
    return check_length('r', r)


@dataclass(frozen=True, eq=False)
class ConeMantle:
    """Mantle of a cone, frustum or cylinder placed by origin and rotation.

    Attributes:
        r: Radius (m), scalar or (bottom, top) pair.
        phi: Angular range (rad) or None for a full mantle.
        hZ: Half height (m).
        origin: Origin of the local frame in global coordinates.
        rotation: 3x3 orthonormal matrix; columns are the local axes.
        normal_direction: Orientation of normals for varying-radius mantles.
    """

    r: float | tuple[float, float] = 1.0
    phi: tuple[float, float] | None = None
    hZ: float = 1.0
    origin: Vec3 = (0.0, 0.0, 0.0)
    rotation: Any = field(default_factory=lambda: np.eye(3))
    normal_direction: NormalDirection = NormalDirection.OUTWARDS

    label_name = 'Cone Mantle'

    def __post_init__(self) -> None:
        object.__setattr__(self, 'r', _check_radius(self.r))
        object.__setattr__(self, 'phi', check_phi(self.phi))
        object.__setattr__(self, 'hZ', check_length('hZ', self.hZ))
        object.__setattr__(self, 'origin', check_origin(self.origin))
        object.__setattr__(self, 'rotation', as_rotation(self.rotation, get_orthonormal_tol()))
        try:
            direction = NormalDirection(self.normal_direction)
        except ValueError as e:
            raise InvalidGeometryError(
                f'normal_direction must be inwards or outwards, got {self.normal_direction!r}'
            ) from e
        object.__setattr__(self, 'normal_direction', direction)

    @property
    def is_varying(self) -> bool:
        """True for a (r_bot, r_top) frustum mantle."""
        return isinstance(self.r, tuple)

    @property
    def is_partial(self) -> bool:
        return self.phi is not None

    @property
    def radii(self) -> tuple[float, float]:
        """(bottom, top) radius; equal for a constant-radius mantle."""
        if isinstance(self.r, tuple):
            return self.r
        return (self.r, self.r)

    def radius_at_z(self, z: float) -> float:
        if isinstance(self.r, tuple):
            return radius_at_z(self.hZ, self.r[0], self.r[1], z)
        return self.r

    def slope(self) -> float:
        """dr/dz along the generating line (0 for constant radius)."""
        if not isinstance(self.r, tuple):
            return 0.0
        return radius_slope(self.hZ, self.r[0], self.r[1])

    def phi_limits(self) -> tuple[float, float]:
        return phi_limits(self.phi)

    def normal(self, pt: Sequence[float]) -> Vec3:
        """Normal vector at pt (global), not normalized.

        Constant radius: the radial vector of pt in the local frame, so its
        length equals the distance of pt from the axis. Varying radius: the
        cylindrical vector (+1, phi, -dr/dz) for outwards normals or
        (-1, phi, +dr/dz) for inwards normals, phi being the azimuth of pt.
        """
        r, phi, _ = cylindrical_from_cartesian(to_local(pt, self))
        if not self.is_varying:
            local = cartesian_from_cylindrical(r, phi, 0.0)
        elif self.normal_direction is NormalDirection.OUTWARDS:
            local = cartesian_from_cylindrical(1.0, phi, -self.slope())
        else:
            local = cartesian_from_cylindrical(-1.0, phi, self.slope())
        return vector_to_global(local, self)

    def unit_normal(self, pt: Sequence[float]) -> Vec3:
        """normal(pt) scaled to unit length (zero vector on the axis of a cylinder)."""
        return _vhat(self.normal(pt))

    def contains_height(self, pt: Sequence[float], tol: float = DEFAULT_HEIGHT_TOL) -> bool:
        """True if the local z of global point pt lies within [-hZ, hZ] (+/- tol)."""
        z = to_local(pt, self)[2]
        return -self.hZ - tol <= z <= self.hZ + tol

    def extremum(self) -> float:
        """Largest distance of a mantle point from the local origin."""
        return math.sqrt(self.hZ**2 + max(self.radii) ** 2)

    def vertices(self, n_arc: int) -> np.ndarray:
        """Bottom ring then top ring, n_arc + 1 points each, in global coordinates.

        Returns:
            Array of shape (2 * (n_arc + 1), 3).
        """
        n_arc = check_n_arc(n_arc)
        phi_min, phi_max = self.phi_limits()
        phis = np.linspace(phi_min, phi_max, n_arc + 1)
        cos, sin = np.cos(phis), np.sin(phis)
        ones = np.ones_like(phis)
        rbot = self.radius_at_z(-self.hZ)
        rtop = self.radius_at_z(self.hZ)
        bot = np.column_stack((rbot * cos, rbot * sin, -self.hZ * ones))
        top = np.column_stack((rtop * cos, rtop * sin, self.hZ * ones))
        local = np.vstack((bot, top))
        return local @ self.rotation.T + np.asarray(self.origin)

    def connections(self, n_arc: int, n_vert_lines: int | None = None) -> list[list[int]]:
        """Quad faces, or wireframe edges when n_vert_lines is given (0-based indices)."""
        n_arc = check_n_arc(n_arc)
        if n_vert_lines is None:
            return shell_connections(n_arc)
        return wireframe_connections(n_arc, check_n_vert_lines(n_vert_lines), not self.is_partial)

    def lines(self, n: int = DEFAULT_N_OUTLINE_EDGES) -> tuple[Circle, Circle, list[Edge]]:
        """Outline: bottom circle, top circle and n edges along generating lines."""
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise InvalidArgumentError(f'n must be a positive integer, got {n!r}')
        r_bot, r_top = self.radii
        bot = Circle(
            r=r_bot,
            phi=self.phi,
            origin=to_global((0.0, 0.0, -self.hZ), self),
            rotation=self.rotation,
        )
        top = Circle(
            r=r_top,
            phi=self.phi,
            origin=to_global((0.0, 0.0, self.hZ), self),
            rotation=self.rotation,
        )
        if self.phi is None:
            phis = [k * TWOPI / n for k in range(n)]
        else:
            phis = list(np.linspace(self.phi[0], self.phi[1], n))
        edges = [
            Edge(
                to_global(cartesian_from_cylindrical(r_bot, phi, -self.hZ), self),
                to_global(cartesian_from_cylindrical(r_top, phi, self.hZ), self),
            )
            for phi in phis
        ]
        return bot, top, edges
