"""Circle (full or partial arc) lying in the local xy-plane of its frame."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ssd_geometry.config import get_orthonormal_tol
from ssd_geometry.csg.mesh import check_n_arc, ring_connections
from ssd_geometry.csg.primitive import check_length, check_origin, check_phi, phi_limits
from ssd_geometry.csg.transform import as_rotation
from ssd_geometry.csg.vec_math import Vec3


@dataclass(frozen=True, eq=False)
class Circle:
    """Circle of radius r centered on the local origin; partial if phi is given."""

    r: float = 1.0
    phi: tuple[float, float] | None = None
    origin: Vec3 = (0.0, 0.0, 0.0)
    rotation: Any = field(default_factory=lambda: np.eye(3))

    def __post_init__(self) -> None:
        object.__setattr__(self, 'r', check_length('r', self.r))
        object.__setattr__(self, 'phi', check_phi(self.phi))
        object.__setattr__(self, 'origin', check_origin(self.origin))
        object.__setattr__(self, 'rotation', as_rotation(self.rotation, get_orthonormal_tol()))

    def phi_limits(self) -> tuple[float, float]:
        return phi_limits(self.phi)

    def vertices(self, n_arc: int) -> np.ndarray:
        """n_arc + 1 points along the arc, in global coordinates."""
        n_arc = check_n_arc(n_arc)
        phi_min, phi_max = self.phi_limits()
        phis = np.linspace(phi_min, phi_max, n_arc + 1)
        local = np.column_stack(
            (self.r * np.cos(phis), self.r * np.sin(phis), np.zeros_like(phis))
        )
        return local @ self.rotation.T + np.asarray(self.origin)

    def connections(self, n_arc: int, n_vert_lines: int | None = None) -> list[list[int]]:
        """Arc edges; a circle has no faces, so both modes give the polyline."""
        return ring_connections(check_n_arc(n_arc))
