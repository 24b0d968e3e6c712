"""Mesh generation for curved surface primitives.

A primitive is sampled on ``n_arc + 1`` evenly spaced angles; a mantle gives a
bottom ring followed by a top ring of ``n_arc + 1`` vertices each. Two kinds of
connectivity can be generated over those vertices (indices are 0-based):

- shell (face) mode: one quad ``[i, i+1, i+n_arc+2, i+n_arc+1]`` per angular
  segment, joining adjacent bottom/top vertex pairs;
- wireframe mode: 2-point edges for a selection of vertical lines followed by
  the closed polylines of the bottom and the top ring.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from ssd_geometry.csg.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class SurfacePrimitive(Protocol):
    """A primitive that can be sampled into vertices and index connectivity."""

    def vertices(self, n_arc: int) -> np.ndarray: ...

    def connections(self, n_arc: int, n_vert_lines: int | None = None) -> list[list[int]]: ...


@dataclass(frozen=True, eq=False)
class Mesh:
    """Tessellation of a primitive.

    Attributes:
        x, y, z: Parallel coordinate arrays (meters), one entry per vertex.
        connections: Faces (4 indices) or edges (2 indices), 0-based into x/y/z.
    """

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    connections: list[list[int]]

    @property
    def n_vertices(self) -> int:
        return int(self.x.shape[0])

    @property
    def is_wireframe(self) -> bool:
        """True if every connection is a 2-point edge."""
        return bool(self.connections) and all(len(c) == 2 for c in self.connections)

    def points(self) -> np.ndarray:
        """Vertices as an (N, 3) array."""
        return np.column_stack((self.x, self.y, self.z))

    def scaled(self, length_unit: float) -> Mesh:
        """New mesh with all coordinates multiplied by length_unit."""
        return Mesh(
            self.x * length_unit,
            self.y * length_unit,
            self.z * length_unit,
            [list(c) for c in self.connections],
        )


def check_n_arc(n_arc: object) -> int:
    """Validate an angular segment count (integer >= 1)."""
    if isinstance(n_arc, bool) or not isinstance(n_arc, numbers.Integral):
        raise InvalidArgumentError(f'n_arc must be an integer, got {n_arc!r}')
    if n_arc < 1:
        raise InvalidArgumentError(f'n_arc must be >= 1, got {n_arc}')
    return int(n_arc)


def check_n_vert_lines(n_vert_lines: object) -> int:
    """Validate a vertical line count (integer >= 0)."""
    if isinstance(n_vert_lines, bool) or not isinstance(n_vert_lines, numbers.Integral):
        raise InvalidArgumentError(f'n_vert_lines must be an integer, got {n_vert_lines!r}')
    if n_vert_lines < 0:
        raise InvalidArgumentError(f'n_vert_lines must be >= 0, got {n_vert_lines}')
    return int(n_vert_lines)


def vertical_line_indices(n_arc: int, n_vert_lines: int, closed: bool) -> list[int]:
    """Evenly spaced ring indices at which vertical wireframe lines are drawn.

    For a closed (full 2pi) ring the last sample repeats the first, so only
    ``n_arc`` positions are available and the spacing wraps around. For an
    open (partial) ring ``n_arc + 1`` positions are available and both ends
    are included. The count is clamped to the available positions.
    """
    available = n_arc if closed else n_arc + 1
    n = min(n_vert_lines, available)
    if n < n_vert_lines:
        logger.debug('Clamped vertical lines from %d to %d', n_vert_lines, n)
    if n == 0:
        return []
    if closed:
        return [(k * n_arc) // n for k in range(n)]
    if n == 1:
        return [0]
    return [(k * n_arc) // (n - 1) for k in range(n)]


def ring_connections(n_arc: int, start: int = 0) -> list[list[int]]:
    """Edges joining consecutive samples of one ring beginning at index start."""
    return [[i, i + 1] for i in range(start, start + n_arc)]


def shell_connections(n_arc: int) -> list[list[int]]:
    """Quads joining a bottom ring and a top ring of n_arc + 1 vertices each."""
    return [[i, i + 1, i + n_arc + 2, i + n_arc + 1] for i in range(n_arc)]


def wireframe_connections(n_arc: int, n_vert_lines: int, closed: bool) -> list[list[int]]:
    """Vertical edges, then bottom ring edges, then top ring edges."""
    verts = [[i, i + n_arc + 1] for i in vertical_line_indices(n_arc, n_vert_lines, closed)]
    return verts + ring_connections(n_arc) + ring_connections(n_arc, n_arc + 1)


def mesh(p: SurfacePrimitive, n_arc: int, n_vert_lines: int | None = None) -> Mesh:
    """Sample a primitive into a Mesh.

    Parameters:
        p: Primitive implementing vertices() and connections().
        n_arc: Number of angular segments (>= 1).
        n_vert_lines: If given, build a wireframe with this many vertical lines;
            otherwise build quad faces.

    Returns:
        Mesh in global coordinates (meters).
    """
    n_arc = check_n_arc(n_arc)
    if n_vert_lines is not None:
        n_vert_lines = check_n_vert_lines(n_vert_lines)
    vs = np.asarray(p.vertices(n_arc), dtype=float).reshape(-1, 3)
    c = p.connections(n_arc, n_vert_lines)
    logger.debug(
        'Meshed %s: %d vertices, %d connections', type(p).__name__, vs.shape[0], len(c)
    )
    return Mesh(vs[:, 0].copy(), vs[:, 1].copy(), vs[:, 2].copy(), c)
