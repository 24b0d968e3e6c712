"""Matplotlib hand-off for meshes: scale by the length unit and add to 3D axes."""

from __future__ import annotations

import logging
from typing import Any

from ssd_geometry.config import get_length_unit
from ssd_geometry.csg.mesh import Mesh

logger = logging.getLogger(__name__)


def mesh_polygons(mesh: Mesh, length_unit: float | None = None) -> list[list[tuple[float, float, float]]]:
    """Vertex lists of each connection, coordinates multiplied by length_unit.

    Parameters:
        mesh: Mesh in meters.
        length_unit: Scale factor; defaults to get_length_unit().

    Returns:
        One list of (x, y, z) per connection (4 points for faces, 2 for edges).
    """
    scale = get_length_unit() if length_unit is None else length_unit
    pts = mesh.scaled(scale).points()
    return [[tuple(float(c) for c in pts[i]) for i in conn] for conn in mesh.connections]


def draw_mesh_mpl(
    mesh: Mesh,
    length_unit: float | None = None,
    ax: Any = None,
    output_path: str | None = None,
    color: str = 'C0',
    alpha: float = 0.5,
) -> Any:
    """Draw a mesh on 3D axes: quads as Poly3DCollection, edges as Line3DCollection.

    A new figure is created when ax is None. If output_path is given the
    figure is saved there. Requires the matplotlib optional dependency.

    Returns:
        The 3D axes drawn on.
    """
    try:
        import matplotlib

        if ax is None:
            matplotlib.use('Agg')
        import matplotlib.pyplot as plt
        from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection
    except ImportError:
        raise ImportError('matplotlib is required for draw_mesh_mpl') from None

    polys = mesh_polygons(mesh, length_unit)
    fig = None
    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(projection='3d')
    if mesh.is_wireframe:
        ax.add_collection3d(Line3DCollection(polys, colors='black', linewidths=0.75))
    else:
        ax.add_collection3d(
            Poly3DCollection(
                polys, facecolors=color, edgecolors='black', linewidths=0.1, alpha=alpha
            )
        )
    if polys:
        flat = [p for poly in polys for p in poly]
        for setter, k in ((ax.set_xlim, 0), (ax.set_ylim, 1), (ax.set_zlim, 2)):
            lo = min(p[k] for p in flat)
            hi = max(p[k] for p in flat)
            if lo == hi:
                lo, hi = lo - 0.5, hi + 0.5
            setter(lo, hi)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_zlabel('z')
    logger.debug('Drew %d connections', len(polys))
    if output_path:
        (fig or ax.figure).savefig(output_path)
    if fig is not None:
        plt.close(fig)
    return ax
