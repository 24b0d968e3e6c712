"""Constructive-solid-geometry core: surface primitives, transforms, intersections, meshes.

Typical usage::

    cm = ConeMantle(r=(1.0, 3.0), hZ=5.0, origin=(0.0, 0.0, 1.0))
    p1, p2 = intersection(cm, Line((-10.0, 0.0, 1.0), (1.0, 0.0, 0.0)))
    m = mesh(cm, 36)          # quad faces
    w = mesh(cm, 36, 4)       # wireframe with 4 vertical lines
"""

from ssd_geometry.csg.circle import Circle
from ssd_geometry.csg.cone_mantle import ConeMantle, NormalDirection, radius_at_z
from ssd_geometry.csg.errors import InvalidArgumentError, InvalidGeometryError
from ssd_geometry.csg.intersection import intersection, intersection_raw
from ssd_geometry.csg.line import Edge, Line
from ssd_geometry.csg.mesh import Mesh, SurfacePrimitive, mesh
from ssd_geometry.csg.transform import rotation_about_axis, to_global, to_local
from ssd_geometry.csg.vec_math import NAN_POINT, is_nan_point

__all__: list[str] = [
    'NAN_POINT',
    'Circle',
    'ConeMantle',
    'Edge',
    'InvalidArgumentError',
    'InvalidGeometryError',
    'Line',
    'Mesh',
    'NormalDirection',
    'SurfacePrimitive',
    'intersection',
    'intersection_raw',
    'is_nan_point',
    'mesh',
    'radius_at_z',
    'rotation_about_axis',
    'to_global',
    'to_local',
]
