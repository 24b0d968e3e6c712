"""Geometry core for solid-state detector models.

Detector parts (semiconductor, contacts, passive structures) are described as
constructive-solid-geometry primitives. This package provides:
- Cone mantle primitive: cylinder, cone and frustum side surfaces, full or partial
- Coordinate transforms between a primitive's local frame and the global frame
- Closed-form line/mantle intersections and surface normals
- Mesh generation (quad faces or wireframe) for rendering

All lengths are in meters and all angles in radians.
"""

from ssd_geometry.csg import (
    Circle,
    ConeMantle,
    InvalidArgumentError,
    InvalidGeometryError,
    Line,
    Mesh,
    NormalDirection,
    intersection,
    intersection_raw,
    mesh,
)

__all__: list[str] = [
    'Circle',
    'ConeMantle',
    'InvalidArgumentError',
    'InvalidGeometryError',
    'Line',
    'Mesh',
    'NormalDirection',
    'intersection',
    'intersection_raw',
    'mesh',
]
