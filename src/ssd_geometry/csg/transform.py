"""Conversion between a primitive's local (object) frame and the global frame.

A primitive is placed by an ``origin`` 3-vector and a 3x3 ``rotation`` matrix
whose columns are the local axes expressed in global coordinates::

    global = rotation @ local + origin
    local  = rotation.T @ (global - origin)

Directions (and normals) are only rotated. Line directions are not
re-normalized, so callers must not assume unit length after a transform.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Protocol, Sequence, overload

import numpy as np

from ssd_geometry.csg.errors import InvalidGeometryError
from ssd_geometry.csg.line import Line
from ssd_geometry.csg.vec_math import Vec3, _vhat

logger = logging.getLogger(__name__)


class Placed(Protocol):
    """Anything with a placement in the global frame."""

    origin: Vec3
    rotation: np.ndarray


def as_rotation(matrix: Any, tol: float) -> np.ndarray:
    """Validate a rotation matrix and return it as a read-only float array.

    Parameters:
        matrix: 3x3 nested sequence or array.
        tol: Maximum allowed deviation of R^T R from the identity.

    Returns:
        Read-only 3x3 float64 array.

    Raises:
        InvalidGeometryError: Wrong shape, non-finite entries, or not orthonormal.
    """
    try:
        rot = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryError(f'rotation is not a numeric matrix: {e}') from e
    if rot.shape != (3, 3):
        raise InvalidGeometryError(f'rotation must be 3x3, got shape {rot.shape}')
    if not np.all(np.isfinite(rot)):
        raise InvalidGeometryError('rotation contains non-finite entries')
    deviation = float(np.max(np.abs(rot.T @ rot - np.eye(3))))
    if deviation > tol:
        raise InvalidGeometryError(
            f'rotation is not orthonormal (max |R^T R - I| = {deviation:.3g} > {tol:.3g})'
        )
    if np.linalg.det(rot) < 0.0:
        logger.warning('rotation has determinant -1 (improper rotation / reflection)')
    rot.setflags(write=False)
    return rot


def rotation_about_axis(axis: Sequence[float], angle: float) -> np.ndarray:
    """Rotation matrix for a right-handed rotation by angle (radians) about axis.

    Raises:
        InvalidGeometryError: If axis is the zero vector.
    """
    u = _vhat(axis)
    if u == (0.0, 0.0, 0.0):
        raise InvalidGeometryError('rotation axis must be non-zero')
    ux, uy, uz = u
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    return np.array(
        [
            [c + ux * ux * t, ux * uy * t - uz * s, ux * uz * t + uy * s],
            [uy * ux * t + uz * s, c + uy * uy * t, uy * uz * t - ux * s],
            [uz * ux * t - uy * s, uz * uy * t + ux * s, c + uz * uz * t],
        ]
    )


def _as_vec3(v: np.ndarray) -> Vec3:
    return (float(v[0]), float(v[1]), float(v[2]))


def vector_to_local(v: Sequence[float], p: Placed) -> Vec3:
    """Rotate a global direction into the local frame (no translation)."""
    return _as_vec3(p.rotation.T @ np.asarray(v, dtype=float))


def vector_to_global(v: Sequence[float], p: Placed) -> Vec3:
    """Rotate a local direction into the global frame (no translation)."""
    return _as_vec3(p.rotation @ np.asarray(v, dtype=float))


@overload
def to_local(obj: Line, p: Placed) -> Line: ...


@overload
def to_local(obj: Sequence[float], p: Placed) -> Vec3: ...


def to_local(obj, p):  # type: ignore[no-untyped-def]
    """Transform a global point or Line into the local frame of p."""
    if isinstance(obj, Line):
        return Line(to_local(obj.origin, p), vector_to_local(obj.direction, p))
    pt = np.asarray(obj, dtype=float) - np.asarray(p.origin, dtype=float)
    return _as_vec3(p.rotation.T @ pt)


@overload
def to_global(obj: Line, p: Placed) -> Line: ...


@overload
def to_global(obj: Sequence[float], p: Placed) -> Vec3: ...


def to_global(obj, p):  # type: ignore[no-untyped-def]
    """Transform a local point or Line of p into the global frame."""
    if isinstance(obj, Line):
        return Line(to_global(obj.origin, p), vector_to_global(obj.direction, p))
    pt = p.rotation @ np.asarray(obj, dtype=float)
    return _as_vec3(pt + np.asarray(p.origin, dtype=float))
