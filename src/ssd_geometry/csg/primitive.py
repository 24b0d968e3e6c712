"""Validation shared by surface primitives (placement, angular range, lengths)."""

from __future__ import annotations

import math
from typing import Any

from ssd_geometry.constants import TWOPI
from ssd_geometry.csg.errors import InvalidGeometryError
from ssd_geometry.csg.vec_math import Vec3


def check_length(name: str, value: Any) -> float:
    """Return value as float; must be finite and >= 0."""
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryError(f'{name} must be a number, got {value!r}') from e
    if not math.isfinite(v) or v < 0.0:
        raise InvalidGeometryError(f'{name} must be finite and >= 0, got {v!r}')
    return v


def check_origin(origin: Any) -> Vec3:
    """Return origin as a float 3-tuple; must have three finite coordinates."""
    try:
        coords = tuple(float(c) for c in origin)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryError(f'origin must be a 3-vector, got {origin!r}') from e
    if len(coords) != 3 or not all(math.isfinite(c) for c in coords):
        raise InvalidGeometryError(f'origin must be three finite numbers, got {origin!r}')
    return (coords[0], coords[1], coords[2])


def check_phi(phi: Any) -> tuple[float, float] | None:
    """Return None (full 2pi range) or the (phi_min, phi_max) pair in radians."""
    if phi is None:
        return None
    try:
        lo, hi = (float(a) for a in phi)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryError(f'phi must be None or a (min, max) pair, got {phi!r}') from e
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidGeometryError(f'phi limits must be finite, got {phi!r}')
    if not lo < hi:
        raise InvalidGeometryError(f'phi_min must be < phi_max, got ({lo!r}, {hi!r})')
    return (lo, hi)


def phi_limits(phi: tuple[float, float] | None) -> tuple[float, float]:
    """Angular limits: (0, 2pi) for a full range, else the stored pair."""
    if phi is None:
        return (0.0, TWOPI)
    return phi
