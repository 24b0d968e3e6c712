"""Configuration: sampling resolution, length unit and tolerances from environment."""

from __future__ import annotations

import logging
import os

from ssd_geometry.constants import (
    DEFAULT_LENGTH_UNIT,
    DEFAULT_N_ARC,
    DEFAULT_N_VERT_LINES,
    DEFAULT_ORTHONORMAL_TOL,
)

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r: not an integer; using %d', name, raw, default)
        return default
    if value < minimum:
        logger.warning('Ignoring %s=%d: must be >= %d; using %d', name, value, minimum, default)
        return default
    return value


def _env_positive_float(name: str, default: float) -> float:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r: not a number; using %g', name, raw, default)
        return default
    if not value > 0.0:
        logger.warning('Ignoring %s=%g: must be positive; using %g', name, value, default)
        return default
    return value


def get_default_n_arc() -> int:
    """Return angular segment count for meshes (SSD_GEOMETRY_N_ARC env var or default).

    Returns:
        Integer >= 1.
    """
    return _env_int('SSD_GEOMETRY_N_ARC', DEFAULT_N_ARC, 1)


def get_default_n_vert_lines() -> int:
    """Return vertical line count for wireframe meshes (SSD_GEOMETRY_N_VERT_LINES).

    Returns:
        Integer >= 0.
    """
    return _env_int('SSD_GEOMETRY_N_VERT_LINES', DEFAULT_N_VERT_LINES, 0)


def get_length_unit() -> float:
    """Return factor applied to mesh coordinates before rendering (SSD_GEOMETRY_LENGTH_UNIT).

    Coordinates are stored in meters; e.g. 1000 renders in millimeters.

    Returns:
        Positive float.
    """
    return _env_positive_float('SSD_GEOMETRY_LENGTH_UNIT', DEFAULT_LENGTH_UNIT)


def get_orthonormal_tol() -> float:
    """Return tolerance for rotation matrix validation (SSD_GEOMETRY_ORTHO_TOL)."""
    return _env_positive_float('SSD_GEOMETRY_ORTHO_TOL', DEFAULT_ORTHONORMAL_TOL)
