"""Tests for local/global frame conversion and rotation validation."""

from __future__ import annotations

import math

import numpy as np
import pytest

from ssd_geometry.csg.cone_mantle import ConeMantle
from ssd_geometry.csg.errors import InvalidGeometryError
from ssd_geometry.csg.line import Line
from ssd_geometry.csg.transform import (
    as_rotation,
    rotation_about_axis,
    to_global,
    to_local,
    vector_to_global,
    vector_to_local,
)


def _placed() -> ConeMantle:
    rot = rotation_about_axis((1.0, 2.0, 3.0), 0.7)
    return ConeMantle(r=(1.0, 2.0), hZ=1.0, origin=(0.5, -1.0, 2.0), rotation=rot)


def test_round_trip_point() -> None:
    """to_global(to_local(p)) reproduces p."""
    cm = _placed()
    for p in [(0.0, 0.0, 0.0), (1.0, 2.0, 3.0), (-4.5, 0.25, 7.0)]:
        assert to_global(to_local(p, cm), cm) == pytest.approx(p, abs=1e-12)


def test_origin_maps_to_local_zero() -> None:
    cm = _placed()
    assert to_local(cm.origin, cm) == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)


def test_line_direction_rotated_not_translated() -> None:
    """Line direction is rotated only and keeps its length."""
    cm = ConeMantle(
        r=1.0, origin=(10.0, 0.0, 0.0), rotation=rotation_about_axis((0.0, 0.0, 1.0), math.pi / 2)
    )
    local = to_local(Line((10.0, 0.0, 0.0), (0.0, 3.0, 0.0)), cm)
    assert local.origin == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)
    assert local.direction == pytest.approx((3.0, 0.0, 0.0), abs=1e-12)


def test_vector_round_trip() -> None:
    cm = _placed()
    v = (0.3, -2.0, 5.0)
    assert vector_to_global(vector_to_local(v, cm), cm) == pytest.approx(v, abs=1e-12)


def test_rotation_about_axis_is_orthonormal() -> None:
    rot = rotation_about_axis((0.0, 1.0, 1.0), 1.234)
    np.testing.assert_allclose(rot.T @ rot, np.eye(3), atol=1e-12)
    assert np.linalg.det(rot) == pytest.approx(1.0)


def test_rotation_about_zero_axis_rejected() -> None:
    with pytest.raises(InvalidGeometryError):
        rotation_about_axis((0.0, 0.0, 0.0), 1.0)


def test_as_rotation_rejects_bad_matrices() -> None:
    with pytest.raises(InvalidGeometryError, match='3x3'):
        as_rotation(np.eye(2), 1e-6)
    with pytest.raises(InvalidGeometryError, match='orthonormal'):
        as_rotation([[2.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]], 1e-6)
    with pytest.raises(InvalidGeometryError, match='non-finite'):
        as_rotation([[math.nan, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]], 1e-6)


def test_as_rotation_is_read_only() -> None:
    rot = as_rotation(np.eye(3), 1e-6)
    with pytest.raises(ValueError):
        rot[0, 0] = 2.0


def test_as_rotation_reflection_warns(caplog: pytest.LogCaptureFixture) -> None:
    """An improper rotation is accepted but logged."""
    rot = as_rotation(np.diag([1.0, 1.0, -1.0]), 1e-6)
    assert rot[2, 2] == -1.0
    assert 'determinant -1' in caplog.text
