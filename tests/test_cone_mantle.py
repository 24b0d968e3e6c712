"""Tests for the ConeMantle primitive: radius, limits, normals, outline, validation."""

from __future__ import annotations

import math

import numpy as np
import pytest

from ssd_geometry.constants import TWOPI
from ssd_geometry.csg.circle import Circle
from ssd_geometry.csg.cone_mantle import ConeMantle, NormalDirection, radius_at_z
from ssd_geometry.csg.errors import InvalidArgumentError, InvalidGeometryError
from ssd_geometry.csg.transform import rotation_about_axis
from ssd_geometry.csg.vec_math import _vnorm


def test_defaults() -> None:
    cm = ConeMantle()
    assert cm.r == 1.0
    assert cm.phi is None
    assert cm.hZ == 1.0
    assert cm.origin == (0.0, 0.0, 0.0)
    np.testing.assert_array_equal(cm.rotation, np.eye(3))
    assert cm.normal_direction is NormalDirection.OUTWARDS
    assert cm.label_name == 'Cone Mantle'


def test_constant_radius_is_constant() -> None:
    cm = ConeMantle(r=2.5, hZ=3.0)
    for z in np.linspace(-3.0, 3.0, 7):
        assert cm.radius_at_z(float(z)) == 2.5


def test_varying_radius_endpoints_and_affine() -> None:
    cm = ConeMantle(r=(1.0, 3.0), hZ=5.0)
    assert cm.radius_at_z(-5.0) == pytest.approx(1.0)
    assert cm.radius_at_z(5.0) == pytest.approx(3.0)
    assert cm.radius_at_z(0.0) == pytest.approx(2.0)
    zs = np.linspace(-5.0, 5.0, 11)
    rs = [cm.radius_at_z(float(z)) for z in zs]
    steps = np.diff(rs)
    np.testing.assert_allclose(steps, steps[0])


def test_radius_at_zero_height_returns_bottom() -> None:
    assert radius_at_z(0.0, 1.5, 4.0, 0.0) == 1.5
    assert ConeMantle(r=(1.5, 4.0), hZ=0.0).radius_at_z(0.0) == 1.5


def test_phi_limits() -> None:
    assert ConeMantle().phi_limits() == (0.0, TWOPI)
    assert ConeMantle(phi=(0.5, 1.5)).phi_limits() == (0.5, 1.5)
    assert ConeMantle(phi=[0.5, 1.5]).is_partial


def test_variant_predicates() -> None:
    assert not ConeMantle(r=1.0).is_varying
    assert ConeMantle(r=(1.0, 2.0)).is_varying
    assert ConeMantle(r=[1.0, 2.0]).r == (1.0, 2.0)
    assert ConeMantle(r=2.0).radii == (2.0, 2.0)


def test_constant_radius_normal_is_radial() -> None:
    """Cylinder normal is the local radial vector; length equals the axis distance."""
    cm = ConeMantle(r=2.0, hZ=1.0)
    n = cm.normal((0.0, 2.0, 0.7))
    assert n == pytest.approx((0.0, 2.0, 0.0), abs=1e-12)
    assert cm.unit_normal((0.0, 2.0, 0.7)) == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)


def test_normal_ignores_origin_translation() -> None:
    """Normals are directions: placing the mantle elsewhere does not shift them."""
    cm = ConeMantle(r=1.0, origin=(5.0, 5.0, 5.0))
    assert cm.normal((6.0, 5.0, 5.0)) == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)


def test_frustum_outward_normal() -> None:
    """Outward frustum normal is (cos phi, sin phi, -dr/dz)."""
    cm = ConeMantle(r=(1.0, 3.0), hZ=5.0)
    n = cm.normal((2.0, 0.0, 0.0))
    assert n == pytest.approx((1.0, 0.0, -0.2), abs=1e-12)
    # Points away from the axis and is perpendicular to the generating line (dr, dz)
    assert n[0] * 0.2 + n[2] * 1.0 == pytest.approx(0.0, abs=1e-12)


def test_frustum_inward_normal_is_negated() -> None:
    out = ConeMantle(r=(1.0, 3.0), hZ=5.0)
    inw = ConeMantle(r=(1.0, 3.0), hZ=5.0, normal_direction='inwards')
    assert inw.normal_direction is NormalDirection.INWARDS
    pt = (0.0, -2.0, 0.0)
    n_out = out.normal(pt)
    n_in = inw.normal(pt)
    assert n_in == pytest.approx(tuple(-c for c in n_out), abs=1e-12)
    assert n_out == pytest.approx((0.0, -1.0, -0.2), abs=1e-12)


def test_frustum_normal_not_unit_but_unit_normal_is() -> None:
    cm = ConeMantle(r=(1.0, 3.0), hZ=5.0)
    pt = (1.0, 1.0, 0.0)
    assert _vnorm(cm.normal(pt)) == pytest.approx(math.sqrt(1.04))
    assert _vnorm(cm.unit_normal(pt)) == pytest.approx(1.0)


def test_frustum_normal_rotated() -> None:
    """Normal is rotated into the global frame with the mantle."""
    rot = rotation_about_axis((1.0, 0.0, 0.0), math.pi / 2)  # local z -> global -y
    cm = ConeMantle(r=(1.0, 3.0), hZ=5.0, rotation=rot)
    n = cm.normal((2.0, 0.0, 0.0))
    assert n == pytest.approx((1.0, 0.2, 0.0), abs=1e-12)


def test_extremum() -> None:
    assert ConeMantle(r=(1.0, 3.0), hZ=4.0).extremum() == pytest.approx(5.0)
    assert ConeMantle(r=3.0, hZ=4.0).extremum() == pytest.approx(5.0)


def test_contains_height() -> None:
    cm = ConeMantle(r=1.0, hZ=2.0, origin=(0.0, 0.0, 10.0))
    assert cm.contains_height((1.0, 0.0, 12.0))
    assert cm.contains_height((1.0, 0.0, 8.0))
    assert not cm.contains_height((1.0, 0.0, 12.5))
    assert not cm.contains_height((math.nan, math.nan, math.nan))


def test_lines_full_mantle() -> None:
    cm = ConeMantle(r=(1.0, 2.0), hZ=1.0, origin=(0.0, 0.0, 3.0))
    bot, top, edges = cm.lines(n=4)
    assert isinstance(bot, Circle) and isinstance(top, Circle)
    assert bot.r == 1.0 and top.r == 2.0
    assert bot.origin == pytest.approx((0.0, 0.0, 2.0))
    assert top.origin == pytest.approx((0.0, 0.0, 4.0))
    assert len(edges) == 4
    assert edges[0].a == pytest.approx((1.0, 0.0, 2.0))
    assert edges[0].b == pytest.approx((2.0, 0.0, 4.0))
    assert edges[1].a == pytest.approx((0.0, 1.0, 2.0), abs=1e-12)


def test_lines_partial_mantle_includes_both_edges() -> None:
    cm = ConeMantle(r=(1.0, 1.0), phi=(0.0, math.pi / 2), hZ=1.0)
    bot, _top, edges = cm.lines()
    assert bot.phi == (0.0, math.pi / 2)
    assert len(edges) == 2
    assert edges[0].a == pytest.approx((1.0, 0.0, -1.0), abs=1e-12)
    assert edges[1].a == pytest.approx((0.0, 1.0, -1.0), abs=1e-12)


def test_lines_rejects_non_positive_count() -> None:
    with pytest.raises(InvalidArgumentError):
        ConeMantle().lines(n=0)


@pytest.mark.parametrize(
    'kwargs',
    [
        {'r': -1.0},
        {'r': (1.0, -2.0)},
        {'r': (1.0, 2.0, 3.0)},
        {'hZ': -0.5},
        {'hZ': math.inf},
        {'phi': (1.0, 1.0)},
        {'phi': (2.0, 1.0)},
        {'origin': (0.0, 0.0)},
        {'rotation': [[1.0, 0.1, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]},
        {'normal_direction': 'sideways'},
    ],
)
def test_invalid_geometry_rejected(kwargs: dict) -> None:
    with pytest.raises(InvalidGeometryError):
        ConeMantle(**kwargs)


def test_invalid_geometry_is_value_error() -> None:
    with pytest.raises(ValueError):
        ConeMantle(r=-1.0)


def test_mantle_is_immutable() -> None:
    cm = ConeMantle()
    with pytest.raises(AttributeError):
        cm.hZ = 2.0  # type: ignore[misc]
