"""Lines (origin + direction) and line segments."""

from __future__ import annotations

from dataclasses import dataclass

from ssd_geometry.csg.vec_math import Vec3, _v3t, _vadd, _vscl, _vsub


@dataclass(frozen=True)
class Line:
    """Infinite line through origin along direction (direction need not be unit length)."""

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, 'origin', _v3t(self.origin))
        object.__setattr__(self, 'direction', _v3t(self.direction))

    def point_at(self, lam: float) -> Vec3:
        """Return origin + lam * direction."""
        return _vadd(self.origin, _vscl(lam, self.direction))


@dataclass(frozen=True)
class Edge:
    """Straight segment from a to b."""

    a: Vec3
    b: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, 'a', _v3t(self.a))
        object.__setattr__(self, 'b', _v3t(self.b))

    def direction(self) -> Vec3:
        return _vsub(self.b, self.a)

    def line(self) -> Line:
        """Infinite line through the segment; point_at(0) is a, point_at(1) is b."""
        return Line(self.a, self.direction())
