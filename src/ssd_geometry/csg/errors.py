"""Exceptions raised for malformed primitives and sampling arguments."""

from __future__ import annotations


class InvalidGeometryError(ValueError):
    """Primitive parameters violate a geometric precondition (radius, height, rotation, ...)."""


class InvalidArgumentError(ValueError):
    """Operation argument out of range (e.g. non-positive segment count)."""
