"""
Ray class for representing rays in 3D space.

A ray is defined by an offset point and a direction vector:
Ray(k) = offset + k * direction

The parameter k ranges over all reals; callers that need "in front of
the origin" semantics filter for k >= 0 themselves.
"""

from __future__ import annotations
from typing import Optional, Tuple

from .vec3 import Vec3, Point3


class Ray:
    """A half-line with an offset and a direction."""

    __slots__ = ('offset', 'direction')

    def __init__(self, offset: Point3, direction: Vec3):
        """Create a ray with given offset and direction.

        Args:
            offset: The starting point of the ray
            direction: The direction vector (not necessarily normalized)
        """
        self.offset = offset
        self.direction = direction

    @classmethod
    def from_two_points(cls, start: Point3, through: Point3) -> Ray:
        """Ray starting at ``start`` that reaches ``through`` at k = 1."""
        return cls(start, through - start)

    @classmethod
    def from_offset_and_direction(cls, offset: Point3, direction: Vec3) -> Ray:
        return cls(offset, direction)

    def at(self, k: float) -> Point3:
        """Get the point along the ray at parameter k."""
        return self.offset + self.direction * k

    def intersect(self, other: Ray) -> Optional[Tuple[float, float]]:
        """Find where this ray crosses another one.

        Solves O + k*D == O' + k'*D' by crossing both sides with D':
        k * (D x D') == (O' - O) x D'.

        Returns:
            (k_self, k_other), or None if the rays are parallel or skew
        """
        numerator = (other.offset - self.offset).cross(other.direction)
        denominator = self.direction.cross(other.direction)

        k_self = numerator.get_scale(denominator)
        if k_self is None:
            return None

        k_other = (self.at(k_self) - other.offset).get_scale(other.direction)
        if k_other is None:
            return None
        return k_self, k_other

    def contains(self, point: Point3) -> Optional[float]:
        """Return k such that at(k) == point, or None if the point is off the ray."""
        if self.direction.is_zero():
            return None
        return (point - self.offset).get_scale(self.direction)

    def __repr__(self) -> str:
        return f"Ray(offset={self.offset}, direction={self.direction})"
