"""
Geometric shapes for the ray tracer.

Each shape answers ``intersect(ray)`` with the ray parameter of the hit,
or None on a miss. None of them restrict k to be nonnegative unless
noted; that is up to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import math

from . import tolerance
from .errors import InvariantError
from .vec3 import Vec3, Point3
from .ray import Ray


class Plane:
    """An infinite plane: all p such that (p - point) . normal == 0.

    The sign of the normal is meaningful; it marks the outward side.
    """

    __slots__ = ('normal', 'point')

    def __init__(self, normal: Vec3, point: Point3):
        self.normal = normal
        self.point = point

    @classmethod
    def from_points(cls, p0: Point3, p1: Point3, p2: Point3) -> Plane:
        """Plane through three points, normal along (p1 - p0) x (p2 - p0)."""
        return cls((p1 - p0).cross(p2 - p0).normalize(), p0)

    def intersect(self, ray: Ray) -> Optional[float]:
        """Test ray-plane intersection.

        Returns:
            The ray parameter of the single crossing, or None if the ray
            is parallel to the plane
        """
        denom = self.normal.dot(ray.direction)

        if tolerance.is_zero(denom):
            return None

        return (self.point - ray.offset).dot(self.normal) / denom

    def contains(self, point: Point3) -> bool:
        return tolerance.is_zero((point - self.point).dot(self.normal),
                                 point.length())

    def __repr__(self) -> str:
        return f"Plane(normal={self.normal}, point={self.point})"


class RectanglePlaneSegment:
    """A rectangle cut out of a plane.

    Defined by three corners: ``p1`` is the corner shared by the two
    edges ``p1 -> p0`` and ``p1 -> p2``, which must be perpendicular.
    """

    def __init__(self, p0: Point3, p1: Point3, p2: Point3):
        self.container = Plane.from_points(p0, p1, p2)
        self.points = (p0, p1, p2)

        self.axis_0 = (p0 - p1).normalize()
        self.axis_1 = (p2 - p1).normalize()

        if not tolerance.is_zero(self.axis_0.dot(self.axis_1)):
            raise InvariantError("Rectangle edges are not orthogonal")

        self.axis_0_begin = p1.dot(self.axis_0)
        self.axis_0_end = p0.dot(self.axis_0)
        self.axis_1_begin = p1.dot(self.axis_1)
        self.axis_1_end = p2.dot(self.axis_1)

    def intersect(self, ray: Ray) -> Optional[float]:
        k = self.container.intersect(ray)
        if k is None:
            return None

        point = ray.at(k)

        component = point.dot(self.axis_0)
        if component < self.axis_0_begin or component > self.axis_0_end:
            return None

        component = point.dot(self.axis_1)
        if component < self.axis_1_begin or component > self.axis_1_end:
            return None

        return k

    def __repr__(self) -> str:
        return "RectanglePlaneSegment(p0={}, p1={}, p2={})".format(*self.points)


class Sphere:
    """A sphere defined by center and radius."""

    __slots__ = ('center', 'radius', '_rhs')

    def __init__(self, center: Point3, radius: float):
        self.center = center
        self.radius = radius
        # Part of the quadratic's constant term that doesn't depend on the ray
        self._rhs = center.dot(center) - radius * radius

    def intersect(self, ray: Ray) -> Optional[float]:
        """Test ray-sphere intersection using the quadratic formula.

        Substituting P = O + kD into |P - C|^2 = r^2 gives
        k^2 (D.D) + 2k (D.O - D.C) + O.O - 2 O.C + C.C - r^2 = 0.

        Returns:
            The smaller root, even if negative; None if there is no real root
        """
        d = ray.direction
        o = ray.offset

        a = d.dot(d)
        b = 2 * d.dot(o) - 2 * d.dot(self.center)
        c = o.dot(o) - 2 * o.dot(self.center) + self._rhs

        if tolerance.is_zero(a):
            raise InvariantError("Ray direction has zero length")

        discriminant = b * b - 4 * a * c
        if tolerance.is_negative(discriminant):
            return None

        sqrtd = math.sqrt(discriminant)
        return min((-b + sqrtd) / (2 * a), (-b - sqrtd) / (2 * a))

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


@dataclass
class CubeHit:
    """Nearest face of a cube struck by a ray."""
    k: float
    face: int


class Cube:
    """A box made of six rectangular faces.

    Face order is fixed: +a, -a, +b, -b, +c, -c where c = a x b. Every
    face normal points out of the cube.
    """

    FACE_COUNT = 6

    def __init__(self, center: Point3, normal_a: Vec3, normal_b: Vec3, half_side: float):
        """Create a cube.

        Args:
            center: Center of the cube
            normal_a: Normal of the first face pair (normalized here)
            normal_b: Normal of the second face pair, orthogonal to normal_a
            half_side: Distance from the center to each face
        """
        a = normal_a.normalize()
        b = normal_b.normalize()
        if not tolerance.is_zero(a.dot(b)):
            raise InvariantError("Cube face normals are not orthogonal")
        c = a.cross(b).normalize()

        self.center = center
        self.half_side = half_side

        # (normal, an in-plane axis) for each face, in the fixed order
        layout = [(a, b), (-a, b), (b, c), (-b, c), (c, a), (-c, a)]
        self.faces = [self._make_face(n, u) for n, u in layout]

    def _make_face(self, normal: Vec3, axis_u: Vec3) -> RectanglePlaneSegment:
        # axis_v = u x n orders the corners so the plane normal is outward
        axis_v = axis_u.cross(normal)
        h = self.half_side
        corner = self.center + normal * h - axis_u * h - axis_v * h
        return RectanglePlaneSegment(
            corner + axis_u * (2 * h),
            corner,
            corner + axis_v * (2 * h),
        )

    def intersect(self, ray: Ray) -> Optional[CubeHit]:
        """Find the nearest face the ray strikes at a nonnegative k."""
        best: Optional[CubeHit] = None

        for index, face in enumerate(self.faces):
            k = face.intersect(ray)
            if k is None or k < 0.0:
                continue
            if best is None or k < best.k:
                best = CubeHit(k, index)

        return best

    def face_normal(self, index: int) -> Vec3:
        return self.faces[index].container.normal

    def __repr__(self) -> str:
        return f"Cube(center={self.center}, half_side={self.half_side})"
