"""
Vector class for 3D math operations.

A single type serves as both a point and a direction in world space.
Vectors are immutable; every operation returns a new instance.
"""

from __future__ import annotations
import math
from typing import Optional, Union
import numpy as np

from . import tolerance
from .errors import InvariantError


class Vec3:
    """An immutable 3D vector.

    Uses numpy internally for the arithmetic while comparisons go through
    the shared tolerances in :mod:`facetrace.tolerance`.
    """

    __slots__ = ('_data', '_is_unit')

    # numpy scalars on the left defer to __rmul__
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)
        self._is_unit = False

    @classmethod
    def from_array(cls, arr: np.ndarray, is_unit: bool = False) -> Vec3:
        """Create Vec3 from numpy array."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        v._is_unit = is_unit
        return v

    @staticmethod
    def i_hat() -> Vec3:
        return Vec3.from_array(np.array([1.0, 0.0, 0.0]), is_unit=True)

    @staticmethod
    def j_hat() -> Vec3:
        return Vec3.from_array(np.array([0.0, 1.0, 0.0]), is_unit=True)

    @staticmethod
    def k_hat() -> Vec3:
        return Vec3.from_array(np.array([0.0, 0.0, 1.0]), is_unit=True)

    @staticmethod
    def origin() -> Vec3:
        return Vec3()

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Aliases matching the i/j/k unit axes
    i = x
    j = y
    k = z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return all(tolerance.is_equal(float(a), float(b))
                   for a, b in zip(self._data, other._data))

    __hash__ = None

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data, self._is_unit)

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3.from_array(self._data + other._data)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3.from_array(self._data - other._data)

    def __mul__(self, other: Union[Vec3, float]) -> Union[Vec3, float]:
        """Scale by a number, or take the dot product with another vector."""
        if isinstance(other, Vec3):
            return self.dot(other)
        return Vec3.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3.from_array(other * self._data)

    def __truediv__(self, other: float) -> Vec3:
        return Vec3.from_array(self._data / other)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return (float(c) for c in self._data)

    @property
    def is_unit(self) -> bool:
        """True when the vector is known to have unit length."""
        return self._is_unit

    def is_zero(self) -> bool:
        """Check if vector is close to zero in all dimensions."""
        return all(tolerance.is_zero(float(c)) for c in self._data)

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        if self._is_unit:
            return 1.0
        return float(np.linalg.norm(self._data))

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def distance(self, other: Vec3) -> float:
        return (self - other).length()

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction.

        Raises:
            InvariantError: if the vector has zero length
        """
        if self._is_unit:
            return self
        length = self.length()
        if tolerance.is_zero(length):
            raise InvariantError("Cannot normalize a zero vector")
        return Vec3.from_array(self._data / length, is_unit=True)

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        return Vec3.from_array(np.cross(self._data, other._data))

    def get_scale(self, other: Vec3) -> Optional[float]:
        """Find s such that self == s * other.

        Each axis is checked in turn: an axis where ``other`` vanishes must
        vanish in ``self`` too, and every axis after the first usable one
        must agree with the ratio found there.

        Returns:
            The scale, 0.0 if both vectors are zero, or None if no single
            scale relates the two vectors
        """
        result: Optional[float] = None
        for mine, theirs in zip(self, other):
            if result is not None:
                if not tolerance.is_equal(theirs * result, mine):
                    return None
                continue

            if tolerance.is_zero(theirs):
                if not tolerance.is_zero(mine):
                    return None
                continue

            result = mine / theirs

        return 0.0 if result is None else result

    def horizontal_gradient(self) -> float:
        """Ratio of the vertical (z) component to the horizontal length."""
        horizontal = math.hypot(self.x, self.y)
        if horizontal == 0.0:
            return math.copysign(math.inf, self.z)
        return self.z / horizontal

    def rotate(self, radians: float, orth: Vec3) -> Vec3:
        """Rotate this vector by an angle around an axis orthogonal to it.

        Args:
            radians: Rotation angle
            orth: Rotation axis; must be orthogonal to this vector

        Raises:
            InvariantError: if ``orth`` is not orthogonal to this vector
        """
        orthonormal = orth.normalize()
        if not tolerance.is_zero(self.dot(orthonormal), self.length()):
            raise InvariantError(
                f"Rotation axis {orth!r} is not orthogonal to {self!r}")

        normal_in_rotation_plane = self.cross(orthonormal)
        return self * math.cos(radians) + normal_in_rotation_plane * math.sin(radians)


# Convenience type alias
Point3 = Vec3
