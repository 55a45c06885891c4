"""
Reflection and refraction of rays at a surface.

Both functions take the incoming ray, the point where it meets the
surface and the surface normal on the side the ray arrives from.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from .tolerance import RAY_OFFSET
from .vec3 import Vec3, Point3
from .ray import Ray


@dataclass
class Refraction:
    """Outcome of :func:`refract`.

    Attributes:
        ray: The refracted ray, or the mirrored ray on total internal reflection
        total_internal_reflection: True when no refracted ray exists
    """
    ray: Ray
    total_internal_reflection: bool


def reflect(ray: Ray, point: Point3, normal: Vec3) -> Ray:
    """Mirror the incoming ray about the normal.

    The new ray starts slightly off the surface along the normal so it
    does not immediately hit the surface it is leaving.
    """
    inverse = (-ray.direction).normalize()
    new_direction = normal * (2 * inverse.dot(normal)) - inverse
    return Ray.from_offset_and_direction(point + normal * RAY_OFFSET, new_direction)


def refract(ray: Ray, point: Point3, normal: Vec3, eta_ratio: float) -> Refraction:
    """Refract the incoming ray through the surface (Snell's law).

    Args:
        ray: Incoming ray
        point: Point on the surface
        normal: Unit normal facing the incoming ray
        eta_ratio: Ratio of refractive indices (n1/n2)

    Returns:
        The refracted ray, or the reflected ray flagged as total internal
        reflection when sin^2 of the transmitted angle exceeds 1
    """
    unit_direction = ray.direction.normalize()
    cos_incoming = -unit_direction.dot(normal)
    sin_sqr_transmitted = eta_ratio ** 2 * (1.0 - cos_incoming ** 2)

    if sin_sqr_transmitted > 1.0:
        return Refraction(reflect(ray, point, normal), True)

    normal_factor = eta_ratio * cos_incoming - math.sqrt(1.0 - sin_sqr_transmitted)
    new_direction = unit_direction * eta_ratio + normal * normal_factor
    # Start just across the boundary, inside the new medium
    return Refraction(
        Ray.from_offset_and_direction(point - normal * RAY_OFFSET, new_direction),
        False,
    )
