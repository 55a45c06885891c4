"""
Surfaces that make up a scene.

Each surface implements ``incident``: given the probe ray and the best
ray parameter found so far for this pixel, it either misses (None) or
reports where it was struck and with which color. Recursive surfaces
(mirrors, refractive boxes) ask their scene to resolve a secondary ray
and bound that recursion with a counter kept in the render context.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math
import weakref

from .color import Color, WHITE, BLACK
from .context import RenderContext
from .errors import InvariantError
from .optics import reflect, refract
from .ray import Ray
from .shapes import Cube, Plane, Sphere
from .tolerance import FAR_K
from .vec3 import Vec3, Point3

if TYPE_CHECKING:
    from .scene import Scene


@dataclass
class Incidence:
    """A ray striking a surface.

    Attributes:
        k: Ray parameter of the hit
        color: Color seen along the ray
    """
    k: float
    color: Color


def describe(kind: str, **fields) -> str:
    """Build a description such as ``(Sky uniform: False)``."""
    parts = [kind] + [f"{key.replace('_', '-')}: {value}" for key, value in fields.items()]
    return "(" + " ".join(parts) + ")"


class Surface(ABC):
    """Abstract base class for everything a ray can strike."""

    def __init__(self, description: str):
        self.description = description
        self._object_id: Optional[int] = None
        self._scene_ref: Optional[weakref.ref] = None

    @property
    def object_id(self) -> int:
        """Dense id assigned by the scene."""
        if self._object_id is None:
            raise InvariantError(f"{self.description} has no object id yet")
        return self._object_id

    @property
    def scene(self) -> Scene:
        """The scene this surface belongs to (not owned by the surface)."""
        scene = self._scene_ref() if self._scene_ref is not None else None
        if scene is None:
            raise InvariantError(f"{self.description} is not part of a live scene")
        return scene

    def bind(self, scene: Scene) -> None:
        if self._scene_ref is not None:
            raise InvariantError(f"{self.description} already belongs to a scene")
        self._scene_ref = weakref.ref(scene)

    def assign_id(self, object_id: int) -> None:
        if self._object_id is not None and self._object_id != object_id:
            raise InvariantError(
                f"{self.description} already has id {self._object_id}, not {object_id}")
        self._object_id = object_id

    def initialize(self, ctx: RenderContext) -> None:
        """Prepare this surface's cell in a fresh context."""
        ctx[self.object_id] = 0

    @abstractmethod
    def incident(self, ctx: RenderContext, ray: Ray, best_k: float) -> Optional[Incidence]:
        """Test whether the ray strikes this surface.

        Args:
            ctx: Context of the rendering thread
            ray: The probe ray
            best_k: Smallest ray parameter any surface reported so far
                (infinity if none)

        Returns:
            Incidence if the ray strikes this surface, None otherwise
        """
        pass

    def __repr__(self) -> str:
        return self.description


class OpaqueBox(Surface):
    """A cube with a flat color on each face."""

    PALETTE = (
        Color(61, 31, 0),
        Color(102, 0, 60),
        Color(0, 102, 153),
        Color(0, 0, 153),
        Color(51, 153, 50),
        Color(71, 0, 71),
    )

    def __init__(self, center: Point3, normal_a: Vec3, normal_b: Vec3, half_side: float):
        super().__init__(describe("OpaqueBox", center=center, normal_a=normal_a,
                                  normal_b=normal_b, side=half_side))
        self.cube = Cube(center, normal_a, normal_b, half_side)

    def incident(self, ctx: RenderContext, ray: Ray, best_k: float) -> Optional[Incidence]:
        hit = self.cube.intersect(ray)
        if hit is None:
            return None
        return Incidence(hit.k, self.PALETTE[hit.face])


class Sky(Surface):
    """Background that only shows where nothing else was hit.

    The gradient runs from blue at the horizon to white straight up or
    down.
    """

    def __init__(self, uniform: bool = False):
        """Create a sky.

        Args:
            uniform: Flat white instead of the horizon gradient
        """
        super().__init__(describe("Sky", uniform=uniform))
        self.uniform = uniform

    def incident(self, ctx: RenderContext, ray: Ray, best_k: float) -> Optional[Incidence]:
        if best_k != math.inf:
            return None

        if self.uniform:
            return Incidence(FAR_K, WHITE)

        gradient = ray.direction.horizontal_gradient()
        angle_ratio = abs(math.atan(gradient * 1.8) / (math.pi / 2))
        level = int(255 * angle_ratio)
        return Incidence(FAR_K, Color(level, level, 255))


class CheckeredPlane(Surface):
    """An infinite plane painted as a black and white checkerboard."""

    def __init__(self, plane: Plane, axis_0: Vec3, check_size: float):
        """Create a checkered plane.

        Args:
            plane: The plane to paint
            axis_0: In-plane direction of the first row of checks
            check_size: Side length of a single check
        """
        super().__init__(describe("CheckeredPlane", normal=plane.normal, point=plane.point,
                                  axis=axis_0, check_size=check_size))
        self.plane = plane
        self.check_size = check_size
        self.axis_0 = axis_0.normalize()
        self.axis_1 = axis_0.cross(plane.normal).normalize()

    def incident(self, ctx: RenderContext, ray: Ray, best_k: float) -> Optional[Incidence]:
        k = self.plane.intersect(ray)
        # Unbounded, so reject anything behind the current best early
        if k is None or k > best_k:
            return None

        point = ray.at(k)
        cell_0 = math.floor(point.dot(self.axis_0) / self.check_size)
        cell_1 = math.floor(point.dot(self.axis_1) / self.check_size)

        color = WHITE if (cell_0 + cell_1) % 2 else BLACK
        return Incidence(k, color)


class MirrorSphere(Surface):
    """A perfectly reflecting sphere."""

    MAX_NESTING = 10
    REFLECTANCE = 0.8

    def __init__(self, center: Point3, radius: float):
        super().__init__(describe("MirrorSphere", center=center, radius=radius))
        self.sphere = Sphere(center, radius)

    def incident(self, ctx: RenderContext, ray: Ray, best_k: float) -> Optional[Incidence]:
        if ctx[self.object_id] >= self.MAX_NESTING:
            return None

        k = self.sphere.intersect(ray)
        if k is None or k < 0.0:
            return None

        touch_point = ray.at(k)
        normal = (touch_point - self.sphere.center).normalize()
        reflected = reflect(ray, touch_point, normal)

        with ctx.descend(self.object_id):
            color = self.scene.render_pixel(reflected, ctx)
        return Incidence(k, color * self.REFLECTANCE)


class RefractiveBox(Surface):
    """A transparent cube that bends rays passing through it."""

    MAX_NESTING = 10
    MAX_INTERNAL_STEPS = 30
    TRANSMITTANCE = 0.9

    def __init__(
        self,
        center: Point3,
        normal_a: Vec3,
        normal_b: Vec3,
        half_side: float,
        relative_index: float = 1.3
    ):
        """Create a refractive box.

        Args:
            center: Center of the box
            normal_a, normal_b: Orthogonal face normals
            half_side: Distance from the center to each face
            relative_index: Refractive index of the box relative to its
                surroundings
        """
        super().__init__(describe("RefractiveBox", center=center, normal_a=normal_a,
                                  normal_b=normal_b, side=half_side))
        self.cube = Cube(center, normal_a, normal_b, half_side)
        self.relative_index = relative_index

    def trace_through(self, ray: Ray) -> Optional[tuple[float, Ray]]:
        """Follow a ray into the box and back out.

        Returns:
            (k of the entry point, the ray leaving the box), or None if
            the ray misses or never escapes the box
        """
        entry = self.cube.intersect(ray)
        if entry is None:
            return None

        inside = refract(ray, ray.at(entry.k), self.cube.face_normal(entry.face),
                         1.0 / self.relative_index)
        current = inside.ray

        for _ in range(self.MAX_INTERNAL_STEPS):
            hit = self.cube.intersect(current)
            if hit is None:
                return None

            # Leaving the box, so the normal faces inward
            normal = -self.cube.face_normal(hit.face)
            outcome = refract(current, current.at(hit.k), normal, self.relative_index)
            current = outcome.ray
            if not outcome.total_internal_reflection:
                return entry.k, current

        return None

    def incident(self, ctx: RenderContext, ray: Ray, best_k: float) -> Optional[Incidence]:
        if ctx[self.object_id] >= self.MAX_NESTING:
            return None

        traced = self.trace_through(ray)
        if traced is None:
            return None

        k, outgoing = traced
        with ctx.descend(self.object_id):
            color = self.scene.render_pixel(outgoing, ctx)
        return Incidence(k, color * self.TRANSMITTANCE)
