"""
Scene: an ordered collection of surfaces and closest-hit resolution.
"""

from __future__ import annotations
import math
from typing import Iterator

from .color import Color, BLACK
from .context import RenderContext
from .errors import InvariantError
from .ray import Ray
from .surfaces import Surface


class Scene:
    """Owns its surfaces in insertion order.

    Object ids are the surfaces' positions in that order. They are
    assigned by the first ``init_object_ids`` call, after which the
    scene can no longer grow.
    """

    def __init__(self):
        self._surfaces: list[Surface] = []
        self._ids_assigned = False

    def add(self, surface: Surface) -> Surface:
        """Add a surface and bind it to this scene."""
        if self._ids_assigned:
            raise InvariantError("Cannot add surfaces after object ids were assigned")
        surface.bind(self)
        self._surfaces.append(surface)
        return surface

    @property
    def object_count(self) -> int:
        return len(self._surfaces)

    def __len__(self) -> int:
        return len(self._surfaces)

    def __iter__(self) -> Iterator[Surface]:
        return iter(self._surfaces)

    def init_object_ids(self, ctx: RenderContext) -> None:
        """Assign dense object ids and run every surface's initialize hook.

        Must be called once for each context before it is used to render.
        """
        if len(ctx) != self.object_count:
            raise InvariantError(
                f"Context sized for {len(ctx)} objects, scene has {self.object_count}")

        for object_id, surface in enumerate(self._surfaces):
            surface.assign_id(object_id)
            surface.initialize(ctx)
        self._ids_assigned = True

    def render_pixel(self, ray: Ray, ctx: RenderContext) -> Color:
        """Return the color of the nearest surface the ray strikes.

        Every surface is tried in insertion order. A hit replaces the
        current one only if its k is nonnegative and strictly smaller, so
        earlier surfaces win ties.
        """
        smallest_k = math.inf
        pixel = BLACK

        for surface in self._surfaces:
            incidence = surface.incident(ctx, ray, smallest_k)
            if incidence is None:
                continue
            if 0.0 <= incidence.k < smallest_k:
                smallest_k = incidence.k
                pixel = incidence.color
                ctx.trace(f"{surface.description} matched {ray}")

        return pixel
