"""
Camera module for generating primary rays and rendering a scene.

The camera sits at its focus position looking along +x. Pixel (x, y),
measured from the image center, is sampled through the point
(focal_length, x * s / resolution, y * s / resolution) where s is a
radial correction that grows towards the edges of the image.

Rendering splits the sampled columns into one contiguous strip per
worker thread. Each worker owns its RenderContext and pixel buffer; the
buffers are copied into the final Bitmap once every worker is done.
"""

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Optional
import numpy as np

from .bitmap import Bitmap
from .context import RenderContext
from .ray import Ray
from .scene import Scene
from .vec3 import Vec3, Point3

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("facetrace.trace")

MAX_THREADS = 1024


class Camera:
    """Maps a pixel grid to sample rays and renders them."""

    def __init__(
        self,
        focal_length: float,
        width_px: int,
        height_px: int,
        resolution: float,
        focus_position: Optional[Point3] = None
    ):
        """Create a camera.

        Args:
            focal_length: Distance from the focus to the sample plane
            width_px: Image width in pixels
            height_px: Image height in pixels
            resolution: Pixels per unit of length on the sample plane
            focus_position: Eye position (defaults to the origin)
        """
        self.focal_length = focal_length
        self.width_px = width_px
        self.height_px = height_px
        self.resolution = resolution
        self.focus_position = focus_position if focus_position is not None else Vec3.origin()

        self._half_width = width_px // 2
        self._half_height = height_px // 2
        self._max_diagonal_sqr = float(self._half_width ** 2 + self._half_height ** 2)

    def scaled(self, factor: float) -> Camera:
        """Same view with the pixel counts and resolution multiplied by factor."""
        return Camera(
            self.focal_length,
            max(1, round(self.width_px * factor)),
            max(1, round(self.height_px * factor)),
            self.resolution * factor,
            self.focus_position,
        )

    def radial_scale(self, x: int, y: int) -> float:
        """Lens correction: 1 at the center, 2 at the image corners."""
        if self._max_diagonal_sqr == 0.0:
            return 1.0
        return 1.0 + (x * x + y * y) / self._max_diagonal_sqr

    def sample_ray(self, x: int, y: int) -> Ray:
        """Ray through pixel (x, y) given as offsets from the image center."""
        s = self.radial_scale(x, y)
        sample_point = Vec3(
            self.focal_length,
            (x * s) / self.resolution,
            (y * s) / self.resolution,
        )
        return Ray.from_two_points(self.focus_position, self.focus_position + sample_point)

    def strips(self, thread_count: int) -> list[tuple[int, int]]:
        """Split the sampled columns into contiguous [begin, end) offsets.

        The last strip absorbs the remainder; strips may be empty when
        there are more threads than columns.
        """
        begin = -self._half_width
        end = self._half_width
        width = (end - begin) // thread_count

        result = []
        for index in range(thread_count):
            strip_begin = begin + index * width
            strip_end = end if index == thread_count - 1 else strip_begin + width
            result.append((strip_begin, strip_end))
        return result

    def _render_strip(
        self,
        scene: Scene,
        ctx: RenderContext,
        strip: tuple[int, int]
    ) -> np.ndarray:
        x_begin, x_end = strip
        y_begin = -self._half_height
        y_end = self._half_height
        buffer = np.empty((y_end - y_begin, x_end - x_begin, 3), dtype=np.uint8)

        for column, x in enumerate(range(x_begin, x_end)):
            for y in range(y_begin, y_end):
                color = scene.render_pixel(self.sample_ray(x, y), ctx)
                buffer[y + self._half_height, column] = color.as_tuple()

        return buffer

    def snap(
        self,
        scene: Scene,
        thread_count: int = 12,
        trace: bool = False,
        progress: Optional[Callable[[float], None]] = None
    ) -> Bitmap:
        """Render the scene.

        Args:
            scene: Scene to render; read-only for the duration
            thread_count: Number of worker threads, in [1, 1024)
            trace: Collect and log per-thread incidence traces
            progress: Called on this thread with the finished fraction

        Returns:
            The rendered Bitmap
        """
        if not 1 <= thread_count < MAX_THREADS:
            raise ValueError(f"thread_count must be in [1, {MAX_THREADS}), got {thread_count}")

        bitmap = Bitmap(self.width_px, self.height_px)
        strips = self.strips(thread_count)

        contexts = []
        for _ in strips:
            ctx = RenderContext(scene.object_count, trace=trace)
            scene.init_object_ids(ctx)
            contexts.append(ctx)

        logger.debug("Rendering %dx%d in %d strips", self.width_px, self.height_px, len(strips))

        results: dict[int, np.ndarray] = {}
        with ThreadPoolExecutor(max_workers=thread_count) as executor:
            futures = {
                executor.submit(self._render_strip, scene, ctx, strip): index
                for index, (ctx, strip) in enumerate(zip(contexts, strips))
            }
            for done, future in enumerate(as_completed(futures), start=1):
                results[futures[future]] = future.result()
                if progress:
                    progress(done / len(strips))

        for index, (x_begin, _) in enumerate(strips):
            bitmap.paste(x_begin + self._half_width, 0, results[index])

            trace_log = contexts[index].trace_log
            if trace_log is not None:
                for line in trace_log.drain():
                    trace_logger.debug("[strip %d] %s", index, line)

        return bitmap

    def __repr__(self) -> str:
        return (f"Camera(focal_length={self.focal_length}, size={self.width_px}x{self.height_px}, "
                f"resolution={self.resolution}, focus={self.focus_position})")
