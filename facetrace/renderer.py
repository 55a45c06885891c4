"""
Renderer module - ties a scene generator, its camera and the image sink
together.

Implements:
- Render configuration with validation
- Building a named scene and snapping its camera
- Saving the framebuffer through Pillow
"""

from __future__ import annotations
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

from .bitmap import Bitmap
from .camera import Camera, MAX_THREADS
from .scene import Scene
from .scenes import get_scene_generator

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    scene: str = 'basic'
    thread_count: int = 0  # 0 = auto-detect
    output: Path = Path('output/render.bmp')
    scale: float = 1.0
    trace: bool = False

    def __post_init__(self):
        if self.thread_count == 0:
            self.thread_count = min(os.cpu_count() or 4, MAX_THREADS - 1)
        if not 1 <= self.thread_count < MAX_THREADS:
            raise ValueError(
                f"thread_count must be in [1, {MAX_THREADS}), got {self.thread_count}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        self.output = Path(self.output)


class Renderer:
    """Renders one of the built-in scenes."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def build(self) -> Tuple[Scene, Camera]:
        """Populate a fresh scene and return it with its (scaled) camera.

        Raises:
            UnknownSceneError: if the configured scene does not exist
        """
        generator = get_scene_generator(self.settings.scene)
        scene = Scene()
        camera = generator(scene)
        if self.settings.scale != 1.0:
            camera = camera.scaled(self.settings.scale)
        return scene, camera

    def render(self) -> Bitmap:
        """Render the configured scene and return the framebuffer."""
        scene, camera = self.build()
        logger.info("Scene %r: %d objects, %dx%d pixels, %d threads",
                    self.settings.scene, len(scene), camera.width_px, camera.height_px,
                    self.settings.thread_count)

        start_time = time.time()
        bitmap = camera.snap(
            scene,
            self.settings.thread_count,
            trace=self.settings.trace,
            progress=self._progress_callback,
        )
        elapsed = time.time() - start_time
        logger.info("Render completed in %.2f seconds", elapsed)
        return bitmap

    def save_image(self, bitmap: Bitmap, filename: Optional[Path] = None) -> Path:
        """Save the framebuffer; defaults to the configured output path."""
        path = Path(filename) if filename is not None else self.settings.output
        path.parent.mkdir(parents=True, exist_ok=True)
        bitmap.save(path)
        logger.info("Saved %s", path)
        return path
