"""
facetrace - a brute-force Python ray caster

Renders a synthetic 3D scene by casting one ray per pixel and resolving
the nearest surface it strikes:
- Exact ray intersections with planes, rectangles, spheres and cubes
- Recursive mirror reflection and refraction with bounded nesting
- Multi-threaded strip rendering with per-thread state
"""

__version__ = "0.1.0"

from .errors import InvariantError, UnknownSceneError
from .vec3 import Vec3, Point3
from .ray import Ray
from .shapes import Plane, RectanglePlaneSegment, Sphere, Cube, CubeHit
from .optics import reflect, refract, Refraction
from .color import Color
from .context import RenderContext, TraceLog
from .surfaces import Surface, Incidence, OpaqueBox, Sky, CheckeredPlane, MirrorSphere, RefractiveBox
from .scene import Scene
from .bitmap import Bitmap
from .camera import Camera
from .scenes import SCENE_GENERATORS, get_scene_generator
from .renderer import Renderer, RenderSettings
