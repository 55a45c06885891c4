"""
Built-in scenes.

Each generator populates an empty Scene and returns the Camera that
frames it. Generators are looked up by name from ``SCENE_GENERATORS``.
"""

from __future__ import annotations
import math
from typing import Callable, Iterator, Tuple

from .camera import Camera
from .errors import UnknownSceneError
from .scene import Scene
from .shapes import Plane
from .surfaces import OpaqueBox, Sky, MirrorSphere, RefractiveBox, CheckeredPlane
from .vec3 import Vec3

SceneGenerator = Callable[[Scene], Camera]


def _initial_normals() -> Tuple[Vec3, Vec3]:
    """Two orthogonal, slightly tilted face normals shared by the box scenes."""
    diagonal = (Vec3.k_hat() + Vec3.j_hat()) * (1.0 / math.sqrt(2))
    normal_a = Vec3.i_hat() + diagonal
    normal_b = Vec3.i_hat() - diagonal
    return normal_a, normal_b


def _box_row(normal_a: Vec3, normal_b: Vec3) -> Iterator[Tuple[Vec3, Vec3, Vec3]]:
    """Yield (position, normal_a, normal_b) for a row of eight tumbling boxes."""
    for i in range(8):
        position = (Vec3.i_hat() * 3500
                    + Vec3.j_hat() * (1500 * (i - 4))
                    + Vec3.k_hat() * (1200 * ((i % 4) - 2)))
        yield position, normal_a, normal_b
        normal_a = normal_a.rotate(0.3, normal_b)
        normal_b = normal_b.rotate(1.3, normal_a)


def _add_mirrors(scene: Scene) -> None:
    scene.add(MirrorSphere(Vec3(4500, 2000, 2000), 600))
    scene.add(MirrorSphere(Vec3(4500, -2000, -2000), 600))
    scene.add(MirrorSphere(Vec3(3500, 0, 0), 600))


def generate_basic_scene(scene: Scene) -> Camera:
    """Eight opaque boxes against the sky."""
    normal_a, normal_b = _initial_normals()
    normal_a = normal_a.rotate(0.1, normal_b)
    normal_b = normal_b.rotate(0.1, normal_a)

    for position, a, b in _box_row(normal_a, normal_b):
        scene.add(OpaqueBox(position, a, b, 200.0))

    scene.add(Sky())
    return Camera(6.0, 2000, 2000, 150)


def generate_sphere_scene(scene: Scene) -> Camera:
    """The basic boxes plus three mirror spheres reflecting them."""
    normal_a, normal_b = _initial_normals()
    normal_a = normal_a.rotate(0.1, normal_b)
    normal_b = normal_b.rotate(0.1, normal_a)

    for position, a, b in _box_row(normal_a, normal_b):
        scene.add(OpaqueBox(position, a, b, 200.0))

    scene.add(Sky())
    _add_mirrors(scene)
    return Camera(6.0, 5000, 2500, 200)


def generate_refraction_scene(scene: Scene) -> Camera:
    """A glass box in front of a checkered wall."""
    wall = Plane(-Vec3.i_hat(), Vec3.i_hat() * 250)
    scene.add(CheckeredPlane(wall, Vec3.j_hat(), 150))

    normal_a, normal_b = _initial_normals()
    normal_a = normal_a.rotate(0.1, normal_b)

    position = Vec3.i_hat() * 150 - Vec3.k_hat() * 15 + Vec3.j_hat() * 50
    scene.add(RefractiveBox(position, normal_a, normal_b, 50.0))
    return Camera(6.0, 5000, 2500, 20)


def generate_mixed_scene(scene: Scene) -> Camera:
    """Opaque and refractive boxes, mirrors and the sky together."""
    normal_a, normal_b = _initial_normals()
    normal_a = normal_a.rotate(0.1, normal_b)
    normal_b = normal_b.rotate(0.1, normal_a)

    for i, (position, a, b) in enumerate(_box_row(normal_a, normal_b)):
        if i % 3 == 0:
            scene.add(RefractiveBox(position, a, b, 200.0))
        else:
            scene.add(OpaqueBox(position, a, b, 200.0))
        normal_a, normal_b = a, b

    # Two more turns past the last box in the row
    for _ in range(2):
        normal_a = normal_a.rotate(0.3, normal_b)
        normal_b = normal_b.rotate(1.3, normal_a)

    scene.add(Sky())
    _add_mirrors(scene)

    position = Vec3.i_hat() * 1500 - Vec3.k_hat() * 500 + Vec3.j_hat() * 500
    scene.add(RefractiveBox(position, normal_a, normal_b, 200.0))
    return Camera(6.0, 5000, 2500, 200)


SCENE_GENERATORS: dict[str, SceneGenerator] = {
    'basic': generate_basic_scene,
    'sphere': generate_sphere_scene,
    'refraction': generate_refraction_scene,
    'mixed': generate_mixed_scene,
}


def get_scene_generator(name: str) -> SceneGenerator:
    """Look up a scene generator by name.

    Raises:
        UnknownSceneError: if no generator has that name
    """
    try:
        return SCENE_GENERATORS[name]
    except KeyError:
        raise UnknownSceneError(name, list(SCENE_GENERATORS)) from None
