"""Tests for the built-in scenes."""

import pytest

from facetrace.camera import Camera
from facetrace.errors import UnknownSceneError
from facetrace.scene import Scene
from facetrace.scenes import SCENE_GENERATORS, get_scene_generator
from facetrace.surfaces import OpaqueBox, Sky, MirrorSphere, RefractiveBox, CheckeredPlane


def build(name):
    scene = Scene()
    camera = get_scene_generator(name)(scene)
    return scene, camera


class TestRegistry:

    def test_names(self):
        assert list(SCENE_GENERATORS) == ['basic', 'sphere', 'refraction', 'mixed']

    def test_lookup(self):
        assert get_scene_generator('basic') is SCENE_GENERATORS['basic']

    def test_unknown(self):
        with pytest.raises(UnknownSceneError) as info:
            get_scene_generator('nope')
        assert str(info.value) == 'unknown scene: "nope"'
        assert info.value.available == list(SCENE_GENERATORS)

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            get_scene_generator('')


class TestGenerators:

    def test_basic(self):
        scene, camera = build('basic')
        surfaces = list(scene)
        assert len(surfaces) == 9
        assert all(isinstance(s, OpaqueBox) for s in surfaces[:8])
        assert isinstance(surfaces[8], Sky)
        assert (camera.width_px, camera.height_px, camera.resolution) == (2000, 2000, 150)

    def test_sphere(self):
        scene, camera = build('sphere')
        surfaces = list(scene)
        assert len(surfaces) == 12
        assert all(isinstance(s, MirrorSphere) for s in surfaces[9:])
        assert (camera.width_px, camera.height_px) == (5000, 2500)

    def test_refraction(self):
        scene, camera = build('refraction')
        surfaces = list(scene)
        assert isinstance(surfaces[0], CheckeredPlane)
        assert isinstance(surfaces[1], RefractiveBox)
        assert camera.resolution == 20

    def test_mixed(self):
        scene, _ = build('mixed')
        surfaces = list(scene)
        assert len(surfaces) == 13
        assert [i for i, s in enumerate(surfaces[:8]) if isinstance(s, RefractiveBox)] == [0, 3, 6]
        assert isinstance(surfaces[-1], RefractiveBox)

    @pytest.mark.parametrize("name", list(SCENE_GENERATORS))
    def test_generators_return_camera(self, name):
        scene, camera = build(name)
        assert isinstance(camera, Camera)
        assert camera.focal_length == 6.0
        assert all(s.scene is scene for s in scene)

    @pytest.mark.parametrize("name", list(SCENE_GENERATORS))
    def test_tiny_render(self, name):
        scene, camera = build(name)
        bitmap = camera.scaled(0.004).snap(scene, thread_count=2)
        assert bitmap.width == camera.scaled(0.004).width_px
