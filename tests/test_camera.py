"""Tests for Camera class."""

import pytest
import logging
import numpy as np

from facetrace.camera import Camera, MAX_THREADS
from facetrace.color import Color, WHITE, BLUE
from facetrace.scene import Scene
from facetrace.surfaces import OpaqueBox, MirrorSphere, Sky
from facetrace.vec3 import Vec3, Point3


def small_scene():
    """A box and a mirror in front of the sky."""
    scene = Scene()
    scene.add(OpaqueBox(Point3(20, 2, 0), Vec3(1, 1, 0), Vec3(-1, 1, 0), 3.0))
    scene.add(MirrorSphere(Point3(25, -4, 1), 3.0))
    scene.add(Sky())
    return scene


def white_scene():
    scene = Scene()
    scene.add(Sky(uniform=True))
    return scene


class TestCameraCreation:
    """Test Camera construction."""

    def test_default_focus(self):
        cam = Camera(6.0, 20, 10, 2.0)
        assert cam.focus_position == Point3(0, 0, 0)

    def test_scaled(self):
        cam = Camera(6.0, 5000, 2500, 200, Point3(1, 2, 3)).scaled(0.01)
        assert (cam.width_px, cam.height_px) == (50, 25)
        assert cam.resolution == pytest.approx(2.0)
        assert cam.focal_length == 6.0
        assert cam.focus_position == Point3(1, 2, 3)

    def test_scaled_keeps_a_pixel(self):
        cam = Camera(6.0, 10, 10, 1.0).scaled(0.001)
        assert (cam.width_px, cam.height_px) == (1, 1)


class TestCameraRays:
    """Test sample ray generation."""

    def test_center_ray(self):
        cam = Camera(6.0, 20, 10, 2.0)
        ray = cam.sample_ray(0, 0)
        assert ray.offset == Point3(0, 0, 0)
        assert ray.direction == Vec3(6.0, 0, 0)

    def test_offset_ray(self):
        cam = Camera(6.0, 20, 10, 2.0)
        ray = cam.sample_ray(2, -1)
        s = cam.radial_scale(2, -1)
        assert ray.direction == Vec3(6.0, 2 * s / 2.0, -1 * s / 2.0)

    def test_ray_from_focus(self):
        cam = Camera(6.0, 20, 10, 2.0, focus_position=Point3(1, 1, 1))
        ray = cam.sample_ray(0, 0)
        assert ray.offset == Point3(1, 1, 1)
        assert ray.direction == Vec3(6.0, 0, 0)

    def test_radial_scale(self):
        cam = Camera(6.0, 20, 10, 2.0)
        assert cam.radial_scale(0, 0) == 1.0
        assert cam.radial_scale(10, 5) == pytest.approx(2.0)
        assert cam.radial_scale(-10, -5) == pytest.approx(2.0)
        assert 1.0 < cam.radial_scale(3, 0) < 2.0


class TestStrips:
    """Test the split of columns between threads."""

    def test_even_split(self):
        cam = Camera(6.0, 8, 2, 1.0)
        assert cam.strips(4) == [(-4, -2), (-2, 0), (0, 2), (2, 4)]

    def test_last_strip_takes_remainder(self):
        cam = Camera(6.0, 10, 2, 1.0)
        assert cam.strips(4) == [(-5, -3), (-3, -1), (-1, 1), (1, 5)]

    @pytest.mark.parametrize("width", [1, 2, 7, 64, 101])
    @pytest.mark.parametrize("threads", [1, 3, 12, 200])
    def test_strips_partition_columns(self, width, threads):
        cam = Camera(6.0, width, 2, 1.0)
        strips = cam.strips(threads)
        assert len(strips) == threads
        assert strips[0][0] == -(width // 2)
        assert strips[-1][1] == width // 2
        for (_, end), (begin, _) in zip(strips, strips[1:]):
            assert end == begin
        assert all(begin <= end for begin, end in strips)


class TestSnap:
    """Test rendering through Camera.snap()."""

    def test_uniform_scene(self):
        bitmap = Camera(6.0, 8, 6, 1.0).snap(white_scene(), thread_count=3)
        assert (bitmap.width, bitmap.height) == (8, 6)
        assert np.all(bitmap.pixels == 255)

    def test_odd_size_leaves_last_row_and_column(self):
        bitmap = Camera(6.0, 5, 3, 1.0).snap(white_scene(), thread_count=2)
        assert bitmap.at(0, 0) == WHITE
        assert bitmap.at(3, 1) == WHITE
        assert bitmap.at(4, 0) == BLUE
        assert bitmap.at(0, 2) == BLUE

    def test_more_threads_than_columns(self):
        bitmap = Camera(6.0, 4, 4, 1.0).snap(white_scene(), thread_count=9)
        assert np.all(bitmap.pixels == 255)

    @pytest.mark.parametrize("thread_count", [0, -1, MAX_THREADS])
    def test_invalid_thread_count(self, thread_count):
        with pytest.raises(ValueError):
            Camera(6.0, 4, 4, 1.0).snap(white_scene(), thread_count=thread_count)

    def test_thread_count_does_not_change_image(self):
        cam = Camera(6.0, 24, 16, 2.0)
        single = cam.snap(small_scene(), thread_count=1)
        multi = cam.snap(small_scene(), thread_count=5)
        assert np.array_equal(single.pixels, multi.pixels)

    def test_same_scene_renders_twice(self):
        scene = small_scene()
        cam = Camera(6.0, 12, 8, 2.0)
        first = cam.snap(scene, thread_count=2)
        second = cam.snap(scene, thread_count=3)
        assert np.array_equal(first.pixels, second.pixels)

    def test_scene_is_visible(self):
        bitmap = Camera(6.0, 24, 16, 2.0).snap(small_scene(), thread_count=2)
        colors = {bitmap.at(x, y) for x in range(24) for y in range(16)}
        assert len(colors) > 2
        assert any(color in colors for color in OpaqueBox.PALETTE)

    def test_progress(self):
        reported = []
        Camera(6.0, 8, 4, 1.0).snap(white_scene(), thread_count=4,
                                    progress=reported.append)
        assert len(reported) == 4
        assert reported == sorted(reported)
        assert reported[-1] == 1.0

    def test_trace_logging(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="facetrace.trace"):
            Camera(6.0, 4, 2, 1.0).snap(white_scene(), thread_count=2, trace=True)
        messages = [r.getMessage() for r in caplog.records if r.name == "facetrace.trace"]
        assert len(messages) == 8
        assert all("(Sky uniform: True) matched" in m for m in messages)
        assert messages[0].startswith("[strip 0]")

    def test_no_trace_by_default(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="facetrace.trace"):
            Camera(6.0, 4, 2, 1.0).snap(white_scene(), thread_count=2)
        assert not [r for r in caplog.records if r.name == "facetrace.trace"]
