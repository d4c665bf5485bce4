"""Tests for coordinate transforms and snapping."""

from __future__ import annotations

import math

import numpy as np
import pytest

from packages.core.types import Point, Wall
from packages.editor.geometry import (
    angle_snap,
    constrain_line,
    distance,
    magnetic_snap,
    nearby_endpoints,
    screen_to_world,
    snap,
    snap_point,
    wall_endpoints,
    world_to_screen,
    xy,
)


def _wall(wall_id: str, x1: float, y1: float, x2: float, y2: float) -> Wall:
    return Wall(id=wall_id, start=Point(x=x1, y=y1), end=Point(x=x2, y=y2))


class TestViewTransforms:
    def test_screen_to_world(self):
        world = screen_to_world({"x": 460, "y": 320}, {"x": 400, "y": 200}, 60)
        assert world.x == pytest.approx(1.0)
        assert world.y == pytest.approx(2.0)

    def test_world_to_screen(self):
        screen = world_to_screen(Point(x=1, y=2), Point(x=400, y=200), 60)
        assert (screen.x, screen.y) == (460, 320)

    @pytest.mark.parametrize("zoom", [0.5, 1.0, 37.5, 150.0])
    @pytest.mark.parametrize("pan", [(0, 0), (400, 300), (-123.4, 56.7)])
    def test_round_trip(self, zoom: float, pan: tuple[float, float]):
        pan_pt = {"x": pan[0], "y": pan[1]}
        for sx, sy in [(0, 0), (12.5, -7.25), (1920, 1080)]:
            back = world_to_screen(screen_to_world({"x": sx, "y": sy}, pan_pt, zoom), pan_pt, zoom)
            assert back.x == pytest.approx(sx)
            assert back.y == pytest.approx(sy)


class TestSnap:
    def test_nearest_multiple(self):
        assert snap(0.37) == 0.25
        assert snap(0.38) == 0.5
        assert snap(1.0, 0.5) == 1.0

    def test_half_rounds_up(self):
        assert snap(0.125) == 0.25
        assert snap(-0.125) == 0.0

    def test_zero_grid_falls_back_to_default(self):
        assert snap(0.38, 0) == 0.5

    @pytest.mark.parametrize("grid", [0.1, 0.25, 0.5, 1.0, 0.3])
    def test_idempotent(self, grid: float):
        rng = np.random.default_rng(7)
        for v in rng.uniform(-50, 50, size=200):
            once = snap(float(v), grid)
            assert snap(once, grid) == once

    def test_snap_point(self):
        p = snap_point({"x": 0.3, "y": 0.4})
        assert (p.x, p.y) == (0.25, 0.5)


class TestMagneticSnap:
    def test_snaps_to_nearby_endpoint(self):
        walls = [_wall("w1", 0, 0, 5, 0)]
        p = magnetic_snap({"x": 0.05, "y": 0.05}, walls, 0.3)
        assert (p.x, p.y) == (0.0, 0.0)

    def test_falls_back_to_grid(self):
        walls = [_wall("w1", 0, 0, 5, 0)]
        p = magnetic_snap({"x": 2.5, "y": 2.5}, walls, 0.3)
        assert (p.x, p.y) == (2.5, 2.5)

    def test_nearest_endpoint_wins(self):
        walls = [_wall("w1", 0, 0, 1, 0), _wall("w2", 1.2, 0, 3, 0)]
        p = magnetic_snap({"x": 1.15, "y": 0.0}, walls, 0.3)
        assert (p.x, p.y) == (1.2, 0.0)

    def test_first_endpoint_wins_on_tie(self):
        a = _wall("a", 0, 0, -5, 0)
        b = _wall("b", 2, 0, 7, 0)
        p = magnetic_snap({"x": 1, "y": 0}, [a, b], threshold=2.0)
        assert (p.x, p.y) == (0.0, 0.0)
        p = magnetic_snap({"x": 1, "y": 0}, [b, a], threshold=2.0)
        assert (p.x, p.y) == (2.0, 0.0)

    def test_threshold_is_exclusive(self):
        walls = [_wall("w1", 0, 0, 5, 0)]
        p = magnetic_snap({"x": 0.3, "y": 0.0}, walls, 0.3)
        assert (p.x, p.y) == (0.25, 0.0)

    def test_no_walls(self):
        p = magnetic_snap({"x": 0.3, "y": 0.4}, [])
        assert (p.x, p.y) == (0.25, 0.5)

    def test_accepts_document_walls(self):
        walls = [{"id": "w1", "start": {"x": 1, "y": 1}, "end": {"x": 2, "y": 1}}]
        p = magnetic_snap({"x": 2.1, "y": 1.1}, walls)
        assert (p.x, p.y) == (2.0, 1.0)

    def test_endpoint_order(self):
        endpoints = wall_endpoints([_wall("a", 0, 0, 1, 0), _wall("b", 2, 0, 3, 0)])
        np.testing.assert_array_equal(endpoints, [[0, 0], [1, 0], [2, 0], [3, 0]])


class TestNearbyEndpoints:
    def test_lists_endpoints_in_radius(self):
        walls = [_wall("w1", 0, 0, 5, 0), _wall("w2", 0, 0.2, 0, 4)]
        found = nearby_endpoints({"x": 0.1, "y": 0.0}, walls)
        assert [(p.x, p.y) for p in found] == [(0.0, 0.0), (0.0, 0.2)]

    def test_coincident_endpoint_excluded(self):
        walls = [_wall("w1", 0, 0, 5, 0)]
        assert nearby_endpoints({"x": 0.0, "y": 0.0}, walls) == []


class TestAngles:
    def test_angle_snap(self):
        assert angle_snap(math.radians(44)) == pytest.approx(math.radians(45))
        assert angle_snap(0.1) == 0.0
        assert angle_snap(math.radians(50), 90) == pytest.approx(math.radians(90))

    def test_constrain_line_keeps_length(self):
        end = constrain_line({"x": 0, "y": 0}, {"x": 10, "y": 1})
        assert end.x == pytest.approx(math.sqrt(101))
        assert end.y == pytest.approx(0.0, abs=1e-12)

    def test_constrain_line_diagonal(self):
        end = constrain_line({"x": 1, "y": 1}, {"x": 3, "y": 3.1})
        assert end.x - 1 == pytest.approx(end.y - 1)
        assert distance({"x": 1, "y": 1}, end) == pytest.approx(math.hypot(2, 2.1))

    def test_constrain_zero_length(self):
        end = constrain_line({"x": 2, "y": 3}, {"x": 2, "y": 3})
        assert (end.x, end.y) == (2.0, 3.0)


class TestDistance:
    def test_euclidean(self):
        assert distance({"x": 0, "y": 0}, {"x": 3, "y": 4}) == 5.0
        assert distance(Point(x=1, y=1), Point(x=1, y=1)) == 0.0

    def test_coordinate_pairs(self):
        assert distance((0, 0), (3, 4)) == 5.0
        assert distance([1.0, 1.0], np.array([4.0, 5.0])) == 5.0


class TestPointShapes:
    def test_tuple_and_array(self):
        assert xy((3.0, 4.0)) == (3.0, 4.0)
        assert xy(np.array([1.5, -2.0])) == (1.5, -2.0)

    def test_mapping_and_model(self):
        assert xy({"x": 1, "y": 2}) == (1.0, 2.0)
        assert xy(Point(x=1, y=2)) == (1.0, 2.0)

    def test_snap_point_from_tuple(self):
        p = snap_point((1.1, 2.2))
        assert (p.x, p.y) == (1.0, 2.25)

    @pytest.mark.parametrize("bad", [None, "xy", (1, 2, 3), 5])
    def test_rejects_non_points(self, bad):
        with pytest.raises(TypeError):
            xy(bad)
