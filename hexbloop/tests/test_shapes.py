# tests/test_shapes.py
"""
Tests for shape synthesis primitives.
"""
import math

import numpy as np
import pytest

from hexbloop.noise import NoiseField
from hexbloop.seeds import SeededStream
from hexbloop.shapes import (
    Metaball,
    SpiralKind,
    cubic_bezier,
    flow_trace,
    golden_points,
    hex_ring_centers,
    metaball_field,
    organic_blob,
    polygon_points,
    smooth_closed,
    spiral_points,
    star_points,
    superformula_points,
    wave_points,
)


def _noise():
    return NoiseField(2024)


# -----------------------------------------------------------------------------
# Curves
# -----------------------------------------------------------------------------

def test_bezier_starts_at_p0():
    pts = cubic_bezier((0, 0), (1, 2), (3, 2), (4, 0), steps=8)
    assert len(pts) == 8
    assert pts[0] == (0, 0)


def test_smooth_closed_length():
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]
    assert len(smooth_closed(square, steps=6)) == 24
    assert smooth_closed(square[:2]) == square[:2]


class TestOrganicBlob:

    def test_deterministic(self):
        a = organic_blob(50, 50, 20, _noise(), k=8)
        b = organic_blob(50, 50, 20, _noise(), k=8)
        assert a == b
        assert len(a) == 8 * 12

    def test_stays_near_radius(self):
        pts = organic_blob(0, 0, 20, _noise(), k=10, variance=0.6)
        for x, y in pts:
            assert math.hypot(x, y) < 20 * 1.3 * 1.5

    def test_offset_changes_shape(self):
        a = organic_blob(0, 0, 20, _noise(), offset=(0.0, 0.0))
        b = organic_blob(0, 0, 20, _noise(), offset=(5.3, 1.7))
        assert a != b


class TestSpiral:

    def test_point_count(self):
        assert len(spiral_points(0, 0, "archimedean", 2.0, turns=2, steps_per_turn=30)) == 61

    def test_archimedean_starts_at_centre(self):
        pts = spiral_points(5, 5, SpiralKind.ARCHIMEDEAN, 2.0)
        assert pts[0] == pytest.approx((5, 5))

    def test_radius_grows(self):
        for kind in SpiralKind:
            pts = spiral_points(0, 0, kind, 1.0, turns=2)
            assert math.hypot(*pts[-1]) > math.hypot(*pts[len(pts) // 4])


class TestSuperformula:

    def test_normalized_radius(self):
        pts = superformula_points(0, 0, 40, m=6, n1=1, n2=1, n3=1, steps=120)
        assert len(pts) == 120
        assert max(math.hypot(x, y) for x, y in pts) == pytest.approx(40)

    def test_circle_when_m_zero(self):
        pts = superformula_points(0, 0, 10, m=0, n1=2, n2=2, n3=2, steps=36)
        radii = [math.hypot(x, y) for x, y in pts]
        assert max(radii) - min(radii) == pytest.approx(0, abs=1e-9)

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            superformula_points(0, 0, 10, m=4, n1=0, n2=1, n3=1)
        with pytest.raises(ValueError):
            superformula_points(0, 0, 10, m=4, n1=1, n2=1, n3=1, a=0)


class TestMetaballs:

    def test_surface(self):
        surface = metaball_field(64, 64, [Metaball(32, 32, 12, (255, 0, 0, 255))], blur_radius=2)
        assert surface.mode == "RGBA"
        assert surface.size == (64, 64)
        arr = np.asarray(surface)
        assert arr[32, 32, 3] > 128
        assert arr[0, 0, 3] == 0

    def test_overlap_merges(self):
        balls = [Metaball(24, 32, 10, (0, 255, 0, 255)), Metaball(40, 32, 10, (0, 255, 0, 255))]
        arr = np.asarray(metaball_field(64, 64, balls, blur_radius=2))
        assert arr[32, 32, 3] > 128

    def test_offscreen_ball_ignored(self):
        arr = np.asarray(metaball_field(32, 32, [Metaball(500, 500, 5, (255, 255, 255, 255))]))
        assert arr[..., 3].max() == 0


class TestFlow:

    def test_segments_stay_on_canvas(self):
        segments = flow_trace(_noise(), 10, 10, steps=400, width=64, height=48, step_length=3)
        assert segments
        for seg in segments:
            assert len(seg) > 1
            for x, y in seg:
                assert 0 <= x < 64
                assert 0 <= y < 48

    def test_deterministic(self):
        assert flow_trace(_noise(), 5, 5, 50, 100, 100) == flow_trace(_noise(), 5, 5, 50, 100, 100)


# -----------------------------------------------------------------------------
# Supplementary geometry
# -----------------------------------------------------------------------------

def test_polygon_sides_and_jitter():
    pts = polygon_points(0, 0, 10, 6)
    assert len(pts) == 6
    for x, y in pts:
        assert math.hypot(x, y) == pytest.approx(10)
    jittered = polygon_points(0, 0, 10, 6, jitter=0.2, stream=SeededStream(3))
    for x, y in jittered:
        assert 8 - 1e-9 <= math.hypot(x, y) <= 12 + 1e-9


def test_star_alternates():
    pts = star_points(0, 0, 10, 4, 5)
    assert len(pts) == 10
    assert math.hypot(*pts[0]) == pytest.approx(10)
    assert math.hypot(*pts[1]) == pytest.approx(4)


def test_wave_spans_range():
    pts = wave_points(0, 100, 50, amplitude=5, wavelength=25, steps=50)
    assert len(pts) == 51
    assert pts[0][0] == 0 and pts[-1][0] == 100
    assert all(45 - 1e-9 <= y <= 55 + 1e-9 for _, y in pts)


def test_hex_rings_count():
    assert len(hex_ring_centers(0, 0, 10, 0)) == 1
    assert len(hex_ring_centers(0, 0, 10, 2)) == 19


def test_golden_points():
    pts = golden_points(1000, 1000)
    assert len(pts) == 6
    assert pts[0][2] == 1.0
    assert pts[0][0] == pytest.approx(1000 / 1.618033988749895)
