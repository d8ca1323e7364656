"""Test module for svgcore.bezier

The tests are run using pytest.
These tests ensure that the fixed-step and the adaptive polygonization
of Bezier curves remain working correctly after changes and refactoring.
"""

import numpy as np
import pytest
import shapely.geometry

from svgcore.bezier import BezierCurve

CUBIC = np.array([(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)])
QUADRATIC = np.array([(0.0, 0.0), (5.0, 10.0), (10.0, 0.0)])
# Collinear control points running past both end points
OVERSHOOT = np.array([(0.0, 0.0), (100.0, 0.0), (-90.0, 0.0), (10.0, 0.0)])


class TestFixedSteps:
    """Fixed-step polygonization."""

    def test_cubic_shape_and_end_points(self):
        """Test result shape and exact end points."""
        points = BezierCurve.polygonize_cubic_curve(CUBIC, 8)
        assert points.shape == (9, 2)
        np.testing.assert_array_equal(points[0], CUBIC[0])
        np.testing.assert_array_equal(points[-1], CUBIC[-1])

    def test_cubic_midpoint(self):
        """B(0.5) = (P0 + 3*P1 + 3*P2 + P3) / 8."""
        points = BezierCurve.polygonize_cubic_curve(CUBIC, 2)
        np.testing.assert_allclose(points[1], (5.0, 7.5))

    def test_quadratic_midpoint(self):
        """B(0.5) = (P0 + 2*P1 + P2) / 4."""
        points = BezierCurve.polygonize_quadratic_curve(QUADRATIC, 2)
        assert points.shape == (3, 2)
        np.testing.assert_allclose(points[1], (5.0, 5.0))

    def test_accepts_tuple_sequences(self):
        """Control points may be given as tuples."""
        points = BezierCurve.polygonize_quadratic_curve([(0, 0), (1, 1), (2, 0)], 1)
        np.testing.assert_allclose(points, [(0.0, 0.0), (2.0, 0.0)])

    def test_invalid_input(self):
        """Wrong number of control points or steps."""
        with pytest.raises(ValueError):
            BezierCurve.polygonize_cubic_curve(QUADRATIC, 4)
        with pytest.raises(ValueError):
            BezierCurve.polygonize_quadratic_curve(QUADRATIC, 0)


class TestAdaptive:
    """Adaptive polygonization by de Casteljau subdivision."""

    def test_straight_curve_needs_one_segment(self):
        """Collinear control points give a single line."""
        points = BezierCurve.polygonize_adaptive([(0, 0), (1, 0), (2, 0), (3, 0)], 0.1)
        np.testing.assert_allclose(points, [(0.0, 0.0), (3.0, 0.0)])

    @pytest.mark.parametrize("tolerance", [1.0, 0.1, 0.01])
    def test_deviation_within_tolerance(self, tolerance):
        """Every point of the true curve lies within tolerance of the polyline."""
        points = BezierCurve.polygonize_adaptive(CUBIC, tolerance)
        np.testing.assert_array_equal(points[0], CUBIC[0])
        np.testing.assert_array_equal(points[-1], CUBIC[-1])
        polyline = shapely.geometry.LineString(points)
        for x, y in BezierCurve.polygonize_cubic_curve(CUBIC, 200):
            assert polyline.distance(shapely.geometry.Point(x, y)) <= tolerance + 1e-9

    def test_smaller_tolerance_gives_more_points(self):
        """Refinement increases with decreasing tolerance."""
        coarse = BezierCurve.polygonize_adaptive(CUBIC, 1.0)
        fine = BezierCurve.polygonize_adaptive(CUBIC, 0.01)
        assert len(fine) > len(coarse)

    def test_closed_curve(self):
        """A curve ending at its start point is still subdivided."""
        ctrl = [(0.0, 0.0), (10.0, 10.0), (-10.0, 10.0), (0.0, 0.0)]
        points = BezierCurve.polygonize_adaptive(ctrl, 0.1)
        assert len(points) > 2
        assert points[:, 1].max() > 5.0

    def test_collinear_overshoot(self):
        """Control points on the chord line but beyond its ends are not flat."""
        tolerance = 0.1
        points = BezierCurve.polygonize_adaptive(OVERSHOOT, tolerance)
        true_x = BezierCurve.polygonize_cubic_curve(OVERSHOOT, 2000)[:, 0]
        assert len(points) > 2
        assert points[:, 0].max() >= true_x.max() - tolerance
        assert points[:, 0].min() <= true_x.min() + tolerance
        np.testing.assert_array_equal(points[-1], OVERSHOOT[-1])

    def test_invalid_tolerance(self):
        """Tolerance must be positive."""
        with pytest.raises(ValueError):
            BezierCurve.polygonize_adaptive(CUBIC, 0.0)


class TestSplit:
    """De Casteljau splitting."""

    def test_split_halves_meet_on_curve(self):
        """Both halves share the curve point at t."""
        left, right = BezierCurve.split(CUBIC, 0.5)
        assert left.shape == (4, 2) and right.shape == (4, 2)
        np.testing.assert_allclose(left[-1], (5.0, 7.5))
        np.testing.assert_allclose(right[0], (5.0, 7.5))
        np.testing.assert_array_equal(left[0], CUBIC[0])
        np.testing.assert_array_equal(right[-1], CUBIC[-1])

    def test_flatness(self):
        """Distance of inner control points from the chord."""
        assert BezierCurve.flatness(QUADRATIC) == pytest.approx(10.0)
        assert BezierCurve.flatness(np.array([(0.0, 0.0), (1.0, 1.0)])) == 0.0
        assert BezierCurve.flatness(OVERSHOOT) == pytest.approx(90.0)
