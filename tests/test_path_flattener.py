"""Test module for svgcore.path_flattener

The tests are run using pytest.
These tests ensure that curves and arcs are converted into line
instructions correctly.
"""

import math

import pytest
import svgpathtools

from svgcore.consts import DEFAULT_FLATNESS_TOLERANCE, FlattenOptions
from svgcore.instructions import LINE_INSTRUCTIONS, ClosePath, EllipticalArc, LineTo, MoveTo
from svgcore.path_flattener import CurveFlattener
from svgcore.svgpath import PathDataParser


def _points(instructions):
    return [i.point for i in instructions if isinstance(i, (MoveTo, LineTo))]


###############################################################################
# Lines and Bezier curves
###############################################################################


def test_line_only_path_is_unchanged():
    """Paths without curves pass through unchanged."""
    instructions = PathDataParser.parse("M0,0 L10,0 L10,10 Z M20,20 L30,30")
    assert CurveFlattener().flatten(instructions) == instructions


def test_shorthand_lines_become_line_to():
    """H and V are emitted as LineTo."""
    flat = CurveFlattener().flatten(PathDataParser.parse("M1,2 H5 V7"))
    assert flat == [MoveTo((1.0, 2.0)), LineTo((5.0, 2.0)), LineTo((5.0, 7.0))]


def test_cubic_fixed_steps():
    """A cubic curve with fixed steps gives exactly _steps_ LineTos ending at the end point."""
    flattener = CurveFlattener(FlattenOptions(steps=4))
    flat = flattener.flatten(PathDataParser.parse("M0,0 C0,10 10,10 10,0"))
    assert isinstance(flat[0], MoveTo)
    assert len(flat) == 5
    assert all(isinstance(i, LineTo) for i in flat[1:])
    assert flat[-1] == LineTo((10.0, 0.0))
    assert flat[2].point == pytest.approx((5.0, 7.5))


def test_quadratic_and_smooth_curves():
    """Q, T and S are flattened, only line instructions remain."""
    flat = CurveFlattener().flatten(PathDataParser.parse("M0,0 Q5,10 10,0 T20,0 S30,10 40,0 Z"))
    assert all(isinstance(i, LINE_INSTRUCTIONS) for i in flat)
    assert isinstance(flat[-1], ClosePath)
    points = _points(flat)
    assert (10.0, 0.0) in points
    assert (20.0, 0.0) in points
    assert points[-1] == (40.0, 0.0)
    # The reflected control point of T bends the curve downwards
    assert min(y for _, y in points) < -1.0


def test_adaptive_tolerance_controls_point_count():
    """Smaller tolerance gives more line segments."""
    instructions = PathDataParser.parse("M0,0 C0,100 100,100 100,0")
    coarse = CurveFlattener(FlattenOptions(tolerance=1.0)).flatten(instructions)
    fine = CurveFlattener(FlattenOptions(tolerance=0.01)).flatten(instructions)
    assert len(fine) > len(coarse) > 2


def test_adaptive_curve_overshooting_its_end_points():
    """A curve doubling back along its chord line keeps its full extent."""
    flat = CurveFlattener().flatten(PathDataParser.parse("M0,0 C100,0 -90,0 10,0"))
    xs = [x for x, _ in _points(flat)]
    # The true curve spans x from about -20.07 to 30.07
    assert max(xs) >= 30.0 - DEFAULT_FLATNESS_TOLERANCE
    assert min(xs) <= -20.0 + DEFAULT_FLATNESS_TOLERANCE
    assert flat[-1] == LineTo((10.0, 0.0))


def test_flattening_is_idempotent():
    """Flattening a flattened path changes nothing."""
    flattener = CurveFlattener()
    flat = flattener.flatten(PathDataParser.parse("M0,0 C0,10 10,10 10,0 A5,5 0 0,1 20,0 Z"))
    assert flattener.flatten(flat) == flat


def test_unknown_instruction():
    """Non-instructions are rejected."""
    with pytest.raises(TypeError):
        CurveFlattener().flatten([MoveTo((0.0, 0.0)), "L1,1"])


###############################################################################
# Elliptical arcs
###############################################################################


def test_semicircle_points_on_circle():
    """All flattened points of a half circle lie on the circle."""
    flat = CurveFlattener(FlattenOptions(steps=4)).flatten(PathDataParser.parse("M0,0 A5,5 0 0,1 10,0"))
    assert len(flat) == 5
    for x, y in _points(flat):
        assert math.hypot(x - 5.0, y) == pytest.approx(5.0)
    # Sweep flag set: the arc passes through the negative y side
    assert flat[2].point == pytest.approx((5.0, -5.0))
    assert flat[-1] == LineTo((10.0, 0.0))


def test_sweep_flag_selects_side():
    """Clearing the sweep flag mirrors the half circle."""
    flat = CurveFlattener(FlattenOptions(steps=4)).flatten(PathDataParser.parse("M0,0 A5,5 0 0,0 10,0"))
    assert flat[2].point == pytest.approx((5.0, 5.0))


@pytest.mark.parametrize(
    "path_data",
    [
        "M0,0 A8,4 30 1,0 10,5",
        "M0,0 A8,4 30 0,1 10,5",
        "M3,-2 A20,10 -45 1,1 10,5",
    ],
)
def test_arc_matches_reference_implementation(path_data):
    """Center and parametric midpoint agree with svgpathtools."""
    reference = svgpathtools.parse_path(path_data)[0]
    flat = CurveFlattener(FlattenOptions(steps=2)).flatten(PathDataParser.parse(path_data))
    assert len(flat) == 3
    mid = reference.point(0.5)
    assert flat[1].point == pytest.approx((mid.real, mid.imag), abs=1e-6)


def test_arc_with_coincident_end_points_is_omitted():
    """An arc ending at its start point contributes nothing."""
    instructions = [MoveTo((1.0, 1.0)), EllipticalArc((1.0, 1.0), 5.0, 5.0, 0.0, False, True)]
    assert CurveFlattener().flatten(instructions) == [MoveTo((1.0, 1.0))]


def test_arc_with_zero_radius_is_a_line():
    """An arc with a zero radius is a straight line."""
    flat = CurveFlattener().flatten(PathDataParser.parse("M0,0 A0,5 0 0,1 10,0"))
    assert flat == [MoveTo((0.0, 0.0)), LineTo((10.0, 0.0))]


def test_arc_adaptive_segment_count():
    """The adaptive arc keeps all points on the ellipse and ends exactly."""
    flat = CurveFlattener(FlattenOptions(tolerance=0.01)).flatten(PathDataParser.parse("M0,0 A50,50 0 1,1 0,1"))
    assert len(flat) > 20
    assert flat[-1] == LineTo((0.0, 1.0))


def test_arc_radii_scaled_up():
    """Radii too small for the end points are scaled up to fit."""
    flat = CurveFlattener(FlattenOptions(steps=2)).flatten(PathDataParser.parse("M0,0 A1,1 0 0,1 10,0"))
    assert flat[1].point == pytest.approx((5.0, -5.0))
