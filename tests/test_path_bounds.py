"""Test module for svgcore.path_bounds

The tests are run using pytest.
"""

import pytest

from svgcore.geom import SvBox
from svgcore.instructions import EllipticalArc, MoveTo
from svgcore.path_bounds import BoundingBoxCalculator
from svgcore.svgpath import PathDataParser


def bbox(path_data):
    return BoundingBoxCalculator.bounding_box(PathDataParser.parse(path_data))


def test_closed_square():
    """The extent of a closed square."""
    assert bbox("M0,0 L10,0 L10,10 Z") == SvBox(0.0, 0.0, 10.0, 10.0)


def test_empty_path():
    """An empty path has no bounding box."""
    assert bbox("") is None


def test_single_point():
    """A lone MoveTo gives a degenerate box."""
    box = bbox("M3,4")
    assert box == SvBox(3.0, 4.0, 3.0, 4.0)
    assert box.width == 0.0 and box.height == 0.0


def test_curves_include_control_points():
    """Control points bound the curve."""
    assert bbox("M0,0 C0,10 10,-5 10,0") == SvBox(0.0, -5.0, 10.0, 10.0)
    assert bbox("M0,0 Q5,10 10,0") == SvBox(0.0, 0.0, 10.0, 10.0)


def test_smooth_curves_use_reflected_controls():
    """The reflected control point of T is part of the extent."""
    assert bbox("M0,0 Q5,10 10,0 T20,0") == SvBox(0.0, -10.0, 20.0, 10.0)


def test_arc_contributes_end_point():
    """Arcs contribute their end point."""
    instructions = [MoveTo((0.0, 0.0)), EllipticalArc((10.0, 0.0), 5.0, 5.0, 0.0, False, True)]
    assert BoundingBoxCalculator.bounding_box(instructions) == SvBox(0.0, 0.0, 10.0, 0.0)


def test_relative_and_shorthand_lines():
    """H, V and relative commands are resolved."""
    assert bbox("m1,1 h4 v-3 l-10,0") == SvBox(-5.0, -2.0, 5.0, 1.0)


def test_invalid_instruction():
    """Non-instructions are rejected."""
    with pytest.raises(TypeError):
        BoundingBoxCalculator.bounding_box([MoveTo((0.0, 0.0)), (1.0, 1.0)])


def test_union_all():
    """Children boxes are merged, missing ones ignored."""
    boxes = [None, SvBox(0.0, 0.0, 1.0, 1.0), bbox(""), SvBox(-1.0, 2.0, 0.0, 3.0)]
    assert BoundingBoxCalculator.union_all(boxes) == SvBox(-1.0, 0.0, 1.0, 3.0)
    assert BoundingBoxCalculator.union_all([]) is None
