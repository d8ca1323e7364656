"""Basic SVG shapes expressed as path instructions."""

from __future__ import annotations

from typing import List, Sequence

from svgcore.common import Point
from svgcore.errors import InvalidPathArity
from svgcore.instructions import ClosePath, EllipticalArc, LineTo, MoveTo, PathInstruction
from svgcore.lexer import NumberLexer


def parse_points(text: str) -> List[Point]:
    """Parse the "points" attribute of a polygon or polyline.

    Raises:
        MalformedNumber: for anything else than numbers and separators
        InvalidPathArity: for an odd number of coordinates
    """
    values = NumberLexer.tokenize(text)
    if len(values) % 2:
        raise InvalidPathArity("points", len(values), 2)
    return [(values[i], values[i + 1]) for i in range(0, len(values), 2)]


def _check_size(**sizes: float) -> None:
    for name, value in sizes.items():
        if value < 0:
            raise ValueError(f"{name} must not be negative, got {value}")


def rect_instructions(x: float, y: float, width: float, height: float) -> List[PathInstruction]:
    """Closed rectangle starting at its (x, y) corner; empty if width or height is zero."""
    _check_size(width=width, height=height)
    if width == 0 or height == 0:
        return []
    return [
        MoveTo((x, y)),
        LineTo((x + width, y)),
        LineTo((x + width, y + height)),
        LineTo((x, y + height)),
        ClosePath(),
    ]


def ellipse_instructions(cx: float, cy: float, rx: float, ry: float) -> List[PathInstruction]:
    """Closed ellipse made of two half arcs; empty if a radius is zero.

    A single arc back to its own start point would be omitted, hence the two halves.
    """
    _check_size(rx=rx, ry=ry)
    if rx == 0 or ry == 0:
        return []
    start = (cx + rx, cy)
    opposite = (cx - rx, cy)
    return [
        MoveTo(start),
        EllipticalArc(opposite, rx, ry, 0.0, False, True),
        EllipticalArc(start, rx, ry, 0.0, False, True),
        ClosePath(),
    ]


def circle_instructions(cx: float, cy: float, r: float) -> List[PathInstruction]:
    """Closed circle; empty if the radius is zero."""
    _check_size(r=r)
    return ellipse_instructions(cx, cy, r, r)


def line_instructions(start: Point, end: Point) -> List[PathInstruction]:
    """Open straight line."""
    return [MoveTo(start), LineTo(end)]


def polyline_instructions(points: Sequence[Point]) -> List[PathInstruction]:
    """Open polyline through _points_; empty for no points."""
    if not points:
        return []
    return [MoveTo(points[0])] + [LineTo(point) for point in points[1:]]


def polygon_instructions(points: Sequence[Point]) -> List[PathInstruction]:
    """Closed polygon through _points_; empty for no points."""
    instructions = polyline_instructions(points)
    if instructions:
        instructions.append(ClosePath())
    return instructions
