"""Central module containing shared types and enums for SVG geometry processing."""

from __future__ import annotations

from enum import Enum, auto
from typing import Literal, Tuple

###############################################################################
# Types
###############################################################################


Point = Tuple[float, float]  # Absolute (x, y) coordinate in user units


SvgPathCmds = Literal[  # Command letters of the path-data mini-language, uppercase = absolute
    # MoveTo (2) - start a new subpath and move the current point to (x,y)
    "M",
    # LineTo (2) - draw a straight line from the current point to (x,y)
    "L",
    # Horizontal LineTo (1) - x only, y stays unchanged
    "H",
    # Vertical LineTo (1) - y only, x stays unchanged
    "V",
    # Cubic Bezier To (6) - two control points and an endpoint (x,y)
    "C",
    # Smooth cubic Bezier To (4) - first control point is the reflection of the previous one
    "S",
    # Quadratic Bezier To (4) - one control point and an endpoint (x,y)
    "Q",
    # Smooth quadratic Bezier To (2) - control point is the reflection of the previous one
    "T",
    # Arc (7) - rx ry x-axis-rotation large-arc-flag sweep-flag x y
    "A",
    # ClosePath (0) - line back to the start point of the subpath
    "Z",
]


###############################################################################
# Enums
###############################################################################


class StrokePart(Enum):
    """Enum to tell the polygons of a stroke outline apart."""

    SEGMENT = auto()
    JOIN = auto()
