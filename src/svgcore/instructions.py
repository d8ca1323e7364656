"""Resolved path instructions as produced by the path-data parser.

Every point carried by an instruction is absolute; relative commands are
resolved while parsing. The instructions form a closed set, consumers
dispatch over it exhaustively and reject anything else with a TypeError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Union

from svgcore.common import Point


@dataclass(frozen=True)
class ClosePath:
    """Close the current subpath, the current point returns to the subpath start."""


@dataclass(frozen=True)
class MoveTo:
    """Start a new subpath at _point_."""

    point: Point


@dataclass(frozen=True)
class LineTo:
    """Straight line from the current point to _point_."""

    point: Point


@dataclass(frozen=True)
class HLineTo:
    """Horizontal line to the absolute x-coordinate _x_."""

    x: float


@dataclass(frozen=True)
class VLineTo:
    """Vertical line to the absolute y-coordinate _y_."""

    y: float


@dataclass(frozen=True)
class CurveTo:
    """Cubic Bezier curve from the current point to _to_."""

    to: Point
    control_start: Point
    control_end: Point


@dataclass(frozen=True)
class SmoothCurveTo:
    """Cubic Bezier curve whose first control point reflects the previous curve's second one."""

    to: Point
    control_end: Point


@dataclass(frozen=True)
class QuadraticBezier:
    """Quadratic Bezier curve from the current point to _to_."""

    to: Point
    control: Point


@dataclass(frozen=True)
class SmoothQuadraticBezier:
    """Quadratic Bezier curve whose control point reflects the previous curve's one."""

    to: Point


@dataclass(frozen=True)
class EllipticalArc:
    """Elliptical arc from the current point to _to_ in SVG endpoint parameterization."""

    to: Point
    radius_x: float
    radius_y: float
    x_axis_rotation: float  # degrees
    large_arc: bool
    sweep: bool


PathInstruction = Union[
    ClosePath,
    MoveTo,
    LineTo,
    HLineTo,
    VLineTo,
    CurveTo,
    SmoothCurveTo,
    QuadraticBezier,
    SmoothQuadraticBezier,
    EllipticalArc,
]

# Instructions a flattened path consists of
LINE_INSTRUCTIONS = (MoveTo, LineTo, ClosePath)


def end_point(instruction: PathInstruction, current: Point) -> Point:
    """Return the current point after _instruction_ (ClosePath is handled by the caller)."""
    if isinstance(instruction, (MoveTo, LineTo)):
        return instruction.point
    if isinstance(instruction, HLineTo):
        return (instruction.x, current[1])
    if isinstance(instruction, VLineTo):
        return (current[0], instruction.y)
    if isinstance(instruction, (CurveTo, SmoothCurveTo, QuadraticBezier, SmoothQuadraticBezier, EllipticalArc)):
        return instruction.to
    if isinstance(instruction, ClosePath):
        return current
    raise TypeError(f"Not a path instruction: {instruction!r}")


def _reflect(control: Point, about: Point) -> Point:
    return (2.0 * about[0] - control[0], 2.0 * about[1] - control[1])


def expand_shorthands(instructions: Sequence[PathInstruction]) -> List[PathInstruction]:
    """Replace the shorthand instructions by their explicit counterparts.

    HLineTo/VLineTo become LineTo. SmoothCurveTo becomes CurveTo whose first
    control point is the reflection of the previous CurveTo's second control
    point about the current point (or the current point itself if the
    previous instruction was no cubic curve). SmoothQuadraticBezier becomes
    QuadraticBezier in the same manner with the previous quadratic control.

    Args:
        instructions: resolved path instructions

    Returns:
        List[PathInstruction]: instructions without H, V, S and T shorthands
    """
    result: List[PathInstruction] = []
    current: Point = (0.0, 0.0)
    subpath_start: Point = (0.0, 0.0)
    last_cubic_control = None
    last_quadratic_control = None

    for instruction in instructions:
        cubic_control = None
        quadratic_control = None

        if isinstance(instruction, MoveTo):
            subpath_start = instruction.point
            result.append(instruction)
        elif isinstance(instruction, ClosePath):
            result.append(instruction)
        elif isinstance(instruction, (LineTo, EllipticalArc)):
            result.append(instruction)
        elif isinstance(instruction, (HLineTo, VLineTo)):
            result.append(LineTo(end_point(instruction, current)))
        elif isinstance(instruction, CurveTo):
            cubic_control = instruction.control_end
            result.append(instruction)
        elif isinstance(instruction, SmoothCurveTo):
            control_start = current
            if last_cubic_control is not None:
                control_start = _reflect(last_cubic_control, current)
            cubic_control = instruction.control_end
            result.append(CurveTo(instruction.to, control_start, instruction.control_end))
        elif isinstance(instruction, QuadraticBezier):
            quadratic_control = instruction.control
            result.append(instruction)
        elif isinstance(instruction, SmoothQuadraticBezier):
            quadratic_control = current
            if last_quadratic_control is not None:
                quadratic_control = _reflect(last_quadratic_control, current)
            result.append(QuadraticBezier(instruction.to, quadratic_control))
        else:
            raise TypeError(f"Not a path instruction: {instruction!r}")

        if isinstance(instruction, ClosePath):
            current = subpath_start
        else:
            current = end_point(instruction, current)
        last_cubic_control = cubic_control
        last_quadratic_control = quadratic_control

    return result
