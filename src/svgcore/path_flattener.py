"""Path flattening utilities for converting curves and arcs to line segments."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from svgcore.arc import EllipticalArcGeometry
from svgcore.bezier import BezierCurve
from svgcore.common import Point
from svgcore.consts import FlattenOptions
from svgcore.instructions import (
    ClosePath,
    CurveTo,
    EllipticalArc,
    LineTo,
    MoveTo,
    PathInstruction,
    QuadraticBezier,
    expand_shorthands,
)

logger = logging.getLogger(__name__)


class CurveFlattener:
    """Converts path instructions into MoveTo, LineTo and ClosePath only.

    Curves are approximated either by a fixed number of steps per curve
    (FlattenOptions.steps) or adaptively so that the deviation from the true
    curve stays within FlattenOptions.tolerance. The flattened geometry is
    meant for geometry construction (e.g. stroking), not for rendering.
    """

    def __init__(self, options: Optional[FlattenOptions] = None):
        self.options = options if options is not None else FlattenOptions()

    def flatten(self, instructions: Sequence[PathInstruction]) -> List[PathInstruction]:
        """Flatten _instructions_ into line instructions.

        Args:
            instructions: resolved path instructions

        Returns:
            List[PathInstruction]: only MoveTo, LineTo and ClosePath; line-only
                input is returned unchanged
        """
        result: List[PathInstruction] = []
        current: Point = (0.0, 0.0)
        subpath_start: Point = (0.0, 0.0)

        for instruction in expand_shorthands(instructions):
            if isinstance(instruction, MoveTo):
                result.append(instruction)
                current = subpath_start = instruction.point
            elif isinstance(instruction, LineTo):
                result.append(instruction)
                current = instruction.point
            elif isinstance(instruction, ClosePath):
                result.append(instruction)
                current = subpath_start
            elif isinstance(instruction, CurveTo):
                points = self._polygonize_cubic(
                    np.array([current, instruction.control_start, instruction.control_end, instruction.to])
                )
                result.extend(self._line_tos(points, instruction.to))
                current = instruction.to
            elif isinstance(instruction, QuadraticBezier):
                points = self._polygonize_quadratic(np.array([current, instruction.control, instruction.to]))
                result.extend(self._line_tos(points, instruction.to))
                current = instruction.to
            elif isinstance(instruction, EllipticalArc):
                result.extend(self._flatten_arc(current, instruction))
                current = instruction.to
            else:
                raise TypeError(f"Cannot flatten instruction {instruction!r}")

        return result

    def _polygonize_cubic(self, ctrl: NDArray[np.float64]) -> NDArray[np.float64]:
        if self.options.steps is not None:
            return BezierCurve.polygonize_cubic_curve(ctrl, self.options.steps)
        return BezierCurve.polygonize_adaptive(ctrl, self.options.tolerance)

    def _polygonize_quadratic(self, ctrl: NDArray[np.float64]) -> NDArray[np.float64]:
        if self.options.steps is not None:
            return BezierCurve.polygonize_quadratic_curve(ctrl, self.options.steps)
        return BezierCurve.polygonize_adaptive(ctrl, self.options.tolerance)

    @staticmethod
    def _line_tos(points: NDArray[np.float64], end: Point) -> List[PathInstruction]:
        # Skip the start point (it is the current point) and use the exact end point
        lines: List[PathInstruction] = [LineTo((float(x), float(y))) for x, y in points[1:-1]]
        lines.append(LineTo(end))
        return lines

    def _flatten_arc(self, current: Point, arc: EllipticalArc) -> List[PathInstruction]:
        geometry = EllipticalArcGeometry.from_endpoints(
            current, arc.to, arc.radius_x, arc.radius_y, arc.x_axis_rotation, arc.large_arc, arc.sweep
        )
        if geometry is None:
            if current == arc.to:
                # Identical end points: the arc is omitted
                return []
            logger.debug("Arc to %s with zero radius is flattened to a straight line", arc.to)
            return [LineTo(arc.to)]

        steps = self.options.steps
        if steps is None:
            steps = geometry.segment_count(self.options.tolerance)
        return self._line_tos(geometry.polygonize(steps), arc.to)
