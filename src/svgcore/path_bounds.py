"""Axis-aligned extents of path instructions."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from svgcore.geom import SvBox, union_boxes
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


class BoundingBoxCalculator:
    """Class to provide static methods computing bounding boxes."""

    @staticmethod
    def bounding_box(instructions: Sequence[PathInstruction]) -> Optional[SvBox]:
        """
        Union of the extents of all _instructions_.

        Curves contribute their end and control points, which bounds the curve
        (convex hull property) but is not the tight extent. Elliptical arcs
        contribute their end point only. ClosePath contributes nothing.

        Args:
            instructions: resolved path instructions

        Returns:
            Optional[SvBox]: the bounding box, None for an empty path
        """
        box: Optional[SvBox] = None
        for instruction in expand_shorthands(instructions):
            if isinstance(instruction, (MoveTo, LineTo)):
                points = [instruction.point]
            elif isinstance(instruction, CurveTo):
                points = [instruction.to, instruction.control_start, instruction.control_end]
            elif isinstance(instruction, QuadraticBezier):
                points = [instruction.to, instruction.control]
            elif isinstance(instruction, EllipticalArc):
                points = [instruction.to]
            elif isinstance(instruction, ClosePath):
                points = []
            else:
                raise TypeError(f"Not a path instruction: {instruction!r}")
            for point in points:
                box = SvBox.from_point(point) if box is None else box.union_point(point)
        return box

    @staticmethod
    def union_all(boxes: Iterable[Optional[SvBox]]) -> Optional[SvBox]:
        """Union of the given (optional) boxes, e.g. the extents of a container's children."""
        result: Optional[SvBox] = None
        for box in boxes:
            result = union_boxes(result, box)
        return result
