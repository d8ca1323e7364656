"""Stroke tessellation: turning a stroked path into fillable polygons."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import shapely.geometry
import shapely.ops
from numpy.typing import NDArray

from svgcore.common import Point, StrokePart
from svgcore.consts import DEFAULT_MITER_LIMIT, DEFAULT_STROKE_WIDTH, EPSILON, FlattenOptions, StrokeStyle
from svgcore.geom import GeomMath
from svgcore.instructions import ClosePath, LineTo, MoveTo, PathInstruction
from svgcore.path_flattener import CurveFlattener

logger = logging.getLogger(__name__)

Segment = Tuple[Point, Point]


###############################################################################
# StrokePolygon
###############################################################################


@dataclass(frozen=True)
class StrokePolygon:
    """
    One polygon of a stroke outline.

    Attributes:
        points: ordered polygon vertices, implicitly closed
        kind: whether the polygon covers a segment or a join between two segments
    """

    points: Tuple[Point, ...]
    kind: StrokePart

    def as_array(self) -> NDArray[np.float64]:
        """The vertices as array of shape (n, 2)."""
        return np.array(self.points, dtype=np.float64).reshape(-1, 2)

    def to_shapely(self) -> shapely.geometry.Polygon:
        """The polygon as shapely Polygon (may be invalid for degenerate joins)."""
        return shapely.geometry.Polygon(self.points)


###############################################################################
# StrokeTessellator
###############################################################################


class StrokeTessellator:
    """
    Builds the outline of a stroked path as a set of simple polygons.

    Each straight segment becomes a quad, each vertex between two consecutive
    segments becomes a join polygon (miter, or bevel when the miter would be
    too long or is undefined). The polygons are independent and overlap at
    the joins; the overlap is resolved by the consumer's fill rule or by
    outline().
    """

    def __init__(self, flatten_options: Optional[FlattenOptions] = None):
        self.flattener = CurveFlattener(flatten_options)

    def tessellate(
        self,
        instructions: Sequence[PathInstruction],
        stroke_width: float = DEFAULT_STROKE_WIDTH,
        miter_limit: float = DEFAULT_MITER_LIMIT,
    ) -> List[StrokePolygon]:
        """Tessellate the stroke of a path.

        Curves and arcs are flattened first.

        Args:
            instructions: resolved path instructions
            stroke_width: the stroke width, nothing is produced for width <= 0
            miter_limit: maximum miter distance from the apex in units of half the stroke width

        Returns:
            List[StrokePolygon]: segment quads and join polygons in path order

        Raises:
            ValueError: if _miter_limit_ is below 1
        """
        style = StrokeStyle(width=stroke_width, miter_limit=miter_limit)
        if style.width <= 0:
            return []

        polygons: List[StrokePolygon] = []
        current: Point = (0.0, 0.0)
        subpath_start: Point = (0.0, 0.0)
        first_segment: Optional[Segment] = None
        previous_segment: Optional[Segment] = None
        started = False

        for instruction in self.flattener.flatten(instructions):
            if isinstance(instruction, MoveTo):
                current = subpath_start = instruction.point
                first_segment = previous_segment = None
                started = False
            elif isinstance(instruction, LineTo):
                segment = self._add_segment(polygons, (current, instruction.point), previous_segment, style)
                if not started:
                    first_segment = segment
                    started = True
                previous_segment = segment
                current = instruction.point
            elif isinstance(instruction, ClosePath):
                if GeomMath.distance(current, subpath_start) > EPSILON:
                    # The closing line is a regular segment
                    segment = self._add_segment(polygons, (current, subpath_start), previous_segment, style)
                    previous_segment = segment
                    if not started:
                        first_segment = segment
                if previous_segment is not None and first_segment is not None:
                    join = self._join(previous_segment, first_segment, style)
                    if join is not None:
                        polygons.append(join)
                # A drawing command after ClosePath starts a new subpath at the same start point
                current = subpath_start
                first_segment = previous_segment = None
                started = False
            else:
                raise TypeError(f"Unexpected instruction after flattening: {instruction!r}")

        logger.debug("Tessellated stroke of width %g into %d polygons", style.width, len(polygons))
        return polygons

    def _add_segment(
        self,
        polygons: List[StrokePolygon],
        segment: Segment,
        previous: Optional[Segment],
        style: StrokeStyle,
    ) -> Optional[Segment]:
        """Append the join with _previous_ and the quad of _segment_.

        Returns:
            Optional[Segment]: the segment, or None for a zero-length segment
                which gets neither a quad nor joins
        """
        quad = self.segment_quad(segment, style.half_width)
        if quad is None:
            logger.debug("Skipping zero-length segment at %s", segment[0])
            return None
        if previous is not None:
            join = self._join(previous, segment, style)
            if join is not None:
                polygons.append(join)
        polygons.append(quad)
        return segment

    @staticmethod
    def segment_quad(segment: Segment, half_width: float) -> Optional[StrokePolygon]:
        """Quad [from+off, to+off, to-off, from-off] covering a straight segment.

        _off_ is the left normal of the segment scaled to _half_width_.
        Returns None for a zero-length segment.
        """
        (start, end) = segment
        direction = GeomMath.sub(end, start)
        if GeomMath.length(direction) <= EPSILON:
            return None
        offset = GeomMath.scale(GeomMath.normalize(GeomMath.perpendicular(direction)), half_width)
        return StrokePolygon(
            points=(
                GeomMath.add(start, offset),
                GeomMath.add(end, offset),
                GeomMath.sub(end, offset),
                GeomMath.sub(start, offset),
            ),
            kind=StrokePart.SEGMENT,
        )

    @staticmethod
    def _join(previous: Segment, following: Segment, style: StrokeStyle) -> Optional[StrokePolygon]:
        return StrokeTessellator.join_polygon(previous[0], previous[1], following[1], style)

    @staticmethod
    def join_polygon(start: Point, apex: Point, end: Point, style: StrokeStyle) -> Optional[StrokePolygon]:
        """
        Join polygon at _apex_ between the segments (start -> apex) and (apex -> end).

        Only the outer side of the turn is filled; the inner side is covered by
        the overlapping segment quads. The miter point is the intersection of
        the two outer offset lines. A bevel triangle [apex, p1, p2] is used
        when the segments are parallel or the miter point lies farther than
        style.miter_distance from the apex.

        Returns:
            Optional[StrokePolygon]: the join, None if one of the segments has zero length
        """
        d1 = GeomMath.sub(apex, start)
        d2 = GeomMath.sub(end, apex)
        len1, len2 = GeomMath.length(d1), GeomMath.length(d2)
        if len1 <= EPSILON or len2 <= EPSILON:
            return None

        hw = style.half_width
        off1 = GeomMath.scale(GeomMath.perpendicular(d1), hw / len1)
        off2 = GeomMath.scale(GeomMath.perpendicular(d2), hw / len2)
        cross = GeomMath.cross(d1, d2)

        if abs(cross) <= EPSILON * len1 * len2:
            # Parallel segments have no miter point
            p1 = GeomMath.add(apex, off1)
            p2 = GeomMath.add(apex, off2)
            return StrokePolygon(points=(apex, p1, p2), kind=StrokePart.JOIN)

        # Turning left (counter-clockwise) puts the outer side on the right
        side = -1.0 if cross > 0 else 1.0
        p1 = GeomMath.add(apex, GeomMath.scale(off1, side))
        p2 = GeomMath.add(apex, GeomMath.scale(off2, side))

        miter = GeomMath.line_intersection(p1, d1, p2, d2)
        if miter is None or GeomMath.distance(miter, apex) > style.miter_distance:
            logger.debug("Bevel join at %s", apex)
            return StrokePolygon(points=(apex, p1, p2), kind=StrokePart.JOIN)
        return StrokePolygon(points=(apex, p1, miter, p2), kind=StrokePart.JOIN)

    @staticmethod
    def outline(polygons: Sequence[StrokePolygon]) -> shapely.geometry.base.BaseGeometry:
        """Merge the (overlapping) stroke polygons into one shapely geometry.

        Degenerate polygons (fewer than 3 vertices or no area) are skipped.

        Returns:
            shapely.geometry.base.BaseGeometry: Polygon or MultiPolygon, empty if nothing remains
        """
        shapes = []
        for polygon in polygons:
            if len(polygon.points) < 3:
                continue
            shape = polygon.to_shapely()
            if not shape.is_valid:
                # Clean self-intersections
                shape = shape.buffer(0)
            if shape.is_empty or shape.area <= EPSILON:
                continue
            shapes.append(shape)
        if not shapes:
            return shapely.geometry.Polygon()
        return shapely.ops.unary_union(shapes)
