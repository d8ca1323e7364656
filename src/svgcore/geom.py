"""Handling geometries"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from svgcore.common import Point
from svgcore.consts import EPSILON


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to 2D vector handling."""

    @staticmethod
    def transform_point(
        affine_trafo: Sequence[Union[int, float]], point: Sequence[Union[int, float]]
    ) -> Tuple[float, float]:
        """
        Perform an affine transformation on the given 2D point.

        The given _affine_trafo_ is a list of 6 floats, performing an affine transformation.
        The transformation is defined as:
            | x' | = | a00 a01 b0 |   | x |
            | y' | = | a10 a11 b1 | * | y |
            | 1  | = |  0   0  1  |   | 1 |
        with
            affine_trafo = [a00, a01, a10, a11, b0, b1]
        See also shapely - Affine Transformations

        Args:
            affine_trafo (Tuple/List[float]): Affine transformation - [a00, a01, a10, a11, b0, b1]
            point (Tuple/List[float]): 2D point - (x, y)

        Returns:
            Tuple[float, float]: the transformed point
        """
        x_new = float(affine_trafo[0] * point[0] + affine_trafo[1] * point[1] + affine_trafo[4])
        y_new = float(affine_trafo[2] * point[0] + affine_trafo[3] * point[1] + affine_trafo[5])
        return (x_new, y_new)

    @staticmethod
    def add(a: Point, b: Point) -> Point:
        """Vector sum a + b."""
        return (a[0] + b[0], a[1] + b[1])

    @staticmethod
    def sub(a: Point, b: Point) -> Point:
        """Vector difference a - b."""
        return (a[0] - b[0], a[1] - b[1])

    @staticmethod
    def scale(a: Point, factor: float) -> Point:
        """Vector a scaled by _factor_."""
        return (a[0] * factor, a[1] * factor)

    @staticmethod
    def dot(a: Point, b: Point) -> float:
        """Dot product of two vectors."""
        return a[0] * b[0] + a[1] * b[1]

    @staticmethod
    def cross(a: Point, b: Point) -> float:
        """z-component of the cross product, positive if _b_ turns counter-clockwise from _a_."""
        return a[0] * b[1] - a[1] * b[0]

    @staticmethod
    def perpendicular(a: Point) -> Point:
        """Vector _a_ rotated by +90 degrees, i.e. the left normal (not normalized)."""
        return (-a[1], a[0])

    @staticmethod
    def length(a: Point) -> float:
        """Euclidean length of a vector."""
        return math.hypot(a[0], a[1])

    @staticmethod
    def distance(a: Point, b: Point) -> float:
        """Euclidean distance between two points."""
        return math.hypot(a[0] - b[0], a[1] - b[1])

    @staticmethod
    def normalize(a: Point) -> Point:
        """Unit vector in direction of _a_.

        Raises:
            ValueError: for a zero-length vector, which has no direction
        """
        length = math.hypot(a[0], a[1])
        if length <= EPSILON:
            raise ValueError(f"Cannot normalize zero-length vector {a}")
        return (a[0] / length, a[1] / length)

    @staticmethod
    def line_intersection(
        origin_a: Point, direction_a: Point, origin_b: Point, direction_b: Point
    ) -> Optional[Point]:
        """
        Intersect the two infinite lines origin_a + t * direction_a and origin_b + u * direction_b.

        Solving origin_a + t * da = origin_b + u * db for t gives
            t = cross(origin_b - origin_a, db) / cross(da, db)

        Args:
            origin_a (Point): a point on the first line
            direction_a (Point): direction of the first line
            origin_b (Point): a point on the second line
            direction_b (Point): direction of the second line

        Returns:
            Optional[Point]: the intersection, or None if the lines are parallel
        """
        denominator = GeomMath.cross(direction_a, direction_b)
        scale = GeomMath.length(direction_a) * GeomMath.length(direction_b)
        if abs(denominator) <= EPSILON * scale or scale <= EPSILON:
            return None
        t = GeomMath.cross(GeomMath.sub(origin_b, origin_a), direction_b) / denominator
        return (origin_a[0] + t * direction_a[0], origin_a[1] + t * direction_a[1])


###############################################################################
# SvBox
###############################################################################
@dataclass
class SvBox:
    """
    Represents an axis-aligned rectangular box.

    Attributes:
        xmin (float): The minimum x-coordinate.
        ymin (float): The minimum y-coordinate.
        xmax (float): The maximum x-coordinate.
        ymax (float): The maximum y-coordinate.
    """

    _xmin: float
    _ymin: float
    _xmax: float
    _ymax: float

    def __init__(self, xmin: float, ymin: float, xmax: float, ymax: float):
        """Initialize SvBox with coordinates.

        Args:
            xmin: The minimum x-coordinate
            ymin: The minimum y-coordinate
            xmax: The maximum x-coordinate
            ymax: The maximum y-coordinate
        """
        self._xmin = float(xmin)
        self._ymin = float(ymin)
        self._xmax = float(xmax)
        self._ymax = float(ymax)

        # Normalize coordinates to ensure xmin ≤ xmax and ymin ≤ ymax
        if self._xmin > self._xmax:
            self._xmin, self._xmax = self._xmax, self._xmin
        if self._ymin > self._ymax:
            self._ymin, self._ymax = self._ymax, self._ymin

    @classmethod
    def from_point(cls, point: Point) -> SvBox:
        """Create a zero-size box located at _point_."""
        return cls(point[0], point[1], point[0], point[1])

    @property
    def xmin(self) -> float:
        """float: The minimum x-coordinate."""
        return self._xmin

    @property
    def ymin(self) -> float:
        """float: The minimum y-coordinate."""
        return self._ymin

    @property
    def xmax(self) -> float:
        """float: The maximum x-coordinate."""
        return self._xmax

    @property
    def ymax(self) -> float:
        """float: The maximum y-coordinate."""
        return self._ymax

    @property
    def width(self) -> float:
        """float: The width of the box (difference between xmax and xmin)."""
        return self._xmax - self._xmin

    @property
    def height(self) -> float:
        """float: The height of the box (difference between ymax and ymin)."""
        return self._ymax - self._ymin

    def union(self, other: Optional[SvBox]) -> SvBox:
        """Smallest box containing this box and _other_ (None contributes nothing)."""
        if other is None:
            return self
        return SvBox(
            xmin=min(self._xmin, other.xmin),
            ymin=min(self._ymin, other.ymin),
            xmax=max(self._xmax, other.xmax),
            ymax=max(self._ymax, other.ymax),
        )

    def union_point(self, point: Point) -> SvBox:
        """Smallest box containing this box and _point_."""
        return self.union(SvBox.from_point(point))

    def __str__(self):
        """Returns a string representation of the SvBox instance."""
        return (
            f"SvBox(xmin={self.xmin}, ymin={self.ymin}, "
            f"xmax={self.xmax}, ymax={self.ymax}, "
            f"width={self.width}, height={self.height})"
        )


def union_boxes(left: Optional[SvBox], right: Optional[SvBox]) -> Optional[SvBox]:
    """Union of two optional boxes where None means "no box yet": None ∪ R = R."""
    if left is None:
        return right
    return left.union(right)
