"""Bezier curve handling utilities for turning curves into line segments."""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from svgcore.consts import EPSILON, MAX_SUBDIVISION_DEPTH

ControlPoints = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve operations.

    Provides fixed-step polygonization (vectorized with NumPy) and adaptive
    polygonization by recursive de Casteljau subdivision.
    """

    @classmethod
    def polygonize_cubic_curve(cls, points: ControlPoints, steps: int) -> NDArray[np.float64]:
        """
        Polygonize a cubic Bezier curve into _steps_ line segments of equal parameter length.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 4 points: start, control1, control2, end
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps+1, 2) containing the polygonized points
        """
        points_array = cls._control_array(points, 4)
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)[:, np.newaxis]
        omt = 1.0 - t

        # B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3
        result = (
            omt**3 * points_array[0]
            + 3.0 * omt**2 * t * points_array[1]
            + 3.0 * omt * t**2 * points_array[2]
            + t**3 * points_array[3]
        )
        # Ensure the end point is exact
        result[-1] = points_array[3]
        return result

    @classmethod
    def polygonize_quadratic_curve(cls, points: ControlPoints, steps: int) -> NDArray[np.float64]:
        """
        Polygonize a quadratic Bezier curve into _steps_ line segments of equal parameter length.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 3 points: start, control, end
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps+1, 2) containing the polygonized points
        """
        points_array = cls._control_array(points, 3)
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)[:, np.newaxis]
        omt = 1.0 - t

        # B(t) = (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2
        result = omt**2 * points_array[0] + 2.0 * omt * t * points_array[1] + t**2 * points_array[2]
        result[-1] = points_array[2]
        return result

    @classmethod
    def polygonize_adaptive(cls, points: ControlPoints, tolerance: float) -> NDArray[np.float64]:
        """
        Polygonize a Bezier curve of any degree by recursive subdivision.

        A curve piece is accepted as a straight line once all of its inner
        control points lie within _tolerance_ of the chord segment between its
        end points. As a Bezier curve lies within the convex hull of its
        control points, the curve then stays within _tolerance_ of the segment.

        Args:
            points: Control points (start, controls..., end), at least 2
            tolerance: Maximum allowed distance of the curve from the line segments

        Returns:
            NDArray[np.float64] of shape (n, 2) with n >= 2, first = start, last = end
        """
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.ndim != 2 or points_array.shape[0] < 2 or points_array.shape[1] != 2:
            raise ValueError(f"points must have shape (k, 2) with k >= 2, got {points_array.shape}")
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")

        collected: List[NDArray[np.float64]] = [points_array[0]]
        cls._subdivide(points_array, tolerance, 0, collected)
        return np.array(collected, dtype=np.float64)

    @classmethod
    def _subdivide(
        cls, ctrl: NDArray[np.float64], tolerance: float, depth: int, collected: List[NDArray[np.float64]]
    ) -> None:
        if depth >= MAX_SUBDIVISION_DEPTH or cls.flatness(ctrl) <= tolerance:
            collected.append(ctrl[-1])
            return
        left, right = cls.split(ctrl, 0.5)
        cls._subdivide(left, tolerance, depth + 1, collected)
        cls._subdivide(right, tolerance, depth + 1, collected)

    @staticmethod
    def flatness(ctrl: NDArray[np.float64]) -> float:
        """Maximum distance of the inner control points from the chord segment (start, end).

        Control points beyond either end point count with their distance to
        that end point, so collinear control points overshooting the chord
        are not mistaken for a flat piece.
        """
        if ctrl.shape[0] <= 2:
            return 0.0
        start, end = ctrl[0], ctrl[-1]
        inner = ctrl[1:-1]
        chord = end - start
        chord_length_sq = float(np.dot(chord, chord))
        rel = inner - start
        if chord_length_sq <= EPSILON * EPSILON:
            # Closed piece: use the distance to the start point
            return float(np.max(np.hypot(rel[:, 0], rel[:, 1])))
        t = np.clip(rel @ chord / chord_length_sq, 0.0, 1.0)
        offsets = rel - t[:, np.newaxis] * chord
        return float(np.max(np.hypot(offsets[:, 0], offsets[:, 1])))

    @staticmethod
    def split(ctrl: NDArray[np.float64], t: float) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Split a Bezier curve at parameter _t_ using de Casteljau's algorithm.

        Returns:
            Tuple of the control points of the two sub-curves [0, t] and [t, 1]
        """
        left = [ctrl[0]]
        right = [ctrl[-1]]
        level = ctrl
        while level.shape[0] > 1:
            level = (1.0 - t) * level[:-1] + t * level[1:]
            left.append(level[0])
            right.append(level[-1])
        return np.array(left), np.array(right[::-1])

    @staticmethod
    def _control_array(points: ControlPoints, count: int) -> NDArray[np.float64]:
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.shape != (count, 2):
            raise ValueError(f"Expected {count} control points of shape ({count}, 2), got {points_array.shape}")
        return points_array
