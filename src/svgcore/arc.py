"""Elliptical arc geometry: conversion from SVG endpoint to center parameterization."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from svgcore.common import Point
from svgcore.consts import EPSILON, MAX_ARC_SEGMENTS


@dataclass(frozen=True)
class EllipticalArcGeometry:
    """
    Center parameterization of an elliptical arc.

    Attributes:
        center (Point): center of the ellipse
        radius_x (float): corrected (non-negative, large enough) x radius
        radius_y (float): corrected y radius
        phi (float): x-axis rotation in radians
        theta (float): start angle in radians
        delta (float): signed angular span in radians, positive = sweep flag set
    """

    center: Point
    radius_x: float
    radius_y: float
    phi: float
    theta: float
    delta: float

    @classmethod
    def from_endpoints(
        # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
        cls,
        start: Point,
        end: Point,
        radius_x: float,
        radius_y: float,
        x_axis_rotation_deg: float,
        large_arc: bool,
        sweep: bool,
    ) -> Optional[EllipticalArcGeometry]:
        """
        Convert the SVG endpoint parameterization into center parameterization
        (SVG 1.1, appendix F.6.5 and F.6.6).

        Returns:
            Optional[EllipticalArcGeometry]: None if the arc degenerates, i.e. the
                end points coincide (arc is omitted) or a radius is zero (straight line)
        """
        if math.hypot(end[0] - start[0], end[1] - start[1]) <= EPSILON:
            return None
        rx, ry = abs(radius_x), abs(radius_y)
        if rx <= EPSILON or ry <= EPSILON:
            return None

        phi = math.radians(x_axis_rotation_deg % 360.0)
        cos_phi, sin_phi = math.cos(phi), math.sin(phi)

        # Step 1: compute (x1', y1')
        dx2 = (start[0] - end[0]) / 2.0
        dy2 = (start[1] - end[1]) / 2.0
        x1p = cos_phi * dx2 + sin_phi * dy2
        y1p = -sin_phi * dx2 + cos_phi * dy2

        # Correction of out-of-range radii
        lam = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
        if lam > 1.0:
            scale = math.sqrt(lam)
            rx *= scale
            ry *= scale

        # Step 2: compute (cx', cy')
        rx2, ry2 = rx * rx, ry * ry
        numerator = rx2 * ry2 - rx2 * y1p * y1p - ry2 * x1p * x1p
        denominator = rx2 * y1p * y1p + ry2 * x1p * x1p
        coef = math.sqrt(max(numerator, 0.0) / denominator) if denominator > 0 else 0.0
        if large_arc == sweep:
            coef = -coef
        cxp = coef * rx * y1p / ry
        cyp = -coef * ry * x1p / rx

        # Step 3: compute (cx, cy) from (cx', cy')
        cx = cos_phi * cxp - sin_phi * cyp + (start[0] + end[0]) / 2.0
        cy = sin_phi * cxp + cos_phi * cyp + (start[1] + end[1]) / 2.0

        # Step 4: compute start angle and angular span
        theta = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
        theta_end = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
        delta = theta_end - theta
        if sweep and delta < 0:
            delta += 2.0 * math.pi
        elif not sweep and delta > 0:
            delta -= 2.0 * math.pi

        return cls(center=(cx, cy), radius_x=rx, radius_y=ry, phi=phi, theta=theta, delta=delta)

    def point_at_angle(self, angle: float) -> Point:
        """Point on the ellipse at the (unrotated) parametric _angle_ in radians."""
        cos_phi, sin_phi = math.cos(self.phi), math.sin(self.phi)
        x = self.radius_x * math.cos(angle)
        y = self.radius_y * math.sin(angle)
        return (self.center[0] + cos_phi * x - sin_phi * y, self.center[1] + sin_phi * x + cos_phi * y)

    def segment_count(self, tolerance: float) -> int:
        """Number of line segments keeping the sagitta of each below _tolerance_."""
        radius = max(self.radius_x, self.radius_y)
        if tolerance >= radius:
            step = math.pi / 2.0
        else:
            step = 2.0 * math.acos(1.0 - tolerance / radius)
        count = math.ceil(abs(self.delta) / step) if step > 0 else MAX_ARC_SEGMENTS
        return max(1, min(count, MAX_ARC_SEGMENTS))

    def polygonize(self, steps: int) -> NDArray[np.float64]:
        """
        Sample the arc at _steps_ + 1 equally spaced angles.

        Returns:
            NDArray[np.float64] of shape (steps+1, 2), first = start point, last = end point
        """
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        angles = self.theta + np.linspace(0.0, 1.0, steps + 1, dtype=np.float64) * self.delta
        cos_phi, sin_phi = math.cos(self.phi), math.sin(self.phi)
        x = self.radius_x * np.cos(angles)
        y = self.radius_y * np.sin(angles)
        return np.column_stack(
            (self.center[0] + cos_phi * x - sin_phi * y, self.center[1] + sin_phi * x + cos_phi * y)
        )
