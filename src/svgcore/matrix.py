"""2D affine transformation matrix as used by the SVG transform attribute"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from svgcore.common import Point
from svgcore.consts import EPSILON
from svgcore.geom import GeomMath
from svgcore.instructions import (
    ClosePath,
    CurveTo,
    EllipticalArc,
    HLineTo,
    LineTo,
    MoveTo,
    PathInstruction,
    QuadraticBezier,
    SmoothCurveTo,
    SmoothQuadraticBezier,
    VLineTo,
    expand_shorthands,
)


@dataclass(frozen=True)
class SvMatrix:
    """
    Affine transformation given by the six SVG coefficients matrix(a, b, c, d, e, f):
        | x' |   | a  c  e |   | x |
        | y' | = | b  d  f | * | y |
        | 1  |   | 0  0  1 |   | 1 |

    m1.multiply(m2) is the product m1 * m2, i.e. _m2_ is applied to a point first.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> SvMatrix:
        """The neutral element of multiply()."""
        return cls()

    @classmethod
    def from_coefficients(cls, coefficients: Sequence[Union[int, float]]) -> SvMatrix:
        """Create a matrix from the sequence [a, b, c, d, e, f]."""
        if len(coefficients) != 6:
            raise ValueError(f"Expected 6 coefficients, got {len(coefficients)}")
        return cls(*(float(value) for value in coefficients))

    @classmethod
    def translation(cls, tx: float, ty: float = 0.0) -> SvMatrix:
        """Translation by (tx, ty)."""
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> SvMatrix:
        """Scaling by sx along x and sy along y."""
        return cls(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @classmethod
    def rotation(cls, angle_deg: float) -> SvMatrix:
        """Rotation about the origin by _angle_deg_ degrees (counter-clockwise for a y-up system)."""
        rad = math.radians(angle_deg)
        cos_a, sin_a = math.cos(rad), math.sin(rad)
        return cls(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)

    @classmethod
    def skew_x(cls, angle_deg: float) -> SvMatrix:
        """Shear along the x-axis by _angle_deg_ degrees."""
        return cls(1.0, 0.0, math.tan(math.radians(angle_deg)), 1.0, 0.0, 0.0)

    @classmethod
    def skew_y(cls, angle_deg: float) -> SvMatrix:
        """Shear along the y-axis by _angle_deg_ degrees."""
        return cls(1.0, math.tan(math.radians(angle_deg)), 0.0, 1.0, 0.0, 0.0)

    @property
    def coefficients(self) -> Tuple[float, float, float, float, float, float]:
        """The coefficients as tuple (a, b, c, d, e, f)."""
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    @property
    def affine_trafo(self) -> List[float]:
        """The matrix as [a00, a01, a10, a11, b0, b1], the order used by shapely and GeomMath."""
        return [self.a, self.c, self.b, self.d, self.e, self.f]

    @property
    def determinant(self) -> float:
        """float: Determinant of the linear part."""
        return self.a * self.d - self.b * self.c

    def to_numpy(self) -> NDArray[np.float64]:
        """Return the full 3x3 matrix for column vectors."""
        return np.array(
            [[self.a, self.c, self.e], [self.b, self.d, self.f], [0.0, 0.0, 1.0]],
            dtype=np.float64,
        )

    def multiply(self, other: SvMatrix) -> SvMatrix:
        """Return self * other; applying the result equals applying _other_ and then _self_."""
        return SvMatrix(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def __matmul__(self, other: SvMatrix) -> SvMatrix:
        return self.multiply(other)

    def inverse(self) -> SvMatrix:
        """Return the inverse transformation.

        Raises:
            ValueError: if the matrix is singular
        """
        det = self.determinant
        if abs(det) <= EPSILON:
            raise ValueError(f"Matrix {self.coefficients} is not invertible")
        return SvMatrix(
            a=self.d / det,
            b=-self.b / det,
            c=-self.c / det,
            d=self.a / det,
            e=(self.c * self.f - self.d * self.e) / det,
            f=(self.b * self.e - self.a * self.f) / det,
        )

    def is_identity(self, tol: float = EPSILON) -> bool:
        """Return True if all coefficients match the identity within _tol_."""
        return all(abs(x - y) <= tol for x, y in zip(self.coefficients, SvMatrix().coefficients))

    def approx_equal(self, other: SvMatrix, tol: float = 1e-9) -> bool:
        """Return True if both matrices match coefficient-wise within _tol_."""
        return all(abs(x - y) <= tol for x, y in zip(self.coefficients, other.coefficients))

    def transform_point(self, point: Sequence[Union[int, float]]) -> Point:
        """Apply the matrix to a single point: linear part first, then translation."""
        return GeomMath.transform_point(self.affine_trafo, point)

    def transform_points(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the matrix to an array of points of shape (n, 2)."""
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"points must have shape (n, 2), got {pts.shape}")
        linear = np.array([[self.a, self.b], [self.c, self.d]], dtype=np.float64)
        return pts @ linear + np.array([self.e, self.f], dtype=np.float64)

    def _is_similarity(self) -> bool:
        # Columns orthogonal and of equal length: rotation, uniform scale, reflection
        orthogonal = abs(self.a * self.c + self.b * self.d)
        same_length = abs((self.a**2 + self.b**2) - (self.c**2 + self.d**2))
        scale = max(self.a**2 + self.b**2, EPSILON)
        return orthogonal <= 1e-9 * scale and same_length <= 1e-9 * scale

    def transform_instructions(self, instructions: Sequence[PathInstruction]) -> List[PathInstruction]:
        """Transform resolved path instructions.

        Horizontal and vertical lines and the smooth curve shorthands are
        expanded first, since their shape does not survive a general affine
        transformation. Elliptical arcs are transformed exactly for
        similarity transformations (rotation, uniform scale, reflection,
        translation); other matrices need the path to be flattened first.

        Raises:
            ValueError: for an elliptical arc and a non-similarity matrix
        """
        ret: List[PathInstruction] = []
        for instruction in expand_shorthands(instructions):
            if isinstance(instruction, ClosePath):
                ret.append(instruction)
            elif isinstance(instruction, MoveTo):
                ret.append(MoveTo(self.transform_point(instruction.point)))
            elif isinstance(instruction, LineTo):
                ret.append(LineTo(self.transform_point(instruction.point)))
            elif isinstance(instruction, CurveTo):
                ret.append(
                    CurveTo(
                        self.transform_point(instruction.to),
                        self.transform_point(instruction.control_start),
                        self.transform_point(instruction.control_end),
                    )
                )
            elif isinstance(instruction, QuadraticBezier):
                ret.append(
                    QuadraticBezier(self.transform_point(instruction.to), self.transform_point(instruction.control))
                )
            elif isinstance(instruction, EllipticalArc):
                if not self._is_similarity():
                    raise ValueError("Elliptical arcs can only be transformed by similarity matrices, flatten first")
                factor = math.sqrt(abs(self.determinant))
                mirrored = self.determinant < 0
                angle = math.degrees(math.atan2(self.b, self.a))
                rotation = (-instruction.x_axis_rotation if mirrored else instruction.x_axis_rotation) + angle
                ret.append(
                    EllipticalArc(
                        to=self.transform_point(instruction.to),
                        radius_x=abs(instruction.radius_x) * factor,
                        radius_y=abs(instruction.radius_y) * factor,
                        x_axis_rotation=rotation,
                        large_arc=instruction.large_arc,
                        sweep=instruction.sweep != mirrored,
                    )
                )
            elif isinstance(instruction, (HLineTo, VLineTo, SmoothCurveTo, SmoothQuadraticBezier)):
                raise AssertionError("shorthands are expanded above")
            else:
                raise TypeError(f"Not a path instruction: {instruction!r}")
        return ret
