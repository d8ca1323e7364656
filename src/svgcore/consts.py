"""Central module containing constants and option sets for geometry processing"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Numerical tolerance for "zero" lengths and parallel directions
EPSILON: float = 1.0e-9

# Maximum allowed deviation of a flattened curve from the true curve (user units)
DEFAULT_FLATNESS_TOLERANCE: float = 0.1

# Recursion limit for adaptive Bezier subdivision (2**16 segments per curve at most)
MAX_SUBDIVISION_DEPTH: int = 16

# Upper bound of line segments used for a single elliptical arc
MAX_ARC_SEGMENTS: int = 1024

# Stroke defaults as given by SVG for "stroke-width" and "stroke-miterlimit"
DEFAULT_STROKE_WIDTH: float = 1.0
DEFAULT_MITER_LIMIT: float = 4.0

# Length units (CSS reference pixel at 96 dpi)
INCHES_TO_PX: float = 96.0
CM_TO_PX: float = INCHES_TO_PX / 2.54
MM_TO_PX: float = CM_TO_PX / 10.0
PT_TO_PX: float = INCHES_TO_PX / 72.0
PC_TO_PX: float = PT_TO_PX * 12.0
DEFAULT_FONT_SIZE: float = 16.0


###############################################################################
# FlattenOptions
###############################################################################


@dataclass(frozen=True)
class FlattenOptions:
    """Options controlling how curves are turned into line segments.

    Attributes:
        tolerance: Maximum deviation from the true curve, used for adaptive subdivision.
        steps: If set, every curve is split into this fixed number of segments
            and the tolerance is ignored. None means adaptive subdivision.
    """

    tolerance: float = DEFAULT_FLATNESS_TOLERANCE
    steps: Optional[int] = None

    def __post_init__(self):
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.steps is not None and self.steps < 1:
            raise ValueError(f"steps must be at least 1, got {self.steps}")

    def to_dict(self) -> dict:
        """Convert options to a dictionary for serialization."""
        return {"tolerance": self.tolerance, "steps": self.steps}

    @classmethod
    def from_dict(cls, data: dict) -> "FlattenOptions":
        """Create FlattenOptions from a dictionary."""
        return cls(
            tolerance=data.get("tolerance", DEFAULT_FLATNESS_TOLERANCE),
            steps=data.get("steps"),
        )


###############################################################################
# StrokeStyle
###############################################################################


@dataclass(frozen=True)
class StrokeStyle:
    """Stroke properties needed to build a stroke outline.

    Attributes:
        width: The stroke width ("stroke-width").
        miter_limit: Ratio of miter length to half the stroke width before a bevel
            is used ("stroke-miterlimit"), must be >= 1.
    """

    width: float = DEFAULT_STROKE_WIDTH
    miter_limit: float = DEFAULT_MITER_LIMIT

    def __post_init__(self):
        if self.miter_limit < 1.0:
            raise ValueError(f"miter_limit must be >= 1, got {self.miter_limit}")

    @property
    def half_width(self) -> float:
        """float: Half of the stroke width, i.e. the offset to each side of the path."""
        return self.width / 2.0

    @property
    def miter_distance(self) -> float:
        """float: Maximum distance of a miter point from its apex."""
        return self.half_width * self.miter_limit

    def to_dict(self) -> dict:
        """Convert the stroke style to a dictionary for serialization."""
        return {"width": self.width, "miter_limit": self.miter_limit}

    @classmethod
    def from_dict(cls, data: dict) -> "StrokeStyle":
        """Create StrokeStyle from a dictionary."""
        return cls(
            width=data.get("width", DEFAULT_STROKE_WIDTH),
            miter_limit=data.get("miter_limit", DEFAULT_MITER_LIMIT),
        )
