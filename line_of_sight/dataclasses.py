"""
Line of Sight Data Structures
=============================

Core data structures shared by the visibility computation:
- Triangle: One wedge of a triangle fan
- VisibilityConfig: Immutable tuning parameters
- VisibilityResult: Points and fan from a single recomputation
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real

import numpy as np
from numpy.typing import NDArray

from line_of_sight.errors import ValidationError
from line_of_sight.geometry import Vector


@dataclass(frozen=True)
class Triangle:
    """A fan triangle. `a` is always the visibility origin.

    Attributes:
        a: Visibility origin
        b: First boundary point
        c: Second boundary point
    """

    a: Vector
    b: Vector
    c: Vector

    @property
    def area(self) -> float:
        """Unsigned area of the triangle."""
        return abs((self.b - self.a).cross(self.c - self.a)) / 2.0

    def vertices(self) -> tuple[Vector, Vector, Vector]:
        return (self.a, self.b, self.c)

    def as_array(self) -> NDArray[np.float64]:
        """Return vertices as a (3, 2) array."""
        return np.array([v.as_tuple() for v in self.vertices()], dtype=np.float64)


def _validate_real(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    value_float = float(value)
    if not math.isfinite(value_float):
        raise ValidationError(f"{name} must be finite, got {value}")
    return value_float


@dataclass(frozen=True)
class VisibilityConfig:
    """Immutable tuning parameters for a visibility computation.

    Attributes:
        jitter_angle: Angle in radians of the two auxiliary probes cast on
            each side of a ray that reached its target vertex. Must lie in
            (0, pi/2).
        vertex_tolerance: Absolute tolerance used to decide whether a
            computed hit point is the vertex the ray was aimed at.
        min_segments: Minimum number of segments accepted. The default of 4
            corresponds to the rectangular boundary of the playable area.
        reject_origin_on_segment: If True, an origin lying exactly on a
            segment is rejected as a precondition violation.

    Raises:
        ValidationError: If any field is out of range
    """

    jitter_angle: float = 0.01
    vertex_tolerance: float = 1e-6
    min_segments: int = 4
    reject_origin_on_segment: bool = True

    def __post_init__(self) -> None:
        """Validate fields and normalize numeric ones to float."""
        jitter = _validate_real("jitter_angle", self.jitter_angle)
        if not 0.0 < jitter < math.pi / 2:
            raise ValidationError(
                f"jitter_angle must be in (0, pi/2) radians, got {self.jitter_angle}"
            )

        tolerance = _validate_real("vertex_tolerance", self.vertex_tolerance)
        if tolerance < 0.0:
            raise ValidationError(
                f"vertex_tolerance must be non-negative, got {self.vertex_tolerance}"
            )

        if isinstance(self.min_segments, bool) or not isinstance(
            self.min_segments, (int, np.integer)
        ):
            raise ValidationError(
                f"min_segments must be an integer, got {type(self.min_segments).__name__}"
            )
        if self.min_segments < 1:
            raise ValidationError(f"min_segments must be at least 1, got {self.min_segments}")

        # Use object.__setattr__ because the dataclass is frozen
        object.__setattr__(self, "jitter_angle", jitter)
        object.__setattr__(self, "vertex_tolerance", tolerance)
        object.__setattr__(self, "min_segments", int(self.min_segments))


@dataclass(frozen=True)
class VisibilityResult:
    """Outputs of one visibility recomputation, published together.

    Attributes:
        origin: The observer position the result was computed for
        points: Angle-sorted visible boundary points
        triangles: Triangle fan covering the visible area
    """

    origin: Vector
    points: tuple[Vector, ...] = field(default_factory=tuple)
    triangles: tuple[Triangle, ...] = field(default_factory=tuple)

    @property
    def lines(self) -> list[tuple[Vector, Vector]]:
        """Origin -> point pairs for debug line rendering."""
        return [(self.origin, point) for point in self.points]

    @property
    def area(self) -> float:
        """Total area covered by the triangle fan."""
        return math.fsum(triangle.area for triangle in self.triangles)

    def points_array(self) -> NDArray[np.float64]:
        """Return points as an (N, 2) array."""
        return np.array([p.as_tuple() for p in self.points], dtype=np.float64).reshape(-1, 2)

    def triangles_array(self) -> NDArray[np.float64]:
        """Return triangles as an (M, 3, 2) array."""
        if not self.triangles:
            return np.empty((0, 3, 2), dtype=np.float64)
        return np.stack([t.as_array() for t in self.triangles])
