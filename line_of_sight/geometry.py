"""
Geometry primitives: vectors, segments, rays and their intersection tests.

All intersection tests use the parametric line representation
P(t) = p + t*r and Q(u) = q + u*s, and compare cross products against zero
exactly (no epsilon).
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from line_of_sight.errors import ValidationError


@dataclass(frozen=True)
class Vector:
    """
    2D point or displacement.

    Equality and hashing compare the raw float coordinates exactly, so two
    vectors are the same key only if both coordinates match.
    """
    x: float
    y: float

    @classmethod
    def from_array(cls, array: NDArray[np.floating]) -> "Vector":
        """Build a Vector from an array-like of shape (2,)."""
        values = np.asarray(array, dtype=np.float64)
        if values.shape != (2,):
            raise ValueError(f"point must have shape (2,), got {values.shape}")
        return cls(float(values[0]), float(values[1]))

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector":
        return Vector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def add(self, other: "Vector") -> "Vector":
        return self + other

    def subtract(self, other: "Vector") -> "Vector":
        return self - other

    def scale(self, scalar: float) -> "Vector":
        return self * scalar

    def divide(self, scalar: float) -> "Vector":
        return self / scalar

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        """Signed parallelogram area; zero iff the vectors are parallel."""
        return self.x * other.y - self.y * other.x

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def isclose(self, other: "Vector", abs_tol: float = 1e-9) -> bool:
        """Tolerance comparison for points derived from arithmetic."""
        return (
            math.isclose(self.x, other.x, rel_tol=1e-9, abs_tol=abs_tol)
            and math.isclose(self.y, other.y, rel_tol=1e-9, abs_tol=abs_tol)
        )

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


class IntersectionKind(Enum):
    INTERSECTING = "intersecting"
    COLLINEAR_INTERSECTING = "collinear_intersecting"
    COLLINEAR_NOT_INTERSECTING = "collinear_not_intersecting"
    NOT_INTERSECTING = "not_intersecting"


@dataclass(frozen=True)
class IntersectionStatus:
    """
    Outcome of an intersection test.

    Attributes:
        kind: Which of the four geometric relationships holds
        point: The single crossing point, set only for INTERSECTING
    """
    kind: IntersectionKind
    point: Optional[Vector] = None

    @classmethod
    def intersecting(cls, point: Vector) -> "IntersectionStatus":
        return cls(IntersectionKind.INTERSECTING, point)

    @property
    def is_intersecting(self) -> bool:
        return self.kind is IntersectionKind.INTERSECTING

    @property
    def is_collinear(self) -> bool:
        return self.kind in (
            IntersectionKind.COLLINEAR_INTERSECTING,
            IntersectionKind.COLLINEAR_NOT_INTERSECTING,
        )


COLLINEAR_INTERSECTING = IntersectionStatus(IntersectionKind.COLLINEAR_INTERSECTING)
COLLINEAR_NOT_INTERSECTING = IntersectionStatus(IntersectionKind.COLLINEAR_NOT_INTERSECTING)
NOT_INTERSECTING = IntersectionStatus(IntersectionKind.NOT_INTERSECTING)


def _classify(
    p: Vector,
    r: Vector,
    q: Vector,
    s: Vector,
    bounded: bool
) -> IntersectionStatus:
    """
    Classify P(t) = p + t*r against the segment Q(u) = q + u*s, u in [0, 1].

    Parameters:
        p, r: Origin and direction of the first line piece
        q, s: Origin and direction of the segment
        bounded: If True, a crossing needs t in [0, 1] (segment); otherwise
                 only t >= 0 (ray). Collinear overlap is always judged
                 against t in [0, 1]

    Returns:
        IntersectionStatus for the pair
    """
    r_cross_s = r.cross(s)
    q_minus_p = q - p
    q_minus_p_cross_r = q_minus_p.cross(r)

    if r_cross_s == 0.0 and q_minus_p_cross_r == 0.0:
        # Collinear: project the segment onto r and compare against [0, 1]
        r_dot_r = r.dot(r)
        t0 = q_minus_p.dot(r) / r_dot_r
        t1 = t0 + s.dot(r) / r_dot_r
        t_low, t_high = min(t0, t1), max(t0, t1)

        overlaps = t_high >= 0.0 and t_low <= 1.0
        return COLLINEAR_INTERSECTING if overlaps else COLLINEAR_NOT_INTERSECTING

    if r_cross_s == 0.0:
        # Parallel, offset lines
        return NOT_INTERSECTING

    t = q_minus_p.cross(s / r_cross_s)
    u = q_minus_p.cross(r / r_cross_s)

    t_valid = 0.0 <= t <= 1.0 if bounded else t >= 0.0
    if t_valid and 0.0 <= u <= 1.0:
        return IntersectionStatus.intersecting(p + r * t)

    return NOT_INTERSECTING


@dataclass(frozen=True)
class Segment:
    """
    Finite line piece between two endpoints.

    Raises:
        ValidationError: If an endpoint is not finite or the segment has zero length
    """
    a: Vector
    b: Vector

    def __post_init__(self) -> None:
        if not (self.a.is_finite() and self.b.is_finite()):
            raise ValidationError(f"segment endpoints must be finite, got {self.a}, {self.b}")
        if self.a == self.b:
            raise ValidationError(f"segment must have non-zero length, got {self.a} -> {self.b}")

    @classmethod
    def from_coords(cls, x0: float, y0: float, x1: float, y1: float) -> "Segment":
        return cls(Vector(float(x0), float(y0)), Vector(float(x1), float(y1)))

    def points(self) -> Tuple[Vector, Vector]:
        return (self.a, self.b)

    @property
    def direction(self) -> Vector:
        return self.b - self.a

    @property
    def length(self) -> float:
        return self.direction.length

    def contains_point(self, point: Vector) -> bool:
        """Exact test for a point lying on the closed segment."""
        r = self.direction
        offset = point - self.a
        if r.cross(offset) != 0.0:
            return False
        projection = offset.dot(r)
        return 0.0 <= projection <= r.dot(r)

    def intersect(self, other: "Segment") -> IntersectionStatus:
        """
        Classify how this segment relates to another one.

        Four cases:
        1. Collinear (r x s = 0 and (q - p) x r = 0): overlapping extents give
           COLLINEAR_INTERSECTING, disjoint extents COLLINEAR_NOT_INTERSECTING
        2. Parallel (r x s = 0, (q - p) x r != 0): NOT_INTERSECTING
        3. Crossing with t and u both in [0, 1]: INTERSECTING at p + t*r
        4. Otherwise NOT_INTERSECTING
        """
        return _classify(self.a, self.direction, other.a, other.direction, bounded=True)

    def as_array(self) -> NDArray[np.float64]:
        return np.array([[self.a.x, self.a.y], [self.b.x, self.b.y]], dtype=np.float64)


@dataclass(frozen=True)
class Ray:
    """
    Half-line starting at origin and extending along direction.

    The direction does not need to be normalized but must be non-zero.
    """
    origin: Vector
    direction: Vector

    def __post_init__(self) -> None:
        if self.direction.x == 0.0 and self.direction.y == 0.0:
            raise ValidationError("ray direction must be non-zero")

    @classmethod
    def towards(cls, origin: Vector, target: Vector) -> "Ray":
        return cls(origin, target - origin)

    def intersect(self, segment: Segment) -> IntersectionStatus:
        """
        Like Segment.intersect, but a crossing only needs t >= 0.

        Collinear segments are judged against the span between origin and
        origin + direction, exactly as for Segment.intersect.
        """
        return _classify(self.origin, self.direction, segment.a, segment.direction, bounded=False)

    def rotate(self, radians: float) -> "Ray":
        """Rotate the direction about the origin by a signed angle (CCW positive)."""
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        d = self.direction
        return Ray(
            self.origin,
            Vector(d.x * cos_a - d.y * sin_a, d.x * sin_a + d.y * cos_a),
        )


def distance(p1: Vector, p2: Vector) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def angle_between(origin: Vector, point: Vector) -> float:
    """Signed angle in degrees of point as seen from origin, in (-180, 180]."""
    return math.degrees(math.atan2(point.y - origin.y, point.x - origin.x))


def to_polar(
    points: Iterable[Vector],
    origin: Vector
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Convert points to polar coordinates (r, angle) around origin.

    Parameters:
        points: Points to convert
        origin: Pole of the polar frame

    Returns:
        Tuple of (radii, angles) where:
            radii: shape (N,) distances from origin
            angles: shape (N,) angles in degrees (-180, 180]
    """
    coords = np.array([(p.x, p.y) for p in points], dtype=np.float64).reshape(-1, 2)
    dx = coords[:, 0] - origin.x
    dy = coords[:, 1] - origin.y
    radii = np.hypot(dx, dy)
    angles = np.degrees(np.arctan2(dy, dx))
    return radii, angles


def sort_by_angle(origin: Vector, points: List[Vector]) -> List[Vector]:
    """
    Order points by ascending angle around origin.

    Points sharing an angle are ordered by distance; remaining ties keep
    their input order.
    """
    if not points:
        return []
    radii, angles = to_polar(points, origin)
    # lexsort uses the last key as primary and is stable
    order = np.lexsort((radii, angles))
    return [points[i] for i in order]


def segments_from_array(array: NDArray[np.floating]) -> List[Segment]:
    """
    Build segments from an array of shape (N, 2, 2).

    Each entry is [[x0, y0], [x1, y1]].

    Raises:
        ValidationError: If the array is malformed or holds a zero-length segment
    """
    values = np.asarray(array, dtype=np.float64)
    if values.ndim != 3 or values.shape[1:] != (2, 2):
        raise ValidationError(f"segments must have shape (N, 2, 2), got {values.shape}")
    return [
        Segment.from_coords(row[0, 0], row[0, 1], row[1, 0], row[1, 1])
        for row in values
    ]
