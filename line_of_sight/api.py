"""
Public API for computing the visibility polygon of a point among walls.
"""

import math
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from line_of_sight.dataclasses import Triangle, VisibilityConfig, VisibilityResult
from line_of_sight.errors import InsufficientPointsError, ValidationError
from line_of_sight.geometry import Segment, Vector, segments_from_array
from line_of_sight.sweep import cast_visibility_rays

OriginLike = Union[Vector, Tuple[float, float], NDArray[np.floating]]
SegmentsLike = Union[Sequence[Segment], NDArray[np.floating]]


def coerce_origin(origin: OriginLike) -> Vector:
    if isinstance(origin, Vector):
        point = origin
    else:
        try:
            point = Vector.from_array(origin)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"origin must be a 2D point: {e}") from e

    if not point.is_finite():
        raise ValidationError(f"origin must be finite, got {point}")
    return point


def coerce_segments(segments: SegmentsLike) -> List[Segment]:
    if isinstance(segments, np.ndarray):
        return segments_from_array(segments)

    result = list(segments)
    for i, segment in enumerate(result):
        if not isinstance(segment, Segment):
            raise ValidationError(
                f"segments[{i}] must be a Segment, got {type(segment).__name__}"
            )
    return result


def _validate_inputs(
    origin: OriginLike,
    segments: SegmentsLike,
    config: VisibilityConfig
) -> Tuple[Vector, List[Segment]]:
    point = coerce_origin(origin)
    segment_list = coerce_segments(segments)

    if len(segment_list) < config.min_segments:
        raise ValidationError(
            f"at least {config.min_segments} segments are required "
            f"(including the area boundary), got {len(segment_list)}"
        )

    if config.reject_origin_on_segment:
        for i, segment in enumerate(segment_list):
            if segment.contains_point(point):
                raise ValidationError(
                    f"origin {point} lies on segments[{i}] ({segment.a} -> {segment.b})"
                )

    return point, segment_list


def compute_visibility_points(
    origin: OriginLike,
    segments: SegmentsLike,
    config: Optional[VisibilityConfig] = None
) -> List[Vector]:
    """
    Compute the boundary points of the region visible from origin.

    Casts a ray towards every segment endpoint, plus two slightly rotated
    probes past each vertex the ray reached unobstructed, and keeps the
    nearest blocking hit of each ray.

    Parameters:
        origin: Observer position as a Vector, (x, y) tuple or array of shape (2,)
        segments: Wall segments including the four boundary edges, as a
                  sequence of Segment or an array of shape (N, 2, 2)
        config: Tuning parameters (defaults to VisibilityConfig())

    Returns:
        Points sorted by ascending angle around origin, without duplicates.
        Directions whose ray escapes every segment are omitted.

    Raises:
        ValidationError: If origin or segments violate a precondition (too few
                         segments, zero-length segment, origin on a segment)

    Example:
        >>> from line_of_sight.scene import boundary_segments
        >>> points = compute_visibility_points((5.0, 5.0), boundary_segments(10.0, 10.0))
        >>> [p.as_tuple() for p in points]
        [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
    """
    if config is None:
        config = VisibilityConfig()

    point, segment_list = _validate_inputs(origin, segments, config)

    return cast_visibility_rays(
        point,
        segment_list,
        jitter_angle=config.jitter_angle,
        vertex_tolerance=config.vertex_tolerance,
    )


def build_triangle_fan(origin: OriginLike, points: Sequence[Vector]) -> List[Triangle]:
    """
    Tessellate the visible area into a fan of triangles around origin.

    Emits (origin, p_i, p_i+1) for consecutive points, followed by the
    closing triangle (origin, p_0, p_n).

    Parameters:
        origin: Fan apex
        points: Angle-sorted boundary points

    Returns:
        List of len(points) triangles

    Raises:
        InsufficientPointsError: If fewer than 2 points are given
    """
    apex = coerce_origin(origin)
    if len(points) < 2:
        raise InsufficientPointsError(
            f"a triangle fan needs at least 2 points, got {len(points)}"
        )

    triangles = [
        Triangle(apex, points[i], points[i + 1])
        for i in range(len(points) - 1)
    ]
    triangles.append(Triangle(apex, points[0], points[-1]))
    return triangles


def raycast(
    origin: OriginLike,
    segments: SegmentsLike,
    config: Optional[VisibilityConfig] = None
) -> VisibilityResult:
    """
    Compute visibility points and their triangle fan in one pass.

    Both outputs come from the same recomputation and are returned together,
    so a caller holding the result never observes a mix of two frames.

    Raises:
        ValidationError: On invalid inputs
        InsufficientPointsError: If fewer than 2 visible points were found,
                                 e.g. when the segments do not enclose origin
    """
    apex = coerce_origin(origin)
    points = compute_visibility_points(apex, segments, config)
    triangles = build_triangle_fan(apex, points)
    return VisibilityResult(origin=apex, points=tuple(points), triangles=tuple(triangles))


def intersection_lines(
    origin: OriginLike,
    points: Sequence[Vector]
) -> List[Tuple[Vector, Vector]]:
    """Pair origin with each point, for drawing debug rays."""
    apex = coerce_origin(origin)
    return [(apex, point) for point in points]


def fan_area(triangles: Sequence[Triangle]) -> float:
    """Total unsigned area of a set of triangles."""
    return math.fsum(triangle.area for triangle in triangles)
