"""
Angular ray sweep producing the visibility polygon boundary.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence

from line_of_sight.debug import format_point
from line_of_sight.geometry import Ray, Segment, Vector, distance, sort_by_angle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RayHit:
    """
    Nearest blocking intersection along a ray.

    Attributes:
        point: Intersection point
        distance: Euclidean distance from the ray origin
        segment_index: Index of the blocking segment in the input sequence
    """
    point: Vector
    distance: float
    segment_index: int


@dataclass(frozen=True)
class Probe:
    """
    Auxiliary ray cast just past a vertex that was reached unobstructed.

    Attributes:
        ray: The rotated ray
        vertex_segments: Indices of segments meeting at the probed vertex;
                         hits on any of them are redundant
    """
    ray: Ray
    vertex_segments: FrozenSet[int]


def unique_points(points: Sequence[Vector]) -> List[Vector]:
    """Drop exact duplicates, keeping the first occurrence of each point."""
    return list(dict.fromkeys(points))


def collect_candidate_points(origin: Vector, segments: Sequence[Segment]) -> List[Vector]:
    """
    Gather every segment endpoint once, ordered by angle around origin.

    Parameters:
        origin: Observer position
        segments: Obstacle and boundary segments

    Returns:
        Angle-sorted list of distinct endpoints
    """
    endpoints = [point for segment in segments for point in segment.points()]
    return sort_by_angle(origin, unique_points(endpoints))


def build_vertex_index(segments: Sequence[Segment]) -> Dict[Vector, List[int]]:
    """Map each endpoint to the indices of the segments that share it."""
    index: Dict[Vector, List[int]] = {}
    for segment_index, segment in enumerate(segments):
        for point in set(segment.points()):
            index.setdefault(point, []).append(segment_index)
    return index


def find_nearest_hit(ray: Ray, segments: Sequence[Segment]) -> Optional[RayHit]:
    """
    Find the closest segment crossed by a ray.

    Segments are tested in sequence order and a later segment replaces the
    current best only if it is strictly closer, so ties go to the earliest
    segment. Collinear overlaps do not count as hits.

    Parameters:
        ray: Ray to cast
        segments: Candidate blocking segments

    Returns:
        RayHit for the nearest crossing, or None if the ray escapes
    """
    nearest: Optional[RayHit] = None

    for segment_index, segment in enumerate(segments):
        status = ray.intersect(segment)
        if not status.is_intersecting:
            continue

        hit_distance = distance(ray.origin, status.point)
        if nearest is None or hit_distance < nearest.distance:
            nearest = RayHit(status.point, hit_distance, segment_index)

    return nearest


def cast_visibility_rays(
    origin: Vector,
    segments: Sequence[Segment],
    jitter_angle: float = 0.01,
    vertex_tolerance: float = 1e-6
) -> List[Vector]:
    """
    Compute the angle-sorted boundary points visible from origin.

    1. Cast a ray towards every distinct segment endpoint and keep the
       nearest hit.
    2. When that hit is the endpoint itself, the boundary may bend there:
       cast two probes rotated by +/- jitter_angle. A probe hit is kept only
       if it lands on a segment that does not meet at the vertex.
    3. Deduplicate and sort all kept points by angle.

    Inputs are assumed valid; see line_of_sight.api for the checked entry
    point.

    Parameters:
        origin: Observer position
        segments: Obstacle and boundary segments
        jitter_angle: Probe rotation in radians
        vertex_tolerance: Absolute tolerance for "hit the targeted vertex"

    Returns:
        Angle-sorted list of distinct visible points
    """
    candidates = collect_candidate_points(origin, segments)
    vertex_index = build_vertex_index(segments)
    logger.debug(
        "Casting rays from %s towards %d candidate vertices over %d segments",
        format_point(origin), len(candidates), len(segments)
    )

    visible: List[Vector] = []
    probes: List[Probe] = []

    for point in candidates:
        ray = Ray.towards(origin, point)
        hit = find_nearest_hit(ray, segments)

        if hit is None:
            logger.debug("Ray towards %s escaped without a hit", format_point(point))
            continue

        if not hit.point.isclose(point, abs_tol=vertex_tolerance):
            visible.append(hit.point)
            continue

        # Snap to the input vertex so that shared vertices deduplicate exactly
        visible.append(point)
        vertex_segments = frozenset(vertex_index.get(point, ())) | {hit.segment_index}
        probes.append(Probe(ray.rotate(-jitter_angle), vertex_segments))
        probes.append(Probe(ray.rotate(jitter_angle), vertex_segments))

    accepted = 0
    for probe in probes:
        hit = find_nearest_hit(probe.ray, segments)
        if hit is None or hit.segment_index in probe.vertex_segments:
            continue
        visible.append(hit.point)
        accepted += 1

    logger.debug(
        "Collected %d direct hits and accepted %d of %d probes",
        len(visible) - accepted, accepted, len(probes)
    )

    return sort_by_angle(origin, unique_points(visible))
