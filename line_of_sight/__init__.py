"""
Line of Sight
=============

Public API for computing the region visible from a point among opaque
wall segments, as an angle-sorted boundary or a triangle fan.
"""

from line_of_sight.api import (
    compute_visibility_points,
    build_triangle_fan,
    raycast,
    intersection_lines,
    fan_area,
)
from line_of_sight.errors import ValidationError, InsufficientPointsError
from line_of_sight.dataclasses import (
    Triangle,
    VisibilityConfig,
    VisibilityResult,
)
from line_of_sight.geometry import (
    Vector,
    Segment,
    Ray,
    IntersectionKind,
    IntersectionStatus,
    COLLINEAR_INTERSECTING,
    COLLINEAR_NOT_INTERSECTING,
    NOT_INTERSECTING,
    segments_from_array,
)
from line_of_sight.scene import (
    tile_edges,
    boundary_segments,
    wall_segments,
    grid_boundary,
    build_scene_segments,
    random_wall_grid,
    tile_center,
)
from line_of_sight.state import LineOfSight
from line_of_sight.debug import (
    setup_debug_logging,
    disable_debug_logging,
    format_point,
    format_angle,
    format_segment,
    format_points,
    log_visibility_result,
)

__all__ = [
    # Main API
    'compute_visibility_points',
    'build_triangle_fan',
    'raycast',
    'intersection_lines',
    'fan_area',
    # Data structures
    'ValidationError',
    'InsufficientPointsError',
    'Triangle',
    'VisibilityConfig',
    'VisibilityResult',
    # Geometry
    'Vector',
    'Segment',
    'Ray',
    'IntersectionKind',
    'IntersectionStatus',
    'COLLINEAR_INTERSECTING',
    'COLLINEAR_NOT_INTERSECTING',
    'NOT_INTERSECTING',
    'segments_from_array',
    # Scene
    'tile_edges',
    'boundary_segments',
    'wall_segments',
    'grid_boundary',
    'build_scene_segments',
    'random_wall_grid',
    'tile_center',
    # State
    'LineOfSight',
    # Debug utilities
    'setup_debug_logging',
    'disable_debug_logging',
    'format_point',
    'format_angle',
    'format_segment',
    'format_points',
    'log_visibility_result',
]
__version__ = '0.1.0'
