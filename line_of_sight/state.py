"""
Application-side holder for the last visibility result.

The computation itself is stateless; LineOfSight keeps the most recent
VisibilityResult for renderers to read and recomputes only when the observer
moves.
"""

from __future__ import annotations

import logging

from line_of_sight.api import OriginLike, SegmentsLike, coerce_origin, coerce_segments, raycast
from line_of_sight.dataclasses import Triangle, VisibilityConfig, VisibilityResult
from line_of_sight.geometry import Segment, Vector

logger = logging.getLogger(__name__)


class LineOfSight:
    """Caches the visibility result for a fixed set of segments.

    Attributes:
        segments: Wall and boundary segments used for every recomputation
        config: Tuning parameters passed to raycast()
    """

    def __init__(
        self,
        segments: SegmentsLike,
        config: VisibilityConfig | None = None,
    ) -> None:
        self._segments: tuple[Segment, ...] = tuple(coerce_segments(segments))
        self.config = config if config is not None else VisibilityConfig()
        self._result: VisibilityResult | None = None

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    def set_segments(self, segments: SegmentsLike) -> None:
        """Replace the segments and drop the cached result."""
        self._segments = tuple(coerce_segments(segments))
        self._result = None

    def update(self, origin: OriginLike) -> bool:
        """Recompute if origin differs from the last computed origin.

        The new result replaces the previous one only after it has been fully
        computed; on error the previous result is kept.

        Args:
            origin: Current observer position

        Returns:
            True if a recomputation happened, False if origin was unchanged

        Raises:
            ValidationError: If origin or segments are invalid
        """
        point = coerce_origin(origin)
        if self._result is not None and self._result.origin == point:
            return False

        result = raycast(point, self._segments, self.config)
        self._result = result
        logger.debug(
            "Recomputed line of sight at (%s, %s): %d points",
            point.x, point.y, len(result.points)
        )
        return True

    @property
    def result(self) -> VisibilityResult | None:
        return self._result

    @property
    def origin(self) -> Vector | None:
        return self._result.origin if self._result is not None else None

    @property
    def points(self) -> tuple[Vector, ...]:
        return self._result.points if self._result is not None else ()

    @property
    def triangles(self) -> tuple[Triangle, ...]:
        return self._result.triangles if self._result is not None else ()

    @property
    def lines(self) -> list[tuple[Vector, Vector]]:
        return self._result.lines if self._result is not None else []
