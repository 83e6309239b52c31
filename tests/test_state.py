"""
Tests for the LineOfSight result holder.
"""

import pytest

from line_of_sight import LineOfSight, ValidationError, VisibilityConfig
from line_of_sight.geometry import Segment, Vector
from line_of_sight.scene import boundary_segments


@pytest.fixture
def room():
    return LineOfSight(boundary_segments(10.0, 10.0))


class TestLineOfSight:
    """Tests for LineOfSight.update() and its cached outputs."""

    def test_empty_before_first_update(self, room):
        assert room.result is None
        assert room.origin is None
        assert room.points == ()
        assert room.triangles == ()
        assert room.lines == []

    def test_first_update_computes(self, room):
        assert room.update((5.0, 5.0)) is True
        assert room.origin == Vector(5.0, 5.0)
        assert len(room.points) == 4
        assert len(room.triangles) == 4
        assert room.lines[0] == (Vector(5.0, 5.0), room.points[0])

    def test_same_origin_is_not_recomputed(self, room):
        room.update(Vector(5.0, 5.0))
        result = room.result
        assert room.update((5.0, 5.0)) is False
        assert room.result is result

    def test_moved_origin_recomputes(self, room):
        room.update((5.0, 5.0))
        first = room.result
        assert room.update((2.0, 3.0)) is True
        assert room.result is not first
        assert room.origin == Vector(2.0, 3.0)

    def test_failed_update_keeps_previous_result(self, room):
        room.update((5.0, 5.0))
        previous = room.result
        with pytest.raises(ValidationError):
            room.update((5.0, 0.0))
        assert room.result is previous

    def test_set_segments_invalidates(self, room):
        room.update((5.0, 5.0))
        room.set_segments(boundary_segments(20.0, 20.0))
        assert room.result is None
        assert room.update((5.0, 5.0)) is True
        assert Vector(20.0, 20.0) in room.points

    def test_config_is_used(self):
        config = VisibilityConfig(min_segments=1)
        sight = LineOfSight([Segment.from_coords(3.0, -1.0, 3.0, 1.0)], config)
        assert sight.config is config
        sight.update((0.0, 0.0))
        assert sight.points == (Vector(3.0, -1.0), Vector(3.0, 1.0))

    def test_segments_are_snapshotted(self):
        segments = boundary_segments(10.0, 10.0)
        sight = LineOfSight(segments)
        segments.append(Segment.from_coords(1.0, 1.0, 2.0, 2.0))
        assert len(sight.segments) == 4
