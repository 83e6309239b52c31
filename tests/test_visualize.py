"""
Tests for OpenCV drawing helpers.
"""

import numpy as np
import pytest

from line_of_sight import raycast
from line_of_sight.geometry import Vector
from line_of_sight.scene import boundary_segments
from line_of_sight.visualize import (
    HAS_CV2,
    draw_intersection_lines,
    draw_segments,
    draw_visibility,
    draw_visibility_fan,
)

pytestmark = pytest.mark.skipif(not HAS_CV2, reason="opencv-python not installed")


@pytest.fixture
def blank():
    return np.zeros((60, 60, 3), dtype=np.uint8)


@pytest.fixture
def result():
    # Room smaller than the image, offset from its border
    return raycast((30.0, 30.0), boundary_segments(40.0, 40.0, origin=(10.0, 10.0)))


class TestVisualize:
    """Tests for draw_* functions."""

    def test_draw_visibility_fan_fills_room_only(self, blank, result):
        image = draw_visibility_fan(blank, result.triangles, color=(255, 255, 255), fill_alpha=1.0)
        assert image[30, 30].tolist() == [255, 255, 255]
        assert image[2, 2].tolist() == [0, 0, 0]
        assert blank.sum() == 0, "input image must not be modified"

    def test_draw_visibility_fan_blends(self, blank, result):
        image = draw_visibility_fan(blank, result.triangles, color=(200, 200, 200), fill_alpha=0.5)
        assert 90 <= int(image[30, 30, 0]) <= 110

    def test_draw_visibility_fan_rejects_bad_alpha(self, blank, result):
        with pytest.raises(ValueError, match="fill_alpha"):
            draw_visibility_fan(blank, result.triangles, fill_alpha=1.5)

    def test_draw_segments(self, blank):
        image = draw_segments(blank, boundary_segments(40.0, 40.0, origin=(10.0, 10.0)), thickness=1)
        assert image[10, 30].any()
        assert not image[30, 30].any()

    def test_draw_intersection_lines(self, blank, result):
        image = draw_intersection_lines(blank, result.origin, result.points)
        assert image[20, 20].any()  # on the diagonal towards (10, 10)

    def test_draw_intersection_lines_flip_y(self, blank):
        image = draw_intersection_lines(blank, Vector(0.0, 0.0), [Vector(0.0, 59.0)], flip_y=True)
        assert image[59, 0].any()
        assert image[0, 0].any()

    def test_draw_visibility(self, blank, result):
        image = draw_visibility(
            blank, result, segments=boundary_segments(40.0, 40.0, origin=(10.0, 10.0)), draw_lines=True
        )
        assert image.shape == blank.shape
        assert image[30, 30, 1] == 255  # origin marker
