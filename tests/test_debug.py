"""
Tests for debug logging helpers.
"""

import io
import logging
from typing import get_type_hints

import pytest

from line_of_sight import VisibilityResult, compute_visibility_points, raycast
from line_of_sight.debug import (
    LOGGER_NAME,
    disable_debug_logging,
    format_angle,
    format_point,
    format_points,
    format_segment,
    log_visibility_result,
    setup_debug_logging,
)
from line_of_sight.geometry import Segment, Vector
from line_of_sight.scene import boundary_segments


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    disable_debug_logging()


class TestFormatting:
    """Tests for formatting helpers."""

    def test_format_point(self):
        assert format_point(Vector(1.0, 2.5)) == "(1.00, 2.50)"
        assert format_point(Vector(1.0, 2.5), precision=0) == "(1, 2)"

    def test_format_angle(self):
        assert format_angle(45.0) == "45.00°"

    def test_format_segment(self):
        assert format_segment(Segment.from_coords(0.0, 0.0, 1.0, 1.0)) == "(0.00, 0.00) -> (1.00, 1.00)"

    def test_format_points(self):
        assert format_points([Vector(0.0, 0.0), Vector(1.0, 2.0)]) == "[(0.00, 0.00), (1.00, 2.00)]"
        assert format_points([]) == "[]"


class TestDebugLogging:
    """Tests for setup_debug_logging() and disable_debug_logging()."""

    def test_setup_captures_sweep_trace(self):
        stream = io.StringIO()
        setup_debug_logging(stream=stream)
        compute_visibility_points((5.0, 5.0), boundary_segments(10.0, 10.0))
        output = stream.getvalue()
        assert "Casting rays from (5.00, 5.00) towards 4 candidate vertices" in output
        assert "accepted 0 of 8 probes" in output

    def test_setup_is_idempotent(self):
        setup_debug_logging(stream=io.StringIO())
        setup_debug_logging(stream=io.StringIO())
        logger = logging.getLogger(LOGGER_NAME)
        named = [h for h in logger.handlers if h.get_name() == "line_of_sight.debug"]
        assert len(named) == 1

    def test_disable_removes_handler(self):
        stream = io.StringIO()
        setup_debug_logging(stream=stream)
        disable_debug_logging()
        compute_visibility_points((5.0, 5.0), boundary_segments(10.0, 10.0))
        assert stream.getvalue() == ""

    def test_log_visibility_result(self, caplog):
        result = raycast((5.0, 5.0), boundary_segments(10.0, 10.0))
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            log_visibility_result(result)
        assert "Visibility from (5.00, 5.00): 4 points, 4 triangles, area 100.00" in caplog.text

    def test_log_visibility_result_annotations(self):
        hints = get_type_hints(log_visibility_result)
        assert hints["result"] is VisibilityResult
        assert hints["level"] is int
