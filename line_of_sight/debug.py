"""
Debug logging helpers for visibility computations.

The library never configures logging on import; call setup_debug_logging()
to see the DEBUG trace emitted by the sweep.
"""

import logging
import sys
from typing import IO, Iterable, Optional

from line_of_sight.dataclasses import VisibilityResult
from line_of_sight.geometry import Segment, Vector

LOGGER_NAME = "line_of_sight"
_HANDLER_NAME = "line_of_sight.debug"

logger = logging.getLogger(LOGGER_NAME)


def setup_debug_logging(
    level: int = logging.DEBUG,
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling this more than once replaces the previously installed handler
    instead of stacking a new one.

    Parameters:
        level: Logging level for the package logger
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package logger
    """
    disable_debug_logging()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def disable_debug_logging() -> None:
    """Remove the handler installed by setup_debug_logging()."""
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


def format_point(point: Vector, precision: int = 2) -> str:
    return f"({point.x:.{precision}f}, {point.y:.{precision}f})"


def format_angle(angle_deg: float, precision: int = 2) -> str:
    return f"{angle_deg:.{precision}f}°"


def format_segment(segment: Segment, precision: int = 2) -> str:
    return f"{format_point(segment.a, precision)} -> {format_point(segment.b, precision)}"


def format_points(points: Iterable[Vector], precision: int = 2) -> str:
    return "[" + ", ".join(format_point(p, precision) for p in points) + "]"


def log_visibility_result(result: VisibilityResult, level: int = logging.INFO) -> None:
    """
    Log a one-line summary of a VisibilityResult.

    Parameters:
        result: VisibilityResult to summarize
        level: Logging level for the summary line
    """
    logger.log(
        level,
        "Visibility from %s: %d points, %d triangles, area %.2f",
        format_point(result.origin),
        len(result.points),
        len(result.triangles),
        result.area,
    )
