"""
Visualization utilities for drawing walls, visibility fans and debug rays.

This module provides functions to draw overlays on BGR images. World
coordinates are used directly as pixel coordinates; pass `flip_y=True` to
draw a y-up world into a y-down image.
"""

from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from line_of_sight.dataclasses import Triangle, VisibilityResult
from line_of_sight.geometry import Segment, Vector

# Try to import cv2, set flag if not available
try:
    import cv2

    HAS_CV2 = True
except ImportError:
    HAS_CV2 = False


def _ensure_cv2() -> None:
    """Raise an error if cv2 is not available."""
    if not HAS_CV2:
        raise ImportError(
            "OpenCV (cv2) is required for visualization functions. "
            "Install with: pip install opencv-python"
        )


def _to_pixel(point: Vector, image_height: int, flip_y: bool) -> Tuple[int, int]:
    y = image_height - 1 - point.y if flip_y else point.y
    return (int(round(point.x)), int(round(y)))


def draw_segments(
    image: NDArray[np.uint8],
    segments: Sequence[Segment],
    color: Tuple[int, int, int] = (33, 67, 101),
    thickness: int = 2,
    flip_y: bool = False,
) -> NDArray[np.uint8]:
    """Draw wall segments.

    Args:
        image: Input image (H, W, 3) BGR format
        segments: Segments to draw
        color: BGR color tuple
        thickness: Line thickness
        flip_y: Treat world y as pointing up

    Returns:
        A copy of the image with the segments drawn
    """
    _ensure_cv2()
    output = image.copy()
    height = output.shape[0]
    for segment in segments:
        cv2.line(
            output,
            _to_pixel(segment.a, height, flip_y),
            _to_pixel(segment.b, height, flip_y),
            color,
            thickness,
            cv2.LINE_AA,
        )
    return output


def draw_visibility_fan(
    image: NDArray[np.uint8],
    triangles: Sequence[Triangle],
    color: Tuple[int, int, int] = (255, 255, 255),
    fill_alpha: float = 0.5,
    flip_y: bool = False,
) -> NDArray[np.uint8]:
    """Fill the triangle fan and blend it over the image.

    Args:
        image: Input image (H, W, 3) BGR format
        triangles: Fan triangles
        color: BGR fill color
        fill_alpha: Opacity of the fill in [0, 1]
        flip_y: Treat world y as pointing up

    Returns:
        A copy of the image with the lit area blended in
    """
    _ensure_cv2()
    if not 0.0 <= fill_alpha <= 1.0:
        raise ValueError(f"fill_alpha must be in [0, 1], got {fill_alpha}")

    output = image.copy()
    overlay = image.copy()
    height = output.shape[0]
    for triangle in triangles:
        pts = np.array(
            [_to_pixel(v, height, flip_y) for v in triangle.vertices()],
            dtype=np.int32,
        )
        cv2.fillPoly(overlay, [pts], color)

    cv2.addWeighted(overlay, fill_alpha, output, 1.0 - fill_alpha, 0, output)
    return output


def draw_intersection_lines(
    image: NDArray[np.uint8],
    origin: Vector,
    points: Sequence[Vector],
    color: Tuple[int, int, int] = (0, 0, 255),
    thickness: int = 1,
    flip_y: bool = False,
) -> NDArray[np.uint8]:
    """Draw a line from origin to every visibility point."""
    _ensure_cv2()
    output = image.copy()
    height = output.shape[0]
    start = _to_pixel(origin, height, flip_y)
    for point in points:
        cv2.line(output, start, _to_pixel(point, height, flip_y), color, thickness, cv2.LINE_AA)
    return output


def draw_visibility(
    image: NDArray[np.uint8],
    result: VisibilityResult,
    segments: Optional[Sequence[Segment]] = None,
    draw_lines: bool = False,
    fill_alpha: float = 0.5,
    flip_y: bool = False,
) -> NDArray[np.uint8]:
    """Draw a complete visibility overlay: fan, optional walls and debug rays.

    Args:
        image: Input image (H, W, 3) BGR format
        result: VisibilityResult to draw
        segments: Walls to outline on top of the fan
        draw_lines: Also draw origin -> point rays
        fill_alpha: Opacity of the fan fill
        flip_y: Treat world y as pointing up

    Returns:
        A copy of the image with all overlays
    """
    output = draw_visibility_fan(image, result.triangles, fill_alpha=fill_alpha, flip_y=flip_y)
    if segments:
        output = draw_segments(output, segments, flip_y=flip_y)
    if draw_lines:
        output = draw_intersection_lines(output, result.origin, result.points, flip_y=flip_y)
    cv2.circle(output, _to_pixel(result.origin, output.shape[0], flip_y), 3, (0, 255, 0), -1)
    return output
