"""
Segment providers: turn a tile grid and the playable area into wall segments.

Grids are boolean arrays indexed as grid[col, row]; True marks a wall tile.
Tile (col, row) is centred at (col * tile_size, row * tile_size).
"""

from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from line_of_sight.errors import ValidationError
from line_of_sight.geometry import Segment, Vector

TILE_SIZE = 32.0
MAP_WIDTH = 30
MAP_HEIGHT = 30
WALL_PROBABILITY = 0.25


def tile_edges(col: int, row: int, tile_size: float = TILE_SIZE) -> List[Segment]:
    """
    Return the four edges of a tile, clockwise starting with the top edge.

    Parameters:
        col: Tile column
        row: Tile row
        tile_size: Side length of a tile in world units

    Returns:
        List of 4 segments
    """
    x = col * tile_size
    y = row * tile_size
    half = tile_size / 2.0

    top_left = Vector(x - half, y + half)
    top_right = Vector(x + half, y + half)
    bottom_right = Vector(x + half, y - half)
    bottom_left = Vector(x - half, y - half)

    return [
        Segment(top_left, top_right),
        Segment(top_right, bottom_right),
        Segment(bottom_right, bottom_left),
        Segment(bottom_left, top_left),
    ]


def boundary_segments(
    width: float,
    height: float,
    origin: Tuple[float, float] = (0.0, 0.0)
) -> List[Segment]:
    """
    Return the four edges of the rectangle [x0, x0 + width] x [y0, y0 + height].

    Edges run counter-clockwise from the bottom edge and form a closed loop.

    Raises:
        ValidationError: If width or height is not positive
    """
    if not (width > 0 and height > 0):
        raise ValidationError(f"boundary must have positive size, got {width} x {height}")

    x0, y0 = float(origin[0]), float(origin[1])
    x1, y1 = x0 + float(width), y0 + float(height)

    corners = [Vector(x0, y0), Vector(x1, y0), Vector(x1, y1), Vector(x0, y1)]
    return [Segment(corners[i], corners[(i + 1) % 4]) for i in range(4)]


def _validate_grid(grid: NDArray[np.bool_]) -> NDArray[np.bool_]:
    values = np.asarray(grid)
    if values.ndim != 2:
        raise ValidationError(f"grid must be a 2D array, got shape {values.shape}")
    return values.astype(bool)


def wall_segments(grid: NDArray[np.bool_], tile_size: float = TILE_SIZE) -> List[Segment]:
    """
    Collect the edges of every wall tile in a grid.

    Tiles are visited in column-major order (col, then row), which fixes the
    segment order and therefore the nearest-hit tie-breaking.
    """
    walls = _validate_grid(grid)
    segments: List[Segment] = []
    for col, row in np.argwhere(walls):
        segments.extend(tile_edges(int(col), int(row), tile_size))
    return segments


def grid_boundary(grid: NDArray[np.bool_], tile_size: float = TILE_SIZE) -> List[Segment]:
    """Boundary rectangle enclosing every tile of the grid."""
    cols, rows = _validate_grid(grid).shape
    half = tile_size / 2.0
    return boundary_segments(cols * tile_size, rows * tile_size, origin=(-half, -half))


def build_scene_segments(
    grid: NDArray[np.bool_],
    tile_size: float = TILE_SIZE
) -> List[Segment]:
    """Wall edges of the grid followed by the four boundary edges."""
    return wall_segments(grid, tile_size) + grid_boundary(grid, tile_size)


def random_wall_grid(
    width: int = MAP_WIDTH,
    height: int = MAP_HEIGHT,
    wall_probability: float = WALL_PROBABILITY,
    seed: Optional[int] = None
) -> NDArray[np.bool_]:
    """
    Generate a random wall grid of shape (width, height).

    Parameters:
        width: Number of columns
        height: Number of rows
        wall_probability: Chance of each tile being a wall, in [0, 1]
        seed: Seed for numpy's default_rng, for reproducible maps

    Raises:
        ValidationError: If sizes or probability are out of range
    """
    if width < 1 or height < 1:
        raise ValidationError(f"grid size must be positive, got {width} x {height}")
    if not 0.0 <= wall_probability <= 1.0:
        raise ValidationError(f"wall_probability must be in [0, 1], got {wall_probability}")

    rng = np.random.default_rng(seed)
    return rng.random((width, height)) < wall_probability


def tile_center(col: int, row: int, tile_size: float = TILE_SIZE) -> Vector:
    """World position of a tile centre, a convenient origin for floor tiles."""
    return Vector(col * tile_size, row * tile_size)
