"""Render the line of sight from a few observer positions on a random map.

The script generates a tile map, computes the visible region from each
origin and writes one overlay image per origin.

Run with::

    python examples/render_scene.py --seed 7 --origins 5
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from line_of_sight import LineOfSight, log_visibility_result, setup_debug_logging
from line_of_sight.dataclasses import Triangle, VisibilityResult
from line_of_sight.geometry import Segment, Vector
from line_of_sight.scene import (
    MAP_HEIGHT,
    MAP_WIDTH,
    TILE_SIZE,
    build_scene_segments,
    random_wall_grid,
    tile_center,
)
from line_of_sight.visualize import HAS_CV2, draw_visibility

EXAMPLES_DIR = Path(__file__).resolve().parent
OUTPUT_DIR = EXAMPLES_DIR / "output"

logger = logging.getLogger(__name__)


def render_tiles(grid: NDArray[np.bool_], tile_size: float) -> NDArray[np.uint8]:
    """Paint floor and wall tiles into a BGR image, row 0 at the bottom."""
    cols, rows = grid.shape
    size = int(tile_size)
    image = np.zeros((rows * size, cols * size, 3), dtype=np.uint8)
    floor = (132, 164, 196)
    wall = (33, 67, 101)
    for col in range(cols):
        for row in range(rows):
            y0 = (rows - 1 - row) * size
            image[y0:y0 + size, col * size:(col + 1) * size] = wall if grid[col, row] else floor
    return image


def to_image_frame(result: VisibilityResult, shift: Vector) -> VisibilityResult:
    """Move a result so that the lower-left tile corner lands on pixel (0, 0)."""
    return VisibilityResult(
        origin=result.origin + shift,
        points=tuple(p + shift for p in result.points),
        triangles=tuple(Triangle(t.a + shift, t.b + shift, t.c + shift) for t in result.triangles),
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--origins", type=int, default=3)
    parser.add_argument("--lines", action="store_true", help="draw origin -> point rays")
    parser.add_argument("--debug", action="store_true", help="enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    if args.debug:
        setup_debug_logging()

    grid = random_wall_grid(MAP_WIDTH, MAP_HEIGHT, seed=args.seed)
    segments = build_scene_segments(grid, TILE_SIZE)
    logger.info(f"Generated {MAP_WIDTH}x{MAP_HEIGHT} map with {len(segments)} segments")

    floor_tiles = np.argwhere(~grid)
    if floor_tiles.size == 0:
        raise SystemExit("Map has no floor tiles; try another seed")

    rng = np.random.default_rng(args.seed)
    picks = rng.choice(len(floor_tiles), size=min(args.origins, len(floor_tiles)), replace=False)

    line_of_sight = LineOfSight(segments)
    background = render_tiles(grid, TILE_SIZE)
    shift = Vector(TILE_SIZE / 2.0, TILE_SIZE / 2.0)
    shifted_walls = [Segment(s.a + shift, s.b + shift) for s in segments]

    if HAS_CV2:
        OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    else:
        logger.info("OpenCV not installed; skipping visualization output.")

    for index, pick in enumerate(picks):
        col, row = (int(v) for v in floor_tiles[pick])
        line_of_sight.update(tile_center(col, row))
        log_visibility_result(line_of_sight.result)

        if not HAS_CV2:
            continue

        image = draw_visibility(
            background,
            to_image_frame(line_of_sight.result, shift),
            segments=shifted_walls,
            draw_lines=args.lines,
            flip_y=True,
        )

        import cv2  # Imported lazily to keep dependency optional at module import time

        output_path = OUTPUT_DIR / f"line_of_sight_{index}.png"
        cv2.imwrite(str(output_path), image)
        logger.info(f"Saved visualization to {output_path}")


if __name__ == "__main__":
    main()
