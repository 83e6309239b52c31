#!/usr/bin/env python3
"""
Profile script for line_of_sight to identify performance bottlenecks.
"""

import cProfile
import pstats
import io
import time
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

from line_of_sight.api import raycast
from line_of_sight.geometry import Segment, Vector
from line_of_sight.scene import TILE_SIZE, build_scene_segments, random_wall_grid, tile_center


def generate_typical_workload(
    width: int = 30,
    height: int = 30,
    wall_probability: float = 0.25,
    seed: int = 42
) -> Tuple[NDArray[np.bool_], List[Segment], List[Vector]]:
    """
    Generate a random tile map and every floor tile centre as an origin.
    Simulates the cursor sweeping over the whole map.
    """
    grid = random_wall_grid(width, height, wall_probability, seed=seed)
    segments = build_scene_segments(grid, TILE_SIZE)
    origins = [tile_center(int(c), int(r)) for c, r in np.argwhere(~grid)]
    return grid, segments, origins


def run_typical_workload(n_origins: int = 50) -> None:
    """Recompute visibility for a sample of origins on a 30x30 map."""
    _, segments, origins = generate_typical_workload()
    for origin in origins[:n_origins]:
        raycast(origin, segments)


def run_small_map_workload(n_iterations: int = 200) -> None:
    """Recompute visibility repeatedly on a sparse 10x10 map."""
    _, segments, origins = generate_typical_workload(10, 10, 0.1)
    for i in range(n_iterations):
        raycast(origins[i % len(origins)], segments)


def profile_function(func, description: str) -> None:
    """Profile a function and print statistics."""
    print(f"\n{'=' * 60}")
    print(f"Profiling: {description}")
    print('=' * 60)

    # Time the execution
    start = time.perf_counter()

    profiler = cProfile.Profile()
    profiler.enable()
    func()
    profiler.disable()

    elapsed = time.perf_counter() - start

    # Get stats
    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats('cumulative')
    ps.print_stats(30)
    print(s.getvalue())

    print(f"\nTotal time: {elapsed:.3f}s")


if __name__ == "__main__":
    print("Line of Sight Performance Profiling")
    print("=" * 60)

    profile_function(
        lambda: run_typical_workload(50),
        "Typical workload (30x30 map, 25% walls, 50 origins)"
    )

    profile_function(
        lambda: run_small_map_workload(200),
        "Small map (10x10 map, 10% walls, 200 recomputations)"
    )
