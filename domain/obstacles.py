"""
Obstacle placement for levels that enable it.
"""

import math
import random
from typing import FrozenSet, Optional

from .constants import LEVELS, MIN_OBSTACLES, OBSTACLE_DENSITY
from .grid import Grid


def obstacle_count(grid: Grid, level: int) -> int:
    """Number of obstacles a level places on the given board."""
    if level not in LEVELS:
        raise ValueError(f"Unknown level {level}. Available levels: {sorted(LEVELS)}")
    if not LEVELS[level]:
        return 0
    return max(MIN_OBSTACLES, math.floor(OBSTACLE_DENSITY * grid.cell_count))


def generate_obstacles(
    grid: Grid,
    count: int,
    avoid_cell: int,
    rng: Optional[random.Random] = None,
) -> FrozenSet[int]:
    """
    Pick `count` distinct random cells, never `avoid_cell`.

    Nothing else is checked: an obstacle may land right next to the start
    cell or on the snake's first few moves.
    """
    if count <= 0:
        return frozenset()
    if count >= grid.cell_count - 1:
        raise ValueError(
            f"Cannot place {count} obstacles on a board of {grid.cell_count} cells."
        )
    rng = rng or random.Random()

    obstacles = set()
    while len(obstacles) < count:
        cell = rng.randint(1, grid.cell_count)
        if cell == avoid_cell:
            continue
        obstacles.add(cell)
    return frozenset(obstacles)


def obstacles_for_level(
    grid: Grid,
    level: int,
    avoid_cell: int,
    rng: Optional[random.Random] = None,
) -> FrozenSet[int]:
    return generate_obstacles(grid, obstacle_count(grid, level), avoid_cell, rng)
