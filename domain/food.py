"""
Food placement.
"""

import random
from typing import Collection, Optional

from .constants import PROBABILITY_OF_DIRECTION_REVERSAL_FOOD
from .game_state import FoodState
from .grid import Grid


class BoardFullError(Exception):
    """Raised when no cell is left to put food on."""


class FoodSpawner:
    """
    Draws the next food cell by rejection sampling.

    With max_attempts=None the loop runs until it finds a free cell, which
    is quick unless the board is almost full. When max_attempts is set, the
    spawner gives up on sampling after that many misses and picks among the
    free cells directly.
    """

    def __init__(
        self,
        grid: Grid,
        rng: Optional[random.Random] = None,
        reversal_probability: float = PROBABILITY_OF_DIRECTION_REVERSAL_FOOD,
        max_attempts: Optional[int] = None,
    ):
        self.grid = grid
        self.rng = rng or random.Random()
        self.reversal_probability = reversal_probability
        self.max_attempts = max_attempts

    def spawn(
        self,
        occupied: Collection[int],
        obstacles: Collection[int],
        previous_food_cell: Optional[int] = None,
    ) -> FoodState:
        blocked = set(occupied) | set(obstacles)
        if previous_food_cell is not None:
            blocked.add(previous_food_cell)
        if len(blocked) >= self.grid.cell_count and all(
            cell in blocked for cell in self.grid.cells()
        ):
            raise BoardFullError("No free cell left for food.")

        cell = self._sample(blocked)
        reverses = self.rng.random() < self.reversal_probability
        return FoodState(cell=cell, reverses=reverses)

    def _sample(self, blocked: set) -> int:
        attempts = 0
        while self.max_attempts is None or attempts < self.max_attempts:
            attempts += 1
            cell = self.rng.randint(1, self.grid.cell_count)
            if cell not in blocked:
                return cell

        free_cells = [cell for cell in self.grid.cells() if cell not in blocked]
        return self.rng.choice(free_cells)
