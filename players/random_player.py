"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.constants import UP, DOWN, LEFT, RIGHT
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    An autopilot that picks a direction that avoids walls, obstacles and
    its own body.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Optional[str]:
        grid = game_state.grid
        head = game_state.snake.head

        # Filter out moves that:
        # 1. Hit walls
        # 2. Hit an obstacle
        # 3. Hit the body (the tail included; it has not moved yet)
        safe_moves: List[str] = []
        for move in (UP, RIGHT, DOWN, LEFT):
            new_row, new_col = grid.coords_in_direction(head.row, head.col, move)
            if not grid.in_bounds(new_row, new_col):
                continue

            cell = grid.cell_at(new_row, new_col)
            if cell in game_state.snake or cell in game_state.obstacles:
                continue

            safe_moves.append(move)

        # No safe move: keep going and crash
        if not safe_moves:
            return None

        # Head for the food when that is one of the safe options
        food_row, food_col = grid.coords_of(game_state.food.cell)
        toward_food = [
            move for move in safe_moves
            if _distance(grid.coords_in_direction(head.row, head.col, move), (food_row, food_col))
            < _distance((head.row, head.col), (food_row, food_col))
        ]
        if toward_food:
            return self.rng.choice(toward_food)

        return self.rng.choice(safe_moves)


def _distance(a, b) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
