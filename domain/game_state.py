"""
GameState entity - everything one game of snake needs to know.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from .constants import EMPTY, FOOD, FOOD_REVERSING, OBSTACLE, SNAKE
from .grid import Grid
from .snake import SnakeBody


@dataclass(frozen=True)
class FoodState:
    """The food currently on the board."""
    cell: int
    reverses: bool = False


@dataclass(frozen=True)
class TickOutcome:
    """What a renderer needs after one tick."""
    occupied_cells: FrozenSet[int]
    head_coords: Tuple[int, int]
    score: int
    game_over: bool
    ate_food: bool = False
    grew: bool = False
    reversed: bool = False
    death_reason: Optional[str] = None


class GameState:
    """
    The state of a single game.

    Attributes:
        grid: the board
        snake: the snake's body
        food: current food cell and whether it reverses the snake
        obstacles: blocked cells, fixed for this game
        direction: current direction of travel
        pending_direction: latest accepted direction change, applied next tick
        score: food eaten so far
        game_over: True once the snake has crashed
        death_reason: 'wall', 'self', 'obstacle' or 'board_full'
        level: 1 (open board) or 2 (obstacles)
        tick_number: ticks played so far
    """

    def __init__(
        self,
        grid: Grid,
        snake: SnakeBody,
        food: FoodState,
        obstacles: FrozenSet[int],
        direction: str,
        level: int = 1,
        score: int = 0,
    ):
        self.grid = grid
        self.snake = snake
        self.food = food
        self.obstacles = obstacles
        self.direction = direction
        self.pending_direction: Optional[str] = None
        self.level = level
        self.score = score
        self.game_over = False
        self.death_reason: Optional[str] = None
        self.tick_number = 0

    def cell_kind(self, cell: int) -> str:
        """Classify a cell for painting: snake > food > obstacle > empty."""
        if cell in self.snake:
            return SNAKE
        if cell == self.food.cell:
            return FOOD_REVERSING if self.food.reverses else FOOD
        if cell in self.obstacles:
            return OBSTACLE
        return EMPTY

    def outcome(
        self, ate_food: bool = False, grew: bool = False, reversed: bool = False
    ) -> TickOutcome:
        return TickOutcome(
            occupied_cells=self.snake.cells,
            head_coords=(self.snake.head.row, self.snake.head.col),
            score=self.score,
            game_over=self.game_over,
            ate_food=ate_food,
            grew=grew,
            reversed=reversed,
            death_reason=self.death_reason,
        )

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        R = food that reverses the snake
        # = obstacle
        H = snake head
        o = snake body
        Row 0 is printed first, matching the grid's row numbering.
        """
        symbols = {EMPTY: '.', FOOD: 'F', FOOD_REVERSING: 'R', OBSTACLE: '#', SNAKE: 'o'}
        head_cell = self.snake.head.cell

        result = []
        for row in range(self.grid.size):
            line = []
            for col in range(self.grid.size):
                cell = self.grid.cell_at(row, col)
                line.append('H' if cell == head_cell else symbols[self.cell_kind(cell)])
            result.append(f"{row:2d} {' '.join(line)}")

        # Column labels use the last digit to keep the board aligned
        result.append("   " + " ".join(str(col % 10) for col in range(self.grid.size)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, level={self.level}, "
            f"length={len(self.snake)}, score={self.score}, game_over={self.game_over}>"
        )
