"""
Tests for the domain entities: grid, snake body, obstacles, food and state.
"""

import pytest
import random
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (
    UP, DOWN, LEFT, RIGHT,
    VALID_MOVES,
    OPPOSITE,
    opposite,
    Grid,
    Segment,
    SnakeBody,
    FoodState,
    GameState,
    BoardFullError,
    FoodSpawner,
    generate_obstacles,
    obstacle_count,
    obstacles_for_level,
)
from domain.constants import EMPTY, FOOD, FOOD_REVERSING, OBSTACLE, SNAKE


def seg(grid, row, col):
    return Segment(row, col, grid.cell_at(row, col))


class TestDirections:
    """Tests for the direction constants."""

    def test_opposite_is_involutive(self):
        """Taking the opposite twice gives back the original direction."""
        for direction in VALID_MOVES:
            assert opposite(opposite(direction)) == direction
            assert opposite(direction) != direction

    def test_opposite_covers_every_direction(self):
        """Every direction has an opposite."""
        assert set(OPPOSITE) == VALID_MOVES
        assert OPPOSITE[UP] == DOWN
        assert OPPOSITE[LEFT] == RIGHT


class TestGrid:
    """Tests for the Grid class."""

    def test_cells_are_row_major_from_one(self):
        """Cell numbering starts at 1 in the top-left corner, row by row."""
        grid = Grid(15)
        assert grid.cell_at(0, 0) == 1
        assert grid.cell_at(0, 14) == 15
        assert grid.cell_at(1, 0) == 16
        assert grid.cell_at(14, 14) == 225

    def test_coords_of_inverts_cell_at(self):
        """coords_of and cell_at are inverse over the whole board."""
        grid = Grid(7)
        seen = set()
        for row in range(7):
            for col in range(7):
                cell = grid.cell_at(row, col)
                assert grid.coords_of(cell) == (row, col)
                seen.add(cell)
        assert seen == set(range(1, 50))
        assert list(grid.cells()) == list(range(1, 50))

    def test_in_bounds(self):
        """in_bounds is false exactly when a coordinate falls off the board."""
        grid = Grid(15)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(14, 14)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(0, -1)
        assert not grid.in_bounds(15, 0)
        assert not grid.in_bounds(0, 15)

    def test_coords_in_direction(self):
        """Each direction moves one step; UP decreases the row."""
        grid = Grid(15)
        assert grid.coords_in_direction(5, 5, UP) == (4, 5)
        assert grid.coords_in_direction(5, 5, DOWN) == (6, 5)
        assert grid.coords_in_direction(5, 5, LEFT) == (5, 4)
        assert grid.coords_in_direction(5, 5, RIGHT) == (5, 6)
        assert grid.coords_in_direction(0, 0, UP) == (-1, 0)

    def test_starting_coords(self):
        """The snake starts a third of the way into the board."""
        assert Grid(15).starting_coords() == (5, 5)
        assert Grid(10).starting_coords() == (3, 3)

    def test_invalid_size(self):
        """A board needs at least one cell."""
        with pytest.raises(ValueError):
            Grid(0)


class TestSnakeBody:
    """Tests for the SnakeBody class."""

    def test_single_segment_head_is_tail(self):
        """A one-segment snake has the same head and tail."""
        grid = Grid(15)
        snake = SnakeBody([seg(grid, 5, 5)])
        assert snake.head == snake.tail
        assert len(snake) == 1
        assert 81 in snake

    def test_grow_head_then_release_tail_keeps_length(self):
        """A plain move adds a head and drops the tail."""
        grid = Grid(15)
        snake = SnakeBody([seg(grid, 5, 6), seg(grid, 5, 5)])
        snake.grow_head(seg(grid, 5, 7))
        released = snake.release_tail()

        assert released == seg(grid, 5, 5)
        assert snake.coords() == [(5, 7), (5, 6)]
        assert snake.cells == {grid.cell_at(5, 7), grid.cell_at(5, 6)}

    def test_release_tail_on_single_segment_keeps_it(self):
        """Releasing the tail of a one-segment body leaves the segment in place."""
        grid = Grid(15)
        snake = SnakeBody([seg(grid, 5, 5)])
        snake.release_tail()
        assert snake.coords() == [(5, 5)]
        assert 81 in snake

    def test_grow_tail_appends_behind_tail(self):
        """grow_tail adds a new last segment."""
        grid = Grid(15)
        snake = SnakeBody([seg(grid, 5, 6), seg(grid, 5, 5)])
        snake.grow_tail(seg(grid, 5, 4))
        assert snake.coords() == [(5, 6), (5, 5), (5, 4)]
        assert snake.tail == seg(grid, 5, 4)

    def test_reverse_swaps_head_and_tail(self):
        """reverse turns the body end for end."""
        grid = Grid(15)
        snake = SnakeBody([seg(grid, 5, 7), seg(grid, 5, 6), seg(grid, 6, 6)])
        snake.reverse()
        assert snake.coords() == [(6, 6), (5, 6), (5, 7)]
        assert snake.head == seg(grid, 6, 6)
        assert snake.tail == seg(grid, 5, 7)

    def test_tail_direction(self):
        """tail_direction points from the tail to the next segment."""
        grid = Grid(15)
        snake = SnakeBody([seg(grid, 4, 6), seg(grid, 5, 6), seg(grid, 5, 5)])
        assert snake.tail_direction(UP) == RIGHT

        vertical = SnakeBody([seg(grid, 3, 2), seg(grid, 4, 2)])
        assert vertical.tail_direction(LEFT) == UP

    def test_tail_direction_single_segment_uses_fallback(self):
        """With no neighbour the fallback direction is returned."""
        grid = Grid(15)
        snake = SnakeBody([seg(grid, 5, 5)])
        assert snake.tail_direction(LEFT) == LEFT

    def test_duplicate_cells_rejected(self):
        """A body never holds the same cell twice."""
        grid = Grid(15)
        with pytest.raises(ValueError):
            SnakeBody([seg(grid, 5, 5), seg(grid, 5, 5)])

        snake = SnakeBody([seg(grid, 5, 6), seg(grid, 5, 5)])
        with pytest.raises(ValueError):
            snake.grow_head(seg(grid, 5, 5))
        with pytest.raises(ValueError):
            snake.grow_tail(seg(grid, 5, 6))

    def test_empty_body_rejected(self):
        """A snake needs at least one segment."""
        with pytest.raises(ValueError):
            SnakeBody([])


class TestObstacles:
    """Tests for obstacle generation."""

    def test_level_two_count_on_default_board(self):
        """Level 2 on a 15x15 board places max(8, floor(0.08 * 225)) == 18 obstacles."""
        grid = Grid(15)
        assert obstacle_count(grid, 2) == 18

        obstacles = obstacles_for_level(grid, 2, avoid_cell=81, rng=random.Random(3))
        assert len(obstacles) == 18
        assert 81 not in obstacles
        assert all(1 <= cell <= 225 for cell in obstacles)

    def test_level_one_has_no_obstacles(self):
        """Level 1 is an open board."""
        grid = Grid(15)
        assert obstacle_count(grid, 1) == 0
        assert obstacles_for_level(grid, 1, avoid_cell=81) == frozenset()

    def test_minimum_obstacle_count(self):
        """Small boards still get at least 8 obstacles on level 2."""
        assert obstacle_count(Grid(5), 2) == 8

    def test_unknown_level(self):
        """Only levels 1 and 2 exist."""
        with pytest.raises(ValueError):
            obstacle_count(Grid(15), 3)

    def test_avoid_cell_never_used(self):
        """The avoided cell stays free even when nearly every cell is taken."""
        grid = Grid(3)
        for seed in range(20):
            obstacles = generate_obstacles(grid, 7, avoid_cell=5, rng=random.Random(seed))
            assert len(obstacles) == 7
            assert 5 not in obstacles

    def test_impossible_count_rejected(self):
        """Asking for too many obstacles fails instead of looping forever."""
        with pytest.raises(ValueError):
            generate_obstacles(Grid(3), 8, avoid_cell=5)

    def test_deterministic_with_seed(self):
        """The same seed gives the same obstacles."""
        grid = Grid(15)
        first = generate_obstacles(grid, 18, 81, random.Random(11))
        second = generate_obstacles(grid, 18, 81, random.Random(11))
        assert first == second


class TestFoodSpawner:
    """Tests for the FoodSpawner class."""

    def test_spawn_avoids_blocked_cells(self):
        """Food never lands on the snake, an obstacle or the previous food cell."""
        grid = Grid(4)
        spawner = FoodSpawner(grid, random.Random(5))
        occupied = {1, 2, 3, 4, 5}
        obstacles = {6, 7, 8}
        for _ in range(200):
            food = spawner.spawn(occupied, obstacles, previous_food_cell=9)
            assert food.cell not in occupied
            assert food.cell not in obstacles
            assert food.cell != 9
            assert 1 <= food.cell <= 16

    def test_reversal_probability(self):
        """The reversal flag follows the configured probability."""
        grid = Grid(15)
        always = FoodSpawner(grid, random.Random(1), reversal_probability=1.0)
        never = FoodSpawner(grid, random.Random(1), reversal_probability=0.0)
        assert always.spawn({81}, set()).reverses is True
        assert never.spawn({81}, set()).reverses is False

    def test_reversal_rate_is_roughly_thirty_percent(self):
        """About 30% of spawned food reverses the snake."""
        spawner = FoodSpawner(Grid(15), random.Random(2))
        flags = [spawner.spawn({81}, set()).reverses for _ in range(2000)]
        assert 0.25 < sum(flags) / len(flags) < 0.35

    def test_fallback_scan_after_max_attempts(self):
        """With a capped loop the spawner picks among the free cells directly."""
        grid = Grid(3)
        spawner = FoodSpawner(grid, random.Random(0), max_attempts=0)
        food = spawner.spawn(occupied={1, 2, 3, 4, 5, 6, 7}, obstacles={8})
        assert food.cell == 9

    def test_full_board_raises(self):
        """No free cell left means BoardFullError."""
        grid = Grid(2)
        spawner = FoodSpawner(grid, random.Random(0))
        with pytest.raises(BoardFullError):
            spawner.spawn(occupied={1, 2}, obstacles={3}, previous_food_cell=4)


class TestGameState:
    """Tests for the GameState class."""

    def make_state(self):
        grid = Grid(5)
        snake = SnakeBody([seg(grid, 1, 2), seg(grid, 1, 1)])
        return GameState(
            grid=grid,
            snake=snake,
            food=FoodState(cell=grid.cell_at(3, 3), reverses=False),
            obstacles=frozenset({grid.cell_at(4, 0)}),
            direction=RIGHT,
            level=2,
        )

    def test_initial_values(self):
        """A new state has no score and is still running."""
        state = self.make_state()
        assert state.score == 0
        assert state.game_over is False
        assert state.death_reason is None
        assert state.pending_direction is None
        assert state.tick_number == 0

    def test_cell_kind(self):
        """Cells are classified as snake, food, obstacle or empty."""
        state = self.make_state()
        grid = state.grid
        assert state.cell_kind(grid.cell_at(1, 2)) == SNAKE
        assert state.cell_kind(grid.cell_at(3, 3)) == FOOD
        assert state.cell_kind(grid.cell_at(4, 0)) == OBSTACLE
        assert state.cell_kind(grid.cell_at(0, 0)) == EMPTY

        state.food = FoodState(cell=grid.cell_at(3, 3), reverses=True)
        assert state.cell_kind(grid.cell_at(3, 3)) == FOOD_REVERSING

    def test_snake_masks_food_and_obstacles(self):
        """Snake has the highest paint precedence, then food, then obstacles."""
        state = self.make_state()
        grid = state.grid
        head_cell = grid.cell_at(1, 2)
        state.food = FoodState(cell=head_cell)
        state.obstacles = frozenset({head_cell, grid.cell_at(3, 3)})
        assert state.cell_kind(head_cell) == SNAKE

        state.food = FoodState(cell=grid.cell_at(3, 3))
        assert state.cell_kind(grid.cell_at(3, 3)) == FOOD

    def test_print_board(self):
        """The text board marks the head, body, food and obstacles."""
        state = self.make_state()
        board = state.print_board()
        lines = board.split('\n')

        assert len(lines) == 6
        assert lines[1] == " 1 . o H . ."
        assert lines[3] == " 3 . . . F ."
        assert lines[4] == " 4 # . . . ."
        assert lines[-1] == "   0 1 2 3 4"

    def test_outcome(self):
        """outcome() reports what the renderer needs."""
        state = self.make_state()
        outcome = state.outcome()
        assert outcome.occupied_cells == {state.grid.cell_at(1, 2), state.grid.cell_at(1, 1)}
        assert outcome.head_coords == (1, 2)
        assert outcome.score == 0
        assert outcome.game_over is False

    def test_repr(self):
        """GameState has a useful string representation."""
        repr_str = repr(self.make_state())
        assert "level=2" in repr_str
        assert "length=2" in repr_str
