import argparse
import json
import logging
import os
import random
import time
from typing import Callable, Dict, Optional

from dotenv import load_dotenv

from data_access import read_high_score, write_high_score
from domain.constants import (
    BOARD_FULL,
    BOARD_SIZE,
    INITIAL_FOOD_OFFSET,
    LEVELS,
    OBSTACLE_HIT,
    SELF,
    STARTING_DIRECTION,
    VALID_MOVES,
    WALL,
    opposite,
)
from domain.food import BoardFullError, FoodSpawner
from domain.game_state import FoodState, GameState, TickOutcome
from domain.grid import Grid
from domain.obstacles import obstacle_count, obstacles_for_level
from domain.snake import Segment, SnakeBody
from players import Player, RandomPlayer

load_dotenv()

LOG_LEVEL = os.getenv("SNAKE_LOG_LEVEL", "INFO")
DEFAULT_BOARD_SIZE = int(os.getenv("SNAKE_BOARD_SIZE", BOARD_SIZE))
DEFAULT_TICK_MS = int(os.getenv("SNAKE_TICK_MS", "150"))

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Runs one game:
      - Board (N x N grid)
      - Snake body
      - Food and its reversal flag
      - Obstacles for the level
      - Score
      - Ticks

    The game owns its GameState; everything outside talks to it through
    request_direction() and tick().
    """
    def __init__(
        self,
        board_size: int = BOARD_SIZE,
        level: int = 1,
        rng: Optional[random.Random] = None,
        food_max_attempts: Optional[int] = None,
    ):
        if level not in LEVELS:
            raise ValueError(f"Unknown level {level}. Available levels: {sorted(LEVELS)}")
        if board_size < 2:
            raise ValueError(f"Board size must be at least 2, got {board_size}.")

        self.grid = Grid(board_size)
        self.rng = rng or random.Random()
        self.food_spawner = FoodSpawner(self.grid, self.rng, max_attempts=food_max_attempts)

        start_row, start_col = self.grid.starting_coords()
        start = Segment(start_row, start_col, self.grid.cell_at(start_row, start_col))
        snake = SnakeBody([start])
        obstacles = obstacles_for_level(self.grid, level, start.cell, self.rng)

        self.state = GameState(
            grid=self.grid,
            snake=snake,
            food=self._initial_food(snake, obstacles),
            obstacles=obstacles,
            direction=STARTING_DIRECTION,
            level=level,
        )
        logger.info(
            "New game: level %s, %sx%s board, start %s, %s obstacles",
            level, board_size, board_size, (start_row, start_col), len(obstacles),
        )

    def _initial_food(self, snake: SnakeBody, obstacles) -> FoodState:
        # The first food sits a few cells to the right of the start
        cell = snake.head.cell + INITIAL_FOOD_OFFSET
        if cell <= self.grid.cell_count and cell not in obstacles and cell not in snake:
            return FoodState(cell=cell, reverses=False)
        return self.food_spawner.spawn(snake.cells, obstacles)

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def score(self) -> int:
        return self.state.score

    def request_direction(self, direction: str) -> bool:
        """
        Ask for a new direction, applied on the next tick.

        A request for the exact opposite of the current heading is refused
        while the snake is longer than one segment. An accepted request
        replaces any earlier one that has not been applied yet.

        Returns:
            True if the request was accepted.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction!r}")

        state = self.state
        if state.game_over:
            return False
        if direction == opposite(state.direction) and len(state.snake) > 1:
            logger.debug("Ignoring %s: the snake would run into itself", direction)
            return False

        state.pending_direction = direction
        return True

    def tick(self, direction: Optional[str] = None) -> TickOutcome:
        """
        Advance the snake by one cell.

          1) Pick the direction (argument, else pending request, else current)
          2) Compute the next head position
          3) Stop on wall, body or obstacle collision
          4) Move: new head in, tail out
          5) On food: grow, maybe reverse, respawn food, score
        """
        state = self.state
        if state.game_over:
            logger.info("Game is already over. No more ticks.")
            return state.outcome()

        if direction is None:
            direction = state.pending_direction or state.direction
        elif direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction!r}")
        state.pending_direction = None
        state.direction = direction
        state.tick_number += 1

        head = state.snake.head
        next_row, next_col = self.grid.coords_in_direction(head.row, head.col, direction)
        if not self.grid.in_bounds(next_row, next_col):
            return self._end_game(WALL)

        # Collision checks run against the body as it was before this move
        next_cell = self.grid.cell_at(next_row, next_col)
        if next_cell in state.snake:
            return self._end_game(SELF)
        if next_cell in state.obstacles:
            return self._end_game(OBSTACLE_HIT)

        state.snake.grow_head(Segment(next_row, next_col, next_cell))
        state.snake.release_tail()

        if next_cell != state.food.cell:
            return state.outcome()

        reversed_snake = False
        grew = self._grow_snake()
        if state.food.reverses:
            self._reverse_snake()
            reversed_snake = True
        state.score += 1
        logger.debug(
            "Food eaten at %s (score %s, length %s, grew=%s, reversed=%s)",
            (next_row, next_col), state.score, len(state.snake), grew, reversed_snake,
        )

        try:
            state.food = self.food_spawner.spawn(state.snake.cells, state.obstacles, next_cell)
        except BoardFullError:
            return self._end_game(BOARD_FULL, ate_food=True, grew=grew, reversed_snake=reversed_snake)

        return state.outcome(ate_food=True, grew=grew, reversed=reversed_snake)

    def _grow_snake(self) -> bool:
        """Add a segment behind the tail, unless there is no room there."""
        state = self.state
        tail = state.snake.tail
        growth_direction = opposite(state.snake.tail_direction(state.direction))
        row, col = self.grid.coords_in_direction(tail.row, tail.col, growth_direction)

        if not self.grid.in_bounds(row, col):
            logger.debug("No room to grow at %s; skipping growth", (row, col))
            return False
        cell = self.grid.cell_at(row, col)
        if cell in state.snake or cell in state.obstacles:
            logger.debug("Growth cell %s is blocked; skipping growth", cell)
            return False

        state.snake.grow_tail(Segment(row, col, cell))
        return True

    def _reverse_snake(self) -> None:
        """Turn the snake end for end; it leaves by its old tail."""
        state = self.state
        tail_direction = state.snake.tail_direction(state.direction)
        state.direction = opposite(tail_direction)
        state.snake.reverse()

    def _end_game(
        self,
        reason: str,
        ate_food: bool = False,
        grew: bool = False,
        reversed_snake: bool = False,
    ) -> TickOutcome:
        state = self.state
        state.game_over = True
        state.death_reason = reason
        logger.info(
            "Game Over: %s after %s ticks with score %s", reason, state.tick_number, state.score
        )
        return state.outcome(ate_food=ate_food, grew=grew, reversed=reversed_snake)

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.state.print_board() + "\n")


class GameSession:
    """
    One sitting at the game: a level, a sequence of games and the high score.

    The high score is read once when the session starts and written when a
    finished game beats it. Storage failures never reach the game.
    """

    def __init__(
        self,
        board_size: int = BOARD_SIZE,
        seed: Optional[int] = None,
        high_score_reader: Callable[[], Optional[int]] = read_high_score,
        high_score_writer: Callable[[int], object] = write_high_score,
        food_max_attempts: Optional[int] = None,
    ):
        self.board_size = board_size
        self.rng = random.Random(seed)
        self.food_max_attempts = food_max_attempts
        self._write_high_score = high_score_writer
        self.high_score = high_score_reader() or 0
        self.level: Optional[int] = None
        self.game: Optional[SnakeGame] = None
        self._result_recorded = False

    def select_level(self, level: int) -> SnakeGame:
        if level not in LEVELS:
            raise ValueError(f"Unknown level {level}. Available levels: {sorted(LEVELS)}")
        self.level = level
        return self.new_game()

    def new_game(self) -> SnakeGame:
        """Throw away the current game and start a fresh one on the same level."""
        if self.level is None:
            raise ValueError("Select a level before starting a game.")
        self.record_result()
        self.game = SnakeGame(
            board_size=self.board_size,
            level=self.level,
            rng=self.rng,
            food_max_attempts=self.food_max_attempts,
        )
        self._result_recorded = False
        return self.game

    def exit_to_level_select(self) -> None:
        self.record_result()
        self.game = None
        self.level = None

    def tick(self) -> TickOutcome:
        if self.game is None:
            raise ValueError("No game in progress.")
        outcome = self.game.tick()
        if outcome.game_over:
            self.record_result()
        return outcome

    def record_result(self) -> bool:
        """
        Update the high score from a finished game, once per game.

        Returns:
            True if the finished game set a new high score.
        """
        game = self.game
        if game is None or not game.game_over or self._result_recorded:
            return False
        self._result_recorded = True

        if game.score <= self.high_score:
            return False
        self.high_score = game.score
        self._write_high_score(game.score)
        logger.info("New high score: %s", game.score)
        return True


# -------------------------------
# Headless Run
# -------------------------------

def run_game(
    session: GameSession,
    player: Player,
    tick_interval: float = 0.0,
    max_ticks: Optional[int] = None,
    show_board: bool = False,
) -> Dict:
    """
    Plays the session's current game to the end with an autopilot player.

    Args:
        session: A session with a game in progress.
        player: Chooses a direction before every tick.
        tick_interval: Seconds to wait between ticks.
        max_ticks: Stop after this many ticks even if the snake is alive.
        show_board: Print the board after every tick.

    Returns:
        A dictionary summarizing the game (score, length, ticks, death reason).
    """
    game = session.game
    if game is None:
        raise ValueError("No game in progress.")

    ticks = 0
    while not game.game_over and (max_ticks is None or ticks < max_ticks):
        move = player.get_move(game.state)
        if move is not None:
            game.request_direction(move)
        session.tick()
        ticks += 1

        if show_board:
            game.print_board()
        if tick_interval:
            time.sleep(tick_interval)

    return {
        "level": game.state.level,
        "score": game.score,
        "length": len(game.state.snake),
        "ticks": game.state.tick_number,
        "game_over": game.game_over,
        "death_reason": game.state.death_reason,
        "high_score": session.high_score,
    }


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Play snake on a square grid, by keyboard or with the autopilot."
    )
    parser.add_argument("--level", type=int, choices=sorted(LEVELS), default=None,
                        help="1 = open board, 2 = obstacles (interactive mode asks if omitted)")
    parser.add_argument("--board-size", type=int, default=DEFAULT_BOARD_SIZE,
                        help="Cells per side of the board")
    parser.add_argument("--tick-ms", type=int, default=DEFAULT_TICK_MS,
                        help="Milliseconds between ticks")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for food and obstacles")
    parser.add_argument("--autopilot", action="store_true",
                        help="Let the random autopilot play headless instead of the keyboard")
    parser.add_argument("--games", type=int, default=1,
                        help="Number of autopilot games to play")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop an autopilot game after this many ticks")
    parser.add_argument("--show-board", action="store_true",
                        help="Print the board after every autopilot tick")

    args = parser.parse_args()

    if args.board_size < 2:
        parser.error(f"--board-size must be at least 2, got {args.board_size}")
    # Without --level the interactive screen may offer any level
    if args.level is not None:
        levels = [args.level]
    else:
        levels = [1] if args.autopilot else sorted(LEVELS)
    grid = Grid(args.board_size)
    for level in levels:
        count = obstacle_count(grid, level)
        if count >= grid.cell_count - 1:
            parser.error(
                f"--board-size {args.board_size} has no room for the {count} obstacles of level {level}"
            )

    if not args.autopilot:
        # The curses screen owns the terminal, so logs go to a file
        logging.basicConfig(
            filename=os.getenv("SNAKE_LOG_FILE", "snake.log"),
            level=LOG_LEVEL,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )
        from cli.play_terminal import play

        session = GameSession(board_size=args.board_size, seed=args.seed)
        play(session, tick_ms=args.tick_ms, level=args.level)
        return

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    session = GameSession(board_size=args.board_size, seed=args.seed)
    player = RandomPlayer(session.rng)
    results = []
    for _ in range(args.games):
        session.select_level(args.level or 1)
        results.append(run_game(
            session,
            player,
            tick_interval=args.tick_ms / 1000 if args.show_board else 0.0,
            max_ticks=args.max_ticks,
            show_board=args.show_board,
        ))

    print("\nResult Summary:")
    print(json.dumps({"games": results, "high_score": session.high_score}, indent=2))


if __name__ == "__main__":
    main()
