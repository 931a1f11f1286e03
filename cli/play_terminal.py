"""
Interactive terminal front end for the snake game.

Shows the level selection screen, reads the arrow keys (or WASD) while the
game runs at a fixed tick rate, paints the board and offers New Game / Exit
once the snake crashes.

Keys:
    arrows / WASD   steer
    n               new game (after game over)
    x               back to level selection
    q               quit
"""

import curses
import logging
import time
from typing import Optional

from domain.constants import EMPTY, FOOD, FOOD_REVERSING, LEVELS, OBSTACLE, SNAKE
from players.keyboard import get_direction_from_key

logger = logging.getLogger(__name__)

CELL_GLYPHS = {
    EMPTY: ' .',
    SNAKE: '[]',
    FOOD: '()',
    FOOD_REVERSING: '<>',
    OBSTACLE: '##',
}

# curses color pair numbers
CELL_COLORS = {
    SNAKE: 1,
    FOOD: 2,
    FOOD_REVERSING: 3,
    OBSTACLE: 4,
}

QUIT = "quit"
EXIT = "exit"


def key_name(key: int) -> Optional[str]:
    """Name of a curses key code ('KEY_UP', 'a', ...), None when no key was read."""
    if key == -1:
        return None
    try:
        return curses.keyname(key).decode()
    except ValueError:
        return None


def _put(stdscr, row: int, col: int, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(row, col, text, attr)
    except curses.error:
        # Text past the edge of a small terminal is dropped
        pass


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.init_pair(CELL_COLORS[SNAKE], curses.COLOR_GREEN, curses.COLOR_BLACK)
    curses.init_pair(CELL_COLORS[FOOD], curses.COLOR_RED, curses.COLOR_BLACK)
    curses.init_pair(CELL_COLORS[FOOD_REVERSING], curses.COLOR_MAGENTA, curses.COLOR_BLACK)
    curses.init_pair(CELL_COLORS[OBSTACLE], curses.COLOR_WHITE, curses.COLOR_BLACK)


def _cell_attr(kind: str) -> int:
    if kind not in CELL_COLORS or not curses.has_colors():
        return 0
    return curses.color_pair(CELL_COLORS[kind])


def draw_board(stdscr, session) -> None:
    state = session.game.state
    grid = state.grid

    stdscr.erase()
    _put(stdscr, 0, 0, f"Level {state.level}   Score: {state.score}   High score: {session.high_score}")
    for row in range(grid.size):
        for col in range(grid.size):
            kind = state.cell_kind(grid.cell_at(row, col))
            _put(stdscr, row + 2, col * 2, CELL_GLYPHS[kind], _cell_attr(kind))
    _put(stdscr, grid.size + 3, 0, "arrows/WASD steer   x exit   q quit")
    stdscr.refresh()


def draw_game_over(stdscr, session) -> None:
    state = session.game.state
    top = state.grid.size // 2
    _put(stdscr, top, 2, "  Game Over  ", curses.A_REVERSE)
    _put(stdscr, top + 1, 2, f"  Score: {state.score}  ")
    _put(stdscr, top + 2, 2, f"  Highest Score: {session.high_score}  ")
    _put(stdscr, top + 3, 2, "  [n] New Game   [x] Exit  ")
    stdscr.refresh()


def select_level(stdscr) -> Optional[int]:
    """Level selection screen. Returns the chosen level, or None to quit."""
    stdscr.timeout(-1)
    stdscr.erase()
    _put(stdscr, 1, 2, "Snake Game", curses.A_BOLD)
    _put(stdscr, 3, 2, "Choose a level to begin")
    for offset, level in enumerate(sorted(LEVELS)):
        label = "obstacles" if LEVELS[level] else "open board"
        _put(stdscr, 5 + offset, 4, f"[{level}] Level {level} ({label})")
    _put(stdscr, 6 + len(LEVELS), 2, "Tip: use the arrow keys to control the snake   [q] quit")
    stdscr.refresh()

    while True:
        name = key_name(stdscr.getch())
        if name in ("q", "Q"):
            return None
        if name and name.isdigit() and int(name) in LEVELS:
            return int(name)


def run_level(stdscr, session, tick_ms: int) -> str:
    """
    Play games on the session's level until the player exits or quits.

    Returns:
        EXIT to go back to level selection, QUIT to leave.
    """
    interval = tick_ms / 1000
    while True:
        game = session.game
        draw_board(stdscr, session)
        next_tick = time.monotonic() + interval

        while not game.game_over:
            remaining = next_tick - time.monotonic()
            if remaining <= 0:
                session.tick()
                next_tick += interval
                draw_board(stdscr, session)
                continue

            stdscr.timeout(max(1, int(remaining * 1000)))
            name = key_name(stdscr.getch())
            if name in ("q", "Q"):
                return QUIT
            if name in ("x", "X"):
                return EXIT
            direction = get_direction_from_key(name)
            if direction is not None:
                game.request_direction(direction)

        # The timer stops while the game-over screen is up
        draw_game_over(stdscr, session)
        stdscr.timeout(-1)
        while True:
            name = key_name(stdscr.getch())
            if name in ("q", "Q"):
                return QUIT
            if name in ("x", "X"):
                return EXIT
            if name in ("n", "N"):
                session.new_game()
                break


def _main_loop(stdscr, session, tick_ms: int, level: Optional[int]) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal cannot hide the cursor")
    stdscr.keypad(True)
    _init_colors()

    while True:
        if level is None:
            level = select_level(stdscr)
            if level is None:
                return

        session.select_level(level)
        action = run_level(stdscr, session, tick_ms)
        session.exit_to_level_select()
        if action == QUIT:
            return
        level = None


def play(session, tick_ms: int = 150, level: Optional[int] = None) -> None:
    """Run the interactive game until the player quits."""
    curses.wrapper(_main_loop, session, tick_ms, level)
