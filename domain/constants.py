"""
Game constants for the grid snake engine.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITE = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# (row_delta, col_delta); rows grow downward
DELTAS = {
    UP: (-1, 0),
    RIGHT: (0, 1),
    DOWN: (1, 0),
    LEFT: (0, -1),
}

# Game settings
BOARD_SIZE = 15
STARTING_DIRECTION = RIGHT
INITIAL_FOOD_OFFSET = 5
PROBABILITY_OF_DIRECTION_REVERSAL_FOOD = 0.3

# Levels: level 2 turns obstacles on
LEVELS = {1: False, 2: True}
MIN_OBSTACLES = 8
OBSTACLE_DENSITY = 0.08

# Cell kinds reported to renderers
EMPTY = "empty"
SNAKE = "snake"
FOOD = "food"
FOOD_REVERSING = "food-reversing"
OBSTACLE = "obstacle"

# Death reasons
WALL = "wall"
SELF = "self"
OBSTACLE_HIT = "obstacle"
BOARD_FULL = "board_full"


def opposite(direction: str) -> str:
    """Return the direction pointing the other way."""
    return OPPOSITE[direction]
