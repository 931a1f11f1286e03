"""
Domain entities for the grid snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (terminal, database, etc.).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITE, opposite
from .grid import Grid
from .snake import Segment, SnakeBody
from .game_state import FoodState, GameState, TickOutcome
from .food import BoardFullError, FoodSpawner
from .obstacles import generate_obstacles, obstacle_count, obstacles_for_level

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITE', 'opposite',
    'Grid',
    'Segment',
    'SnakeBody',
    'FoodState',
    'GameState',
    'TickOutcome',
    'BoardFullError',
    'FoodSpawner',
    'generate_obstacles',
    'obstacle_count',
    'obstacles_for_level',
]
