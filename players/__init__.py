"""
Player implementations for the snake game.

This module contains the input side of the game: the autopilot player
abstraction and the keyboard key map.
"""

from .base import Player
from .random_player import RandomPlayer
from .keyboard import KEY_BINDINGS, get_direction_from_key

__all__ = [
    'Player',
    'RandomPlayer',
    'KEY_BINDINGS',
    'get_direction_from_key',
]
