"""
Data access layer for the snake game's persistent state.

The only thing kept across sessions is a single integer high score.
"""

from .high_scores import read_high_score, write_high_score

__all__ = [
    'read_high_score',
    'write_high_score',
]
