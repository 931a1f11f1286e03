"""
Best-effort high score persistence.

These functions delegate to the HighScoreRepository. Storage problems are
logged and swallowed so a broken database never interrupts a game.
"""

import logging
import sqlite3
from typing import Optional

from .repositories import HighScoreRepository

logger = logging.getLogger(__name__)

# Repository instance
_high_score_repo = HighScoreRepository()


def read_high_score() -> Optional[int]:
    """
    Read the stored high score.

    Returns:
        The stored score, or None if none is stored or storage is unavailable.
    """
    try:
        return _high_score_repo.get()
    except (sqlite3.Error, OSError) as e:
        logger.warning("Could not read high score: %s", e)
        return None


def write_high_score(score: int) -> bool:
    """
    Store a new high score.

    Args:
        score: The score to store

    Returns:
        True if the score was written, False if storage failed.
    """
    try:
        _high_score_repo.set(score)
    except (sqlite3.Error, OSError) as e:
        logger.warning("Could not write high score %s: %s", score, e)
        return False
    return True
