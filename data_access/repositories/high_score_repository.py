"""
High score repository for the single-row high_score table.
"""

from typing import Optional

from .base import BaseRepository


class HighScoreRepository(BaseRepository):
    """
    Repository for high_score table operations.
    """

    def get(self) -> Optional[int]:
        """
        Get the stored high score.

        Returns:
            The score, or None if nothing has been stored yet
        """
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT score FROM high_score WHERE id = 1")
            row = cursor.fetchone()
            if row is None:
                return None
            return int(row["score"])

    def set(self, score: int) -> None:
        """
        Store a new high score, replacing the old one.

        Args:
            score: Non-negative score to store
        """
        if score < 0:
            raise ValueError(f"High score cannot be negative: {score}")

        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO high_score (id, score, updated_at)
                VALUES (1, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(id) DO UPDATE SET
                    score = excluded.score,
                    updated_at = excluded.updated_at
            """, (score,))
