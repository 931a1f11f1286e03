"""
Database configuration and schema management for the high score store.

This module provides database connection management with environment-aware
path selection and schema initialization.
"""

import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """
    Determine the SQLite database path.

    Returns:
        Path to the SQLite database file.
        - SNAKE_DB_PATH if set (parent directories are created)
        - otherwise snake.db next to this module
    """
    db_path = os.getenv('SNAKE_DB_PATH')
    if db_path:
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        return db_path

    return str(Path(__file__).parent / 'snake.db')


def get_connection() -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    db_path = get_database_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def init_database() -> None:
    """
    Initialize the database schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    logger.debug("Initializing database at: %s", get_database_path())

    conn = get_connection()
    cursor = conn.cursor()

    try:
        # One row only: the best score ever reached
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS high_score (
                id INTEGER PRIMARY KEY CHECK(id = 1),
                score INTEGER NOT NULL DEFAULT 0 CHECK(score >= 0),
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()
        conn.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
    print(f"Database ready at {get_database_path()}")
