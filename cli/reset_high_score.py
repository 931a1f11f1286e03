#!/usr/bin/env python3
"""
Reset the stored high score.

Usage:
    python cli/reset_high_score.py [--confirm]
"""

import os
import sys
import argparse

from dotenv import load_dotenv

# Add parent directory to path to import database modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from database import get_database_path  # noqa: E402
from data_access import read_high_score, write_high_score  # noqa: E402


def reset_high_score(confirm: bool = False) -> bool:
    """
    Set the stored high score back to zero.

    Args:
        confirm: If True, skip confirmation prompt

    Returns:
        True if reset was successful, False otherwise
    """
    current = read_high_score()

    if not confirm:
        print(f"Database path: {get_database_path()}")
        print(f"Current high score: {current if current is not None else 'none'}")
        response = input("\nType 'RESET' to confirm: ")

        if response != 'RESET':
            print("Reset cancelled")
            return False

    if not write_high_score(0):
        print("Error resetting high score (see log for details)")
        return False

    print("High score reset to 0")
    return True


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Reset the stored high score"
    )
    parser.add_argument(
        '--confirm',
        action='store_true',
        help="Skip confirmation prompt"
    )

    args = parser.parse_args()

    success = reset_high_score(confirm=args.confirm)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
