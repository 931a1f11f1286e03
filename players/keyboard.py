"""
Keyboard input - turns key names into directions.
"""

from typing import Optional

from domain.constants import UP, DOWN, LEFT, RIGHT


# Browser-style names, curses key names and WASD
KEY_BINDINGS = {
    'ArrowUp': UP,
    'ArrowRight': RIGHT,
    'ArrowDown': DOWN,
    'ArrowLeft': LEFT,
    'KEY_UP': UP,
    'KEY_RIGHT': RIGHT,
    'KEY_DOWN': DOWN,
    'KEY_LEFT': LEFT,
    'w': UP,
    'd': RIGHT,
    's': DOWN,
    'a': LEFT,
}


def get_direction_from_key(key: Optional[str]) -> Optional[str]:
    """Map a key name to a direction, or None if the key is not bound."""
    if not key:
        return None
    if len(key) == 1:
        key = key.lower()
    return KEY_BINDINGS.get(key)
