"""
Grid entity - maps board cells to coordinates and back.
"""

from typing import Iterator, Tuple

from .constants import BOARD_SIZE, DELTAS


class Grid:
    """
    An immutable N x N board.

    Cells are numbered 1..N*N in row-major order, so (0, 0) is cell 1 and
    (N-1, N-1) is cell N*N.
    """

    def __init__(self, size: int = BOARD_SIZE):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}.")
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    @property
    def cell_count(self) -> int:
        return self._size * self._size

    def cell_at(self, row: int, col: int) -> int:
        return row * self._size + col + 1

    def coords_of(self, cell: int) -> Tuple[int, int]:
        return divmod(cell - 1, self._size)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._size and 0 <= col < self._size

    def coords_in_direction(self, row: int, col: int, direction: str) -> Tuple[int, int]:
        """Neighbouring coordinates one step away; may fall off the board."""
        d_row, d_col = DELTAS[direction]
        return row + d_row, col + d_col

    def starting_coords(self) -> Tuple[int, int]:
        """Where a new snake spawns: one third of the way into the board."""
        start = round(self._size / 3)
        return start, start

    def cells(self) -> Iterator[int]:
        return iter(range(1, self.cell_count + 1))

    def __eq__(self, other):
        return isinstance(other, Grid) and other._size == self._size

    def __hash__(self):
        return hash(self._size)

    def __repr__(self):
        return f"<Grid {self._size}x{self._size}>"
