"""
Snake entity for the game engine.
"""

from collections import deque
from typing import FrozenSet, Iterable, Iterator, List, NamedTuple, Tuple

from .constants import DELTAS


class Segment(NamedTuple):
    """One occupied board position."""
    row: int
    col: int
    cell: int


class SnakeBody:
    """
    Represents the snake's body on the board.

    Attributes:
        segments: deque of Segment from head at index 0 to tail at the end
        cells: set of occupied cells, kept in step with segments

    The body only changes through grow_head, release_tail, grow_tail and
    reverse. Every pair of neighbouring segments is one grid step apart and
    no cell appears twice.
    """

    def __init__(self, segments: Iterable[Segment]):
        self.segments = deque(segments)
        if not self.segments:
            raise ValueError("A snake needs at least one segment.")
        self._cells = {segment.cell for segment in self.segments}
        if len(self._cells) != len(self.segments):
            raise ValueError("Snake segments must not overlap.")

    @property
    def head(self) -> Segment:
        """Return the head position (first element)."""
        return self.segments[0]

    @property
    def tail(self) -> Segment:
        """Return the tail position (last element)."""
        return self.segments[-1]

    @property
    def cells(self) -> FrozenSet[int]:
        return frozenset(self._cells)

    def grow_head(self, segment: Segment) -> None:
        if segment.cell in self._cells:
            raise ValueError(f"Cell {segment.cell} is already part of the snake.")
        self.segments.appendleft(segment)
        self._cells.add(segment.cell)

    def release_tail(self) -> Segment:
        """
        Detach the tail and return it.

        On a body of length 1 the head is the tail, so the snake keeps its
        only segment; release_tail always follows grow_head in a move.
        """
        if len(self.segments) == 1:
            return self.segments[0]
        tail = self.segments.pop()
        self._cells.discard(tail.cell)
        return tail

    def grow_tail(self, segment: Segment) -> None:
        if segment.cell in self._cells:
            raise ValueError(f"Cell {segment.cell} is already part of the snake.")
        self.segments.append(segment)
        self._cells.add(segment.cell)

    def reverse(self) -> None:
        """Swap head and tail by reversing the traversal order in place."""
        self.segments.reverse()

    def tail_direction(self, fallback: str) -> str:
        """
        Direction of travel from the tail toward its neighbour.

        A single-segment snake has no neighbour, so `fallback` (normally the
        current heading) is returned.
        """
        if len(self.segments) < 2:
            return fallback
        tail = self.segments[-1]
        neighbour = self.segments[-2]
        step = (neighbour.row - tail.row, neighbour.col - tail.col)
        for direction, delta in DELTAS.items():
            if delta == step:
                return direction
        raise ValueError(f"Tail {tail} is not adjacent to {neighbour}.")

    def coords(self) -> List[Tuple[int, int]]:
        return [(segment.row, segment.col) for segment in self.segments]

    def __contains__(self, cell) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __repr__(self):
        return f"<SnakeBody len={len(self.segments)} head={self.head} tail={self.tail}>"
