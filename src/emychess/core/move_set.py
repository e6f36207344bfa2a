"""Ordered, capacity-bounded collection of move destinations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from emychess.core.types import GRID_LENGTH, Coord, is_valid_coordinate, square_name

MAX_MOVES = GRID_LENGTH


class MoveSet:
    """Destinations a piece may move to.

    Semantically a set: adding an off-board coordinate, a duplicate, or
    anything past :data:`MAX_MOVES` entries is a silent no-op. Removal keeps
    the remaining entries in insertion order.
    """

    __slots__ = ("_moves",)

    def __init__(self, moves: Iterable[Coord] = ()) -> None:
        self._moves: list[Coord] = []
        for move in moves:
            self.add(move)

    def add(self, move: Coord) -> bool:
        """Append *move*; returns whether it was stored."""
        if not is_valid_coordinate(move.file, move.rank):
            return False
        if len(self._moves) >= MAX_MOVES or move in self._moves:
            return False
        self._moves.append(Coord(move.file, move.rank))
        return True

    def discard(self, move: Coord) -> None:
        if move in self._moves:
            self._moves.remove(move)

    def copy(self) -> MoveSet:
        clone = MoveSet()
        clone._moves = self._moves.copy()
        return clone

    def __contains__(self, move: object) -> bool:
        return move in self._moves

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._moves)

    def __len__(self) -> int:
        return len(self._moves)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MoveSet):
            return NotImplemented
        return set(self._moves) == set(other._moves)

    def __repr__(self) -> str:
        return f"MoveSet({', '.join(square_name(m) for m in self._moves)})"
