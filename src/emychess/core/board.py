"""Board - live piece placement on an 8x8 grid plus the pieces that own it."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from emychess.core.enums import Color, PieceType
from emychess.core.interfaces import Grid, IBoard
from emychess.core.piece import Piece
from emychess.core.types import (
    BOARD_SIZE,
    GRID_LENGTH,
    Coord,
    grid_index,
    is_valid_coordinate,
    square_name,
)

_LOGGER = logging.getLogger(__name__)

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# ── Event definitions ────────────────────────────────────────────────────────

PieceMovedCallback = Callable[[Piece, Coord], None]
PieceCapturedCallback = Callable[[Piece], None]
ResetCallback = Callable[[], None]


@dataclass
class BoardEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_piece_moved: list[PieceMovedCallback] = field(default_factory=list)
    on_piece_captured: list[PieceCapturedCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


class Board(IBoard):
    """Mutable 64-square board holding references to its :class:`Piece` objects.

    Captured pieces stay registered (with ``alive = False``) until the next
    setup so that references held by callers remain meaningful.
    """

    __slots__ = ("_grid", "_pieces", "_kings", "_double_push_pawn", "events")

    def __init__(self) -> None:
        self._grid: Grid = [None] * GRID_LENGTH
        self._pieces: list[Piece] = []
        self._kings: dict[Color, Piece] = {}
        self._double_push_pawn: Piece | None = None
        self.events = BoardEvents()

    # -- Element access -----------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    def grid_snapshot(self) -> Grid:
        return self._grid.copy()

    def grid_piece(self, file: int, rank: int, grid: Grid) -> Piece | None:
        if not is_valid_coordinate(file, rank):
            return None
        return grid[grid_index(file, rank)]

    def piece_at(self, coord: Coord) -> Piece | None:
        return self.grid_piece(coord.file, coord.rank, self._grid)

    def __getitem__(self, coord: Coord) -> Piece | None:
        return self.piece_at(coord)

    def is_empty(self, coord: Coord) -> bool:
        return self.piece_at(coord) is None

    def is_valid_coordinate(self, file: int, rank: int) -> bool:
        return is_valid_coordinate(file, rank)

    # -- Query helpers ------------------------------------------------------

    def all_living_pieces(self) -> Iterator[Piece]:
        return (p for p in self._pieces if p.alive)

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Piece]:
        """Living pieces of *color*, optionally restricted to *piece_type*."""
        return [
            p
            for p in self.all_living_pieces()
            if p.color == color and (piece_type is None or p.piece_type == piece_type)
        ]

    def king_of(self, color: Color) -> Piece | None:
        king = self._kings.get(color)
        if king is None or not king.alive:
            return None
        return king

    @property
    def double_push_pawn(self) -> Piece | None:
        return self._double_push_pawn

    @double_push_pawn.setter
    def double_push_pawn(self, pawn: Piece | None) -> None:
        self._double_push_pawn = pawn

    # -- Mutation -----------------------------------------------------------

    def add_piece(self, piece: Piece) -> Piece:
        """Register *piece* and put it on its own square."""
        idx = grid_index(piece.file, piece.rank)
        if self._grid[idx] is not None:
            raise ValueError(f"Square {square_name(piece.coord)} is already occupied")
        self._grid[idx] = piece
        self._pieces.append(piece)
        if piece.piece_type == PieceType.KING:
            self._kings[piece.color] = piece
        return piece

    def set_position(self, piece: Piece, coord: Coord) -> None:
        occupant = self.piece_at(coord)
        if occupant is not None and occupant is not piece:
            raise ValueError(
                f"Cannot place {piece!r} on {square_name(coord)}: "
                f"occupied by {occupant!r}"
            )
        old_idx = grid_index(piece.file, piece.rank)
        if self._grid[old_idx] is piece:
            self._grid[old_idx] = None
        piece.file, piece.rank = coord
        self._grid[grid_index(coord.file, coord.rank)] = piece
        for cb in self.events.on_piece_moved:
            cb(piece, coord)

    def move_in_snapshot(self, from_coord: Coord, to_coord: Coord, grid: Grid) -> None:
        if from_coord == to_coord:
            return
        from_idx = grid_index(from_coord.file, from_coord.rank)
        grid[grid_index(to_coord.file, to_coord.rank)] = grid[from_idx]
        grid[from_idx] = None

    def capture(self, piece: Piece) -> None:
        idx = grid_index(piece.file, piece.rank)
        if self._grid[idx] is piece:
            self._grid[idx] = None
        piece.alive = False
        for cb in self.events.on_piece_captured:
            cb(piece)

    # -- Setup / copying ----------------------------------------------------

    def clear(self) -> None:
        self._grid = [None] * GRID_LENGTH
        self._pieces = []
        self._kings = {}
        self._double_push_pawn = None

    def load_placement(self, placement: str) -> None:
        """Replace every piece with the FEN piece-placement field *placement*.

        Pawns standing off their starting rank are marked as having moved.
        """
        ranks = placement.split("/")
        if len(ranks) != BOARD_SIZE:
            raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")

        pieces: list[Piece] = []
        for rank_idx, rank_text in enumerate(ranks):
            rank = 7 - rank_idx
            file = 0
            for ch in rank_text:
                if ch.isdigit():
                    step = int(ch)
                    if not (1 <= step <= 8):
                        raise ValueError(
                            f"Invalid placement digit {ch!r}: {placement!r}"
                        )
                    file += step
                else:
                    if file >= 8:
                        raise ValueError(f"Invalid placement rank width: {placement!r}")
                    piece = Piece.from_char(ch, file, rank)
                    if piece.piece_type == PieceType.PAWN:
                        piece.has_moved = rank != piece.color.pawn_rank
                    pieces.append(piece)
                    file += 1
                if file > 8:
                    raise ValueError(f"Invalid placement rank width: {placement!r}")
            if file != 8:
                raise ValueError(f"Invalid placement rank width: {placement!r}")

        self.clear()
        for piece in pieces:
            self.add_piece(piece)
        _LOGGER.debug("Board loaded: %s", placement)
        for cb in self.events.on_reset:
            cb()

    def reset(self) -> None:
        """Standard starting position with all transient state cleared."""
        self.load_placement(STARTING_PLACEMENT)

    def copy(self) -> Board:
        """Deep copy with fresh pieces; the double-push reference is remapped.

        Observers are not copied.
        """
        b = Board()
        clones: dict[int, Piece] = {}
        for piece in self._pieces:
            clone = Piece(
                piece.color,
                piece.piece_type,
                piece.file,
                piece.rank,
                piece.has_moved,
                piece.alive,
            )
            clones[id(piece)] = clone
            b._pieces.append(clone)
            if piece.alive and self._grid[grid_index(piece.file, piece.rank)] is piece:
                b._grid[grid_index(piece.file, piece.rank)] = clone
        for color, king in self._kings.items():
            b._kings[color] = clones[id(king)]
        if self._double_push_pawn is not None:
            b._double_push_pawn = clones.get(id(self._double_push_pawn))
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        b.reset()
        return b

    @classmethod
    def from_placement(cls, placement: str) -> Board:
        b = cls()
        b.load_placement(placement)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._grid[grid_index(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
