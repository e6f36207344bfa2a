"""Abstract board contract consumed by the rules.

Follows Dependency Inversion: :class:`~emychess.core.rules.Rules` and
:class:`~emychess.core.move_generator.MoveGenerator` depend on this ABC, not
on the concrete :class:`~emychess.core.board.Board`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from emychess.core.enums import Color
    from emychess.core.piece import Piece
    from emychess.core.types import Coord

Grid: TypeAlias = "list[Piece | None]"  # 64 squares, rank * 8 + file


class IBoard(ABC):
    """Interface for the 8x8 board the rules operate on."""

    # ── Lookup ───────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def grid(self) -> Grid:
        """The live grid. Callers must not mutate it."""

    @abstractmethod
    def grid_snapshot(self) -> Grid:
        """A private copy of the live grid (pieces are shared, not copied)."""

    @abstractmethod
    def grid_piece(self, file: int, rank: int, grid: Grid) -> Piece | None:
        """Piece at (file, rank) in *grid*; ``None`` when empty or off-board."""

    @abstractmethod
    def piece_at(self, coord: Coord) -> Piece | None:
        """Piece at *coord* on the live grid."""

    @abstractmethod
    def all_living_pieces(self) -> Iterator[Piece]:
        """Every piece not yet captured."""

    @abstractmethod
    def is_valid_coordinate(self, file: int, rank: int) -> bool: ...

    @abstractmethod
    def king_of(self, color: Color) -> Piece | None:
        """The living king of *color*, ``None`` before setup."""

    @property
    @abstractmethod
    def double_push_pawn(self) -> Piece | None:
        """Pawn that advanced two ranks on the previous move."""

    @double_push_pawn.setter
    @abstractmethod
    def double_push_pawn(self, pawn: Piece | None) -> None: ...

    # ── Mutation ─────────────────────────────────────────────────────────

    @abstractmethod
    def set_position(self, piece: Piece, coord: Coord) -> None:
        """Relocate *piece* on the live grid and notify observers."""

    @abstractmethod
    def move_in_snapshot(self, from_coord: Coord, to_coord: Coord, grid: Grid) -> None:
        """Move whatever stands on *from_coord* to *to_coord* inside *grid*."""

    @abstractmethod
    def capture(self, piece: Piece) -> None:
        """Take *piece* out of play."""

    @abstractmethod
    def reset(self) -> None:
        """Recreate the standard starting position and clear transient state."""
