"""Pseudo-legal move generation + attack detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from emychess.core.enums import Color, PieceType
from emychess.core.move_set import MoveSet
from emychess.core.types import Coord, is_valid_coordinate

if TYPE_CHECKING:
    from emychess.core.interfaces import Grid, IBoard
    from emychess.core.piece import Piece

_LOGGER = logging.getLogger(__name__)

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

ROOK_FILES: tuple[int, int] = (0, 7)

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


class MoveGenerator:
    """Generates pseudo-legal moves and answers attack queries for a board.

    Every query can run against an arbitrary grid snapshot so that callers can
    test hypothetical positions without touching the live board.
    """

    __slots__ = ("_board",)

    def __init__(self, board: IBoard) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, piece: Piece) -> MoveSet:
        """Pseudo-legal moves of *piece* on the live board."""
        board = self._board
        return self.pseudo_legal_moves_grid(piece, board.grid, board.double_push_pawn)

    def pseudo_legal_moves_grid(
        self,
        piece: Piece,
        grid: Grid,
        double_push_pawn: Piece | None,
    ) -> MoveSet:
        """Moves that obey *piece*'s movement rules on *grid*.

        The own king may be left in check.
        """
        moves = MoveSet()
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(piece, grid, double_push_pawn, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_offsets(piece, grid, KNIGHT_OFFSETS, moves)
        elif ptype == PieceType.KING:
            self._gen_offsets(piece, grid, KING_OFFSETS, moves)
            if not piece.has_moved:
                self._gen_castling(piece, grid, moves)
        else:
            self._gen_sliding(piece, grid, _SLIDING_DIRS[ptype], moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent on the live board?"""
        board = self._board
        king = board.king_of(color)
        if king is None:
            _LOGGER.warning("No %s king on board, treating it as not in check", color)
            return False
        return self.is_square_attacked(
            king.coord, board.grid, board.double_push_pawn, color
        )

    def is_square_attacked(
        self,
        target: Coord,
        grid: Grid | None,
        double_push_pawn: Piece | None,
        defending_color: Color,
    ) -> bool:
        """Could any opponent of *defending_color* move onto *target* in *grid*?"""
        if not grid:
            _LOGGER.warning("Empty grid, might be first turn")
            return False

        board = self._board
        for attacker in board.all_living_pieces():
            if attacker.color == defending_color:
                continue
            if not self.is_capture_feasible(
                attacker.coord, target, attacker.piece_type
            ):
                continue
            # captured in the hypothetical grid
            if board.grid_piece(attacker.file, attacker.rank, grid) is not attacker:
                continue
            if target in self.pseudo_legal_moves_grid(attacker, grid, double_push_pawn):
                return True
        return False

    @staticmethod
    def is_capture_feasible(
        attacker: Coord, target: Coord, piece_type: PieceType
    ) -> bool:
        """Could a *piece_type* on *attacker* ever reach *target* geometrically?"""
        dx = abs(attacker.file - target.file)
        dy = abs(attacker.rank - target.rank)
        if piece_type == PieceType.ROOK:
            return dx == 0 or dy == 0
        if piece_type == PieceType.BISHOP:
            return dx == dy
        if piece_type == PieceType.QUEEN:
            return dx == 0 or dy == 0 or dx == dy
        if piece_type == PieceType.KING:
            return max(dx, dy) <= 1
        if piece_type == PieceType.KNIGHT:
            return dx < 3 and dy < 3
        if piece_type == PieceType.PAWN:
            return dx == 1 and dy == 1
        return True

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(
        self,
        piece: Piece,
        grid: Grid,
        double_push_pawn: Piece | None,
        moves: MoveSet,
    ) -> None:
        board = self._board
        color = piece.color
        file_idx = piece.file
        rank_idx = piece.rank
        forward = color.forward
        one_rank = rank_idx + forward

        if is_valid_coordinate(file_idx, one_rank) and board.grid_piece(
            file_idx, one_rank, grid
        ) is None:
            moves.add(Coord(file_idx, one_rank))
            two_rank = one_rank + forward
            if (
                not piece.has_moved
                and rank_idx == color.pawn_rank
                and board.grid_piece(file_idx, two_rank, grid) is None
            ):
                moves.add(Coord(file_idx, two_rank))

        for df in (-1, 1):
            cap_file = file_idx + df
            if not is_valid_coordinate(cap_file, one_rank):
                continue
            target = board.grid_piece(cap_file, one_rank, grid)
            if target is not None:
                if target.color != color:
                    moves.add(Coord(cap_file, one_rank))
                continue
            # En passant
            neighbour = board.grid_piece(cap_file, rank_idx, grid)
            if (
                neighbour is not None
                and neighbour is double_push_pawn
                and neighbour.color != color
            ):
                moves.add(Coord(cap_file, one_rank))

    def _gen_offsets(
        self,
        piece: Piece,
        grid: Grid,
        offsets: tuple[tuple[int, int], ...],
        moves: MoveSet,
    ) -> None:
        board = self._board
        for df, dr in offsets:
            af = piece.file + df
            ar = piece.rank + dr
            if not is_valid_coordinate(af, ar):
                continue
            target = board.grid_piece(af, ar, grid)
            if target is None or target.color != piece.color:
                moves.add(Coord(af, ar))

    def _gen_sliding(
        self,
        piece: Piece,
        grid: Grid,
        directions: tuple[tuple[int, int], ...],
        moves: MoveSet,
    ) -> None:
        board = self._board
        for df, dr in directions:
            af = piece.file + df
            ar = piece.rank + dr
            while is_valid_coordinate(af, ar):
                target = board.grid_piece(af, ar, grid)
                if target is not None and target.color == piece.color:
                    break
                moves.add(Coord(af, ar))
                if target is not None:
                    break
                af += df
                ar += dr

    def _gen_castling(self, king: Piece, grid: Grid, moves: MoveSet) -> None:
        # Attacked squares are the legality filter's business; testing them
        # here would recurse through the opponent's king generator.
        board = self._board
        rank = king.rank
        if rank != king.color.home_rank:
            return

        for rook_file in ROOK_FILES:
            rook = board.grid_piece(rook_file, rank, grid)
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.has_moved
                or rook.color != king.color
            ):
                continue
            low, high = sorted((king.file, rook_file))
            between = range(low + 1, high)
            if any(board.grid_piece(f, rank, grid) is not None for f in between):
                continue
            step = 1 if rook_file > king.file else -1
            moves.add(Coord(king.file + 2 * step, rank))
